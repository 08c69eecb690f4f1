"""Variant decoding error types."""

from typing import Any, Optional


class VariantError(Exception):
    """Base class for stream variant errors."""
    
    def __init__(self, message: str, details: Optional[str] = None):
        """Initialize error.
        
        Args:
            message: Error message
            details: Optional technical details
        """
        self.message = message
        self.details = details
        super().__init__(message)


class DecodeError(VariantError):
    """Error decoding an external variant representation."""
    pass


class FieldTypeError(DecodeError):
    """A present field does not hold the expected kind of value."""
    
    def __init__(self, field: str, expected: str, actual: str, value: Any = None):
        """Initialize error.
        
        Args:
            field: Wire name of the offending field
            expected: Kind of value the field accepts
            actual: Kind of value that was supplied
            value: The rejected value
        """
        super().__init__(
            f"Field '{field}' must be {expected}, got {actual}",
            f"Value: {value!r}"
        )
        self.field = field
        self.expected = expected
        self.actual = actual
        self.value = value


class FieldValueError(DecodeError):
    """A present field has the right kind but an unusable value."""
    
    def __init__(self, field: str, reason: str, value: Any = None):
        """Initialize error.
        
        Args:
            field: Wire name of the offending field
            reason: Why the value was rejected
            value: The rejected value
        """
        super().__init__(f"Field '{field}' {reason}", f"Value: {value!r}")
        self.field = field
        self.reason = reason
        self.value = value
