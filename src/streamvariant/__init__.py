"""Stream output variant configuration."""

from .errors import VariantError, DecodeError, FieldTypeError, FieldValueError
from .variant import (
    StreamOutputVariant,
    decode_variant,
    encode_variant,
    resolve_variant,
)

__version__ = "0.1.0"

__all__ = [
    "StreamOutputVariant",
    "decode_variant",
    "encode_variant",
    "resolve_variant",
    "VariantError",
    "DecodeError",
    "FieldTypeError",
    "FieldValueError",
]
