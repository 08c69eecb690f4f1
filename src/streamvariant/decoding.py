"""Typed extraction of raw variant mappings.

Decoding happens in two steps. This module handles the first one: it checks
the untyped input (a parsed JSON object or YAML mapping) field by field and
produces a ``RawVariantFields`` record in which every field is either ``None``
(absent) or a value of the right type. Defaults and passthrough inference are
applied afterwards by ``streamvariant.variant.resolve_variant``.
"""

import json
import math
from typing import Any, Dict, Mapping, Optional, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import DecodeError, FieldTypeError, FieldValueError

# Wire name -> kind of value accepted, used in error messages
EXPECTED_KINDS: Dict[str, str] = {
    "videoPassthrough": "a boolean",
    "audioPassthrough": "a boolean",
    "videoBitrate": "an integer",
    "audioBitrate": "an integer",
    "scaledWidth": "an integer",
    "scaledHeight": "an integer",
    "framerate": "an integer",
    "encoderPreset": "a string",
    "cpuUsageLevel": "an integer",
}

_TYPE_ERRORS = {"bool_type", "int_type", "string_type"}


def describe_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value.
    
    Args:
        value: Any value produced by a JSON or YAML parser
    
    Returns:
        Kind name such as "string", "number" or "object"
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


class RawVariantFields(BaseModel):
    """Variant fields as supplied, before any defaulting.
    
    ``None`` means the field was absent, null or (for numbers and strings)
    the empty string.
    """
    
    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="ignore",
        populate_by_name=True
    )
    
    video_passthrough: Optional[bool] = Field(None, alias="videoPassthrough")
    audio_passthrough: Optional[bool] = Field(None, alias="audioPassthrough")
    video_bitrate: Optional[int] = Field(None, alias="videoBitrate")
    audio_bitrate: Optional[int] = Field(None, alias="audioBitrate")
    scaled_width: Optional[int] = Field(None, alias="scaledWidth")
    scaled_height: Optional[int] = Field(None, alias="scaledHeight")
    framerate: Optional[int] = Field(None, alias="framerate")
    encoder_preset: Optional[str] = Field(None, alias="encoderPreset")
    cpu_usage_level: Optional[int] = Field(None, alias="cpuUsageLevel")
    
    @field_validator(
        "video_bitrate", "audio_bitrate", "scaled_width", "scaled_height",
        "framerate", "cpu_usage_level",
        mode="before"
    )
    @classmethod
    def _coerce_number(cls, value: Any) -> Any:
        # JSON parsers hand back floats for numbers like 2000.0
        if isinstance(value, str) and value == "":
            return None
        if isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError("must be a finite number")
            return int(value)
        return value
    
    @field_validator("encoder_preset", mode="before")
    @classmethod
    def _blank_preset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


_WIRE_NAMES = {
    **{name: info.alias for name, info in RawVariantFields.model_fields.items()},
    **{info.alias: info.alias for info in RawVariantFields.model_fields.values()},
}


def _to_decode_error(exc: ValidationError) -> DecodeError:
    """Convert the first pydantic error into a field-level DecodeError."""
    error = exc.errors()[0]
    loc = error.get("loc") or ("<variant>",)
    field = _WIRE_NAMES.get(loc[0], str(loc[0]))
    value = error.get("input")
    
    if error["type"] in _TYPE_ERRORS:
        return FieldTypeError(
            field,
            EXPECTED_KINDS.get(field, "a valid value"),
            describe_kind(value),
            value
        )
    if error["type"] == "value_error":
        reason = error.get("ctx", {}).get("error", error["msg"])
        return FieldValueError(field, str(reason), value)
    return FieldValueError(field, error["msg"].lower(), value)


def extract_fields(raw: Any) -> RawVariantFields:
    """Check an untyped variant mapping and extract its typed fields.
    
    Args:
        raw: Parsed external representation, expected to be a mapping
    
    Returns:
        Typed fields with absent values as None
    
    Raises:
        DecodeError: If raw is not a mapping
        FieldTypeError: If a present field holds the wrong kind of value
        FieldValueError: If a present field holds an unusable value
    """
    if not isinstance(raw, Mapping):
        raise DecodeError(
            "Variant must be a key-value mapping",
            f"Got {describe_kind(raw)}"
        )
    
    unknown = sorted(str(key) for key in raw if key not in EXPECTED_KINDS)
    if unknown:
        logger.debug(f"Ignoring unknown variant fields: {', '.join(unknown)}")
    
    try:
        return RawVariantFields.model_validate(dict(raw))
    except ValidationError as e:
        raise _to_decode_error(e) from e


def parse_json(data: Union[str, bytes, bytearray]) -> Any:
    """Parse JSON text into Python values.
    
    Args:
        data: JSON document
    
    Returns:
        Parsed value
    
    Raises:
        DecodeError: If the text is not valid JSON
    """
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError("Invalid JSON document", str(e)) from e
