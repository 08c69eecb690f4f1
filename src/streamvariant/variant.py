"""Output settings for a single HLS stream variant."""

import json
from typing import Any, Dict, Optional, Type, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from .config import default_config as defaults
from .decoding import RawVariantFields, extract_fields, parse_json


class StreamOutputVariant(BaseModel):
    """Encode and passthrough settings for one rendition of a stream.

    Passthrough copies the incoming video and/or audio without transcoding
    and makes the matching encode settings meaningless. Set only one of
    ``scaled_width``/``scaled_height`` to keep the source aspect ratio, or
    neither to leave the video unscaled.

    Instances are immutable. Use ``model_copy(update=...)`` to derive a
    changed variant rather than mutating one that pipeline workers may be
    reading.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        validate_default=True
    )

    video_passthrough: bool = Field(
        False,
        alias="videoPassthrough",
        description="Copy the source video untouched"
    )
    audio_passthrough: bool = Field(
        False,
        alias="audioPassthrough",
        description="Copy the source audio untouched"
    )
    video_bitrate: int = Field(0, alias="videoBitrate", description="Video bitrate in kbps")
    audio_bitrate: int = Field(0, alias="audioBitrate", description="Audio bitrate in kbps")
    scaled_width: int = Field(0, alias="scaledWidth", description="Output width, 0 to derive")
    scaled_height: int = Field(0, alias="scaledHeight", description="Output height, 0 to derive")
    framerate: int = Field(0, alias="framerate", description="Output frames per second")
    encoder_preset: str = Field(
        "",
        alias="encoderPreset",
        description="Legacy x264 preset, superseded by cpu_usage_level"
    )
    cpu_usage_level: int = Field(
        0,
        alias="cpuUsageLevel",
        description="Encoder CPU usage level (1-5, higher is faster)"
    )

    @classmethod
    def decode(cls, raw: Any) -> "StreamOutputVariant":
        """Decode an untyped external representation.

        Args:
            raw: Mapping using the wire field names, e.g. a parsed JSON object

        Returns:
            Fully resolved variant

        Raises:
            DecodeError: If raw is not a mapping or a field is unusable
        """
        return resolve_variant(extract_fields(raw), variant_cls=cls)

    @classmethod
    def from_json(cls, data: Union[str, bytes, bytearray]) -> "StreamOutputVariant":
        """Decode a variant from a JSON object document."""
        return cls.decode(parse_json(data))

    def encode(self) -> Dict[str, Any]:
        """Encode to the external representation.

        Framerate is written as its effective value, so an unset framerate
        comes out as the default and a passthrough variant as 0.

        Zero scaled dimensions are omitted. The legacy encoderPreset is only
        written when set, so configurations that never used it do not start
        carrying it; cpuUsageLevel is the field new surfaces read.

        Returns:
            Mapping keyed by wire field names
        """
        data = self.model_dump(by_alias=True)
        data["framerate"] = self.effective_framerate()
        for key in ("scaledWidth", "scaledHeight", "encoderPreset"):
            if not data[key]:
                del data[key]
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        """Encode to a JSON object document."""
        return json.dumps(self.encode(), indent=indent)

    def effective_framerate(self) -> int:
        """Get framerate or default, 0 for video passthrough."""
        if self.video_passthrough:
            return 0

        if self.framerate > 0:
            return self.framerate

        return defaults.FRAMERATE

    def effective_preset(self) -> str:
        """Get encoder preset or default, empty for video passthrough.

        Only kept for configurations written before cpu_usage_level existed.
        """
        if self.video_passthrough:
            return ""

        if self.encoder_preset:
            return self.encoder_preset

        return defaults.ENCODER_PRESET

    def effective_cpu_usage_level(self) -> int:
        """Get the CPU usage level matching the effective preset.

        Returns:
            Level 1-5, or 0 when the preset is not a known x264 preset
        """
        return defaults.PRESET_CPU_USAGE_LEVELS.get(self.effective_preset(), 0)

    def is_effectively_audio_passthrough(self) -> bool:
        """Whether audio is copied, either explicitly or by a zero bitrate."""
        return self.audio_passthrough or self.audio_bitrate == 0


def _resolve_cpu_usage_level(level: Optional[int], preset: Optional[str]) -> int:
    """Pick the CPU usage level, falling back to the legacy preset."""
    if level:
        if defaults.MIN_CPU_USAGE_LEVEL <= level <= defaults.MAX_CPU_USAGE_LEVEL:
            return level
        logger.warning(
            f"cpuUsageLevel {level} outside "
            f"{defaults.MIN_CPU_USAGE_LEVEL}-{defaults.MAX_CPU_USAGE_LEVEL}, "
            f"using {defaults.CPU_USAGE_LEVEL}"
        )
        return defaults.CPU_USAGE_LEVEL

    if preset:
        inferred = defaults.PRESET_CPU_USAGE_LEVELS.get(preset)
        if inferred is None:
            logger.warning(
                f"Unknown encoderPreset '{preset}', "
                f"using cpuUsageLevel {defaults.CPU_USAGE_LEVEL}"
            )
            return defaults.CPU_USAGE_LEVEL
        logger.debug(f"Migrated encoderPreset '{preset}' to cpuUsageLevel {inferred}")
        return inferred

    return defaults.CPU_USAGE_LEVEL


def _resolve_framerate(framerate: Optional[int]) -> int:
    if not framerate:
        return defaults.FRAMERATE
    if framerate < 0:
        logger.warning(f"Negative framerate {framerate}, using {defaults.FRAMERATE}")
        return defaults.FRAMERATE
    return framerate


def _warn_if_negative(name: str, value: int) -> None:
    if value < 0:
        logger.warning(f"{name} is negative ({value}), passing it through unchanged")


def resolve_variant(
    fields: RawVariantFields,
    variant_cls: Type[StreamOutputVariant] = StreamOutputVariant
) -> StreamOutputVariant:
    """Apply defaults and passthrough inference to extracted fields.

    A missing or zero bitrate forces passthrough for that stream, even when
    the input explicitly disabled passthrough. A zero bitrate has no encode
    meaning, but it is also what an omitted field looks like, so leaving out
    ``audioBitrate`` silently copies the source audio.

    Negative bitrates and dimensions are kept as given and logged.

    Args:
        fields: Typed fields from extract_fields
        variant_cls: Variant class to build, for subclasses

    Returns:
        Fully resolved variant
    """
    audio_passthrough = fields.audio_passthrough
    if audio_passthrough is None:
        audio_passthrough = defaults.AUDIO_PASSTHROUGH

    video_passthrough = fields.video_passthrough
    if video_passthrough is None:
        video_passthrough = defaults.VIDEO_PASSTHROUGH

    cpu_usage_level = _resolve_cpu_usage_level(fields.cpu_usage_level, fields.encoder_preset)
    framerate = _resolve_framerate(fields.framerate)

    scaled_width = fields.scaled_width or 0
    scaled_height = fields.scaled_height or 0
    _warn_if_negative("scaledWidth", scaled_width)
    _warn_if_negative("scaledHeight", scaled_height)
    if scaled_width and scaled_height:
        logger.warning(
            f"Both scaledWidth ({scaled_width}) and scaledHeight ({scaled_height}) "
            "set, source aspect ratio may not be kept"
        )

    video_bitrate = fields.video_bitrate or 0
    _warn_if_negative("videoBitrate", video_bitrate)
    if video_bitrate == 0:
        video_passthrough = True

    audio_bitrate = fields.audio_bitrate or 0
    _warn_if_negative("audioBitrate", audio_bitrate)
    if audio_bitrate == 0:
        audio_passthrough = True

    return variant_cls(
        video_passthrough=video_passthrough,
        audio_passthrough=audio_passthrough,
        video_bitrate=video_bitrate,
        audio_bitrate=audio_bitrate,
        scaled_width=scaled_width,
        scaled_height=scaled_height,
        framerate=framerate,
        encoder_preset=fields.encoder_preset or "",
        cpu_usage_level=cpu_usage_level
    )


def decode_variant(raw: Any) -> StreamOutputVariant:
    """Decode an untyped mapping into a resolved variant."""
    return StreamOutputVariant.decode(raw)


def encode_variant(variant: StreamOutputVariant) -> Dict[str, Any]:
    """Encode a variant to its external representation."""
    return variant.encode()
