"""Default configuration values."""

from types import MappingProxyType

# Passthrough defaults
VIDEO_PASSTHROUGH = False
AUDIO_PASSTHROUGH = True  # Copy source audio unless told otherwise

# Video encoding defaults
FRAMERATE = 24  # Output frames per second
ENCODER_PRESET = "veryfast"  # Legacy x264 preset name
CPU_USAGE_LEVEL = 3  # 1 (slowest, best quality) .. 5 (fastest)
MIN_CPU_USAGE_LEVEL = 1
MAX_CPU_USAGE_LEVEL = 5

# Legacy x264 preset -> CPU usage level
PRESET_CPU_USAGE_LEVELS = MappingProxyType({
    "ultrafast": 1,
    "superfast": 2,
    "veryfast": 3,
    "faster": 4,
    "fast": 5,
})
