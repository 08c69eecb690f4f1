"""Configuration module for variant defaults."""

from . import default_config

__all__ = ["default_config"]
