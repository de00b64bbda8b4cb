"""Path and configuration utilities."""

from animizer.utils.paths import relative_path
from animizer.utils.config import load_config, save_config, CodecConfig, PathProfile

__all__ = ["relative_path", "load_config", "save_config", "CodecConfig", "PathProfile"]
