"""Configuration management for pixeltrace.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ConditionConfig: Pixel solidity settings
- UnitsConfig: Pixels-per-unit and pivot settings
- ProcessingConfig: Sprite sheet processing settings
- LoggingConfig: Logging settings
- PixelTraceSettings: Main application settings
"""

from pixeltrace.config.settings import (
    ConditionConfig,
    LoggingConfig,
    PixelTraceSettings,
    ProcessingConfig,
    UnitsConfig,
    get_default_settings,
)

__all__ = [
    "ConditionConfig",
    "LoggingConfig",
    "PixelTraceSettings",
    "ProcessingConfig",
    "UnitsConfig",
    "get_default_settings",
]
