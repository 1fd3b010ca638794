"""Configuration for the wheel."""

from .settings import Settings, SpinSettings, WheelSettings, DisplaySettings, get_settings

__all__ = ["Settings", "SpinSettings", "WheelSettings", "DisplaySettings", "get_settings"]
