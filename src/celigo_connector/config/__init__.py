"""Configuration management for the Celigo connector."""

from .settings import AppSettings, CeligoSettings, LoggingSettings, get_settings, reset_settings
from .loader import ConfigLoader

__all__ = [
    "AppSettings",
    "CeligoSettings",
    "LoggingSettings",
    "get_settings",
    "reset_settings",
    "ConfigLoader",
]
