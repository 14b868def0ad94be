"""Configuration module for the object log analyzer."""

from objectlogs.config.settings import (
    AnalyzerSettings,
    APISettings,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "APISettings",
    "AnalyzerSettings",
]
