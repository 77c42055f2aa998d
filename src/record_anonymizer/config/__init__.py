"""Configuration module for record-anonymizer."""

from record_anonymizer.config.settings import (
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
]
