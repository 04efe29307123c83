"""Configuration package."""

from ledger_dates.config.settings import (
    DateSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DateSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
