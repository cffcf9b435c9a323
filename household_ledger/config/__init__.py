"""Configuration package."""

from household_ledger.config.settings import (
    AnalyticsSettings,
    AppSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AnalyticsSettings",
    "AppSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
