"""Configuration package."""

from money_manager.config.settings import (
    GoogleSheetsSettings,
    LedgerSettings,
    RemoteApiSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "GoogleSheetsSettings",
    "LedgerSettings",
    "RemoteApiSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
