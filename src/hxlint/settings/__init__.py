"""Editor option table and its schema."""

from .schema import SCHEMA, STATUSLINE_ELEMENTS, OptionSpec, lookup
from .models import (
    SettingEntry,
    SettingsTable,
    check_setting,
    check_theme,
    flatten_settings,
)

__all__ = [
    "SCHEMA",
    "STATUSLINE_ELEMENTS",
    "OptionSpec",
    "lookup",
    "SettingEntry",
    "SettingsTable",
    "check_setting",
    "check_theme",
    "flatten_settings",
]
