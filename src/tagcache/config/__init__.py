"""Config – settings, loaders and configuration errors."""

from tagcache.config.settings import EnvSettingsLoader, MongoCacheSettings, Settings, SettingsLoader
from tagcache.config.validation import (
    ConfigError,
    InvalidCleaningModeError,
    InvalidSettingValueError,
    MissingDriverError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidCleaningModeError",
    "InvalidSettingValueError",
    "MissingDriverError",
    "MissingRequiredSettingError",
    "MongoCacheSettings",
    "Settings",
    "SettingsLoader",
]
