"""Config validation errors."""
from tagcache.config.validation.errors import (
    ConfigError,
    InvalidCleaningModeError,
    InvalidSettingValueError,
    MissingDriverError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "InvalidCleaningModeError",
    "InvalidSettingValueError",
    "MissingDriverError",
    "MissingRequiredSettingError",
]
