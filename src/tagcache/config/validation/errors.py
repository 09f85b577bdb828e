"""Config validation errors."""
from tagcache.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class MissingDriverError(ConfigError):
    """The store driver package cannot be imported."""
    default_code = "missing_driver"

    def __init__(self, package: str) -> None:
        super().__init__(f"The '{package}' package must be installed to use this backend")
        self.package = package


class InvalidCleaningModeError(ConfigError):
    """``clean()`` was called with a mode the backend does not know."""
    default_code = "invalid_cleaning_mode"

    def __init__(self, mode: object) -> None:
        super().__init__(f"Invalid mode for clean(): {mode!r}")
        self.mode = mode


__all__ = [
    "ConfigError",
    "InvalidCleaningModeError",
    "InvalidSettingValueError",
    "MissingDriverError",
    "MissingRequiredSettingError",
]
