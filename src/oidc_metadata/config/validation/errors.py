"""Config validation errors."""
from oidc_metadata.kernel.errors import OidcMetadataError


class ConfigError(OidcMetadataError):
    """Raised when configuration is invalid, incomplete, or failed to load."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required setting has no value, either configured or passed per call."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but outside its allowed range."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
