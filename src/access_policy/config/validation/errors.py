"""Errors raised while reading AccessPolicySettings."""
from access_policy.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings or access-control configuration could not be used."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """An environment variable for a field without a default is unset."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(
            f"Environment variable {setting_name} must be set",
            detail={"setting": setting_name},
        )
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting was supplied but does not parse or is out of range."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"{setting_name}={value!r} rejected: {reason}",
            detail={"setting": setting_name, "reason": reason},
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
