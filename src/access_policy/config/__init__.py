"""Config – 12-factor settings and their validation errors."""

from access_policy.config.settings import (
    AccessPolicySettings,
    EnvSettingsLoader,
    Settings,
    SettingsLoader,
)
from access_policy.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


def load_settings(loader: SettingsLoader | None = None) -> AccessPolicySettings:
    """Load :class:`AccessPolicySettings`, from the environment by default."""
    return (loader or EnvSettingsLoader()).load(AccessPolicySettings)


__all__ = [
    "AccessPolicySettings",
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "load_settings",
]
