"""Config settings – 12-factor env-based configuration."""
from access_policy.config.settings.base import (
    DEFAULT_SENSITIVE_FIELDS,
    AccessPolicySettings,
    Settings,
)
from access_policy.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = [
    "AccessPolicySettings",
    "DEFAULT_SENSITIVE_FIELDS",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
]
