"""Config settings – Settings base class and AccessPolicySettings."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from access_policy.config.validation.errors import InvalidSettingValueError

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "password",
        "secret",
        "token",
        "api_key",
        "authorization",
        "ssn",
        "email",
    }
)

_LEVEL_NAMES = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


@dataclasses.dataclass
class AccessPolicySettings(Settings):
    """Runtime knobs for policy evaluation.

    Read from ``ACCESS_POLICY_*`` environment variables by
    :class:`~access_policy.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix: ClassVar[str] = "ACCESS_POLICY"

    log_level: str = "INFO"
    log_decisions: bool = False
    strict_config: bool = True
    sensitive_fields: list[str] = dataclasses.field(
        default_factory=lambda: sorted(DEFAULT_SENSITIVE_FIELDS)
    )

    def _validate(self) -> None:
        level = self.log_level.upper()
        if level not in _LEVEL_NAMES:
            raise InvalidSettingValueError(
                "log_level", self.log_level, f"expected one of {sorted(_LEVEL_NAMES)}"
            )
        self.log_level = level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @property
    def sensitive_field_set(self) -> frozenset[str]:
        return frozenset(f.lower() for f in self.sensitive_fields)


__all__ = ["AccessPolicySettings", "DEFAULT_SENSITIVE_FIELDS", "Settings"]
