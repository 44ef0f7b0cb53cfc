"""Config settings – SettingsLoader port and EnvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, TypeVar

from access_policy.config.settings.base import Settings
from access_policy.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_TRUTHY = frozenset({"1", "true", "yes", "on"})
_FALSY = frozenset({"0", "false", "no", "off", ""})


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    Each field ``name`` of *settings_class* is read from
    ``{PREFIX}_{NAME}``.  Fields without a default must be present.
    """

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            kwargs[field.name] = self._coerce(env_key, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, key: str, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        # Annotations are strings under ``from __future__ import annotations``.
        hint = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", "")
        origin = getattr(type_hint, "__origin__", None)
        if hint == "bool":
            lowered = value.strip().lower()
            if lowered in _TRUTHY:
                return True
            if lowered in _FALSY:
                return False
            raise InvalidSettingValueError(key, value, "expected a boolean")
        if hint in ("int", "float"):
            try:
                return int(value) if hint == "int" else float(value)
            except ValueError as exc:
                raise InvalidSettingValueError(key, value, f"expected {hint}") from exc
        if origin is list or hint.startswith("list"):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


__all__ = ["EnvSettingsLoader", "SettingsLoader"]
