"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from access_policy.config.settings.base import DEFAULT_SENSITIVE_FIELDS


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``.

    Keys are compared case-insensitively.  :meth:`redact_deep` also walks
    nested mappings and lists, so context candidates logged as a list of
    dicts are covered.
    """

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = DEFAULT_SENSITIVE_FIELDS if sensitive_fields is None else sensitive_fields
        self._fields = frozenset(f.lower() for f in fields)

    def is_sensitive(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._fields

    def redact(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if self.is_sensitive(k) else v) for k, v in data.items()}

    def redact_deep(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Recursively redact nested mappings and sequences of mappings."""
        return {
            k: (self.REDACTED if self.is_sensitive(k) else self._redact_value(v))
            for k, v in data.items()
        }

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self.redact_deep(value)
        if isinstance(value, (list, tuple)):
            return [self._redact_value(v) for v in value]
        return value


__all__ = ["SensitiveFieldsFilter"]
