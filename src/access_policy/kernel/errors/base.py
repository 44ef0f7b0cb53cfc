"""BaseError: shared shape of every error raised by access_policy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Carries a stable ``code`` next to the message so callers can branch
    on the kind of failure and log it as structured fields.

    ``detail`` holds extra JSON-friendly context (the offending setting,
    statement index, ...).  ``cause`` is chained as ``__cause__``.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.detail: dict[str, Any] = dict(detail) if detail else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Return ``code``, ``message`` and ``detail`` (plus ``cause`` when set)."""
        payload: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def log_fields(self) -> dict[str, Any]:
        """Flat key/values for a structlog event, prefixed with ``error_``."""
        return {f"error_{key}": value for key, value in self.to_dict().items()}

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


__all__ = ["BaseError"]
