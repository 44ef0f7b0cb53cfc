"""Domain errors — malformed policies and statements."""

from __future__ import annotations

from typing import Any

from access_policy.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when policy data breaks a structural rule."""

    default_code = "domain_error"


class PolicyValidationError(DomainError):
    """A statement or policy does not meet validation rules.

    ``errors`` holds one dict per offending statement field, e.g.
    ``{"index": 2, "field": "actions", "value": "publish", "reason": "..."}``.
    """

    default_code = "policy_validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


__all__ = ["DomainError", "PolicyValidationError"]
