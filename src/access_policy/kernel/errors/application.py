"""Application-layer errors — wiring mistakes in the host application."""

from __future__ import annotations

from typing import Any

from access_policy.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class AccessPolicyScopeError(ApplicationError):
    """An access policy was requested where none has been provided."""

    default_code = "access_policy_scope"

    def __init__(
        self,
        message: str = "access policy requested outside an active policy scope",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


__all__ = ["AccessPolicyScopeError", "ApplicationError"]
