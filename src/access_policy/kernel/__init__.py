"""Kernel – framework-agnostic building blocks."""

from access_policy.kernel.errors import (
    AccessPolicyScopeError,
    ApplicationError,
    BaseError,
    DomainError,
    PolicyValidationError,
)

__all__ = [
    "AccessPolicyScopeError",
    "ApplicationError",
    "BaseError",
    "DomainError",
    "PolicyValidationError",
]
