"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   └── PolicyValidationError
    └── ApplicationError         (application.py)
        ├── AccessPolicyScopeError
        └── ConfigError          (access_policy.config.validation)
"""

from access_policy.kernel.errors.application import (
    AccessPolicyScopeError,
    ApplicationError,
)
from access_policy.kernel.errors.base import BaseError
from access_policy.kernel.errors.domain import DomainError, PolicyValidationError

__all__ = [
    "AccessPolicyScopeError",
    "ApplicationError",
    "BaseError",
    "DomainError",
    "PolicyValidationError",
]
