"""
access_policy – attribute-based access-control policy evaluation.

Import path convention::

    from access_policy import can, get_access_policy, create_access_control
    from access_policy.kernel.errors import PolicyValidationError
    from access_policy.config import load_settings
"""

from access_policy.kernel.errors import AccessPolicyScopeError, PolicyValidationError
from access_policy.kernel.security import (
    AccessControl,
    AccessPolicy,
    AccessPolicyProvider,
    Effect,
    Statement,
    can,
    can_all,
    can_any,
    create_access_control,
    get_access_policy,
    require_access_policy,
)

__version__ = "0.1.0"
__all__ = [
    "AccessControl",
    "AccessPolicy",
    "AccessPolicyProvider",
    "AccessPolicyScopeError",
    "Effect",
    "PolicyValidationError",
    "Statement",
    "__version__",
    "can",
    "can_all",
    "can_any",
    "create_access_control",
    "get_access_policy",
    "require_access_policy",
]
