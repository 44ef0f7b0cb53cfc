"""Kernel security – statements, policy evaluation, access-control config."""
from access_policy.kernel.security.statement import (
    CONDITION_KEYS,
    WILDCARD,
    AttributeMap,
    Context,
    Effect,
    Statement,
    StatementLike,
    coerce_policy,
    normalize_context,
)
from access_policy.kernel.security.evaluator import (
    AccessPolicy,
    can,
    can_all,
    can_any,
    get_access_policy,
)
from access_policy.kernel.security.provider import (
    AccessPolicyProvider,
    PolicyFactory,
    require_access_policy,
)
from access_policy.kernel.security.access_control import (
    AccessControl,
    create_access_control,
)

__all__ = [
    "AccessControl",
    "AccessPolicy",
    "AccessPolicyProvider",
    "AttributeMap",
    "CONDITION_KEYS",
    "Context",
    "Effect",
    "PolicyFactory",
    "Statement",
    "StatementLike",
    "WILDCARD",
    "can",
    "can_all",
    "can_any",
    "coerce_policy",
    "create_access_control",
    "get_access_policy",
    "normalize_context",
    "require_access_policy",
]
