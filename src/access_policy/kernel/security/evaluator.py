"""Kernel security — policy evaluation with deny-overrides semantics.

Two entry points share one decision routine:

* the stateless functions :func:`can`, :func:`can_all` and :func:`can_any`,
  which take the policy on every call;
* :func:`get_access_policy`, which binds a policy into an immutable
  :class:`AccessPolicy` exposing the same three checks.

Decision rules:

1. Only statements whose resource equals the queried resource (or ``"*"``)
   and whose actions contain the queried action (or ``"*"``) are considered.
2. A statement without conditions always applies.  A conditional statement
   applies when at least one of its condition sets matches at least one
   context candidate, where "matches" means every key is present in the
   candidate with a strictly equal value.
3. The first applicable ``deny`` statement ends evaluation with ``False``.
4. Otherwise the result is ``True`` iff an ``allow`` statement applied.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Sequence
from typing import Any

from access_policy.kernel.security.statement import (
    AttributeMap,
    Context,
    Effect,
    Statement,
    StatementLike,
    coerce_policy,
    normalize_context,
)
from access_policy.observability.logging import SensitiveFieldsFilter, get_logger


# ---------------------------------------------------------------------------
# Matching helpers
# ---------------------------------------------------------------------------


def _values_equal(expected: Any, actual: Any) -> bool:
    # bool is an int subclass; keep True from matching 1.
    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual
    return expected == actual


def _condition_set_matches(condition_set: AttributeMap, candidate: AttributeMap) -> bool:
    return all(
        key in candidate and _values_equal(value, candidate[key])
        for key, value in condition_set.items()
    )


def _conditions_satisfied(statement: Statement, candidates: Sequence[AttributeMap]) -> bool:
    if not statement.conditions:
        return True
    return any(
        _condition_set_matches(condition_set, candidate)
        for condition_set in statement.conditions
        for candidate in candidates
    )


def _decide(
    statements: Sequence[Statement],
    resource: str,
    action: str,
    candidates: Sequence[AttributeMap],
) -> tuple[bool, int | None]:
    """Return ``(allowed, index of the deciding statement)``."""
    allowed_by: int | None = None
    for index, statement in enumerate(statements):
        if not statement.matches_resource(resource):
            continue
        if not statement.matches_action(action):
            continue
        if not _conditions_satisfied(statement, candidates):
            continue
        if statement.effect is Effect.DENY:
            return False, index
        if allowed_by is None:
            allowed_by = index
    return allowed_by is not None, allowed_by


# ---------------------------------------------------------------------------
# Stateless query form
# ---------------------------------------------------------------------------


def can(
    policy: Iterable[StatementLike],
    resource: str,
    action: str,
    context: Context = None,
) -> bool:
    """Return ``True`` if *policy* permits *action* on *resource*."""
    allowed, _ = _decide(coerce_policy(policy), resource, action, normalize_context(context))
    return allowed


def can_all(
    policy: Iterable[StatementLike],
    resource: str,
    actions: Iterable[str],
    context: Context = None,
) -> bool:
    """Return ``True`` if every action in *actions* is permitted (vacuously for none)."""
    statements = coerce_policy(policy)
    candidates = normalize_context(context)
    return all(_decide(statements, resource, action, candidates)[0] for action in actions)


def can_any(
    policy: Iterable[StatementLike],
    resource: str,
    actions: Iterable[str],
    context: Context = None,
) -> bool:
    """Return ``True`` if at least one action in *actions* is permitted."""
    statements = coerce_policy(policy)
    candidates = normalize_context(context)
    return any(_decide(statements, resource, action, candidates)[0] for action in actions)


# ---------------------------------------------------------------------------
# Bound form
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class AccessPolicy:
    """A policy bound to its ``can`` / ``can_all`` / ``can_any`` checks.

    Instances are immutable and may be shared freely between threads.
    Build them with :func:`get_access_policy` rather than directly so that
    mapping statements are coerced.

    Example::

        access = get_access_policy([
            {"resource": "POST", "actions": ["read"], "effect": "allow"},
        ])
        access.can("POST", "read")    # True
        access.can("POST", "delete")  # False
    """

    policy: tuple[Statement, ...]
    log_decisions: bool = False
    sensitive_fields: frozenset[str] | None = None

    def can(self, resource: str, action: str, context: Context = None) -> bool:
        return self._check(resource, action, normalize_context(context))

    def can_all(self, resource: str, actions: Iterable[str], context: Context = None) -> bool:
        candidates = normalize_context(context)
        return all(self._check(resource, action, candidates) for action in actions)

    def can_any(self, resource: str, actions: Iterable[str], context: Context = None) -> bool:
        candidates = normalize_context(context)
        return any(self._check(resource, action, candidates) for action in actions)

    def _check(self, resource: str, action: str, candidates: list[AttributeMap]) -> bool:
        allowed, index = _decide(self.policy, resource, action, candidates)
        if self.log_decisions:
            self._log(resource, action, allowed, index, candidates)
        return allowed

    def _log(
        self,
        resource: str,
        action: str,
        allowed: bool,
        index: int | None,
        candidates: list[AttributeMap],
    ) -> None:
        redactor = SensitiveFieldsFilter(self.sensitive_fields)
        get_logger(__name__).debug(
            "access_policy.decision",
            resource=resource,
            action=action,
            allowed=allowed,
            statement_index=index,
            effect=self.policy[index].effect.value if index is not None else None,
            context=[redactor.redact_deep(c) for c in candidates],
        )


def get_access_policy(
    policy: Iterable[StatementLike],
    *,
    log_decisions: bool = False,
    sensitive_fields: frozenset[str] | None = None,
) -> AccessPolicy:
    """Bind *policy* into an :class:`AccessPolicy`.

    Raises :class:`~access_policy.kernel.errors.PolicyValidationError` if a
    mapping statement is malformed.
    """
    return AccessPolicy(
        policy=coerce_policy(policy),
        log_decisions=log_decisions,
        sensitive_fields=sensitive_fields,
    )


__all__ = ["AccessPolicy", "can", "can_all", "can_any", "get_access_policy"]
