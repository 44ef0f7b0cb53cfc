"""Kernel security – AccessControl configuration.

An :class:`AccessControl` is built from a resource → actions map::

    access_control = create_access_control({
        "POST": ["create", "read", "update", "delete"],
        "USER": ["read", "invite", "delete"],
    })

It validates policies against that map before binding them, so a typo in
a resource or action name surfaces when the policy is loaded rather than
as a silent ``False`` at check time.  Queries themselves are never
validated: an unknown resource or action evaluates to ``False``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from access_policy.config.settings.base import AccessPolicySettings
from access_policy.config.validation import ConfigError
from access_policy.kernel.errors import PolicyValidationError
from access_policy.kernel.security.evaluator import AccessPolicy, get_access_policy
from access_policy.kernel.security.provider import AccessPolicyProvider
from access_policy.kernel.security.statement import (
    WILDCARD,
    Statement,
    StatementLike,
    coerce_policy,
)
from access_policy.observability.logging import get_logger

logger = get_logger(__name__)

# Always accepted in a statement's actions regardless of configuration.
_UNIVERSAL_ACTIONS = frozenset({WILDCARD, ""})


class AccessControl:
    """Policy factory bound to a resource/action configuration."""

    def __init__(
        self,
        config: Mapping[str, Sequence[str]],
        *,
        settings: AccessPolicySettings | None = None,
    ) -> None:
        self._config = _freeze_config(config)
        self._all_actions = frozenset(a for actions in self._config.values() for a in actions)
        self._settings = settings or AccessPolicySettings()

    @property
    def config(self) -> Mapping[str, tuple[str, ...]]:
        return self._config

    @property
    def settings(self) -> AccessPolicySettings:
        return self._settings

    @property
    def resources(self) -> tuple[str, ...]:
        return tuple(self._config)

    def actions_for(self, resource: str) -> tuple[str, ...]:
        """Declared actions for *resource*; every declared action for ``"*"``."""
        if resource == WILDCARD:
            return tuple(sorted(self._all_actions))
        return self._config.get(resource, ())

    def validate_policy(self, policy: Iterable[StatementLike]) -> tuple[Statement, ...]:
        """Return *policy* as statements or raise :class:`PolicyValidationError`.

        Every unknown resource and every undeclared action is reported, not
        just the first one.
        """
        statements = coerce_policy(policy)
        errors: list[dict[str, Any]] = []
        for index, statement in enumerate(statements):
            errors.extend(self._statement_errors(index, statement))
        if errors:
            error = PolicyValidationError(
                f"Policy has {len(errors)} invalid reference(s)",
                errors=errors,
                detail={"error_count": len(errors)},
            )
            logger.warning("access_policy.invalid_policy", **error.log_fields())
            raise error
        return statements

    def get_access_policy(self, policy: Iterable[StatementLike]) -> AccessPolicy:
        """Bind *policy*, validating it first when ``strict_config`` is on."""
        statements = (
            self.validate_policy(policy) if self._settings.strict_config else coerce_policy(policy)
        )
        return get_access_policy(
            statements,
            log_decisions=self._settings.log_decisions,
            sensitive_fields=self._settings.sensitive_field_set,
        )

    def provider(self, policy: Iterable[StatementLike] | None = None) -> AccessPolicyProvider:
        """Return a provider whose evaluators are built by this instance."""
        return AccessPolicyProvider(policy, factory=self.get_access_policy)

    def _statement_errors(self, index: int, statement: Statement) -> list[dict[str, Any]]:
        if statement.resource != WILDCARD and statement.resource not in self._config:
            return [
                {
                    "index": index,
                    "field": "resource",
                    "value": statement.resource,
                    "reason": "unknown resource",
                }
            ]
        declared = set(self.actions_for(statement.resource)) | _UNIVERSAL_ACTIONS
        return [
            {
                "index": index,
                "field": "actions",
                "value": action,
                "reason": f"action not declared for resource {statement.resource!r}",
            }
            for action in statement.actions
            if action not in declared
        ]

    def __repr__(self) -> str:
        return f"AccessControl(resources={list(self._config)!r})"


def _freeze_config(config: Mapping[str, Sequence[str]]) -> Mapping[str, tuple[str, ...]]:
    if not isinstance(config, Mapping):
        raise ConfigError("Access control config must be a mapping of resource to actions")
    frozen: dict[str, tuple[str, ...]] = {}
    for resource, actions in config.items():
        if not isinstance(resource, str):
            raise ConfigError(f"Resource name must be a string, got {resource!r}")
        if isinstance(actions, str) or not isinstance(actions, Iterable):
            raise ConfigError(
                f"Actions for resource {resource!r} must be a sequence of strings",
                detail={"resource": resource},
            )
        actions = tuple(actions)
        bad = [a for a in actions if not isinstance(a, str)]
        if bad:
            raise ConfigError(
                f"Actions for resource {resource!r} must be strings, got {bad!r}",
                detail={"resource": resource},
            )
        frozen[resource] = actions
    return MappingProxyType(frozen)


def create_access_control(
    config: Mapping[str, Sequence[str]],
    *,
    settings: AccessPolicySettings | None = None,
) -> AccessControl:
    """Create an :class:`AccessControl` for *config*.

    Raises :class:`~access_policy.config.validation.ConfigError` when the
    configuration is not a mapping of resource names to action names.
    """
    return AccessControl(config, settings=settings)


__all__ = ["AccessControl", "create_access_control"]
