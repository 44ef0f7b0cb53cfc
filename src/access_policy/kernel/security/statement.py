"""Kernel security – Effect, Statement and policy coercion.

A policy is an ordered sequence of :class:`Statement` objects.  Callers may
also hand in plain mappings shaped like::

    {"resource": "POST", "actions": ["update"], "effect": "allow",
     "conditions": [{"authorId": "a1"}]}

which :meth:`Statement.from_dict` turns into statements.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

from access_policy.kernel.errors import PolicyValidationError

WILDCARD = "*"

# Older policy documents used these names for ``conditions``.
CONDITION_KEYS: tuple[str, ...] = ("conditions", "context_conditions", "contexts")

AttributeMap = Mapping[str, Any]
Context = Union[AttributeMap, Sequence[AttributeMap], None]


class Effect(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclasses.dataclass(frozen=True)
class Statement:
    """One allow/deny rule for a resource and a set of actions.

    ``conditions`` is a tuple of condition sets; the statement applies when
    *any* set fully matches *any* context candidate.  An empty tuple means
    the statement applies unconditionally.

    Example::

        Statement(
            resource="POST",
            actions=("update",),
            effect=Effect.ALLOW,
            conditions=({"authorId": "a1"},),
        )
    """

    resource: str
    actions: tuple[str, ...]
    effect: Effect
    conditions: tuple[AttributeMap, ...] = ()

    def __post_init__(self) -> None:
        # Normalise so equal statements compare equal and cannot be mutated.
        object.__setattr__(self, "actions", tuple(self.actions))
        object.__setattr__(self, "effect", Effect(self.effect))
        object.__setattr__(
            self,
            "conditions",
            tuple(MappingProxyType(dict(c)) for c in self.conditions or ()),
        )

    def __hash__(self) -> int:
        # Condition values must themselves be hashable.
        return hash(
            (
                self.resource,
                self.actions,
                self.effect,
                tuple(frozenset(c.items()) for c in self.conditions),
            )
        )

    def matches_resource(self, resource: str) -> bool:
        return self.resource == resource or self.resource == WILDCARD

    def matches_action(self, action: str) -> bool:
        return action in self.actions or WILDCARD in self.actions

    @property
    def is_conditional(self) -> bool:
        return bool(self.conditions)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "resource": self.resource,
            "actions": list(self.actions),
            "effect": self.effect.value,
        }
        if self.conditions:
            data["conditions"] = [dict(c) for c in self.conditions]
        return data

    @staticmethod
    def from_dict(data: Mapping[str, Any], *, index: int | None = None) -> "Statement":
        """Create a statement from a mapping.

        Raises :class:`PolicyValidationError` when a required key is
        missing, the resource or an action is not a string, ``actions`` is
        a bare string, the effect is unknown, a condition set is not a
        mapping, or more than one condition key is supplied.
        """
        errors: list[dict[str, Any]] = []

        def _fail(field: str, value: Any, reason: str) -> None:
            entry: dict[str, Any] = {"field": field, "value": value, "reason": reason}
            if index is not None:
                entry["index"] = index
            errors.append(entry)

        for key in ("resource", "actions", "effect"):
            if key not in data:
                _fail(key, None, "required")

        resource = data.get("resource")
        if "resource" in data and not isinstance(resource, str):
            _fail("resource", resource, "must be a string")

        actions = data.get("actions", ())
        if isinstance(actions, str) or not isinstance(actions, Iterable):
            _fail("actions", actions, "must be a collection of strings")
            actions = ()
        actions = tuple(actions)
        for action in actions:
            if not isinstance(action, str):
                _fail("actions", action, "must be a string")

        effect = data.get("effect")
        valid_effects = {e.value for e in Effect}
        if "effect" in data and (not isinstance(effect, str) or effect not in valid_effects):
            _fail("effect", effect, "must be 'allow' or 'deny'")

        present = [k for k in CONDITION_KEYS if k in data]
        if len(present) > 1:
            _fail(present[1], data[present[1]], f"conflicts with {present[0]!r}")
        conditions = data[present[0]] if present else None
        if conditions is not None and (
            isinstance(conditions, (str, Mapping)) or not isinstance(conditions, Iterable)
        ):
            _fail(present[0], conditions, "must be a sequence of mappings")
            conditions = None
        conditions = tuple(conditions or ())
        for condition_set in conditions:
            if not isinstance(condition_set, Mapping):
                _fail(present[0], condition_set, "must be a mapping")

        if errors:
            where = f"statement {index}" if index is not None else "statement"
            raise PolicyValidationError(f"Invalid {where}", errors=errors)

        return Statement(
            resource=resource,
            actions=actions,
            effect=Effect(effect),
            conditions=conditions,
        )


StatementLike = Union[Statement, Mapping[str, Any]]


def coerce_policy(policy: Iterable[StatementLike]) -> tuple[Statement, ...]:
    """Return *policy* as a tuple of :class:`Statement`, keeping order."""
    return tuple(
        item if isinstance(item, Statement) else Statement.from_dict(item, index=i)
        for i, item in enumerate(policy)
    )


def normalize_context(context: Context) -> list[AttributeMap]:
    """Turn a query context into a list of candidate attribute maps."""
    if context is None:
        return []
    if isinstance(context, Mapping):
        return [context]
    return list(context)


__all__ = [
    "AttributeMap",
    "CONDITION_KEYS",
    "Context",
    "Effect",
    "Statement",
    "StatementLike",
    "WILDCARD",
    "coerce_policy",
    "normalize_context",
]
