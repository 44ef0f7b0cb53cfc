"""Unit tests for policy evaluation — can / can_all / can_any."""

from __future__ import annotations

from typing import Any

import pytest

from access_policy import (
    AccessPolicy,
    Effect,
    PolicyValidationError,
    Statement,
    can,
    can_all,
    can_any,
    get_access_policy,
)


def _allow(resource: str, actions: list[str], conditions: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    stmt: dict[str, Any] = {"resource": resource, "actions": actions, "effect": "allow"}
    if conditions is not None:
        stmt["conditions"] = conditions
    return stmt


def _deny(resource: str, actions: list[str], conditions: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    stmt = _allow(resource, actions, conditions)
    stmt["effect"] = "deny"
    return stmt


# ---------------------------------------------------------------------------
# Basic matching
# ---------------------------------------------------------------------------


class TestCan:
    def test_allow_statement_grants(self) -> None:
        assert can([_allow("POST", ["read"])], "POST", "read") is True

    def test_other_action_denied(self) -> None:
        assert can([_allow("POST", ["read"])], "POST", "delete") is False

    def test_empty_policy_denies(self) -> None:
        assert can([], "POST", "read") is False

    def test_unknown_resource_denies(self) -> None:
        assert can([_allow("POST", ["read"])], "COMMENT", "read") is False

    def test_wildcard_action(self) -> None:
        policy = [_allow("POST", ["*"])]
        assert can(policy, "POST", "read")
        assert can(policy, "POST", "anything-at-all")
        assert not can(policy, "USER", "read")

    def test_wildcard_resource(self) -> None:
        policy = [_allow("*", ["read"])]
        assert can(policy, "POST", "read")
        assert can(policy, "USER", "read")
        assert not can(policy, "USER", "delete")

    def test_empty_action_string_is_literal(self) -> None:
        policy = [_allow("POST", [""])]
        assert can(policy, "POST", "")
        assert not can(policy, "POST", "read")

    def test_accepts_statement_objects(self) -> None:
        policy = [Statement("POST", ("read",), Effect.ALLOW)]
        assert can(policy, "POST", "read")

    def test_accepts_tuple_and_generator_policies(self) -> None:
        assert can((_allow("POST", ["read"]),), "POST", "read")
        assert can((s for s in [_allow("POST", ["read"])]), "POST", "read")

    def test_malformed_statement_raises(self) -> None:
        with pytest.raises(PolicyValidationError):
            can([{"resource": "POST", "actions": ["read"], "effect": "grant"}], "POST", "read")

    @pytest.mark.parametrize("conditions", [["ab"], [1]])
    def test_non_mapping_condition_set_raises(self, conditions: list[Any]) -> None:
        with pytest.raises(PolicyValidationError):
            can([_allow("POST", ["read"], conditions)], "POST", "read", {"a": "b"})


# ---------------------------------------------------------------------------
# Deny overrides
# ---------------------------------------------------------------------------


class TestDenyPrecedence:
    def test_deny_after_allow(self) -> None:
        policy = [_allow("POST", ["delete"]), _deny("POST", ["delete"])]
        assert can(policy, "POST", "delete") is False

    def test_deny_before_allow(self) -> None:
        policy = [_deny("POST", ["delete"]), _allow("POST", ["delete"])]
        assert can(policy, "POST", "delete") is False

    def test_wildcard_deny_overrides_specific_allow(self) -> None:
        policy = [_allow("POST", ["read", "delete"]), _deny("*", ["delete"])]
        assert can(policy, "POST", "read") is True
        assert can(policy, "POST", "delete") is False

    def test_conditional_deny_only_when_satisfied(self) -> None:
        policy = [
            _allow("POST", ["update"]),
            _deny("POST", ["update"], [{"status": "archived"}]),
        ]
        assert can(policy, "POST", "update", {"status": "draft"}) is True
        assert can(policy, "POST", "update", {"status": "archived"}) is False
        assert can(policy, "POST", "update") is True

    def test_unmatched_deny_does_not_block(self) -> None:
        policy = [_allow("POST", ["read"]), _deny("POST", ["delete"])]
        assert can(policy, "POST", "read") is True

    def test_deny_alone_is_false(self) -> None:
        assert can([_deny("POST", ["read"])], "POST", "read") is False


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class TestConditions:
    def test_single_condition(self) -> None:
        policy = [_allow("POST", ["update"], [{"authorId": "auth-123"}])]
        assert can(policy, "POST", "update", {"authorId": "auth-123"})
        assert not can(policy, "POST", "update", {"authorId": "other-user"})

    def test_missing_context_fails_conditional_statement(self) -> None:
        policy = [_allow("POST", ["update"], [{"authorId": "auth-123"}])]
        assert can(policy, "POST", "update") is False
        assert can(policy, "POST", "update", []) is False

    def test_unconditional_statement_ignores_context(self) -> None:
        policy = [_allow("POST", ["read"])]
        assert can(policy, "POST", "read")
        assert can(policy, "POST", "read", {"someContext": "value"})

    def test_empty_conditions_list_is_unconditional(self) -> None:
        assert can([_allow("POST", ["read"], [])], "POST", "read")

    def test_all_keys_in_a_set_must_match(self) -> None:
        policy = [_allow("POST", ["update"], [{"authorId": "auth-123", "status": "draft"}])]
        assert can(policy, "POST", "update", {"authorId": "auth-123", "status": "draft"})
        assert not can(policy, "POST", "update", {"authorId": "auth-123", "status": "published"})
        assert not can(policy, "POST", "update", {"authorId": "auth-123"})

    def test_extra_context_keys_are_ignored(self) -> None:
        policy = [_allow("POST", ["update"], [{"a": 1}])]
        assert can(policy, "POST", "update", {"a": 1, "b": 2})

    def test_condition_sets_are_ored(self) -> None:
        policy = [_allow("POST", ["edit"], [{"a": 1}, {"b": 2}])]
        assert can(policy, "POST", "edit", {"a": 1})
        assert can(policy, "POST", "edit", {"b": 2})
        assert can(policy, "POST", "edit", {"a": 1, "b": 2})
        assert not can(policy, "POST", "edit", {"a": 9})

    def test_context_candidates_are_ored(self) -> None:
        policy = [_allow("POST", ["edit"], [{"x": 1}])]
        assert can(policy, "POST", "edit", [{"x": 2}, {"x": 1}])
        assert not can(policy, "POST", "edit", [{"x": 2}, {"x": 3}])

    def test_keys_are_not_merged_across_candidates(self) -> None:
        policy = [_allow("POST", ["edit"], [{"a": 1, "b": 2}])]
        assert not can(policy, "POST", "edit", [{"a": 1}, {"b": 2}])

    def test_none_value_requires_key_present(self) -> None:
        policy = [_allow("POST", ["edit"], [{"deletedAt": None}])]
        assert can(policy, "POST", "edit", {"deletedAt": None})
        assert not can(policy, "POST", "edit", {})

    def test_bool_does_not_match_int(self) -> None:
        policy = [_allow("POST", ["edit"], [{"flag": True}])]
        assert can(policy, "POST", "edit", {"flag": True})
        assert not can(policy, "POST", "edit", {"flag": 1})

    def test_int_does_not_match_string(self) -> None:
        policy = [_allow("POST", ["edit"], [{"level": 1}])]
        assert not can(policy, "POST", "edit", {"level": "1"})

    def test_conditions_not_merged_across_statements(self) -> None:
        policy = [
            _allow("POST", ["edit"], [{"a": 1}]),
            _allow("POST", ["edit"], [{"b": 2}]),
        ]
        assert can(policy, "POST", "edit", {"a": 1})
        assert can(policy, "POST", "edit", {"b": 2})

    def test_empty_condition_set_needs_some_context(self) -> None:
        policy = [_allow("POST", ["edit"], [{}])]
        assert can(policy, "POST", "edit", {})
        assert not can(policy, "POST", "edit")


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_read_only_policy(self) -> None:
        policy = [{"resource": "POST", "actions": ["read"], "effect": "allow"}]
        assert can(policy, "POST", "read") is True
        assert can(policy, "POST", "delete") is False

    def test_author_update_with_explicit_delete_deny(self) -> None:
        policy = [
            {
                "resource": "POST",
                "actions": ["update"],
                "effect": "allow",
                "conditions": [{"authorId": "a1"}],
            },
            {"resource": "POST", "actions": ["delete"], "effect": "deny"},
        ]
        assert can(policy, "POST", "update", {"authorId": "a1"}) is True
        assert can(policy, "POST", "update", {"authorId": "a2"}) is False
        assert can(policy, "POST", "delete") is False

    def test_status_and_role_alternatives(self) -> None:
        policy = [
            _allow("POST", ["*"], [{"status": "published"}]),
            _allow("POST", ["*"], [{"status": "draft", "role": "superadmin"}]),
        ]
        assert can(policy, "POST", "delete", {"status": "draft", "role": "user"}) is False
        assert can(policy, "POST", "delete", {"status": "draft", "role": "superadmin"}) is True
        assert can(policy, "POST", "delete", {"status": "published"}) is True
        assert can(policy, "POST", "delete", {"status": "archived"}) is False


# ---------------------------------------------------------------------------
# can_all / can_any
# ---------------------------------------------------------------------------


class TestCanAllCanAny:
    policy = [
        _allow("POST", ["read", "update"]),
        _deny("POST", ["update"], [{"locked": True}]),
    ]

    def test_can_all_true(self) -> None:
        assert can_all(self.policy, "POST", ["read", "update"]) is True

    def test_can_all_false_when_one_denied(self) -> None:
        assert can_all(self.policy, "POST", ["read", "delete"]) is False
        assert can_all(self.policy, "POST", ["read", "update"], {"locked": True}) is False

    def test_can_all_empty_is_true(self) -> None:
        assert can_all(self.policy, "POST", []) is True
        assert can_all([], "POST", []) is True

    def test_can_any_true(self) -> None:
        assert can_any(self.policy, "POST", ["delete", "read"]) is True

    def test_can_any_false(self) -> None:
        assert can_any(self.policy, "POST", ["delete", "create"]) is False

    def test_can_any_empty_is_false(self) -> None:
        assert can_any(self.policy, "POST", []) is False

    def test_can_all_short_circuits(self) -> None:
        seen: list[str] = []

        def actions():
            for action in ("delete", "read"):
                seen.append(action)
                yield action

        assert can_all(self.policy, "POST", actions()) is False
        assert seen == ["delete"]

    def test_can_any_short_circuits(self) -> None:
        seen: list[str] = []

        def actions():
            for action in ("read", "delete"):
                seen.append(action)
                yield action

        assert can_any(self.policy, "POST", actions()) is True
        assert seen == ["read"]

    def test_context_generator_used_for_every_action(self) -> None:
        policy = [_allow("POST", ["read", "update"], [{"team": "core"}])]
        context = (c for c in [{"team": "core"}])
        assert can_all(policy, "POST", ["read", "update"], context) is True


# ---------------------------------------------------------------------------
# Bound AccessPolicy
# ---------------------------------------------------------------------------


class TestGetAccessPolicy:
    def test_exposes_coerced_policy(self) -> None:
        access = get_access_policy([_allow("POST", ["read"])])
        assert isinstance(access, AccessPolicy)
        assert access.policy == (Statement("POST", ("read",), Effect.ALLOW),)

    def test_bound_checks_match_stateless(self) -> None:
        policy = [
            _allow("POST", ["update"], [{"authorId": "a1"}]),
            _deny("POST", ["delete"]),
        ]
        access = get_access_policy(policy)
        for action in ("update", "delete", "read"):
            for ctx in (None, {"authorId": "a1"}, [{"authorId": "a2"}, {"authorId": "a1"}]):
                assert access.can("POST", action, ctx) == can(policy, "POST", action, ctx)
        assert access.can_all("POST", ["update"], {"authorId": "a1"}) is True
        assert access.can_any("POST", ["delete", "read"]) is False

    def test_frozen(self) -> None:
        access = get_access_policy([])
        with pytest.raises((AttributeError, TypeError)):
            access.policy = ()  # type: ignore[misc]

    def test_source_policy_mutation_does_not_leak(self) -> None:
        policy = [_allow("POST", ["read"])]
        access = get_access_policy(policy)
        policy.append(_deny("POST", ["read"]))
        assert access.can("POST", "read") is True

    def test_malformed_policy_fails_at_bind_time(self) -> None:
        with pytest.raises(PolicyValidationError):
            get_access_policy([{"resource": "POST", "effect": "allow"}])

    def test_conditional_policy_is_hashable(self) -> None:
        policy = [_allow("POST", ["update"], [{"authorId": "a1"}, {"status": "draft"}])]
        first = get_access_policy(policy)
        second = get_access_policy(policy)
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1
