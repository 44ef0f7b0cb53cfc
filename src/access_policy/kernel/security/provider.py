"""Kernel security – AccessPolicyProvider and require_access_policy.

The provider is an explicit holder for the policy a consumer currently
enforces.  It is passed to whatever needs authorization checks instead of
being looked up from ambient state.
"""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterable, Iterator

from access_policy.kernel.errors import AccessPolicyScopeError
from access_policy.kernel.security.evaluator import AccessPolicy, get_access_policy
from access_policy.kernel.security.statement import StatementLike

PolicyFactory = Callable[[Iterable[StatementLike]], AccessPolicy]


def require_access_policy(access_policy: AccessPolicy | None) -> AccessPolicy:
    """Return *access_policy* or raise :class:`AccessPolicyScopeError` if it is ``None``."""
    if access_policy is None:
        raise AccessPolicyScopeError()
    return access_policy


class AccessPolicyProvider:
    """Holds the active policy and the :class:`AccessPolicy` derived from it.

    The bound evaluator is rebuilt only when a different policy object is
    installed; reading :attr:`access_policy` repeatedly for the same policy
    returns the same instance.

    Example::

        provider = AccessPolicyProvider(policy)
        provider.require().can("POST", "read")

        with provider.scope(admin_policy):
            handle_admin_request(provider)
    """

    def __init__(
        self,
        policy: Iterable[StatementLike] | None = None,
        *,
        factory: PolicyFactory = get_access_policy,
    ) -> None:
        self._factory = factory
        self._policy = policy
        self._derived_for: Iterable[StatementLike] | None = None
        self._access_policy: AccessPolicy | None = None

    @property
    def policy(self) -> Iterable[StatementLike] | None:
        return self._policy

    @policy.setter
    def policy(self, policy: Iterable[StatementLike] | None) -> None:
        self._policy = policy

    @property
    def access_policy(self) -> AccessPolicy | None:
        """The evaluator for the current policy, or ``None`` when none is set."""
        if self._policy is None:
            return None
        if self._access_policy is None or self._derived_for is not self._policy:
            self._access_policy = self._factory(self._policy)
            self._derived_for = self._policy
        return self._access_policy

    def require(self) -> AccessPolicy:
        """Return the current evaluator or raise :class:`AccessPolicyScopeError`."""
        return require_access_policy(self.access_policy)

    @contextlib.contextmanager
    def scope(self, policy: Iterable[StatementLike]) -> Iterator[AccessPolicy]:
        """Install *policy* for the duration of the ``with`` block."""
        previous = self._policy
        self._policy = policy
        try:
            yield self.require()
        finally:
            self._policy = previous


__all__ = ["AccessPolicyProvider", "PolicyFactory", "require_access_policy"]
