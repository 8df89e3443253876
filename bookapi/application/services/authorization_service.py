"""Authorization service: role checks with role hierarchy."""

from __future__ import annotations

from collections.abc import Mapping

from bookapi.application.dtos.principal import Principal
from bookapi.core.constants import ROLE_HIERARCHY
from bookapi.domain.exceptions import AuthorizationException


class AuthorizationService:
    """Decide whether a principal holds a role, directly or through the hierarchy."""

    def __init__(
        self,
        hierarchy: Mapping[str, frozenset[str]] = ROLE_HIERARCHY,
    ) -> None:
        self.hierarchy = hierarchy

    def reachable_roles(self, roles: frozenset[str]) -> frozenset[str]:
        """Return roles plus every role they imply (transitively)."""
        reached = set(roles)
        pending = list(roles)
        while pending:
            for implied in self.hierarchy.get(pending.pop(), frozenset()):
                if implied not in reached:
                    reached.add(implied)
                    pending.append(implied)
        return frozenset(reached)

    def is_granted(self, principal: Principal, role: str) -> bool:
        return role in self.reachable_roles(principal.roles)

    def require_role(self, principal: Principal, role: str, message: str) -> None:
        """Raise AuthorizationException with message if principal lacks role."""
        if not self.is_granted(principal, role):
            raise AuthorizationException(role=role, message=message)
