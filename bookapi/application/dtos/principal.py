"""DTO for the authenticated caller, decoded from a bearer token."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Principal:
    """Current caller identity. roles are the roles granted by the token."""

    username: str
    roles: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> "Principal":
        """Build from decoded JWT claims (username falls back to sub)."""
        username = claims.get("username") or claims.get("sub") or ""
        roles = claims.get("roles") or []
        return cls(username=str(username), roles=frozenset(str(r) for r in roles))
