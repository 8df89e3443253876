"""AuthorizationService: role checks through the role hierarchy."""

import pytest

from bookapi.application.dtos.principal import Principal
from bookapi.application.services.authorization_service import AuthorizationService
from bookapi.core.constants import ROLE_ADMIN, ROLE_USER
from bookapi.domain.exceptions import AuthorizationException


@pytest.fixture
def auth_svc() -> AuthorizationService:
    return AuthorizationService()


def test_admin_implies_user(auth_svc: AuthorizationService) -> None:
    admin = Principal("admin@example.com", frozenset({ROLE_ADMIN}))
    assert auth_svc.is_granted(admin, ROLE_USER)
    assert auth_svc.is_granted(admin, ROLE_ADMIN)


def test_user_is_not_admin(auth_svc: AuthorizationService) -> None:
    user = Principal("user@example.com", frozenset({ROLE_USER}))
    assert not auth_svc.is_granted(user, ROLE_ADMIN)


def test_require_role_raises_with_message(auth_svc: AuthorizationService) -> None:
    user = Principal("user@example.com", frozenset({ROLE_USER}))
    with pytest.raises(AuthorizationException) as exc_info:
        auth_svc.require_role(user, ROLE_ADMIN, "Not allowed to delete")
    assert exc_info.value.message == "Not allowed to delete"
    assert exc_info.value.details == {"role": ROLE_ADMIN}


def test_transitive_hierarchy() -> None:
    svc = AuthorizationService({"ROLE_ROOT": frozenset({"ROLE_ADMIN"}), "ROLE_ADMIN": frozenset({"ROLE_USER"})})
    assert svc.reachable_roles(frozenset({"ROLE_ROOT"})) == {"ROLE_ROOT", "ROLE_ADMIN", "ROLE_USER"}


def test_principal_from_claims() -> None:
    principal = Principal.from_claims({"sub": "3", "username": "a@b.c", "roles": ["ROLE_USER"]})
    assert principal.username == "a@b.c"
    assert principal.roles == frozenset({ROLE_USER})


def test_principal_falls_back_to_sub() -> None:
    assert Principal.from_claims({"sub": "3"}).username == "3"
