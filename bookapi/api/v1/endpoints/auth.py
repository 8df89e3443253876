"""Auth API: exchange email/password for a JWT (POST /login_check)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from bookapi.api.v1.dependencies import get_password_hasher, get_user_repo
from bookapi.domain.exceptions import AuthenticationException
from bookapi.infrastructure.persistence.repositories import UserRepository
from bookapi.infrastructure.security.jwt import create_access_token
from bookapi.infrastructure.security.password import PasswordHasher
from bookapi.schemas.auth import LoginRequest, TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login_check", response_model=TokenResponse)
async def login_check(
    body: LoginRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
) -> TokenResponse:
    """Return a token carrying sub (user id), username (email) and roles."""
    user = await user_repo.get_by_email(body.username)
    if user is None or not hasher.verify(body.password, user.password):
        logger.info("Rejected login for %s", body.username)
        raise AuthenticationException("Invalid credentials")
    token = create_access_token(
        {"sub": str(user.id), "username": user.email, "roles": list(user.roles)}
    )
    return TokenResponse(token=token)
