"""Token decoding: returns the claims of the caller's bearer token."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from bookapi.api.v1.dependencies import get_token_claims

router = APIRouter()


@router.get("/decode")
async def decode(
    claims: Annotated[dict[str, Any], Depends(get_token_claims)],
) -> dict[str, Any]:
    """Return the decoded claims; 401 when the token is missing, invalid or expired."""
    return claims
