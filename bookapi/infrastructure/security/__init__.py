"""Security: JWT encoding/decoding and password hashing."""

from bookapi.infrastructure.security.jwt import create_access_token, decode_token
from bookapi.infrastructure.security.password import PasswordHasher

__all__ = [
    "PasswordHasher",
    "create_access_token",
    "decode_token",
]
