"""Password hashing (bcrypt over a SHA-256 pre-hash).

The pre-hash gives bcrypt a fixed-length input, so passwords longer than
bcrypt's 72-byte limit are not silently truncated.
"""

import base64
import hashlib

import bcrypt


class PasswordHasher:
    """bcrypt password hasher. rounds is the bcrypt cost factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    @staticmethod
    def _prehash(password: str) -> bytes:
        return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of password."""
        hashed = bcrypt.hashpw(self._prehash(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Return True if password matches hashed_password; malformed hashes never match."""
        try:
            return bool(bcrypt.checkpw(self._prehash(password), hashed_password.encode("utf-8")))
        except (ValueError, TypeError):
            return False
