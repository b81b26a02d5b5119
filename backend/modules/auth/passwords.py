"""
Password hashing.

bcrypt through passlib with a fixed work factor. Hashes are salted per call,
so hashing the same password twice gives different strings.
"""

from passlib.context import CryptContext

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """One-way password hashing and verification."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Check a password against a stored hash. Unreadable hashes never match."""
        try:
            return self._context.verify(password, hashed)
        except (ValueError, TypeError):
            return False
