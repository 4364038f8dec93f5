"""Password hashing."""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Salted one-way bcrypt hashing with a fixed work factor."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password. Every call draws a fresh salt."""
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        Returns False rather than raising when the stored hash is not a
        recognizable bcrypt digest.
        """
        try:
            return self.context.verify(password, password_hash)
        except (ValueError, TypeError):
            logger.warning("Stored password hash could not be parsed")
            return False

    def dummy_verify(self) -> None:
        """Burn the time a real verification would take."""
        self.context.dummy_verify()
