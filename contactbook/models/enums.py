"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """Roles a user can hold."""

    USER = "user"
    ADMIN = "admin"

    @property
    def is_admin(self) -> bool:
        """Check if this role grants access to every user's data."""
        return self == Role.ADMIN
