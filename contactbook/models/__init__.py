"""SQLAlchemy models."""

from contactbook.models.contact import Contact
from contactbook.models.enums import Role
from contactbook.models.user import User

__all__ = [
    "User",
    "Contact",
    "Role",
]
