"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from contactbook.database import Base
from contactbook.models.enums import Role
from contactbook.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and contact ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value, server_default="user")

    # Relationships
    contacts = relationship(
        "Contact",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
