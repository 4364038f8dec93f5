"""Credential store for user accounts."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from contactbook.errors import ConflictError, NotFoundError
from contactbook.models.enums import Role
from contactbook.models.user import User
from contactbook.schemas.auth import StoredUser, UserRecord


class UserStore:
    """Persists users and hands out immutable records."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_email(self, email: str) -> StoredUser | None:
        """Get a user by exact email, including the password hash."""
        user = self.db.query(User).filter(User.email == email).first()
        if user is None:
            return None
        return StoredUser.model_validate(user)

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Get a user's public projection by id."""
        user = self.db.get(User, user_id)
        if user is None:
            return None
        return UserRecord.model_validate(user)

    def create(self, email: str, password_hash: str, role: Role = Role.USER) -> UserRecord:
        """Create a new user."""
        user = User(email=email, password_hash=password_hash, role=Role(role).value)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Concurrent registration of the same email
            self.db.rollback()
            raise ConflictError("Email is already registered") from e
        self.db.refresh(user)
        return UserRecord.model_validate(user)

    def set_role(self, user_id: int, role: Role) -> UserRecord:
        """Change a user's role."""
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        user.role = Role(role).value
        self.db.commit()
        self.db.refresh(user)
        return UserRecord.model_validate(user)
