"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field

from contactbook.models.enums import Role
from contactbook.schemas.base import CamelModel, ExactEmail, RecordModel


class UserRegister(BaseModel):
    """User registration request."""

    email: ExactEmail
    password: str = Field(..., min_length=1, max_length=72)


class UserLogin(BaseModel):
    """User login request.

    No format checks here: any bad pair fails as invalid credentials.
    """

    email: str
    password: str


class UserRecord(RecordModel):
    """Public projection of a user."""

    id: int
    email: str
    role: Role


class StoredUser(BaseModel):
    """User row including the credential, for use inside the service layer only."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    email: str
    password_hash: str
    role: Role

    def public(self) -> UserRecord:
        return UserRecord(id=self.id, email=self.email, role=self.role)


class LoginResponse(CamelModel):
    """Access token plus the user it was issued for."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    user: UserRecord


class MessageResponse(BaseModel):
    message: str
