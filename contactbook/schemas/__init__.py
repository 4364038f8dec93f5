"""Pydantic schemas for API requests and responses."""

from contactbook.schemas.auth import (
    LoginResponse,
    MessageResponse,
    StoredUser,
    UserLogin,
    UserRecord,
    UserRegister,
)
from contactbook.schemas.contact import (
    ContactCreate,
    ContactPage,
    ContactPageMeta,
    ContactQuery,
    ContactRecord,
    ContactUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserRecord",
    "StoredUser",
    "LoginResponse",
    "MessageResponse",
    "ContactCreate",
    "ContactUpdate",
    "ContactRecord",
    "ContactQuery",
    "ContactPage",
    "ContactPageMeta",
]
