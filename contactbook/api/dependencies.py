"""FastAPI dependencies for authentication, services and storage."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from contactbook.api.guards import authenticate, authorize
from contactbook.database import get_db
from contactbook.models.enums import Role
from contactbook.schemas.auth import UserRecord
from contactbook.services.auth import AuthService
from contactbook.services.contacts import ContactRepository, ContactService
from contactbook.services.passwords import PasswordHasher
from contactbook.services.tokens import TokenService
from contactbook.services.uploads import PhotoStorage
from contactbook.services.users import UserStore


def get_token_service(request: Request) -> TokenService:
    """Token service built once in ``create_app``."""
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_photo_storage(request: Request) -> PhotoStorage:
    return request.app.state.photo_storage


def get_user_store(db: Annotated[Session, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_auth_service(
    users: Annotated[UserStore, Depends(get_user_store)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> AuthService:
    """Get auth service with dependencies."""
    return AuthService(users, hasher, tokens)


def get_contact_service(db: Annotated[Session, Depends(get_db)]) -> ContactService:
    """Get contact service with dependencies."""
    return ContactService(ContactRepository(db))


def get_current_user(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    users: Annotated[UserStore, Depends(get_user_store)],
    authorization: Annotated[str | None, Header()] = None,
) -> UserRecord:
    """Get the current authenticated user from the bearer token."""
    return authenticate(authorization, tokens, users)


def require_roles(*roles: Role) -> Callable[..., UserRecord]:
    """Build a dependency that authenticates and then checks role membership."""

    def dependency(current_user: Annotated[UserRecord, Depends(get_current_user)]) -> UserRecord:
        return authorize(current_user, roles)

    return dependency
