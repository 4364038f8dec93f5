"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from contactbook.api.dependencies import get_auth_service, get_current_user, require_roles
from contactbook.models.enums import Role
from contactbook.schemas.auth import (
    LoginResponse,
    MessageResponse,
    UserLogin,
    UserRecord,
    UserRegister,
)
from contactbook.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserRecord, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    return auth_service.register(user_data.email, user_data.password)


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    return auth_service.login(credentials.email, credentials.password)


@router.get("/me", response_model=UserRecord)
async def get_me(
    current_user: Annotated[UserRecord, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.get("/admin-test", response_model=MessageResponse)
async def admin_test(
    current_user: Annotated[UserRecord, Depends(require_roles(Role.ADMIN))],
):
    """Check that the caller holds the admin role."""
    return MessageResponse(message="You are admin!")
