"""Access gates applied to protected routes.

Gates run in order: ``authenticate`` resolves the caller from the bearer
token, then ``authorize`` checks role membership when a route declares
required roles. Both raise domain errors rather than HTTP exceptions.
"""

import logging
from collections.abc import Iterable

from fastapi.security.utils import get_authorization_scheme_param

from contactbook.errors import ForbiddenError, UnauthorizedError
from contactbook.models.enums import Role
from contactbook.schemas.auth import UserRecord
from contactbook.services.tokens import TokenError, TokenService
from contactbook.services.users import UserStore

logger = logging.getLogger(__name__)


def authenticate(authorization: str | None, tokens: TokenService, users: UserStore) -> UserRecord:
    """Resolve the user behind an ``Authorization: Bearer <token>`` header."""
    scheme, token = get_authorization_scheme_param(authorization)
    if not authorization or scheme.lower() != "bearer" or not token:
        raise UnauthorizedError("Missing bearer token")

    try:
        claims = tokens.verify(token)
    except TokenError as e:
        logger.debug(f"Rejected token: {e}")
        raise UnauthorizedError("Invalid authentication credentials") from e

    user = users.get_by_id(claims.subject)
    if user is None:
        raise UnauthorizedError("User not found")

    return user


def authorize(user: UserRecord, required_roles: Iterable[Role] | None = None) -> UserRecord:
    """Pass when no roles are required or the user holds one of them."""
    roles = set(required_roles or ())
    if not roles or user.role in roles:
        return user

    logger.info(f"User {user.id} with role {user.role.value} denied")
    raise ForbiddenError("Forbidden resource")
