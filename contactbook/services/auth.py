"""Registration and login."""

import logging

from contactbook.errors import ConflictError, UnauthorizedError
from contactbook.models.enums import Role
from contactbook.schemas.auth import LoginResponse, UserRecord
from contactbook.services.passwords import PasswordHasher
from contactbook.services.tokens import TokenService
from contactbook.services.users import UserStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    """Orchestrates registration and login on top of the credential store."""

    def __init__(self, users: UserStore, hasher: PasswordHasher, tokens: TokenService):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    def register(self, email: str, password: str) -> UserRecord:
        """Register a new user with the default role."""
        if self.users.get_by_email(email) is not None:
            raise ConflictError("Email is already registered")

        user = self.users.create(email, self.hasher.hash(password), Role.USER)

        logger.info(f"Registered user {user.id}")
        return user

    def login(self, email: str, password: str) -> LoginResponse:
        """Check credentials and issue an access token.

        Unknown email and wrong password fail with the same error.
        """
        user = self.users.get_by_email(email)
        if user is None:
            # Same hashing cost as the known-user path
            self.hasher.dummy_verify()
            verified = False
        else:
            verified = self.hasher.verify(password, user.password_hash)

        if not verified:
            logger.info("Rejected login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        access_token = self.tokens.issue(user.id, user.email, user.role)
        return LoginResponse(access_token=access_token, user=user.public())
