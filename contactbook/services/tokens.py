"""Issuing and verifying signed bearer tokens."""

from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from contactbook.models.enums import Role

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRES = timedelta(days=7)


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenMalformedError(TokenError):
    """The token is not a structurally valid JWT or lacks required claims."""


class TokenInvalidError(TokenError):
    """The token signature does not verify."""


class TokenExpiredError(TokenError):
    """The token is past its expiry time."""


class TokenClaims(BaseModel):
    """Identity and role data carried by an access token."""

    model_config = ConfigDict(frozen=True)

    subject: int
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """Signs and verifies access tokens with a process-wide symmetric secret.

    The secret is loaded once at startup and handed in by the caller.
    Verification is pure: it never consults the user store.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expires_delta: timedelta = DEFAULT_EXPIRES,
    ):
        if not secret:
            raise ValueError("A JWT secret is required to sign tokens")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, subject: int, email: str, role: Role | str) -> str:
        """Create a signed access token for the given identity."""
        now = datetime.now(UTC)
        to_encode = {
            "sub": str(subject),
            "email": email,
            "role": Role(role).value,
            "iat": now,
            "exp": now + self.expires_delta,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Check signature and expiry and return the token's claims.

        Raises:
            TokenMalformedError: the token cannot be parsed or lacks claims.
            TokenInvalidError: the signature does not match.
            TokenExpiredError: the token has expired.
        """
        try:
            jwt.get_unverified_claims(token)
        except JWTError as e:
            raise TokenMalformedError(str(e)) from e

        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except JWTError as e:
            raise TokenInvalidError(str(e)) from e

        try:
            return TokenClaims(
                subject=int(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
                issued_at=datetime.fromtimestamp(payload["iat"], UTC),
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise TokenMalformedError("Token is missing required claims") from e
