"""JWT session token service.

Issues and validates the HS256 access tokens carried in the operator's
session cookie or in a ``Bearer`` Authorization header.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from pantry.core.config import get_settings


class JWTError(Exception):
    """Base exception for JWT-related errors."""

    pass


class TokenExpiredError(JWTError):
    """Raised when a token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when a token is invalid."""

    pass


class JWTService:
    """Service for creating and validating operator access tokens."""

    ALGORITHM = "HS256"
    ISSUER = "pantry"

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the JWT service.

        Args:
            secret_key: Signing key. Defaults to the configured secret key.
        """
        self._secret_key = secret_key

    @property
    def secret_key(self) -> str:
        if self._secret_key:
            return self._secret_key
        return get_settings().secret_key

    def create_access_token(
        self,
        operator_id: str,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token for an operator.

        Args:
            operator_id: The operator's unique identifier.
            email: The operator's email address.
            expires_delta: Custom lifetime. Defaults to the configured value.

        Returns:
            Encoded JWT access token.
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=get_settings().access_token_expire_minutes)

        now = datetime.now(timezone.utc)
        payload = {
            "iss": self.ISSUER,
            "sub": operator_id,
            "iat": now,
            "exp": now + expires_delta,
            "email": email,
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.ALGORITHM)

    def decode_token(self, token: str) -> dict[str, Any]:
        """Decode and verify a token.

        Raises:
            TokenExpiredError: If the token has expired.
            InvalidTokenError: If the token is malformed or has a bad signature.
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self.ISSUER,
                options={"require": ["exp", "iat", "sub", "iss"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Decode a token and check it is an access token."""
        payload = self.decode_token(token)
        if payload.get("type") != "access":
            raise InvalidTokenError("Token is not an access token")
        return payload


jwt_service = JWTService()
