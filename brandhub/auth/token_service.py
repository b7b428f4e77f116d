"""
Session token issuance and verification.

Tokens are HS256 JWTs carrying {userId, companyId, role, email} and are
delivered to browsers in the `auth-token` httpOnly cookie.

Security Requirements:
- Default lifetime: 7 days (JWT_EXPIRY_DAYS)
- Secret from JWT_SECRET, never hard-coded
- Expired and tampered tokens are rejected, never partially trusted
"""

import os
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import BaseModel

from brandhub.auth.principal import Principal

logger = logging.getLogger(__name__)


AUTH_COOKIE_NAME = "auth-token"


class TokenConfig(BaseModel):
    """Configuration for session token generation."""
    jwt_secret: str
    algorithm: str = "HS256"
    lifetime_days: int = 7

    @classmethod
    def from_env(cls) -> "TokenConfig":
        jwt_secret = os.getenv("JWT_SECRET")
        if not jwt_secret:
            raise ValueError("JWT_SECRET environment variable is required")
        return cls(
            jwt_secret=jwt_secret,
            lifetime_days=int(os.getenv("JWT_EXPIRY_DAYS", "7")),
        )


class TokenError(Exception):
    """Base exception for session token errors."""
    pass


class TokenExpiredError(TokenError):
    """Token has expired."""
    pass


class TokenInvalidError(TokenError):
    """Token signature or claims are invalid."""
    pass


class TokenService:
    """Issues and verifies session tokens for authenticated users."""

    def __init__(self, config: Optional[TokenConfig] = None):
        self.config = config or TokenConfig.from_env()

    @property
    def max_age_seconds(self) -> int:
        return self.config.lifetime_days * 24 * 60 * 60

    def issue(self, principal: Principal) -> str:
        """
        Generate a signed token for the principal.

        Args:
            principal: Authenticated user identity

        Returns:
            Encoded JWT string
        """
        now = datetime.now(timezone.utc)
        payload = {
            "userId": principal.user_id,
            "companyId": principal.company_id,
            "role": principal.role,
            "email": principal.email,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(days=self.config.lifetime_days)).timestamp()),
        }
        return jwt.encode(payload, self.config.jwt_secret, algorithm=self.config.algorithm)

    def verify(self, token: str) -> Principal:
        """
        Decode and validate a token.

        Raises:
            TokenExpiredError: If the token is past its expiry
            TokenInvalidError: If the signature or claims are invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.config.jwt_secret,
                algorithms=[self.config.algorithm],
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise TokenInvalidError(f"Invalid token: {e}")

        try:
            return Principal(
                user_id=payload["userId"],
                company_id=payload["companyId"],
                role=payload["role"],
                email=payload["email"],
            )
        except KeyError as e:
            raise TokenInvalidError(f"Missing claim: {e}")
