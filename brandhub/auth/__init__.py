"""
Authentication module.

This module provides:
- bcrypt password hashing
- JWT session token issuance/verification
- The Principal resolved once per request and passed to services
"""

from brandhub.auth.principal import Principal
from brandhub.auth.token_service import (
    AUTH_COOKIE_NAME,
    TokenService,
    TokenConfig,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
)
from brandhub.auth.passwords import hash_password, verify_password

__all__ = [
    "Principal",
    "AUTH_COOKIE_NAME",
    "TokenService",
    "TokenConfig",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "hash_password",
    "verify_password",
]
