"""
FastAPI dependencies resolving the request principal.

The credential is read from the `auth-token` cookie, or from an
`Authorization: Bearer` header for non-browser clients. Routes receive
the resolved Principal and pass it explicitly to services.
"""

import logging
from typing import Optional

from fastapi import Depends, Request

from brandhub.auth.principal import Principal
from brandhub.auth.token_service import AUTH_COOKIE_NAME, TokenService, TokenError
from brandhub.errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

_token_service: Optional[TokenService] = None


def get_token_service() -> TokenService:
    """Get or create the token service singleton."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService()
    return _token_service


def _extract_token(request: Request) -> Optional[str]:
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip() or None
    return None


def get_optional_principal(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
) -> Optional[Principal]:
    """Resolve the principal, or None for anonymous requests."""
    token = _extract_token(request)
    if not token:
        return None
    try:
        return token_service.verify(token)
    except TokenError as e:
        logger.info(
            "Rejected session token",
            extra={"path": request.url.path, "reason": str(e)},
        )
        return None


def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """Require an authenticated principal."""
    if principal is None:
        raise AuthenticationError("Not authenticated")
    return principal


def require_master(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Require the company's MASTER user."""
    if not principal.is_master:
        raise AuthorizationError("Only the master user can manage the team")
    return principal
