"""
Auth API Routes - signup, login, logout and current user.

The session token is returned in the httpOnly `auth-token` cookie.
"""

import os
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from brandhub.api.schemas.auth import LoginRequest, SignupRequest
from brandhub.auth.dependencies import get_current_principal, get_token_service
from brandhub.auth.principal import Principal
from brandhub.auth.token_service import AUTH_COOKIE_NAME, TokenService
from brandhub.database.session import get_db_session
from brandhub.integrations.stripe_billing import (
    StripeBillingClient,
    get_optional_billing_client,
)
from brandhub.services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: str, token_service: TokenService) -> None:
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        max_age=token_service.max_age_seconds,
        httponly=True,
        secure=os.getenv("ENV") == "production",
        samesite="lax",
        path="/",
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(
    body: SignupRequest,
    response: Response,
    db: Session = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
    billing_client: Optional[StripeBillingClient] = Depends(get_optional_billing_client),
):
    """
    Register a company.

    Creates Company (UNPAID) + MASTER user + Brand atomically, then
    creates the Stripe customer best-effort.
    """
    service = AccountService(db)
    account, principal = service.signup(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        company_name=body.company_name,
    )
    db.commit()

    if billing_client is not None:
        service.attach_billing_customer(principal, billing_client)

    _set_auth_cookie(response, token_service.issue(principal), token_service)

    logger.info(
        "User signed up",
        extra={"user_id": principal.user_id, "company_id": principal.company_id},
    )
    return {"user": account}


@router.post("/login")
async def login(
    body: LoginRequest,
    response: Response,
    db: Session = Depends(get_db_session),
    token_service: TokenService = Depends(get_token_service),
):
    account, principal = AccountService(db).login(body.email, body.password)
    _set_auth_cookie(response, token_service.issue(principal), token_service)

    logger.info("User logged in", extra={"user_id": principal.user_id})
    return {"user": account}


@router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(AUTH_COOKIE_NAME, path="/")
    return {"success": True}


@router.get("/me")
async def me(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    return {"user": AccountService(db).get_account(principal)}
