"""
Billing API Routes - Stripe checkout, customer portal and status.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from brandhub.api.schemas.billing import BillingActionRequest
from brandhub.auth.dependencies import get_current_principal
from brandhub.auth.principal import Principal
from brandhub.database.session import get_db_session
from brandhub.errors import ValidationError
from brandhub.integrations.stripe_billing import StripeBillingClient, get_billing_client
from brandhub.services.billing_service import BillingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/billing", tags=["billing"])


@router.get("")
async def get_billing_status(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
    billing_client: StripeBillingClient = Depends(get_billing_client),
):
    return BillingService(db, billing_client).get_status(principal)


@router.post("")
async def billing_action(
    body: BillingActionRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
    billing_client: StripeBillingClient = Depends(get_billing_client),
):
    """Start a checkout (create-checkout) or open the portal (create-portal)."""
    service = BillingService(db, billing_client)
    if body.action == "create-checkout":
        return service.create_checkout(principal, body.additional_users)
    if body.action == "create-portal":
        return service.create_portal(principal)
    raise ValidationError("Invalid action")
