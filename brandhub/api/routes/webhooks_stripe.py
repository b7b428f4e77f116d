"""
Stripe webhook endpoint.

Verifies the Stripe-Signature header, then hands the event to
StripeWebhookHandler. Processed events are acknowledged with 200 so
Stripe stops retrying; duplicates are acknowledged without reprocessing.
"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from brandhub.database.session import get_db_session
from brandhub.integrations.stripe_billing import StripeBillingClient, get_billing_client
from brandhub.services.billing_webhook_handler import get_webhook_handler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


@router.post("/stripe")
async def stripe_webhook(
    request: Request,
    db: Session = Depends(get_db_session),
    billing_client: StripeBillingClient = Depends(get_billing_client),
):
    payload = await request.body()
    event = billing_client.construct_event(payload, request.headers.get("stripe-signature"))

    result = get_webhook_handler(db, billing_client).handle_event(event)
    db.commit()

    logger.info(
        "Stripe webhook processed",
        extra={
            "event_id": event.get("id"),
            "event_type": event.get("type"),
            "processed": result.processed,
            "skipped_reason": result.skipped_reason,
        },
    )
    return {
        "received": True,
        "processed": result.processed,
        "message": result.message,
    }
