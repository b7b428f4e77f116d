"""
Stripe webhook handler with idempotency support.

Processes Stripe billing events with:
- Event deduplication using the Stripe event id
- Exact provider-status mapping (unknown statuses become UNPAID)
- Audit logging of every subscription state change

Handled event types:
- customer.subscription.created / updated / deleted
- invoice.payment_succeeded (re-reads the subscription)
- invoice.payment_failed (logged; Stripe follows up with a subscription update)
"""

import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from brandhub.models.company import Company, SubscriptionStatus
from brandhub.models.webhook_event import WebhookEvent

logger = logging.getLogger(__name__)


STRIPE_STATUS_MAP = {
    "active": SubscriptionStatus.ACTIVE.value,
    "past_due": SubscriptionStatus.PAST_DUE.value,
    "canceled": SubscriptionStatus.CANCELLED.value,
}

SUBSCRIPTION_EVENTS = frozenset({
    "customer.subscription.created",
    "customer.subscription.updated",
    "customer.subscription.deleted",
})


def map_subscription_status(stripe_status: Optional[str]) -> str:
    """Map a Stripe subscription status onto SubscriptionStatus."""
    return STRIPE_STATUS_MAP.get(stripe_status or "", SubscriptionStatus.UNPAID.value)


def _period_end(subscription: Dict[str, Any]) -> Optional[datetime]:
    period_end = subscription.get("current_period_end")
    if period_end is None:
        # Newer API versions carry the period on the subscription items.
        items = (subscription.get("items") or {}).get("data") or []
        if items:
            period_end = items[0].get("current_period_end")
    if not period_end:
        return None
    return datetime.fromtimestamp(int(period_end), tz=timezone.utc)


@dataclass
class WebhookProcessingResult:
    """Result of webhook processing."""
    processed: bool
    message: str
    company_id: Optional[str] = None
    skipped_reason: Optional[str] = None


class StripeWebhookHandler:
    """
    Applies Stripe subscription events to Company billing state.

    Each event id is processed exactly once.
    """

    def __init__(self, db_session: Session, billing_client=None):
        """
        Initialize webhook handler.

        Args:
            db_session: Database session
            billing_client: Stripe client, needed for invoice events
        """
        self.db = db_session
        self.billing_client = billing_client

    def handle_event(self, event: Dict[str, Any]) -> WebhookProcessingResult:
        """
        Process a verified Stripe event.

        Args:
            event: Event dict as returned by StripeBillingClient.construct_event

        Returns:
            WebhookProcessingResult describing what happened
        """
        event_id = event.get("id")
        event_type = event.get("type", "")
        data_object = (event.get("data") or {}).get("object") or {}

        if event_id and self._is_duplicate(event_id):
            logger.info(
                "Duplicate webhook skipped",
                extra={"event_id": event_id, "event_type": event_type},
            )
            return WebhookProcessingResult(
                processed=False,
                message="Event already processed",
                skipped_reason="duplicate",
            )

        if event_type in SUBSCRIPTION_EVENTS:
            result = self.handle_subscription_update(data_object)
        elif event_type == "invoice.payment_succeeded":
            result = self._handle_invoice_paid(data_object)
        elif event_type == "invoice.payment_failed":
            logger.warning(
                "Invoice payment failed",
                extra={
                    "event_id": event_id,
                    "invoice_id": data_object.get("id"),
                    "customer": data_object.get("customer"),
                },
            )
            result = WebhookProcessingResult(processed=True, message="Payment failure logged")
        else:
            logger.info(
                "Unhandled webhook event type",
                extra={"event_id": event_id, "event_type": event_type},
            )
            result = WebhookProcessingResult(
                processed=False,
                message=f"Unhandled event type: {event_type}",
                skipped_reason="unhandled_type",
            )

        if event_id:
            self._record_event(event_id, event_type, event)
        self.db.flush()
        return result

    def handle_subscription_update(self, subscription: Dict[str, Any]) -> WebhookProcessingResult:
        """Apply a subscription object's status and period to its company."""
        company_id = (subscription.get("metadata") or {}).get("companyId")
        if not company_id:
            return WebhookProcessingResult(
                processed=False,
                message="Subscription has no companyId metadata",
                skipped_reason="missing_company",
            )

        company = self.db.query(Company).filter(Company.id == company_id).first()
        if not company:
            logger.warning(
                "Webhook references unknown company",
                extra={"company_id": company_id, "subscription_id": subscription.get("id")},
            )
            return WebhookProcessingResult(
                processed=False,
                message="Company not found",
                company_id=company_id,
                skipped_reason="unknown_company",
            )

        previous_status = company.subscription_status
        company.subscription_status = map_subscription_status(subscription.get("status"))
        company.stripe_subscription_id = subscription.get("id")
        company.subscription_ends_at = _period_end(subscription)

        logger.info(
            "Subscription status updated",
            extra={
                "company_id": company.id,
                "subscription_id": company.stripe_subscription_id,
                "stripe_status": subscription.get("status"),
                "previous_status": previous_status,
                "new_status": company.subscription_status,
            },
        )

        return WebhookProcessingResult(
            processed=True,
            message=f"Subscription status set to {company.subscription_status}",
            company_id=company.id,
        )

    def _handle_invoice_paid(self, invoice: Dict[str, Any]) -> WebhookProcessingResult:
        subscription_id = invoice.get("subscription")
        if not subscription_id:
            # Newer API versions nest it under parent.subscription_details.
            parent = invoice.get("parent") or {}
            subscription_id = (parent.get("subscription_details") or {}).get("subscription")

        if not isinstance(subscription_id, str) or not subscription_id:
            return WebhookProcessingResult(
                processed=False,
                message="Invoice has no subscription",
                skipped_reason="no_subscription",
            )

        subscription = self.billing_client.retrieve_subscription(subscription_id)
        return self.handle_subscription_update(subscription)

    def _is_duplicate(self, stripe_event_id: str) -> bool:
        """
        Check if webhook event has already been processed.

        Args:
            stripe_event_id: Stripe event ID

        Returns:
            True if duplicate, False otherwise
        """
        existing = self.db.query(WebhookEvent).filter(
            WebhookEvent.stripe_event_id == stripe_event_id
        ).first()

        return existing is not None

    def _record_event(
        self,
        stripe_event_id: str,
        event_type: str,
        payload: Dict[str, Any]
    ) -> None:
        """Record processed webhook event for deduplication."""
        payload_str = json.dumps(payload, sort_keys=True, default=str)
        payload_hash = hashlib.sha256(payload_str.encode()).hexdigest()

        self.db.add(WebhookEvent(
            stripe_event_id=stripe_event_id,
            event_type=event_type,
            payload_hash=payload_hash,
            processed_at=datetime.now(timezone.utc)
        ))


def get_webhook_handler(db_session: Session, billing_client=None) -> StripeWebhookHandler:
    """
    Factory function to create a StripeWebhookHandler.

    Args:
        db_session: Database session
        billing_client: Stripe client for invoice events

    Returns:
        Configured StripeWebhookHandler instance
    """
    return StripeWebhookHandler(db_session, billing_client)
