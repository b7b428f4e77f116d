"""
Stripe billing client.

Wraps the stripe SDK calls the application needs:
- customer creation at signup
- hosted checkout and customer portal sessions
- subscription retrieval for invoice events
- webhook signature verification

Provider failures surface as DependencyError; bad webhook signatures
as ValidationError.
"""

import os
import logging
from typing import Any, Dict, Optional

import stripe
from pydantic import BaseModel

from brandhub.errors import DependencyError, ValidationError

logger = logging.getLogger(__name__)


class StripeConfig(BaseModel):
    """Stripe credentials and price ids."""
    secret_key: str
    webhook_secret: Optional[str] = None
    monthly_price_id: Optional[str] = None
    additional_user_price_id: Optional[str] = None
    app_url: str = "http://localhost:3000"

    @classmethod
    def from_env(cls) -> "StripeConfig":
        secret_key = os.getenv("STRIPE_SECRET_KEY")
        if not secret_key:
            raise ValueError("STRIPE_SECRET_KEY environment variable is required")
        return cls(
            secret_key=secret_key,
            webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET"),
            monthly_price_id=os.getenv("STRIPE_MONTHLY_PRICE_ID"),
            additional_user_price_id=os.getenv("STRIPE_ADDITIONAL_USER_PRICE_ID"),
            app_url=os.getenv("APP_URL", "http://localhost:3000"),
        )


class StripeBillingClient:
    """Billing collaborator backed by the Stripe API."""

    def __init__(self, config: Optional[StripeConfig] = None):
        self.config = config or StripeConfig.from_env()
        stripe.api_key = self.config.secret_key

    @property
    def app_url(self) -> str:
        return self.config.app_url

    def create_customer(self, email: str, name: str, company_id: str) -> str:
        """Create a Stripe customer and return its id."""
        try:
            customer = stripe.Customer.create(
                email=email,
                name=name,
                metadata={"companyId": company_id},
            )
        except stripe.StripeError as e:
            raise DependencyError(f"Stripe customer creation failed: {e}", dependency="stripe")
        return customer.id

    def create_checkout_session(
        self,
        customer_id: str,
        company_id: str,
        additional_users: int = 0,
    ) -> Dict[str, Any]:
        """
        Create a subscription checkout session.

        Line items: the monthly plan, plus one additional-user seat price
        per extra user.
        """
        line_items = [{"price": self.config.monthly_price_id, "quantity": 1}]
        if additional_users > 0:
            line_items.append({
                "price": self.config.additional_user_price_id,
                "quantity": additional_users,
            })

        try:
            session = stripe.checkout.Session.create(
                customer=customer_id,
                mode="subscription",
                payment_method_types=["card"],
                line_items=line_items,
                success_url=f"{self.app_url}/dashboard?session_id={{CHECKOUT_SESSION_ID}}",
                cancel_url=f"{self.app_url}/billing",
                metadata={"companyId": company_id},
                subscription_data={"metadata": {"companyId": company_id}},
            )
        except stripe.StripeError as e:
            raise DependencyError(f"Stripe checkout failed: {e}", dependency="stripe")
        return {"session_id": session.id, "url": session.url}

    def create_portal_session(self, customer_id: str) -> Dict[str, Any]:
        try:
            session = stripe.billing_portal.Session.create(
                customer=customer_id,
                return_url=f"{self.app_url}/billing",
            )
        except stripe.StripeError as e:
            raise DependencyError(f"Stripe portal failed: {e}", dependency="stripe")
        return {"url": session.url}

    def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        try:
            subscription = stripe.Subscription.retrieve(subscription_id)
        except stripe.StripeError as e:
            raise DependencyError(f"Stripe subscription lookup failed: {e}", dependency="stripe")
        return subscription.to_dict()

    def construct_event(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """
        Verify a webhook payload and return the event.

        Raises:
            ValidationError: Missing or invalid signature
            DependencyError: Webhook secret not configured
        """
        if not self.config.webhook_secret:
            raise DependencyError("STRIPE_WEBHOOK_SECRET is not configured", dependency="stripe")
        if not signature:
            raise ValidationError("Missing Stripe signature")
        try:
            event = stripe.Webhook.construct_event(payload, signature, self.config.webhook_secret)
        except stripe.SignatureVerificationError:
            raise ValidationError("Invalid Stripe signature")
        except ValueError:
            raise ValidationError("Invalid webhook payload")
        return event.to_dict()


_billing_client: Optional[StripeBillingClient] = None


def get_billing_client() -> StripeBillingClient:
    """FastAPI dependency returning the shared Stripe client."""
    global _billing_client
    if _billing_client is None:
        try:
            _billing_client = StripeBillingClient()
        except ValueError as e:
            raise DependencyError(str(e), dependency="stripe")
    return _billing_client


def get_optional_billing_client() -> Optional[StripeBillingClient]:
    """Like get_billing_client, but None when Stripe is not configured."""
    try:
        return get_billing_client()
    except DependencyError:
        logger.warning("Stripe is not configured; billing side effects disabled")
        return None
