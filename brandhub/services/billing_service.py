"""
Billing service: checkout, customer portal and billing status.

The Stripe client is injected so routes and tests decide which
collaborator backs it.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from brandhub.auth.principal import Principal
from brandhub.errors import DependencyError, NotFoundError, ValidationError
from brandhub.models.company import Company
from brandhub.services.team_service import user_to_dict

logger = logging.getLogger(__name__)


class BillingService:

    def __init__(self, session: Session, billing_client):
        self.session = session
        self.billing_client = billing_client

    def create_checkout(self, principal: Principal, additional_users: Optional[int] = 0) -> dict:
        """
        Start a Stripe checkout for the principal's company.

        Raises:
            ValidationError: No Stripe customer or negative seat count
        """
        company = self._get_company(principal.company_id)
        if not company.stripe_customer_id:
            raise ValidationError("Stripe customer not found")

        additional_users = int(additional_users or 0)
        if additional_users < 0:
            raise ValidationError("additional_users cannot be negative")

        session = self.billing_client.create_checkout_session(
            customer_id=company.stripe_customer_id,
            company_id=company.id,
            additional_users=additional_users,
        )

        logger.info(
            "Checkout session created",
            extra={
                "company_id": company.id,
                "additional_users": additional_users,
                "user_id": principal.user_id,
            },
        )
        return session

    def create_portal(self, principal: Principal) -> dict:
        company = self._get_company(principal.company_id)
        if not company.stripe_customer_id:
            raise ValidationError("No subscription found")

        session = self.billing_client.create_portal_session(company.stripe_customer_id)
        logger.info(
            "Portal session created",
            extra={"company_id": company.id, "user_id": principal.user_id},
        )
        return session

    def get_status(self, principal: Principal) -> dict:
        """Company billing summary plus the live Stripe subscription, if any."""
        company = self._get_company(principal.company_id)

        subscription = None
        if company.stripe_subscription_id:
            try:
                data = self.billing_client.retrieve_subscription(company.stripe_subscription_id)
                subscription = {
                    "id": data.get("id"),
                    "status": data.get("status"),
                    "current_period_start": data.get("current_period_start"),
                    "current_period_end": data.get("current_period_end"),
                    "cancel_at_period_end": data.get("cancel_at_period_end"),
                }
            except DependencyError:
                logger.warning(
                    "billing.subscription_lookup_failed",
                    extra={"company_id": company.id},
                    exc_info=True,
                )

        return {
            "company": {
                "id": company.id,
                "name": company.name,
                "subscription_status": company.subscription_status,
                "subscription_ends_at": (
                    company.subscription_ends_at.isoformat()
                    if company.subscription_ends_at else None
                ),
                "user_count": len(company.users),
                "users": [user_to_dict(u) for u in company.users],
            },
            "subscription": subscription,
        }

    def _get_company(self, company_id: str) -> Company:
        company = self.session.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError("Company not found")
        return company
