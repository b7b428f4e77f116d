"""
Tests for checkout, portal and billing status.
"""

import pytest

from brandhub.errors import DependencyError, ValidationError
from brandhub.services.billing_service import BillingService
from brandhub.tests.factories import create_company, create_user, master_principal


@pytest.fixture
def company(db_session):
    company = create_company(db_session, name="Acme")
    company.stripe_customer_id = "cus_acme"
    db_session.flush()
    return company


class TestCheckout:

    def test_creates_checkout_session(self, db_session, billing_client, company):
        service = BillingService(db_session, billing_client)

        session = service.create_checkout(master_principal(company), additional_users=2)

        assert session["session_id"] == "cs_test_123"
        billing_client.create_checkout_session.assert_called_once_with(
            customer_id="cus_acme",
            company_id=company.id,
            additional_users=2,
        )

    def test_requires_stripe_customer(self, db_session, billing_client):
        company = create_company(db_session)

        with pytest.raises(ValidationError, match="Stripe customer not found"):
            BillingService(db_session, billing_client).create_checkout(master_principal(company))

    def test_rejects_negative_seats(self, db_session, billing_client, company):
        with pytest.raises(ValidationError):
            BillingService(db_session, billing_client).create_checkout(
                master_principal(company), additional_users=-1
            )


class TestPortal:

    def test_creates_portal_session(self, db_session, billing_client, company):
        session = BillingService(db_session, billing_client).create_portal(
            master_principal(company)
        )

        assert session["url"].startswith("https://billing.stripe.com/")
        billing_client.create_portal_session.assert_called_once_with("cus_acme")

    def test_requires_customer(self, db_session, billing_client):
        company = create_company(db_session)

        with pytest.raises(ValidationError, match="No subscription found"):
            BillingService(db_session, billing_client).create_portal(master_principal(company))


class TestStatus:

    def test_status_without_subscription(self, db_session, billing_client, company):
        create_user(db_session, company)

        status = BillingService(db_session, billing_client).get_status(master_principal(company))

        assert status["company"]["subscription_status"] == "ACTIVE"
        assert status["company"]["user_count"] == 2
        assert status["subscription"] is None
        billing_client.retrieve_subscription.assert_not_called()

    def test_status_with_subscription(self, db_session, billing_client, company):
        company.stripe_subscription_id = "sub_1"
        db_session.flush()
        billing_client.retrieve_subscription.return_value = {
            "id": "sub_1",
            "status": "active",
            "current_period_start": 1,
            "current_period_end": 2,
            "cancel_at_period_end": False,
        }

        status = BillingService(db_session, billing_client).get_status(master_principal(company))

        assert status["subscription"]["status"] == "active"

    def test_provider_failure_still_returns_company(self, db_session, billing_client, company):
        company.stripe_subscription_id = "sub_1"
        db_session.flush()
        billing_client.retrieve_subscription.side_effect = DependencyError("down", "stripe")

        status = BillingService(db_session, billing_client).get_status(master_principal(company))

        assert status["subscription"] is None
        assert status["company"]["id"] == company.id
