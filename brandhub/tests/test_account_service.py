"""
Tests for signup, login and the best-effort billing customer.
"""

import pytest

from brandhub.errors import AuthenticationError, ConflictError, ValidationError
from brandhub.models.brand import Brand
from brandhub.models.company import Company
from brandhub.models.user import User
from brandhub.services.account_service import AccountService
from brandhub.tests.factories import DEFAULT_PASSWORD, create_company, master_of


@pytest.fixture
def service(db_session):
    return AccountService(db_session)


def _signup(service, email="founder@acme.example.com"):
    return service.signup(email, "s3cret-pass", "Ada", "Founder", "Acme")


class TestSignup:

    def test_creates_company_master_and_brand(self, db_session, service):
        account, principal = _signup(service)

        assert account["role"] == "MASTER"
        assert account["company"]["name"] == "Acme"
        assert account["company"]["subscription_status"] == "UNPAID"
        assert principal.is_master
        brand = db_session.query(Brand).filter(Brand.company_id == principal.company_id).one()
        assert brand.name == "Acme"
        assert brand.social_links == {}

    def test_email_is_normalized(self, service):
        account, _ = _signup(service, email="  Founder@ACME.example.com ")

        assert account["email"] == "founder@acme.example.com"

    def test_missing_field(self, service):
        with pytest.raises(ValidationError, match="All fields are required"):
            service.signup("a@example.com", "pw", "Ada", "", "Acme")

    def test_duplicate_email_creates_nothing(self, db_session, service):
        _signup(service)
        companies_before = db_session.query(Company).count()

        with pytest.raises(ConflictError, match="already exists"):
            _signup(service, email="FOUNDER@acme.example.com")

        assert db_session.query(Company).count() == companies_before
        assert db_session.query(User).count() == 1


class TestBillingCustomer:

    def test_attaches_customer_id(self, db_session, service, billing_client):
        _, principal = _signup(service)

        customer_id = service.attach_billing_customer(principal, billing_client)

        assert customer_id == "cus_test123"
        company = db_session.query(Company).filter(Company.id == principal.company_id).one()
        assert company.stripe_customer_id == "cus_test123"
        billing_client.create_customer.assert_called_once_with(
            email="founder@acme.example.com",
            name="Acme",
            company_id=principal.company_id,
        )

    def test_billing_failure_keeps_signup(self, db_session, service, billing_client):
        billing_client.create_customer.side_effect = RuntimeError("stripe down")
        _, principal = _signup(service)
        db_session.commit()

        assert service.attach_billing_customer(principal, billing_client) is None

        company = db_session.query(Company).filter(Company.id == principal.company_id).one()
        assert company.stripe_customer_id is None
        assert db_session.query(User).filter(User.id == principal.user_id).count() == 1


class TestLogin:

    def test_valid_credentials(self, db_session, service):
        company = create_company(db_session)
        master = master_of(company)

        account, principal = service.login(master.email.upper(), DEFAULT_PASSWORD)

        assert account["id"] == master.id
        assert principal.company_id == company.id

    def test_wrong_password(self, db_session, service):
        master = master_of(create_company(db_session))

        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            service.login(master.email, "wrong-password")

    def test_unknown_email_has_same_message(self, service):
        with pytest.raises(AuthenticationError, match="Invalid email or password"):
            service.login("nobody@example.com", DEFAULT_PASSWORD)

    def test_missing_credentials(self, service):
        with pytest.raises(ValidationError):
            service.login("", "")


class TestGetAccount:

    def test_returns_account(self, service):
        account, principal = _signup(service)

        assert service.get_account(principal)["email"] == account["email"]
