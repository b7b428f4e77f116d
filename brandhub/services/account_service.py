"""
Account service: signup, login and current-user lookup.

Signup creates Company (UNPAID) + MASTER User + Brand in one
transaction. The Stripe customer is created afterwards as a best-effort
side effect; a billing failure never undoes the signup.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brandhub.auth.passwords import hash_password, verify_password
from brandhub.auth.principal import Principal
from brandhub.errors import AuthenticationError, ConflictError, ValidationError
from brandhub.models.brand import Brand
from brandhub.models.company import Company, SubscriptionStatus
from brandhub.models.user import User, UserRole

logger = logging.getLogger(__name__)


INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def principal_for(user: User) -> Principal:
    return Principal(
        user_id=user.id,
        company_id=user.company_id,
        role=user.role,
        email=user.email,
    )


def account_to_dict(user: User) -> dict:
    company = user.company
    return {
        "id": user.id,
        "email": user.email,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role,
        "company": {
            "id": company.id,
            "name": company.name,
            "subscription_status": company.subscription_status,
            "subscription_ends_at": (
                company.subscription_ends_at.isoformat() if company.subscription_ends_at else None
            ),
        },
    }


class AccountService:

    def __init__(self, session: Session):
        self.session = session

    def signup(
        self,
        email: Optional[str],
        password: Optional[str],
        first_name: Optional[str],
        last_name: Optional[str],
        company_name: Optional[str],
    ) -> Tuple[dict, Principal]:
        """
        Register a company with its MASTER user and brand.

        Returns:
            (account dict, principal for the new MASTER)

        Raises:
            ValidationError: Missing field
            ConflictError: Email already registered
        """
        if not all([email, password, first_name, last_name, company_name]):
            raise ValidationError("All fields are required")

        email = email.strip().lower()
        company_name = company_name.strip()

        company = Company(
            name=company_name,
            subscription_status=SubscriptionStatus.UNPAID.value,
        )
        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            role=UserRole.MASTER.value,
            company=company,
        )
        brand = Brand(name=company_name, social_links={}, company=company)

        try:
            with self.session.begin_nested():
                self.session.add_all([company, user, brand])
        except IntegrityError:
            raise ConflictError("User with this email already exists")

        logger.info(
            "Company registered",
            extra={"company_id": company.id, "user_id": user.id, "brand_id": brand.id},
        )

        return account_to_dict(user), principal_for(user)

    def attach_billing_customer(self, principal: Principal, billing_client) -> Optional[str]:
        """
        Create the Stripe customer for a new company, best-effort.

        Must run after the signup is committed. Failures are logged and
        swallowed.

        Returns:
            Stripe customer id, or None on failure
        """
        try:
            company = self.session.query(Company).filter(
                Company.id == principal.company_id
            ).first()
            customer_id = billing_client.create_customer(
                email=principal.email,
                name=company.name,
                company_id=company.id,
            )
            company.stripe_customer_id = customer_id
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.warning(
                "signup.billing_customer_failed",
                extra={"company_id": principal.company_id},
                exc_info=True,
            )
            return None

        logger.info(
            "Billing customer created",
            extra={"company_id": principal.company_id, "stripe_customer_id": customer_id},
        )
        return customer_id

    def login(self, email: Optional[str], password: Optional[str]) -> Tuple[dict, Principal]:
        """
        Verify credentials.

        Raises:
            ValidationError: Missing email or password
            AuthenticationError: Unknown email or wrong password
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.session.query(User).filter(User.email == email.strip().lower()).first()
        if not user or not verify_password(password, user.password_hash):
            logger.info("Login failed", extra={"email": email.strip().lower()})
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        return account_to_dict(user), principal_for(user)

    def get_account(self, principal: Principal) -> dict:
        user = self.session.query(User).filter(User.id == principal.user_id).first()
        if not user:
            raise AuthenticationError("Not authenticated")
        return account_to_dict(user)
