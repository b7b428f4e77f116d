"""
Entitlement gate predicates.

Pure functions over a company's subscription status. Denial is an
expected condition surfaced as AuthorizationError, never a fault.
"""

import logging
from typing import Optional

from brandhub.errors import AuthorizationError
from brandhub.models.company import Company, SubscriptionStatus

logger = logging.getLogger(__name__)


SUBSCRIPTION_REQUIRED_MESSAGE = "Active subscription required"
UPLOAD_SUBSCRIPTION_REQUIRED_MESSAGE = "Active subscription required to upload assets"


def can_write(company: Company) -> bool:
    """True iff the company may perform gated write operations."""
    return company.subscription_status == SubscriptionStatus.ACTIVE.value


def require_write(
    company: Company,
    operation: str,
    message: Optional[str] = None,
) -> None:
    """
    Enforce the gate for a write operation.

    Raises:
        AuthorizationError: If the company's subscription is not ACTIVE
    """
    if can_write(company):
        return

    logger.warning(
        "Write denied by entitlement gate",
        extra={
            "company_id": company.id,
            "subscription_status": company.subscription_status,
            "operation": operation,
        },
    )
    raise AuthorizationError(message or SUBSCRIPTION_REQUIRED_MESSAGE)
