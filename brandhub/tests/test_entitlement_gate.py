"""
Tests for the entitlement gate.

Only ACTIVE companies may perform gated writes; every other status is
denied with AuthorizationError.
"""

import pytest

from brandhub.entitlements.gate import (
    SUBSCRIPTION_REQUIRED_MESSAGE,
    UPLOAD_SUBSCRIPTION_REQUIRED_MESSAGE,
    can_write,
    require_write,
)
from brandhub.errors import AuthorizationError
from brandhub.models.company import Company, SubscriptionStatus


def _company(status: SubscriptionStatus) -> Company:
    return Company(id="company-1", name="Acme", subscription_status=status.value)


class TestCanWrite:

    def test_active_company_can_write(self):
        assert can_write(_company(SubscriptionStatus.ACTIVE)) is True

    @pytest.mark.parametrize("status", [
        SubscriptionStatus.UNPAID,
        SubscriptionStatus.PAST_DUE,
        SubscriptionStatus.CANCELLED,
    ])
    def test_non_active_company_cannot_write(self, status):
        assert can_write(_company(status)) is False


class TestRequireWrite:

    def test_active_company_passes(self):
        require_write(_company(SubscriptionStatus.ACTIVE), "brand.update")

    def test_past_due_company_is_denied_with_default_message(self):
        with pytest.raises(AuthorizationError) as exc_info:
            require_write(_company(SubscriptionStatus.PAST_DUE), "brand.update")

        assert exc_info.value.message == SUBSCRIPTION_REQUIRED_MESSAGE
        assert exc_info.value.http_status == 403

    def test_custom_message_is_used(self):
        with pytest.raises(AuthorizationError) as exc_info:
            require_write(
                _company(SubscriptionStatus.UNPAID),
                "asset.create",
                UPLOAD_SUBSCRIPTION_REQUIRED_MESSAGE,
            )

        assert exc_info.value.message == "Active subscription required to upload assets"
