"""
Tests for webhook signature verification in the Stripe client.
"""

import hashlib
import hmac
import json
import time

import pytest

from brandhub.errors import DependencyError, ValidationError
from brandhub.integrations.stripe_billing import StripeBillingClient, StripeConfig


WEBHOOK_SECRET = "whsec_test_secret"


def _signature(payload: bytes, secret: str = WEBHOOK_SECRET) -> str:
    timestamp = int(time.time())
    signed = f"{timestamp}.{payload.decode('utf-8')}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@pytest.fixture
def client():
    return StripeBillingClient(StripeConfig(
        secret_key="sk_test_123",
        webhook_secret=WEBHOOK_SECRET,
    ))


@pytest.fixture
def payload():
    return json.dumps({
        "id": "evt_test",
        "object": "event",
        "type": "customer.subscription.updated",
        "data": {"object": {"id": "sub_1", "object": "subscription", "status": "active"}},
    }).encode("utf-8")


class TestConstructEvent:

    def test_valid_signature(self, client, payload):
        event = client.construct_event(payload, _signature(payload))

        assert event["id"] == "evt_test"
        assert event["type"] == "customer.subscription.updated"

    def test_missing_signature(self, client, payload):
        with pytest.raises(ValidationError, match="Missing Stripe signature"):
            client.construct_event(payload, None)

    def test_wrong_secret(self, client, payload):
        with pytest.raises(ValidationError, match="Invalid Stripe signature"):
            client.construct_event(payload, _signature(payload, secret="whsec_other"))

    def test_unconfigured_secret(self, payload):
        client = StripeBillingClient(StripeConfig(secret_key="sk_test_123"))

        with pytest.raises(DependencyError):
            client.construct_event(payload, _signature(payload))
