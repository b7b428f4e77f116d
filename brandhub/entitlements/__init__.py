"""
Subscription entitlement gate.

Write operations (asset upload, brand edit, access request creation)
require an ACTIVE subscription. Access request decisions do not.
"""

from brandhub.entitlements.gate import (
    SUBSCRIPTION_REQUIRED_MESSAGE,
    UPLOAD_SUBSCRIPTION_REQUIRED_MESSAGE,
    can_write,
    require_write,
)

__all__ = [
    "SUBSCRIPTION_REQUIRED_MESSAGE",
    "UPLOAD_SUBSCRIPTION_REQUIRED_MESSAGE",
    "can_write",
    "require_write",
]
