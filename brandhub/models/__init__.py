"""
Database models for companies, brands, assets and the access workflow.

Importing this package registers every table on Base.metadata.
"""

from brandhub.models.base import TimestampMixin, generate_uuid
from brandhub.models.company import Company, SubscriptionStatus
from brandhub.models.user import User, UserRole
from brandhub.models.brand import Brand, SOCIAL_PLATFORMS
from brandhub.models.asset import Asset, AssetCategory
from brandhub.models.access_request import (
    AccessRequest,
    AccessRequestStatus,
    AccessType,
    TERMINAL_STATUSES,
)
from brandhub.models.note import Note
from brandhub.models.notification import Notification, NotificationType
from brandhub.models.webhook_event import WebhookEvent

__all__ = [
    "TimestampMixin",
    "generate_uuid",
    "Company",
    "SubscriptionStatus",
    "User",
    "UserRole",
    "Brand",
    "SOCIAL_PLATFORMS",
    "Asset",
    "AssetCategory",
    "AccessRequest",
    "AccessRequestStatus",
    "AccessType",
    "TERMINAL_STATUSES",
    "Note",
    "Notification",
    "NotificationType",
    "WebhookEvent",
]
