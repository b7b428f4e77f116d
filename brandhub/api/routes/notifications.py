"""
Notification API Routes - list notifications and mark them read.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from brandhub.api.schemas.notifications import UpdateNotificationsRequest
from brandhub.auth.dependencies import get_current_principal
from brandhub.auth.principal import Principal
from brandhub.database.session import get_db_session
from brandhub.errors import ValidationError
from brandhub.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("")
async def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """The caller's 50 most recent notifications and their unread count."""
    service = NotificationService(db)
    return {
        "notifications": service.list_notifications(principal.user_id, unread_only=unread_only),
        "unread_count": service.unread_count(principal.user_id),
    }


@router.put("")
async def update_notifications(
    body: UpdateNotificationsRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """Mark one or all of the caller's notifications as read."""
    service = NotificationService(db)
    if body.mark_all_read:
        service.mark_all_read(principal.user_id)
    elif body.notification_id:
        service.mark_read(body.notification_id, principal.user_id)
    else:
        raise ValidationError("Either notification_id or mark_all_read is required")
    db.commit()

    return {"success": True, "unread_count": service.unread_count(principal.user_id)}
