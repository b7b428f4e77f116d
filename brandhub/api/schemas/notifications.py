from typing import Optional

from pydantic import BaseModel


class UpdateNotificationsRequest(BaseModel):
    """Mark one notification (notification_id) or all (mark_all_read) as read."""
    notification_id: Optional[str] = None
    mark_all_read: bool = False
