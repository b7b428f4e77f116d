"""
Access Request API Routes - request, list and decide brand access.

Provides endpoints for:
- Creating a request for another company's brand
- Listing sent or received requests
- Approving/denying received requests

State transitions are committed first; their notification intents are
dispatched afterwards and never affect the response.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from brandhub.api.schemas.access_requests import (
    CreateAccessRequestBody,
    UpdateAccessRequestBody,
)
from brandhub.auth.dependencies import get_current_principal
from brandhub.auth.principal import Principal
from brandhub.database.session import get_db_session
from brandhub.errors import ValidationError
from brandhub.services.access_request_service import AccessRequestService
from brandhub.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/access-requests", tags=["access-requests"])


@router.get("")
async def list_access_requests(
    type: str = Query("received", description="sent or received"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """List requests the caller's company sent or received."""
    service = AccessRequestService(db)
    if type == "sent":
        requests = service.list_sent(principal)
    elif type == "received":
        requests = service.list_received(principal)
    else:
        raise ValidationError("type must be 'sent' or 'received'")
    return {"requests": requests, "total_count": len(requests)}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_access_request(
    body: CreateAccessRequestBody,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """
    Request access to another company's brand.

    The request starts PENDING; every user of the brand's company is
    notified.
    """
    outcome = AccessRequestService(db).create(
        principal,
        target_brand_id=body.brand_id,
        access_type=body.access_type,
        message=body.message,
    )
    db.commit()
    NotificationDispatcher(db).dispatch(outcome.intents)

    return {"access_request": outcome.result}


@router.put("")
async def update_access_request(
    body: UpdateAccessRequestBody,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """
    Approve or deny a received request.

    Only the target brand's company may decide, and only once.
    """
    outcome = AccessRequestService(db).update_status(
        principal,
        request_id=body.request_id,
        new_status=body.status,
    )
    db.commit()
    NotificationDispatcher(db).dispatch(outcome.intents)

    return {"access_request": outcome.result}
