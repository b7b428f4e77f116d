"""
Access Request Service for cross-tenant brand access.

Flow:
1. Requester company calls create() -> PENDING request
2. Target brand's company sees it via list_received()
3. Target company calls update_status() with APPROVED or DENIED
4. APPROVED unlocks the full brand view for the requester

Every operation takes the caller's Principal explicitly and returns a
TransitionResult: the request plus the notification intents the caller
must hand to NotificationDispatcher once the transaction is committed.

LOCKED BUSINESS RULES:
- One request per (requester company, target brand), whatever its status
- A company cannot request access to its own brand
- Only the target brand's company decides; the decision is not gated by
  the target's subscription
- APPROVED and DENIED are terminal
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brandhub.auth.principal import Principal
from brandhub.entitlements.gate import require_write
from brandhub.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from brandhub.models.access_request import (
    AccessRequest,
    AccessRequestStatus,
    AccessType,
)
from brandhub.models.brand import Brand
from brandhub.models.company import Company
from brandhub.models.notification import NotificationType
from brandhub.services.notification_service import TransitionResult, intents_for_users

logger = logging.getLogger(__name__)


DECISION_STATUSES = (AccessRequestStatus.APPROVED.value, AccessRequestStatus.DENIED.value)


class AccessRequestService:
    """
    Service for the access request lifecycle.

    Handles request -> approve/deny and the sent/received listings.
    """

    def __init__(self, session: Session):
        self.session = session

    def create(
        self,
        principal: Principal,
        target_brand_id: Optional[str],
        access_type: Optional[str] = None,
        message: Optional[str] = None,
    ) -> TransitionResult:
        """
        Create an access request from the principal's company.

        Args:
            principal: Caller; their company is the requester
            target_brand_id: Brand to request access to
            access_type: FULL (default) or LIMITED
            message: Optional note for the brand owner

        Returns:
            TransitionResult with the PENDING request and ACCESS_REQUEST
            intents for every user of the brand's company

        Raises:
            ValidationError: Missing/unknown brand, self-request or bad access type
            AuthorizationError: Requester subscription is not ACTIVE
            ConflictError: A request already exists for this company and brand
        """
        if not target_brand_id:
            raise ValidationError("Brand ID is required")

        access_type = access_type or AccessType.FULL.value
        if access_type not in {t.value for t in AccessType}:
            raise ValidationError(f"Invalid access type: {access_type}")

        brand = self.session.query(Brand).filter(Brand.id == target_brand_id).first()
        if not brand:
            raise ValidationError("Brand not found")

        if brand.company_id == principal.company_id:
            raise ValidationError("Cannot request access to your own brand")

        requester = self._get_company(principal.company_id)
        require_write(requester, "access_request.create")

        request = AccessRequest(
            requester_company_id=requester.id,
            target_brand_id=brand.id,
            status=AccessRequestStatus.PENDING.value,
            access_type=access_type,
            message=message,
        )

        # The unique constraint decides; two concurrent creates cannot both pass.
        try:
            with self.session.begin_nested():
                self.session.add(request)
        except IntegrityError:
            logger.info(
                "Duplicate access request rejected",
                extra={
                    "requester_company_id": requester.id,
                    "target_brand_id": brand.id,
                },
            )
            raise ConflictError("Access request already exists")

        intents = intents_for_users(
            brand.company.users,
            NotificationType.ACCESS_REQUEST,
            title="New Access Request",
            content=f'{requester.name} has requested access to your brand "{brand.name}"',
        )

        logger.info(
            "Access request created",
            extra={
                "request_id": request.id,
                "requester_company_id": requester.id,
                "target_brand_id": brand.id,
                "access_type": access_type,
                "user_id": principal.user_id,
            },
        )

        return TransitionResult(result=self._request_to_dict(request), intents=intents)

    def update_status(
        self,
        principal: Principal,
        request_id: Optional[str],
        new_status: Optional[str],
    ) -> TransitionResult:
        """
        Approve or deny a request.

        Args:
            principal: Caller; must belong to the target brand's company
            request_id: Request to decide
            new_status: APPROVED or DENIED

        Returns:
            TransitionResult with the decided request and ACCESS_APPROVED /
            ACCESS_DENIED intents for every user of the requester company

        Raises:
            ValidationError: Missing id or status, or status not a decision
            NotFoundError: Unknown request
            AuthorizationError: Caller does not own the target brand
            ConflictError: Request already decided
        """
        if not request_id or not new_status:
            raise ValidationError("Request ID and status are required")

        if new_status not in DECISION_STATUSES:
            raise ValidationError(
                f"Invalid status: {new_status}. Must be one of: {', '.join(DECISION_STATUSES)}"
            )

        request = self._get_request(request_id, for_update=True)
        brand = request.target_brand

        if brand.company_id != principal.company_id:
            logger.warning(
                "Access request decision by non-owner rejected",
                extra={
                    "request_id": request.id,
                    "acting_company_id": principal.company_id,
                    "target_brand_id": brand.id,
                },
            )
            raise AuthorizationError("Only the brand owner can update this request")

        if request.is_terminal:
            raise ConflictError(
                f"Access request has already been {request.status.lower()}"
            )

        if new_status == AccessRequestStatus.APPROVED.value:
            request.approve()
            notification_type = NotificationType.ACCESS_APPROVED
            title = "Access Approved"
            content = f'Your access request to "{brand.name}" has been approved'
        else:
            request.deny()
            notification_type = NotificationType.ACCESS_DENIED
            title = "Access Denied"
            content = f'Your access request to "{brand.name}" has been denied'

        self.session.flush()

        intents = intents_for_users(
            request.requester_company.users,
            notification_type,
            title=title,
            content=content,
        )

        logger.info(
            "Access request decided",
            extra={
                "request_id": request.id,
                "status": request.status,
                "target_brand_id": brand.id,
                "decided_by": principal.user_id,
            },
        )

        return TransitionResult(result=self._request_to_dict(request), intents=intents)

    def list_sent(self, principal: Principal) -> List[dict]:
        """Requests made by the principal's company, newest first."""
        requests = (
            self.session.query(AccessRequest)
            .filter(AccessRequest.requester_company_id == principal.company_id)
            .order_by(AccessRequest.created_at.desc())
            .all()
        )
        results = []
        for r in requests:
            data = self._request_to_dict(r)
            data["target_brand"] = {
                "id": r.target_brand.id,
                "name": r.target_brand.name,
                "company": {"name": r.target_brand.company.name},
            }
            results.append(data)
        return results

    def list_received(self, principal: Principal) -> List[dict]:
        """Requests against the principal's company brand, newest first."""
        brand = (
            self.session.query(Brand)
            .filter(Brand.company_id == principal.company_id)
            .first()
        )
        if not brand:
            return []

        requests = (
            self.session.query(AccessRequest)
            .filter(AccessRequest.target_brand_id == brand.id)
            .order_by(AccessRequest.created_at.desc())
            .all()
        )
        results = []
        for r in requests:
            data = self._request_to_dict(r)
            data["requester_company"] = {
                "id": r.requester_company.id,
                "name": r.requester_company.name,
                "users": [
                    {
                        "first_name": u.first_name,
                        "last_name": u.last_name,
                        "email": u.email,
                    }
                    for u in r.requester_company.users
                ],
            }
            results.append(data)
        return results

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _get_company(self, company_id: str) -> Company:
        company = self.session.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise NotFoundError("Company not found")
        return company

    def _request_query(self, request_id: str, for_update: bool = False):
        query = self.session.query(AccessRequest).filter(AccessRequest.id == request_id)
        if for_update:
            # Concurrent decisions queue on the row lock and then re-read the
            # committed status, so only the first one passes the terminal check.
            query = query.with_for_update(of=AccessRequest).populate_existing()
        return query

    def _get_request(self, request_id: str, for_update: bool = False) -> AccessRequest:
        """Get request by ID or raise error."""
        request = self._request_query(request_id, for_update).first()
        if not request:
            raise NotFoundError("Access request not found")
        return request

    def _request_to_dict(self, request: AccessRequest) -> dict:
        """Convert AccessRequest to dict."""
        return {
            "id": request.id,
            "requester_company_id": request.requester_company_id,
            "target_brand_id": request.target_brand_id,
            "status": request.status,
            "access_type": request.access_type,
            "message": request.message,
            "approved_at": request.approved_at.isoformat() if request.approved_at else None,
            "created_at": request.created_at.isoformat() if request.created_at else None,
        }
