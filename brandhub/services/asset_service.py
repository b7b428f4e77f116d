"""
Asset Store service.

Owns the catalog of a brand's media files; the bytes live in the blob
store. Uploads require an ACTIVE subscription and notify every company
holding an APPROVED access request on the brand.

Upload limits:
- MIME types: JPEG, PNG, SVG, WebP, PDF, PostScript (AI)
- Max size: 10 MiB
"""

import logging
import re
import time
from dataclasses import dataclass
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brandhub.auth.principal import Principal
from brandhub.entitlements.gate import UPLOAD_SUBSCRIPTION_REQUIRED_MESSAGE, require_write
from brandhub.errors import (
    AuthorizationError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from brandhub.integrations.s3_blob_store import BlobStore, DEFAULT_PRESIGN_TTL_SECONDS
from brandhub.models.access_request import AccessRequest, AccessRequestStatus
from brandhub.models.asset import Asset, AssetCategory
from brandhub.models.brand import Brand
from brandhub.models.company import Company
from brandhub.models.notification import NotificationType
from brandhub.services.brand_visibility import asset_to_dict, has_full_access
from brandhub.services.notification_service import (
    NotificationIntent,
    TransitionResult,
    intents_for_users,
)

logger = logging.getLogger(__name__)


ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/svg+xml",
    "image/webp",
    "application/pdf",
    "application/postscript",
})

MAX_FILE_SIZE = 10 * 1024 * 1024

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


@dataclass
class AssetUpload:
    """An uploaded file and its catalog metadata."""
    filename: Optional[str]
    content_type: Optional[str]
    data: Optional[bytes]
    category: Optional[str]
    description: Optional[str] = None
    tags: Optional[str] = None
    product_name: Optional[str] = None


def sanitize_filename(filename: str) -> str:
    """Replace every character outside [A-Za-z0-9.-] with an underscore."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename)


def build_file_key(
    company_id: str,
    category: str,
    filename: str,
    timestamp_ms: Optional[int] = None,
) -> str:
    """Blob key: {company}/{category}/{timestamp}-{sanitized name}."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{company_id}/{category.lower()}/{timestamp_ms}-{sanitize_filename(filename)}"


def parse_tags(raw: Optional[str]) -> List[str]:
    """Split comma-separated tags, trimming and dropping empties."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def new_assets_message(brand_name: str, count: int) -> str:
    if count > 1:
        return f'{count} new assets have been added to "{brand_name}"'
    return f'{count} new asset has been added to "{brand_name}"'


class AssetService:
    """Upload, delete and download assets for the caller's brand."""

    def __init__(self, session: Session, blob_store: BlobStore):
        self.session = session
        self.blob_store = blob_store

    def create(self, principal: Principal, upload: AssetUpload) -> TransitionResult:
        """
        Store a file and catalog it under the principal's brand.

        Returns:
            TransitionResult with the asset dict and NEW_ASSETS intents

        Raises:
            AuthorizationError: Subscription is not ACTIVE
            NotFoundError: The company has no brand
            ValidationError: Missing file/category, bad type or too large
            DependencyError: Blob store upload failed
        """
        company = self.session.query(Company).filter(Company.id == principal.company_id).first()
        if not company:
            raise NotFoundError("Company not found")

        require_write(company, "asset.create", UPLOAD_SUBSCRIPTION_REQUIRED_MESSAGE)

        brand = self.session.query(Brand).filter(Brand.company_id == company.id).first()
        if not brand:
            raise NotFoundError("Brand not found")

        self._validate(upload)

        category = upload.category.upper()
        file_key = build_file_key(company.id, category, upload.filename)
        url = self.blob_store.put(upload.data, file_key, upload.content_type)

        asset = Asset(
            filename=file_key,
            original_name=upload.filename,
            file_type=upload.content_type,
            size=len(upload.data),
            url=url,
            category=category,
            product_name=upload.product_name if category == AssetCategory.PRODUCT.value else None,
            description=upload.description or None,
            tags=parse_tags(upload.tags),
            brand=brand,
        )
        try:
            self.session.add(asset)
            self.session.flush()
        except SQLAlchemyError:
            self.discard_blob(file_key)
            raise

        intents = self._new_asset_intents(brand, 1)

        logger.info(
            "Asset uploaded",
            extra={
                "asset_id": asset.id,
                "brand_id": brand.id,
                "category": category,
                "size": asset.size,
                "user_id": principal.user_id,
                "notified": len(intents),
            },
        )

        return TransitionResult(result=asset_to_dict(asset), intents=intents)

    def delete(self, principal: Principal, asset_id: Optional[str]) -> None:
        """
        Delete an asset owned by the principal's company.

        The blob delete is best-effort; the catalog row is always removed.

        Raises:
            ValidationError: Missing asset id
            NotFoundError: Unknown asset
            AuthorizationError: Asset belongs to another company
        """
        if not asset_id:
            raise ValidationError("Asset ID required")

        asset = self._get_asset(asset_id)
        if asset.brand.company_id != principal.company_id:
            raise AuthorizationError("Not authorized")

        self.discard_blob(asset.filename)

        brand = asset.brand
        self.session.delete(asset)
        self.session.flush()
        self.session.expire(brand, ["assets"])

        logger.info(
            "Asset deleted",
            extra={"asset_id": asset_id, "user_id": principal.user_id},
        )

    def discard_blob(self, key: str) -> None:
        """Best-effort blob delete; a failure is logged and left for cleanup."""
        try:
            self.blob_store.delete(key)
        except DependencyError:
            logger.warning(
                "asset.blob_delete_failed",
                extra={"key": key},
                exc_info=True,
            )

    def download_url(
        self,
        principal: Principal,
        asset_id: str,
        ttl: int = DEFAULT_PRESIGN_TTL_SECONDS,
    ) -> dict:
        """
        Presigned download URL for an asset the viewer can fully see.

        Raises:
            NotFoundError: Unknown asset, or not visible to the viewer
        """
        asset = self._get_asset(asset_id)
        brand = asset.brand
        viewer_request = (
            self.session.query(AccessRequest)
            .filter(
                AccessRequest.requester_company_id == principal.company_id,
                AccessRequest.target_brand_id == brand.id,
                AccessRequest.status == AccessRequestStatus.APPROVED.value,
            )
            .first()
        )
        if not has_full_access(principal.company_id, brand, viewer_request):
            raise NotFoundError("Asset not found")

        return {
            "url": self.blob_store.presign(asset.filename, ttl),
            "expires_in": ttl,
        }

    # =========================================================================
    # Private helpers
    # =========================================================================

    def _validate(self, upload: AssetUpload) -> None:
        if not upload.data or not upload.filename or not upload.category:
            raise ValidationError("File and category are required")

        if upload.category.upper() not in {c.value for c in AssetCategory}:
            raise ValidationError(
                "Invalid category. Must be one of: LOGO, PRODUCT, CAMPAIGN"
            )

        if upload.content_type not in ALLOWED_MIME_TYPES:
            raise ValidationError("Invalid file type. Supported: JPG, PNG, SVG, PDF, AI")

        if len(upload.data) > MAX_FILE_SIZE:
            raise ValidationError("File size must be less than 10MB")

    def _get_asset(self, asset_id: str) -> Asset:
        asset = self.session.query(Asset).filter(Asset.id == asset_id).first()
        if not asset:
            raise NotFoundError("Asset not found")
        return asset

    def _new_asset_intents(self, brand: Brand, count: int) -> List[NotificationIntent]:
        """NEW_ASSETS intents for every user of every approved requester."""
        approved = (
            self.session.query(AccessRequest)
            .filter(
                AccessRequest.target_brand_id == brand.id,
                AccessRequest.status == AccessRequestStatus.APPROVED.value,
            )
            .all()
        )
        intents: List[NotificationIntent] = []
        for request in approved:
            intents.extend(intents_for_users(
                request.requester_company.users,
                NotificationType.NEW_ASSETS,
                title="New Assets Available",
                content=new_assets_message(brand.name, count),
            ))
        return intents
