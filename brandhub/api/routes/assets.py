"""
Asset API Routes - upload, delete and download brand assets.

Uploads require an ACTIVE subscription and notify companies with
approved access to the brand.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from brandhub.auth.dependencies import get_current_principal
from brandhub.auth.principal import Principal
from brandhub.database.session import get_db_session
from brandhub.integrations.s3_blob_store import BlobStore, get_blob_store
from brandhub.services.asset_service import MAX_FILE_SIZE, AssetService, AssetUpload
from brandhub.services.notification_service import NotificationDispatcher

logger = logging.getLogger(__name__)

router = APIRouter(tags=["assets"])


@router.post("/api/upload", status_code=status.HTTP_201_CREATED)
async def upload_asset(
    file: Optional[UploadFile] = File(None),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    tags: Optional[str] = Form(None, description="Comma-separated tags"),
    product_name: Optional[str] = Form(None, description="Only used for PRODUCT assets"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Upload a file to the caller's brand library."""
    upload = AssetUpload(
        filename=file.filename if file else None,
        content_type=file.content_type if file else None,
        data=await file.read(MAX_FILE_SIZE + 1) if file else None,
        category=category,
        description=description,
        tags=tags,
        product_name=product_name,
    )

    service = AssetService(db, blob_store)
    outcome = service.create(principal, upload)
    try:
        db.commit()
    except SQLAlchemyError:
        service.discard_blob(outcome.result["filename"])
        raise
    NotificationDispatcher(db).dispatch(outcome.intents)

    return {"asset": outcome.result}


@router.delete("/api/assets/{asset_id}")
async def delete_asset(
    asset_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Delete an asset of the caller's brand."""
    AssetService(db, blob_store).delete(principal, asset_id)
    db.commit()
    return {"success": True}


@router.get("/api/assets/{asset_id}/download")
async def download_asset(
    asset_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
    blob_store: BlobStore = Depends(get_blob_store),
):
    """Short-lived download link for an asset visible to the caller."""
    return AssetService(db, blob_store).download_url(principal, asset_id)
