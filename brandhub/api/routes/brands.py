"""
Brand API Routes - own brand, detail, search and browse.

Every response shape comes from the brand visibility resolver: callers
see the full view only for their own brand or with an APPROVED request.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from brandhub.api.schemas.brands import QuickCreateBrandRequest, UpdateBrandRequest
from brandhub.auth.dependencies import get_current_principal, get_optional_principal
from brandhub.auth.principal import Principal
from brandhub.database.session import get_db_session
from brandhub.services.brand_service import BrandService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["brands"])


@router.get("/api/brands")
async def get_own_brand(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """The caller's own brand (full view)."""
    return {"brand": BrandService(db).get_own_brand(principal)}


@router.put("/api/brands")
async def update_own_brand(
    body: UpdateBrandRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """
    Update the caller's brand profile.

    Requires an ACTIVE subscription.
    """
    brand = BrandService(db).update_own_brand(
        principal,
        name=body.name,
        about=body.about,
        website=body.website,
        contact_info=body.contact_info,
        social_links=body.social_links,
    )
    db.commit()
    return {"brand": brand}


@router.get("/api/brands/browse")
async def browse_brands(
    principal: Optional[Principal] = Depends(get_optional_principal),
    db: Session = Depends(get_db_session),
):
    """Public directory listing; anonymous callers get limited views."""
    return {"brands": BrandService(db).browse(principal)}


@router.post("/api/brands/create", status_code=status.HTTP_201_CREATED)
async def quick_create_brand(
    body: QuickCreateBrandRequest,
    db: Session = Depends(get_db_session),
):
    """Create a company + brand listing without an account."""
    brand = BrandService(db).quick_create(
        brand_name=body.brand_name,
        company_name=body.company_name,
        about=body.about,
        website=body.website,
        contact_info=body.contact_info,
    )
    db.commit()
    return {"brand": brand}


@router.get("/api/brands/{brand_id}")
async def get_brand(
    brand_id: str,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """A brand as the caller's company may see it."""
    return {"brand": BrandService(db).get_brand_detail(principal, brand_id)}


@router.get("/api/search")
async def search_brands(
    q: Optional[str] = Query(None, description="Case-insensitive brand name filter"),
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db_session),
):
    """Search other companies' brands."""
    brands = BrandService(db).search(principal, q)
    return {"brands": brands, "total_count": len(brands)}
