"""
Brand visibility resolver.

Decides how much of a brand a viewer may see:

- Own brand                   -> full view, access_type FULL
- APPROVED request            -> full view, access_type from the request
- PENDING / DENIED request    -> limited view with that access_status
- No request (or anonymous)   -> limited view, access_status None

Every read path (own brand, detail, search, browse) goes through
resolve_view(). It is pure: it never queries or mutates anything beyond
reading the attributes of the objects it is handed.
"""

from typing import Iterable, Optional

from brandhub.models.access_request import AccessRequest, AccessType
from brandhub.models.asset import Asset, AssetCategory
from brandhub.models.brand import Brand


_CATEGORY_COUNT_KEYS = {
    AssetCategory.LOGO.value: "logos",
    AssetCategory.PRODUCT.value: "products",
    AssetCategory.CAMPAIGN.value: "campaigns",
}


def asset_counts(assets: Iterable[Asset]) -> dict:
    """Count assets in total and per category."""
    counts = {"total": 0, "logos": 0, "products": 0, "campaigns": 0}
    for asset in assets:
        counts["total"] += 1
        key = _CATEGORY_COUNT_KEYS.get(asset.category)
        if key:
            counts[key] += 1
    return counts


def asset_to_dict(asset: Asset) -> dict:
    return {
        "id": asset.id,
        "filename": asset.filename,
        "original_name": asset.original_name,
        "file_type": asset.file_type,
        "size": asset.size,
        "url": asset.url,
        "category": asset.category,
        "product_name": asset.product_name,
        "description": asset.description,
        "tags": list(asset.tags or []),
        "created_at": asset.created_at.isoformat() if asset.created_at else None,
    }


def _applicable_request(
    viewer_company_id: Optional[str],
    brand: Brand,
    access_request: Optional[AccessRequest],
) -> Optional[AccessRequest]:
    # A request for another viewer or brand never grants anything.
    if access_request is None or viewer_company_id is None:
        return None
    if access_request.requester_company_id != viewer_company_id:
        return None
    if access_request.target_brand_id != brand.id:
        return None
    return access_request


def has_full_access(
    viewer_company_id: Optional[str],
    brand: Brand,
    access_request: Optional[AccessRequest] = None,
) -> bool:
    if viewer_company_id is not None and brand.company_id == viewer_company_id:
        return True
    request = _applicable_request(viewer_company_id, brand, access_request)
    return request is not None and request.is_approved


def resolve_view(
    viewer_company_id: Optional[str],
    brand: Brand,
    access_request: Optional[AccessRequest] = None,
) -> dict:
    """
    Project a brand for a viewer.

    Args:
        viewer_company_id: Viewer's company, or None for anonymous viewers
        brand: Brand to project
        access_request: The viewer's request against this brand, if any

    Returns:
        Full or limited brand view
    """
    is_own_brand = viewer_company_id is not None and brand.company_id == viewer_company_id
    request = _applicable_request(viewer_company_id, brand, access_request)
    access_status = request.status if request is not None else None

    if is_own_brand:
        return _full_view(brand, is_own_brand=True, access_type=AccessType.FULL.value,
                          access_status=None)

    if request is not None and request.is_approved:
        return _full_view(brand, is_own_brand=False, access_type=request.access_type,
                          access_status=access_status)

    return _limited_view(brand, access_status)


def _full_view(brand: Brand, is_own_brand: bool, access_type: str,
               access_status: Optional[str]) -> dict:
    assets = list(brand.assets)
    return {
        "id": brand.id,
        "name": brand.name,
        "about": brand.about,
        "website": brand.website,
        "contact_info": brand.contact_info,
        "social_links": dict(brand.social_links or {}),
        "company": {
            "id": brand.company.id,
            "name": brand.company.name,
        },
        "assets": [asset_to_dict(a) for a in assets],
        "asset_counts": asset_counts(assets),
        "has_access": True,
        "is_own_brand": is_own_brand,
        "access_status": access_status,
        "access_type": access_type,
        "last_updated": brand.updated_at.isoformat() if brand.updated_at else None,
    }


def _limited_view(brand: Brand, access_status: Optional[str]) -> dict:
    return {
        "id": brand.id,
        "name": brand.name,
        "about": brand.about,
        "website": brand.website,
        "company": {
            "name": brand.company.name,
        },
        "has_access": False,
        "is_own_brand": False,
        "access_status": access_status,
    }
