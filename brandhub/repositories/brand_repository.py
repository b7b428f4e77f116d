"""
Brand repository.

Loads brands together with the viewing company's access request, which
is all the visibility resolver needs to project them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from sqlalchemy.orm import Session, selectinload

from brandhub.models.access_request import AccessRequest
from brandhub.models.brand import Brand

logger = logging.getLogger(__name__)


@dataclass
class BrandWithAccess:
    """A brand and the viewer's request against it (None if there is none)."""
    brand: Brand
    viewer_request: Optional[AccessRequest] = None


class BrandRepository:
    """Read accessors for brands, scoped to a viewing company."""

    SEARCH_LIMIT = 50

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def get_by_id(self, brand_id: str) -> Optional[Brand]:
        return self.db_session.query(Brand).filter(Brand.id == brand_id).first()

    def get_by_company(self, company_id: str) -> Optional[Brand]:
        return (
            self.db_session.query(Brand)
            .options(selectinload(Brand.assets))
            .filter(Brand.company_id == company_id)
            .first()
        )

    def get_brand_with_access_requests(
        self,
        brand_id: str,
        viewer_company_id: Optional[str],
    ) -> Optional[BrandWithAccess]:
        """
        Load a brand and the viewer company's access request for it.

        Args:
            brand_id: Brand to load
            viewer_company_id: Viewing company, or None for anonymous viewers

        Returns:
            BrandWithAccess, or None if the brand does not exist
        """
        brand = self.get_by_id(brand_id)
        if brand is None:
            return None
        requests = self._viewer_requests(viewer_company_id, [brand.id])
        return BrandWithAccess(brand=brand, viewer_request=requests.get(brand.id))

    def search(
        self,
        viewer_company_id: str,
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[BrandWithAccess]:
        """
        Brands other than the viewer's own, most recently updated first.

        Args:
            viewer_company_id: Viewing company (its own brand is excluded)
            query: Case-insensitive substring of the brand name
            limit: Maximum results (default 50)
        """
        q = (
            self.db_session.query(Brand)
            .options(selectinload(Brand.assets))
            .filter(Brand.company_id != viewer_company_id)
        )
        if query:
            q = q.filter(Brand.name.ilike(f"%{query}%"))

        brands = q.order_by(Brand.updated_at.desc()).limit(limit or self.SEARCH_LIMIT).all()
        return self._with_access(viewer_company_id, brands)

    def browse(self, viewer_company_id: Optional[str] = None) -> List[BrandWithAccess]:
        """All brands, newest first."""
        brands = (
            self.db_session.query(Brand)
            .options(selectinload(Brand.assets))
            .order_by(Brand.created_at.desc())
            .all()
        )
        return self._with_access(viewer_company_id, brands)

    def _with_access(
        self,
        viewer_company_id: Optional[str],
        brands: Sequence[Brand],
    ) -> List[BrandWithAccess]:
        requests = self._viewer_requests(viewer_company_id, [b.id for b in brands])
        return [BrandWithAccess(brand=b, viewer_request=requests.get(b.id)) for b in brands]

    def _viewer_requests(
        self,
        viewer_company_id: Optional[str],
        brand_ids: Sequence[str],
    ) -> Dict[str, AccessRequest]:
        """Viewer's access requests keyed by target brand id."""
        if viewer_company_id is None or not brand_ids:
            return {}
        rows = (
            self.db_session.query(AccessRequest)
            .filter(
                AccessRequest.requester_company_id == viewer_company_id,
                AccessRequest.target_brand_id.in_(list(brand_ids)),
            )
            .all()
        )
        return {r.target_brand_id: r for r in rows}
