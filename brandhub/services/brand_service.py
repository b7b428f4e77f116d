"""
Brand service: profile edits and every brand read path.

All reads go through BrandRepository (brand + viewer's access request)
and then brand_visibility.resolve_view(), so field filtering lives in
exactly one place.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from brandhub.auth.principal import Principal
from brandhub.entitlements.gate import require_write
from brandhub.errors import NotFoundError, ValidationError
from brandhub.models.brand import Brand
from brandhub.models.company import Company, SubscriptionStatus
from brandhub.models.note import Note
from brandhub.repositories.brand_repository import BrandRepository
from brandhub.services.brand_visibility import resolve_view
from brandhub.services.note_service import note_to_dict

logger = logging.getLogger(__name__)


class BrandService:
    """Own-brand management plus detail, search and browse views."""

    def __init__(self, session: Session):
        self.session = session
        self.repository = BrandRepository(session)

    def get_own_brand(self, principal: Principal) -> dict:
        """Full view of the principal's own brand, with subscription status."""
        brand = self.repository.get_by_company(principal.company_id)
        if not brand:
            raise NotFoundError("Brand not found")
        view = resolve_view(principal.company_id, brand)
        view["company"]["subscription_status"] = brand.company.subscription_status
        return view

    def update_own_brand(
        self,
        principal: Principal,
        name: Optional[str],
        about: Optional[str] = None,
        website: Optional[str] = None,
        contact_info: Optional[Dict[str, Any]] = None,
        social_links: Optional[Dict[str, str]] = None,
    ) -> dict:
        """
        Replace the editable fields of the principal's brand.

        Raises:
            ValidationError: Missing name
            AuthorizationError: Subscription is not ACTIVE
            NotFoundError: Company has no brand
        """
        if not name or not name.strip():
            raise ValidationError("Brand name is required")

        brand = self.repository.get_by_company(principal.company_id)
        if not brand:
            raise NotFoundError("Brand not found")

        require_write(brand.company, "brand.update")

        brand.name = name.strip()
        brand.about = about
        brand.website = website
        brand.contact_info = contact_info
        brand.social_links = social_links or {}
        self.session.flush()

        logger.info(
            "Brand updated",
            extra={"brand_id": brand.id, "user_id": principal.user_id},
        )

        return self.get_own_brand(principal)

    def get_brand_detail(self, principal: Principal, brand_id: str) -> dict:
        """
        Brand as the principal's company may see it.

        Full views also carry the viewer company's private notes.
        """
        found = self.repository.get_brand_with_access_requests(brand_id, principal.company_id)
        if found is None:
            raise NotFoundError("Brand not found")

        view = resolve_view(principal.company_id, found.brand, found.viewer_request)
        if view["has_access"]:
            notes = (
                self.session.query(Note)
                .filter(
                    Note.brand_id == found.brand.id,
                    Note.company_id == principal.company_id,
                )
                .order_by(Note.created_at.desc())
                .all()
            )
            view["notes"] = [note_to_dict(n) for n in notes]
        return view

    def search(self, principal: Principal, query: Optional[str] = None) -> List[dict]:
        """Other companies' brands matching the query, as resolved views."""
        results = self.repository.search(principal.company_id, (query or "").strip() or None)
        return [
            resolve_view(principal.company_id, r.brand, r.viewer_request)
            for r in results
        ]

    def browse(self, principal: Optional[Principal] = None) -> List[dict]:
        """Every brand; anonymous viewers only get limited views."""
        viewer_company_id = principal.company_id if principal else None
        return [
            resolve_view(viewer_company_id, r.brand, r.viewer_request)
            for r in self.repository.browse(viewer_company_id)
        ]

    def quick_create(
        self,
        brand_name: Optional[str],
        company_name: Optional[str],
        about: Optional[str] = None,
        website: Optional[str] = None,
        contact_info: Optional[Dict[str, Any]] = None,
    ) -> dict:
        """
        Create a company and its brand without an account (directory listing).

        The company starts UNPAID and has no users.
        """
        if not brand_name or not company_name:
            raise ValidationError("Brand name and company name are required")

        company = Company(
            name=company_name.strip(),
            subscription_status=SubscriptionStatus.UNPAID.value,
        )
        brand = Brand(
            name=brand_name.strip(),
            about=about,
            website=website,
            contact_info=contact_info,
            social_links={},
            company=company,
        )
        self.session.add_all([company, brand])
        self.session.flush()

        logger.info(
            "Brand created without account",
            extra={"brand_id": brand.id, "company_id": company.id},
        )

        return {
            "id": brand.id,
            "name": brand.name,
            "about": brand.about,
            "website": brand.website,
            "contact_info": brand.contact_info,
            "company": {"id": company.id, "name": company.name},
        }
