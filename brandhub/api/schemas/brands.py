"""Request bodies for brand creation and profile updates."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class QuickCreateBrandRequest(BaseModel):
    """Directory listing without an account."""
    brand_name: Optional[str] = None
    company_name: Optional[str] = None
    about: Optional[str] = None
    website: Optional[str] = None
    contact_info: Optional[Dict[str, Any]] = None


class UpdateBrandRequest(BaseModel):
    """Replaces every editable field of the caller's brand."""
    name: Optional[str] = Field(None, description="Brand name (required)")
    about: Optional[str] = None
    website: Optional[str] = None
    contact_info: Optional[Dict[str, Any]] = None
    social_links: Optional[Dict[str, str]] = Field(
        None, description="Platform name -> profile URL"
    )
