"""Request bodies for the access request workflow."""

from typing import Optional

from pydantic import BaseModel, Field


class CreateAccessRequestBody(BaseModel):
    """Request access to another company's brand."""
    brand_id: Optional[str] = Field(None, description="Target brand ID")
    access_type: Optional[str] = Field(None, description="FULL (default) or LIMITED")
    message: Optional[str] = Field(None, description="Optional note for the brand owner")


class UpdateAccessRequestBody(BaseModel):
    """Approve or deny a received request."""
    request_id: Optional[str] = None
    status: Optional[str] = Field(None, description="APPROVED or DENIED")
