from typing import Optional

from pydantic import BaseModel, Field


class BillingActionRequest(BaseModel):
    """create-checkout or create-portal."""
    action: Optional[str] = Field(None, description="create-checkout or create-portal")
    additional_users: Optional[int] = Field(0, description="Extra seats beyond the base plan")
