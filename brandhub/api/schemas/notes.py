from typing import Optional

from pydantic import BaseModel


class CreateNoteRequest(BaseModel):
    brand_id: Optional[str] = None
    content: Optional[str] = None
