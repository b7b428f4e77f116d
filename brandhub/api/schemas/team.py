from typing import Optional

from pydantic import BaseModel


class AddTeamMemberRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
