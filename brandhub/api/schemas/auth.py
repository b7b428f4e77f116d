"""Request bodies for signup and login."""

from typing import Optional

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """Register a company, its MASTER user and its brand."""
    email: Optional[str] = Field(None, description="Login email")
    password: Optional[str] = Field(None, description="Plain text password")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = Field(None, description="Also used as the initial brand name")


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
