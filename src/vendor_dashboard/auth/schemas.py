"""Pydantic schemas for token issuance."""

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_email: str
    vendor_id: str

    model_config = {"from_attributes": True}
