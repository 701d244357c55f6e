"""Pydantic schemas for vendor profiles."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class VendorResponse(BaseModel):
    id: str
    email: str
    company_name: str
    contact_name: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    allowed_categories: list[str]
    status: str
    subscription_tier: str
    subscription_amount: float
    subscription_start_date: Optional[datetime] = None
    subscription_expiry: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    config_id: str

    model_config = {"from_attributes": True}
