"""Pydantic schemas for category endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    icon: Optional[str] = None
    color: Optional[str] = None
    parent_id: Optional[str] = None
    display_order: Optional[int] = None
    last_post_time: Optional[datetime] = None
    created_at: datetime

    model_config = {"from_attributes": True}
