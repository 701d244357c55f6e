"""Pydantic schemas for post endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PostDraft(BaseModel):
    """Vendor-supplied fields for a new post.

    Server-controlled fields (status, timestamps, ids, tokens, photo_urls,
    provenance flags) are ignored if a client sends them.
    """
    title: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    category_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    subcategory_id: Optional[str] = None
    email: Optional[str] = None
    company_name: Optional[str] = None
    is_featured: bool = False
    has_photo: bool = False
    condition: Optional[str] = None
    brand: Optional[str] = None
    dimensions: Optional[str] = None
    location: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    square_feet: Optional[int] = None
    job_type: Optional[str] = None
    compensation: Optional[str] = None


class PostCreateRequest(BaseModel):
    post_data: PostDraft


class PostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    photo_urls: Optional[list[str]] = None
    has_photo: Optional[bool] = None
    # Accepted only so they can be rejected explicitly.
    category_id: Optional[str] = None
    subcategory_id: Optional[str] = None


class PostResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    price: Optional[float] = None
    category_id: str
    subcategory_id: Optional[str] = None
    email: str
    status: str
    is_featured: bool
    has_photo: bool
    photo_urls: list[str]
    edit_token: str
    edit_token_expires_at: datetime
    vendor_id: Optional[str] = None
    is_vendor_post: bool
    condition: Optional[str] = None
    brand: Optional[str] = None
    dimensions: Optional[str] = None
    location: Optional[str] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    square_feet: Optional[int] = None
    job_type: Optional[str] = None
    compensation: Optional[str] = None
    company_name: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    published_at: datetime
    expires_at: datetime
    config_id: str
    is_scraped: bool
    scraped_url: Optional[str] = None

    model_config = {"from_attributes": True}


class PostCreatedResponse(BaseModel):
    """Returned by create and repost; the edit token is needed for uploads."""
    message: str
    post_id: str = Field(..., alias="postId")
    edit_token: str = Field(..., alias="editToken")

    model_config = {"populate_by_name": True}


class PhotoResultResponse(BaseModel):
    filename: str
    ok: bool
    status_code: int
    url: Optional[str] = None
    error: Optional[str] = None

    model_config = {"from_attributes": True}


class PhotoBatchResponse(BaseModel):
    post_id: str
    uploaded: int
    failed: int
    results: list[PhotoResultResponse]
