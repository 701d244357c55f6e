"""SQLAlchemy model for listings (posts)."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vendor_dashboard.common.models import Base, TimestampMixin, generate_uuid

POST_STATUS_PENDING = "pending"
POST_STATUS_VERIFIED = "verified"


class PostModel(Base, TimestampMixin):
    __tablename__ = "posts"
    __table_args__ = (
        Index("ix_posts_vendor_config_created", "vendor_id", "config_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    category_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    subcategory_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    email: Mapped[str] = mapped_column(String(255), default="")
    status: Mapped[str] = mapped_column(String(20), default=POST_STATUS_PENDING, index=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    has_photo: Mapped[bool] = mapped_column(Boolean, default=False)
    photo_urls: Mapped[list] = mapped_column(JSON, default=list)

    edit_token: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    edit_token_expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    vendor_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    is_vendor_post: Mapped[bool] = mapped_column(Boolean, default=False)
    config_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    condition: Mapped[str | None] = mapped_column(String(50), nullable=True)
    brand: Mapped[str | None] = mapped_column(String(255), nullable=True)
    dimensions: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bedrooms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bathrooms: Mapped[float | None] = mapped_column(Float, nullable=True)
    square_feet: Mapped[int | None] = mapped_column(Integer, nullable=True)
    job_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    compensation: Mapped[str | None] = mapped_column(String(255), nullable=True)
    company_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    published_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    is_scraped: Mapped[bool] = mapped_column(Boolean, default=False)
    scraped_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
