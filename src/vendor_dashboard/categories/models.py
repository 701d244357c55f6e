"""SQLAlchemy model for the global category tree."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vendor_dashboard.common.models import Base, TimestampMixin, generate_uuid


class CategoryModel(Base, TimestampMixin):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    icon: Mapped[str | None] = mapped_column(String(100), nullable=True)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)
    # NULL for top-level categories; subcategories point at their parent.
    parent_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.id"), nullable=True, index=True
    )
    display_order: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_post_time: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
