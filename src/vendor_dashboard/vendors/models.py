"""SQLAlchemy model for approved vendors."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vendor_dashboard.common.models import Base, TimestampMixin, generate_uuid

VENDOR_STATUS_ACTIVE = "active"


class VendorModel(Base, TimestampMixin):
    __tablename__ = "approved_vendors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    # Identity-provider subject that owns this vendor profile.
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    allowed_categories: Mapped[list] = mapped_column(JSON, default=list)
    status: Mapped[str] = mapped_column(String(20), default="inactive", index=True)
    subscription_tier: Mapped[str] = mapped_column(String(50), default="basic")
    subscription_amount: Mapped[float] = mapped_column(Float, default=0.0)
    subscription_start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    subscription_expiry: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    config_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("config.id"), nullable=False, index=True
    )

    @property
    def is_active(self) -> bool:
        return self.status == VENDOR_STATUS_ACTIVE
