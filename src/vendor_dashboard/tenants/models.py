"""SQLAlchemy model for marketplace configs (tenants)."""

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vendor_dashboard.common.models import Base, TimestampMixin, generate_uuid


class ConfigModel(Base, TimestampMixin):
    __tablename__ = "config"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    school_id: Mapped[str] = mapped_column(String(100), default="")
    school_name: Mapped[str] = mapped_column(String(255), nullable=False)
    site_name: Mapped[str] = mapped_column(String(255), default="")
    site_url: Mapped[str] = mapped_column(String(500), default="")
    base_url: Mapped[str] = mapped_column(String(500), default="")
    contact_email: Mapped[str] = mapped_column(String(255), default="")
    city_name: Mapped[str] = mapped_column(String(255), default="")
    state_abbreviated: Mapped[str] = mapped_column(String(8), default="")
    zip_code: Mapped[int | None] = mapped_column(Integer, nullable=True)
    approved_email_domains: Mapped[list] = mapped_column(JSON, default=list)
    is_scraping: Mapped[bool] = mapped_column(Boolean, default=False)
