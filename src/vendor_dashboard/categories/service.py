"""Category access filtering against a vendor's allowed set."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_dashboard.categories.models import CategoryModel
from vendor_dashboard.common.exceptions import (
    CategoryNotAllowedError,
    InvalidSubcategoryError,
    UpstreamError,
)
from vendor_dashboard.vendors.models import VendorModel

logger = logging.getLogger(__name__)


def is_category_allowed(vendor: VendorModel, category_id: Optional[str]) -> bool:
    return bool(category_id) and category_id in (vendor.allowed_categories or [])


class CategoryAccessFilter:
    """Restricts category listing and assignment to ``vendor.allowed_categories``."""

    async def list_allowed(
        self, session: AsyncSession, vendor: VendorModel
    ) -> list[CategoryModel]:
        """Allowed categories ordered by name. Empty allowed set -> empty list."""
        allowed = list(vendor.allowed_categories or [])
        if not allowed:
            return []
        try:
            result = await session.execute(
                select(CategoryModel)
                .where(CategoryModel.id.in_(allowed))
                .order_by(CategoryModel.name.asc())
            )
        except SQLAlchemyError:
            logger.exception("Error fetching categories", extra={"vendor_id": vendor.id})
            raise UpstreamError("Failed to fetch categories.", status_code=500, code="INTERNAL")
        return list(result.scalars().all())

    def ensure_allowed(self, vendor: VendorModel, category_id: Optional[str]) -> None:
        if not is_category_allowed(vendor, category_id):
            raise CategoryNotAllowedError()

    async def ensure_subcategory(
        self, session: AsyncSession, category_id: str, subcategory_id: str
    ) -> None:
        """Check that ``subcategory_id`` is a direct child of ``category_id``."""
        try:
            sub = await session.get(CategoryModel, subcategory_id)
        except SQLAlchemyError:
            logger.exception("Error fetching subcategory %s", subcategory_id)
            raise UpstreamError("Failed to fetch categories.", status_code=500, code="INTERNAL")
        if sub is None or sub.parent_id != category_id:
            raise InvalidSubcategoryError()
