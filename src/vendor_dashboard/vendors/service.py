"""Vendor resolution: identity-provider subject -> active vendor record."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_dashboard.common.exceptions import NotActiveVendorError, UpstreamError
from vendor_dashboard.vendors.models import VendorModel

logger = logging.getLogger(__name__)


class VendorResolver:
    """Looks up the single vendor linked to a subject and checks it is active.

    A missing link, an ambiguous link and an inactive account all raise the
    same ``NotActiveVendorError``; the reason is only logged.
    """

    async def find_by_subject(
        self, session: AsyncSession, subject: str
    ) -> list[VendorModel]:
        try:
            result = await session.execute(
                select(VendorModel).where(VendorModel.user_id == subject).limit(2)
            )
        except SQLAlchemyError:
            logger.exception("Vendor lookup failed")
            raise UpstreamError("Failed to look up vendor.", status_code=500, code="INTERNAL")
        return list(result.scalars().all())

    async def resolve(self, session: AsyncSession, subject: str) -> VendorModel:
        if not subject:
            logger.warning("Vendor lookup rejected: empty subject")
            raise NotActiveVendorError()

        matches = await self.find_by_subject(session, subject)
        if len(matches) != 1:
            logger.warning(
                "Vendor lookup failed: %d vendor(s) linked to subject", len(matches)
            )
            raise NotActiveVendorError()

        vendor = matches[0]
        if not vendor.is_active:
            logger.warning(
                "Vendor lookup failed: status %r", vendor.status,
                extra={"vendor_id": vendor.id},
            )
            raise NotActiveVendorError()
        return vendor
