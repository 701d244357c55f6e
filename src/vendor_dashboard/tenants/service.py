"""Marketplace config lookups."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vendor_dashboard.common.exceptions import ConfigNotFoundError, UpstreamError
from vendor_dashboard.tenants.models import ConfigModel

logger = logging.getLogger(__name__)


class TenantService:
    """Read-only access to marketplace configs."""

    async def get_by_id(
        self, session: AsyncSession, config_id: str
    ) -> ConfigModel | None:
        try:
            result = await session.execute(
                select(ConfigModel).where(ConfigModel.id == config_id)
            )
        except SQLAlchemyError:
            logger.exception("Error fetching config %s", config_id)
            raise UpstreamError("Failed to fetch configuration.", status_code=500, code="INTERNAL")
        return result.scalar_one_or_none()

    async def get_display(self, session: AsyncSession, config_id: str) -> ConfigModel:
        """Return the config or raise ConfigNotFoundError."""
        config = await self.get_by_id(session, config_id)
        if config is None:
            raise ConfigNotFoundError()
        return config
