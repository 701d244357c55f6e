"""Async storage access for the vendor dashboard.

One engine serves every request. It connects with the service's own
database role, so reads are not subject to the row-level policies applied
to end-user sessions; ownership is enforced in the post service instead.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vendor_dashboard.common.config import VendorSettings, get_settings
from vendor_dashboard.common.models import Base

# Register the dashboard tables on Base.metadata before create_all().
import vendor_dashboard.tenants.models  # noqa: F401
import vendor_dashboard.vendors.models  # noqa: F401
import vendor_dashboard.categories.models  # noqa: F401
import vendor_dashboard.posts.models  # noqa: F401

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict[str, Any]:
    # Hosted Postgres drops idle connections; SQLite has no server to lose.
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    return {"pool_pre_ping": True}


def _enforce_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Vendors must point at a real config and subcategories at a real parent."""

    @event.listens_for(engine.sync_engine, "connect")
    def set_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Owns the engine and hands out one transactional session per request."""

    def __init__(self, settings: VendorSettings | None = None):
        self._settings = settings or get_settings()
        self.engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def backend(self) -> str:
        return make_url(self._settings.db_url).get_backend_name()

    async def init(self) -> None:
        if self.engine is not None:
            return
        url = self._settings.db_url
        self.engine = create_async_engine(url, echo=False, **_engine_options(url))
        if self.backend == "sqlite":
            _enforce_sqlite_foreign_keys(self.engine)
        self._session_factory = async_sessionmaker(
            self.engine, expire_on_commit=False
        )
        logger.info("Storage engine ready (%s)", self.backend)

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Storage not initialized; call init() first")
        return self.engine

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Commit on success, roll back on any exception and re-raise it."""
        self._require_engine()
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        async with self._require_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """True when the storage backend answers a trivial query."""
        try:
            async with self._require_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Storage ping failed: %s", e)
            return False
        return True

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self._session_factory = None
