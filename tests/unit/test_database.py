"""Tests for the storage manager."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from vendor_dashboard.categories.models import CategoryModel
from vendor_dashboard.common.database import DatabaseManager, _engine_options
from vendor_dashboard.common.models import generate_uuid
from vendor_dashboard.vendors.models import VendorModel


class TestEngineOptions:
    def test_sqlite_has_no_pre_ping(self):
        assert _engine_options("sqlite+aiosqlite://") == {}

    def test_server_backend_pre_pings(self):
        assert _engine_options("postgresql+asyncpg://u:p@db/app") == {"pool_pre_ping": True}


class TestLifecycle:
    async def test_session_before_init(self, settings):
        manager = DatabaseManager(settings)
        with pytest.raises(RuntimeError):
            async with manager.get_session():
                pass

    async def test_init_is_idempotent(self, db):
        engine = db.engine
        await db.init()
        assert db.engine is engine

    async def test_ping(self, db, settings):
        assert await db.ping() is True
        assert await DatabaseManager(settings).ping() is False

    async def test_close_releases_engine(self, settings):
        manager = DatabaseManager(settings)
        await manager.init()
        await manager.close()
        assert manager.engine is None
        assert await manager.ping() is False


class TestForeignKeys:
    async def test_vendor_requires_existing_config(self, db):
        with pytest.raises(IntegrityError):
            async with db.get_session() as session:
                session.add(VendorModel(
                    id=generate_uuid(), user_id=generate_uuid(), email="x@y.test",
                    company_name="Orphan", status="active", config_id=generate_uuid(),
                    allowed_categories=[],
                ))

    async def test_subcategory_requires_existing_parent(self, db):
        with pytest.raises(IntegrityError):
            async with db.get_session() as session:
                session.add(CategoryModel(
                    id=generate_uuid(), name="Lamps", slug="lamps", parent_id=generate_uuid(),
                ))

    async def test_failed_session_rolls_back(self, db, marketplace):
        with pytest.raises(IntegrityError):
            async with db.get_session() as session:
                session.add(CategoryModel(id=generate_uuid(), name="Rugs", slug="rugs"))
                session.add(CategoryModel(
                    id=generate_uuid(), name="Lamps", slug="lamps", parent_id=generate_uuid(),
                ))
        async with db.get_session() as session:
            slugs = (await session.execute(select(CategoryModel.slug))).scalars().all()
        assert "rugs" not in slugs
        assert "furniture" in slugs
