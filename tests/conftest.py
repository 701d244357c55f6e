"""Shared test fixtures for Vendor-Dashboard."""

import os
from types import SimpleNamespace
from typing import Any, Callable, Union

import httpx
from httpx import ASGITransport, AsyncClient
import pytest

from vendor_dashboard.auth.tokens import mint_token
from vendor_dashboard.categories.models import CategoryModel
from vendor_dashboard.common.config import get_settings
from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.common.models import generate_uuid
from vendor_dashboard.tenants.models import ConfigModel
from vendor_dashboard.vendors.models import VendorModel


SIGNING_SECRET = "test-signing-secret-for-unit-tests-0123456789"
STORAGE_URL = "https://storage.test"
PRIVILEGED_KEY = "test-privileged-service-key"

USER_A = "6b1f8f0e-0000-4000-8000-00000000000a"
USER_B = "6b1f8f0e-0000-4000-8000-00000000000b"
USER_INACTIVE = "6b1f8f0e-0000-4000-8000-00000000000c"
USER_EMPTY = "6b1f8f0e-0000-4000-8000-00000000000d"
USER_UNLINKED = "6b1f8f0e-0000-4000-8000-00000000000e"


Responder = Union[tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeUpstream:
    """Routes outbound httpx calls by path suffix and records them."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Responder] = {
            "/functions/v1/delete-post": (200, {"success": True, "message": "Post deleted."}),
            "/functions/v1/upload-post-image": (200, {"url": "https://cdn.test/photo.jpg"}),
            "/auth/v1/token": (400, {"error": "invalid_grant"}),
            "/auth/v1/logout": (204, None),
        }

    def respond(self, path: str, responder: Responder) -> None:
        self.routes.pop(path, None)
        self.routes[path] = responder

    def calls(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(path)]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        # Most recently registered route wins.
        for path, responder in reversed(list(self.routes.items())):
            if request.url.path.endswith(path):
                if callable(responder):
                    return responder(request)
                status, body = responder
                if body is None:
                    return httpx.Response(status)
                return httpx.Response(status, json=body)
        return httpx.Response(404, json={"error": "no such function"})


@pytest.fixture
def settings():
    os.environ["VENDOR_STORAGE_URL"] = STORAGE_URL
    os.environ["VENDOR_PRIVILEGED_KEY"] = PRIVILEGED_KEY
    os.environ["VENDOR_TOKEN_SIGNING_SECRET"] = SIGNING_SECRET
    os.environ["VENDOR_DB_URL"] = "sqlite+aiosqlite://"

    # Clear caches and singletons so new env vars take effect
    get_settings.cache_clear()

    from vendor_dashboard.deps import reset_singletons
    reset_singletons()
    return get_settings()


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
async def upstream_http(upstream):
    http = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    yield http
    await http.aclose()


@pytest.fixture
async def db(settings):
    manager = DatabaseManager(settings)
    await manager.init()
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def token_for(settings):
    def _mint(subject: str, email: str = "", **kwargs) -> str:
        return mint_token(settings.token_signing_secret, subject, email=email, **kwargs)
    return _mint


@pytest.fixture
async def marketplace(db, token_for):
    """One school config, a small category tree and four vendors."""
    config = ConfigModel(id=generate_uuid(), school_name="State University")
    other_config = ConfigModel(id=generate_uuid(), school_name="Tech Institute")
    furniture = CategoryModel(id=generate_uuid(), name="Furniture", slug="furniture")
    electronics = CategoryModel(id=generate_uuid(), name="Electronics", slug="electronics")
    housing = CategoryModel(id=generate_uuid(), name="Housing", slug="housing")
    desks = CategoryModel(id=generate_uuid(), name="Desks", slug="desks", parent_id=furniture.id)
    phones = CategoryModel(id=generate_uuid(), name="Phones", slug="phones", parent_id=electronics.id)

    vendor = VendorModel(
        id=generate_uuid(), user_id=USER_A, email="sales@campusdesks.test",
        company_name="Campus Desks", status="active", config_id=config.id,
        allowed_categories=[furniture.id, desks.id, electronics.id, phones.id],
    )
    rival = VendorModel(
        id=generate_uuid(), user_id=USER_B, email="hello@dormdeals.test",
        company_name="Dorm Deals", status="active", config_id=config.id,
        allowed_categories=[furniture.id, desks.id],
    )
    inactive = VendorModel(
        id=generate_uuid(), user_id=USER_INACTIVE, email="old@closed.test",
        company_name="Closed Shop", status="inactive", config_id=config.id,
        allowed_categories=[furniture.id],
    )
    empty = VendorModel(
        id=generate_uuid(), user_id=USER_EMPTY, email="new@pending.test",
        company_name="New Vendor", status="active", config_id=config.id,
        allowed_categories=[],
    )

    async with db.get_session() as session:
        session.add_all([config, other_config, furniture, electronics, housing])
        await session.flush()
        session.add_all([desks, phones, vendor, rival, inactive, empty])

    return SimpleNamespace(
        config=config,
        other_config=other_config,
        furniture=furniture,
        electronics=electronics,
        housing=housing,
        desks=desks,
        phones=phones,
        vendor=vendor,
        rival=rival,
        inactive=inactive,
        empty=empty,
        token=token_for(USER_A, "sales@campusdesks.test"),
        rival_token=token_for(USER_B, "hello@dormdeals.test"),
        inactive_token=token_for(USER_INACTIVE, "old@closed.test"),
        empty_token=token_for(USER_EMPTY, "new@pending.test"),
        unlinked_token=token_for(USER_UNLINKED, "nobody@nowhere.test"),
    )


@pytest.fixture
def bearer():
    def _headers(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def app(settings, db, upstream_http):
    """Test app sharing the ``db`` fixture and routing outbound HTTP to ``upstream``."""
    from vendor_dashboard.app import create_app
    from vendor_dashboard.auth.identity import IdentityProviderClient
    from vendor_dashboard.auth.service import AuthService
    from vendor_dashboard.categories.service import CategoryAccessFilter
    from vendor_dashboard.deps import (
        get_auth_service,
        get_db,
        get_image_proxy,
        get_post_service,
        get_token_verifier,
        get_vendor_resolver,
    )
    from vendor_dashboard.media.edge_functions import EdgeFunctionClient
    from vendor_dashboard.media.service import ImageAttachmentProxy
    from vendor_dashboard.posts.service import PostService

    app = create_app()

    functions = EdgeFunctionClient(settings.functions_url, settings.privileged_key, upstream_http)
    identity = IdentityProviderClient(settings.auth_url, settings.public_key, upstream_http)
    auth = AuthService(get_token_verifier(), get_vendor_resolver(), identity=identity)
    posts = PostService(settings, CategoryAccessFilter(), functions=functions)
    proxy = ImageAttachmentProxy(functions)

    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_auth_service] = lambda: auth
    app.dependency_overrides[get_post_service] = lambda: posts
    app.dependency_overrides[get_image_proxy] = lambda: proxy
    return app


@pytest.fixture
async def client(app):
    # ASGITransport doesn't run lifespan; the db fixture is already initialised
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
