"""Dependency injection for Vendor-Dashboard.

Components are built explicitly from ``VendorSettings`` on first use and
handed to each other through constructors. Route handlers receive them via
``Depends``, so tests can swap any of them with ``app.dependency_overrides``.
"""

import httpx

from vendor_dashboard.auth.identity import IdentityProviderClient
from vendor_dashboard.auth.service import AuthService
from vendor_dashboard.auth.tokens import TokenVerifier
from vendor_dashboard.categories.service import CategoryAccessFilter
from vendor_dashboard.common.config import get_settings
from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.media.edge_functions import EdgeFunctionClient
from vendor_dashboard.media.service import ImageAttachmentProxy
from vendor_dashboard.posts.service import PostService
from vendor_dashboard.tenants.service import TenantService
from vendor_dashboard.vendors.service import VendorResolver

_db: DatabaseManager | None = None
_http: httpx.AsyncClient | None = None
_verifier: TokenVerifier | None = None
_resolver: VendorResolver | None = None
_identity: IdentityProviderClient | None = None
_auth: AuthService | None = None
_categories: CategoryAccessFilter | None = None
_tenants: TenantService | None = None
_functions: EdgeFunctionClient | None = None
_posts: PostService | None = None
_media: ImageAttachmentProxy | None = None


def get_db() -> DatabaseManager:
    global _db
    if _db is None:
        _db = DatabaseManager(get_settings())
    return _db


def get_http_client() -> httpx.AsyncClient:
    global _http
    if _http is None:
        _http = httpx.AsyncClient(timeout=get_settings().http_timeout)
    return _http


def get_token_verifier() -> TokenVerifier:
    global _verifier
    if _verifier is None:
        settings = get_settings()
        _verifier = TokenVerifier(
            settings.token_signing_secret,
            algorithms=settings.token_algorithms,
            audience=settings.token_audience,
            leeway=settings.token_leeway_seconds,
        )
    return _verifier


def get_vendor_resolver() -> VendorResolver:
    global _resolver
    if _resolver is None:
        _resolver = VendorResolver()
    return _resolver


def get_identity_client() -> IdentityProviderClient:
    global _identity
    if _identity is None:
        settings = get_settings()
        _identity = IdentityProviderClient(
            settings.auth_url, settings.public_key, get_http_client()
        )
    return _identity


def get_auth_service() -> AuthService:
    global _auth
    if _auth is None:
        _auth = AuthService(
            get_token_verifier(),
            get_vendor_resolver(),
            identity=get_identity_client(),
        )
    return _auth


def get_category_filter() -> CategoryAccessFilter:
    global _categories
    if _categories is None:
        _categories = CategoryAccessFilter()
    return _categories


def get_tenant_service() -> TenantService:
    global _tenants
    if _tenants is None:
        _tenants = TenantService()
    return _tenants


def get_edge_functions() -> EdgeFunctionClient:
    global _functions
    if _functions is None:
        settings = get_settings()
        _functions = EdgeFunctionClient(
            settings.functions_url,
            settings.privileged_key,
            get_http_client(),
            upload_function=settings.upload_function,
            delete_function=settings.delete_function,
        )
    return _functions


def get_post_service() -> PostService:
    global _posts
    if _posts is None:
        _posts = PostService(
            get_settings(),
            get_category_filter(),
            functions=get_edge_functions(),
        )
    return _posts


def get_image_proxy() -> ImageAttachmentProxy:
    global _media
    if _media is None:
        _media = ImageAttachmentProxy(get_edge_functions())
    return _media


async def close_http_client() -> None:
    global _http
    if _http is not None:
        await _http.aclose()
        _http = None


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _db, _http, _verifier, _resolver, _identity, _auth
    global _categories, _tenants, _functions, _posts, _media
    _db = None
    _http = None
    _verifier = None
    _resolver = None
    _identity = None
    _auth = None
    _categories = None
    _tenants = None
    _functions = None
    _posts = None
    _media = None
