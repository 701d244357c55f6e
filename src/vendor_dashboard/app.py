"""FastAPI application factory for Vendor-Dashboard."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from vendor_dashboard.common.config import get_settings
from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.common.exceptions import VendorDashboardError
from vendor_dashboard.common.logging import setup_logging
from vendor_dashboard.common.schemas import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)


def _error(status_code: int, detail: str, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=detail, code=code).model_dump(),
    )


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        from vendor_dashboard.deps import close_http_client, get_db
        db = get_db()
        await db.init()
        await db.create_all()
        yield
        # Shutdown
        await close_http_client()
        await db.close()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(VendorDashboardError)
    async def handle_vendor_error(request: Request, exc: VendorDashboardError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message, exc.code)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) for err in exc.errors()})
        fields = [f for f in fields if f]
        detail = "Missing or invalid fields: " + ", ".join(fields) if fields else "Invalid request body."
        return _error(400, detail, "INVALID")

    @app.exception_handler(SQLAlchemyError)
    async def handle_storage_error(request: Request, exc: SQLAlchemyError):
        logger.error("%s %s storage failure", request.method, request.url.path, exc_info=exc)
        return _error(500, "Internal server error.", "INTERNAL")

    from vendor_dashboard.deps import get_db

    @app.get("/health", response_model=HealthResponse)
    async def health(db: DatabaseManager = Depends(get_db)):
        if await db.ping():
            return HealthResponse(version=settings.api_version)
        return HealthResponse(status="degraded", version=settings.api_version, database="unreachable")

    # Mount routers
    from vendor_dashboard.auth.router import router as auth_router
    from vendor_dashboard.categories.router import router as categories_router
    from vendor_dashboard.tenants.router import router as tenants_router
    from vendor_dashboard.posts.router import router as posts_router
    from vendor_dashboard.media.router import router as media_router

    prefix = settings.api_prefix
    app.include_router(auth_router, prefix=prefix, tags=["auth"])
    app.include_router(categories_router, prefix=prefix, tags=["categories"])
    app.include_router(tenants_router, prefix=prefix, tags=["config"])
    app.include_router(posts_router, prefix=prefix, tags=["posts"])
    app.include_router(media_router, prefix=prefix, tags=["media"])

    return app
