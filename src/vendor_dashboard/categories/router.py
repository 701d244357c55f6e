"""Category API router."""

from fastapi import APIRouter, Depends

from vendor_dashboard.auth.service import AuthenticatedVendor
from vendor_dashboard.categories.schemas import CategoryResponse
from vendor_dashboard.categories.service import CategoryAccessFilter
from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.common.security import require_vendor
from vendor_dashboard.deps import get_category_filter, get_db

router = APIRouter()


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    ctx: AuthenticatedVendor = Depends(require_vendor),
    svc: CategoryAccessFilter = Depends(get_category_filter),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        categories = await svc.list_allowed(session, ctx.vendor)
        return [CategoryResponse.model_validate(c) for c in categories]
