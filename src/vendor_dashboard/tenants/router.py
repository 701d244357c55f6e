"""Marketplace config router."""

from fastapi import APIRouter, Depends

from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.common.security import require_vendor
from vendor_dashboard.deps import get_db, get_tenant_service
from vendor_dashboard.tenants.schemas import ConfigSummary
from vendor_dashboard.tenants.service import TenantService

router = APIRouter()


@router.get("/config/{config_id}", response_model=ConfigSummary)
async def get_config(
    config_id: str,
    _=Depends(require_vendor),
    svc: TenantService = Depends(get_tenant_service),
    db: DatabaseManager = Depends(get_db),
):
    async with db.get_session() as session:
        config = await svc.get_display(session, config_id)
        return ConfigSummary.model_validate(config)
