"""Token issuance and current-vendor profile."""

from fastapi import APIRouter, Depends

from vendor_dashboard.auth.schemas import LoginRequest, TokenResponse
from vendor_dashboard.auth.service import AuthenticatedVendor, AuthService
from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.common.exceptions import InvalidRequestError
from vendor_dashboard.common.security import require_vendor
from vendor_dashboard.deps import get_auth_service, get_db
from vendor_dashboard.vendors.schemas import VendorResponse

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
async def issue_token(
    body: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
    db: DatabaseManager = Depends(get_db),
):
    if not body.email or not body.password:
        raise InvalidRequestError("Email and password are required.")
    async with db.get_session() as session:
        issued = await auth.issue_token(session, body.email, body.password)
    return TokenResponse.model_validate(issued)


@router.get("/me", response_model=VendorResponse)
async def me(ctx: AuthenticatedVendor = Depends(require_vendor)):
    return VendorResponse.model_validate(ctx.vendor)
