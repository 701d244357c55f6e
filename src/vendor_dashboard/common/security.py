"""Bearer authentication dependency used by every protected route."""

import logging
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vendor_dashboard.auth.service import AuthenticatedVendor, AuthService
from vendor_dashboard.common.database import DatabaseManager
from vendor_dashboard.common.exceptions import UnauthenticatedError
from vendor_dashboard.deps import get_auth_service, get_db

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_vendor(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
    db: DatabaseManager = Depends(get_db),
) -> AuthenticatedVendor:
    """Resolve ``Authorization: Bearer <token>`` to an active vendor.

    Raises the auth error unchanged; the app exception handler maps it to
    401 or 403.
    """
    token = credentials.credentials if credentials else None
    try:
        async with db.get_session() as session:
            return await auth.authenticate(session, token)
    except UnauthenticatedError as e:
        logger.warning("Rejected request: %s", e.code)
        raise
