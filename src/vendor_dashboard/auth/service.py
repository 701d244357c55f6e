"""Authorization guard and token issuance."""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from vendor_dashboard.auth.identity import IdentityProviderClient
from vendor_dashboard.auth.tokens import TokenVerifier
from vendor_dashboard.common.exceptions import NotActiveVendorError
from vendor_dashboard.vendors.models import VendorModel
from vendor_dashboard.vendors.service import VendorResolver

logger = logging.getLogger(__name__)


@dataclass
class AuthenticatedVendor:
    """Result of a successful ``authenticate`` call."""
    vendor: VendorModel
    raw_token: str


@dataclass
class IssuedToken:
    access_token: str
    user_email: str
    vendor_id: str
    token_type: str = "bearer"


class AuthService:
    """Turns a bearer token into an active vendor, and email/password into a token."""

    def __init__(
        self,
        verifier: TokenVerifier,
        resolver: VendorResolver,
        identity: Optional[IdentityProviderClient] = None,
    ):
        self.verifier = verifier
        self.resolver = resolver
        self.identity = identity

    async def authenticate(
        self, session: AsyncSession, raw_token: Optional[str]
    ) -> AuthenticatedVendor:
        # Credential failures raise here, before any vendor lookup.
        identity = self.verifier.verify(raw_token)
        vendor = await self.resolver.resolve(session, identity.subject)
        return AuthenticatedVendor(vendor=vendor, raw_token=raw_token)

    async def issue_token(
        self, session: AsyncSession, email: str, password: str
    ) -> IssuedToken:
        """Password grant at the identity provider, then the active-vendor check.

        The provider session is revoked when the user is not an active vendor.
        """
        if self.identity is None:
            raise RuntimeError("AuthService has no identity provider configured")

        issued = await self.identity.sign_in_with_password(email, password)
        try:
            vendor = await self.resolver.resolve(session, issued.user_id)
        except NotActiveVendorError:
            await self.identity.sign_out(issued.access_token)
            raise

        logger.info("Issued token", extra={"vendor_id": vendor.id})
        return IssuedToken(
            access_token=issued.access_token,
            user_email=issued.email,
            vendor_id=vendor.id,
        )
