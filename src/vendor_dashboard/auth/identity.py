"""HTTP client for the external identity provider (password grant)."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from vendor_dashboard.common.exceptions import InvalidLoginError, UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentitySession:
    """A session issued by the identity provider."""
    access_token: str
    user_id: str
    email: str


class IdentityProviderClient:
    """Calls the identity provider's ``/token`` and ``/logout`` endpoints."""

    def __init__(self, base_url: str, api_key: str, http: httpx.AsyncClient):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._http = http

    async def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        """Exchange email + password for an access token.

        Raises InvalidLoginError when the provider rejects the credentials or
        returns an incomplete session.
        """
        try:
            resp = await self._http.post(
                f"{self.base_url}/token",
                params={"grant_type": "password"},
                json={"email": email, "password": password},
                headers={"apikey": self.api_key},
            )
        except httpx.HTTPError as e:
            logger.error("Identity provider unreachable: %s", e)
            raise UpstreamError("Identity provider unavailable.")

        if resp.status_code >= 500:
            logger.error("Identity provider error %d", resp.status_code)
            raise UpstreamError("Identity provider unavailable.")
        if resp.status_code != 200:
            logger.warning("Password grant rejected with status %d", resp.status_code)
            raise InvalidLoginError()

        try:
            data: Any = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            logger.error("Identity provider returned a non-object token response")
            raise UpstreamError("Identity provider unavailable.")
        user = data.get("user") or {}
        access_token = data.get("access_token")
        if not access_token or not user.get("id"):
            logger.warning("Password grant returned no session")
            raise InvalidLoginError()
        return IdentitySession(
            access_token=access_token,
            user_id=user["id"],
            email=user.get("email") or email,
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke a session. Failures are logged, never raised."""
        try:
            resp = await self._http.post(
                f"{self.base_url}/logout",
                headers={
                    "apikey": self.api_key,
                    "Authorization": f"Bearer {access_token}",
                },
            )
            if resp.status_code >= 400:
                logger.warning("Sign-out returned status %d", resp.status_code)
        except httpx.HTTPError as e:
            logger.warning("Sign-out failed: %s", e)
