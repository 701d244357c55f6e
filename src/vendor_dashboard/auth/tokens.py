"""Bearer token verification and signing (HS256 JWT)."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from vendor_dashboard.common.exceptions import (
    InvalidCredentialError,
    MissingCredentialError,
)


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims extracted from a verified bearer token."""
    subject: str
    email: str


class TokenVerifier:
    """Decodes a bearer token and checks its signature, expiry and audience."""

    def __init__(
        self,
        secret: str,
        algorithms: Optional[list[str]] = None,
        audience: Optional[str] = None,
        leeway: int = 0,
    ):
        self._secret = secret
        self._algorithms = algorithms or ["HS256"]
        self._audience = audience or None
        self._leeway = leeway

    def verify(self, token: Optional[str]) -> VerifiedIdentity:
        if not token:
            raise MissingCredentialError()
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                audience=self._audience,
                leeway=self._leeway,
                options={"require": ["exp", "sub"]},
            )
        except jwt.InvalidTokenError:
            raise InvalidCredentialError() from None

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidCredentialError()
        return VerifiedIdentity(subject=subject, email=claims.get("email") or "")


def mint_token(
    secret: str,
    subject: str,
    email: str = "",
    audience: Optional[str] = "authenticated",
    expires_in: timedelta = timedelta(hours=1),
    algorithm: str = "HS256",
) -> str:
    """Sign a bearer token with the same claims the identity provider issues."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "email": email,
        "role": "authenticated",
        "iat": now,
        "exp": now + expires_in,
    }
    if audience:
        payload["aud"] = audience
    return jwt.encode(payload, secret, algorithm=algorithm)
