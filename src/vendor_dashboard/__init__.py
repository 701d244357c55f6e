"""Vendor-Dashboard: vendor API for university marketplace listings."""

from vendor_dashboard.auth.tokens import TokenVerifier, VerifiedIdentity, mint_token

__all__ = [
    "TokenVerifier",
    "VerifiedIdentity",
    "mint_token",
]
__version__ = "0.1.0"
