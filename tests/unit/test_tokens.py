"""Tests for bearer token verification."""

from datetime import timedelta

import jwt
import pytest

from vendor_dashboard.auth.tokens import TokenVerifier, VerifiedIdentity, mint_token
from vendor_dashboard.common.exceptions import (
    InvalidCredentialError,
    MissingCredentialError,
    UnauthenticatedError,
)

SECRET = "test-signing-secret-for-unit-tests-0123456789"


@pytest.fixture
def verifier():
    return TokenVerifier(SECRET, audience="authenticated")


class TestVerify:
    def test_valid_token(self, verifier):
        token = mint_token(SECRET, "user-1", email="a@b.test")
        identity = verifier.verify(token)
        assert identity == VerifiedIdentity(subject="user-1", email="a@b.test")

    def test_email_optional(self, verifier):
        token = mint_token(SECRET, "user-1")
        assert verifier.verify(token).email == ""

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, verifier, token):
        with pytest.raises(MissingCredentialError):
            verifier.verify(token)

    def test_expired_token(self, verifier):
        token = mint_token(SECRET, "user-1", expires_in=timedelta(seconds=-30))
        with pytest.raises(InvalidCredentialError):
            verifier.verify(token)

    def test_leeway_accepts_recently_expired(self):
        token = mint_token(SECRET, "user-1", expires_in=timedelta(seconds=-5))
        lenient = TokenVerifier(SECRET, audience="authenticated", leeway=60)
        assert lenient.verify(token).subject == "user-1"

    def test_wrong_secret(self, verifier):
        token = mint_token("another-secret-that-is-long-enough-0123456789", "user-1")
        with pytest.raises(InvalidCredentialError):
            verifier.verify(token)

    def test_malformed_token(self, verifier):
        with pytest.raises(InvalidCredentialError):
            verifier.verify("not-a-jwt")

    def test_wrong_audience(self, verifier):
        token = mint_token(SECRET, "user-1", audience="anon")
        with pytest.raises(InvalidCredentialError):
            verifier.verify(token)

    def test_missing_subject_claim(self, verifier):
        token = jwt.encode(
            {"email": "a@b.test", "aud": "authenticated", "exp": 9999999999},
            SECRET, algorithm="HS256",
        )
        with pytest.raises(InvalidCredentialError):
            verifier.verify(token)

    def test_missing_exp_claim(self, verifier):
        token = jwt.encode(
            {"sub": "user-1", "aud": "authenticated"}, SECRET, algorithm="HS256",
        )
        with pytest.raises(InvalidCredentialError):
            verifier.verify(token)

    def test_unsigned_token_rejected(self, verifier):
        token = jwt.encode(
            {"sub": "user-1", "aud": "authenticated", "exp": 9999999999},
            None, algorithm="none",
        )
        with pytest.raises(InvalidCredentialError):
            verifier.verify(token)

    def test_errors_are_unauthenticated(self, verifier):
        with pytest.raises(UnauthenticatedError) as exc_info:
            verifier.verify("garbage")
        assert exc_info.value.status_code == 401


class TestMintToken:
    def test_claims(self):
        token = mint_token(SECRET, "user-9", email="x@y.test")
        claims = jwt.decode(token, SECRET, algorithms=["HS256"], audience="authenticated")
        assert claims["sub"] == "user-9"
        assert claims["email"] == "x@y.test"
        assert claims["exp"] > claims["iat"]

    def test_without_audience(self):
        token = mint_token(SECRET, "user-9", audience=None)
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert "aud" not in claims
