"""Integration tests for /token, /me and bearer authentication."""

import pytest


NOT_ACTIVE = "User is not an active approved vendor."


class TestHealth:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["service"] == "vendor-dashboard"
        assert resp.json()["database"] == "ok"

    async def test_storage_unreachable(self, app, client, settings):
        from vendor_dashboard.common.database import DatabaseManager
        from vendor_dashboard.deps import get_db

        app.dependency_overrides[get_db] = lambda: DatabaseManager(settings)
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "degraded"
        assert resp.json()["database"] == "unreachable"


class TestIssueToken:
    async def test_active_vendor(self, client, marketplace, upstream):
        upstream.respond("/auth/v1/token", (200, {
            "access_token": "provider-token",
            "user": {"id": marketplace.vendor.user_id, "email": "sales@campusdesks.test"},
        }))
        resp = await client.post("/token", json={
            "email": "sales@campusdesks.test", "password": "hunter2",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["access_token"] == "provider-token"
        assert data["token_type"] == "bearer"
        assert data["user_email"] == "sales@campusdesks.test"
        assert data["vendor_id"] == marketplace.vendor.id
        assert upstream.calls("/auth/v1/logout") == []

    async def test_wrong_password(self, client, marketplace):
        resp = await client.post("/token", json={
            "email": "sales@campusdesks.test", "password": "wrong",
        })
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid credentials or user not found."

    async def test_inactive_vendor_signed_out(self, client, marketplace, upstream):
        upstream.respond("/auth/v1/token", (200, {
            "access_token": "provider-token",
            "user": {"id": marketplace.inactive.user_id, "email": "old@closed.test"},
        }))
        resp = await client.post("/token", json={
            "email": "old@closed.test", "password": "pw",
        })
        assert resp.status_code == 403
        assert resp.json()["detail"] == NOT_ACTIVE
        (logout,) = upstream.calls("/auth/v1/logout")
        assert logout.headers["Authorization"] == "Bearer provider-token"

    @pytest.mark.parametrize("body", [{}, {"email": "a@b.test"}, {"password": "pw"}])
    async def test_missing_fields(self, client, body):
        resp = await client.post("/token", json=body)
        assert resp.status_code == 400


class TestMe:
    async def test_profile(self, client, marketplace, bearer):
        resp = await client.get("/me", headers=bearer(marketplace.token))
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == marketplace.vendor.id
        assert data["company_name"] == "Campus Desks"
        assert data["status"] == "active"
        assert "user_id" not in data

    async def test_missing_token(self, client):
        resp = await client.get("/me")
        assert resp.status_code == 401
        assert resp.json() == {
            "detail": "Authentication token missing.", "code": "MISSING_CREDENTIAL",
        }

    async def test_non_bearer_scheme(self, client):
        resp = await client.get("/me", headers={"Authorization": "Basic dXNlcjpwYXNz"})
        assert resp.status_code == 401

    async def test_invalid_token(self, client, bearer):
        resp = await client.get("/me", headers=bearer("not.a.token"))
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid or expired authentication token."

    async def test_token_signed_with_other_secret(self, client, marketplace, bearer):
        from vendor_dashboard.auth.tokens import mint_token

        forged = mint_token("some-other-secret-of-sufficient-length-42", marketplace.vendor.user_id)
        resp = await client.get("/me", headers=bearer(forged))
        assert resp.status_code == 401

    async def test_inactive_and_unlinked_look_the_same(self, client, marketplace, bearer):
        inactive = await client.get("/me", headers=bearer(marketplace.inactive_token))
        unlinked = await client.get("/me", headers=bearer(marketplace.unlinked_token))
        assert inactive.status_code == unlinked.status_code == 403
        assert inactive.json() == unlinked.json()
        assert inactive.json()["detail"] == NOT_ACTIVE
