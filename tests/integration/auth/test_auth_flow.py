"""Integration tests for auth endpoints."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from qrmenu.core.permissions import UserRole
from qrmenu.modules.tenants.models import Subscription, Tenant, TenantStatus
from qrmenu.modules.users.models import User
from tests.factories import DEFAULT_PASSWORD, RegisterRequestFactory


pytestmark = pytest.mark.integration


SETUP_PAYLOAD = {
    "tenantName": "Kopi Kita",
    "tenantSlug": "kopi-kita",
    "name": "Admin",
    "email": "admin@kopikita.id",
    "password": "rahasia123",
}


async def login(client: AsyncClient, email: str, password: str = DEFAULT_PASSWORD):
    return await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )


class TestSetup:
    """Tests for the one-time setup endpoint."""

    async def test_setup_creates_tenant_and_super_admin(
        self, client: AsyncClient, db: AsyncSession
    ):
        """POST /api/auth/setup should bootstrap the first account."""
        response = await client.post("/api/auth/setup", json=SETUP_PAYLOAD)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["accessToken"]
        assert body["data"]["refreshToken"]
        assert body["data"]["user"]["role"] == "SUPER_ADMIN"
        assert body["data"]["user"]["tenant"]["slug"] == "kopi-kita"

        subscription = await db.scalar(
            select(Subscription).join(Tenant).where(Tenant.slug == "kopi-kita")
        )
        assert subscription.plan == "FREE"
        assert subscription.max_stores == 1

    async def test_setup_only_once(self, client: AsyncClient):
        """POST /api/auth/setup should be refused once a user exists."""
        await client.post("/api/auth/setup", json=SETUP_PAYLOAD)

        response = await client.post(
            "/api/auth/setup",
            json=SETUP_PAYLOAD | {"email": "other@kopikita.id", "tenantSlug": "x"},
        )

        assert response.status_code == 403
        assert response.json()["code"] == "setup_completed"

    async def test_setup_validates_slug(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/setup", json=SETUP_PAYLOAD | {"tenantSlug": "Kopi Kita"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "validation_error"


class TestLogin:
    """Tests for login endpoint."""

    async def test_login_success(self, client: AsyncClient, owner: User):
        """POST /api/auth/login should return tokens and the profile."""
        response = await login(client, owner.email)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["tokenType"] == "bearer"
        assert data["expiresIn"] == 15 * 60
        assert data["user"]["email"] == owner.email
        assert data["user"]["role"] == "OWNER"
        assert data["user"]["tenant"]["id"] == str(owner.tenant_id)

    async def test_login_wrong_password(self, client: AsyncClient, owner: User):
        """POST /api/auth/login should reject a wrong password."""
        response = await login(client, owner.email, "wrongpassword")

        assert response.status_code == 401
        body = response.json()
        assert body == {
            "success": False,
            "error": "Invalid email or password",
            "code": "invalid_credentials",
            "requestId": response.headers["X-Request-ID"],
        }

    async def test_login_unknown_email(self, client: AsyncClient):
        response = await login(client, "nobody@example.com")

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_credentials"

    async def test_login_suspended_tenant(
        self, client: AsyncClient, db: AsyncSession, owner: User, tenant: Tenant
    ):
        """POST /api/auth/login should refuse users of a suspended tenant."""
        tenant.status = TenantStatus.SUSPENDED
        await db.commit()

        response = await login(client, owner.email)

        assert response.status_code == 403
        assert response.json()["code"] == "tenant_suspended"


class TestTokenLifecycle:
    """Tests for refresh and logout."""

    async def test_refresh_rotates_tokens(self, client: AsyncClient, owner: User):
        """POST /api/auth/refresh should revoke the token it consumed."""
        tokens = (await login(client, owner.email)).json()["data"]

        response = await client.post(
            "/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]}
        )

        assert response.status_code == 200
        rotated = response.json()["data"]
        assert rotated["refreshToken"] != tokens["refreshToken"]

        replay = await client.post(
            "/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]}
        )
        assert replay.status_code == 401

    async def test_new_login_replaces_session(self, client: AsyncClient, owner: User):
        first = (await login(client, owner.email)).json()["data"]
        await login(client, owner.email)

        response = await client.post(
            "/api/auth/refresh", json={"refreshToken": first["refreshToken"]}
        )

        assert response.status_code == 401

    async def test_refresh_unknown_token(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/refresh", json={"refreshToken": "not-a-real-token"}
        )

        assert response.status_code == 401
        assert response.json()["code"] == "invalid_refresh_token"

    async def test_refresh_expired_token(
        self, client: AsyncClient, db: AsyncSession, owner: User
    ):
        """POST /api/auth/refresh should refuse an expired token until re-login."""
        tokens = (await login(client, owner.email)).json()["data"]
        await db.execute(
            update(User)
            .where(User.id == owner.id)
            .values(refresh_token_expires_at=datetime.now(UTC) - timedelta(minutes=1))
        )
        await db.commit()

        response = await client.post(
            "/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]}
        )
        assert response.status_code == 401
        assert response.json()["code"] == "token_expired"

        fresh = (await login(client, owner.email)).json()["data"]
        renewed = await client.post(
            "/api/auth/refresh", json={"refreshToken": fresh["refreshToken"]}
        )
        assert renewed.status_code == 200

    async def test_logout_revokes_refresh_token(
        self, client: AsyncClient, owner: User
    ):
        """POST /api/auth/logout should make the refresh token unusable."""
        tokens = (await login(client, owner.email)).json()["data"]

        response = await client.post(
            "/api/auth/logout", json={"refreshToken": tokens["refreshToken"]}
        )
        assert response.status_code == 204

        replay = await client.post(
            "/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]}
        )
        assert replay.status_code == 401


class TestRegister:
    """Tests for staff registration."""

    async def test_owner_registers_manager(
        self, client: AsyncClient, owner_headers, tenant: Tenant
    ):
        """POST /api/auth/register should put the manager in the owner's tenant."""
        payload = RegisterRequestFactory.build().model_dump(mode="json", by_alias=True)

        response = await client.post(
            "/api/auth/register", json=payload, headers=owner_headers
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["role"] == "MANAGER"
        assert data["tenantId"] == str(tenant.id)

    async def test_owner_cannot_register_owner(
        self, client: AsyncClient, owner_headers
    ):
        payload = RegisterRequestFactory.build(role=UserRole.OWNER).model_dump(
            mode="json", by_alias=True
        )

        response = await client.post(
            "/api/auth/register", json=payload, headers=owner_headers
        )

        assert response.status_code == 403
        assert response.json()["code"] == "insufficient_role"

    async def test_owner_tenant_id_is_ignored(
        self,
        client: AsyncClient,
        owner_headers,
        tenant: Tenant,
        other_tenant: Tenant,
    ):
        payload = RegisterRequestFactory.build(tenant_id=other_tenant.id).model_dump(
            mode="json", by_alias=True
        )

        response = await client.post(
            "/api/auth/register", json=payload, headers=owner_headers
        )

        assert response.status_code == 201
        assert response.json()["data"]["tenantId"] == str(tenant.id)

    async def test_super_admin_registers_owner(
        self, client: AsyncClient, admin_headers, tenant: Tenant
    ):
        payload = RegisterRequestFactory.build(
            role=UserRole.OWNER, tenant_id=tenant.id
        ).model_dump(mode="json", by_alias=True)

        response = await client.post(
            "/api/auth/register", json=payload, headers=admin_headers
        )

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "OWNER"

    async def test_super_admin_must_name_tenant(
        self, client: AsyncClient, admin_headers
    ):
        payload = RegisterRequestFactory.build().model_dump(mode="json", by_alias=True)

        response = await client.post(
            "/api/auth/register", json=payload, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["code"] == "tenant_required"

    async def test_duplicate_email(
        self, client: AsyncClient, owner_headers, manager: User
    ):
        payload = RegisterRequestFactory.build(email=manager.email).model_dump(
            mode="json", by_alias=True
        )

        response = await client.post(
            "/api/auth/register", json=payload, headers=owner_headers
        )

        assert response.status_code == 409
        assert response.json()["code"] == "email_exists"

    async def test_manager_cannot_register(self, client: AsyncClient, manager_headers):
        payload = RegisterRequestFactory.build().model_dump(mode="json", by_alias=True)

        response = await client.post(
            "/api/auth/register", json=payload, headers=manager_headers
        )

        assert response.status_code == 403

    async def test_super_admin_role_is_not_registrable(
        self, client: AsyncClient, admin_headers, tenant: Tenant
    ):
        payload = RegisterRequestFactory.build(tenant_id=tenant.id).model_dump(
            mode="json", by_alias=True
        )
        payload["role"] = "SUPER_ADMIN"

        response = await client.post(
            "/api/auth/register", json=payload, headers=admin_headers
        )

        assert response.status_code == 400


class TestMe:
    async def test_me_returns_profile(
        self, client: AsyncClient, manager, manager_headers
    ):
        """GET /api/auth/me should describe the caller and their tenant."""
        response = await client.get("/api/auth/me", headers=manager_headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == str(manager.id)
        assert data["tenant"]["id"] == str(manager.tenant_id)
        assert "passwordHash" not in data

    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json()["code"] == "missing_token"

    async def test_me_rejects_garbage_token(self, client: AsyncClient):
        response = await client.get(
            "/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
        )

        assert response.status_code == 401
