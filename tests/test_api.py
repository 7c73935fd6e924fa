"""
API tests for the HTTP surface.
Exercises identity, listing queries, route protection, admin tools and the
user-facing collections through the ASGI app.
"""

import pytest
from httpx import AsyncClient

from rural_properties.models.property import PropertyType
from tests.conftest import PropertyFactory, TEST_PASSWORD, listing_payload

API = "/api/v1"


class TestAuthEndpoints:
    """Sign-up, sign-in and the dashboard hint."""

    @pytest.mark.asyncio
    async def test_signup_then_signin(self, client: AsyncClient):
        response = await client.post(f"{API}/auth/signup", json={
            "email": "Farmer@Example.com",
            "password": "harvest2024",
            "first_name": "Thandi",
            "last_name": "Nkosi",
        })
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "farmer@example.com"
        assert data["user"]["role"] == "user"
        assert data["dashboard"] == "/user"
        assert data["tokens"]["token_type"] == "bearer"

        response = await client.post(f"{API}/auth/signin", json={
            "email": "farmer@example.com",
            "password": "harvest2024",
        })
        assert response.status_code == 200
        token = response.json()["tokens"]["access_token"]

        response = await client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["display_name"] == "Thandi Nkosi"

    @pytest.mark.asyncio
    async def test_agent_signup_dashboard(self, client: AsyncClient):
        response = await client.post(f"{API}/auth/signup", json={
            "email": "new.agent@example.com",
            "password": "listings99",
            "first_name": "Pieter",
            "last_name": "Botha",
            "account_type": "agent",
        })
        assert response.status_code == 201
        assert response.json()["dashboard"] == "/agent"

    @pytest.mark.asyncio
    async def test_signup_rejects_weak_password(self, client: AsyncClient):
        response = await client.post(f"{API}/auth/signup", json={
            "email": "weak@example.com",
            "password": "onlyletters",
            "first_name": "Weak",
            "last_name": "Password",
        })
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_signin_wrong_password(self, client: AsyncClient, test_user):
        response = await client.post(f"{API}/auth/signin", json={"email": test_user.email, "password": "nope12345"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_ERROR"

    @pytest.mark.asyncio
    async def test_password_reset_acknowledges_unknown_email(self, client: AsyncClient):
        response = await client.post(f"{API}/auth/password-reset", json={"email": "ghost@example.com"})
        assert response.status_code == 202

    @pytest.mark.asyncio
    async def test_refresh(self, client: AsyncClient, test_user):
        signin = await client.post(f"{API}/auth/signin", json={"email": test_user.email, "password": TEST_PASSWORD})
        refresh_token = signin.json()["tokens"]["refresh_token"]

        response = await client.post(f"{API}/auth/refresh", json={"refresh_token": refresh_token})

        assert response.status_code == 200
        assert response.json()["access_token"]


class TestPropertyEndpoints:
    """Listing queries and management."""

    @pytest.mark.asyncio
    async def test_query_by_type(self, client: AsyncClient, property_repository):
        await PropertyFactory.create_property(property_repository, title="Bushveld Farm")
        await PropertyFactory.create_property(property_repository, title="Town Plot", property_type=PropertyType.PLOT)

        response = await client.get(f"{API}/properties", params={
            "type": "Farm",
            "province": "All Provinces",
            "price": "Any Price",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["items"][0]["title"] == "Bushveld Farm"
        assert data["items"][0]["price_range"] == "R1M - R3M"
        assert data["filters"]["type"] == "Farm"

    @pytest.mark.asyncio
    async def test_unknown_price_label_is_rejected(self, client: AsyncClient):
        response = await client.get(f"{API}/properties", params={"price": "Bargain"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_filter_options(self, client: AsyncClient):
        response = await client.get(f"{API}/properties/filters")

        assert response.status_code == 200
        labels = [r["label"] for r in response.json()["price_ranges"]]
        assert labels[0] == "Any Price"
        assert "Over R5M" in labels

    @pytest.mark.asyncio
    async def test_agent_creates_listing(self, client: AsyncClient, agent_headers, test_agent_profile):
        response = await client.post(f"{API}/properties", json=listing_payload(), headers=agent_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["price_formatted"] == "R2,450,000"
        assert data["location"]["city"] == "Tzaneen"
        assert data["agent_id"] == str(test_agent_profile.id)

        mine = await client.get(f"{API}/properties/mine", headers=agent_headers)
        assert [p["id"] for p in mine.json()] == [data["id"]]

    @pytest.mark.asyncio
    async def test_user_cannot_create_listing(self, client: AsyncClient, user_headers):
        response = await client.post(f"{API}/properties", json=listing_payload(), headers=user_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_anonymous_cannot_create_listing(self, client: AsyncClient):
        response = await client.post(f"{API}/properties", json=listing_payload())

        assert response.status_code == 401
        assert response.json()["error"]["redirect_to"] == "/signin"

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client: AsyncClient, agent_headers, admin_headers, user_headers, test_property):
        url = f"{API}/properties/{test_property.id}"

        response = await client.put(url, json={"featured": True}, headers=user_headers)
        assert response.status_code == 403

        response = await client.put(url, json={"price": 3100000}, headers=agent_headers)
        assert response.status_code == 200
        assert response.json()["price_range"] == "R3M - R5M"

        response = await client.delete(url, headers=admin_headers)
        assert response.status_code == 204
        assert (await client.get(url)).status_code == 404

    @pytest.mark.asyncio
    async def test_record_view(self, client: AsyncClient, user_headers, test_property):
        response = await client.post(f"{API}/properties/{test_property.id}/view", headers=user_headers)
        assert response.json()["views"] == 1

        viewed = await client.get(f"{API}/users/me/viewed-properties", headers=user_headers)
        assert viewed.json()["viewed_properties"] == [str(test_property.id)]


class TestAccessEndpoint:
    """Gate decisions over HTTP."""

    @pytest.mark.asyncio
    async def test_anonymous_protected_page(self, client: AsyncClient):
        response = await client.get(f"{API}/access/check", params={"path": "/agent"})

        data = response.json()
        assert data["role"] == "anonymous"
        assert data["state"] == "denied"
        assert data["redirect_to"] == "/signin"

    @pytest.mark.asyncio
    async def test_wrong_role_redirects_to_own_dashboard(self, client: AsyncClient, user_headers):
        response = await client.get(f"{API}/access/check", params={"path": "/admin"}, headers=user_headers)

        assert response.json()["state"] == "denied"
        assert response.json()["redirect_to"] == "/user"

    @pytest.mark.asyncio
    async def test_matching_role_allowed(self, client: AsyncClient, agent_headers):
        response = await client.get(f"{API}/access/check", params={"path": "/properties/add"}, headers=agent_headers)

        assert response.json()["state"] == "allowed"
        assert response.json()["redirect_to"] is None

    @pytest.mark.asyncio
    async def test_garbage_token_is_anonymous(self, client: AsyncClient):
        response = await client.get(
            f"{API}/access/check",
            params={"path": "/"},
            headers={"Authorization": "Bearer not-a-token"}
        )
        assert response.json()["role"] == "anonymous"
        assert response.json()["state"] == "allowed"


class TestAdminEndpoints:
    """Seeding and user administration."""

    @pytest.mark.asyncio
    async def test_seed_then_query_farms(self, client: AsyncClient, admin_headers):
        response = await client.post(f"{API}/admin/seed", headers=admin_headers)

        assert response.status_code == 200
        report = response.json()
        assert report["properties"] == 5
        assert report["errors"] == []

        farms = await client.get(f"{API}/properties", params={"type": "Farm"})
        assert farms.json()["count"] == 2

        stats = await client.get(f"{API}/admin/stats", headers=admin_headers)
        assert stats.json()["collections"]["agents"] == 3

    @pytest.mark.asyncio
    async def test_non_admin_forbidden(self, client: AsyncClient, agent_headers):
        response = await client.post(f"{API}/admin/seed", headers=agent_headers)

        assert response.status_code == 403
        assert response.json()["error"]["redirect_to"] == "/agent"

    @pytest.mark.asyncio
    async def test_anonymous_unauthorized(self, client: AsyncClient):
        response = await client.get(f"{API}/admin/stats")

        assert response.status_code == 401
        assert response.json()["error"]["redirect_to"] == "/signin"

    @pytest.mark.asyncio
    async def test_role_change(self, client: AsyncClient, admin_headers, test_user):
        response = await client.post(
            f"{API}/admin/users/role",
            json={"email": test_user.email, "role": "agent"},
            headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["outcome"] == "updated"

        response = await client.get(f"{API}/admin/users", params={"role": "agent"}, headers=admin_headers)
        assert [u["email"] for u in response.json()["users"]] == [test_user.email]

    @pytest.mark.asyncio
    async def test_role_change_unknown_email(self, client: AsyncClient, admin_headers):
        response = await client.post(
            f"{API}/admin/users/role",
            json={"email": "nobody@example.com", "role": "admin"},
            headers=admin_headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_deactivated_user_loses_session(self, client: AsyncClient, admin_headers, test_user, user_headers):
        response = await client.post(f"{API}/admin/users/{test_user.id}/deactivate", headers=admin_headers)
        assert response.json()["is_active"] is False

        response = await client.get(f"{API}/auth/me", headers=user_headers)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_settings_update_and_public_read(self, client: AsyncClient, admin_headers):
        response = await client.put(
            f"{API}/admin/settings",
            json={"site": {"name": "Rural Properties", "contact_email": "info@ruralproperties.co.za"}},
            headers=admin_headers
        )
        assert response.status_code == 200

        response = await client.get(f"{API}/settings")
        assert response.json()["site"]["name"] == "Rural Properties"


class TestSiteEndpoints:

    @pytest.mark.asyncio
    async def test_maps_config_without_key_is_static(self, client: AsyncClient):
        response = await client.get(f"{API}/config/maps")

        assert response.json() == {"mode": "static", "api_key": None}

    @pytest.mark.asyncio
    async def test_root_and_health(self, client: AsyncClient):
        assert (await client.get("/")).json()["api_prefix"] == "/api/v1"

        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["database"] == "connected"


class TestUserCollections:
    """Saved listings, saved searches, inquiries and reviews over HTTP."""

    @pytest.mark.asyncio
    async def test_saved_properties(self, client: AsyncClient, user_headers, test_property):
        url = f"{API}/users/me/saved-properties/{test_property.id}"

        await client.put(url, headers=user_headers)
        response = await client.put(url, headers=user_headers)
        assert response.json()["saved_properties"] == [str(test_property.id)]

        response = await client.delete(url, headers=user_headers)
        assert response.json()["saved_properties"] == []

    @pytest.mark.asyncio
    async def test_saved_search_run(self, client: AsyncClient, user_headers, property_repository):
        await PropertyFactory.create_property(property_repository, title="Limpopo Farm", province="Limpopo")
        await PropertyFactory.create_property(property_repository, title="Mpumalanga Farm", province="Mpumalanga")

        response = await client.post(
            f"{API}/saved-searches",
            json={"name": "Limpopo farms", "filters": {"type": "Farm", "province": "Limpopo"}},
            headers=user_headers
        )
        assert response.status_code == 201
        search_id = response.json()["id"]

        response = await client.post(f"{API}/saved-searches/{search_id}/run", headers=user_headers)

        assert response.status_code == 200
        data = response.json()
        assert [item["title"] for item in data["items"]] == ["Limpopo Farm"]
        assert data["new_properties_count"] == 1

    @pytest.mark.asyncio
    async def test_inquiry_flow(self, client: AsyncClient, user_headers, agent_headers, test_property):
        response = await client.post(
            f"{API}/inquiries",
            json={"property_id": str(test_property.id), "message": "Is there a borehole on the farm?"},
            headers=user_headers
        )
        assert response.status_code == 201
        inquiry_id = response.json()["id"]

        response = await client.get(f"{API}/inquiries", headers=agent_headers)
        assert response.json()["total"] == 1

        response = await client.post(
            f"{API}/inquiries/{inquiry_id}/responses",
            json={"message": "Yes, it delivers 5000 litres per hour."},
            headers=agent_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "responded"

    @pytest.mark.asyncio
    async def test_review_moderation(self, client: AsyncClient, user_headers, admin_headers, test_agent_profile):
        response = await client.post(
            f"{API}/reviews",
            json={"agent_id": str(test_agent_profile.id), "rating": 4, "title": "Knew the area well"},
            headers=user_headers
        )
        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        review_id = response.json()["id"]

        public = await client.get(f"{API}/reviews", params={"agent_id": str(test_agent_profile.id)})
        assert public.json()["total"] == 0

        response = await client.patch(
            f"{API}/reviews/{review_id}/status",
            json={"status": "approved"},
            headers=admin_headers
        )
        assert response.status_code == 200

        agent = await client.get(f"{API}/agents/{test_agent_profile.id}")
        assert agent.json()["rating"] == 4.0
        assert agent.json()["total_reviews"] == 1

    @pytest.mark.asyncio
    async def test_review_moderation_requires_admin(self, client: AsyncClient, agent_headers):
        response = await client.get(f"{API}/reviews/moderation", headers=agent_headers)
        assert response.status_code == 403
