"""Tests for the user settings routes."""
import pytest
from httpx import AsyncClient

from brandsite.core.config import settings
from brandsite.modules.config.store import UserStore
from tests.conftest import claims_headers

API = "/api/user"


class TestCreate:
    @pytest.mark.asyncio
    async def test_requires_identity(self, client: AsyncClient):
        response = await client.post(f"{API}/create", json={})

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized: Authentication required"}

    @pytest.mark.asyncio
    async def test_create_with_defaults(self, user_client: AsyncClient):
        response = await user_client.post(f"{API}/create", json={"RealName": "Sir Slug"})

        assert response.status_code == 201
        record = response.json()
        assert record[settings.USER_ID_KEY] == "user-sub"
        assert record["Email"] == "user@example.com"
        assert record["RealName"] == "Sir Slug"
        assert record["DisplayName"] == ""
        assert record["Timezone"] == settings.DEFAULT_TIMEZONE
        assert record["EmailNotifications"] is True
        assert record["MarketingEmails"] is False
        assert record["ThemePreference"] == "auto"
        assert record["DateFormat"] == "MM/DD/YYYY"
        assert record["CreatedAt"] == record["UpdatedAt"]

    @pytest.mark.asyncio
    async def test_create_without_body(self, user_client: AsyncClient):
        response = await user_client.post(f"{API}/create")
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_create_is_idempotent(self, user_client: AsyncClient, monkeypatch):
        first = await user_client.post(f"{API}/create", json={"RealName": "Sir Slug"})

        writes = []
        original_put = UserStore.put

        async def counting_put(self, record):
            writes.append(record)
            return await original_put(self, record)

        monkeypatch.setattr(UserStore, "put", counting_put)

        second = await user_client.post(f"{API}/create", json={"RealName": "Someone Else"})

        assert second.status_code == 200
        assert second.json() == first.json()
        assert writes == []

    @pytest.mark.asyncio
    async def test_display_name_taken(self, client: AsyncClient):
        await client.post(
            f"{API}/create", json={"DisplayName": "slug"}, headers=claims_headers("one")
        )

        response = await client.post(
            f"{API}/create", json={"DisplayName": "slug"}, headers=claims_headers("two")
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Display name already taken"}

    @pytest.mark.asyncio
    async def test_uniqueness_skipped_without_index(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "DISPLAY_NAME_INDEX_ENABLED", False)
        await client.post(
            f"{API}/create", json={"DisplayName": "slug"}, headers=claims_headers("one")
        )

        response = await client.post(
            f"{API}/create", json={"DisplayName": "slug"}, headers=claims_headers("two")
        )

        assert response.status_code == 201


class TestSettings:
    @pytest.mark.asyncio
    async def test_get_missing(self, user_client: AsyncClient):
        response = await user_client.get(f"{API}/settings")

        assert response.status_code == 404
        assert response.json() == {"error": "User settings not found"}

    @pytest.mark.asyncio
    async def test_get_after_create(self, user_client: AsyncClient):
        await user_client.post(f"{API}/create", json={})

        response = await user_client.get(f"{API}/settings")

        assert response.status_code == 200
        assert response.json()[settings.USER_ID_KEY] == "user-sub"

    @pytest.mark.asyncio
    async def test_update_keeps_immutable_fields(self, user_client: AsyncClient):
        created = (await user_client.post(f"{API}/create", json={"RealName": "Sir Slug"})).json()

        response = await user_client.put(
            f"{API}/settings",
            json={
                settings.USER_ID_KEY: "someone-else",
                "RealName": "Changed",
                "Email": "changed@example.com",
                "CreatedAt": "1999-01-01T00:00:00Z",
                "MarketingEmails": True,
            },
        )

        updated = response.json()
        assert response.status_code == 200
        assert updated[settings.USER_ID_KEY] == "user-sub"
        assert updated["RealName"] == "Sir Slug"
        assert updated["Email"] == "user@example.com"
        assert updated["CreatedAt"] == created["CreatedAt"]
        assert updated["MarketingEmails"] is True

        stored = (await user_client.get(f"{API}/settings")).json()
        assert stored["MarketingEmails"] is True

    @pytest.mark.asyncio
    async def test_update_missing_record(self, user_client: AsyncClient):
        response = await user_client.put(f"{API}/settings", json={"MarketingEmails": True})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_display_name_taken(self, client: AsyncClient):
        await client.post(f"{API}/create", json={"DisplayName": "taken"}, headers=claims_headers("one"))
        await client.post(f"{API}/create", json={}, headers=claims_headers("two"))

        response = await client.put(
            f"{API}/settings", json={"DisplayName": "taken"}, headers=claims_headers("two")
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_update_same_display_name_is_allowed(self, client: AsyncClient):
        headers = claims_headers("one")
        await client.post(f"{API}/create", json={"DisplayName": "mine"}, headers=headers)

        response = await client.put(
            f"{API}/settings", json={"DisplayName": "mine", "Timezone": "Europe/Oslo"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json()["Timezone"] == "Europe/Oslo"
