"""
Tests for registration, login, token refresh and logout
"""

import pytest
from uuid import UUID, uuid4
from httpx import AsyncClient
from sqlalchemy import select

from groove.models import Artist, Musician, User, Venue
from tests.conftest import TEST_PASSWORD


def registration(role: str, **extra) -> dict:
    data = {
        "email": f"{role}_{uuid4().hex[:8]}@example.com",
        "password": "Groove123!",
        "full_name": f"New {role.title()}",
        "phone": "+5511999999999",
        "role": role,
        "city": "Recife"
    }
    data.update(extra)
    return data


class TestRegistration:
    """Account plus profile creation"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role,model", [("artist", Artist), ("venue", Venue), ("musician", Musician)])
    async def test_register_creates_profile_with_same_id(self, client: AsyncClient, db_session, role, model):
        response = await client.post("/api/v1/auth/register", json=registration(role))
        assert response.status_code == 201
        data = response.json()
        assert "access_token" in data
        assert data["user"]["role"] == role

        profile = await db_session.get(model, UUID(data["user"]["id"]))
        assert profile is not None
        assert profile.city == "Recife"
        assert profile.is_profile_complete is False

    @pytest.mark.asyncio
    async def test_new_artist_profile_lists_missing_fields(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/register", json=registration("artist"))
        headers = {"Authorization": f"Bearer {response.json()['access_token']}"}

        me = await client.get("/api/v1/artists/me", headers=headers)
        assert me.status_code == 200
        completeness = me.json()["profile_completeness"]
        assert completeness["is_complete"] is False
        assert "Add a profile photo." in completeness["missing_fields"]
        assert me.json()["booked_dates"] == []

    @pytest.mark.asyncio
    async def test_admin_role_cannot_self_register(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/register", json=registration("admin"))
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, artist_account):
        user, _ = artist_account
        response = await client.post("/api/v1/auth/register", json=registration("venue", email=user.email))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    @pytest.mark.asyncio
    async def test_register_weak_password(self, client: AsyncClient):
        response = await client.post("/api/v1/auth/register", json=registration("artist", password="weak"))
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_register_with_referral_code(self, client: AsyncClient, db_session, artist):
        referrer_id = artist.id
        response = await client.post(
            "/api/v1/auth/register",
            json=registration("artist", referral_code=str(referrer_id))
        )
        assert response.status_code == 201

        result = await db_session.execute(select(Artist).where(Artist.referred_by == referrer_id))
        assert len(result.scalars().all()) == 1

    @pytest.mark.asyncio
    async def test_unknown_referral_code_is_ignored(self, client: AsyncClient, db_session):
        response = await client.post(
            "/api/v1/auth/register",
            json=registration("artist", referral_code=str(uuid4()))
        )
        assert response.status_code == 201

        artist = await db_session.get(Artist, UUID(response.json()["user"]["id"]))
        assert artist.referred_by is None


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, artist_account):
        user, _ = artist_account
        response = await client.post(
            "/api/v1/auth/login",
            data={"username": user.email, "password": TEST_PASSWORD},
            headers={"Content-Type": "application/x-www-form-urlencoded"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == user.email

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, artist_account):
        user, _ = artist_account
        response = await client.post(
            "/api/v1/auth/login",
            data={"username": user.email, "password": "Wrong123!"},
            headers={"Content-Type": "application/x-www-form-urlencoded"}
        )
        assert response.status_code == 401
        assert "incorrect" in response.json()["error"]["message"].lower()

    @pytest.mark.asyncio
    async def test_refresh_issues_new_pair(self, client: AsyncClient, artist_account):
        user, _ = artist_account
        login = await client.post(
            "/api/v1/auth/login",
            data={"username": user.email, "password": TEST_PASSWORD}
        )
        response = await client.post(
            "/api/v1/auth/refresh",
            json={"refresh_token": login.json()["refresh_token"]}
        )
        assert response.status_code == 200
        assert response.json()["access_token"]

    @pytest.mark.asyncio
    async def test_access_token_rejected_as_refresh_token(self, client: AsyncClient, artist_headers):
        access_token = artist_headers["Authorization"].split()[1]
        response = await client.post("/api/v1/auth/refresh", json={"refresh_token": access_token})
        assert response.status_code == 401


class TestTokens:

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_returns_current_user(self, client: AsyncClient, venue_account, venue_headers):
        user, _ = venue_account
        response = await client.get("/api/v1/auth/me", headers=venue_headers)
        assert response.status_code == 200
        assert response.json()["email"] == user.email
        assert response.json()["role"] == "venue"

    @pytest.mark.asyncio
    async def test_logout_blacklists_token(self, client: AsyncClient, artist_headers):
        response = await client.post("/api/v1/auth/logout", headers=artist_headers)
        assert response.status_code == 200

        response = await client.get("/api/v1/auth/me", headers=artist_headers)
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTH_ERROR"

    @pytest.mark.asyncio
    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
