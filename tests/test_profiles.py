"""
Tests for profile completeness, public catalogues, special prices and favorites
"""

import pytest
from types import SimpleNamespace
from httpx import AsyncClient

from groove.models import UserRole
from groove.services.gig_service import artist_matches_genre
from groove.services.profile_completeness_service import ProfileCompletenessService
from tests.conftest import auth_headers_for, create_account, create_artist

LONG_BIO = "We are a four piece band playing soul and funk covers at weddings and bars."


class TestProfileCompleteness:

    def test_complete_artist(self):
        artist = SimpleNamespace(
            bio=LONG_BIO,
            image_url="https://cdn.groove.test/band.jpg",
            youtube_video_id="abc123",
            plans=[{"id": 1, "name": "Basic", "price": 100}]
        )
        assert ProfileCompletenessService.check_artist(artist) == {"is_complete": True, "missing_fields": []}

    def test_placeholder_photo_counts_as_missing(self):
        artist = SimpleNamespace(
            bio=LONG_BIO,
            image_url="https://images.pexels.com/photos/1043471/pexels-photo.jpeg",
            youtube_video_id="abc123",
            plans=[{"id": 1}]
        )
        result = ProfileCompletenessService.check_artist(artist)
        assert result["is_complete"] is False
        assert result["missing_fields"] == ["Add a profile photo."]

    def test_short_bio_and_no_plans(self):
        artist = SimpleNamespace(bio="  Short  ", image_url=None, youtube_video_id=None, plans=[])
        result = ProfileCompletenessService.check_artist(artist)
        assert len(result["missing_fields"]) == 4

    def test_venue_needs_address_and_styles(self):
        venue = SimpleNamespace(
            description="A cosy bar with live music every night of the week and a small stage.",
            image_url="https://cdn.groove.test/bar.jpg",
            address="   ",
            music_styles=[]
        )
        result = ProfileCompletenessService.check_venue(venue)
        assert result["missing_fields"] == [
            "Fill in the venue address.",
            "List the music styles the venue usually hosts.",
        ]

    def test_musician_needs_instrument_and_city(self):
        musician = SimpleNamespace(
            bio="Session drummer, twenty years on stage.",
            image_url="https://cdn.groove.test/drums.jpg",
            instrument=None,
            city=""
        )
        result = ProfileCompletenessService.check_musician(musician)
        assert result["missing_fields"] == ["Specify your main instrument.", "Tell us the city you play in."]


class TestProfileEditing:

    @pytest.mark.asyncio
    async def test_update_recomputes_completeness(self, client: AsyncClient, db_session):
        user, _ = await create_account(db_session, UserRole.ARTIST, "Fresh Band")
        headers = auth_headers_for(user)

        response = await client.put(
            "/api/v1/artists/me",
            json={
                "bio": LONG_BIO,
                "image_url": "https://cdn.groove.test/fresh.jpg",
                "youtube_video_id": "xyz789",
                "plans": [{"id": 1, "name": "Pocket show", "price": 800}]
            },
            headers=headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_profile_complete"] is True
        assert data["profile_completeness"]["missing_fields"] == []
        assert data["plans"][0]["name"] == "Pocket show"

    @pytest.mark.asyncio
    async def test_duplicate_plan_ids_rejected(self, client: AsyncClient, artist_headers):
        response = await client.put(
            "/api/v1/artists/me",
            json={"plans": [{"id": 1, "name": "A", "price": 1}, {"id": 1, "name": "B", "price": 2}]},
            headers=artist_headers
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_venue_update(self, client: AsyncClient, venue_headers):
        response = await client.put(
            "/api/v1/venues/me",
            json={"music_styles": ["Jazz", "Soul"], "capacity": 120},
            headers=venue_headers
        )
        assert response.status_code == 200
        assert response.json()["capacity"] == 120
        assert "List the music styles the venue usually hosts." not in response.json()["profile_completeness"]["missing_fields"]


class TestCatalogue:

    @pytest.mark.asyncio
    async def test_incomplete_artists_are_hidden(self, client: AsyncClient, db_session, artist):
        await create_account(db_session, UserRole.ARTIST, "Half Done")

        response = await client.get("/api/v1/artists")
        assert [a["name"] for a in response.json()] == ["The Night Owls"]

    @pytest.mark.asyncio
    async def test_city_filter(self, client: AsyncClient, db_session, artist):
        await create_artist(db_session, name="Carioca Sound", city="Rio de Janeiro")

        response = await client.get("/api/v1/artists", params={"city": "rio de janeiro"})
        assert [a["name"] for a in response.json()] == ["Carioca Sound"]

    @pytest.mark.asyncio
    async def test_genre_showcase(self, client: AsyncClient, db_session, artist):
        await create_artist(db_session, name="Samba Crew", genre={"primary": "Samba", "secondary": []})
        await create_artist(db_session, name="More Rock", genre={"primary": "Rock", "secondary": []})

        response = await client.get("/api/v1/artists/genres")
        assert sorted(item["genre"] for item in response.json()) == ["Rock", "Samba"]

    @pytest.mark.asyncio
    async def test_freelancers_by_instrument(self, client: AsyncClient, db_session, artist):
        await create_artist(
            db_session,
            name="Session Keys",
            is_freelancer=True,
            freelancer_instruments=["Piano", "Keyboard"]
        )

        response = await client.get("/api/v1/artists/freelancers", params={"instrument": "key"})
        assert [a["name"] for a in response.json()] == ["Session Keys"]

    @pytest.mark.asyncio
    async def test_unknown_artist(self, client: AsyncClient):
        from uuid import uuid4
        response = await client.get(f"/api/v1/artists/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["success"] is False


class TestSpecialPrices:

    @pytest.mark.asyncio
    async def test_venue_sees_its_prices_only(self, client: AsyncClient, artist, venue, artist_headers, venue_headers, other_venue_account):
        response = await client.put(
            "/api/v1/special-prices/artist/me",
            json={"venue_id": str(venue.id), "prices": [{"plan_id": 2, "special_price": 2500}]},
            headers=artist_headers
        )
        assert response.status_code == 200
        assert response.json()[0]["special_price"] == 2500.0

        detail = await client.get(f"/api/v1/artists/{artist.id}", headers=venue_headers)
        prices = {plan["id"]: plan["price"] for plan in detail.json()["plans"]}
        assert prices == {1: 1500.0, 2: 2500.0}

        other_user, _ = other_venue_account
        detail = await client.get(f"/api/v1/artists/{artist.id}", headers=auth_headers_for(other_user))
        assert {plan["id"]: plan["price"] for plan in detail.json()["plans"]} == {1: 1500.0, 2: 3000.0}

        anonymous = await client.get(f"/api/v1/artists/{artist.id}")
        assert {plan["id"]: plan["price"] for plan in anonymous.json()["plans"]} == {1: 1500.0, 2: 3000.0}

    @pytest.mark.asyncio
    async def test_upsert_and_delete(self, client: AsyncClient, artist, venue, artist_headers, venue_headers):
        url = "/api/v1/special-prices/artist/me"
        await client.put(url, json={"venue_id": str(venue.id), "prices": [{"plan_id": 1, "special_price": 1400}]}, headers=artist_headers)
        await client.put(url, json={"venue_id": str(venue.id), "prices": [{"plan_id": 1, "special_price": 1300}]}, headers=artist_headers)

        listing = await client.get(url, headers=artist_headers)
        assert len(listing.json()) == 1
        assert listing.json()[0]["special_price"] == 1300.0
        assert listing.json()[0]["venue"]["name"] == "Blue Note Bar"

        plans = await client.get(f"/api/v1/special-prices/venue/me/{artist.id}", headers=venue_headers)
        assert plans.json()[0]["price"] == 1300.0

        removed = await client.delete(f"{url}/{venue.id}", headers=artist_headers)
        assert removed.status_code == 200
        assert (await client.get(url, headers=artist_headers)).json() == []

    @pytest.mark.asyncio
    async def test_unknown_plan_rejected(self, client: AsyncClient, venue, artist_headers):
        response = await client.put(
            "/api/v1/special-prices/artist/me",
            json={"venue_id": str(venue.id), "prices": [{"plan_id": 7, "special_price": 10}]},
            headers=artist_headers
        )
        assert response.status_code == 400


class TestFavorites:

    @pytest.mark.asyncio
    async def test_venue_favorites_artist(self, client: AsyncClient, artist, venue_headers):
        url = f"/api/v1/favorites/{artist.id}"

        assert (await client.get(url, headers=venue_headers)).json()["is_favorite"] is False
        added = await client.post(url, headers=venue_headers)
        assert added.json()["is_favorite"] is True
        # Idempotent
        await client.post(url, headers=venue_headers)

        favorites = await client.get("/api/v1/favorites", headers=venue_headers)
        assert [f["name"] for f in favorites.json()] == ["The Night Owls"]

        removed = await client.delete(url, headers=venue_headers)
        assert removed.json()["is_favorite"] is False
        assert (await client.get("/api/v1/favorites", headers=venue_headers)).json() == []


class TestGenreMatching:

    def test_matches_primary_and_secondary_case_insensitive(self):
        artist = SimpleNamespace(genre={"primary": "Rock", "secondary": ["Blues Rock", "Indie"]})
        assert artist_matches_genre(artist, "rock") is True
        assert artist_matches_genre(artist, "BLUES") is True
        assert artist_matches_genre(artist, "jazz") is False
        assert artist_matches_genre(artist, "") is False

    def test_missing_genre(self):
        assert artist_matches_genre(SimpleNamespace(genre=None), "rock") is False
