"""
Tests for manual gigs and the artist's personal finances
"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from groove.models import Booking, BookingStatus, PayoutStatus
from tests.conftest import auth_headers_for, create_artist, future


class TestManualGigs:
    """Shows booked outside the platform"""

    @pytest.mark.asyncio
    async def test_paid_gig_blocks_date_and_logs_income(self, client: AsyncClient, db_session, artist, artist_headers):
        payload = {"event_name": "Wedding", "date": future(12).isoformat(), "start_time": "19:00", "payment": 900}

        response = await client.post("/api/v1/manual-gigs", json=payload, headers=artist_headers)
        assert response.status_code == 201
        assert response.json()["event_name"] == "Wedding"

        await db_session.refresh(artist)
        assert future(12).isoformat() in artist.booked_dates

        finances = await client.get("/api/v1/finances", headers=artist_headers)
        entries = finances.json()
        assert len(entries) == 1
        assert entries[0]["description"] == "Show: Wedding"
        assert entries[0]["type"] == "income"
        assert entries[0]["category"] == "Fee"
        assert entries[0]["status"] == "pending"
        assert entries[0]["value"] == 900.0

    @pytest.mark.asyncio
    async def test_free_gig_logs_nothing(self, client: AsyncClient, artist_headers):
        payload = {"event_name": "Charity night", "date": future(3).isoformat()}
        response = await client.post("/api/v1/manual-gigs", json=payload, headers=artist_headers)
        assert response.status_code == 201

        finances = await client.get("/api/v1/finances", headers=artist_headers)
        assert finances.json() == []

    @pytest.mark.asyncio
    async def test_delete_frees_date(self, client: AsyncClient, db_session, artist, artist_headers):
        created = await client.post(
            "/api/v1/manual-gigs",
            json={"event_name": "Pub", "date": future(7).isoformat()},
            headers=artist_headers
        )
        gig_id = created.json()["id"]

        response = await client.delete(f"/api/v1/manual-gigs/{gig_id}", headers=artist_headers)
        assert response.status_code == 200

        await db_session.refresh(artist)
        assert future(7).isoformat() not in artist.booked_dates
        listing = await client.get("/api/v1/manual-gigs", headers=artist_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_delete_keeps_date_still_booked(self, client: AsyncClient, db_session, artist, venue, artist_headers):
        day = future(9)
        db_session.add(Booking(
            artist_id=artist.id,
            venue_id=venue.id,
            plan_id=1,
            date=day,
            payment=Decimal("1500"),
            status=BookingStatus.PAID,
            payout_status=PayoutStatus.PENDING,
            confirmation_pin="4321"
        ))
        await db_session.commit()

        created = await client.post(
            "/api/v1/manual-gigs",
            json={"event_name": "Afternoon set", "date": day.isoformat()},
            headers=artist_headers
        )
        await client.delete(f"/api/v1/manual-gigs/{created.json()['id']}", headers=artist_headers)

        await db_session.refresh(artist)
        assert day.isoformat() in artist.booked_dates

    @pytest.mark.asyncio
    async def test_moving_gig_moves_booked_date(self, client: AsyncClient, db_session, artist, artist_headers):
        created = await client.post(
            "/api/v1/manual-gigs",
            json={"event_name": "Festival", "date": future(14).isoformat()},
            headers=artist_headers
        )

        response = await client.put(
            f"/api/v1/manual-gigs/{created.json()['id']}",
            json={"date": future(15).isoformat()},
            headers=artist_headers
        )
        assert response.status_code == 200
        assert response.json()["event_name"] == "Festival"

        await db_session.refresh(artist)
        assert future(15).isoformat() in artist.booked_dates
        assert future(14).isoformat() not in artist.booked_dates

    @pytest.mark.asyncio
    async def test_other_artist_cannot_see_gig(self, client: AsyncClient, db_session, artist_headers):
        created = await client.post(
            "/api/v1/manual-gigs",
            json={"event_name": "Private", "date": future(4).isoformat()},
            headers=artist_headers
        )
        other_user, _ = await create_artist(db_session, name="Nosy Band")

        response = await client.get(
            f"/api/v1/manual-gigs/{created.json()['id']}",
            headers=auth_headers_for(other_user)
        )
        assert response.status_code == 404


class TestPersonalFinances:

    @pytest.mark.asyncio
    async def test_transaction_lifecycle(self, client: AsyncClient, artist_headers):
        created = await client.post(
            "/api/v1/finances",
            json={
                "type": "expense",
                "description": "New strings",
                "category": "Equipment",
                "value": 120.5,
                "date": future(0).isoformat()
            },
            headers=artist_headers
        )
        assert created.status_code == 201
        transaction_id = created.json()["id"]
        assert created.json()["status"] == "pending"

        updated = await client.put(
            f"/api/v1/finances/{transaction_id}",
            json={"value": 150, "description": "Strings and picks"},
            headers=artist_headers
        )
        assert updated.status_code == 200
        assert updated.json()["value"] == 150.0
        assert updated.json()["type"] == "expense"

        paid = await client.patch(
            f"/api/v1/finances/{transaction_id}/status",
            json={"status": "paid"},
            headers=artist_headers
        )
        assert paid.json()["status"] == "paid"

        deleted = await client.delete(f"/api/v1/finances/{transaction_id}", headers=artist_headers)
        assert deleted.status_code == 200
        listing = await client.get("/api/v1/finances", headers=artist_headers)
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_cannot_touch_other_artists_entries(self, client: AsyncClient, db_session, artist_headers):
        created = await client.post(
            "/api/v1/finances",
            json={"type": "income", "description": "Tips", "value": 50, "date": future(0).isoformat()},
            headers=artist_headers
        )
        other_user, _ = await create_artist(db_session, name="Other Band")

        response = await client.delete(
            f"/api/v1/finances/{created.json()['id']}",
            headers=auth_headers_for(other_user)
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_venue_has_no_personal_ledger(self, client: AsyncClient, venue_headers):
        response = await client.get("/api/v1/finances", headers=venue_headers)
        assert response.status_code == 403
