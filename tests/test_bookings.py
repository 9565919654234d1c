"""
Tests for booking creation, listings, calendar and revenue
"""

import pytest
from datetime import timedelta
from decimal import Decimal
from httpx import AsyncClient
from sqlalchemy import func, select

from groove.models import ArtistStatus, Booking, BookingStatus, ManualGig, PayoutStatus, SpecialPrice
from groove.services.booking_service import generate_confirmation_pin, today
from tests.conftest import auth_headers_for, create_artist, future


async def add_booking(db_session, artist_id, venue_id, day, plan_id=1, payment="1500.00", payout=PayoutStatus.PENDING):
    booking = Booking(
        artist_id=artist_id,
        venue_id=venue_id,
        plan_id=plan_id,
        date=day,
        payment=Decimal(payment),
        status=BookingStatus.PAID,
        payout_status=payout,
        confirmation_pin=generate_confirmation_pin(),
        artist_checked_in=False
    )
    db_session.add(booking)
    await db_session.commit()
    return booking


class TestCreateBooking:
    """Venue books an artist's plan on one or more dates"""

    @pytest.mark.asyncio
    async def test_create_booking_one_per_date(self, client: AsyncClient, db_session, artist, venue_headers, booking_payload):
        response = await client.post("/api/v1/bookings", json=booking_payload, headers=venue_headers)
        assert response.status_code == 201

        bookings = response.json()
        assert len(bookings) == 2
        assert {b["date"] for b in bookings} == set(booking_payload["dates"])
        for booking in bookings:
            assert booking["status"] == "paid"
            assert booking["payout_status"] == "pending"
            assert booking["payment"] == 1500.0
            assert booking["artist_checked_in"] is False
            assert len(booking["confirmation_pin"]) == 4
            assert booking["confirmation_pin"].isdigit()

        await db_session.refresh(artist)
        assert artist.booked_dates == sorted(booking_payload["dates"])

    @pytest.mark.asyncio
    async def test_taken_date_is_rejected_atomically(self, client: AsyncClient, db_session, artist, venue_headers, booking_payload):
        artist_id = artist.id
        first = await client.post("/api/v1/bookings", json=booking_payload, headers=venue_headers)
        assert first.status_code == 201

        overlapping = dict(booking_payload, dates=[future(20).isoformat(), booking_payload["dates"][1]])
        response = await client.post("/api/v1/bookings", json=overlapping, headers=venue_headers)
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "DATES_UNAVAILABLE"
        assert error["details"]["unavailable_dates"] == [booking_payload["dates"][1]]

        count = await db_session.execute(select(func.count(Booking.id)).where(Booking.artist_id == artist_id))
        assert count.scalar_one() == 2
        await db_session.refresh(artist)
        assert future(20).isoformat() not in artist.booked_dates

    @pytest.mark.asyncio
    async def test_duplicate_dates_in_request(self, client: AsyncClient, venue_headers, booking_payload):
        payload = dict(booking_payload, dates=[future(5).isoformat(), future(5).isoformat()])
        response = await client.post("/api/v1/bookings", json=payload, headers=venue_headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_empty_dates(self, client: AsyncClient, venue_headers, booking_payload):
        response = await client.post("/api/v1/bookings", json=dict(booking_payload, dates=[]), headers=venue_headers)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_plan(self, client: AsyncClient, venue_headers, booking_payload):
        response = await client.post("/api/v1/bookings", json=dict(booking_payload, plan_id=99), headers=venue_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_blocked_artist_cannot_be_booked(self, client: AsyncClient, db_session, venue_headers):
        _, blocked = await create_artist(db_session, name="Blocked Band", status=ArtistStatus.BLOCKED)
        payload = {"artist_id": str(blocked.id), "plan_id": 1, "dates": [future(3).isoformat()]}

        response = await client.post("/api/v1/bookings", json=payload, headers=venue_headers)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "ARTIST_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_only_venues_book(self, client: AsyncClient, artist_headers, booking_payload):
        response = await client.post("/api/v1/bookings", json=booking_payload, headers=artist_headers)
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_special_price_is_charged(self, client: AsyncClient, db_session, artist, venue, venue_headers, booking_payload):
        db_session.add(SpecialPrice(artist_id=artist.id, venue_id=venue.id, plan_id=1, special_price=Decimal("1200.00")))
        await db_session.commit()

        response = await client.post("/api/v1/bookings", json=booking_payload, headers=venue_headers)
        assert response.status_code == 201
        assert all(b["payment"] == 1200.0 for b in response.json())


class TestBookingViews:

    @pytest.mark.asyncio
    async def test_artist_view_hides_pin(self, client: AsyncClient, artist_headers, venue_headers, booking_payload):
        await client.post("/api/v1/bookings", json=booking_payload, headers=venue_headers)

        response = await client.get("/api/v1/bookings/artist/me", headers=artist_headers)
        assert response.status_code == 200
        bookings = response.json()
        assert len(bookings) == 2
        for booking in bookings:
            assert booking["confirmation_pin"] is None
            assert booking["venue_name"] == "Blue Note Bar"
            assert booking["plan_name"] == "Acoustic duo"
            assert booking["plan_price"] == 1500.0
        # Newest date first
        assert bookings[0]["date"] > bookings[1]["date"]

    @pytest.mark.asyncio
    async def test_venue_view_shows_pin(self, client: AsyncClient, venue_headers, booking_payload):
        created = await client.post("/api/v1/bookings", json=booking_payload, headers=venue_headers)
        pins = {b["id"]: b["confirmation_pin"] for b in created.json()}

        response = await client.get("/api/v1/bookings/venue/me", headers=venue_headers)
        assert response.status_code == 200
        for booking in response.json():
            assert booking["confirmation_pin"] == pins[booking["id"]]
            assert booking["artist_name"] == "The Night Owls"

    @pytest.mark.asyncio
    async def test_todays_booking_for_venue(self, client: AsyncClient, db_session, artist, venue, venue_headers):
        booking = await add_booking(db_session, artist.id, venue.id, today())

        response = await client.get("/api/v1/bookings/venue/me/today", headers=venue_headers)
        assert response.status_code == 200
        assert response.json()["id"] == str(booking.id)
        assert response.json()["confirmation_pin"] == booking.confirmation_pin

    @pytest.mark.asyncio
    async def test_no_booking_today(self, client: AsyncClient, venue_headers):
        response = await client.get("/api/v1/bookings/venue/me/today", headers=venue_headers)
        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_booking_detail_is_private(self, client: AsyncClient, db_session, artist, venue, other_venue_account):
        booking = await add_booking(db_session, artist.id, venue.id, future(4))
        outsider, _ = other_venue_account

        response = await client.get(f"/api/v1/bookings/{booking.id}", headers=auth_headers_for(outsider))
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_sees_pin_on_detail(self, client: AsyncClient, db_session, artist, venue, admin_headers):
        booking = await add_booking(db_session, artist.id, venue.id, future(4))

        response = await client.get(f"/api/v1/bookings/{booking.id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["confirmation_pin"] == booking.confirmation_pin

    @pytest.mark.asyncio
    async def test_calendar_merges_manual_gigs(self, client: AsyncClient, db_session, artist, venue, artist_headers):
        await add_booking(db_session, artist.id, venue.id, future(8))
        db_session.add(ManualGig(artist_id=artist.id, event_name="Wedding", date=future(2), payment=Decimal("800")))
        await db_session.commit()

        response = await client.get("/api/v1/bookings/artist/me/calendar", headers=artist_headers)
        assert response.status_code == 200
        entries = response.json()
        assert [e["title"] for e in entries] == ["Wedding", "Blue Note Bar"]
        assert [e["is_manual"] for e in entries] == [True, False]


class TestRevenueAndSync:

    @pytest.mark.asyncio
    async def test_revenue_counts_paid_out_bookings_in_window(self, client: AsyncClient, db_session, artist, venue, artist_headers):
        await add_booking(db_session, artist.id, venue.id, today() - timedelta(days=5), payout=PayoutStatus.PAID)
        await add_booking(db_session, artist.id, venue.id, today() - timedelta(days=3), plan_id=2, payout=PayoutStatus.PENDING)
        await add_booking(db_session, artist.id, venue.id, today() - timedelta(days=60), payout=PayoutStatus.PAID)
        await add_booking(db_session, artist.id, venue.id, today() - timedelta(days=1), plan_id=None, payment="700.00", payout=PayoutStatus.PAID)

        response = await client.get("/api/v1/bookings/artist/me/revenue", headers=artist_headers)
        assert response.status_code == 200
        assert response.json()["window_days"] == 30
        assert response.json()["total"] == 2200.0

    @pytest.mark.asyncio
    async def test_sync_rebuilds_booked_dates(self, client: AsyncClient, db_session, artist, venue, artist_headers):
        await add_booking(db_session, artist.id, venue.id, future(6))
        artist.booked_dates = ["2001-01-01"]
        await db_session.commit()

        response = await client.post("/api/v1/bookings/artist/me/sync-dates", headers=artist_headers)
        assert response.status_code == 200
        assert response.json()["booked_dates"] == [future(6).isoformat()]
