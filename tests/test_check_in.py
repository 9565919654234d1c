"""
Tests for artist check-in with the venue's confirmation PIN
"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

from groove.models import Booking, BookingStatus, PayoutStatus
from tests.conftest import auth_headers_for, create_artist, future, recorded_statements, selects_from


@pytest.fixture
def single_date_payload(booking_payload):
    return dict(booking_payload, dates=booking_payload["dates"][:1])


async def book(client, venue_headers, payload):
    response = await client.post("/api/v1/bookings", json=payload, headers=venue_headers)
    assert response.status_code == 201
    return response.json()[0]


def wrong_pin(pin: str) -> str:
    return "1000" if pin != "1000" else "1001"


class TestCheckIn:
    """Booked artist confirms presence with the 4-digit code"""

    @pytest.mark.asyncio
    async def test_correct_pin_checks_in(self, client: AsyncClient, artist_headers, venue_headers, single_date_payload):
        booking = await book(client, venue_headers, single_date_payload)

        response = await client.post(
            f"/api/v1/bookings/{booking['id']}/check-in",
            json={"pin": booking["confirmation_pin"]},
            headers=artist_headers
        )
        assert response.status_code == 200
        data = response.json()
        assert data["artist_checked_in"] is True
        assert data["check_in_time"] is not None

        venue_view = await client.get("/api/v1/bookings/venue/me", headers=venue_headers)
        assert venue_view.json()[0]["artist_checked_in"] is True

    @pytest.mark.asyncio
    async def test_wrong_pin_is_rejected(self, client: AsyncClient, artist_headers, venue_headers, single_date_payload):
        booking = await book(client, venue_headers, single_date_payload)

        response = await client.post(
            f"/api/v1/bookings/{booking['id']}/check-in",
            json={"pin": wrong_pin(booking["confirmation_pin"])},
            headers=artist_headers
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PIN"

        detail = await client.get(f"/api/v1/bookings/{booking['id']}", headers=artist_headers)
        assert detail.json()["artist_checked_in"] is False

    @pytest.mark.asyncio
    async def test_second_check_in_conflicts(self, client: AsyncClient, artist_headers, venue_headers, single_date_payload):
        booking = await book(client, venue_headers, single_date_payload)
        url = f"/api/v1/bookings/{booking['id']}/check-in"

        first = await client.post(url, json={"pin": booking["confirmation_pin"]}, headers=artist_headers)
        assert first.status_code == 200

        # Already checked in wins over a wrong code
        again = await client.post(url, json={"pin": wrong_pin(booking["confirmation_pin"])}, headers=artist_headers)
        assert again.status_code == 409
        assert again.json()["error"]["code"] == "ALREADY_CHECKED_IN"

    @pytest.mark.asyncio
    async def test_other_artist_forbidden(self, client: AsyncClient, db_session, venue_headers, single_date_payload):
        booking = await book(client, venue_headers, single_date_payload)
        other_user, _ = await create_artist(db_session, name="Another Band")

        response = await client.post(
            f"/api/v1/bookings/{booking['id']}/check-in",
            json={"pin": booking["confirmation_pin"]},
            headers=auth_headers_for(other_user)
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_venue_cannot_check_in(self, client: AsyncClient, venue_headers, single_date_payload):
        booking = await book(client, venue_headers, single_date_payload)

        response = await client.post(
            f"/api/v1/bookings/{booking['id']}/check-in",
            json={"pin": booking["confirmation_pin"]},
            headers=venue_headers
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pin", ["12a4", "123", "12345", ""])
    async def test_malformed_pin(self, client: AsyncClient, artist_headers, venue_headers, single_date_payload, pin):
        booking = await book(client, venue_headers, single_date_payload)

        response = await client.post(
            f"/api/v1/bookings/{booking['id']}/check-in",
            json={"pin": pin},
            headers=artist_headers
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_booking(self, client: AsyncClient, artist_headers):
        from uuid import uuid4
        response = await client.post(
            f"/api/v1/bookings/{uuid4()}/check-in",
            json={"pin": "1234"},
            headers=artist_headers
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_booking_row_is_reloaded_for_check_in(self, client: AsyncClient, db_session, test_db, artist, venue, artist_headers):
        # Booking already sits in the session's identity map
        booking = Booking(
            artist_id=artist.id,
            venue_id=venue.id,
            plan_id=1,
            date=future(2),
            payment=Decimal("1500.00"),
            status=BookingStatus.PAID,
            payout_status=PayoutStatus.PENDING,
            confirmation_pin="2468",
            artist_checked_in=False
        )
        db_session.add(booking)
        await db_session.commit()

        with recorded_statements(test_db) as statements:
            response = await client.post(
                f"/api/v1/bookings/{booking.id}/check-in",
                json={"pin": "2468"},
                headers=artist_headers
            )

        assert response.status_code == 200
        assert len(selects_from(statements, "bookings")) == 1
