"""
Tests for the referral programme and PRO subscriptions
"""

import pytest
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient

from groove.services.referral_service import add_months, extend_subscription, is_currently_pro
from tests.conftest import create_artist


class TestSubscriptionMath:

    def test_add_months_clamps_to_month_end(self):
        moment = datetime(2026, 1, 31, 12, 0, tzinfo=timezone.utc)
        assert add_months(moment, 1) == datetime(2026, 2, 28, 12, 0, tzinfo=timezone.utc)
        assert add_months(moment, 13) == datetime(2027, 2, 28, 12, 0, tzinfo=timezone.utc)

    def test_add_months_crosses_year(self):
        moment = datetime(2026, 11, 15, tzinfo=timezone.utc)
        assert add_months(moment, 3) == datetime(2027, 2, 15, tzinfo=timezone.utc)

    def test_extend_from_now_when_expired(self):
        class Profile:
            is_pro = False
            pro_subscription_ends_at = datetime(2020, 1, 1, tzinfo=timezone.utc)

        now = datetime(2026, 3, 10, tzinfo=timezone.utc)
        profile = Profile()
        assert extend_subscription(profile, 1, now=now) == datetime(2026, 4, 10, tzinfo=timezone.utc)
        assert profile.is_pro is True

    def test_extend_stacks_on_active_subscription(self):
        class Profile:
            is_pro = True
            pro_subscription_ends_at = datetime(2026, 5, 20, tzinfo=timezone.utc)

        now = datetime(2026, 3, 10, tzinfo=timezone.utc)
        assert extend_subscription(Profile(), 1, now=now) == datetime(2026, 6, 20, tzinfo=timezone.utc)

    def test_naive_end_date_treated_as_utc(self):
        class Profile:
            is_pro = False
            pro_subscription_ends_at = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=3)

        assert is_currently_pro(Profile()) is True


class TestReferrals:

    @pytest.mark.asyncio
    async def test_stats_for_referrer(self, client: AsyncClient, db_session, artist, artist_headers):
        await create_artist(db_session, name="Referred One", referred_by=artist.id)
        await create_artist(db_session, name="Referred Pro", referred_by=artist.id, is_pro=True)

        response = await client.get("/api/v1/referrals/me", headers=artist_headers)
        assert response.status_code == 200
        stats = response.json()
        assert stats["total_referrals"] == 2
        assert stats["pro_conversions"] == 1
        assert {r["name"]: r["status"] for r in stats["referrals"]} == {
            "Referred One": "registered",
            "Referred Pro": "pro",
        }

    @pytest.mark.asyncio
    async def test_activate_pro_rewards_referrer(self, client: AsyncClient, db_session, artist, admin_headers):
        _, referred = await create_artist(db_session, name="New Pro", referred_by=artist.id)

        response = await client.post(f"/api/v1/admin/artists/{referred.id}/activate-pro", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"artist_id": str(referred.id), "is_pro": True, "referral_rewarded": True}

        await db_session.refresh(artist)
        assert artist.is_pro is True
        assert artist.pro_subscription_ends_at is not None

    @pytest.mark.asyncio
    async def test_activate_pro_without_referrer(self, client: AsyncClient, artist, admin_headers):
        response = await client.post(f"/api/v1/admin/artists/{artist.id}/activate-pro?months=3", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["referral_rewarded"] is False
        assert response.json()["is_pro"] is True

    @pytest.mark.asyncio
    async def test_manual_reward(self, client: AsyncClient, db_session, artist, admin_headers):
        _, referred = await create_artist(db_session, name="Referred", referred_by=artist.id)

        response = await client.post(f"/api/v1/admin/artists/{referred.id}/referral-reward", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = await client.post(f"/api/v1/admin/artists/{artist.id}/referral-reward", headers=admin_headers)
        assert response.json()["success"] is False
