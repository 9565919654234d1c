"""
Tests for the health probes and the root endpoint
"""

import pytest
from httpx import AsyncClient


class TestHealth:

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    @pytest.mark.asyncio
    async def test_readiness(self, client: AsyncClient):
        response = await client.get("/api/v1/health/ready")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["checks"] == {"database": True, "redis": True, "api": True}

    @pytest.mark.asyncio
    async def test_unknown_route_uses_error_envelope(self, client: AsyncClient):
        response = await client.get("/api/v1/nowhere")
        assert response.status_code == 404
        assert response.json()["success"] is False
