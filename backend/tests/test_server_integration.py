"""Integration tests for FastAPI server endpoints.

Uses httpx.AsyncClient with ASGITransport to test the REST API
without starting a real server. Redis is patched to use fakeredis.
"""

import time

import pytest
from unittest.mock import patch
from httpx import AsyncClient, ASGITransport

from antenna.errors import ComputationError, InputError, NotFoundError


# ── Patch Redis before importing the server ──────────────────────────────

@pytest.fixture
def patched_app(r):
    """Import and patch the FastAPI app to use the test's fakeredis everywhere."""
    with (
        patch("antenna.server._get_redis", return_value=r),
        patch("antenna.store.source_store._get_redis", return_value=r),
    ):
        from antenna.server import app
        yield app


@pytest.fixture
async def client(patched_app):
    transport = ASGITransport(app=patched_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ═══════════════════════════════════════════════════════════════════════════
# Health Check
# ═══════════════════════════════════════════════════════════════════════════


class TestHealthEndpoint:
    @pytest.mark.asyncio
    async def test_health_returns_ok(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["redis"] is True


# ═══════════════════════════════════════════════════════════════════════════
# DNA Metrics
# ═══════════════════════════════════════════════════════════════════════════


class TestDnaMetricsEndpoint:
    @pytest.mark.asyncio
    async def test_missing_user_id_is_400(self, client):
        resp = await client.get("/api/dna-metrics")
        assert resp.status_code == 400
        assert resp.json()["error"] == "user_id required"

    @pytest.mark.asyncio
    async def test_blank_user_id_is_400(self, client):
        resp = await client.get("/api/dna-metrics", params={"user_id": "  "})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_user_is_404(self, client):
        resp = await client.get("/api/dna-metrics", params={"user_id": "ghost"})
        assert resp.status_code == 404
        assert resp.json()["error"] == "Profile not found"

    @pytest.mark.asyncio
    async def test_report_shape(self, client, rarity_population):
        resp = await client.get("/api/dna-metrics", params={"user_id": rarity_population})
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalUsers"] == 10

        metrics = data["userMetrics"]
        expected_keys = {
            "keywordCount", "percentile", "rarestSkills", "topRarestSkill", "rarestCombo",
            "collabCount", "collabPercentile", "avgCollabs", "projectCount", "certCount",
            "totalShowcase", "daysActive", "journalCount", "topMatchScore", "highMatchCount",
            "skillGrowth", "signalClassification", "similarProfessionals",
            "complementarySkills",
        }
        assert set(metrics) == expected_keys
        assert metrics["topRarestSkill"] == {"skill": "sql", "count": 1, "percentage": 10.0}
        assert metrics["rarestSkills"][0] == metrics["topRarestSkill"]
        assert set(metrics["signalClassification"]) == {"core", "recent", "hidden"}

    @pytest.mark.asyncio
    async def test_similar_professionals_use_camel_case(self, client, seed_user):
        seed_user("me", ["java", "spring"])
        seed_user("a", ["java", "spring", "kafka"])
        resp = await client.get("/api/dna-metrics", params={"user_id": "me"})
        similar = resp.json()["userMetrics"]["similarProfessionals"]
        assert similar == [{"userId": "a", "similarity": 67, "sharedSkills": 2}]

    @pytest.mark.asyncio
    async def test_rarest_combo_null_when_no_pair(self, client, seed_user):
        seed_user("me", ["python"])
        resp = await client.get("/api/dna-metrics", params={"user_id": "me"})
        assert resp.json()["userMetrics"]["rarestCombo"] is None

    @pytest.mark.asyncio
    async def test_engine_errors_map_to_their_status(self, client):
        with patch("antenna.server.compute_report", side_effect=InputError("bad user id")):
            resp = await client.get("/api/dna-metrics", params={"user_id": "me"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "bad user id"

        with patch("antenna.server.compute_report",
                   side_effect=NotFoundError("me", "keyword profile")):
            resp = await client.get("/api/dna-metrics", params={"user_id": "me"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "Profile not found"}

    @pytest.mark.asyncio
    async def test_computation_failure_is_500(self, client, seed_user):
        seed_user("me", ["python"])
        err = ComputationError("me", RuntimeError("store exploded"))
        with patch("antenna.server.compute_report", side_effect=err):
            resp = await client.get("/api/dna-metrics", params={"user_id": "me"})
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "Failed to fetch metrics"
        assert "store exploded" in body["details"]

    @pytest.mark.asyncio
    async def test_timeout_is_504(self, client, seed_user):
        seed_user("me", ["python"])
        with patch("antenna.server.REPORT_TIMEOUT_SECONDS", 0.01), \
                patch("antenna.server.compute_report",
                      side_effect=lambda *a, **k: time.sleep(0.5)):
            resp = await client.get("/api/dna-metrics", params={"user_id": "me"})
        assert resp.status_code == 504
