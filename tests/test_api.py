# tests/test_api.py

"""
API Endpoint Tests - Tests for all FastAPI endpoints
"""

import pytest
from fastapi import status
from unittest.mock import MagicMock, patch

from healthscore.main import app
from healthscore.core.dependencies import get_health_score_service
from healthscore.core.exceptions import (
    MarketDataException,
    MarketDataNotConfiguredException,
    RateLimitedException,
)
from healthscore.models.enumerations import Action
from healthscore.models.stock import HealthScoreResult
from healthscore.scoring.integration_service import HealthScoreService
from healthscore.services.cache import get_cache
from healthscore.services.evidence_seed import EVIDENCE_CATALOG


# ROOT AND HEALTH ENDPOINT TESTS


class TestRootEndpoint:

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"


class TestHealthEndpoint:
    """Tests for GET /health endpoint."""

    def test_all_healthy(self, client):
        with patch("healthscore.routers.health.check_redis", return_value="healthy"), \
             patch("healthscore.routers.health.check_market_data", return_value="healthy (configured)"):
            response = client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert set(data["dependencies"]) == {"redis", "alpha_vantage"}

    def test_degraded(self, client):
        with patch("healthscore.routers.health.check_redis", return_value="unhealthy: refused"), \
             patch("healthscore.routers.health.check_market_data", return_value="healthy (configured)"):
            response = client.get("/health")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json()["status"] == "degraded"


# EVIDENCE ENDPOINT TESTS


class TestEvidenceEndpoints:
    """Tests for /api/v1/evidence endpoints."""

    def test_get_evidence(self, client):
        response = client.get("/api/v1/evidence/panw")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        for pillar in ("F", "M", "B", "L", "A", "E"):
            assert pillar in data
        assert sum(data[p] for p in ("F", "M", "B", "L", "A", "E")) <= 10
        assert data["L"] >= data["A"]
        assert len(data["items"]) <= 1

    def test_unknown_ticker_returns_zeros(self, client):
        response = client.get("/api/v1/evidence/NOPE")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["L"] == 0
        assert data["items"] == []

    def test_seed(self, client, evidence_store):
        response = client.post("/api/v1/evidence/seed")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "tickers_seeded": len(EVIDENCE_CATALOG)}
        assert len(evidence_store.get("ZS")) == 2


# STOCK SCORE ENDPOINT TESTS


class TestStockEndpoint:
    """Tests for GET /api/v1/stocks/{symbol}."""

    def test_score(self, client):
        response = client.get("/api/v1/stocks/acme")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["symbol"] == "ACME"
        assert 0 <= data["score"] <= 100
        assert data["action"] in ("BUY", "HOLD", "SELL")
        assert set(data["breakdown"]) == {"growth", "value", "health", "momentum"}
        assert data["financial_scores"]["quality"]["f_score"] >= 0
        assert data["from_cache"] is False

    def test_unknown_symbol_404(self, client):
        response = client.get("/api/v1/stocks/ZZZZ")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_upstream_failure_502(self, client, aggregator, fake_market_client):
        failing = fake_market_client({}, error=MarketDataException("API limit reached"))
        app.dependency_overrides[get_health_score_service] = lambda: HealthScoreService(
            aggregator=aggregator, market_client=failing
        )
        response = client.get("/api/v1/stocks/ACME")
        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert "API limit reached" in response.json()["detail"]

    def test_not_configured_503(self, client, aggregator, fake_market_client):
        failing = fake_market_client({}, error=MarketDataNotConfiguredException())
        app.dependency_overrides[get_health_score_service] = lambda: HealthScoreService(
            aggregator=aggregator, market_client=failing
        )
        response = client.get("/api/v1/stocks/ACME")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    def test_ethics_exclusion(self, client, aggregator, fake_market_client, sample_overview):
        overview = {**sample_overview, "Symbol": "LMT", "Name": "Lockheed Martin Corp"}
        app.dependency_overrides[get_health_score_service] = lambda: HealthScoreService(
            aggregator=aggregator, market_client=fake_market_client({"LMT": overview})
        )
        response = client.get("/api/v1/stocks/LMT")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["action"] == "EXCLUDE"
        assert data["score"] == 0
        assert data["ethics_violation"] is True

    def test_cache_hit(self, client, market_client):
        cached = HealthScoreResult(symbol="ACME", score=77, action=Action.BUY)
        mock_cache = MagicMock()
        mock_cache.get.return_value = cached
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.get("/api/v1/stocks/ACME")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["score"] == 77
        assert response.json()["from_cache"] is True
        assert market_client.calls == []
        mock_cache.set.assert_not_called()

    def test_refresh_bypasses_cache(self, client, market_client):
        mock_cache = MagicMock()
        mock_cache.get.return_value = HealthScoreResult(symbol="ACME", score=77, action=Action.BUY)
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.get("/api/v1/stocks/ACME?refresh=true")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["from_cache"] is False
        assert "OVERVIEW:ACME" in market_client.calls
        mock_cache.get.assert_not_called()
        key, _, ttl = mock_cache.set.call_args.args
        assert key == "stock:ACME"
        assert ttl == 3600

    def test_cache_miss_stores_result(self, client):
        mock_cache = MagicMock()
        mock_cache.get.return_value = None
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.get("/api/v1/stocks/ACME")

        assert response.status_code == status.HTTP_200_OK
        mock_cache.set.assert_called_once()

    def test_rate_limited_serves_cached_score_on_refresh(self, client, aggregator, fake_market_client):
        limited = fake_market_client({}, error=RateLimitedException("Thank you for using Alpha Vantage!"))
        app.dependency_overrides[get_health_score_service] = lambda: HealthScoreService(
            aggregator=aggregator, market_client=limited
        )
        mock_cache = MagicMock()
        mock_cache.get.return_value = HealthScoreResult(symbol="ACME", score=64, action=Action.HOLD)
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.get("/api/v1/stocks/ACME?refresh=true")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["score"] == 64
        assert data["from_cache"] is True
        assert data["rate_limited"] is True
        assert limited.calls == ["OVERVIEW:ACME"]
        mock_cache.set.assert_not_called()

    def test_rate_limited_without_cache_429(self, client, aggregator, fake_market_client):
        limited = fake_market_client({}, error=RateLimitedException("Our standard API rate limit is 25 requests per day."))
        app.dependency_overrides[get_health_score_service] = lambda: HealthScoreService(
            aggregator=aggregator, market_client=limited
        )

        response = client.get("/api/v1/stocks/ACME")

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert "25 requests per day" in response.json()["detail"]

    def test_metrics_block(self, client):
        response = client.get("/api/v1/stocks/ACME")
        metrics = response.json()["metrics"]
        assert metrics["pe_ratio"] == pytest.approx(18.5)
        assert metrics["debt_to_equity"] == pytest.approx(0.6)
        assert metrics["revenue_growth"] == pytest.approx(0.08)


class TestCacheEndpoints:
    """Tests for the /api/v1/stocks/cache endpoints."""

    def test_clear(self, client):
        mock_cache = MagicMock()
        mock_cache.delete_pattern.return_value = 4
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.delete("/api/v1/stocks/cache")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"deleted": 4}
        mock_cache.delete_pattern.assert_called_once_with("stock:*")

    def test_clear_without_redis(self, client):
        response = client.delete("/api/v1/stocks/cache")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    def test_list(self, client):
        cached = {
            "stock:ACME": HealthScoreResult(
                symbol="ACME", company_name="Acme Software Inc", score=70, action=Action.BUY
            ),
        }
        mock_cache = MagicMock()
        mock_cache.keys.return_value = ["stock:ZS", "stock:ACME"]
        mock_cache.get.side_effect = lambda key, model: cached.get(key)
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.get("/api/v1/stocks/cache")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["count"] == 2
        acme, zs = data["stocks"]
        assert acme["symbol"] == "ACME"
        assert acme["company_name"] == "Acme Software Inc"
        assert acme["scored_at"] is not None
        # expired between SCAN and GET
        assert zs == {"symbol": "ZS", "company_name": "ZS", "scored_at": None}
        mock_cache.keys.assert_called_once_with("stock:*")

    def test_list_without_redis(self, client):
        response = client.get("/api/v1/stocks/cache")
        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE

    def test_clear_symbol(self, client):
        mock_cache = MagicMock()
        mock_cache.delete.return_value = 1
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.delete("/api/v1/stocks/cache/acme")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"deleted": 1}
        mock_cache.delete.assert_called_once_with("stock:ACME")
        mock_cache.delete_pattern.assert_not_called()

    def test_clear_symbol_not_cached(self, client):
        mock_cache = MagicMock()
        mock_cache.delete.return_value = 0
        app.dependency_overrides[get_cache] = lambda: mock_cache

        response = client.delete("/api/v1/stocks/cache/ZZZZ")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"deleted": 0}
