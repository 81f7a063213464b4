# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration and data for scoring, services and APIs

REFERENCE DATES:
- TODAY: 2025-06-15 (same day as the PANW / ZS Gartner MQ catalog entries)
- Evidence 36 months old: 2022-06-15
"""

import pytest
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient

from healthscore.main import app
from healthscore.core.dependencies import (
    get_evidence_aggregator,
    get_evidence_store,
    get_health_score_service,
)
from healthscore.core.exceptions import SymbolNotFoundException
from healthscore.models.evidence import EvidenceRecord
from healthscore.models.stock import MarketSnapshot
from healthscore.scoring.evidence_aggregator import EvidenceAggregator
from healthscore.scoring.integration_service import HealthScoreService
from healthscore.services.cache import get_cache
from healthscore.services.evidence_store import InMemoryEvidenceStore


TODAY = date(2025, 6, 15)


# =============================================================================
# EVIDENCE FIXTURES
# =============================================================================

def make_record(**overrides) -> EvidenceRecord:
    """EvidenceRecord with PANW Gartner MQ Leader defaults."""
    data: Dict[str, Any] = {
        "source": "Gartner MQ",
        "domain": "Cybersecurity",
        "symbol": "PANW",
        "tier": "Leader",
        "as_of": TODAY,
        "weight_vector": {"L": 0.6, "A": 0.4},
        "decay_months": 18,
    }
    data.update(overrides)
    return EvidenceRecord.model_validate(data)


@pytest.fixture
def record_factory():
    """Build EvidenceRecords from keyword overrides."""
    return make_record


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def leader_record() -> EvidenceRecord:
    """Fresh Gartner MQ Leader, {L: 0.6, A: 0.4}, decay 18."""
    return make_record()


@pytest.fixture
def evidence_store(leader_record) -> InMemoryEvidenceStore:
    return InMemoryEvidenceStore({"PANW": [leader_record]})


@pytest.fixture
def aggregator(evidence_store) -> EvidenceAggregator:
    return EvidenceAggregator(store=evidence_store)


# =============================================================================
# MARKET DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_overview() -> Dict[str, Any]:
    """Alpha Vantage OVERVIEW payload (all values are strings, as served)."""
    return {
        "Symbol": "ACME",
        "Name": "Acme Software Inc",
        "Description": "Acme builds developer tooling and cloud services.",
        "Sector": "TECHNOLOGY",
        "Industry": "SERVICES-PREPACKAGED SOFTWARE",
        "MarketCapitalization": "100000000000",
        "PERatio": "18.5",
        "PriceToBookRatio": "4.2",
        "EPS": "5.0",
        "DividendYield": "0.012",
        "EVToEBITDA": "14.0",
        "52WeekHigh": "200.0",
        "52WeekLow": "100.0",
        "QuarterlyEarningsGrowthYOY": "0.12",
        "QuarterlyRevenueGrowthYOY": "0.08",
        "ProfitMargin": "0.22",
        "OperatingMarginTTM": "0.28",
        "ReturnOnEquityTTM": "0.18",
        "ReturnOnAssetsTTM": "0.09",
        "CurrentRatio": "1.8",
        "DebtToEquity": "0.6",
        "RevenueTTM": "40000000000",
        "GrossProfitTTM": "28000000000",
        "AnalystTargetPrice": "210.0",
        "BookValue": "35.0",
    }


@pytest.fixture
def sample_quote() -> Dict[str, Any]:
    """Alpha Vantage 'Global Quote' block."""
    return {
        "01. symbol": "ACME",
        "05. price": "185.00",
        "06. volume": "1250000",
        "10. change percent": "1.2500%",
    }


@pytest.fixture
def neutral_snapshot() -> MarketSnapshot:
    """Every metric missing: growth 50, value 50, health 55, momentum 45."""
    return MarketSnapshot(symbol="NULL", company_name="Null Corp")


class FakeMarketClient:
    """Stand-in for AlphaVantageClient serving canned payloads."""

    def __init__(self, overviews: Dict[str, Dict[str, Any]], quote: Optional[Dict[str, Any]] = None,
                 error: Optional[Exception] = None):
        self.overviews = overviews
        self.quote = quote or {}
        self.error = error
        self.calls: List[str] = []

    def fetch_overview(self, symbol: str) -> Dict[str, Any]:
        self.calls.append(f"OVERVIEW:{symbol}")
        if self.error is not None:
            raise self.error
        if symbol not in self.overviews:
            raise SymbolNotFoundException(symbol)
        return self.overviews[symbol]

    def fetch_quote(self, symbol: str) -> Dict[str, Any]:
        self.calls.append(f"GLOBAL_QUOTE:{symbol}")
        return self.quote


@pytest.fixture
def fake_market_client():
    """The FakeMarketClient class, for tests that need a custom payload or error."""
    return FakeMarketClient


@pytest.fixture
def market_client(sample_overview, sample_quote) -> FakeMarketClient:
    return FakeMarketClient({"ACME": sample_overview}, quote=sample_quote)


@pytest.fixture
def score_service(aggregator, market_client) -> HealthScoreService:
    return HealthScoreService(aggregator=aggregator, market_client=market_client)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture
def client(evidence_store, aggregator, score_service):
    """TestClient with in-memory evidence, fake market data and no score cache."""
    app.dependency_overrides[get_evidence_store] = lambda: evidence_store
    app.dependency_overrides[get_evidence_aggregator] = lambda: aggregator
    app.dependency_overrides[get_health_score_service] = lambda: score_service
    app.dependency_overrides[get_cache] = lambda: None
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
