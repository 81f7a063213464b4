"""
Dependencies - Stock Health Score
healthscore/core/dependencies.py

FastAPI dependency injection for the evidence store and scoring services.
"""

from functools import lru_cache

from healthscore.scoring.evidence_aggregator import EvidenceAggregator
from healthscore.scoring.integration_service import HealthScoreService
from healthscore.services.evidence_store import RedisEvidenceStore
from healthscore.services.market_data import get_market_data_client


@lru_cache()
def get_evidence_store() -> RedisEvidenceStore:
    """Get cached RedisEvidenceStore instance."""
    return RedisEvidenceStore()


@lru_cache()
def get_evidence_aggregator() -> EvidenceAggregator:
    """Get cached EvidenceAggregator bound to the redis store."""
    return EvidenceAggregator(store=get_evidence_store())


@lru_cache()
def get_health_score_service() -> HealthScoreService:
    """Get cached HealthScoreService instance."""
    return HealthScoreService(
        aggregator=get_evidence_aggregator(),
        market_client=get_market_data_client(),
    )
