"""
Evidence API Router
healthscore/routers/evidence.py

Endpoints:
- GET  /api/v1/evidence/{symbol}  - Aggregated pillar boosts and display evidence
- POST /api/v1/evidence/seed      - Write the example evidence catalog to the store
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from healthscore.core.dependencies import get_evidence_aggregator, get_evidence_store
from healthscore.core.exceptions import EvidenceStoreException
from healthscore.models.evidence import PillarBoost
from healthscore.scoring.evidence_aggregator import EvidenceAggregator
from healthscore.services.evidence_seed import seed_evidence_data
from healthscore.services.evidence_store import EvidenceStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/evidence", tags=["Evidence"])


class SeedResponse(BaseModel):
    success: bool
    tickers_seeded: int


@router.post(
    "/seed",
    response_model=SeedResponse,
    summary="Seed example evidence",
    description="Replaces the evidence list of every catalog ticker.",
)
def seed_evidence(store: EvidenceStore = Depends(get_evidence_store)):
    try:
        count = seed_evidence_data(store)
    except EvidenceStoreException as e:
        logger.error(f"Evidence seeding failed: {e}")
        raise HTTPException(status_code=503, detail=e.message)
    return SeedResponse(success=True, tickers_seeded=count)


@router.get(
    "/{symbol}",
    response_model=PillarBoost,
    summary="Get evidence boosts for a ticker",
    description=(
        "Pillar boosts F/M/B/L/A/E after decay, fan-out and the global cap, "
        "plus up to three contributing evidence items. Unknown tickers return zeros."
    ),
)
def get_evidence(symbol: str, aggregator: EvidenceAggregator = Depends(get_evidence_aggregator)):
    return aggregator.aggregate(symbol)
