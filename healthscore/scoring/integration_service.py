"""
scoring/integration_service.py — Stock Health Score pipeline

Class: HealthScoreService
Methods:
  score_symbol(symbol)            → HealthScoreResult   (fetches market data)
  score_snapshot(snapshot, ...)   → HealthScoreResult   (pure scoring)

Pipeline steps:
  1. Fetch company overview
  2. Ethics screen (fail → EXCLUDE, score 0, nothing else computed)
  3. Fetch quote, build MarketSnapshot
  4. EvidenceAggregator → PillarBoost
  5. CompositeCalculator → dimension scores, composite, action
  6. AltmanCalculator / PiotroskiCalculator → financial scores (reported only)
  7. Build HealthScoreResult
"""

import logging
from datetime import date
from typing import Any, Dict, Optional

from healthscore.models.enumerations import Action
from healthscore.models.stock import (
    FinancialScores,
    HealthScoreResult,
    MarketSnapshot,
    ScoreBreakdown,
    StockMetrics,
)
from healthscore.scoring.composite_calculator import CompositeCalculator
from healthscore.scoring.distress_calculator import AltmanCalculator
from healthscore.scoring.ethics_gate import passes_ethics_screen
from healthscore.scoring.evidence_aggregator import EvidenceAggregator
from healthscore.scoring.quality_calculator import PiotroskiCalculator
from healthscore.services.market_data import (
    AlphaVantageClient,
    build_snapshot,
    estimate_financial_inputs,
)

logger = logging.getLogger(__name__)

ETHICS_REASON = "Failed ethics screening"


class HealthScoreService:
    """Full pipeline from market data and stored evidence to a health score."""

    def __init__(
        self,
        aggregator: Optional[EvidenceAggregator] = None,
        market_client: Optional[AlphaVantageClient] = None,
        composite: Optional[CompositeCalculator] = None,
    ):
        self.aggregator = aggregator or EvidenceAggregator()
        self.market_client = market_client
        self.composite = composite or CompositeCalculator()
        self.altman = AltmanCalculator()
        self.piotroski = PiotroskiCalculator()

    # ------------------------------------------------------------------
    # Main pipeline
    # ------------------------------------------------------------------

    def score_symbol(self, symbol: str, today: Optional[date] = None) -> HealthScoreResult:
        """
        Fetch, screen and score one ticker.

        Raises:
            MarketDataException / SymbolNotFoundException from the client.
        """
        symbol = symbol.upper()
        client = self.market_client or AlphaVantageClient()

        overview = client.fetch_overview(symbol)
        name = overview.get("Name") or symbol
        if not passes_ethics_screen(name, overview.get("Description") or ""):
            logger.info(f"[{symbol}] Failed ethics screening")
            return self.excluded(overview.get("Symbol") or symbol, name)

        quote = client.fetch_quote(symbol)
        snapshot = build_snapshot(overview, quote)
        return self.score_snapshot(snapshot, overview=overview, today=today)

    def score_snapshot(
        self,
        snapshot: MarketSnapshot,
        overview: Optional[Dict[str, Any]] = None,
        today: Optional[date] = None,
    ) -> HealthScoreResult:
        """
        Score an already-fetched snapshot.

        Args:
            snapshot: Market and fundamental fields
            overview: Raw provider overview; when given, distress and quality
                indices are estimated from it
            today: Reference date for evidence decay (default: today)
        """
        if not passes_ethics_screen(snapshot.company_name, snapshot.description):
            logger.info(f"[{snapshot.symbol}] Failed ethics screening")
            return self.excluded(snapshot.symbol, snapshot.company_name)

        boost = self.aggregator.aggregate(snapshot.symbol, today=today)
        composite = self.composite.calculate(snapshot, boost)

        financial_scores = None
        if overview is not None:
            altman_inputs, piotroski_inputs = estimate_financial_inputs(overview)
            financial_scores = FinancialScores(
                distress=self.altman.calculate(altman_inputs),
                quality=self.piotroski.calculate(piotroski_inputs),
            )

        logger.info(
            f"[{snapshot.symbol}] score={composite.score} action={composite.action.value} "
            f"evidence_items={len(boost.items)}"
        )

        return HealthScoreResult(
            symbol=snapshot.symbol,
            company_name=snapshot.company_name or snapshot.symbol,
            sector=snapshot.sector,
            industry=snapshot.industry,
            price=snapshot.price,
            change_percent=snapshot.change_percent,
            market_cap=snapshot.market_cap,
            score=composite.score,
            action=composite.action,
            breakdown=ScoreBreakdown(
                growth=composite.growth,
                value=composite.value,
                health=composite.health,
                momentum=composite.momentum,
            ),
            metrics=StockMetrics.from_snapshot(snapshot),
            pillars=boost,
            evidence=list(boost.items),
            financial_scores=financial_scores,
        )

    @staticmethod
    def excluded(symbol: str, company_name: str) -> HealthScoreResult:
        return HealthScoreResult(
            symbol=symbol,
            company_name=company_name,
            score=0,
            action=Action.EXCLUDE,
            ethics_violation=True,
            reason=ETHICS_REASON,
        )
