# healthscore/models/stock.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, timezone

from healthscore.models.enumerations import Action
from healthscore.models.evidence import EvidenceDisplayItem, PillarBoost
from healthscore.scoring.distress_calculator import DistressResult
from healthscore.scoring.quality_calculator import QualityResult


# Market / Fundamental Inputs


class MarketSnapshot(BaseModel):
    """
    Raw market + fundamental fields consumed by the dimension scores.

    Ratios are decimals (0.15 = 15%) except change_percent and
    dividend_yield, which are percentages (2.5 = 2.5%).
    """
    symbol: str
    company_name: str = ""
    description: str = ""
    sector: str = "Unknown"
    industry: str = "Unknown"

    price: float = 0.0
    change_percent: float = 0.0
    market_cap: float = 0.0
    volume: int = 0
    week52_high: float = 0.0
    week52_low: float = 0.0

    pe_ratio: float = 0.0
    pb_ratio: float = 0.0
    eps: float = 0.0
    dividend_yield: float = 0.0
    ev_to_ebitda: float = 0.0

    eps_growth: float = 0.0         # quarterly earnings growth YoY
    revenue_growth: float = 0.0     # quarterly revenue growth YoY
    profit_margin: float = 0.0
    operating_margin: float = 0.0
    roe: float = 0.0
    current_ratio: float = 0.0
    debt_to_equity: float = 0.0


# Health Score Output


class ScoreBreakdown(BaseModel):
    growth: int = Field(ge=0, le=100)
    value: int = Field(ge=0, le=100)
    health: int = Field(ge=0, le=100)
    momentum: int = Field(ge=0, le=100)


class StockMetrics(BaseModel):
    """Headline ratios echoed from the snapshot for display."""
    pe_ratio: float = 0.0
    pb_ratio: float = 0.0
    debt_to_equity: float = 0.0
    current_ratio: float = 0.0
    roe: float = 0.0
    revenue_growth: float = 0.0
    eps_growth: float = 0.0

    @classmethod
    def from_snapshot(cls, snapshot: MarketSnapshot) -> "StockMetrics":
        return cls(
            pe_ratio=snapshot.pe_ratio,
            pb_ratio=snapshot.pb_ratio,
            debt_to_equity=snapshot.debt_to_equity,
            current_ratio=snapshot.current_ratio,
            roe=snapshot.roe,
            revenue_growth=snapshot.revenue_growth,
            eps_growth=snapshot.eps_growth,
        )


class FinancialScores(BaseModel):
    """Distress and quality indices, reported beside (not inside) the score."""
    distress: DistressResult
    quality: QualityResult


class HealthScoreResult(BaseModel):
    """JSON-serializable health score for one ticker."""
    symbol: str
    company_name: str = ""
    sector: str = "Unknown"
    industry: str = "Unknown"
    price: float = 0.0
    change_percent: float = 0.0
    market_cap: float = 0.0
    score: int = Field(ge=0, le=100)
    action: Action
    breakdown: Optional[ScoreBreakdown] = None
    metrics: Optional[StockMetrics] = None
    pillars: Optional[PillarBoost] = None
    evidence: List[EvidenceDisplayItem] = Field(default_factory=list)
    financial_scores: Optional[FinancialScores] = None
    ethics_violation: bool = False
    reason: Optional[str] = None
    from_cache: bool = False
    rate_limited: bool = False
    scored_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
