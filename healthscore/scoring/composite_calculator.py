"""
scoring/composite_calculator.py — Composite Health Score

Four dimension scores, each starting at a neutral 50 and moved by additive
point buckets, then combined with fixed weights:

    composite = round(0.30·growth + 0.25·value + 0.25·health + 0.20·momentum)

Evidence pillars are added before each dimension is clamped to [0, 100]:

    growth   += F   (Fundamentals)
    health   += B   (Balance sheet)
    momentum += M   (Market)

L, A and E are reported with the result but do not move the composite.

Action: composite ≥ 70 BUY, ≥ 50 HOLD, otherwise SELL.
"""

from dataclasses import dataclass
from typing import Dict, Optional

import structlog

from healthscore.config import settings
from healthscore.models.enumerations import Action
from healthscore.models.evidence import PillarBoost
from healthscore.models.stock import MarketSnapshot
from healthscore.scoring.utils import clamp, round_half_up

logger = structlog.get_logger(__name__)

NEUTRAL = 50


# ---------------------------------------------------------------------------
# Dimension scores
# ---------------------------------------------------------------------------

def growth_score(data: MarketSnapshot, evidence_boost: int = 0) -> int:
    """EPS growth, revenue growth and profit margin, plus the F pillar."""
    score = NEUTRAL

    if data.eps_growth > 0.20:
        score += 20
    elif data.eps_growth > 0.10:
        score += 15
    elif data.eps_growth > 0.05:
        score += 10
    elif data.eps_growth < -0.10:
        score -= 15

    if data.revenue_growth > 0.15:
        score += 15
    elif data.revenue_growth > 0.10:
        score += 10
    elif data.revenue_growth > 0.05:
        score += 5
    elif data.revenue_growth < 0:
        score -= 10

    if data.profit_margin > 0.20:
        score += 15
    elif data.profit_margin > 0.10:
        score += 10
    elif data.profit_margin > 0.05:
        score += 5
    elif data.profit_margin < 0:
        score -= 15

    return int(clamp(score + evidence_boost))


def value_score(data: MarketSnapshot) -> int:
    """P/E, P/B, dividend yield and EV/EBITDA. No evidence pillar feeds value."""
    score = NEUTRAL

    # Non-positive multiples mean missing data or losses: no adjustment.
    pe = data.pe_ratio
    if pe > 0:
        if pe < 15:
            score += 20
        elif pe < 20:
            score += 15
        elif pe < 25:
            score += 5
        elif pe > 40:
            score -= 15
        elif pe > 30:
            score -= 5

    pb = data.pb_ratio
    if pb > 0:
        if pb < 1.5:
            score += 15
        elif pb < 3:
            score += 10
        elif pb < 5:
            score += 5
        elif pb > 10:
            score -= 10

    if data.dividend_yield > 3:
        score += 10
    elif data.dividend_yield > 2:
        score += 7
    elif data.dividend_yield > 1:
        score += 3

    ev = data.ev_to_ebitda
    if ev > 0:
        if ev < 10:
            score += 10
        elif ev < 15:
            score += 5
        elif ev > 25:
            score -= 5

    return int(clamp(score))


def health_score(data: MarketSnapshot, evidence_boost: int = 0) -> int:
    """ROE, current ratio, debt/equity and operating margin, plus the B pillar."""
    score = NEUTRAL

    if data.roe > 0.20:
        score += 15
    elif data.roe > 0.15:
        score += 12
    elif data.roe > 0.10:
        score += 8
    elif data.roe < 0:
        score -= 15

    if data.current_ratio > 2.0:
        score += 10
    elif data.current_ratio > 1.5:
        score += 7
    elif data.current_ratio > 1.0:
        score += 3
    elif data.current_ratio < 1.0:
        score -= 10

    if data.debt_to_equity < 0.5:
        score += 15
    elif data.debt_to_equity < 1.0:
        score += 10
    elif data.debt_to_equity < 1.5:
        score += 5
    elif data.debt_to_equity > 2.5:
        score -= 10

    if data.operating_margin > 0.25:
        score += 10
    elif data.operating_margin > 0.15:
        score += 7
    elif data.operating_margin > 0.10:
        score += 3
    elif data.operating_margin < 0:
        score -= 10

    return int(clamp(score + evidence_boost))


def range_position(data: MarketSnapshot) -> Optional[float]:
    """Where price sits in the 52-week range (0 = low, 1 = high); None if unknown."""
    if data.week52_high <= 0 or data.week52_low <= 0:
        return None
    span = data.week52_high - data.week52_low
    if span <= 0:
        return None
    return (data.price - data.week52_low) / span


def momentum_score(data: MarketSnapshot, evidence_boost: int = 0) -> int:
    """Daily change, 52-week range position and size, plus the M pillar."""
    score = NEUTRAL

    change = data.change_percent
    if change > 5:
        score += 15
    elif change > 2:
        score += 10
    elif change > 0:
        score += 5
    elif change < -5:
        score -= 15
    elif change < -2:
        score -= 10
    elif change < 0:
        score -= 5

    position = range_position(data)
    if position is not None:
        if position > 0.8:
            score += 15
        elif position > 0.6:
            score += 10
        elif position > 0.4:
            score += 5
        elif position < 0.2:
            score -= 10

    if data.market_cap > 50_000_000_000:
        score += 10
    elif data.market_cap > 10_000_000_000:
        score += 7
    elif data.market_cap > 2_000_000_000:
        score += 3
    elif data.market_cap < 500_000_000:
        score -= 5

    return int(clamp(score + evidence_boost))


# ---------------------------------------------------------------------------
# Composite
# ---------------------------------------------------------------------------

def action_for(score: int,
               buy_threshold: Optional[int] = None,
               hold_threshold: Optional[int] = None) -> Action:
    buy = settings.BUY_THRESHOLD if buy_threshold is None else buy_threshold
    hold = settings.HOLD_THRESHOLD if hold_threshold is None else hold_threshold
    if score >= buy:
        return Action.BUY
    if score >= hold:
        return Action.HOLD
    return Action.SELL


@dataclass
class CompositeResult:
    """Output of CompositeCalculator.calculate()."""
    score: int       # [0, 100]
    action: Action
    growth: int
    value: int
    health: int
    momentum: int


class CompositeCalculator:
    """Combine dimension scores and evidence pillars into the final score."""

    def __init__(self, weights: Optional[Dict[str, float]] = None):
        self.weights = weights or settings.composite_weights

    def combine(self, growth: int, value: int, health: int, momentum: int) -> int:
        w = self.weights
        return round_half_up(
            growth * w["growth"]
            + value * w["value"]
            + health * w["health"]
            + momentum * w["momentum"]
        )

    def calculate(self, data: MarketSnapshot,
                  boost: Optional[PillarBoost] = None) -> CompositeResult:
        """
        Args:
            data: Market and fundamental snapshot for one ticker.
            boost: Aggregated evidence pillars (None = no evidence).

        Returns:
            CompositeResult with the 0-100 score, action and dimension scores.
        """
        boost = boost or PillarBoost()

        growth = growth_score(data, boost.F)
        value = value_score(data)
        health = health_score(data, boost.B)
        momentum = momentum_score(data, boost.M)
        score = self.combine(growth, value, health, momentum)
        action = action_for(score)

        logger.info(
            "composite_calculated",
            symbol=data.symbol,
            growth=growth,
            value=value,
            health=health,
            momentum=momentum,
            evidence_f=boost.F,
            evidence_b=boost.B,
            evidence_m=boost.M,
            score=score,
            action=action.value,
        )

        return CompositeResult(
            score=score,
            action=action,
            growth=growth,
            value=value,
            health=health,
            momentum=momentum,
        )
