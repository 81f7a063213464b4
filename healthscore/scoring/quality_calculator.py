"""
scoring/quality_calculator.py — Fundamental Quality Index

Piotroski F-Score: nine binary signals, one point each.

    Profitability (0-4)          Leverage / liquidity (0-3)        Operating efficiency (0-2)
    ─────────────────────        ─────────────────────────         ──────────────────────────
    1. ROA > 0                   5. current ratio improved         8. gross margin improved
    2. net income > 0            6. long-term debt decreased       9. asset turnover improved
    3. OCF > 0                   7. shares out not increased
    4. OCF > net income             (<=, equality passes)

All other comparisons are strict; ties score no point.

Interpretation: F ≥ 8 strong, F ≥ 5 average, otherwise weak.
"""

from dataclasses import dataclass, field
from typing import Dict

import structlog

from healthscore.models.enumerations import QualityBand
from healthscore.scoring.utils import round_half_up

logger = structlog.get_logger(__name__)

_DESCRIPTIONS = {
    QualityBand.STRONG: "Strong - Excellent financial health",
    QualityBand.AVERAGE: "Average - Moderate financial health",
    QualityBand.WEAK: "Weak - Poor financial health",
}


@dataclass
class PiotroskiInputs:
    roa_ttm: float
    net_income_ttm: float
    ocf_ttm: float                 # operating cash flow
    current_ratio_this: float
    current_ratio_last: float
    lt_debt_this: float
    lt_debt_last: float
    shares_out_this: float
    shares_out_last: float
    gross_margin_q: float          # recent quarter
    gross_margin_q_last: float     # same quarter last year
    asset_turnover_ttm: float
    asset_turnover_last: float


@dataclass
class PiotroskiBreakdown:
    profitability: int = 0  # 0-4
    leverage: int = 0       # 0-3
    operating: int = 0      # 0-2

    @property
    def total(self) -> int:
        return self.profitability + self.leverage + self.operating


@dataclass
class QualityResult:
    """Output of PiotroskiCalculator.calculate()."""
    f_score: int                 # 0-9
    normalized: int              # 0-100
    band: QualityBand
    interpretation: str
    breakdown: PiotroskiBreakdown = field(default_factory=PiotroskiBreakdown)
    signals: Dict[str, bool] = field(default_factory=dict)


def piotroski_signals(inputs: PiotroskiInputs) -> Dict[str, bool]:
    """The nine named pass/fail signals, in scoring order."""
    return {
        "positive_roa": inputs.roa_ttm > 0,
        "positive_net_income": inputs.net_income_ttm > 0,
        "positive_ocf": inputs.ocf_ttm > 0,
        "ocf_exceeds_net_income": inputs.ocf_ttm > inputs.net_income_ttm,
        "current_ratio_improved": inputs.current_ratio_this > inputs.current_ratio_last,
        "lt_debt_decreased": inputs.lt_debt_this < inputs.lt_debt_last,
        "no_dilution": inputs.shares_out_this <= inputs.shares_out_last,
        "gross_margin_improved": inputs.gross_margin_q > inputs.gross_margin_q_last,
        "asset_turnover_improved": inputs.asset_turnover_ttm > inputs.asset_turnover_last,
    }


_PROFITABILITY = ("positive_roa", "positive_net_income", "positive_ocf", "ocf_exceeds_net_income")
_LEVERAGE = ("current_ratio_improved", "lt_debt_decreased", "no_dilution")
_OPERATING = ("gross_margin_improved", "asset_turnover_improved")


def piotroski_breakdown(signals: Dict[str, bool]) -> PiotroskiBreakdown:
    return PiotroskiBreakdown(
        profitability=sum(signals[name] for name in _PROFITABILITY),
        leverage=sum(signals[name] for name in _LEVERAGE),
        operating=sum(signals[name] for name in _OPERATING),
    )


def normalize_piotroski_f(f_score: int) -> int:
    return round_half_up(f_score / 9 * 100)


def classify_piotroski_f(f_score: int) -> QualityBand:
    if f_score >= 8:
        return QualityBand.STRONG
    if f_score >= 5:
        return QualityBand.AVERAGE
    return QualityBand.WEAK


class PiotroskiCalculator:
    """Calculate the Piotroski F quality index."""

    def calculate(self, inputs: PiotroskiInputs) -> QualityResult:
        signals = piotroski_signals(inputs)
        breakdown = piotroski_breakdown(signals)
        f_score = breakdown.total
        band = classify_piotroski_f(f_score)

        logger.info(
            "piotroski_calculated",
            f_score=f_score,
            profitability=breakdown.profitability,
            leverage=breakdown.leverage,
            operating=breakdown.operating,
        )

        return QualityResult(
            f_score=f_score,
            normalized=normalize_piotroski_f(f_score),
            band=band,
            interpretation=_DESCRIPTIONS[band],
            breakdown=breakdown,
            signals=signals,
        )
