"""
scoring/distress_calculator.py — Financial Distress Index

Altman Z-Score for non-financial firms.

Formula:
    A = working_capital / total_assets
    B = retained_earnings / total_assets
    C = ebit / total_assets
    D = market_cap / total_liabilities      (0 when total_liabilities ≤ 0)
    E = revenue / total_assets

    Z = 1.2·A + 1.4·B + 3.3·C + 0.6·D + 1.0·E

Interpretation:
    Z > 2.99          safe       (low bankruptcy risk)
    1.81 < Z ≤ 2.99   grey zone  (moderate risk)
    Z ≤ 1.81          distress   (high bankruptcy risk)

Normalised to 0-100 with a soft cap at Z = 3.5.
total_assets == 0 yields Z = 0: unusable input, not "zero risk".
"""

from dataclasses import dataclass, field

import structlog

from healthscore.models.enumerations import DistressZone
from healthscore.scoring.utils import clamp, round_half_up

logger = structlog.get_logger(__name__)

SAFE_THRESHOLD = 2.99
DISTRESS_THRESHOLD = 1.81
NORMALIZATION_CEILING = 3.5

_DESCRIPTIONS = {
    DistressZone.SAFE: "Safe Zone - Low bankruptcy risk",
    DistressZone.GREY: "Grey Zone - Moderate risk",
    DistressZone.DISTRESS: "Distress Zone - High bankruptcy risk",
}


@dataclass
class AltmanInputs:
    """Balance-sheet and income inputs, all in the same currency unit."""
    working_capital: float       # current assets − current liabilities
    total_assets: float
    retained_earnings: float
    ebit: float
    market_cap: float
    total_liabilities: float
    revenue: float


@dataclass
class AltmanComponents:
    working_capital_ratio: float = 0.0    # A
    retained_earnings_ratio: float = 0.0  # B
    ebit_ratio: float = 0.0               # C
    market_cap_to_liab_ratio: float = 0.0 # D
    asset_turnover: float = 0.0           # E


@dataclass
class DistressResult:
    """Output of AltmanCalculator.calculate()."""
    z_score: float
    normalized: int              # 0-100
    zone: DistressZone
    interpretation: str
    components: AltmanComponents = field(default_factory=AltmanComponents)


def altman_components(inputs: AltmanInputs) -> AltmanComponents:
    """The five ratios behind Z; all zero when total_assets is 0."""
    ta = inputs.total_assets
    if ta == 0:
        return AltmanComponents()
    return AltmanComponents(
        working_capital_ratio=inputs.working_capital / ta,
        retained_earnings_ratio=inputs.retained_earnings / ta,
        ebit_ratio=inputs.ebit / ta,
        market_cap_to_liab_ratio=(
            inputs.market_cap / inputs.total_liabilities
            if inputs.total_liabilities > 0 else 0.0
        ),
        asset_turnover=inputs.revenue / ta,
    )


def calculate_altman_z(inputs: AltmanInputs) -> float:
    if inputs.total_assets == 0:
        return 0.0
    c = altman_components(inputs)
    return (
        1.2 * c.working_capital_ratio
        + 1.4 * c.retained_earnings_ratio
        + 3.3 * c.ebit_ratio
        + 0.6 * c.market_cap_to_liab_ratio
        + 1.0 * c.asset_turnover
    )


def normalize_altman_z(z_score: float) -> int:
    return int(clamp(round_half_up(z_score / NORMALIZATION_CEILING * 100), 0, 100))


def classify_altman_z(z_score: float) -> DistressZone:
    if z_score > SAFE_THRESHOLD:
        return DistressZone.SAFE
    if z_score > DISTRESS_THRESHOLD:
        return DistressZone.GREY
    return DistressZone.DISTRESS


class AltmanCalculator:
    """Calculate the Altman Z distress index."""

    def calculate(self, inputs: AltmanInputs) -> DistressResult:
        """
        Args:
            inputs: AltmanInputs for one company.

        Returns:
            DistressResult with z_score, normalized score, zone and components.

        Examples:
            >>> calc = AltmanCalculator()
            >>> calc.calculate(AltmanInputs(0, 0, 0, 0, 0, 0, 0)).z_score
            0.0
        """
        components = altman_components(inputs)
        z = calculate_altman_z(inputs)
        zone = classify_altman_z(z)
        normalized = normalize_altman_z(z)

        logger.info(
            "altman_calculated",
            z_score=round(z, 4),
            normalized=normalized,
            zone=zone.value,
            degenerate=inputs.total_assets == 0,
        )

        return DistressResult(
            z_score=z,
            normalized=normalized,
            zone=zone,
            interpretation=_DESCRIPTIONS[zone],
            components=components,
        )
