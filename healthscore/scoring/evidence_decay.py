"""
Evidence Decay & Points Model
healthscore/scoring/evidence_decay.py

Converts one EvidenceRecord into a non-negative integer point value:

    raw_points = round(base_points × decay × count_factor)

    base_points  = round(score / 12.5)            if score > 0   (100 → 8)
                 = TIER_RULES lookup on tier       otherwise      (0, 2, 4, 6, 8)
    decay        = exp(−age_months / max(6, decay_months))
    count_factor = min(1, log10(1 + reviews) / 2) if reviews      (saturates at 99)
                 = 1                               otherwise

Tier table (first matching row wins, case-insensitive):

    points | keywords
    ───────┼──────────────────────────────────────────────────────────
      8    | leader, tier 1, top 10, platinum
      6    | strong performer, challenger, tier 2, top 50, gold
      4    | visionary, contender, high performer, tier 3, silver
      2    | niche, top 100, bronze
"""

import math
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Pattern, Tuple

from healthscore.models.evidence import EvidenceRecord
from healthscore.scoring.utils import months_between, round_half_up

MIN_DECAY_MONTHS = 6
SCORE_PER_POINT = 12.5
MAX_BASE_POINTS = 8


def _keyword_pattern(keywords: Tuple[str, ...]) -> Pattern[str]:
    # A keyword ending in a digit must not run into another digit ("top 10" vs "top 100").
    parts = [
        re.escape(kw) + (r"(?!\d)" if kw[-1].isdigit() else "")
        for kw in keywords
    ]
    return re.compile("|".join(parts), re.IGNORECASE)


TIER_RULES: List[Tuple[Pattern[str], int]] = [
    (_keyword_pattern(("leader", "tier 1", "top 10", "platinum")), 8),
    (_keyword_pattern(("strong performer", "challenger", "tier 2", "top 50", "gold")), 6),
    (_keyword_pattern(("visionary", "contender", "high performer", "tier 3", "silver")), 4),
    (_keyword_pattern(("niche", "top 100", "bronze")), 2),
]


@dataclass(frozen=True)
class EvidencePoints:
    """Intermediate values behind one record's raw points."""
    age_months: int
    decay: float
    base_points: int
    count_factor: float
    raw_points: int


def age_in_months(as_of: date, today: date) -> int:
    """Calendar-month age, never negative (future-dated records count as fresh)."""
    return max(0, months_between(as_of, today))


def decay_factor(age_months: int, decay_months: int,
                 min_decay_months: int = MIN_DECAY_MONTHS) -> float:
    """exp(−age / max(min_decay_months, decay_months)), in (0, 1]."""
    return math.exp(-age_months / max(min_decay_months, decay_months))


def tier_points(tier: Optional[str]) -> int:
    """Classify a free-text tier label via TIER_RULES; unknown labels score 0."""
    if not tier:
        return 0
    for pattern, points in TIER_RULES:
        if pattern.search(tier):
            return points
    return 0


def base_points(tier: Optional[str], score: Optional[float]) -> int:
    """Numeric score takes precedence over the tier label when positive."""
    if score is not None and score > 0:
        return min(MAX_BASE_POINTS, round_half_up(score / SCORE_PER_POINT))
    return tier_points(tier)


def count_factor(reviews: Optional[int]) -> float:
    """Review-volume discount; absent (or zero) review counts are not discounted."""
    if not reviews:
        return 1.0
    return min(1.0, math.log10(1 + reviews) / 2)


def score_record(record: EvidenceRecord, today: date,
                 min_decay_months: int = MIN_DECAY_MONTHS) -> EvidencePoints:
    """Full breakdown of one record's contribution as of `today`."""
    age = age_in_months(record.as_of, today)
    decay = decay_factor(age, record.decay_months, min_decay_months)
    base = base_points(record.tier, record.score)
    cf = count_factor(record.reviews)
    raw = max(0, round_half_up(base * decay * cf))
    return EvidencePoints(
        age_months=age,
        decay=decay,
        base_points=base,
        count_factor=cf,
        raw_points=raw,
    )


def raw_points(record: EvidenceRecord, today: date,
               min_decay_months: int = MIN_DECAY_MONTHS) -> int:
    return score_record(record, today, min_decay_months).raw_points
