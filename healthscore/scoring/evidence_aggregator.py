"""
Evidence Aggregator
healthscore/scoring/evidence_aggregator.py

Turns the stored evidence list for one ticker into capped pillar boosts.

Pipeline:
  evidence store ──► EvidenceRecord[] ──► evidence_decay.score_record ──► raw points
                                                                            │
            PillarBoost ◄── round ◄── global cap (≤ 10) ◄── weighted fan-out ┘

Each record fans its raw points out to every pillar in its weight vector:

    pillar[k] += raw_points × weight_vector[k]      k ∈ {F, M, B, L, A, E}

so one record can feed several pillars at once. The weight vector is not
normalised; the global cap is what bounds total influence.
"""

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

import structlog

from healthscore.config import settings
from healthscore.core.exceptions import EvidenceStoreException
from healthscore.models.enumerations import Pillar
from healthscore.models.evidence import EvidenceDisplayItem, EvidenceRecord, PillarBoost
from healthscore.scoring.evidence_decay import score_record
from healthscore.scoring.utils import round_half_up

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class _Candidate:
    raw_points: int
    item: EvidenceDisplayItem


def cap_and_round(totals: Dict[Pillar, float], cap: int) -> Dict[Pillar, int]:
    """
    Uniformly shrink pillar totals so they sum to at most `cap`, then round.

    Proportions between pillars are preserved by the shrink. Half-up
    rounding of several x.5 values can still overshoot the cap, so the
    pillars rounded up the furthest give back one point each until the
    integer sum fits.
    """
    total = sum(totals.values())
    scaled = dict(totals)
    if total > cap:
        scale = cap / total
        scaled = {p: v * scale for p, v in totals.items()}

    rounded = {p: round_half_up(v) for p, v in scaled.items()}

    while sum(rounded.values()) > cap:
        overshoot = max(rounded, key=lambda p: rounded[p] - scaled[p])
        rounded[overshoot] -= 1

    return rounded


class EvidenceAggregator:
    """
    Aggregate a ticker's evidence into a PillarBoost.

    Usage:
        aggregator = EvidenceAggregator(store=RedisEvidenceStore())
        boost = aggregator.aggregate("PANW")
        boost.L, boost.A, boost.items
    """

    def __init__(
        self,
        store=None,
        cap: Optional[int] = None,
        display_limit: Optional[int] = None,
        display_order: Optional[str] = None,
        min_decay_months: Optional[int] = None,
    ):
        self.store = store
        self.cap = settings.EVIDENCE_CAP if cap is None else cap
        self.display_limit = (
            settings.EVIDENCE_DISPLAY_LIMIT if display_limit is None else display_limit
        )
        self.display_order = display_order or settings.EVIDENCE_DISPLAY_ORDER
        self.min_decay_months = (
            settings.EVIDENCE_MIN_DECAY_MONTHS if min_decay_months is None else min_decay_months
        )
        if self.display_order not in ("significance", "input"):
            raise ValueError(
                f"display_order must be 'significance' or 'input', got {self.display_order!r}"
            )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, ticker: str) -> List[EvidenceRecord]:
        """
        Read the evidence list for a ticker.

        Absent lists and store failures both yield []: a missing boost must
        never take the composite score down with it.
        """
        if self.store is None:
            return []
        try:
            records = self.store.get(ticker)
        except EvidenceStoreException as e:
            logger.warning("evidence_load_failed", ticker=ticker, error=str(e))
            return []
        return list(records or [])

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def aggregate(self, ticker: str, today: Optional[date] = None) -> PillarBoost:
        """Load and aggregate evidence for one ticker."""
        ticker = ticker.upper()
        records = self.load(ticker)
        return self.aggregate_records(records, today=today, ticker=ticker)

    def aggregate_records(
        self,
        records: Sequence[EvidenceRecord],
        today: Optional[date] = None,
        ticker: str = "",
    ) -> PillarBoost:
        """
        Fold evidence records into a PillarBoost.

        Algorithm:
          1. Raw points per record (decay × tier/score × review count)
          2. Weighted fan-out into the six pillar accumulators
          3. Records with raw points > 0 become display candidates
          4. Global cap: scale all pillars by cap / sum when sum > cap
          5. Round each pillar; keep the first `display_limit` candidates

        Args:
            records: Evidence records in stored order.
            today: Reference date for decay (defaults to date.today()).
            ticker: Used for logging only.

        Returns:
            PillarBoost whose six pillar values sum to at most `cap`.
        """
        today = today or date.today()

        totals: Dict[Pillar, float] = {p: 0.0 for p in Pillar}
        candidates: List[_Candidate] = []

        for record in records:
            points = score_record(record, today, self.min_decay_months).raw_points

            for pillar in Pillar:
                totals[pillar] += points * record.weight_for(pillar)

            if points > 0:
                if not any(record.weight_for(p) > 0 for p in Pillar):
                    logger.warning(
                        "evidence_zero_weight_record",
                        ticker=ticker,
                        source=record.source,
                        raw_points=points,
                    )
                candidates.append(
                    _Candidate(
                        raw_points=points,
                        item=EvidenceDisplayItem(
                            source=record.source,
                            tier=record.tier,
                            score=record.score,
                            as_of=record.as_of,
                        ),
                    )
                )

        pre_cap_total = sum(totals.values())
        pillars = cap_and_round(totals, self.cap)
        items = self._select_display(candidates)

        logger.info(
            "evidence_aggregated",
            ticker=ticker,
            record_count=len(records),
            candidate_count=len(candidates),
            pre_cap_total=round(pre_cap_total, 4),
            capped=pre_cap_total > self.cap,
            pillars={p.value: v for p, v in pillars.items()},
        )

        return PillarBoost(
            **{p.value: v for p, v in pillars.items()},
            items=items,
        )

    def _select_display(self, candidates: List[_Candidate]) -> List[EvidenceDisplayItem]:
        ordered: List[_Candidate] = candidates
        if self.display_order == "significance":
            # sorted() is stable: equal points keep stored order
            ordered = sorted(candidates, key=lambda c: -c.raw_points)
        return [c.item for c in ordered[: self.display_limit]]
