# healthscore/models/evidence.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Dict
from datetime import date

from healthscore.models.enumerations import Pillar


# Evidence Records (as stored per ticker)


class EvidenceRecord(BaseModel):
    """One analyst ranking / certification / review aggregate for a ticker."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    source: str                      # e.g. "Gartner MQ", "Forrester Wave", "G2"
    domain: str = ""                 # e.g. "Cybersecurity" (informational only)
    symbol: str
    tier: Optional[str] = None       # e.g. "Leader", "Tier 1", "Top 10"
    score: Optional[float] = Field(default=None, ge=0, le=100)
    reviews: Optional[int] = Field(default=None, ge=0)
    as_of: date
    weight_vector: Dict[Pillar, float] = Field(default_factory=dict)
    decay_months: int = Field(gt=0)
    notes: Optional[str] = None

    @field_validator("weight_vector")
    @classmethod
    def validate_weights_non_negative(cls, v: Dict[Pillar, float]) -> Dict[Pillar, float]:
        # Sum <= 1 is a seeding convention, not enforced here.
        for pillar, weight in v.items():
            if weight < 0:
                raise ValueError(f"weight for pillar {pillar.value} must be >= 0, got {weight}")
        return v

    def weight_for(self, pillar: Pillar) -> float:
        return self.weight_vector.get(pillar, 0.0)


# Aggregation Output


class EvidenceDisplayItem(BaseModel):
    """Provenance snapshot of a record that contributed points."""
    source: str
    tier: Optional[str] = None
    score: Optional[float] = None
    as_of: date


class PillarBoost(BaseModel):
    """Capped, rounded pillar boosts for one ticker plus display evidence."""
    model_config = ConfigDict(frozen=True)

    F: int = Field(default=0, ge=0)  # Fundamentals
    M: int = Field(default=0, ge=0)  # Market
    B: int = Field(default=0, ge=0)  # Balance sheet
    L: int = Field(default=0, ge=0)  # Leadership
    A: int = Field(default=0, ge=0)  # Innovation / AI
    E: int = Field(default=0, ge=0)  # Ethics
    items: List[EvidenceDisplayItem] = Field(default_factory=list)

    def get(self, pillar: Pillar) -> int:
        return getattr(self, pillar.value)

    @property
    def total(self) -> int:
        return sum(self.get(p) for p in Pillar)
