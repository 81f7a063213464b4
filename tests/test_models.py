# tests/test_models.py

"""
Model Validation Tests - Tests for Pydantic model and settings validation
"""

import pytest
from datetime import date
from typing import Optional, get_type_hints
from pydantic import ValidationError

from healthscore.config import Settings
from healthscore.logging_config import configure_logging
from healthscore.models.enumerations import Action, Pillar
from healthscore.models.evidence import EvidenceRecord, PillarBoost
from healthscore.models.stock import HealthScoreResult, ScoreBreakdown



# ENUMERATION TESTS


class TestPillarEnum:
    """Tests for Pillar enumeration."""

    def test_pillar_codes(self):
        assert [p.value for p in Pillar] == ["F", "M", "B", "L", "A", "E"]

    def test_action_values(self):
        assert {a.value for a in Action} == {"BUY", "HOLD", "SELL", "EXCLUDE"}



# EVIDENCE MODEL TESTS


class TestEvidenceRecord:

    def test_minimal_record(self):
        record = EvidenceRecord(source="G2", symbol="ZS", as_of="2025-09-01", decay_months=12)
        assert record.as_of == date(2025, 9, 1)
        assert record.tier is None
        assert record.weight_vector == {}

    def test_record_is_frozen(self, leader_record):
        with pytest.raises(ValidationError):
            leader_record.tier = "Challenger"

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            EvidenceRecord(source="G2", symbol="ZS", as_of="2025-09-01",
                           decay_months=12, weight_vector={"L": -0.1})

    def test_reviews_must_be_non_negative(self):
        with pytest.raises(ValidationError):
            EvidenceRecord(source="G2", symbol="ZS", as_of="2025-09-01",
                           decay_months=12, reviews=-1)


class TestPillarBoost:

    def test_defaults_zero(self):
        boost = PillarBoost()
        assert boost.total == 0
        assert boost.items == []

    def test_get_by_pillar(self):
        boost = PillarBoost(L=5, A=3)
        assert boost.get(Pillar.LEADERSHIP) == 5
        assert boost.get(Pillar.INNOVATION) == 3
        assert boost.total == 8

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            PillarBoost(F=-1)



# RESULT MODEL TESTS


class TestHealthScoreResult:

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            HealthScoreResult(symbol="X", score=101, action=Action.BUY)

    def test_breakdown_bounds(self):
        with pytest.raises(ValidationError):
            ScoreBreakdown(growth=50, value=50, health=-1, momentum=50)

    def test_json_serializable(self):
        result = HealthScoreResult(symbol="X", score=60, action=Action.HOLD, pillars=PillarBoost(F=2))
        data = result.model_dump(mode="json")
        assert data["action"] == "HOLD"
        assert data["pillars"]["F"] == 2



# SETTINGS TESTS


class TestSettings:

    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.composite_weights == {"growth": 0.30, "value": 0.25, "health": 0.25, "momentum": 0.20}
        assert s.EVIDENCE_CAP == 10
        assert s.EVIDENCE_DISPLAY_LIMIT == 3
        assert "tobacco" in s.ETHICS_KEYWORDS

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, W_GROWTH=0.5)

    def test_hold_below_buy(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, HOLD_THRESHOLD=80, BUY_THRESHOLD=70)

    def test_production_requires_key(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, APP_ENV="production")

    def test_production_rejects_debug(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, APP_ENV="production", DEBUG=True, ALPHA_VANTAGE_KEY="k")

    def test_production_valid(self):
        s = Settings(_env_file=None, APP_ENV="production", ALPHA_VANTAGE_KEY="k")
        assert s.ALPHA_VANTAGE_KEY.get_secret_value() == "k"

    def test_invalid_display_order(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, EVIDENCE_DISPLAY_ORDER="newest")


# LOGGING CONFIG TESTS


class TestLoggingConfig:

    def test_overrides_are_optional(self):
        hints = get_type_hints(configure_logging)
        assert hints["level"] == Optional[str]
        assert hints["log_format"] == Optional[str]
