from enum import Enum


class Pillar(str, Enum):
    """The six evidence pillars (codes match the stored weight vectors)."""
    FUNDAMENTALS = "F"
    MARKET = "M"
    BALANCE_SHEET = "B"
    LEADERSHIP = "L"
    INNOVATION = "A"   # Innovation / AI
    ETHICS = "E"


class Action(str, Enum):
    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"
    EXCLUDE = "EXCLUDE"  # forced by the ethics gate, never by the score


class DistressZone(str, Enum):
    SAFE = "safe"
    GREY = "grey zone"
    DISTRESS = "distress"


class QualityBand(str, Enum):
    STRONG = "strong"
    AVERAGE = "average"
    WEAK = "weak"
