"""
Evidence Seeding - Stock Health Score
healthscore/services/evidence_seed.py

Example third-party evidence per ticker, spread across sectors, used to
populate an empty store. Weight vectors use pillar letters:
F fundamentals, M market, B balance sheet, L leadership, A innovation, E ethics.
"""
import logging
from typing import Any, Dict, List

from healthscore.models.evidence import EvidenceRecord
from healthscore.services.evidence_store import EvidenceStore, parse_evidence_records

logger = logging.getLogger(__name__)


EVIDENCE_CATALOG: Dict[str, List[Dict[str, Any]]] = {
    # ---- Information Technology ----
    "PANW": [
        {"source": "Gartner MQ", "domain": "Cybersecurity", "tier": "Leader",
         "as_of": "2025-06-15", "weight_vector": {"L": 0.6, "A": 0.4}, "decay_months": 18},
    ],
    "ZS": [
        {"source": "Gartner MQ", "domain": "Cloud Security", "tier": "Leader",
         "as_of": "2025-06-15", "weight_vector": {"L": 0.6, "A": 0.4}, "decay_months": 18},
        {"source": "G2", "domain": "Zero Trust", "tier": "Leader", "score": 92, "reviews": 640,
         "as_of": "2025-09-01", "weight_vector": {"M": 0.6, "L": 0.4}, "decay_months": 12},
    ],
    "SNOW": [
        {"source": "Gartner MQ", "domain": "Data Warehousing", "tier": "Challenger",
         "as_of": "2025-03-10", "weight_vector": {"L": 0.5, "A": 0.5}, "decay_months": 18},
        {"source": "Forrester Wave", "domain": "Cloud Data", "tier": "Strong Performer",
         "as_of": "2025-04-15", "weight_vector": {"L": 0.7, "A": 0.3}, "decay_months": 9},
    ],
    # ---- Healthcare ----
    "UNH": [
        {"source": "NCQA", "domain": "Healthcare", "tier": "Top 10", "score": 88,
         "as_of": "2025-07-20", "weight_vector": {"M": 0.5, "L": 0.5}, "decay_months": 12,
         "notes": "Health Insurance Plan Ratings"},
    ],
    "JNJ": [
        {"source": "Clarivate", "domain": "Pharma R&D", "tier": "Top 10",
         "as_of": "2025-08-01", "weight_vector": {"A": 1.0}, "decay_months": 12,
         "notes": "R&D Pipeline Innovation"},
        {"source": "FDA Breakthrough", "domain": "Pharma", "tier": "Tier 1",
         "as_of": "2025-05-15", "weight_vector": {"A": 0.7, "E": 0.3}, "decay_months": 24,
         "notes": "Breakthrough Therapy Designations"},
    ],
    "TMO": [
        {"source": "Frost & Sullivan", "domain": "Life Sciences", "tier": "Leader",
         "as_of": "2025-06-10", "weight_vector": {"L": 0.6, "A": 0.4}, "decay_months": 18},
    ],
    # ---- Financials ----
    "JPM": [
        {"source": "Celent Model Bank", "domain": "Banking Innovation", "tier": "Top 10",
         "as_of": "2025-08-15", "weight_vector": {"A": 0.5, "L": 0.5}, "decay_months": 12},
        {"source": "Moody's", "domain": "Credit Rating", "tier": "Tier 1",
         "as_of": "2025-09-01", "weight_vector": {"B": 0.7, "L": 0.3}, "decay_months": 18,
         "notes": "Credit Rating Upgrade"},
    ],
    "V": [
        {"source": "Fintech 100", "domain": "Payments", "tier": "Top 10",
         "as_of": "2025-07-01", "weight_vector": {"A": 0.5, "M": 0.5}, "decay_months": 12},
    ],
    "BLK": [
        {"source": "WealthTech 100", "domain": "Asset Management", "tier": "Leader",
         "as_of": "2025-06-20", "weight_vector": {"L": 0.6, "A": 0.4}, "decay_months": 12},
    ],
    # ---- Consumer Discretionary ----
    "TSLA": [
        {"source": "J.D. Power", "domain": "Automotive", "tier": "High Performer",
         "score": 82, "reviews": 15000, "as_of": "2025-09-15",
         "weight_vector": {"M": 0.6, "L": 0.4}, "decay_months": 12},
        {"source": "IIHS Top Safety", "domain": "Automotive Safety", "tier": "Top Safety Pick+",
         "as_of": "2025-08-01", "weight_vector": {"E": 0.7, "F": 0.3}, "decay_months": 24},
    ],
    "AMZN": [
        {"source": "Interbrand", "domain": "E-commerce", "tier": "Top 10", "score": 98,
         "as_of": "2025-10-01", "weight_vector": {"L": 0.7, "M": 0.3}, "decay_months": 12},
    ],
    "NKE": [
        {"source": "Brand Finance", "domain": "Apparel", "tier": "Top 10", "score": 91,
         "as_of": "2025-09-10", "weight_vector": {"L": 0.6, "M": 0.4}, "decay_months": 12},
        {"source": "Fair Labor Assoc", "domain": "Apparel Ethics", "tier": "Gold",
         "as_of": "2025-07-15", "weight_vector": {"E": 1.0}, "decay_months": 36},
    ],
    # ---- Consumer Staples ----
    "KO": [
        {"source": "Interbrand", "domain": "Consumer", "tier": "Top 10", "score": 95,
         "as_of": "2025-10-01", "weight_vector": {"L": 0.7, "M": 0.3}, "decay_months": 12},
    ],
    "PG": [
        {"source": "Sustainalytics", "domain": "CPG Sustainability", "tier": "Leader", "score": 89,
         "as_of": "2025-08-20", "weight_vector": {"E": 0.7, "L": 0.3}, "decay_months": 24},
        {"source": "Brand Finance", "domain": "CPG", "tier": "Top 50",
         "as_of": "2025-09-05", "weight_vector": {"L": 0.6, "M": 0.4}, "decay_months": 12},
    ],
    "WMT": [
        {"source": "Kantar Retail", "domain": "Retail Excellence", "tier": "Leader",
         "as_of": "2025-07-30", "weight_vector": {"M": 0.5, "L": 0.5}, "decay_months": 12},
    ],
    # ---- Energy ----
    "NEE": [
        {"source": "BloombergNEF", "domain": "Renewable Energy", "tier": "Tier 1",
         "as_of": "2025-04-01", "weight_vector": {"F": 0.6, "A": 0.4}, "decay_months": 18},
        {"source": "DNV Certification", "domain": "Energy Sustainability", "tier": "Platinum",
         "as_of": "2025-06-10", "weight_vector": {"E": 1.0}, "decay_months": 36},
    ],
    "XOM": [
        {"source": "WoodMac", "domain": "Oil & Gas", "tier": "Top 10",
         "as_of": "2025-05-15", "weight_vector": {"F": 0.7, "L": 0.3}, "decay_months": 18},
    ],
    "ENPH": [
        {"source": "BloombergNEF", "domain": "Solar Tech", "tier": "Tier 1",
         "as_of": "2025-07-01", "weight_vector": {"A": 0.6, "F": 0.4}, "decay_months": 18},
    ],
    # ---- Industrials ----
    "CRH": [
        {"source": "ENR Top 250", "domain": "Construction", "tier": "Top 10",
         "as_of": "2025-07-01", "weight_vector": {"F": 0.2, "L": 0.8}, "decay_months": 18},
        {"source": "LEED", "domain": "Green Building", "tier": "Platinum",
         "as_of": "2025-05-10", "weight_vector": {"E": 1.0}, "decay_months": 36},
    ],
    "BA": [
        {"source": "Flight Global", "domain": "Aerospace", "tier": "Top 10",
         "as_of": "2025-06-15", "weight_vector": {"L": 0.7, "F": 0.3}, "decay_months": 18},
    ],
    "CAT": [
        {"source": "EquipmentWatch", "domain": "Heavy Equipment", "tier": "Leader",
         "as_of": "2025-08-10", "weight_vector": {"M": 0.5, "L": 0.5}, "decay_months": 18},
    ],
    # ---- Materials ----
    "LIN": [
        {"source": "ICIS Top 100", "domain": "Chemicals", "tier": "Top 10",
         "as_of": "2025-07-20", "weight_vector": {"F": 0.6, "L": 0.4}, "decay_months": 18},
    ],
    "NEM": [
        {"source": "S&P Global Platts", "domain": "Mining", "tier": "Top 50",
         "as_of": "2025-06-05", "weight_vector": {"F": 0.7, "M": 0.3}, "decay_months": 18},
        {"source": "RMI Certification", "domain": "Responsible Mining", "tier": "Gold",
         "as_of": "2025-04-15", "weight_vector": {"E": 1.0}, "decay_months": 36},
    ],
    "SHW": [
        {"source": "Industry Week", "domain": "Specialty Chemicals", "tier": "Top 50",
         "as_of": "2025-08-25", "weight_vector": {"M": 0.5, "F": 0.5}, "decay_months": 12},
    ],
    # ---- Real Estate ----
    "PLD": [
        {"source": "GRESB", "domain": "Real Estate ESG", "tier": "Leader", "score": 93,
         "as_of": "2025-09-01", "weight_vector": {"E": 0.6, "L": 0.4}, "decay_months": 24},
    ],
    "AMT": [
        {"source": "NAREIT", "domain": "REIT Performance", "tier": "Leader",
         "as_of": "2025-07-15", "weight_vector": {"F": 0.6, "M": 0.4}, "decay_months": 12},
    ],
    "WELL": [
        {"source": "WELL Certification", "domain": "Health-Focused RE", "tier": "Platinum",
         "as_of": "2025-08-01", "weight_vector": {"E": 0.7, "L": 0.3}, "decay_months": 36},
    ],
    # ---- Utilities ----
    "DUK": [
        {"source": "J.D. Power", "domain": "Utility Satisfaction", "tier": "High Performer",
         "score": 85, "as_of": "2025-08-15",
         "weight_vector": {"M": 0.6, "L": 0.4}, "decay_months": 12},
    ],
    "SO": [
        {"source": "EPA Energy Star", "domain": "Utility Efficiency", "tier": "Top 10",
         "as_of": "2025-07-20", "weight_vector": {"E": 0.8, "F": 0.2}, "decay_months": 24},
    ],
    "AEP": [
        {"source": "EEI", "domain": "Grid Modernization", "tier": "Leader",
         "as_of": "2025-06-30", "weight_vector": {"A": 0.5, "F": 0.5}, "decay_months": 18},
    ],
    # ---- Communication Services ----
    "GOOGL": [
        {"source": "Gartner MQ", "domain": "Cloud Infrastructure", "tier": "Leader",
         "as_of": "2025-08-10", "weight_vector": {"L": 0.6, "A": 0.4}, "decay_months": 18},
    ],
    "META": [
        {"source": "App Annie", "domain": "Social Media", "tier": "Leader",
         "score": 90, "reviews": 25000, "as_of": "2025-09-20",
         "weight_vector": {"M": 0.7, "L": 0.3}, "decay_months": 12},
    ],
    "DIS": [
        {"source": "Hollywood Reporter", "domain": "Entertainment", "tier": "Top 10",
         "as_of": "2025-07-25", "weight_vector": {"L": 0.7, "M": 0.3}, "decay_months": 12},
    ],
    # ---- Transportation ----
    "UPS": [
        {"source": "IATA Certification", "domain": "Logistics Safety", "tier": "Platinum",
         "as_of": "2025-06-20", "weight_vector": {"E": 1.0}, "decay_months": 36},
    ],
    "DAL": [
        {"source": "Skytrax", "domain": "Airline Quality", "tier": "Top 50",
         "score": 78, "reviews": 8500, "as_of": "2025-08-30",
         "weight_vector": {"M": 0.5, "L": 0.5}, "decay_months": 12},
    ],
}


def catalog_records(ticker: str) -> List[EvidenceRecord]:
    """Validated records for one catalog ticker (symbol filled in from the key)."""
    ticker = ticker.upper()
    raw = [{"symbol": ticker, **item} for item in EVIDENCE_CATALOG.get(ticker, [])]
    return parse_evidence_records(raw, ticker=ticker)


def seed_evidence_data(store: EvidenceStore) -> int:
    """
    Write every catalog list to the store, replacing existing lists.

    Returns:
        Number of tickers seeded.
    """
    for ticker in EVIDENCE_CATALOG:
        records = catalog_records(ticker)
        store.set(ticker, records)
        logger.info(f"Seeded {len(records)} evidence items for {ticker}")
    return len(EVIDENCE_CATALOG)
