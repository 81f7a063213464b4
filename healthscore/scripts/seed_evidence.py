"""
Seed the evidence store with the example catalog.

Usage:
    python -m healthscore.scripts.seed_evidence --dry-run        # show boosts, write nothing
    python -m healthscore.scripts.seed_evidence                  # write every catalog ticker
    python -m healthscore.scripts.seed_evidence PANW ZS          # write selected tickers
"""

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

from healthscore.core.exceptions import EvidenceStoreException
from healthscore.scoring.evidence_aggregator import EvidenceAggregator
from healthscore.services.evidence_seed import EVIDENCE_CATALOG, catalog_records, seed_evidence_data
from healthscore.services.evidence_store import InMemoryEvidenceStore, RedisEvidenceStore

logging.basicConfig(level=logging.INFO, format='%(asctime)s | %(levelname)-8s | %(message)s', datefmt='%H:%M:%S')
logger = logging.getLogger(__name__)


def preview(tickers: List[str], today: Optional[date] = None) -> None:
    """Print the pillar boosts each ticker's catalog evidence would produce."""
    store = InMemoryEvidenceStore({t: catalog_records(t) for t in tickers})
    aggregator = EvidenceAggregator(store=store)

    print(f"\n{'Ticker':<8} {'F':>3} {'M':>3} {'B':>3} {'L':>3} {'A':>3} {'E':>3}  Items")
    print("-" * 60)
    for ticker in tickers:
        boost = aggregator.aggregate(ticker, today=today)
        sources = ", ".join(item.source for item in boost.items) or "-"
        print(f"{ticker:<8} {boost.F:>3} {boost.M:>3} {boost.B:>3} "
              f"{boost.L:>3} {boost.A:>3} {boost.E:>3}  {sources}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Seed example evidence into the evidence store")
    ap.add_argument("tickers", nargs="*", help="Ticker symbols (default: whole catalog)")
    ap.add_argument("--dry-run", action="store_true", help="Show boosts without writing")
    args = ap.parse_args(argv)

    tickers = [t.upper() for t in args.tickers] or list(EVIDENCE_CATALOG)
    unknown = [t for t in tickers if t not in EVIDENCE_CATALOG]
    if unknown:
        logger.error(f"Not in catalog: {', '.join(unknown)}")
        return 1

    if args.dry_run:
        preview(tickers)
        return 0

    store = RedisEvidenceStore()
    try:
        if args.tickers:
            for ticker in tickers:
                records = catalog_records(ticker)
                store.set(ticker, records)
                logger.info(f"Seeded {len(records)} evidence items for {ticker}")
            count = len(tickers)
        else:
            count = seed_evidence_data(store)
    except EvidenceStoreException as e:
        logger.error(f"Seeding failed: {e}")
        return 1

    logger.info(f"Seeded evidence for {count} tickers")
    return 0


if __name__ == "__main__":
    sys.exit(main())
