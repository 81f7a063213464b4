"""
Evidence Store - Stock Health Score
healthscore/services/evidence_store.py

Per-ticker evidence lists kept as a JSON array under `evidence:{TICKER}`.
Reads are single point-reads; malformed records are skipped, never fatal.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol

import redis
from pydantic import TypeAdapter, ValidationError

from healthscore.config import settings
from healthscore.core.exceptions import EvidenceStoreException
from healthscore.models.evidence import EvidenceRecord

logger = logging.getLogger(__name__)

_RECORD_LIST = TypeAdapter(List[EvidenceRecord])


class EvidenceStore(Protocol):
    """Minimal store contract used by the aggregator and the seeder."""

    def get(self, ticker: str) -> Optional[List[EvidenceRecord]]:
        ...

    def set(self, ticker: str, records: Iterable[EvidenceRecord]) -> None:
        ...


def parse_evidence_records(raw: Iterable[Dict[str, Any]], ticker: str = "") -> List[EvidenceRecord]:
    """
    Validate raw dicts into EvidenceRecords, dropping the ones that fail.

    Args:
        raw: Decoded JSON items (e.g. from redis or a seed catalog)
        ticker: Used only for log context

    Returns:
        The valid records, in input order.
    """
    records: List[EvidenceRecord] = []
    for index, item in enumerate(raw):
        try:
            records.append(EvidenceRecord.model_validate(item))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed evidence record",
                extra={"ticker": ticker, "index": index, "errors": e.error_count()},
            )
    return records


def serialize_evidence_records(records: Iterable[EvidenceRecord]) -> str:
    return _RECORD_LIST.dump_json(list(records), exclude_none=True).decode()


class RedisEvidenceStore:
    """Evidence lists in redis, one JSON array per ticker."""

    def __init__(self, client: Optional[redis.Redis] = None, key_prefix: Optional[str] = None):
        self.client = client or redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
        self.key_prefix = key_prefix if key_prefix is not None else settings.EVIDENCE_KEY_PREFIX

    def key_for(self, ticker: str) -> str:
        return f"{self.key_prefix}{ticker.upper()}"

    def get(self, ticker: str) -> Optional[List[EvidenceRecord]]:
        """Return the ticker's records, or None when nothing is stored."""
        key = self.key_for(ticker)
        try:
            data = self.client.get(key)
        except redis.RedisError as e:
            raise EvidenceStoreException(ticker, f"Evidence read failed: {e}") from e

        if not data:
            return None

        try:
            raw = json.loads(data)
        except json.JSONDecodeError as e:
            raise EvidenceStoreException(ticker, f"Evidence payload is not JSON: {e}") from e

        if not isinstance(raw, list):
            raise EvidenceStoreException(ticker, "Evidence payload is not a list")

        return parse_evidence_records(raw, ticker=ticker)

    def set(self, ticker: str, records: Iterable[EvidenceRecord]) -> None:
        """Replace the ticker's evidence list."""
        try:
            self.client.set(self.key_for(ticker), serialize_evidence_records(records))
        except redis.RedisError as e:
            raise EvidenceStoreException(ticker, f"Evidence write failed: {e}") from e


class InMemoryEvidenceStore:
    """Dict-backed store for tests and dry runs."""

    def __init__(self, data: Optional[Dict[str, List[EvidenceRecord]]] = None):
        self._data: Dict[str, List[EvidenceRecord]] = {}
        for ticker, records in (data or {}).items():
            self.set(ticker, records)

    def get(self, ticker: str) -> Optional[List[EvidenceRecord]]:
        records = self._data.get(ticker.upper())
        return list(records) if records is not None else None

    def set(self, ticker: str, records: Iterable[EvidenceRecord]) -> None:
        self._data[ticker.upper()] = list(records)

    def tickers(self) -> List[str]:
        return sorted(self._data)
