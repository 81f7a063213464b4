"""
routers/stocks.py — Stock Health Score Endpoints

Endpoints:
  GET    /api/v1/stocks/cache             — List cached scores
  DELETE /api/v1/stocks/cache             — Drop every cached score
  DELETE /api/v1/stocks/cache/{symbol}    — Drop one cached score
  GET    /api/v1/stocks/{symbol}          — Full health score (cached in redis)

When the provider is rate limited, a cached score is served (flagged
rate_limited) even on refresh; with nothing cached the call fails with 429.

Register in main.py:
    from healthscore.routers.stocks import router as stocks_router
    app.include_router(stocks_router)
"""

import logging
from datetime import datetime
from typing import List, Optional

import redis
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ValidationError

from healthscore.config import settings
from healthscore.core.dependencies import get_health_score_service
from healthscore.core.exceptions import (
    MarketDataException,
    MarketDataNotConfiguredException,
    RateLimitedException,
    SymbolNotFoundException,
)
from healthscore.models.stock import HealthScoreResult
from healthscore.scoring.integration_service import HealthScoreService
from healthscore.services.cache import get_cache
from healthscore.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/stocks", tags=["Stocks"])


class CacheClearResponse(BaseModel):
    deleted: int


class CachedScore(BaseModel):
    symbol: str
    company_name: str
    scored_at: Optional[datetime] = None


class CachedScoreList(BaseModel):
    stocks: List[CachedScore]
    count: int


def _score_key(symbol: str) -> str:
    return f"{settings.SCORE_KEY_PREFIX}{symbol}"


def _require_cache(cache: Optional[RedisCache]) -> RedisCache:
    if cache is None:
        raise HTTPException(status_code=503, detail="Score cache unavailable")
    return cache


def _read_cached(cache: Optional[RedisCache], symbol: str) -> Optional[HealthScoreResult]:
    if cache is None:
        return None
    try:
        return cache.get(_score_key(symbol), HealthScoreResult)
    except (redis.RedisError, ValidationError) as e:
        logger.warning(f"[{symbol}] Score cache read failed: {e}")
        return None


def _write_cached(cache: Optional[RedisCache], result: HealthScoreResult) -> None:
    if cache is None:
        return
    try:
        cache.set(_score_key(result.symbol), result, settings.CACHE_TTL_SCORES)
    except redis.RedisError as e:
        logger.warning(f"[{result.symbol}] Score cache write failed: {e}")


@router.get(
    "/cache",
    response_model=CachedScoreList,
    summary="List cached health scores",
)
def list_cached_scores(cache: Optional[RedisCache] = Depends(get_cache)):
    cache = _require_cache(cache)
    prefix = settings.SCORE_KEY_PREFIX
    stocks: List[CachedScore] = []
    try:
        for key in sorted(cache.keys(f"{prefix}*")):
            symbol = key[len(prefix):]
            try:
                cached = cache.get(key, HealthScoreResult)
            except ValidationError:
                logger.warning(f"[{symbol}] Unreadable cached score")
                cached = None
            stocks.append(CachedScore(
                symbol=symbol,
                company_name=(cached.company_name if cached else "") or symbol,
                scored_at=cached.scored_at if cached else None,
            ))
    except redis.RedisError as e:
        raise HTTPException(status_code=503, detail=f"Score cache unavailable: {e}")
    return CachedScoreList(stocks=stocks, count=len(stocks))


@router.delete(
    "/cache",
    response_model=CacheClearResponse,
    summary="Clear cached health scores",
)
def clear_score_cache(cache: Optional[RedisCache] = Depends(get_cache)):
    cache = _require_cache(cache)
    try:
        deleted = cache.delete_pattern(f"{settings.SCORE_KEY_PREFIX}*")
    except redis.RedisError as e:
        raise HTTPException(status_code=503, detail=f"Score cache unavailable: {e}")
    logger.info(f"Cleared {deleted} cached scores")
    return CacheClearResponse(deleted=deleted)


@router.delete(
    "/cache/{symbol}",
    response_model=CacheClearResponse,
    summary="Clear the cached health score for one ticker",
)
def clear_symbol_cache(symbol: str, cache: Optional[RedisCache] = Depends(get_cache)):
    cache = _require_cache(cache)
    symbol = symbol.upper()
    try:
        deleted = cache.delete(_score_key(symbol))
    except redis.RedisError as e:
        raise HTTPException(status_code=503, detail=f"Score cache unavailable: {e}")
    logger.info(f"[{symbol}] Cleared cached score")
    return CacheClearResponse(deleted=deleted)


@router.get(
    "/{symbol}",
    response_model=HealthScoreResult,
    summary="Get the health score for a ticker",
    description=(
        "Composite 0-100 score with BUY/HOLD/SELL action, dimension breakdown, "
        "evidence pillars and distress/quality indices. Companies failing the "
        "ethics screen come back with action EXCLUDE and score 0."
    ),
)
def get_stock_score(
    symbol: str,
    refresh: bool = Query(False, description="Bypass the cached score"),
    service: HealthScoreService = Depends(get_health_score_service),
    cache: Optional[RedisCache] = Depends(get_cache),
):
    symbol = symbol.upper()

    if not refresh:
        cached = _read_cached(cache, symbol)
        if cached is not None:
            logger.info(f"[{symbol}] Returning cached score")
            return cached.model_copy(update={"from_cache": True})

    try:
        result = service.score_symbol(symbol)
    except RateLimitedException as e:
        # Without refresh the cache was already checked and missed.
        fallback = _read_cached(cache, symbol) if refresh else None
        if fallback is not None:
            logger.warning(f"[{symbol}] Rate limited, returning cached score")
            return fallback.model_copy(update={"from_cache": True, "rate_limited": True})
        raise HTTPException(status_code=429, detail=f"Market data rate limit reached: {e.message}")
    except SymbolNotFoundException as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MarketDataNotConfiguredException as e:
        raise HTTPException(status_code=503, detail=e.message)
    except MarketDataException as e:
        logger.error(f"[{symbol}] Market data failure: {e.message}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch stock data: {e.message}")

    _write_cached(cache, result)
    return result
