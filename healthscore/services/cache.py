"""
Cache Service Singleton - Stock Health Score
healthscore/services/cache.py

Provides a singleton Redis cache instance for computed health scores.
Gracefully handles Redis unavailability.
"""
import logging
import redis
from typing import Optional
from healthscore.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)

# Singleton instance
_cache: Optional[RedisCache] = None


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if Redis is available, None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing scoring to continue
        without caching.
    """
    global _cache
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError) as e:
            logger.warning(f"Redis unavailable, score caching disabled: {e}")
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None
