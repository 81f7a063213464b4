import redis
from typing import List, Optional, TypeVar, Type
from pydantic import BaseModel
from healthscore.config import settings

T = TypeVar("T", bound=BaseModel)


class RedisCache:
    """Pydantic-aware wrapper around a redis client (JSON values with TTL)."""

    def __init__(self, client: Optional[redis.Redis] = None):
        self.client = client or redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Get cached item and deserialize to Pydantic model."""
        data = self.client.get(key)
        if data:
            return model.model_validate_json(data)
        return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Cache Pydantic model with TTL."""
        self.client.setex(
            key,
            ttl_seconds,
            value.model_dump_json(),
        )

    def delete(self, key: str) -> int:
        """Invalidate single cache entry; returns 1 if it existed."""
        return self.client.delete(key)

    def keys(self, pattern: str) -> List[str]:
        """Keys matching pattern, via SCAN."""
        return list(self.client.scan_iter(match=pattern))

    def delete_pattern(self, pattern: str) -> int:
        """Invalidate all keys matching pattern; returns the number deleted."""
        deleted = 0
        for key in self.client.scan_iter(match=pattern):
            deleted += self.client.delete(key)
        return deleted
