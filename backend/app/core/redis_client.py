import json
import logging
import re
from typing import Any, Optional

import redis
from redis.exceptions import ConnectionError, TimeoutError

from app.core.config import settings

logger = logging.getLogger(__name__)

_redis_client: Optional[redis.Redis] = None


def get_redis() -> redis.Redis:
    """Get Redis client singleton."""
    global _redis_client
    if _redis_client is None:
        _redis_client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5,
        )
    return _redis_client


def check_redis_health() -> dict:
    """Check Redis connectivity and return health status."""
    try:
        get_redis().ping()
        return {"status": "healthy", "connected": True}
    except (ConnectionError, TimeoutError) as e:
        logger.warning(f"Redis health check failed: {e}")
        return {
            "status": "unhealthy",
            "connected": False,
            "error": str(e),
        }
    except Exception as e:
        logger.error(f"Redis health check error: {e}")
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }


class RedisCache:
    """JSON cache on top of Redis.

    Every operation fails open: a cache outage degrades to a miss and a
    warning, never to a failed request.
    """

    def __init__(self, prefix: str = "greenthumb", client: Optional[redis.Redis] = None):
        self.prefix = prefix
        self._client = client

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = get_redis()
        return self._client

    def _make_key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def get(self, key: str) -> Optional[Any]:
        try:
            data = self.client.get(self._make_key(key))
            if data:
                return json.loads(data)
            return None
        except Exception as e:
            logger.warning(f"Redis get error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        try:
            ttl = ttl or settings.REDIS_CACHE_TTL
            return bool(self.client.setex(self._make_key(key), ttl, json.dumps(value)))
        except Exception as e:
            logger.warning(f"Redis set error for {key}: {e}")
            return False


class PlantDetailsCache(RedisCache):
    """Cache for Trefle plant detail lookups, keyed by scientific name."""

    def __init__(self, client: Optional[redis.Redis] = None):
        super().__init__(prefix="greenthumb:plant-details", client=client)

    @staticmethod
    def _normalize(scientific_name: str) -> str:
        return re.sub(r"\s+", " ", scientific_name.strip().lower())

    def get_details(self, scientific_name: str) -> Optional[dict]:
        return self.get(self._normalize(scientific_name))

    def set_details(self, scientific_name: str, details: dict) -> bool:
        return self.set(
            self._normalize(scientific_name), details, ttl=settings.PLANT_DETAILS_CACHE_TTL
        )


plant_details_cache = PlantDetailsCache()


def get_plant_details_cache() -> PlantDetailsCache:
    return plant_details_cache
