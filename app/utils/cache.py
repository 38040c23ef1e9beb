"""
Redis-backed JSON cache for the public leaderboard
"""
import json
import logging
from typing import Any, Callable, Optional

import redis

from app.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """
    Thin JSON layer over Redis

    Redis is optional: when it cannot be reached at startup the client is
    left as None, and any error during an operation is logged and reported
    as a miss (get) or as False (set/delete).
    """

    def __init__(self, url: Optional[str] = None):
        self.redis_client = self._connect(url or settings.REDIS_URL)

    @staticmethod
    def _connect(url: str):
        try:
            client = redis.from_url(url, decode_responses=True, socket_connect_timeout=2)
            client.ping()
        except (redis.RedisError, ValueError) as e:
            logger.warning(f"Redis unavailable at {url}: {str(e)}. Leaderboard caching disabled.")
            return None
        logger.info("Redis connection established")
        return client

    def _run(self, operation: str, key: str, call: Callable[[Any], Any], default: Any) -> Any:
        if self.redis_client is None:
            return default
        try:
            return call(self.redis_client)
        except Exception as e:
            logger.error(f"Cache {operation} failed for {key}: {str(e)}")
            return default

    def get(self, key: str) -> Optional[Any]:
        """Decoded value for `key`, or None on a miss"""
        def read(client):
            raw = client.get(key)
            return None if raw is None else json.loads(raw)

        return self._run("get", key, read, None)

    def set(self, key: str, value: Any, ttl: int) -> bool:
        """Store `value` as JSON for `ttl` seconds"""
        payload = json.dumps(value)

        def write(client):
            client.setex(key, ttl, payload)
            return True

        return self._run("set", key, write, False)

    def delete(self, key: str) -> bool:
        def drop(client):
            client.delete(key)
            logger.debug(f"Cache invalidated: {key}")
            return True

        return self._run("delete", key, drop, False)


# Global instance
cache_service = CacheService()
