"""
Per-client request throttling applied by the HTTP middleware in app.main
"""
import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, List, Tuple

from fastapi import HTTPException, Request

from app.config import settings

logger = logging.getLogger(__name__)

MINUTE = 60
HOUR = 3600


class RateLimiter:
    """
    Sliding-window limiter keyed by the socket peer address

    Two windows are enforced: requests_per_minute over 60s and
    requests_per_hour over 3600s. State lives in process memory, so each
    worker counts on its own.
    """

    def __init__(self, requests_per_minute: int = 60, requests_per_hour: int = 1000):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def reset(self) -> None:
        self._hits.clear()

    def _prune(self, now: float) -> None:
        """Drop hits older than the longest window; forget clients with none left"""
        cutoff = now - HOUR
        for client_id in list(self._hits):
            hits = self._hits[client_id]
            while hits and hits[0] <= cutoff:
                hits.popleft()
            if not hits:
                del self._hits[client_id]

    def _windows(self) -> List[Tuple[int, int, str]]:
        return [
            (MINUTE, self.requests_per_minute, "minute"),
            (HOUR, self.requests_per_hour, "hour"),
        ]

    async def check_rate_limit(self, request: Request) -> None:
        """
        Count the request against its client, or refuse it

        Raises:
            HTTPException: 429 with a retry_after hint when a window is full
        """
        client_id = request.client.host if request.client else "unknown"
        now = time.time()

        self._prune(now)
        hits = self._hits[client_id]

        for window, limit, label in self._windows():
            recent = sum(1 for ts in hits if ts > now - window)
            if recent >= limit:
                logger.warning(f"Rate limit exceeded ({label}) for {client_id}")
                raise HTTPException(
                    status_code=429,
                    detail={
                        "error": "rate_limit_exceeded",
                        "message": f"Too many requests. Limit: {limit} requests per {label}",
                        "retry_after": window,
                    },
                )

        hits.append(now)


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR
)
