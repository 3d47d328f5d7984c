"""Rate limiting middleware for API protection."""
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Iterable, Optional, Tuple
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

MINUTE = 60
HOUR = 3600


class RateLimiter:
    """Sliding-window limiter kept in process memory, one window pair per client."""

    def __init__(self, requests_per_minute: int = 60, requests_per_hour: int = 1000):
        self.requests_per_minute = requests_per_minute
        self.requests_per_hour = requests_per_hour
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def _prune(self, hits: Deque[float], now: float) -> None:
        while hits and now - hits[0] >= HOUR:
            hits.popleft()

    def check(self, client_id: str, now: Optional[float] = None) -> Tuple[bool, int]:
        """Record a hit if allowed. Returns (allowed, seconds until retry)."""
        now = time.time() if now is None else now
        hits = self._hits[client_id]
        self._prune(hits, now)

        last_minute = [t for t in hits if now - t < MINUTE]
        if len(last_minute) >= self.requests_per_minute:
            return False, max(1, int(MINUTE - (now - last_minute[0])))
        if len(hits) >= self.requests_per_hour:
            return False, max(1, int(HOUR - (now - hits[0])))

        hits.append(now)
        return True, 0


class RateLimitMiddleware(BaseHTTPMiddleware):
    """FastAPI middleware for rate limiting."""

    def __init__(
        self,
        app,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000,
        exempt_paths: Iterable[str] = ("/health",),
    ):
        super().__init__(app)
        self.limiter = RateLimiter(requests_per_minute, requests_per_hour)
        self.exempt_paths = set(exempt_paths)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        allowed, retry_after = self.limiter.check(client_id)
        if not allowed:
            # Raising here would bypass the app's exception handlers
            return JSONResponse(
                status_code=429,
                content={"detail": "Rate limit exceeded. Try again later."},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
