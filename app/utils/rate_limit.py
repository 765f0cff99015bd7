import logging
import time
from typing import Dict, List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window request counter per client address for paths under
    `path_prefix`. Counters live in process memory and reset with the server.
    """

    def __init__(self, app, window_ms: int, max_requests: int, path_prefix: str = "/api/"):
        super().__init__(app)
        self.window_seconds = window_ms / 1000
        self.max_requests = max_requests
        self.path_prefix = path_prefix
        self.windows: Dict[str, List[float]] = {}
        self.swept_at: Optional[float] = None

    def sweep(self, now: float):
        """Drops expired windows, at most once per window length."""
        if self.swept_at is not None and now - self.swept_at < self.window_seconds:
            return
        self.windows = {
            client: window for client, window in self.windows.items()
            if now - window[0] < self.window_seconds
        }
        self.swept_at = now

    def hit(self, client: str, now: float) -> int:
        self.sweep(now)
        window = self.windows.get(client)
        if window is None or now - window[0] >= self.window_seconds:
            window = [now, 0]
            self.windows[client] = window
        window[1] += 1
        return int(window[1])

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        count = self.hit(client, time.monotonic())
        remaining = max(0, self.max_requests - count)

        if count > self.max_requests:
            logger.warning(f"Rate limit exceeded for {client} on {request.url.path}")
            response = JSONResponse(status_code=429, content={"success": False, "message": RATE_LIMIT_MESSAGE})
        else:
            response = await call_next(request)

        response.headers["RateLimit-Limit"] = str(self.max_requests)
        response.headers["RateLimit-Remaining"] = str(remaining)
        return response
