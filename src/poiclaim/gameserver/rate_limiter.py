"""
Sliding-window rate limiting for CFTools Data API calls.
"""

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests_per_window: int = 30
    window_seconds: float = 60.0


class RateLimiter:
    """
    Sliding-window limiter for outbound API requests.

    Async callers wait until a slot frees up instead of failing.
    """

    def __init__(self, config: Optional[RateLimitConfig] = None):
        self.config = config or RateLimitConfig()
        self._timestamps: deque = deque()
        self._lock = asyncio.Lock()

    def _evict(self, now: float) -> None:
        window_start = now - self.config.window_seconds
        while self._timestamps and self._timestamps[0] <= window_start:
            self._timestamps.popleft()

    async def acquire(self) -> None:
        """Wait for a free slot and record the request."""
        async with self._lock:
            now = time.monotonic()
            self._evict(now)

            if len(self._timestamps) >= self.config.requests_per_window:
                wait_time = self._timestamps[0] + self.config.window_seconds - now
                if wait_time > 0:
                    logger.debug(f"CFTools rate limit reached, waiting {wait_time:.2f}s")
                    await asyncio.sleep(wait_time)
                now = time.monotonic()
                self._evict(now)

            self._timestamps.append(now)

    @property
    def available(self) -> int:
        """Number of requests available in the current window."""
        window_start = time.monotonic() - self.config.window_seconds
        used = sum(1 for ts in self._timestamps if ts > window_start)
        return max(0, self.config.requests_per_window - used)


class RateLimitedClient:
    """Wraps httpx.AsyncClient so every request passes through a RateLimiter."""

    def __init__(self, client: httpx.AsyncClient, rate_limiter: Optional[RateLimiter] = None):
        self._client = client
        self._limiter = rate_limiter or RateLimiter()

    async def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        await self._limiter.acquire()
        return await self._client.request(method, url, **kwargs)

    async def get(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("GET", url, **kwargs)

    async def post(self, url: str, **kwargs) -> httpx.Response:
        return await self.request("POST", url, **kwargs)

    async def aclose(self) -> None:
        await self._client.aclose()
