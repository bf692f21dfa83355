"""Per-client fixed-window request limiter for the HTTP surface.

Each client identity gets ``max_requests`` hits per window. The window starts
at the client's first request and resets once ``window_seconds`` have passed.
State is process-local.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _Window:
    started_at: float
    hits: int


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_seconds: int

    def headers(self) -> dict[str, str]:
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_seconds),
        }


class RateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def hit(self, client: str) -> RateLimitDecision:
        now = self._clock()
        window = self._windows.get(client)
        if window is None or now - window.started_at >= self.window_seconds:
            self._prune(now)
            window = _Window(started_at=now, hits=0)
            self._windows[client] = window
        window.hits += 1
        reset = max(0, math.ceil(window.started_at + self.window_seconds - now))
        return RateLimitDecision(
            allowed=window.hits <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - window.hits),
            reset_seconds=reset,
        )

    def _prune(self, now: float) -> None:
        expired = [key for key, window in self._windows.items() if now - window.started_at >= self.window_seconds]
        for key in expired:
            del self._windows[key]
