"""Rate Limiter — fixed-window request counters keyed by client identifier.

Invariants:
    - A key gets at most max_requests accepted hits per window
    - Windows are independent per key: one client never consumes another's budget
    - hit() never awaits, so concurrent requests on one event loop cannot interleave inside it

Design Decisions:
    - In-process memory over Redis: single uvicorn process, counters lost on restart
      are acceptable for a landing page
    - Clock is injectable so tests advance time without sleeping
    - Expired windows are swept at most once per window to bound memory
"""

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a single hit against a limiter."""
    allowed: bool
    limit: int
    remaining: int
    reset_after: float

    @property
    def retry_after_seconds(self) -> int:
        return max(1, int(self.reset_after + 0.999))


@dataclass
class _Window:
    started_at: float
    hits: int = 0


class FixedWindowRateLimiter:
    """Counts hits per key inside consecutive windows of fixed length."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> RateLimitDecision:
        """Record one request for key and decide whether it is allowed."""
        now = self._clock()
        self._sweep(now)

        window = self._windows.get(key)
        if window is None or now - window.started_at >= self.window_seconds:
            window = _Window(started_at=now)
            self._windows[key] = window

        window.hits += 1
        reset_after = window.started_at + self.window_seconds - now
        return RateLimitDecision(
            allowed=window.hits <= self.max_requests,
            limit=self.max_requests,
            remaining=max(0, self.max_requests - window.hits),
            reset_after=reset_after,
        )

    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when None."""
        if key is None:
            self._windows.clear()
        else:
            self._windows.pop(key, None)

    def _sweep(self, now: float) -> None:
        if now - self._last_sweep < self.window_seconds:
            return
        expired = [
            k for k, w in self._windows.items()
            if now - w.started_at >= self.window_seconds
        ]
        for k in expired:
            del self._windows[k]
        self._last_sweep = now
