"""In-process sliding-window submission throttle."""

import asyncio
import time
from collections import deque
from collections.abc import Callable

import logfire

from inkwell.domain.service.throttle_service import SubmissionThrottle


class InMemorySlidingWindowThrottle(SubmissionThrottle):
    """Counts hits per key within the last ``window_seconds``.

    State lives in this process only, so limits are per worker. Each key has
    its own ``asyncio.Lock`` around prune-check-append. Keys whose window has
    emptied are swept every ``sweep_interval`` hits.
    """

    def __init__(
        self,
        window_seconds: float = 600,
        max_submissions: int = 5,
        sweep_interval: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize throttle.

        Args:
            window_seconds: Sliding window length
            max_submissions: Hits accepted per key within the window
            sweep_interval: Run a sweep after this many hits
            clock: Monotonic time source (seconds)
        """
        self.window_seconds = window_seconds
        self.max_submissions = max_submissions
        self.sweep_interval = sweep_interval
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._hits_since_sweep = 0

    def _prune(self, timestamps: deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while timestamps and timestamps[0] <= cutoff:
            timestamps.popleft()

    async def hit(self, key: str) -> bool:
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            now = self._clock()
            timestamps = self._hits.setdefault(key, deque())
            self._prune(timestamps, now)

            allowed = len(timestamps) < self.max_submissions
            if allowed:
                timestamps.append(now)

        self._hits_since_sweep += 1
        if self._hits_since_sweep >= self.sweep_interval:
            await self.sweep()

        return allowed

    async def sweep(self) -> int:
        self._hits_since_sweep = 0
        now = self._clock()
        removed = 0
        for key in list(self._hits):
            lock = self._locks.get(key)
            if lock is not None and lock.locked():
                continue
            timestamps = self._hits[key]
            self._prune(timestamps, now)
            if not timestamps:
                del self._hits[key]
                self._locks.pop(key, None)
                removed += 1
        if removed:
            logfire.debug("Throttle swept idle clients", removed=removed)
        return removed

    def tracked_keys(self) -> int:
        """Number of clients currently tracked."""
        return len(self._hits)
