"""Sliding-window rate limiting for outbound web requests."""

from __future__ import annotations

import asyncio
import json
import time
from collections import deque
from collections.abc import Awaitable, Callable
from pathlib import Path

from loguru import logger


class RateLimitStore:
    """
    Persist admission timestamps per rate-limit key in a JSON file.

    Writes are synchronous and happen under the limiter's key lock. The file
    holds at most one window of stamps per key, and limiters sharing a store
    run on one event loop, so read-modify-write never interleaves.
    """

    def __init__(self, path: Path):
        self._path = path.expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self, key: str) -> list[float]:
        data = self._read()
        raw = data.get(key)
        if not isinstance(raw, list):
            return []

        stamps: list[float] = []
        for item in raw:
            try:
                stamps.append(float(item))
            except (TypeError, ValueError):
                continue
        return sorted(stamps)

    def save(self, key: str, timestamps: list[float]) -> None:
        data = self._read()
        data[key] = list(timestamps)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def _read(self) -> dict:
        if not self._path.exists() or not self._path.is_file():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable rate limit state {}: {}", self._path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return data


class RateLimiter:
    """
    Throttle admissions to at most ``requests_per_minute`` per rolling window.

    Each key keeps its own timestamp log and lock. ``acquire`` never rejects:
    a caller over the limit sleeps until the oldest admission in the window
    expires, then re-checks.
    """

    def __init__(
        self,
        requests_per_minute: int,
        *,
        window_s: float = 60.0,
        store: RateLimitStore | None = None,
        clock: Callable[[], float] | None = None,
        sleep: Callable[[float], Awaitable[object]] | None = None,
    ):
        if requests_per_minute < 1:
            raise ValueError("requests_per_minute must be >= 1")
        if window_s <= 0:
            raise ValueError("window_s must be > 0")

        self.limit = requests_per_minute
        self.window_s = window_s
        self._store = store
        # Stored timestamps are wall-clock values.
        self._clock = clock or (time.time if store is not None else time.monotonic)
        self._sleep = sleep or asyncio.sleep
        self._windows: dict[str, deque[float]] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    async def acquire(self, key: str = "default") -> None:
        """Wait until an operation for ``key`` is permitted, then record it."""
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            window = self._window(key)
            now = self._clock()
            self._purge(window, now)

            while len(window) >= self.limit:
                delay = window[0] + self.window_s - now
                if delay > 0:
                    logger.debug(
                        "Rate limit reached for {} ({}/{}), waiting {:.2f}s",
                        key,
                        len(window),
                        self.limit,
                        delay,
                    )
                    await self._sleep(delay)
                now = self._clock()
                self._purge(window, now)

            window.append(now)
            if self._store is not None:
                self._store.save(key, list(window))

    def pending(self, key: str = "default") -> int:
        """Number of admissions for ``key`` still inside the window."""
        window = self._window(key)
        self._purge(window, self._clock())
        return len(window)

    def _window(self, key: str) -> deque[float]:
        window = self._windows.get(key)
        if window is None:
            stamps = self._store.load(key) if self._store is not None else []
            window = deque(stamps)
            self._windows[key] = window
        return window

    def _purge(self, window: deque[float], now: float) -> None:
        cutoff = now - self.window_s
        while window and window[0] <= cutoff:
            window.popleft()
        # Stamps ahead of the clock (restored state, wall clock stepped back).
        while window and window[-1] > now:
            window.pop()
