# app/managers/rate_limiter.py

"""
Fixed-window rate limiting keyed by client identity.

Each identity gets a window that starts on its first request. Up to ``limit``
requests are allowed until ``window_seconds`` have passed since that start;
the next request after that opens a fresh window. This is a coarse fixed
window rather than a sliding window or token bucket: a client
can spend a full quota at the end of one window and another full quota at
the start of the next, so up to ``2 * limit`` requests may land within any
``window_seconds`` span.

Window state lives in a ``RateWindowStore`` handed to the limiter. The bundled
``InMemoryRateWindowStore`` is per-process: limits reset on restart and are
not shared between replicas.
"""

from collections.abc import Callable
from dataclasses import dataclass
from math import ceil
from threading import Lock
from time import monotonic
from typing import Protocol, runtime_checkable

from fastapi import Request
from slowapi.util import get_remote_address

from app.configs.settings import UNKNOWN_CLIENT, Settings
from app.monitoring.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class RateWindow:
    """Request count for one identity since ``window_start``."""

    count: int
    window_start: float

    def is_stale(self, now: float, window_seconds: float) -> bool:
        """A window expires once its start is more than ``window_seconds`` ago."""
        return now - self.window_start > window_seconds


@dataclass(frozen=True, slots=True)
class RateDecision:
    """Outcome of a rate limit check."""

    allowed: bool
    limit: int
    remaining: int
    retry_after: int = 0

    @classmethod
    def allow(cls, limit: int, count: int) -> "RateDecision":
        return cls(allowed=True, limit=limit, remaining=max(0, limit - count))

    @classmethod
    def reject(cls, limit: int, retry_after: int) -> "RateDecision":
        return cls(allowed=False, limit=limit, remaining=0, retry_after=retry_after)


@runtime_checkable
class RateWindowStore(Protocol):
    """Storage for per-identity windows."""

    def hit(self, identity: str, now: float, window_seconds: float) -> RateWindow:
        """
        Record one request for ``identity`` and return its updated window.

        Starts a new window with count 1 when none exists or the current one
        is stale, otherwise increments the count. Must be atomic per identity.
        """
        ...

    def prune(self, now: float, window_seconds: float, exclude: str | None = None) -> int:
        """Drop stale windows, skipping ``exclude``. Returns how many went."""
        ...

    def clear(self) -> None:
        """Forget every window."""
        ...


class InMemoryRateWindowStore:
    """
    Process-local window store.

    A single lock guards the map, so the reset-or-increment step stays atomic
    when the server runs handlers on several threads.
    """

    def __init__(self) -> None:
        self._windows: dict[str, RateWindow] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._windows)

    def __contains__(self, identity: object) -> bool:
        return identity in self._windows

    def get(self, identity: str) -> RateWindow | None:
        return self._windows.get(identity)

    def hit(self, identity: str, now: float, window_seconds: float) -> RateWindow:
        with self._lock:
            window = self._windows.get(identity)
            if window is None or window.is_stale(now, window_seconds):
                window = RateWindow(count=1, window_start=now)
                self._windows[identity] = window
            else:
                window.count += 1
            return RateWindow(count=window.count, window_start=window.window_start)

    def prune(self, now: float, window_seconds: float, exclude: str | None = None) -> int:
        # Non-blocking: if another thread holds the lock, skip this round
        if not self._lock.acquire(blocking=False):
            return 0
        try:
            stale = [
                identity
                for identity, window in self._windows.items()
                if identity != exclude and window.is_stale(now, window_seconds)
            ]
            for identity in stale:
                del self._windows[identity]
            return len(stale)
        finally:
            self._lock.release()

    def clear(self) -> None:
        with self._lock:
            self._windows.clear()


class FixedWindowRateLimiter:
    """
    Per-identity fixed-window limiter.

    Args:
        store: Window storage.
        limit: Requests allowed per window.
        window_seconds: Window length in seconds.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        store: RateWindowStore | None = None,
        *,
        limit: int = 60,
        window_seconds: int = 60,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        if limit < 1 or window_seconds < 1:
            mssg = "limit and window_seconds must be positive"
            raise ValueError(mssg)
        self.store = store if store is not None else InMemoryRateWindowStore()
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: RateWindowStore | None = None,
    ) -> "FixedWindowRateLimiter":
        return cls(
            store,
            limit=settings.RATE_LIMIT_REQUESTS,
            window_seconds=settings.RATE_LIMIT_WINDOW,
        )

    def check(self, identity: str) -> RateDecision:
        """
        Count one request for ``identity`` and decide whether it may proceed.

        Returns:
            An allowing decision, or a rejecting one whose ``retry_after`` is
            the whole number of seconds left in the identity's window.
        """
        now = self._clock()
        self.store.prune(now, self.window_seconds, exclude=identity)
        window = self.store.hit(identity, now, self.window_seconds)

        if window.count > self.limit:
            remaining = self.window_seconds - (now - window.window_start)
            retry_after = max(1, ceil(remaining))
            logger.warning(
                "Rate limit exceeded",
                client=identity,
                count=window.count,
                retry_after=retry_after,
            )
            return RateDecision.reject(self.limit, retry_after)

        return RateDecision.allow(self.limit, window.count)

    def reset(self) -> None:
        """Drop all windows."""
        self.store.clear()


def get_identifier(request: Request, header: str = "CF-Connecting-IP") -> str:
    """
    Get the client identity used to key rate limit windows.

    Uses the edge-supplied client address header when present, otherwise the
    transport peer address, otherwise a fixed sentinel.

    Args:
        request: FastAPI request object.
        header: Name of the header carrying the original client address.

    Returns:
        Identity string.
    """
    if forwarded := request.headers.get(header, "").strip():
        return forwarded
    if request.client is None or not request.client.host:
        return UNKNOWN_CLIENT
    return get_remote_address(request)
