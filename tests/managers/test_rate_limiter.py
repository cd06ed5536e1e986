"""Tests for app/managers/rate_limiter.py."""

from unittest.mock import MagicMock

import pytest

from app.managers.rate_limiter import (
    FixedWindowRateLimiter,
    InMemoryRateWindowStore,
    RateWindow,
    RateWindowStore,
    get_identifier,
)


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> InMemoryRateWindowStore:
    return InMemoryRateWindowStore()


@pytest.fixture
def limiter(store: InMemoryRateWindowStore, clock: FakeClock) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(store, limit=60, window_seconds=60, clock=clock)


class TestRateWindow:
    def test_stale_only_after_window_passes(self) -> None:
        window = RateWindow(count=1, window_start=0.0)
        assert window.is_stale(60.0, 60) is False
        assert window.is_stale(60.5, 60) is True


class TestFixedWindowRateLimiter:
    def test_sixty_allowed_sixty_first_rejected(self, limiter: FixedWindowRateLimiter) -> None:
        decisions = [limiter.check("1.2.3.4") for _ in range(60)]
        assert all(d.allowed for d in decisions)
        assert decisions[-1].remaining == 0

        rejected = limiter.check("1.2.3.4")
        assert rejected.allowed is False
        assert 1 <= rejected.retry_after <= 60

    def test_retry_after_counts_down(
        self,
        limiter: FixedWindowRateLimiter,
        clock: FakeClock,
    ) -> None:
        for _ in range(60):
            limiter.check("client")
        clock.advance(45.2)
        assert limiter.check("client").retry_after == 15

    def test_retry_after_is_at_least_one(
        self,
        limiter: FixedWindowRateLimiter,
        clock: FakeClock,
    ) -> None:
        for _ in range(60):
            limiter.check("client")
        clock.advance(60)
        assert limiter.check("client").retry_after == 1

    def test_window_resets_after_elapsed(
        self,
        limiter: FixedWindowRateLimiter,
        clock: FakeClock,
    ) -> None:
        for _ in range(75):
            limiter.check("client")
        assert limiter.check("client").allowed is False

        clock.advance(61)
        decision = limiter.check("client")
        assert decision.allowed is True
        assert decision.remaining == 59

    def test_identities_are_independent(self, limiter: FixedWindowRateLimiter) -> None:
        for _ in range(61):
            limiter.check("noisy")
        assert limiter.check("noisy").allowed is False
        assert limiter.check("quiet").allowed is True

    def test_boundary_burst_is_accepted(
        self,
        limiter: FixedWindowRateLimiter,
        clock: FakeClock,
    ) -> None:
        """A full quota at the end of one window and another at the start of the next."""
        limiter.check("client")
        clock.advance(59)
        assert all(limiter.check("client").allowed for _ in range(59))
        clock.advance(2)
        assert all(limiter.check("client").allowed for _ in range(60))

    def test_stale_windows_of_others_pruned(
        self,
        limiter: FixedWindowRateLimiter,
        store: InMemoryRateWindowStore,
        clock: FakeClock,
    ) -> None:
        limiter.check("old-a")
        limiter.check("old-b")
        clock.advance(120)
        limiter.check("new")

        assert "old-a" not in store
        assert "old-b" not in store
        assert "new" in store
        assert len(store) == 1

    def test_fresh_windows_not_pruned(
        self,
        limiter: FixedWindowRateLimiter,
        store: InMemoryRateWindowStore,
        clock: FakeClock,
    ) -> None:
        limiter.check("recent")
        clock.advance(30)
        limiter.check("other")
        assert "recent" in store

    def test_reset_clears_windows(
        self,
        limiter: FixedWindowRateLimiter,
        store: InMemoryRateWindowStore,
    ) -> None:
        for _ in range(61):
            limiter.check("client")
        limiter.reset()
        assert len(store) == 0
        assert limiter.check("client").allowed is True

    def test_invalid_configuration(self) -> None:
        with pytest.raises(ValueError, match="must be positive"):
            FixedWindowRateLimiter(limit=0)

    def test_custom_store_is_used(self, clock: FakeClock) -> None:
        custom = InMemoryRateWindowStore()
        assert isinstance(custom, RateWindowStore)
        limiter = FixedWindowRateLimiter(custom, limit=1, window_seconds=10, clock=clock)
        limiter.check("x")
        window = custom.get("x")
        assert window is not None
        assert window.count == 1


class TestInMemoryRateWindowStore:
    def test_hit_returns_snapshot(self, store: InMemoryRateWindowStore) -> None:
        first = store.hit("a", 0.0, 60)
        store.hit("a", 1.0, 60)
        assert first.count == 1
        window = store.get("a")
        assert window is not None
        assert window.count == 2

    def test_prune_skips_excluded_identity(self, store: InMemoryRateWindowStore) -> None:
        store.hit("a", 0.0, 60)
        store.hit("b", 0.0, 60)
        assert store.prune(100.0, 60, exclude="a") == 1
        assert "a" in store

    def test_prune_gives_up_when_locked(self, store: InMemoryRateWindowStore) -> None:
        store.hit("a", 0.0, 60)
        with store._lock:
            assert store.prune(100.0, 60) == 0
        assert "a" in store


class TestGetIdentifier:
    def _request(self, headers: dict[str, str], client_host: str | None) -> MagicMock:
        request = MagicMock()
        request.headers = headers
        if client_host is None:
            request.client = None
        else:
            request.client.host = client_host
        return request

    def test_prefers_edge_header(self) -> None:
        request = self._request({"CF-Connecting-IP": "203.0.113.9"}, "10.0.0.1")
        assert get_identifier(request) == "203.0.113.9"

    def test_falls_back_to_peer_address(self) -> None:
        request = self._request({}, "10.0.0.1")
        assert get_identifier(request) == "10.0.0.1"

    def test_unknown_sentinel(self) -> None:
        request = self._request({}, None)
        assert get_identifier(request) == "unknown"

    def test_custom_header(self) -> None:
        request = self._request({"X-Real-IP": "198.51.100.7"}, "10.0.0.1")
        assert get_identifier(request, header="X-Real-IP") == "198.51.100.7"
