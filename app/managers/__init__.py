from app.managers.rate_limiter import (
    FixedWindowRateLimiter,
    InMemoryRateWindowStore,
    RateDecision,
    RateWindow,
    RateWindowStore,
    get_identifier,
)

__all__ = [
    "FixedWindowRateLimiter",
    "InMemoryRateWindowStore",
    "RateDecision",
    "RateWindow",
    "RateWindowStore",
    "get_identifier",
]
