from datetime import UTC, datetime

from fastapi import Request


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def utc_now() -> datetime:
    """Return the current UTC time without microseconds."""
    return datetime.now(tz=UTC).replace(microsecond=0)


def today_str() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return utc_now().isoformat().replace("+00:00", "Z")


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items ``limit`` at a time."""
    return -(-total // limit) if limit > 0 else 0
