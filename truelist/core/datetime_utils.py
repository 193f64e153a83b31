"""Timezone helpers for cache expiry bookkeeping.

All functions return naive UTC datetimes so expiry timestamps compare
consistently regardless of the host timezone.
"""

from datetime import UTC, datetime, timedelta


def utc_now() -> datetime:
    """Get current UTC time as naive datetime."""
    return datetime.now(UTC).replace(tzinfo=None)


def is_expired(expires_at: datetime) -> bool:
    """Check if a timestamp has expired.

    Args:
        expires_at: Expiry timestamp (naive UTC)

    Returns:
        True if current time is past expires_at
    """
    return utc_now() >= expires_at


def get_expiry(seconds: float = 0, minutes: int = 0, hours: int = 0) -> datetime:
    """Get future expiry datetime.

    Args:
        seconds: Seconds to add to now
        minutes: Minutes to add to now
        hours: Hours to add to now

    Returns:
        Naive UTC datetime representing the expiry point
    """
    delta = timedelta(seconds=seconds, minutes=minutes, hours=hours)
    return utc_now() + delta
