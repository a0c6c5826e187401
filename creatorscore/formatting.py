"""Display helpers for numbers, durations and publish times."""

from datetime import datetime
from typing import Optional, Union

from creatorscore.metrics import parse_duration_seconds, parse_published_at, utc_now


def format_number(num: int) -> str:
    """Format large numbers compactly (e.g., 1000000 -> "1M")."""
    for divisor, suffix in ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K")):
        if num >= divisor:
            text = f"{num / divisor:.1f}"
            if text.endswith(".0"):
                text = text[:-2]
            return f"{text}{suffix}"
    return f"{num:,}"


def format_duration(duration: str) -> str:
    """Format an ISO 8601 duration for display (e.g., "PT5M32S" -> "5:32")."""
    total = parse_duration_seconds(duration)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


_INTERVALS = [
    ("year", 31536000),
    ("month", 2592000),
    ("week", 604800),
    ("day", 86400),
    ("hour", 3600),
    ("minute", 60),
]


def time_ago(published_at: Union[str, datetime], now: Optional[datetime] = None) -> str:
    """Describe how long ago something was published (e.g., "3 days ago")."""
    seconds = int((utc_now(now) - parse_published_at(published_at)).total_seconds())

    for label, length in _INTERVALS:
        count = seconds // length
        if count >= 1:
            return f"{count} {label}{'s' if count != 1 else ''} ago"

    return "Just now"
