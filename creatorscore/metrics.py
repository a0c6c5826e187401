"""Metric extraction: raw, non-normalized signals for a single video.

engagement_rate = (likes + comments) / views
comment_rate    = comments / views
velocity        = ln(views / days_since_publish + 1)

Every function here is total over non-negative counts. Zero views yield
zero rates, and days_since_publish is floored so velocity never divides
by zero.
"""

from datetime import datetime, timezone
from typing import Optional, Union
import logging
import math
import re

from creatorscore.exceptions import DurationParseError
from creatorscore.models import RawMetrics, VideoRecord, VideoType

logger = logging.getLogger(__name__)

# Videos at or under this length are Shorts
SHORT_MAX_SECONDS = 60

# Floor for elapsed days (~15 minutes)
MIN_DAYS_SINCE_PUBLISH = 0.01

SECONDS_PER_DAY = 60 * 60 * 24

_DURATION_RE = re.compile(
    r'^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$'
)


def parse_duration_seconds(duration: Optional[str], strict: bool = False) -> int:
    """Parse an ISO 8601 duration to seconds.

    Example: PT15M30S -> 930, P1DT2H -> 93600

    Args:
        duration: ISO 8601 duration string
        strict: Raise DurationParseError instead of returning 0 on bad input

    Returns:
        Whole seconds; 0 for malformed input in non-strict mode
    """
    text = duration.strip() if duration else ""
    match = _DURATION_RE.match(text)
    if match is None or not any(match.groups()) or text.endswith('T'):
        if strict:
            raise DurationParseError(f"Invalid ISO 8601 duration: {duration!r}")
        logger.warning(f"Could not parse duration {duration!r}, treating as 0 seconds")
        return 0

    days = int(match.group(1) or 0)
    hours = int(match.group(2) or 0)
    minutes = int(match.group(3) or 0)
    seconds = float(match.group(4) or 0)

    return int(days * SECONDS_PER_DAY + hours * 3600 + minutes * 60 + seconds)


def parse_published_at(published_at: Union[str, datetime]) -> datetime:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Naive timestamps are assumed to be UTC.
    """
    if isinstance(published_at, datetime):
        dt = published_at
    else:
        dt = datetime.fromisoformat(published_at.strip().replace('Z', '+00:00'))

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now(now: Optional[datetime] = None) -> datetime:
    """Current UTC time, or ``now`` normalized to aware UTC."""
    if now is None:
        return datetime.now(timezone.utc)
    return parse_published_at(now)


def classify_video_type(video: VideoRecord) -> VideoType:
    """Classify a video as a Short (<= 60 seconds) or long-form."""
    seconds = parse_duration_seconds(video.duration)
    return VideoType.SHORT if seconds <= SHORT_MAX_SECONDS else VideoType.LONG


def is_short(video: VideoRecord) -> bool:
    """Check if a video is a Short."""
    return classify_video_type(video) is VideoType.SHORT


def days_since_publish(
    published_at: Union[str, datetime],
    now: Optional[datetime] = None,
) -> float:
    """Days elapsed since publish, floored at MIN_DAYS_SINCE_PUBLISH."""
    elapsed = utc_now(now) - parse_published_at(published_at)
    days = elapsed.total_seconds() / SECONDS_PER_DAY
    return max(days, MIN_DAYS_SINCE_PUBLISH)


def is_within_timeframe(
    published_at: Union[str, datetime],
    days: Optional[float],
    now: Optional[datetime] = None,
) -> bool:
    """Check if a video was published within the last ``days`` days.

    ``days=None`` means no timeframe filter.
    """
    if days is None:
        return True
    return days_since_publish(published_at, now) <= days


def engagement_rate(views: int, likes: int, comments: int) -> float:
    """(likes + comments) / views, or 0 when there are no views."""
    if views == 0:
        return 0.0
    return (likes + comments) / views


def comment_rate(views: int, comments: int) -> float:
    """comments / views, or 0 when there are no views."""
    if views == 0:
        return 0.0
    return comments / views


def velocity(views: int, days: float) -> float:
    """Log-scaled views per day since publish."""
    return math.log(views / max(days, MIN_DAYS_SINCE_PUBLISH) + 1)


def raw_metrics(video: VideoRecord, now: Optional[datetime] = None) -> RawMetrics:
    """Compute all raw metrics for a single video."""
    days = days_since_publish(video.published_at, now)

    return RawMetrics(
        engagement_rate=engagement_rate(
            video.view_count, video.like_count, video.comment_count
        ),
        comment_rate=comment_rate(video.view_count, video.comment_count),
        velocity=velocity(video.view_count, days),
        days_since_publish=days,
    )
