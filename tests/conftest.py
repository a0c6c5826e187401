"""Shared fixtures for CreatorScore tests."""

from datetime import datetime, timedelta, timezone

import pytest

from creatorscore.models import VideoRecord

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def iso_days_ago(days: float, now: datetime = NOW) -> str:
    """ISO 8601 timestamp ``days`` before ``now``."""
    return (now - timedelta(days=days)).strftime("%Y-%m-%dT%H:%M:%SZ")


def make_video(
    id: str = "vid_1",
    views: int = 1000,
    likes: int = 50,
    comments: int = 5,
    days_ago: float = 10,
    duration: str = "PT5M",
    **kwargs,
) -> VideoRecord:
    """Build a VideoRecord with sensible defaults."""
    return VideoRecord(
        id=id,
        title=kwargs.pop("title", f"Video {id}"),
        channel_id=kwargs.pop("channel_id", "UC_test"),
        channel_title=kwargs.pop("channel_title", "Test Channel"),
        published_at=kwargs.pop("published_at", iso_days_ago(days_ago)),
        view_count=views,
        like_count=likes,
        comment_count=comments,
        duration=duration,
        **kwargs,
    )


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def mixed_batch() -> list[VideoRecord]:
    """Shorts and long-form videos of different ages and engagement."""
    return [
        make_video("long_hit", views=50000, likes=4000, comments=600, days_ago=3, duration="PT12M30S"),
        make_video("short_new", views=8000, likes=900, comments=40, days_ago=1, duration="PT45S"),
        make_video("long_old", views=120000, likes=2000, comments=100, days_ago=200, duration="PT1H2M"),
        make_video("short_flat", views=300, likes=3, comments=0, days_ago=40, duration="PT1M"),
        make_video("long_quiet", views=0, likes=0, comments=0, days_ago=5, duration="PT8M"),
    ]
