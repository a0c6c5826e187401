"""Sorting, summary statistics and score labels for scored videos."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence, Union

import numpy as np

from creatorscore.metrics import parse_published_at
from creatorscore.models import VideoType, VideoWithScores


class SortOption(str, Enum):
    """Criteria for ordering scored videos (always descending)."""
    VIRAL = "viral"
    PERFORMANCE = "performance"
    VIEWS = "views"
    DATE = "date"
    COMMENTS = "comments"
    LIKES = "likes"


SORT_LABELS = {
    SortOption.VIRAL: "Viral Score",
    SortOption.PERFORMANCE: "Performance Score",
    SortOption.VIEWS: "Views",
    SortOption.DATE: "Date",
    SortOption.COMMENTS: "Comments",
    SortOption.LIKES: "Likes",
}

_SORT_KEYS: dict[SortOption, Callable[[VideoWithScores], Any]] = {
    SortOption.VIRAL: lambda v: v.viral_score,
    SortOption.PERFORMANCE: lambda v: v.performance_score,
    SortOption.VIEWS: lambda v: v.view_count,
    SortOption.DATE: lambda v: parse_published_at(v.published_at),
    SortOption.COMMENTS: lambda v: v.comment_count,
    SortOption.LIKES: lambda v: v.like_count,
}


def sort_videos(
    videos: Sequence[VideoWithScores],
    sort_by: Union[str, SortOption] = SortOption.VIRAL,
) -> list[VideoWithScores]:
    """Return a new list sorted descending by ``sort_by``.

    The sort is stable: videos with equal keys keep their input order.
    """
    try:
        option = SortOption(sort_by)
    except ValueError:
        valid = ", ".join(o.value for o in SortOption)
        raise ValueError(f"Unknown sort option '{sort_by}'. Must be one of: {valid}") from None

    # sorted(reverse=True) keeps equal elements in their original order
    return sorted(videos, key=_SORT_KEYS[option], reverse=True)


@dataclass
class VideoStats:
    """Aggregate statistics for a scored batch."""

    count: int = 0
    avg_viral_score: float = 0.0
    avg_performance_score: float = 0.0
    top_viral_video: Optional[VideoWithScores] = None
    top_performance_video: Optional[VideoWithScores] = None
    shorts_count: int = 0
    long_form_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'count': self.count,
            'avgViralScore': self.avg_viral_score,
            'avgPerformanceScore': self.avg_performance_score,
            'topViralVideo': self.top_viral_video.to_dict() if self.top_viral_video else None,
            'topPerformanceVideo': (
                self.top_performance_video.to_dict() if self.top_performance_video else None
            ),
            'shortsCount': self.shorts_count,
            'longFormCount': self.long_form_count,
        }


def summary_stats(videos: Sequence[VideoWithScores]) -> VideoStats:
    """Compute summary statistics. Empty input gives zeros and no top videos."""
    if not videos:
        return VideoStats()

    return VideoStats(
        count=len(videos),
        avg_viral_score=float(np.mean([v.viral_score for v in videos])),
        avg_performance_score=float(np.mean([v.performance_score for v in videos])),
        top_viral_video=sort_videos(videos, SortOption.VIRAL)[0],
        top_performance_video=sort_videos(videos, SortOption.PERFORMANCE)[0],
        shorts_count=sum(1 for v in videos if v.video_type is VideoType.SHORT),
        long_form_count=sum(1 for v in videos if v.video_type is VideoType.LONG),
    )


@dataclass(frozen=True)
class ScoreLabel:
    """Human-readable interpretation of a 0-100 score."""

    label: str
    color: str


# (threshold, label, color), checked from the top down
_SCORE_TIERS = [
    (80, "Exceptional", "emerald"),
    (60, "Strong", "green"),
    (40, "Average", "yellow"),
    (20, "Below Average", "orange"),
]


def score_label(score: float) -> ScoreLabel:
    """Map a score to its interpretation tier."""
    for threshold, label, color in _SCORE_TIERS:
        if score >= threshold:
            return ScoreLabel(label=label, color=color)
    return ScoreLabel(label="Low", color="red")
