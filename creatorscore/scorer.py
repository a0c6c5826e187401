"""Main CreatorScore scoring engine.

Viral Score       = 100 · (w_vel · vel_norm + w_eng · eng_norm + w_comm · comm_norm)
Performance Score = 100 · (w_eng · eng_norm + w_comm · comm_norm)

Both are clamped to [0, 100]. Normalization is min-max over the batch being
scored, so scores are comparable only within one call.
"""

from datetime import datetime
from typing import Iterable, Optional, Sequence, Union
import logging

from creatorscore.config import ScoreWeights, DEFAULT_WEIGHTS
from creatorscore.metrics import (
    classify_video_type,
    is_within_timeframe,
    utc_now,
    raw_metrics,
)
from creatorscore.models import (
    RawMetrics,
    VideoRecord,
    VideoTypeFilter,
    VideoWithScores,
)
from creatorscore.normalization import (
    NormalizationBounds,
    bounds_from_metrics,
    normalize,
)

logger = logging.getLogger(__name__)


def _clamp_score(score: float) -> float:
    return min(max(score, 0.0), 100.0)


def filter_videos(
    videos: Iterable[VideoRecord],
    video_type: Union[str, VideoTypeFilter] = VideoTypeFilter.ALL,
    timeframe_days: Optional[float] = None,
    now: Optional[datetime] = None,
) -> list[VideoRecord]:
    """Keep videos inside the timeframe and matching the type filter.

    Order is preserved.

    Args:
        videos: Videos to filter
        video_type: "all", "short" or "long"
        timeframe_days: Maximum age in days (None = no limit)
        now: Reference time (defaults to the current UTC time)
    """
    video_type = VideoTypeFilter(video_type)
    now = utc_now(now)

    kept = []
    for video in videos:
        if not is_within_timeframe(video.published_at, timeframe_days, now):
            continue
        if video_type is not VideoTypeFilter.ALL and \
                classify_video_type(video).value != video_type.value:
            continue
        kept.append(video)

    return kept


def score_video(
    video: VideoRecord,
    bounds: NormalizationBounds,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
    now: Optional[datetime] = None,
    metrics: Optional[RawMetrics] = None,
) -> VideoWithScores:
    """Score a single video against precomputed batch bounds.

    Weights are not re-validated here; out-of-range results are clamped.
    """
    metrics = metrics or raw_metrics(video, now)

    eng_norm = normalize(metrics.engagement_rate, bounds.engagement.min, bounds.engagement.max)
    comm_norm = normalize(metrics.comment_rate, bounds.comment.min, bounds.comment.max)
    vel_norm = normalize(metrics.velocity, bounds.velocity.min, bounds.velocity.max)

    viral = weights.viral
    viral_score = _clamp_score(100 * (
        viral.velocity * vel_norm +
        viral.engagement * eng_norm +
        viral.comment * comm_norm
    ))

    performance = weights.performance
    performance_score = _clamp_score(100 * (
        performance.engagement * eng_norm +
        performance.comment * comm_norm
    ))

    return VideoWithScores(
        video=video,
        viral_score=viral_score,
        performance_score=performance_score,
        video_type=classify_video_type(video),
        days_since_publish=metrics.days_since_publish,
        engagement_rate=metrics.engagement_rate,
        comment_rate=metrics.comment_rate,
        velocity=metrics.velocity,
        components={
            'engagement_normalized': eng_norm,
            'comment_normalized': comm_norm,
            'velocity_normalized': vel_norm,
        },
    )


def score_batch(
    videos: Sequence[VideoRecord],
    weights: Optional[ScoreWeights] = None,
    now: Optional[datetime] = None,
) -> list[VideoWithScores]:
    """Score every video with bounds computed over exactly this batch."""
    if not videos:
        return []

    weights = weights or DEFAULT_WEIGHTS
    now = utc_now(now)

    metrics = [raw_metrics(video, now) for video in videos]
    bounds = bounds_from_metrics(metrics)

    return [
        score_video(video, bounds, weights, now, metrics=m)
        for video, m in zip(videos, metrics)
    ]


def process_batch(
    videos: Iterable[VideoRecord],
    video_type: Union[str, VideoTypeFilter] = VideoTypeFilter.ALL,
    timeframe_days: Optional[float] = None,
    weights: Optional[ScoreWeights] = None,
    now: Optional[datetime] = None,
) -> list[VideoWithScores]:
    """Filter a batch, then score it.

    Normalization runs over the filtered set. Results keep the filtered
    order; use ranking.sort_videos to reorder.
    """
    now = utc_now(now)
    filtered = filter_videos(videos, video_type, timeframe_days, now)

    logger.debug(
        f"Scoring {len(filtered)} videos "
        f"(type={VideoTypeFilter(video_type).value}, timeframe_days={timeframe_days})"
    )

    return score_batch(filtered, weights, now)


class VideoScorer:
    """Scores batches of videos with an explicit weight configuration.

    The weights are injected by the caller (usually loaded from a
    WeightsStore); the scorer never reads or writes them anywhere else.
    """

    def __init__(self, weights: Optional[ScoreWeights] = None):
        """Initialize scorer with weights (defaults when None)."""
        self.weights = weights or ScoreWeights.default()

    def score_batch(
        self,
        videos: Sequence[VideoRecord],
        now: Optional[datetime] = None,
    ) -> list[VideoWithScores]:
        """Score an already-filtered batch."""
        return score_batch(videos, self.weights, now)

    def filter_and_score(
        self,
        videos: Iterable[VideoRecord],
        video_type: Union[str, VideoTypeFilter] = VideoTypeFilter.ALL,
        timeframe_days: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> list[VideoWithScores]:
        """Filter then score a batch; see process_batch."""
        return process_batch(videos, video_type, timeframe_days, self.weights, now)
