"""CreatorScore: batch-relative Viral and Performance scores for creator videos.

Raw engagement counters (views, likes, comments, publish time, duration)
are turned into two 0-100 signals that are comparable within the batch of
videos they were computed from.
"""

from creatorscore.models import (
    VideoRecord,
    VideoWithScores,
    RawMetrics,
    VideoType,
    VideoTypeFilter,
)
from creatorscore.config import (
    ScoreWeights,
    ViralWeights,
    PerformanceWeights,
    DEFAULT_WEIGHTS,
    ANALYTICS_TIMEFRAMES,
    CHANNEL_TIMEFRAMES,
    PRESET_DEFAULTS,
    resolve_timeframe,
)
from creatorscore.exceptions import (
    CreatorScoreError,
    WeightValidationError,
    DurationParseError,
)
from creatorscore.metrics import classify_video_type, days_since_publish, raw_metrics
from creatorscore.normalization import NormalizationBounds, compute_bounds, normalize
from creatorscore.scorer import VideoScorer, filter_videos, score_video, process_batch
from creatorscore.ranking import SortOption, VideoStats, sort_videos, summary_stats, score_label
from creatorscore.settings_store import WeightsStore

__version__ = "1.0.0"

__all__ = [
    "VideoRecord",
    "VideoWithScores",
    "RawMetrics",
    "VideoType",
    "VideoTypeFilter",
    "ScoreWeights",
    "ViralWeights",
    "PerformanceWeights",
    "DEFAULT_WEIGHTS",
    "ANALYTICS_TIMEFRAMES",
    "CHANNEL_TIMEFRAMES",
    "PRESET_DEFAULTS",
    "resolve_timeframe",
    "CreatorScoreError",
    "WeightValidationError",
    "DurationParseError",
    "classify_video_type",
    "days_since_publish",
    "raw_metrics",
    "NormalizationBounds",
    "compute_bounds",
    "normalize",
    "VideoScorer",
    "filter_videos",
    "score_video",
    "process_batch",
    "SortOption",
    "VideoStats",
    "sort_videos",
    "summary_stats",
    "score_label",
    "WeightsStore",
]
