"""Batch-relative min-max normalization.

Bounds are computed from the exact set of videos being compared, so a
normalized value (and any score built from it) only means something
within that batch.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence
import logging

import numpy as np

from creatorscore.metrics import raw_metrics
from creatorscore.models import RawMetrics, VideoRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MetricBounds:
    """Min and max of one raw metric across a batch."""

    min: float = 0.0
    max: float = 1.0


@dataclass(frozen=True)
class NormalizationBounds:
    """Bounds for every normalized metric in a batch."""

    engagement: MetricBounds = field(default_factory=MetricBounds)
    comment: MetricBounds = field(default_factory=MetricBounds)
    velocity: MetricBounds = field(default_factory=MetricBounds)

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            'engagement': {'min': self.engagement.min, 'max': self.engagement.max},
            'comment': {'min': self.comment.min, 'max': self.comment.max},
            'velocity': {'min': self.velocity.min, 'max': self.velocity.max},
        }


def normalize(value: float, min_val: float, max_val: float) -> float:
    """Min-max normalize ``value``.

    Returns 0.5 when min == max: a batch where every video shares the same
    value is neutral for that metric.
    """
    if max_val == min_val:
        return 0.5
    return (value - min_val) / (max_val - min_val)


def _bounds(values: list[float]) -> MetricBounds:
    arr = np.asarray(values, dtype=float)
    return MetricBounds(min=float(np.min(arr)), max=float(np.max(arr)))


def bounds_from_metrics(metrics: Sequence[RawMetrics]) -> NormalizationBounds:
    """Compute bounds from precomputed raw metrics.

    Empty input gives {0, 1} for every metric.
    """
    if not metrics:
        return NormalizationBounds()

    bounds = NormalizationBounds(
        engagement=_bounds([m.engagement_rate for m in metrics]),
        comment=_bounds([m.comment_rate for m in metrics]),
        velocity=_bounds([m.velocity for m in metrics]),
    )
    logger.debug(f"Normalization bounds over {len(metrics)} videos: {bounds.to_dict()}")
    return bounds


def compute_bounds(
    videos: Sequence[VideoRecord],
    now: Optional[datetime] = None,
) -> NormalizationBounds:
    """Compute normalization bounds across a batch of videos."""
    return bounds_from_metrics([raw_metrics(video, now) for video in videos])
