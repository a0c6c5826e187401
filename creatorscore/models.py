"""Core data models for CreatorScore."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class VideoType(str, Enum):
    """Duration-based video classification."""
    SHORT = "short"
    LONG = "long"


class VideoTypeFilter(str, Enum):
    """Video type selector used when filtering a batch."""
    ALL = "all"
    SHORT = "short"
    LONG = "long"


# camelCase keys used by the video producer -> dataclass field names
_RECORD_KEYS = {
    'id': 'id',
    'title': 'title',
    'channelId': 'channel_id',
    'channelTitle': 'channel_title',
    'publishedAt': 'published_at',
    'viewCount': 'view_count',
    'likeCount': 'like_count',
    'commentCount': 'comment_count',
    'duration': 'duration',
    'tags': 'tags',
    'description': 'description',
    'thumbnailUrl': 'thumbnail_url',
}


@dataclass(frozen=True)
class VideoRecord:
    """A single video as supplied by the video producer.

    Counts are non-negative integers, ``duration`` is an ISO-8601 duration
    (e.g. "PT5M32S") and ``published_at`` an ISO-8601 instant.
    """

    id: str
    title: str
    channel_id: str
    channel_title: str
    published_at: str
    view_count: int
    like_count: int
    comment_count: int
    duration: str
    tags: tuple[str, ...] = ()
    description: str = ""
    thumbnail_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoRecord":
        """Build a record from a producer payload.

        Accepts camelCase keys (``viewCount``) or snake_case keys
        (``view_count``). Unknown keys are ignored.
        """
        fields = {}
        for key, value in data.items():
            name = _RECORD_KEYS.get(key)
            if name is None and key in _RECORD_KEYS.values():
                name = key
            if name is not None:
                fields[name] = value

        for count in ('view_count', 'like_count', 'comment_count'):
            fields[count] = int(fields.get(count) or 0)
        fields['tags'] = tuple(fields.get('tags') or ())
        fields.setdefault('description', "")

        return cls(**fields)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dict matching the producer's shape."""
        data = {
            camel: getattr(self, name)
            for camel, name in _RECORD_KEYS.items()
        }
        data['tags'] = list(self.tags)
        return data


@dataclass(frozen=True)
class RawMetrics:
    """Non-normalized signals for one video."""

    engagement_rate: float
    comment_rate: float
    velocity: float
    days_since_publish: float


@dataclass(frozen=True)
class VideoWithScores:
    """A video together with its batch-relative scores.

    Scores are only comparable with other videos from the same batch.
    Record fields (``view_count``, ``published_at``, ...) are readable
    directly on this object.
    """

    video: VideoRecord
    viral_score: float
    performance_score: float
    video_type: VideoType
    days_since_publish: float
    engagement_rate: float
    comment_rate: float
    velocity: float

    # Normalized components, kept for inspection
    components: dict[str, float] = field(default_factory=dict, compare=False)

    def __getattr__(self, name: str) -> Any:
        if name == 'video':
            raise AttributeError(name)
        return getattr(self.video, name)

    def to_dict(self) -> dict[str, Any]:
        """Flatten the record and scores into a single camelCase dict."""
        data = self.video.to_dict()
        data.update({
            'viralScore': self.viral_score,
            'performanceScore': self.performance_score,
            'videoType': self.video_type.value,
            'daysSincePublish': self.days_since_publish,
            'engagementRate': self.engagement_rate,
            'commentRate': self.comment_rate,
            'velocity': self.velocity,
        })
        return data
