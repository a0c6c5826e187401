"""Configuration for CreatorScore score weights and timeframe presets."""

from dataclasses import dataclass, field, asdict
from typing import Any, Optional

from creatorscore.exceptions import WeightValidationError

# Absolute tolerance when checking that a weight group sums to 1.0
WEIGHT_SUM_TOLERANCE = 0.001


def _check_group(name: str, weights: dict[str, float]) -> None:
    if any(w < 0 for w in weights.values()):
        raise WeightValidationError(f"{name} weights must be non-negative")

    total = sum(weights.values())
    if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
        raise WeightValidationError(
            f"{name} weights must sum to 1.0, got {total:.3f}"
        )


@dataclass(frozen=True)
class ViralWeights:
    """Weights for the Viral Score components."""

    velocity: float = 0.6
    engagement: float = 0.25
    comment: float = 0.15

    def validate(self) -> None:
        """Ensure weights are non-negative and sum to 1.0."""
        _check_group("Viral", asdict(self))


@dataclass(frozen=True)
class PerformanceWeights:
    """Weights for the Performance Score components."""

    engagement: float = 0.75
    comment: float = 0.25

    def validate(self) -> None:
        """Ensure weights are non-negative and sum to 1.0."""
        _check_group("Performance", asdict(self))


@dataclass(frozen=True)
class ScoreWeights:
    """User-configurable weights for both scores.

    The scoring engine treats this as a pure input. Validation happens
    upstream, before weights are persisted by a store.
    """

    viral: ViralWeights = field(default_factory=ViralWeights)
    performance: PerformanceWeights = field(default_factory=PerformanceWeights)

    def validate(self) -> None:
        """Validate both weight groups."""
        self.viral.validate()
        self.performance.validate()

    def is_valid(self) -> bool:
        try:
            self.validate()
        except WeightValidationError:
            return False
        return True

    @classmethod
    def default(cls) -> "ScoreWeights":
        """Create weights with all default values."""
        return cls()

    def to_dict(self) -> dict[str, dict[str, float]]:
        """Convert to a nested dict for serialization."""
        return {
            'viral': asdict(self.viral),
            'performance': asdict(self.performance),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScoreWeights":
        """Build weights from a nested dict; missing keys take defaults.

        Does not validate. Call validate() before persisting.
        """
        viral = data.get('viral') or {}
        performance = data.get('performance') or {}
        try:
            return cls(
                viral=ViralWeights(**{k: float(v) for k, v in viral.items()}),
                performance=PerformanceWeights(
                    **{k: float(v) for k, v in performance.items()}
                ),
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise WeightValidationError(f"Malformed weight configuration: {e}") from e


DEFAULT_WEIGHTS = ScoreWeights.default()


# Timeframe presets: option -> day count (None means no timeframe filter).
# The analytics view and the channel view offer different option sets.
ANALYTICS_TIMEFRAMES: dict[str, Optional[int]] = {
    "7": 7,
    "30": 30,
    "60": 60,
    "90": 90,
    "all": None,
}

CHANNEL_TIMEFRAMES: dict[str, Optional[int]] = {
    "60": 60,
    "90": 90,
    "180": 180,
    "360": 360,
}

DEFAULT_CHANNEL_TIMEFRAME = "60"

TIMEFRAME_PRESETS: dict[str, dict[str, Optional[int]]] = {
    "analytics": ANALYTICS_TIMEFRAMES,
    "channel": CHANNEL_TIMEFRAMES,
}

# Option used when none is given; the channel table has no "all"
PRESET_DEFAULTS: dict[str, Optional[str]] = {
    "analytics": "all",
    "channel": DEFAULT_CHANNEL_TIMEFRAME,
}


def resolve_timeframe(
    option: Optional[str],
    presets: dict[str, Optional[int]] = ANALYTICS_TIMEFRAMES,
    default: Optional[str] = None,
) -> Optional[int]:
    """Look up the day count for a timeframe option.

    Args:
        option: Preset key such as "30" or "all"
        presets: Which preset table to resolve against
        default: Key used when option is None. With neither, there is no filter.

    Returns:
        Number of days, or None for no timeframe filter
    """
    if option is None:
        option = default
    if option is None:
        return None
    if option not in presets:
        raise ValueError(
            f"Unknown timeframe '{option}'. Must be one of: {', '.join(presets)}"
        )
    return presets[option]
