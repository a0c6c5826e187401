"""Exception types raised by CreatorScore."""


class CreatorScoreError(Exception):
    """Base class for all CreatorScore errors."""


class WeightValidationError(CreatorScoreError, ValueError):
    """A score weight configuration was rejected."""


class DurationParseError(CreatorScoreError, ValueError):
    """An ISO-8601 duration string could not be parsed."""
