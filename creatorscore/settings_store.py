"""Per-user score weight settings.

Stores custom weights in a JSON file, by default in the user's home
directory. A user with no stored record gets the default weights.
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from creatorscore.config import ScoreWeights
from creatorscore.exceptions import WeightValidationError

logger = logging.getLogger(__name__)

WEIGHTS_FILE_ENV = "CREATORSCORE_WEIGHTS_FILE"


def default_store_path() -> Path:
    """Resolve the weights file from the environment or ~/.creatorscore."""
    env_path = os.environ.get(WEIGHTS_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return Path.home() / ".creatorscore" / "weights.json"


class WeightsStore:
    """Manages per-user ScoreWeights records."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize the store.

        Args:
            path: Path to the JSON file. Defaults to default_store_path()
        """
        self.path = Path(path) if path is not None else default_store_path()
        self._records = self._load()

    def _load(self) -> dict[str, dict]:
        """Load records from file, or start empty."""
        if not self.path.exists():
            return {}
        with open(self.path, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Weights file {self.path} must contain a JSON object")
        return data

    def _save(self, records: dict[str, dict]) -> None:
        """Write records to file, then make them the in-memory state."""
        self.path.parent.mkdir(exist_ok=True, parents=True)
        with open(self.path, 'w') as f:
            json.dump(records, f, indent=2)
        self._records = records

    def get(self, user_id: str) -> Optional[ScoreWeights]:
        """Get a user's custom weights, or None if they have none."""
        record = self._records.get(user_id)
        if record is None:
            return None
        if not isinstance(record, dict):
            raise WeightValidationError(
                f"Stored weights for user {user_id} must be a JSON object"
            )
        return ScoreWeights.from_dict(record)

    def get_or_default(self, user_id: str) -> ScoreWeights:
        """Get a user's weights, falling back to the defaults."""
        return self.get(user_id) or ScoreWeights.default()

    def is_custom(self, user_id: str) -> bool:
        return user_id in self._records

    def upsert(self, user_id: str, weights: ScoreWeights) -> None:
        """Create or replace a user's weights.

        Raises:
            WeightValidationError: if either weight group does not sum
                to 1.0. Nothing is written in that case.
        """
        try:
            weights.validate()
        except WeightValidationError:
            logger.warning(f"Rejected weight update for user {user_id}")
            raise

        records = dict(self._records)
        records[user_id] = weights.to_dict()
        self._save(records)
        logger.info(f"Saved custom weights for user {user_id}")

    def reset(self, user_id: str) -> None:
        """Delete a user's weights so the defaults apply again."""
        if user_id in self._records:
            records = {k: v for k, v in self._records.items() if k != user_id}
            self._save(records)
            logger.info(f"Reset weights to defaults for user {user_id}")
