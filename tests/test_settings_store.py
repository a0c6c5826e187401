"""Tests for the per-user weights store."""

import json

import pytest

from creatorscore.config import PerformanceWeights, ScoreWeights, ViralWeights
from creatorscore.exceptions import WeightValidationError
from creatorscore.settings_store import WEIGHTS_FILE_ENV, WeightsStore, default_store_path


CUSTOM = ScoreWeights(
    viral=ViralWeights(velocity=0.5, engagement=0.3, comment=0.2),
    performance=PerformanceWeights(engagement=0.6, comment=0.4),
)


@pytest.fixture
def store(tmp_path):
    return WeightsStore(tmp_path / "settings" / "weights.json")


def test_no_custom_weights(store):
    """A user without a record gets None and falls back to defaults."""
    assert store.get("alice") is None
    assert store.get_or_default("alice") == ScoreWeights.default()
    assert not store.is_custom("alice")


def test_upsert_persists(store):
    store.upsert("alice", CUSTOM)

    assert store.get("alice") == CUSTOM
    assert store.is_custom("alice")

    reloaded = WeightsStore(store.path)
    assert reloaded.get("alice") == CUSTOM
    assert reloaded.get("bob") is None


def test_upsert_overwrites(store):
    store.upsert("alice", CUSTOM)
    store.upsert("alice", ScoreWeights.default())

    assert store.get("alice") == ScoreWeights.default()


def test_invalid_weights_not_persisted(store):
    bad = ScoreWeights(viral=ViralWeights(velocity=0.5, engagement=0.25, comment=0.15))

    with pytest.raises(WeightValidationError):
        store.upsert("alice", bad)

    assert store.get("alice") is None
    assert not store.path.exists()


def test_reset(store):
    store.upsert("alice", CUSTOM)
    store.upsert("bob", CUSTOM)
    store.reset("alice")

    assert store.get("alice") is None
    assert store.get_or_default("alice") == ScoreWeights.default()
    assert WeightsStore(store.path).get("bob") == CUSTOM


def test_reset_without_record(store):
    store.reset("nobody")
    assert not store.path.exists()


def test_file_format(store):
    store.upsert("alice", CUSTOM)

    with open(store.path) as f:
        data = json.load(f)

    assert data == {"alice": CUSTOM.to_dict()}


def test_rejects_non_object_file(tmp_path):
    path = tmp_path / "weights.json"
    path.write_text("[1, 2, 3]")

    with pytest.raises(ValueError):
        WeightsStore(path)


def test_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env_weights.json"
    monkeypatch.setenv(WEIGHTS_FILE_ENV, str(path))

    assert default_store_path() == path
    assert WeightsStore().path == path


def test_default_path_in_home(monkeypatch):
    monkeypatch.delenv(WEIGHTS_FILE_ENV, raising=False)
    assert default_store_path().parts[-2:] == (".creatorscore", "weights.json")


def test_non_object_record(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_text('{"alice": 5}')

    with pytest.raises(WeightValidationError):
        WeightsStore(store.path).get_or_default("alice")


def test_failed_save_keeps_state(store, monkeypatch):
    """A write that fails leaves the in-memory records untouched."""
    store.upsert("bob", CUSTOM)

    def fail_dump(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(json, "dump", fail_dump)

    with pytest.raises(OSError):
        store.upsert("alice", CUSTOM)
    assert store.get("alice") is None
    assert not store.is_custom("alice")

    with pytest.raises(OSError):
        store.reset("bob")
    assert store.get("bob") == CUSTOM
