"""Tests for the command-line interface."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from click.testing import CliRunner

from creatorscore.cli import main
from creatorscore.settings_store import WeightsStore


def _published(days_ago: float) -> str:
    return (datetime.now(timezone.utc) - timedelta(days=days_ago)).strftime("%Y-%m-%dT%H:%M:%SZ")


def _video(id, views, likes, comments, days_ago, duration):
    return {
        "id": id,
        "title": f"Title {id}",
        "channelId": "UC_cli",
        "channelTitle": "CLI Channel",
        "publishedAt": _published(days_ago),
        "viewCount": views,
        "likeCount": likes,
        "commentCount": comments,
        "duration": duration,
    }


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def videos_file(tmp_path):
    path = tmp_path / "videos.json"
    path.write_text(json.dumps([
        _video("weak", 100, 1, 0, 20, "PT10M"),
        _video("strong", 10000, 1000, 200, 2, "PT8M"),
        _video("short", 5000, 300, 20, 3, "PT30S"),
    ]))
    return path


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "weights.json"


def test_score_json(runner, videos_file, store_path):
    result = runner.invoke(main, [
        "score", str(videos_file), "--json", "--store", str(store_path),
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [v["id"] for v in data] == ["weak", "strong", "short"]
    for video in data:
        assert 0 <= video["viralScore"] <= 100
        assert 0 <= video["performanceScore"] <= 100


def test_score_sorted_and_filtered(runner, videos_file, store_path):
    result = runner.invoke(main, [
        "score", str(videos_file), "--type", "long", "--sort", "viral",
        "--json", "--store", str(store_path),
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [v["id"] for v in data] == ["strong", "weak"]
    assert data[0]["viralScore"] == pytest.approx(100.0)


def test_score_timeframe(runner, videos_file, store_path):
    result = runner.invoke(main, [
        "score", str(videos_file), "--timeframe", "7", "--limit", "1",
        "--json", "--store", str(store_path),
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert [v["id"] for v in data] == ["strong"]


def test_score_unknown_timeframe(runner, videos_file, store_path):
    result = runner.invoke(main, [
        "score", str(videos_file), "--timeframe", "7", "--presets", "channel",
        "--store", str(store_path),
    ])

    assert result.exit_code != 0
    assert "Unknown timeframe" in result.output


def test_score_table(runner, videos_file, store_path):
    result = runner.invoke(main, ["score", str(videos_file), "--store", str(store_path)])

    assert result.exit_code == 0, result.output
    assert "Video Scores" in result.output
    assert "Scored videos: 3" in result.output


def test_score_malformed_file(runner, tmp_path, store_path):
    path = tmp_path / "bad.json"
    path.write_text('{"videos": [{"id": "x"}]}')

    result = runner.invoke(main, ["score", str(path), "--store", str(store_path)])

    assert result.exit_code != 0
    assert "malformed" in result.output


def test_stats_json(runner, videos_file, store_path):
    result = runner.invoke(main, [
        "stats", str(videos_file), "--json", "--store", str(store_path),
    ])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["count"] == 3
    assert data["shortsCount"] == 1
    assert data["longFormCount"] == 2
    assert data["topViralVideo"]["id"] == "strong"


def test_stats_empty_selection(runner, tmp_path, store_path):
    path = tmp_path / "empty.json"
    path.write_text("[]")

    result = runner.invoke(main, ["stats", str(path), "--json", "--store", str(store_path)])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["count"] == 0
    assert data["topViralVideo"] is None


def test_weights_set_show_reset(runner, store_path):
    result = runner.invoke(main, [
        "weights", "set", "--viral-velocity", "0.5", "--viral-engagement", "0.3",
        "--viral-comment", "0.2", "--store", str(store_path), "--user", "alice",
    ])
    assert result.exit_code == 0, result.output
    assert "Saved weights" in result.output
    assert WeightsStore(store_path).get("alice").viral.velocity == 0.5

    result = runner.invoke(main, ["weights", "show", "--store", str(store_path), "--user", "alice"])
    assert result.exit_code == 0, result.output
    assert "Using custom weights" in result.output

    result = runner.invoke(main, ["weights", "reset", "--store", str(store_path), "--user", "alice"])
    assert result.exit_code == 0, result.output
    assert WeightsStore(store_path).get("alice") is None


def test_weights_set_invalid(runner, store_path):
    result = runner.invoke(main, [
        "weights", "set", "--viral-velocity", "0.5", "--store", str(store_path),
    ])

    assert result.exit_code == 1
    assert "must sum to 1.0" in result.output
    assert not store_path.exists()


def test_custom_weights_change_scores(runner, videos_file, store_path):
    WeightsStore(store_path).upsert("bob", _velocity_only())

    result = runner.invoke(main, [
        "score", str(videos_file), "--json", "--store", str(store_path), "--user", "bob",
    ])

    assert result.exit_code == 0, result.output
    by_id = {v["id"]: v for v in json.loads(result.stdout)}
    assert by_id["weak"]["viralScore"] == pytest.approx(0.0)
    assert by_id["strong"]["viralScore"] == pytest.approx(100.0)


def _velocity_only():
    from creatorscore.config import PerformanceWeights, ScoreWeights, ViralWeights

    return ScoreWeights(
        viral=ViralWeights(velocity=1.0, engagement=0.0, comment=0.0),
        performance=PerformanceWeights(engagement=1.0, comment=0.0),
    )


def test_channel_presets_default_window(runner, tmp_path, store_path):
    """--presets channel without --timeframe keeps only the last 60 days."""
    path = tmp_path / "channel.json"
    path.write_text(json.dumps([
        _video("recent", 1000, 50, 5, 10, "PT5M"),
        _video("old", 90000, 4000, 300, 500, "PT12M"),
    ]))

    result = runner.invoke(main, [
        "score", str(path), "--presets", "channel", "--json", "--store", str(store_path),
    ])

    assert result.exit_code == 0, result.output
    assert [v["id"] for v in json.loads(result.stdout)] == ["recent"]


def test_score_corrupt_store(runner, videos_file, store_path):
    store_path.write_text("{not json")

    result = runner.invoke(main, ["score", str(videos_file), "--store", str(store_path)])

    assert result.exit_code != 0
    assert "Cannot read weights file" in result.output
    assert isinstance(result.exception, SystemExit)


@pytest.mark.parametrize("contents", ['["not", "an", "object"]', '{"default": {"viral": [1]}}'])
def test_weights_show_unreadable_store(runner, store_path, contents):
    store_path.write_text(contents)

    result = runner.invoke(main, ["weights", "show", "--store", str(store_path)])

    assert result.exit_code != 0
    assert "Cannot read weights file" in result.output
    assert isinstance(result.exception, SystemExit)


def test_sort_help_lists_labels(runner):
    result = runner.invoke(main, ["score", "--help"])

    assert result.exit_code == 0
    help_text = " ".join(result.output.split())
    assert "viral (Viral Score)" in help_text
    assert "performance (Performance Score)" in help_text
