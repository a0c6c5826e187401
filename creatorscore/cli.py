"""Command-line interface for CreatorScore.

Scores a JSON file of video records and manages per-user score weights.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from rich import print as rprint

from creatorscore import __version__
from creatorscore.config import (
    PRESET_DEFAULTS,
    PerformanceWeights,
    ScoreWeights,
    TIMEFRAME_PRESETS,
    ViralWeights,
    resolve_timeframe,
)
from creatorscore.exceptions import WeightValidationError
from creatorscore.formatting import format_duration, format_number, time_ago
from creatorscore.models import VideoRecord, VideoTypeFilter, VideoWithScores
from creatorscore.ranking import SORT_LABELS, SortOption, sort_videos, summary_stats, score_label
from creatorscore.scorer import process_batch
from creatorscore.settings_store import WEIGHTS_FILE_ENV, WeightsStore, default_store_path

logger = logging.getLogger(__name__)

console = Console()


# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(levelname)s - %(message)s'
)


def _load_videos(path: Path) -> list[VideoRecord]:
    """Read video records from a JSON list (or {"videos": [...]})."""
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{path} is not valid JSON: {e}")

    if isinstance(data, dict):
        data = data.get("videos", [])
    if not isinstance(data, list):
        raise click.ClickException(f"{path} must contain a list of videos")

    videos = []
    for i, item in enumerate(data):
        try:
            videos.append(VideoRecord.from_dict(item))
        except (TypeError, ValueError, AttributeError) as e:
            raise click.ClickException(f"Video #{i} in {path} is malformed: {e}")

    logger.debug(f"Loaded {len(videos)} videos from {path}")
    return videos


def _open_store(store_path: Optional[str]) -> WeightsStore:
    store_file = Path(store_path) if store_path else default_store_path()
    try:
        return WeightsStore(store_file)
    except (ValueError, OSError) as e:
        raise click.ClickException(f"Cannot read weights file {store_file}: {e}")


def _load_weights(store: WeightsStore, user: str) -> ScoreWeights:
    try:
        return store.get_or_default(user)
    except ValueError as e:
        raise click.ClickException(f"Cannot read weights file {store.path}: {e}")


def _score_file(
    file: str,
    video_type: str,
    timeframe: Optional[str],
    presets: str,
    store_path: Optional[str],
    user: str,
) -> list[VideoWithScores]:
    try:
        timeframe_days = resolve_timeframe(
            timeframe, TIMEFRAME_PRESETS[presets], PRESET_DEFAULTS[presets]
        )
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--timeframe")

    videos = _load_videos(Path(file))
    weights = _load_weights(_open_store(store_path), user)

    return process_batch(videos, video_type, timeframe_days, weights)


def _score_cell(score: float) -> str:
    label = score_label(score)
    return f"{score:.1f} [dim]({label.label})[/dim]"


# Shared filter options for score and stats
_filter_options = [
    click.option("--type", "video_type", type=click.Choice([t.value for t in VideoTypeFilter]),
                 default="all", help="Only Shorts, only long-form, or all"),
    click.option("--timeframe", default=None, help="Timeframe preset key (e.g. 30, 90, all). Defaults to all, or 60 with --presets channel"),
    click.option("--presets", type=click.Choice(list(TIMEFRAME_PRESETS)), default="analytics",
                 help="Which timeframe preset table --timeframe refers to"),
]

_store_options = [
    click.option("--store", "store_path", envvar=WEIGHTS_FILE_ENV, default=None,
                 type=click.Path(dir_okay=False), help="Weights settings file"),
    click.option("--user", envvar="CREATORSCORE_USER", default="default",
                 help="User whose weights to use"),
]


def _apply(options):
    def decorator(f):
        for option in reversed(options):
            f = option(f)
        return f
    return decorator


@click.group()
@click.version_option(version=__version__, prog_name="creatorscore")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """CreatorScore - Viral and Performance scores for creator videos.

    Scores are normalized across the batch of videos you pass in, so they
    are only comparable within one run.
    """
    load_dotenv()
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@_apply(_filter_options)
@click.option("--sort", "sort_by", type=click.Choice([o.value for o in SortOption]),
              default=None,
              help="Sort descending by: " + ", ".join(
                  f"{o.value} ({SORT_LABELS[o]})" for o in SortOption))
@click.option("--limit", default=None, type=int, help="Show at most this many videos")
@_apply(_store_options)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
def score(
    file: str,
    video_type: str,
    timeframe: Optional[str],
    presets: str,
    sort_by: Optional[str],
    limit: Optional[int],
    store_path: Optional[str],
    user: str,
    as_json: bool,
):
    """Score the videos in FILE (a JSON list of video records).

    Examples:
        creatorscore score videos.json --sort viral
        creatorscore score videos.json --type short --timeframe 30 --json
    """
    scored = _score_file(file, video_type, timeframe, presets, store_path, user)

    if sort_by:
        scored = sort_videos(scored, sort_by)
    if limit is not None:
        scored = scored[:limit]

    if as_json:
        click.echo(json.dumps([v.to_dict() for v in scored], indent=2))
        return

    if not scored:
        rprint("[yellow]No videos match the selected filters.[/yellow]")
        return

    table = Table(title="Video Scores")
    table.add_column("Title", style="white", max_width=40)
    table.add_column("Type", style="cyan")
    table.add_column("Duration", justify="right")
    table.add_column("Views", justify="right")
    table.add_column("Published", style="dim")
    table.add_column("Viral", justify="right", style="magenta")
    table.add_column("Performance", justify="right", style="green")

    for video in scored:
        table.add_row(
            video.title,
            video.video_type.value,
            format_duration(video.duration),
            format_number(video.view_count),
            time_ago(video.published_at),
            _score_cell(video.viral_score),
            _score_cell(video.performance_score),
        )

    console.print(table)
    rprint(f"\nScored videos: {len(scored)}")


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@_apply(_filter_options)
@_apply(_store_options)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
def stats(
    file: str,
    video_type: str,
    timeframe: Optional[str],
    presets: str,
    store_path: Optional[str],
    user: str,
    as_json: bool,
):
    """Show summary statistics for the videos in FILE."""
    scored = _score_file(file, video_type, timeframe, presets, store_path, user)
    summary = summary_stats(scored)

    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    table = Table(title="Batch Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Videos", str(summary.count))
    table.add_row("Shorts", str(summary.shorts_count))
    table.add_row("Long-form", str(summary.long_form_count))
    table.add_row("Avg Viral Score", f"{summary.avg_viral_score:.1f}")
    table.add_row("Avg Performance Score", f"{summary.avg_performance_score:.1f}")
    table.add_row(
        "Top Viral",
        summary.top_viral_video.title if summary.top_viral_video else "[dim]-[/dim]",
    )
    table.add_row(
        "Top Performance",
        summary.top_performance_video.title if summary.top_performance_video else "[dim]-[/dim]",
    )

    console.print(table)


@main.group()
def weights():
    """Manage score weights."""
    pass


@weights.command("show")
@_apply(_store_options)
def show_weights(store_path: Optional[str], user: str):
    """Show the weights in effect for a user."""
    store = _open_store(store_path)
    current = _load_weights(store, user)

    table = Table(title=f"Score Weights ({user})")
    table.add_column("Score", style="cyan")
    table.add_column("Component", style="white")
    table.add_column("Weight", justify="right", style="green")

    for group, values in current.to_dict().items():
        for component, weight in values.items():
            table.add_row(group, component, f"{weight:.2f}")

    console.print(table)
    if store.is_custom(user):
        rprint("[green]Using custom weights[/green]")
    else:
        rprint("[dim]Using default weights[/dim]")


@weights.command("set")
@click.option("--viral-velocity", type=float, default=0.6, show_default=True)
@click.option("--viral-engagement", type=float, default=0.25, show_default=True)
@click.option("--viral-comment", type=float, default=0.15, show_default=True)
@click.option("--perf-engagement", type=float, default=0.75, show_default=True)
@click.option("--perf-comment", type=float, default=0.25, show_default=True)
@_apply(_store_options)
def set_weights(
    viral_velocity: float,
    viral_engagement: float,
    viral_comment: float,
    perf_engagement: float,
    perf_comment: float,
    store_path: Optional[str],
    user: str,
):
    """Save custom weights. Each score's weights must sum to 1.0."""
    new_weights = ScoreWeights(
        viral=ViralWeights(
            velocity=viral_velocity,
            engagement=viral_engagement,
            comment=viral_comment,
        ),
        performance=PerformanceWeights(
            engagement=perf_engagement,
            comment=perf_comment,
        ),
    )

    store = _open_store(store_path)
    try:
        store.upsert(user, new_weights)
    except WeightValidationError as e:
        rprint(f"[red]✗[/red] {e}")
        raise click.exceptions.Exit(1)
    except OSError as e:
        raise click.ClickException(f"Cannot write weights file {store.path}: {e}")

    rprint(f"[green]✓[/green] Saved weights for {user}")


@weights.command("reset")
@_apply(_store_options)
def reset_weights(store_path: Optional[str], user: str):
    """Reset a user's weights to the defaults."""
    store = _open_store(store_path)
    try:
        store.reset(user)
    except OSError as e:
        raise click.ClickException(f"Cannot write weights file {store.path}: {e}")

    rprint(f"[green]✓[/green] Weights reset to defaults for {user}")


if __name__ == "__main__":
    main()
