"""Example showing how to customize CreatorScore weights.

Scores the same batch under different weight configurations to show how
the emphasis shifts between momentum and engagement.
"""

from datetime import datetime, timedelta, timezone

from creatorscore import (
    PerformanceWeights,
    ScoreWeights,
    ViralWeights,
    VideoRecord,
    process_batch,
    sort_videos,
    summary_stats,
)


def create_test_batch() -> list[VideoRecord]:
    """Create a small batch of videos from one channel."""
    now = datetime.now(timezone.utc)
    specs = [
        # (id, views, likes, comments, days ago, duration)
        ("launch", 250_000, 9_000, 1_200, 2, "PT9M12S"),
        ("tutorial", 40_000, 3_500, 800, 30, "PT22M5S"),
        ("teaser", 90_000, 1_500, 40, 1, "PT42S"),
        ("behind_scenes", 5_000, 900, 300, 12, "PT58S"),
        ("archive", 600_000, 6_000, 250, 300, "PT1H4M"),
    ]

    return [
        VideoRecord(
            id=video_id,
            title=video_id.replace("_", " ").title(),
            channel_id="UC_example",
            channel_title="Example Channel",
            published_at=(now - timedelta(days=days)).isoformat(),
            view_count=views,
            like_count=likes,
            comment_count=comments,
            duration=duration,
        )
        for video_id, views, likes, comments, days, duration in specs
    ]


def compare_configurations():
    """Compare different weight configurations."""
    print("=" * 80)
    print("CreatorScore Weight Comparison")
    print("=" * 80)

    videos = create_test_batch()

    configs = {
        "Default": ScoreWeights.default(),

        "Momentum-Focused": ScoreWeights(
            viral=ViralWeights(velocity=0.9, engagement=0.05, comment=0.05),
            performance=PerformanceWeights(engagement=0.75, comment=0.25),
        ),

        "Conversation-Focused": ScoreWeights(
            viral=ViralWeights(velocity=0.3, engagement=0.2, comment=0.5),
            performance=PerformanceWeights(engagement=0.4, comment=0.6),
        ),
    }

    for name, weights in configs.items():
        weights.validate()
        scored = sort_videos(process_batch(videos, weights=weights), "viral")
        stats = summary_stats(scored)

        print(f"\n{name}")
        print("-" * 80)
        for video in scored:
            print(
                f"  {video.title:<16} {video.video_type.value:<6}"
                f" viral={video.viral_score:6.1f}  performance={video.performance_score:6.1f}"
            )
        print(
            f"  avg viral={stats.avg_viral_score:.1f}"
            f"  avg performance={stats.avg_performance_score:.1f}"
            f"  shorts={stats.shorts_count}  long-form={stats.long_form_count}"
        )

    # Shorts only: bounds are recomputed over the filtered set
    print("\nShorts only (last 30 days)")
    print("-" * 80)
    for video in process_batch(videos, video_type="short", timeframe_days=30):
        print(f"  {video.title:<16} viral={video.viral_score:6.1f}")


if __name__ == "__main__":
    compare_configurations()
