"""Reconstruct a per-minute score differential series from play-by-play."""

import math
from typing import NamedTuple, Optional

import pandas as pd

from courtside.transform import GameClock, GameMetadata, PlayEvent

PERIOD_MINUTES = 12
REGULATION_PERIODS = 4


class DifferentialSample(NamedTuple):
    """Home-minus-away score at one elapsed game minute."""

    elapsed_minutes: float
    normalized_time: float
    diff: int


class Timeline(NamedTuple):
    """Gap-filled differential series plus the inputs the chart scales by."""

    series: tuple[DifferentialSample, ...]
    lead_changes: int
    total_minutes: int
    period_count: int


def period_count(game: GameMetadata) -> int:
    """Number of periods to scale for: at least regulation, more with OT."""
    return max(REGULATION_PERIODS, len(game.home_periods))


def elapsed_minutes(period: int, clock: GameClock) -> float:
    """
    Convert period + countdown clock to elapsed game minutes.

    Every period, overtime included, counts as 12 minutes here; the chart
    scales the whole game as period_count * 12.
    """
    played = PERIOD_MINUTES - clock.minutes_left - clock.seconds_left / 60
    return (period - 1) * PERIOD_MINUTES + played


def event_minutes(event: PlayEvent) -> float:
    """Elapsed minutes for an event; an unreadable clock sits at its period start."""
    if not event.clock_valid:
        return (event.period - 1) * PERIOD_MINUTES
    return elapsed_minutes(event.period, event.clock)


def _has_scores(event: PlayEvent) -> bool:
    return event.score_home is not None and event.score_away is not None


def count_lead_changes(diffs) -> int:
    """
    Count strict sign flips of a nonzero differential.

    Ties are skipped, so 3 -> 0 -> 2 is not a lead change and
    3 -> 0 -> -2 is exactly one.
    """
    lead_changes = 0
    last_lead = 0
    for diff in diffs:
        if diff == 0:
            continue
        if last_lead and (diff > 0) != (last_lead > 0):
            lead_changes += 1
        last_lead = diff
    return lead_changes


def _bucket_diffs(events: list[PlayEvent]) -> pd.Series:
    """
    Reduce scored events to one differential per integer minute.

    Later events in the same minute overwrite earlier ones, so the feed's
    order decides which diff a bucket keeps.
    """
    frame = pd.DataFrame({
        "bucket": [math.floor(event_minutes(e)) for e in events],
        "diff": [e.score_home - e.score_away for e in events],
    })
    return frame.groupby("bucket", sort=True)["diff"].last()


def reconstruct(game: GameMetadata, events: Optional[list[PlayEvent]]) -> Timeline:
    """
    Build a dense, gap-filled differential series for a game.

    Minutes without a scored event carry the previous minute's diff
    forward; minute 0 is 0 unless an event landed in it. A final game runs
    to period_count * 12; a live one stops at the latest observed minute.
    normalized_time is not clamped, so malformed period data can push it
    past 1.0.

    Args:
        game: Box score metadata (status and period list are used)
        events: Play events in feed order; None is treated as no events

    Returns:
        Timeline with the series, lead-change count and chart scale inputs
    """
    periods = period_count(game)
    total_minutes = periods * PERIOD_MINUTES

    scored = [e for e in events or [] if _has_scores(e)]
    if not scored:
        baseline = (DifferentialSample(0.0, 0.0, 0),)
        return Timeline(baseline, 0, total_minutes, periods)

    lead_changes = count_lead_changes(e.score_home - e.score_away for e in scored)
    buckets = _bucket_diffs(scored)

    if game.status == "final":
        end_minute = total_minutes
    else:
        end_minute = max(int(buckets.index.max()), 0)

    dense = buckets.reindex(range(end_minute + 1)).ffill().fillna(0).astype(int)
    series = tuple(
        DifferentialSample(float(minute), minute / total_minutes, int(diff))
        for minute, diff in dense.items()
    )
    return Timeline(series, lead_changes, total_minutes, periods)
