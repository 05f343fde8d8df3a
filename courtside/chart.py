"""Rasterize a differential series into a fixed-size character grid."""

import math
from enum import Enum
from typing import NamedTuple

from courtside.timeline import PERIOD_MINUTES, REGULATION_PERIODS

OT_PERIOD_MINUTES = 5
MINUTE_COLUMNS = 1.8
BLOWOUT_MARGIN = 20

PLOT_CHAR = "•"
BASELINE_CHAR = "─"
EMPTY_CHAR = " "


class GlyphKind(Enum):
    EMPTY = "empty"
    BASELINE = "baseline"
    HOME = "home"
    AWAY = "away"
    NEUTRAL = "neutral"


class Glyph(NamedTuple):
    char: str
    kind: GlyphKind


class ChartSpec(NamedTuple):
    """Vertical scale and grid size chosen for one series."""

    interval: int
    y_max: int
    y_min: int
    rows: int
    cols: int


class Chart(NamedTuple):
    """Glyph grid, top row first, with its axis labels and team codes."""

    grid: tuple[tuple[Glyph, ...], ...]
    y_labels: tuple[str, ...]
    x_labels: tuple[tuple[int, str], ...]
    spec: ChartSpec
    zero_row: int
    home_team: str
    away_team: str


_EMPTY = Glyph(EMPTY_CHAR, GlyphKind.EMPTY)
_BASELINE = Glyph(BASELINE_CHAR, GlyphKind.BASELINE)


def choose_scale(diffs) -> tuple[int, int, int]:
    """
    Pick the row interval and y-axis bounds for a set of differentials.

    Games with a margin over 20 get 4 points per row, closer games 2. The
    bounds are multiples of the interval and always straddle zero.

    Returns:
        Tuple of (interval, y_max, y_min)
    """
    diffs = list(diffs)
    data_max = max(diffs, default=0)
    data_min = min(diffs, default=0)
    max_abs = max(abs(data_max), abs(data_min), 1)

    interval = 4 if max_abs > BLOWOUT_MARGIN else 2
    y_max = math.ceil(max(data_max, 1) / interval) * interval
    y_min = math.floor(min(data_min, -1) / interval) * interval
    return interval, y_max, y_min


def chart_width(available_width: int, total_minutes: int) -> int:
    """Columns to draw: 1.8 per game minute, capped by the surface, never below 1."""
    cols = math.floor(min(available_width, total_minutes * MINUTE_COLUMNS))
    return max(cols, 1)


def column_for(normalized_time: float, cols: int) -> int:
    return math.floor(normalized_time * (cols - 1))


def snap_to_interval(diff: int, interval: int) -> int:
    """Round a differential to the nearest multiple of interval, halves up."""
    return math.floor(diff / interval + 0.5) * interval


def format_axis_value(value: int) -> str:
    """Signed axis label: '+6', '0', '-4'."""
    if value > 0:
        return f"+{value}"
    return str(value)


def period_labels(period_count: int, cols: int) -> tuple[tuple[int, str], ...]:
    """
    Bottom-axis period markers as (column, label) pairs.

    Regulation quarters start every 12 minutes; overtime labels follow in
    5-minute steps from minute 48. Columns use the same game-wide scale
    (period_count * 12) as the data.
    """
    total_minutes = period_count * PERIOD_MINUTES
    labels = []
    for period in range(1, period_count + 1):
        if period <= REGULATION_PERIODS:
            minute = (period - 1) * PERIOD_MINUTES
            label = f"Q{period}"
        else:
            overtime = period - REGULATION_PERIODS
            minute = REGULATION_PERIODS * PERIOD_MINUTES + (overtime - 1) * OT_PERIOD_MINUTES
            label = f"OT{overtime}"
        labels.append((column_for(minute / total_minutes, cols), label))
    return tuple(labels)


def _plot_kind(row: int, zero_row: int) -> GlyphKind:
    if row < zero_row:
        return GlyphKind.HOME
    if row > zero_row:
        return GlyphKind.AWAY
    return GlyphKind.NEUTRAL


def rasterize(
    series, home_team: str, away_team: str, width: int, period_count: int = REGULATION_PERIODS
) -> Chart:
    """
    Draw a differential series onto a character grid.

    Each column keeps one glyph: samples are folded in time order and the
    last one mapped to a column replaces any earlier one. Samples whose
    column lands outside the grid (normalized_time > 1) are not drawn.
    Unplotted cells on the zero row form the baseline rule.

    Args:
        series: DifferentialSample sequence, in time order
        home_team: Home tricode
        away_team: Away tricode
        width: Available character columns
        period_count: Periods in the game, for scale and axis labels

    Returns:
        Chart with grid, axis labels and the chosen ChartSpec
    """
    total_minutes = period_count * PERIOD_MINUTES
    interval, y_max, y_min = choose_scale(s.diff for s in series)
    rows = (y_max - y_min) // interval + 1
    cols = chart_width(width, total_minutes)
    zero_row = y_max // interval

    plotted: dict[int, int] = {}
    for sample in series:
        x = column_for(sample.normalized_time, cols)
        if not 0 <= x < cols:
            continue
        plotted[x] = (y_max - snap_to_interval(sample.diff, interval)) // interval

    grid = []
    for row in range(rows):
        cells = []
        for col in range(cols):
            if plotted.get(col) == row:
                cells.append(Glyph(PLOT_CHAR, _plot_kind(row, zero_row)))
            elif row == zero_row:
                cells.append(_BASELINE)
            else:
                cells.append(_EMPTY)
        grid.append(tuple(cells))

    values = [format_axis_value(y_max - row * interval) for row in range(rows)]
    label_width = max(len(v) for v in values)
    y_labels = tuple(v.rjust(label_width) for v in values)

    return Chart(
        grid=tuple(grid),
        y_labels=y_labels,
        x_labels=period_labels(period_count, cols),
        spec=ChartSpec(interval, y_max, y_min, rows, cols),
        zero_row=zero_row,
        home_team=home_team,
        away_team=away_team,
    )
