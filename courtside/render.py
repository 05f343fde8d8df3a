"""Rich renderables for the scoreboard and game-flow views."""

from datetime import datetime
from typing import Optional

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from courtside.chart import Chart, GlyphKind
from courtside.timeline import Timeline
from courtside.transform import GameMetadata

DEFAULT_TEAM_COLOR = "white"

# Primary colors, adjusted where the official one is unreadable on black.
TEAM_COLORS = {
    "ATL": "#E03A3E",
    "BOS": "#007A33",
    "BKN": "#A1A1A4",
    "CHA": "#00788C",
    "CHI": "#CE1141",
    "CLE": "#860038",
    "DAL": "#00538C",
    "DEN": "#FEC524",
    "DET": "#C8102E",
    "GSW": "#1D428A",
    "HOU": "#CE1141",
    "IND": "#FDBB30",
    "LAC": "#C8102E",
    "LAL": "#552583",
    "MEM": "#5D76A9",
    "MIA": "#98002E",
    "MIL": "#00471B",
    "MIN": "#78BE20",
    "NOP": "#85714D",
    "NYK": "#F58426",
    "OKC": "#007AC1",
    "ORL": "#0077C0",
    "PHI": "#006BB6",
    "PHX": "#E56020",
    "POR": "#E03A3E",
    "SAC": "#5A2D81",
    "SAS": "#C4CED4",
    "TOR": "#CE1141",
    "UTA": "#F9A01B",
    "WAS": "#E31837",
}

NEUTRAL_STYLE = "bold white"
BASELINE_STYLE = "dim"
FLOW_STATUS_STYLES = {"live": "red", "final": "green"}
SCOREBOARD_STATUS_STYLES = {"live": "bold red", "final": "green"}
# Keyed by whether the side won; only used once a winner is known.
WINNER_STYLES = {True: "bold white", False: "bright_black"}


def team_color(tricode: Optional[str]) -> str:
    """Look up a team's display color, falling back to DEFAULT_TEAM_COLOR."""
    return TEAM_COLORS.get((tricode or "").upper(), DEFAULT_TEAM_COLOR)


def _glyph_styles(chart: Chart) -> dict:
    return {
        GlyphKind.EMPTY: "",
        GlyphKind.BASELINE: BASELINE_STYLE,
        GlyphKind.HOME: team_color(chart.home_team),
        GlyphKind.AWAY: team_color(chart.away_team),
        GlyphKind.NEUTRAL: NEUTRAL_STYLE,
    }


def axis_line(chart: Chart) -> str:
    """
    Lay the period labels out along the chart width.

    A label that would overlap the previous one is dropped.
    """
    line = [" "] * chart.spec.cols
    next_free = 0
    for col, label in chart.x_labels:
        if col < next_free or col + len(label) > len(line):
            continue
        line[col:col + len(label)] = label
        next_free = col + len(label) + 1
    return "".join(line).rstrip()


def render_chart(chart: Chart, lead_changes: int) -> Text:
    """Render a rasterized chart with its axes and a lead-change footer."""
    styles = _glyph_styles(chart)
    margin = len(chart.y_labels[0]) if chart.y_labels else 0

    text = Text()
    for label, row in zip(chart.y_labels, chart.grid):
        text.append(f"{label} │", style=BASELINE_STYLE)
        for glyph in row:
            text.append(glyph.char, style=styles[glyph.kind])
        text.append("\n")

    text.append(" " * margin + " └" + "─" * chart.spec.cols + "\n", style=BASELINE_STYLE)
    text.append(" " * (margin + 2) + axis_line(chart) + "\n")

    text.append(chart.home_team, style=team_color(chart.home_team))
    text.append(" leads above, ")
    text.append(chart.away_team, style=team_color(chart.away_team))
    text.append(f" below   Lead changes: {lead_changes}")
    return text


def _chart_header(timeline: Timeline) -> Text:
    """Line above the chart naming the last reconstructed minute."""
    last = timeline.series[-1]
    return Text(
        f"Game flow through minute {int(last.elapsed_minutes)} of {timeline.total_minutes}",
        style="bold",
    )


def render_game_flow(game: GameMetadata, timeline: Timeline, chart: Chart) -> Panel:
    """Wrap the chart in a panel titled with the current score and status."""
    title = Text()
    title.append(f"{game.away_team} {game.away_score}", style=team_color(game.away_team))
    title.append(" @ ")
    title.append(f"{game.home_team} {game.home_score}", style=team_color(game.home_team))

    subtitle = Text(game.status_text, style=FLOW_STATUS_STYLES.get(game.status, "bright_black"))

    return Panel(
        Group(_chart_header(timeline), render_chart(chart, timeline.lead_changes)),
        title=title,
        subtitle=subtitle,
        box=box.ROUNDED,
    )


def _score_style(winner: Optional[str], side: str) -> str:
    if not winner:
        return ""
    return WINNER_STYLES[winner == side]


def render_scoreboard(rows: list[dict], game_date: str = "", caption: Optional[str] = None) -> Table:
    """Build the scoreboard table from transform_scores rows."""
    title = f"NBA Scores - {game_date}" if game_date else "NBA Scores"
    table = Table(title=title, caption=caption, box=box.ROUNDED)
    table.add_column("Game", style="cyan", no_wrap=True)
    table.add_column("Score", style="white")
    table.add_column("Status", style="yellow")
    table.add_column("Top Performer", style="yellow")

    for row in rows:
        away = row["awayTeam"]
        home = row["homeTeam"]

        if row["status"] == "scheduled":
            score = Text(f"{away['tricode']}   -  @  {home['tricode']}   -", style="bright_black")
        else:
            score = Text()
            score.append(f"{away['tricode']} {away['score']:>3}", style=_score_style(row["winner"], "away"))
            score.append("  @  ")
            score.append(f"{home['tricode']} {home['score']:>3}", style=_score_style(row["winner"], "home"))

        status_style = SCOREBOARD_STATUS_STYLES.get(row["status"], "bright_black")
        performer = row["topPerformer"]
        performer_text = f"{performer['name']} ({performer['points']} PTS)" if performer else ""

        table.add_row(row["gameId"], score, Text(row["statusText"], style=status_style), performer_text)

    return table


def updated_caption(updated_at: datetime, refresh: float) -> str:
    """Footer for the refreshing scoreboard."""
    clock = updated_at.strftime("%I:%M:%S %p").lstrip("0")
    return f"Last updated: {clock} | Refreshes every {refresh:g}s | Press Ctrl-C to quit"
