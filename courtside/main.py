"""Courtside terminal dashboard entry point."""

import argparse
import sys
import time
from datetime import datetime
from typing import Optional

from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from .chart import Chart, rasterize
from .fetch import fetch_boxscore, fetch_playbyplay, fetch_scoreboard
from .render import render_game_flow, render_scoreboard, updated_caption
from .timeline import Timeline, reconstruct
from .transform import GameMetadata, events_from_actions, game_from_boxscore, transform_scores

REFRESH_INTERVAL = 5
AXIS_MARGIN = 10


def build_flow(
    boxscore: dict, playbyplay: Optional[dict], width: int
) -> tuple[GameMetadata, Timeline, Chart]:
    """
    Run one reconstruct-and-rasterize cycle on freshly fetched data.

    A missing play-by-play payload is drawn as the pre-game baseline.

    Args:
        boxscore: Box score dict from fetch_boxscore
        playbyplay: Play-by-play dict from fetch_playbyplay, or None
        width: Character columns available to the chart grid

    Returns:
        Tuple of (game metadata, timeline, chart)
    """
    game = game_from_boxscore(boxscore)
    actions = playbyplay.get("actions") if playbyplay else None
    timeline = reconstruct(game, events_from_actions(actions))
    chart = rasterize(
        timeline.series, game.home_team, game.away_team, width,
        period_count=timeline.period_count,
    )
    return game, timeline, chart


def _scores_view(scoreboard: dict, caption: Optional[str] = None):
    rows = transform_scores(scoreboard)
    if not rows:
        return Text("No games scheduled for today.")
    return render_scoreboard(rows, scoreboard["gameDate"], caption)


def show_scores(console: Console, refresh: float = REFRESH_INTERVAL, once: bool = False) -> int:
    """
    Show today's scoreboard, refreshing until interrupted.

    A failed fetch keeps the last table on screen under a retry notice.

    Args:
        console: Rich console to draw on
        refresh: Seconds between polls
        once: Print a single scoreboard and return
    """
    scoreboard = fetch_scoreboard()
    if once or refresh <= 0:
        if scoreboard is None:
            console.print("[red]Failed to fetch scores.[/red]")
            return 1
        console.print(_scores_view(scoreboard))
        return 0

    notice = Text("Failed to fetch scores. Retrying...", style="red")
    last_view = None
    with Live(Text("Loading scores...", style="dim"), console=console, refresh_per_second=1) as live:
        while True:
            if scoreboard is None:
                live.update(notice if last_view is None else Group(last_view, notice))
            else:
                last_view = _scores_view(scoreboard, updated_caption(datetime.now(), refresh))
                live.update(last_view)
            time.sleep(refresh)
            scoreboard = fetch_scoreboard()


def _flow_cycle(game_id: str, width: int):
    boxscore = fetch_boxscore(game_id)
    if boxscore is None:
        return None
    return build_flow(boxscore, fetch_playbyplay(game_id), width)


def show_flow(
    console: Console,
    game_id: str,
    width: Optional[int] = None,
    refresh: float = REFRESH_INTERVAL,
    once: bool = False,
) -> int:
    """
    Draw the game-flow chart for a game, refreshing until it is final.

    A cycle whose box score fetch fails leaves the previous chart on screen.

    Args:
        console: Rich console to draw on
        game_id: NBA game ID
        width: Chart columns (default: console width minus the axis margin)
        refresh: Seconds between polls
        once: Draw a single frame and return
    """
    if width is None:
        width = console.width - AXIS_MARGIN

    result = _flow_cycle(game_id, width)
    if once or refresh <= 0:
        if result is None:
            console.print(f"[red]No box score available for game {game_id}[/red]")
            return 1
        console.print(render_game_flow(*result))
        return 0

    placeholder = Text(f"Loading game {game_id}...", style="dim")
    with Live(placeholder, console=console, refresh_per_second=1) as live:
        while True:
            if result is not None:
                game, timeline, chart = result
                live.update(render_game_flow(game, timeline, chart))
                if game.status == "final":
                    break
            time.sleep(refresh)
            result = _flow_cycle(game_id, width)
    return 0


def cli(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Courtside NBA terminal dashboard")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scores = subparsers.add_parser("scores", help="Show today's scoreboard")
    scores.add_argument(
        "--refresh",
        type=float,
        default=REFRESH_INTERVAL,
        help=f"Seconds between refreshes (default: {REFRESH_INTERVAL})",
    )
    scores.add_argument(
        "--once",
        action="store_true",
        help="Print the scoreboard once and exit",
    )

    flow = subparsers.add_parser("flow", help="Chart a game's score differential")
    flow.add_argument("game_id", help="NBA game ID, e.g. 0022500001")
    flow.add_argument(
        "--width",
        type=int,
        default=None,
        help="Chart width in columns (default: terminal width)",
    )
    flow.add_argument(
        "--refresh",
        type=float,
        default=REFRESH_INTERVAL,
        help=f"Seconds between refreshes (default: {REFRESH_INTERVAL})",
    )
    flow.add_argument(
        "--once",
        action="store_true",
        help="Draw a single frame and exit",
    )

    args = parser.parse_args(argv)
    console = Console()

    try:
        if args.command == "scores":
            return show_scores(console, args.refresh, args.once)
        return show_flow(console, args.game_id, args.width, args.refresh, args.once)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(cli())
