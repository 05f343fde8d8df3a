"""Transform module mapping NBA live-data JSON to the game-flow data model."""

import re
from datetime import datetime
from typing import NamedTuple, Optional

import pandas as pd

STATUS_BY_CODE = {1: "scheduled", 2: "live", 3: "final"}

EVENT_COLUMNS = [
    "period",
    "minutes_left",
    "seconds_left",
    "score_home",
    "score_away",
    "description",
    "clock_valid",
]

_ISO_CLOCK = re.compile(r"^PT(?:(\d+)M)?(\d+(?:\.\d+)?)S$")
_COLON_CLOCK = re.compile(r"^(\d+):(\d+(?:\.\d+)?)$")


class GameClock(NamedTuple):
    """Time remaining in the current period."""

    minutes_left: int
    seconds_left: float


class PlayEvent(NamedTuple):
    """One play-by-play record. Scores are None when the feed omits them.

    clock_valid is False when the feed clock was unparseable and `clock`
    holds the zeroed fallback.
    """

    period: int
    clock: GameClock
    score_home: Optional[int]
    score_away: Optional[int]
    description: str
    clock_valid: bool = True


class GameMetadata(NamedTuple):
    """Box-score fields the game-flow view needs."""

    game_id: str
    home_team: str
    away_team: str
    home_periods: tuple
    status: str
    status_text: str
    home_score: int
    away_score: int


def _safe_int(val) -> int:
    """Safely convert a value to int, treating blanks and garbage as 0."""
    try:
        if val is None or pd.isna(val):
            return 0
        return int(val)
    except (ValueError, TypeError):
        return 0


def _match_clock(token) -> Optional[GameClock]:
    if not isinstance(token, str):
        return None
    s = token.strip()

    match = _ISO_CLOCK.match(s) or _COLON_CLOCK.match(s)
    if match is None:
        return None

    minutes_str, seconds_str = match.groups()
    minutes = int(minutes_str) if minutes_str else 0
    seconds = float(seconds_str)
    if seconds >= 60:
        return None
    return GameClock(minutes, seconds)


def clock_is_valid(token) -> bool:
    """Return True when parse_clock can read the token as a real clock."""
    return _match_clock(token) is not None


def parse_clock(token) -> GameClock:
    """
    Parse a game clock token into minutes and seconds left.

    Accepts the live feed's ISO-8601 duration ('PT04M30.00S', 'PT30.5S')
    and the classic 'MM:SS' form. Anything else, including seconds of 60
    or more, parses to GameClock(0, 0.0). Use clock_is_valid to tell that
    fallback apart from a real 0:00 clock.

    Args:
        token: Clock string from the feed (may be None or a non-string)

    Returns:
        GameClock tuple
    """
    clock = _match_clock(token)
    if clock is None:
        return GameClock(0, 0.0)
    return clock


def format_clock(clock: GameClock) -> str:
    """Format a GameClock as 'M:SS'."""
    return f"{clock.minutes_left}:{int(clock.seconds_left):02d}"


def _column(raw: pd.DataFrame, name: str) -> pd.Series:
    """Return a column, or an all-None column when the feed lacks it."""
    if name in raw.columns:
        return raw[name]
    return pd.Series([None] * len(raw), index=raw.index, dtype=object)


def actions_to_frame(actions: Optional[list]) -> pd.DataFrame:
    """
    Normalize raw play-by-play actions into a tidy events DataFrame.

    The live feed sends scores as strings ('102') and leaves them blank on
    some non-scoring rows; those become NaN. Periods that are missing or
    below 1 are treated as period 1. Unparseable clocks are zeroed and
    flagged False in clock_valid. Row order is the feed's order.

    Args:
        actions: List of action dicts from the play-by-play endpoint

    Returns:
        DataFrame with EVENT_COLUMNS
    """
    if not actions:
        return pd.DataFrame(columns=EVENT_COLUMNS)

    raw = pd.DataFrame(list(actions))
    clocks = _column(raw, "clock").apply(parse_clock)

    period = pd.to_numeric(_column(raw, "period"), errors="coerce")
    period = period.fillna(1).clip(lower=1).astype(int)

    return pd.DataFrame({
        "period": period,
        "minutes_left": clocks.apply(lambda c: c.minutes_left).astype(int),
        "seconds_left": clocks.apply(lambda c: c.seconds_left).astype(float),
        "score_home": pd.to_numeric(_column(raw, "scoreHome"), errors="coerce"),
        "score_away": pd.to_numeric(_column(raw, "scoreAway"), errors="coerce"),
        "description": _column(raw, "description").fillna("").astype(str),
        "clock_valid": _column(raw, "clock").apply(clock_is_valid).astype(bool),
    })


def _score_or_none(val) -> Optional[int]:
    if pd.isna(val):
        return None
    return int(val)


def events_from_actions(actions: Optional[list]) -> list[PlayEvent]:
    """Convert raw play-by-play actions to PlayEvent tuples in feed order."""
    frame = actions_to_frame(actions)
    return [
        PlayEvent(
            period=int(row.period),
            clock=GameClock(int(row.minutes_left), float(row.seconds_left)),
            score_home=_score_or_none(row.score_home),
            score_away=_score_or_none(row.score_away),
            description=row.description,
            clock_valid=bool(row.clock_valid),
        )
        for row in frame.itertuples(index=False)
    ]


def game_status(game: dict) -> str:
    """Map the feed's numeric gameStatus to scheduled/live/final."""
    return STATUS_BY_CODE.get(_safe_int(game.get("gameStatus")), "scheduled")


def _period_name(period: int) -> str:
    return f"Q{period}" if period <= 4 else f"OT{period - 4}"


def _start_time(game_time_utc) -> Optional[str]:
    """Format a UTC tip-off timestamp as local 'h:mm AM/PM'."""
    if not isinstance(game_time_utc, str) or not game_time_utc:
        return None
    try:
        tip = datetime.fromisoformat(game_time_utc.replace("Z", "+00:00"))
    except ValueError:
        return None
    local = tip.astimezone()
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_game_status(game: dict) -> str:
    """
    Build the one-line status shown next to a game.

    Works on both scoreboard and box score game dicts, which share the
    gameStatus, period, gameClock and gameTimeUTC fields.
    """
    status = game_status(game)
    if status == "scheduled":
        start = _start_time(game.get("gameTimeUTC"))
        return f"Starts at {start}" if start else "Scheduled"
    if status == "live":
        period = max(_safe_int(game.get("period")), 1)
        text = f"LIVE {_period_name(period)}"
        if game.get("gameClock"):
            text += f" {format_clock(parse_clock(game['gameClock']))}"
        return text
    return "Final"


def game_from_boxscore(boxscore: dict) -> GameMetadata:
    """
    Extract game-flow metadata from a live box score 'game' dict.

    Args:
        boxscore: Box score dict as returned by fetch_boxscore

    Returns:
        GameMetadata tuple
    """
    home = boxscore.get("homeTeam") or {}
    away = boxscore.get("awayTeam") or {}
    periods = tuple(_safe_int(p.get("score")) for p in home.get("periods") or [])

    return GameMetadata(
        game_id=str(boxscore.get("gameId", "")),
        home_team=home.get("teamTricode") or "HOME",
        away_team=away.get("teamTricode") or "AWAY",
        home_periods=periods,
        status=game_status(boxscore),
        status_text=format_game_status(boxscore),
        home_score=_safe_int(home.get("score")),
        away_score=_safe_int(away.get("score")),
    )


def top_performer(game: dict) -> Optional[dict]:
    """
    Return the higher-scoring of the two game leaders.

    Home leader wins ties. Returns None for scheduled games, or when either
    side has no leader points yet.
    """
    leaders = game.get("gameLeaders")
    if not leaders or game_status(game) == "scheduled":
        return None

    home_leader = leaders.get("homeLeaders") or {}
    away_leader = leaders.get("awayLeaders") or {}
    home_pts = _safe_int(home_leader.get("points"))
    away_pts = _safe_int(away_leader.get("points"))
    if not home_pts or not away_pts:
        return None

    if home_pts >= away_pts:
        return {"name": home_leader.get("name", ""), "points": home_pts}
    return {"name": away_leader.get("name", ""), "points": away_pts}


def transform_scores(scoreboard_data: dict) -> list[dict]:
    """
    Transform a live scoreboard into display rows.

    Args:
        scoreboard_data: Dict with 'games' list as returned by fetch_scoreboard

    Returns:
        List of game dicts with tricodes, scores, status and top performer
    """
    rows = []
    for game in scoreboard_data.get("games", []):
        home = game.get("homeTeam") or {}
        away = game.get("awayTeam") or {}
        status = game_status(game)
        started = status != "scheduled"

        home_score = _safe_int(home.get("score")) if started else None
        away_score = _safe_int(away.get("score")) if started else None

        winner = None
        if status == "final" and home_score != away_score:
            winner = "home" if home_score > away_score else "away"

        rows.append({
            "gameId": str(game.get("gameId", "")),
            "status": status,
            "statusText": format_game_status(game),
            "homeTeam": {"tricode": home.get("teamTricode", "???"), "score": home_score},
            "awayTeam": {"tricode": away.get("teamTricode", "???"), "score": away_score},
            "winner": winner,
            "topPerformer": top_performer(game),
        })
    return rows
