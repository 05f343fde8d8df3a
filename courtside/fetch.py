"""NBA live-data fetch module with retry handling."""

import sys
import time
from datetime import datetime
from typing import Optional

import requests
from nba_api.live.nba.endpoints.boxscore import BoxScore
from nba_api.live.nba.endpoints.playbyplay import PlayByPlay
from nba_api.live.nba.endpoints.scoreboard import ScoreBoard


def _log_error(msg: str) -> None:
    """Log timestamped error to stderr."""
    timestamp = datetime.now().isoformat()
    print(f"[{timestamp}] {msg}", file=sys.stderr, flush=True)


def fetch_scoreboard(delay: float = 0.0) -> Optional[dict]:
    """
    Fetch today's scoreboard with retry logic.

    Args:
        delay: Delay in seconds before making the API call (default 0)

    Returns:
        Dict with 'gameDate' and 'games' keys, or None on failure
    """
    max_retries = 1
    for attempt in range(max_retries + 1):
        try:
            time.sleep(delay)
            response = ScoreBoard()
            board = response.get_dict()["scoreboard"]
            return {
                "gameDate": board.get("gameDate", ""),
                "games": board.get("games", []),
            }
        except requests.exceptions.RequestException as e:
            _log_error(f"Error fetching scoreboard: {e}")

            if attempt < max_retries:
                time.sleep(5)
            else:
                return None
        except Exception as e:
            _log_error(f"Unexpected error fetching scoreboard: {e}")
            return None


def fetch_boxscore(game_id: str, delay: float = 0.0) -> Optional[dict]:
    """
    Fetch the live box score for a game with retry logic.

    The live endpoint 403s until shortly before tip-off, so a scheduled
    game usually comes back as None here.

    Args:
        game_id: Game ID string
        delay: Delay in seconds before making the API call (default 0)

    Returns:
        The box score 'game' dict (teams, periods, gameStatus), or None on failure
    """
    max_retries = 1
    for attempt in range(max_retries + 1):
        try:
            time.sleep(delay)
            response = BoxScore(game_id=game_id)
            return response.get_dict()["game"]
        except requests.exceptions.RequestException as e:
            _log_error(f"Error fetching box score for {game_id}: {e}")

            if attempt < max_retries:
                time.sleep(5)
            else:
                return None
        except Exception as e:
            _log_error(f"Unexpected error fetching box score for {game_id}: {e}")
            return None


def fetch_playbyplay(game_id: str, delay: float = 0.0) -> Optional[dict]:
    """
    Fetch live play-by-play actions for a game with retry logic.

    Args:
        game_id: Game ID string
        delay: Delay in seconds before making the API call (default 0)

    Returns:
        Dict with an 'actions' list in game order, or None on failure
    """
    max_retries = 1
    for attempt in range(max_retries + 1):
        try:
            time.sleep(delay)
            response = PlayByPlay(game_id=game_id)
            game = response.get_dict()["game"]
            return {"actions": game.get("actions", [])}
        except requests.exceptions.RequestException as e:
            _log_error(f"Error fetching play-by-play for {game_id}: {e}")

            if attempt < max_retries:
                time.sleep(5)
            else:
                return None
        except Exception as e:
            _log_error(f"Unexpected error fetching play-by-play for {game_id}: {e}")
            return None
