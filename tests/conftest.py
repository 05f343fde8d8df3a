"""Shared test fixtures for mocked NBA live-data responses."""

import pytest


def _periods(scores: list[int]) -> list[dict]:
    return [
        {"period": i, "periodType": "REGULAR" if i <= 4 else "OVERTIME", "score": s}
        for i, s in enumerate(scores, 1)
    ]


@pytest.fixture
def sample_boxscore_data() -> dict:
    """Live box score 'game' dict for a game in the 2nd quarter."""
    return {
        "gameId": "0022500001",
        "gameStatus": 2,
        "gameStatusText": "Q2 5:12",
        "period": 2,
        "gameClock": "PT05M12.00S",
        "gameTimeUTC": "2026-01-20T00:00:00Z",
        "homeTeam": {
            "teamTricode": "DET",
            "score": 48,
            "periods": _periods([26, 22, 0, 0]),
        },
        "awayTeam": {
            "teamTricode": "BOS",
            "score": 45,
            "periods": _periods([24, 21, 0, 0]),
        },
    }


@pytest.fixture
def sample_final_boxscore_data(sample_boxscore_data) -> dict:
    """Final box score for a regulation game."""
    game = dict(sample_boxscore_data)
    game.update({"gameStatus": 3, "gameStatusText": "Final", "period": 4, "gameClock": "PT00M00.00S"})
    game["homeTeam"] = {"teamTricode": "DET", "score": 104, "periods": _periods([26, 22, 30, 26])}
    game["awayTeam"] = {"teamTricode": "BOS", "score": 98, "periods": _periods([24, 21, 28, 25])}
    return game


@pytest.fixture
def sample_overtime_boxscore_data(sample_final_boxscore_data) -> dict:
    """Final box score for a double-overtime game."""
    game = dict(sample_final_boxscore_data)
    game["homeTeam"] = {"teamTricode": "DET", "score": 120, "periods": _periods([26, 22, 30, 26, 8, 8])}
    game["awayTeam"] = {"teamTricode": "BOS", "score": 117, "periods": _periods([24, 21, 28, 31, 8, 5])}
    return game


@pytest.fixture
def sample_playbyplay_data() -> dict:
    """Play-by-play payload as returned by fetch_playbyplay."""
    return {
        "actions": [
            {"actionNumber": 1, "period": 1, "clock": "PT12M00.00S",
             "scoreHome": "0", "scoreAway": "0", "description": "Jump Ball"},
            {"actionNumber": 2, "period": 1, "clock": "PT11M30.00S",
             "scoreHome": "2", "scoreAway": "0", "description": "C. Cunningham 2PT"},
            {"actionNumber": 3, "period": 1, "clock": "PT10M00.00S",
             "scoreHome": "2", "scoreAway": "5", "description": "J. Tatum 3PT"},
            {"actionNumber": 4, "period": 1, "clock": "PT09M40.00S",
             "scoreHome": "", "scoreAway": "", "description": "Timeout"},
            {"actionNumber": 5, "period": 1, "clock": "PT07M05.00S",
             "scoreHome": "6", "scoreAway": "5", "description": "J. Duren Dunk"},
        ]
    }


@pytest.fixture
def sample_scoreboard_data() -> dict:
    """Scoreboard payload as returned by fetch_scoreboard."""
    return {
        "gameDate": "2026-01-19",
        "games": [
            {
                "gameId": "0022500001",
                "gameStatus": 3,
                "period": 4,
                "gameClock": "",
                "gameTimeUTC": "2026-01-20T00:00:00Z",
                "homeTeam": {"teamTricode": "DET", "score": 104},
                "awayTeam": {"teamTricode": "BOS", "score": 103},
                "gameLeaders": {
                    "homeLeaders": {"name": "Cade Cunningham", "points": 16},
                    "awayLeaders": {"name": "Jayson Tatum", "points": 28},
                },
            },
            {
                "gameId": "0022500002",
                "gameStatus": 2,
                "period": 5,
                "gameClock": "PT03M07.00S",
                "gameTimeUTC": "2026-01-20T01:00:00Z",
                "homeTeam": {"teamTricode": "LAL", "score": 110},
                "awayTeam": {"teamTricode": "GSW", "score": 108},
                "gameLeaders": {
                    "homeLeaders": {"name": "LeBron James", "points": 30},
                    "awayLeaders": {"name": "Stephen Curry", "points": 30},
                },
            },
            {
                "gameId": "0022500003",
                "gameStatus": 1,
                "period": 0,
                "gameClock": "",
                "gameTimeUTC": "2026-01-20T03:30:00Z",
                "homeTeam": {"teamTricode": "SAC", "score": 0},
                "awayTeam": {"teamTricode": "MIA", "score": 0},
                "gameLeaders": {
                    "homeLeaders": {"name": "", "points": 0},
                    "awayLeaders": {"name": "", "points": 0},
                },
            },
        ],
    }
