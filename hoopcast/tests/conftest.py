"""Pytest configuration and fixtures for hoopcast tests."""

from __future__ import annotations

from typing import Dict, List

import pytest

from hoopcast.matchup.models import FantasyTeam, RosterPlayer, StatLine
from hoopcast.matchup.snapshot import MatchupInputs, RosterSnapshot

# Wednesday of a Monday-Sunday scoring week
TODAY = "2025-11-05"
WEEK_START = "2025-11-03"
WEEK_END = "2025-11-09"


@pytest.fixture
def temp_cache_dir(tmp_path, monkeypatch):
    """Point HOOPCAST_CACHE_DIR at a temporary directory."""
    cache_dir = tmp_path / "test_cache"
    cache_dir.mkdir()
    monkeypatch.setenv("HOOPCAST_CACHE_DIR", str(cache_dir))
    return cache_dir


@pytest.fixture
def today() -> str:
    return TODAY


@pytest.fixture
def week_dates() -> List[str]:
    return [
        "2025-11-03",
        "2025-11-04",
        "2025-11-05",
        "2025-11-06",
        "2025-11-07",
        "2025-11-08",
        "2025-11-09",
    ]


@pytest.fixture
def healthy_player() -> RosterPlayer:
    return RosterPlayer(
        name="Shai Gilgeous-Alexander",
        nba_player_id=1628983,
        fantasy_player_id=6014,
        nba_team="OKC",
        selected_position="PG",
        status=None,
    )


@pytest.fixture
def injured_player() -> RosterPlayer:
    return RosterPlayer(
        name="Joel Embiid",
        nba_player_id=203954,
        fantasy_player_id=5007,
        nba_team="PHI",
        selected_position="C",
        status="INJ",
    )


@pytest.fixture
def il_player() -> RosterPlayer:
    return RosterPlayer(
        name="Kawhi Leonard",
        nba_player_id=202695,
        nba_team="LAC",
        selected_position="IL+",
        status=None,
    )


@pytest.fixture
def unmapped_player() -> RosterPlayer:
    return RosterPlayer(name="Two-Way Rookie", fantasy_player_id=99999)


@pytest.fixture
def sample_averages() -> Dict[int, StatLine]:
    """Per-game averages keyed by NBA id."""
    return {
        1628983: StatLine(
            points=32.0,
            rebounds=5.0,
            assists=6.0,
            steals=2.0,
            blocks=1.0,
            three_pointers=2.0,
            turnovers=2.5,
            field_goals_made=11.0,
            field_goals_attempted=21.0,
            free_throws_made=8.0,
            free_throws_attempted=9.0,
        ),
        203954: StatLine(
            points=28.0,
            rebounds=10.0,
            assists=4.0,
            turnovers=3.5,
            field_goals_made=9.0,
            field_goals_attempted=18.0,
            free_throws_made=9.0,
            free_throws_attempted=11.0,
        ),
        202695: StatLine(points=24.0, rebounds=6.0, steals=1.5),
    }


@pytest.fixture
def sample_schedule(week_dates) -> Dict[str, tuple]:
    """OKC and PHI play every other day; LAC plays every day."""
    schedule = {}
    for index, day in enumerate(week_dates):
        teams = ["LAC"]
        teams.append("OKC" if index % 2 == 0 else "PHI")
        schedule[day] = tuple(sorted(teams))
    return schedule


@pytest.fixture
def raw_snapshot() -> Dict:
    """Roster snapshot as handed over by the fantasy data fetcher."""
    return {
        "team1": {
            "name": "Dunk Tank",
            "players": [
                {
                    "nbaPlayerId": 1628983,
                    "yahooPlayerId": 6014,
                    "name": "Shai Gilgeous-Alexander",
                    "nbaTeam": "OKC",
                    "selectedPosition": "PG",
                    "status": "Active",
                },
                {
                    "nbaPlayerId": 203954,
                    "name": "Joel Embiid",
                    "nbaTeam": "PHI",
                    "selectedPosition": "C",
                    "status": "INJ",
                },
            ],
        },
        "team2": {
            "name": "Brick City",
            "players": [
                {
                    "yahooPlayerId": 5162,
                    "name": "Kawhi Leonard",
                    "selected_position": "IL+",
                },
            ],
        },
        "week": 3,
        "weekStart": WEEK_START,
        "weekEnd": WEEK_END,
        "stats": {
            "categories": {
                "Points": {"team1": 150, "team2": 120},
                "Turnovers": {"team1": 12, "team2": 9},
                "Field Goal Percentage": {
                    "team1": {"nominator": 50, "denominator": 100},
                    "team2": {"nominator": 45, "denominator": 90},
                },
            }
        },
    }


def make_inputs(
    team1_players,
    team2_players,
    averages,
    schedule,
    actuals=None,
    week_start=WEEK_START,
    week_end=WEEK_END,
    score=None,
) -> MatchupInputs:
    """Build MatchupInputs for two teams named Team A and Team B."""
    return MatchupInputs(
        snapshot=RosterSnapshot(
            team1=FantasyTeam("Team A", tuple(team1_players)),
            team2=FantasyTeam("Team B", tuple(team2_players)),
            week=3,
            week_start=week_start,
            week_end=week_end,
            score=score,
        ),
        schedule=schedule,
        averages=averages,
        actuals=actuals or {},
    )


@pytest.fixture
def inputs_factory():
    return make_inputs
