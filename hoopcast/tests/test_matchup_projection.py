"""Tests for the matchup projection pipeline."""

from __future__ import annotations

import dataclasses
import math

import pytest

from hoopcast.matchup.matchup_projection import (
    build_matchup_projection,
    project_final_day,
    recompute,
)
from hoopcast.matchup.models import RosterPlayer, StatLine
from hoopcast.matchup.player_overrides import set_player_status
from hoopcast.matchup.snapshot import ScoreSnapshot
from hoopcast.utils.stat_mappings import STAT_FIELDS


@pytest.fixture
def one_player_teams():
    team1_player = RosterPlayer(name="Scorer", nba_player_id=1, nba_team="BOS")
    team2_player = RosterPlayer(name="Careful", nba_player_id=2, nba_team="MIA")
    averages = {
        1: StatLine.from_mapping({"points": 30, "turnovers": 5}),
        2: StatLine.from_mapping({"points": 25, "turnovers": 3}),
    }
    schedule = {
        "2025-11-05": ("BOS", "MIA"),
        "2025-11-06": ("BOS", "MIA"),
        "2025-11-07": ("BOS", "MIA"),
    }
    return team1_player, team2_player, averages, schedule


@pytest.mark.unit
def test_end_to_end_two_team_scenario(one_player_teams, inputs_factory):
    """Team1 wins points, team2 wins turnovers over a 3-day past-free period."""
    team1_player, team2_player, averages, schedule = one_player_teams
    inputs = inputs_factory(
        [team1_player],
        [team2_player],
        averages,
        schedule,
        week_start="2025-11-05",
        week_end="2025-11-07",
    )

    projection = build_matchup_projection(inputs, {}, today="2025-11-05")

    assert projection.team1.projected.points == 90
    assert projection.team2.projected.points == 75
    assert projection.category_results["points"].winner == "Team A"
    assert projection.category_results["turnovers"].winner == "Team B"
    # Every other category ties at zero
    assert projection.team1_score == 1
    assert projection.team2_score == 1
    assert projection.week_start == "Wed, Nov 5"
    assert projection.week_end == "Fri, Nov 7"
    assert projection.current_date == "Wed, Nov 5"


@pytest.mark.unit
def test_past_days_are_frozen_in_projection(
    healthy_player, il_player, sample_averages, sample_schedule, inputs_factory, today
):
    inputs = inputs_factory([healthy_player], [il_player], sample_averages, sample_schedule)
    state = set_player_status({}, il_player.key, "enabled")

    projection = build_matchup_projection(inputs, state, today=today)

    for team in (projection.team1, projection.team2):
        past = [day for day in team.daily_projections if day.is_past]
        assert [day.date for day in past] == ["2025-11-03", "2025-11-04"]
        for day in past:
            assert day.players == ()
            assert day.totals == StatLine()


@pytest.mark.unit
def test_total_decomposition(
    healthy_player, injured_player, il_player, sample_averages, sample_schedule, inputs_factory, today
):
    actuals = {
        healthy_player.player_id: StatLine(points=60.3, turnovers=4.1, free_throws_made=7, free_throws_attempted=9),
        il_player.player_id: StatLine(points=0.7),
    }
    inputs = inputs_factory(
        [healthy_player, injured_player], [il_player], sample_averages, sample_schedule, actuals
    )

    projection = build_matchup_projection(inputs, {}, today=today)

    for team in (projection.team1, projection.team2):
        for field in STAT_FIELDS:
            assert math.isclose(
                team.total.get(field),
                team.actual.get(field) + team.projected.get(field),
                abs_tol=1e-9,
            )


@pytest.mark.unit
def test_ratio_categories_from_summed_volume(healthy_player, inputs_factory, today):
    """Zero attempts give 0%, otherwise made/attempted over the whole period."""
    averages = {healthy_player.player_id: StatLine(field_goals_made=10, field_goals_attempted=20)}
    actuals = {healthy_player.player_id: StatLine(field_goals_made=5, field_goals_attempted=20)}
    schedule = {today: ("OKC",), "2025-11-06": ("OKC",)}
    inputs = inputs_factory([healthy_player], [], averages, schedule, actuals)

    projection = build_matchup_projection(inputs, {}, today=today)
    fg = projection.category_results["fieldGoalPercentage"]

    # (5 + 10 + 10) / (20 + 20 + 20), not the mean of 25%, 50%, 50%
    assert fg.team1_total == pytest.approx(25 / 60 * 100)
    assert fg.team2_total == 0.0
    assert fg.winner == "Team A"


@pytest.mark.unit
def test_recompute_is_idempotent(
    healthy_player, injured_player, il_player, sample_averages, sample_schedule, inputs_factory, today
):
    inputs = inputs_factory(
        [healthy_player, injured_player], [il_player], sample_averages, sample_schedule
    )
    state = set_player_status({}, healthy_player.key, "disabledForDay", "2025-11-07")
    projection = build_matchup_projection(inputs, state, today=today)

    first = recompute(projection, state)
    second = recompute(first, state)

    assert first == projection
    assert second == first
    assert second.to_dict() == projection.to_dict()


@pytest.mark.unit
def test_recompute_needs_loaded_inputs(healthy_player, inputs_factory, today):
    projection = build_matchup_projection(
        inputs_factory([healthy_player], [], {}, {}), {}, today=today
    )
    detached = dataclasses.replace(projection, inputs=None)

    with pytest.raises(ValueError):
        recompute(detached, {})


@pytest.mark.unit
def test_day_level_override_scenario(inputs_factory):
    """P disabled on 11-05 only: excluded that day, counted on 11-06."""
    player = RosterPlayer(name="P", nba_player_id=10, nba_team="DEN")
    averages = {10: StatLine(points=20)}
    schedule = {"2025-11-05": ("DEN",), "2025-11-06": ("DEN",)}
    inputs = inputs_factory(
        [player], [], averages, schedule, week_start="2025-11-05", week_end="2025-11-06"
    )
    state = {}
    state = set_player_status(state, player.key, "disabledForDay", "2025-11-05")

    projection = build_matchup_projection(inputs, state, today="2025-11-05")
    day_5, day_6 = projection.team1.daily_projections

    assert day_5.totals.points == 0
    assert day_5.players[0].disabled is True
    assert day_6.totals.points == 20
    assert day_6.players[0].disabled is False
    assert projection.team1.projected.points == 20


@pytest.mark.unit
def test_whole_period_disable_scenario(
    healthy_player, sample_averages, sample_schedule, inputs_factory, today
):
    inputs = inputs_factory([healthy_player], [], sample_averages, sample_schedule)
    state = set_player_status({}, healthy_player.key, "disabled")

    projection = build_matchup_projection(inputs, state, today=today)

    for day in projection.team1.daily_projections:
        if day.is_past:
            continue
        assert all(entry.disabled for entry in day.players)
        assert day.totals == StatLine()
    assert projection.team1.projected == StatLine()


@pytest.mark.unit
def test_manual_enable_overrides_auto_disable(
    injured_player, sample_averages, sample_schedule, inputs_factory, today
):
    """An INJ player who is enabled counts on every scheduled remaining day."""
    inputs = inputs_factory([injured_player], [], sample_averages, sample_schedule)

    before = build_matchup_projection(inputs, {}, today=today)
    state = set_player_status({}, injured_player.key, "enabled")
    after = recompute(before, state)

    assert before.team1.projected.points == 0
    # PHI plays 11-06 and 11-08 from today on
    assert after.team1.projected.points == 56.0
    for day in after.team1.daily_projections:
        for entry in day.players:
            assert entry.disabled is False
            assert entry.auto_disabled is True


@pytest.mark.unit
def test_live_snapshot_is_baseline_for_categories(one_player_teams, inputs_factory):
    """With a live score, categories compare snapshot + projected remainder."""
    team1_player, team2_player, averages, schedule = one_player_teams
    score = ScoreSnapshot(
        team1=StatLine(points=100, turnovers=20),
        team2=StatLine(points=200, turnovers=10),
    )
    inputs = inputs_factory(
        [team1_player],
        [team2_player],
        averages,
        schedule,
        week_start="2025-11-03",
        week_end="2025-11-07",
        score=score,
    )

    projection = build_matchup_projection(inputs, {}, today="2025-11-05")
    points = projection.category_results["points"]

    assert points.team1_total == 190
    assert points.team2_total == 275
    assert points.winner == "Team B"
    assert projection.category_results["turnovers"].team1_total == 35
    assert projection.category_results["turnovers"].winner == "Team B"


@pytest.mark.unit
def test_project_final_day(one_player_teams, inputs_factory):
    """Final-day view adds only today's projection onto the live score."""
    team1_player, team2_player, averages, schedule = one_player_teams
    score = ScoreSnapshot(team1=StatLine(points=100), team2=StatLine(points=120))
    inputs = inputs_factory(
        [team1_player],
        [team2_player],
        averages,
        schedule,
        week_start="2025-11-03",
        week_end="2025-11-07",
        score=score,
    )

    final_day = project_final_day(inputs, {}, today="2025-11-07")

    assert final_day.team1_total.points == 130
    assert final_day.team2_total.points == 145
    assert final_day.resolution.category_results["points"].winner == "Team B"
    assert final_day.to_dict()["team2Score"] == final_day.resolution.team2_score


@pytest.mark.unit
def test_projection_to_dict_wire_shape(one_player_teams, inputs_factory):
    team1_player, team2_player, averages, schedule = one_player_teams
    inputs = inputs_factory(
        [team1_player], [team2_player], averages, schedule,
        week_start="2025-11-05", week_end="2025-11-07",
    )

    data = build_matchup_projection(inputs, {}, today="2025-11-05").to_dict()

    assert data["weekStart"] == "Wed, Nov 5"
    assert data["team1"]["total"]["threePointers"] == 0.0
    assert data["team1"]["dailyProjections"][0]["players"][0]["autoDisabled"] is False
    assert data["categoryResults"]["points"] == {"team1": 90.0, "team2": 75.0, "winner": "Team A"}
    assert "inputs" not in data
