"""Projection pipeline for H2H category matchups."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from hoopcast.matchup.category_resolver import (
    CategoryResolution,
    combine_with_snapshot,
    resolve_categories,
)
from hoopcast.matchup.models import MatchupProjection, StatLine, TeamProjection
from hoopcast.matchup.period_aggregator import aggregate_team, resolve_week_bounds
from hoopcast.matchup.player_overrides import PlayerOverride
from hoopcast.matchup.snapshot import MatchupInputs
from hoopcast.utils.dates import display_date, eastern_today, week_dates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalDayProjection:
    """Where the matchup ends if today's games finish at their averages."""

    date: str
    team1_name: str
    team2_name: str
    team1_total: StatLine
    team2_total: StatLine
    resolution: CategoryResolution

    def to_dict(self) -> Dict[str, object]:
        return {
            "date": self.date,
            "team1": {"name": self.team1_name, "total": self.team1_total.to_dict()},
            "team2": {"name": self.team2_name, "total": self.team2_total.to_dict()},
            "categoryResults": {
                key: result.to_dict()
                for key, result in self.resolution.category_results.items()
            },
            "team1Score": self.resolution.team1_score,
            "team2Score": self.resolution.team2_score,
        }


def _resolution_totals(
    inputs: MatchupInputs, team1: TeamProjection, team2: TeamProjection
):
    """Totals compared per category.

    With a live score snapshot the accrued part comes from the platform and
    only the projected remainder is added; otherwise actual + projected.
    """
    score = inputs.snapshot.score
    if score is None:
        return team1.total, team2.total
    return (
        combine_with_snapshot(score.team1, team1.projected),
        combine_with_snapshot(score.team2, team2.projected),
    )


def build_matchup_projection(
    inputs: MatchupInputs,
    disable_state: Mapping[str, PlayerOverride],
    today: Optional[str] = None,
) -> MatchupProjection:
    """Run the full projection over already-loaded inputs.

    Every day's eligibility, every day's totals and every category winner
    are derived from scratch; nothing is carried over from earlier runs.

    Args:
        inputs: Roster snapshot, schedule, averages and actuals
        disable_state: Current overrides keyed by player id
        today: Eastern ISO date (defaults to the current Eastern date)

    Returns:
        MatchupProjection
    """
    today = today or eastern_today()
    snapshot = inputs.snapshot
    week_start, week_end = resolve_week_bounds(snapshot.week_start, snapshot.week_end, today)
    dates = week_dates(week_start, week_end)

    teams = []
    for team in (snapshot.team1, snapshot.team2):
        teams.append(
            aggregate_team(
                team.name,
                team.players,
                inputs.averages,
                inputs.actuals,
                dates,
                inputs.schedule,
                disable_state,
                today,
            )
        )
    team1, team2 = teams

    team1_total, team2_total = _resolution_totals(inputs, team1, team2)
    resolution = resolve_categories(team1.name, team1_total, team2.name, team2_total)

    logger.info(
        f"Week {snapshot.week or '?'} ({week_start} to {week_end}): "
        f"{team1.name} {resolution.team1_score} - {resolution.team2_score} {team2.name}"
    )
    return MatchupProjection(
        week=snapshot.week,
        week_start=display_date(week_start),
        week_end=display_date(week_end),
        current_date=display_date(today),
        today=today,
        team1=team1,
        team2=team2,
        category_results=resolution.category_results,
        team1_score=resolution.team1_score,
        team2_score=resolution.team2_score,
        inputs=inputs,
    )


def recompute(
    previous: MatchupProjection,
    disable_state: Mapping[str, PlayerOverride],
    today: Optional[str] = None,
) -> MatchupProjection:
    """Rebuild a projection for a new disable-state without refetching.

    Raises:
        ValueError: If ``previous`` carries no loaded inputs
    """
    if previous.inputs is None:
        raise ValueError("Cannot recompute a projection without its loaded inputs")
    return build_matchup_projection(previous.inputs, disable_state, today or previous.today)


def project_final_day(
    inputs: MatchupInputs,
    disable_state: Mapping[str, PlayerOverride],
    today: Optional[str] = None,
) -> FinalDayProjection:
    """Resolve categories as current score plus today's projected stats only.

    Without a live score snapshot the accrued actuals stand in for it.
    """
    today = today or eastern_today()
    snapshot = inputs.snapshot

    team_totals = []
    for side, team in (("team1", snapshot.team1), ("team2", snapshot.team2)):
        projection = aggregate_team(
            team.name,
            team.players,
            inputs.averages,
            inputs.actuals,
            [today],
            inputs.schedule,
            disable_state,
            today,
        )
        if snapshot.score is not None:
            baseline = getattr(snapshot.score, side)
        else:
            baseline = projection.actual
        team_totals.append(combine_with_snapshot(baseline, projection.projected))

    team1_total, team2_total = team_totals
    resolution = resolve_categories(
        snapshot.team1.name, team1_total, snapshot.team2.name, team2_total
    )
    logger.info(
        f"Final day {today}: {snapshot.team1.name} {resolution.team1_score} - "
        f"{resolution.team2_score} {snapshot.team2.name}"
    )
    return FinalDayProjection(
        date=today,
        team1_name=snapshot.team1.name,
        team2_name=snapshot.team2.name,
        team1_total=team1_total,
        team2_total=team2_total,
        resolution=resolution,
    )
