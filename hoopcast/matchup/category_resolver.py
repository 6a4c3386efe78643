"""Head-to-head category comparison and scoring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from hoopcast.matchup.models import TEAM1, TEAM2, TIE, CategoryResult, StatLine
from hoopcast.utils.stat_mappings import CATEGORIES, CategoryDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryResolution:
    category_results: Dict[str, CategoryResult]
    team1_score: int
    team2_score: int


def percentage(made: float, attempted: float) -> float:
    """Shooting percentage on a 0-100 scale, 0 when nothing was attempted."""
    if attempted > 0:
        return made / attempted * 100
    return 0.0


def _winning_side(team1_value: float, team2_value: float, ascending: bool) -> Optional[str]:
    if team1_value == team2_value:
        return None
    team1_better = team1_value < team2_value if ascending else team1_value > team2_value
    return TEAM1 if team1_better else TEAM2


def resolve_category(
    category: CategoryDefinition,
    team1_name: str,
    team1_total: StatLine,
    team2_name: str,
    team2_total: StatLine,
) -> CategoryResult:
    names = {TEAM1: team1_name, TEAM2: team2_name}
    if category.is_ratio:
        team1_made = team1_total.get(category.made_field)
        team1_attempted = team1_total.get(category.attempted_field)
        team2_made = team2_total.get(category.made_field)
        team2_attempted = team2_total.get(category.attempted_field)
        team1_pct = percentage(team1_made, team1_attempted)
        team2_pct = percentage(team2_made, team2_attempted)
        side = _winning_side(team1_pct, team2_pct, category.ascending)
        return CategoryResult(
            key=category.key,
            team1_total=team1_pct,
            team2_total=team2_pct,
            winner=names.get(side, TIE),
            team1_made=team1_made,
            team1_attempted=team1_attempted,
            team2_made=team2_made,
            team2_attempted=team2_attempted,
            winning_side=side,
        )

    team1_value = team1_total.get(category.field)
    team2_value = team2_total.get(category.field)
    side = _winning_side(team1_value, team2_value, category.ascending)
    return CategoryResult(
        key=category.key,
        team1_total=team1_value,
        team2_total=team2_value,
        winner=names.get(side, TIE),
        winning_side=side,
    )


def resolve_categories(
    team1_name: str,
    team1_total: StatLine,
    team2_name: str,
    team2_total: StatLine,
    categories: Optional[Sequence[CategoryDefinition]] = None,
) -> CategoryResolution:
    """Compare two teams' totals in every category and count category wins.

    Counting categories go to the higher total, turnovers to the lower one.
    FG% and FT% are computed from the summed made/attempted volumes. Exact
    ties are recorded as ``"Tie"`` and score for neither team. Wins are
    counted by side, so two teams sharing a name still score correctly.

    Args:
        team1_name: Name of the first team
        team1_total: First team's stat line to compare
        team2_name: Name of the second team
        team2_total: Second team's stat line to compare
        categories: Categories to resolve (defaults to all nine)

    Returns:
        CategoryResolution with per-category results and both scores
    """
    results: Dict[str, CategoryResult] = {}
    team1_score = 0
    team2_score = 0
    for category in categories or CATEGORIES:
        result = resolve_category(category, team1_name, team1_total, team2_name, team2_total)
        results[category.key] = result
        if result.winning_side == TEAM1:
            team1_score += 1
        elif result.winning_side == TEAM2:
            team2_score += 1

    logger.debug(f"{team1_name} {team1_score} - {team2_score} {team2_name}")
    return CategoryResolution(results, team1_score, team2_score)


def combine_with_snapshot(snapshot: Optional[StatLine], remainder: StatLine) -> StatLine:
    """Add a projected remainder onto a live score snapshot field by field.

    Made/attempted volumes are added before any percentage is taken, so
    two percentages are never averaged.
    """
    if snapshot is None:
        return remainder
    return snapshot + remainder
