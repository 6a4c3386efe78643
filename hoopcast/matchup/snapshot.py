"""Roster snapshots and the live score snapshot reported by Yahoo."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from hoopcast.matchup.models import FantasyTeam, RosterPlayer, StatLine
from hoopcast.utils.stat_mappings import CATEGORIES, get_category

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreSnapshot:
    """Stats already accrued this period as reported by the fantasy platform."""

    team1: StatLine
    team2: StatLine


@dataclass(frozen=True)
class RosterSnapshot:
    team1: FantasyTeam
    team2: FantasyTeam
    week: Optional[int] = None
    week_start: Optional[str] = None
    week_end: Optional[str] = None
    score: Optional[ScoreSnapshot] = None


@dataclass(frozen=True)
class MatchupInputs:
    """Everything fetched for one projection; reused as-is by recompute."""

    snapshot: RosterSnapshot
    schedule: Mapping[str, Tuple[str, ...]]
    averages: Mapping[int, StatLine] = field(default_factory=dict)
    actuals: Mapping[int, StatLine] = field(default_factory=dict)


def _optional_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_roster_player(raw: Mapping[str, Any]) -> RosterPlayer:
    """Build a RosterPlayer from a camelCase or snake_case roster entry.

    Raises:
        ValueError: If the entry carries neither an NBA nor a Yahoo player id
    """
    nba_id = _optional_int(raw.get("nbaPlayerId", raw.get("nba_player_id")))
    fantasy_id = _optional_int(
        raw.get("yahooPlayerId", raw.get("fantasy_player_id", raw.get("player_id")))
    )
    if nba_id is None and fantasy_id is None:
        # Older snapshots only carry a bare id
        nba_id = _optional_int(raw.get("id"))

    name = raw.get("name") or "Unknown"
    if isinstance(name, Mapping):
        name = name.get("full") or "Unknown"

    position = raw.get("selectedPosition", raw.get("selected_position"))
    if isinstance(position, Mapping):
        position = position.get("position")

    return RosterPlayer(
        name=str(name),
        nba_player_id=nba_id,
        fantasy_player_id=fantasy_id,
        nba_team=raw.get("nbaTeam") or raw.get("nba_team"),
        selected_position=position or None,
        status=raw.get("status") or None,
    )


def parse_team(raw: Mapping[str, Any], default_name: str) -> FantasyTeam:
    players: List[RosterPlayer] = []
    for entry in raw.get("players") or []:
        try:
            players.append(parse_roster_player(entry))
        except ValueError as err:
            logger.warning(f"Skipping roster entry in {raw.get('name', default_name)}: {err}")
    return FantasyTeam(name=str(raw.get("name") or default_name), players=tuple(players))


def _ratio_parts(value: Any) -> Tuple[float, float]:
    if isinstance(value, Mapping):
        return (
            float(value.get("nominator") or 0),
            float(value.get("denominator") or 0),
        )
    if isinstance(value, str):
        return _parse_fraction(value)
    return 0.0, 0.0


def _counting_value(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def score_snapshot_from_categories(categories: Mapping[str, Any]) -> ScoreSnapshot:
    """Convert ``stats.categories`` into one stat line per team.

    Ratio categories contribute their made/attempted volumes, so the
    snapshot can be added to a projected remainder before percentages are
    taken.
    """
    sides: Dict[str, Dict[str, float]] = {"team1": {}, "team2": {}}
    for name, values in categories.items():
        category = get_category(name)
        if category is None or not isinstance(values, Mapping):
            logger.debug(f"Ignoring unknown snapshot category {name!r}")
            continue
        for side, totals in sides.items():
            value = values.get(side)
            if category.is_ratio:
                made, attempted = _ratio_parts(value)
                totals[category.made_field] = made
                totals[category.attempted_field] = attempted
            else:
                totals[category.field] = _counting_value(value)

    return ScoreSnapshot(
        team1=StatLine.from_mapping(sides["team1"]),
        team2=StatLine.from_mapping(sides["team2"]),
    )


def parse_roster_snapshot(raw: Mapping[str, Any]) -> RosterSnapshot:
    """Parse the roster snapshot handed over by the fantasy data collaborator.

    Args:
        raw: ``{team1: {name, players}, team2: {...}, week?, weekStart?,
            weekEnd?, stats?: {categories: {...}}}``

    Returns:
        RosterSnapshot

    Raises:
        ValueError: If either team is missing
    """
    if not isinstance(raw, Mapping):
        raise ValueError("Roster snapshot must be an object")
    for side in ("team1", "team2"):
        if not isinstance(raw.get(side), Mapping):
            raise ValueError(f"Roster snapshot is missing {side}")

    score = None
    stats = raw.get("stats")
    if isinstance(stats, Mapping) and isinstance(stats.get("categories"), Mapping):
        score = score_snapshot_from_categories(stats["categories"])

    return RosterSnapshot(
        team1=parse_team(raw["team1"], "Team 1"),
        team2=parse_team(raw["team2"], "Team 2"),
        week=_optional_int(raw.get("week")),
        week_start=raw.get("weekStart") or raw.get("week_start"),
        week_end=raw.get("weekEnd") or raw.get("week_end"),
        score=score,
    )


def _parse_fraction(value: str) -> Tuple[float, float]:
    """Split Yahoo's ``"11/22"`` made/attempted value."""
    parts = str(value).split("/")
    if len(parts) != 2:
        return 0.0, 0.0
    return _counting_value(parts[0]), _counting_value(parts[1])


def _stat_entries(team_stats: Sequence[Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for wrapper in team_stats or []:
        stat = wrapper.get("stat", wrapper) if isinstance(wrapper, Mapping) else None
        if not isinstance(stat, Mapping):
            continue
        values[str(stat.get("stat_id"))] = stat.get("value")
    return values


def parse_yahoo_team_stats(
    team1_stats: Sequence[Any], team2_stats: Sequence[Any]
) -> Dict[str, Dict[str, Any]]:
    """Map Yahoo ``team_stats.stats`` lists onto ``stats.categories``.

    Categories are keyed by their Yahoo display name ("Points", "Field Goal
    Percentage", ...). FG%/FT% values arrive as ``"made/attempted"`` and are
    split into ``{"nominator", "denominator"}``; a category missing for the
    second team reads as zero.
    """
    team1_values = _stat_entries(team1_stats)
    team2_values = _stat_entries(team2_stats)

    categories: Dict[str, Dict[str, Any]] = {}
    for category in CATEGORIES:
        if category.yahoo_stat_id not in team1_values:
            continue
        raw1 = team1_values.get(category.yahoo_stat_id)
        raw2 = team2_values.get(category.yahoo_stat_id)
        if category.is_ratio:
            made1, attempted1 = _parse_fraction(raw1 or "")
            made2, attempted2 = _parse_fraction(raw2 or "")
            categories[category.yahoo_name] = {
                "team1": {"nominator": made1, "denominator": attempted1},
                "team2": {"nominator": made2, "denominator": attempted2},
            }
        else:
            categories[category.yahoo_name] = {
                "team1": _counting_value(raw1),
                "team2": _counting_value(raw2),
            }
    return categories
