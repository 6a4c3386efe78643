"""Data model for matchup projections."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Tuple

from hoopcast.utils.stat_mappings import (
    STAT_FIELDS,
    build_field_to_wire_mapping,
    build_wire_to_field_mapping,
)

if TYPE_CHECKING:
    from hoopcast.matchup.snapshot import MatchupInputs

AUTO_DISABLED_POSITIONS = frozenset({"IL", "IL+"})
AUTO_DISABLED_STATUSES = frozenset({"INJ", "OUT"})

TIE = "Tie"
TEAM1 = "team1"
TEAM2 = "team2"


def _to_float(value: object) -> float:
    try:
        return float(value or 0.0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class StatLine:
    """The eleven tracked stat fields for a player, a day or a team."""

    points: float = 0.0
    rebounds: float = 0.0
    assists: float = 0.0
    steals: float = 0.0
    blocks: float = 0.0
    three_pointers: float = 0.0
    turnovers: float = 0.0
    field_goals_made: float = 0.0
    field_goals_attempted: float = 0.0
    free_throws_made: float = 0.0
    free_throws_attempted: float = 0.0

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, object]]) -> "StatLine":
        """Build a StatLine from snake_case or camelCase keys; unknown keys are ignored."""
        if not values:
            return cls()
        wire_to_field = build_wire_to_field_mapping()
        kwargs: Dict[str, float] = {}
        for key, value in values.items():
            stat_field = wire_to_field.get(key)
            if stat_field:
                kwargs[stat_field] = _to_float(value)
        return cls(**kwargs)

    def __add__(self, other: "StatLine") -> "StatLine":
        if not isinstance(other, StatLine):
            return NotImplemented
        return StatLine(
            **{name: getattr(self, name) + getattr(other, name) for name in STAT_FIELDS}
        )

    def get(self, name: str) -> float:
        return getattr(self, name)

    def to_dict(self) -> Dict[str, float]:
        """Serialize with camelCase wire keys."""
        field_to_wire = build_field_to_wire_mapping()
        return {field_to_wire[f.name]: getattr(self, f.name) for f in fields(self)}


def sum_stat_lines(lines) -> StatLine:
    total = StatLine()
    for line in lines:
        total = total + line
    return total


@dataclass(frozen=True)
class RosterPlayer:
    """One player on one fantasy roster for one matchup."""

    name: str
    nba_player_id: Optional[int] = None
    fantasy_player_id: Optional[int] = None
    nba_team: Optional[str] = None
    selected_position: Optional[str] = None
    status: Optional[str] = None

    def __post_init__(self) -> None:
        if self.nba_player_id is None and self.fantasy_player_id is None:
            raise ValueError(f"Roster player {self.name!r} has no player id")

    @property
    def player_id(self) -> int:
        """Primary sports-stats id when present, otherwise the fantasy-platform id."""
        if self.nba_player_id is not None:
            return self.nba_player_id
        return self.fantasy_player_id  # type: ignore[return-value]

    @property
    def key(self) -> str:
        """String form of ``player_id`` used to key disable-state records."""
        return str(self.player_id)

    @property
    def is_auto_disabled(self) -> bool:
        """True when the roster slot is an injured list or the status is INJ/OUT."""
        return (
            self.selected_position in AUTO_DISABLED_POSITIONS
            or self.status in AUTO_DISABLED_STATUSES
        )


@dataclass(frozen=True)
class FantasyTeam:
    name: str
    players: Tuple[RosterPlayer, ...] = ()


@dataclass(frozen=True)
class PlayerDayEntry:
    """A scheduled player on one day, with the resolved outcome of auto and manual rules."""

    player_id: str
    name: str
    team: Optional[str]
    stats: StatLine
    disabled: bool
    auto_disabled: bool
    status: Optional[str] = None
    position: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.player_id,
            "name": self.name,
            "team": self.team,
            "stats": self.stats.to_dict(),
            "disabled": self.disabled,
            "autoDisabled": self.auto_disabled,
            "status": self.status,
            "selectedPosition": self.position,
        }


@dataclass(frozen=True)
class DayProjection:
    date: str
    day_of_week: str
    month_day: str
    is_past: bool
    is_today: bool
    players: Tuple[PlayerDayEntry, ...] = ()
    totals: StatLine = field(default_factory=StatLine)

    def to_dict(self) -> Dict[str, object]:
        return {
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "monthDay": self.month_day,
            "isPast": self.is_past,
            "isToday": self.is_today,
            "players": [player.to_dict() for player in self.players],
            "totals": self.totals.to_dict(),
        }


@dataclass(frozen=True)
class TeamProjection:
    name: str
    actual: StatLine
    projected: StatLine
    total: StatLine
    daily_projections: Tuple[DayProjection, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "actual": self.actual.to_dict(),
            "projected": self.projected.to_dict(),
            "total": self.total.to_dict(),
            "dailyProjections": [day.to_dict() for day in self.daily_projections],
        }


@dataclass(frozen=True)
class CategoryResult:
    """Outcome of one head-to-head category.

    Ratio categories carry percentages (0-100) in the totals and the
    made/attempted volumes they were computed from. ``winning_side`` is
    ``"team1"``, ``"team2"`` or None for a tie; ``winner`` is the display name.
    """

    key: str
    team1_total: float
    team2_total: float
    winner: str
    team1_made: Optional[float] = None
    team1_attempted: Optional[float] = None
    team2_made: Optional[float] = None
    team2_attempted: Optional[float] = None
    winning_side: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        result: Dict[str, object] = {
            "team1": self.team1_total,
            "team2": self.team2_total,
            "winner": self.winner,
        }
        if self.team1_attempted is not None:
            result.update(
                {
                    "team1Made": self.team1_made,
                    "team1Attempted": self.team1_attempted,
                    "team2Made": self.team2_made,
                    "team2Attempted": self.team2_attempted,
                }
            )
        return result


@dataclass(frozen=True)
class MatchupProjection:
    """Root aggregate published to callers; rebuilt in full on every recompute."""

    week: Optional[int]
    week_start: str
    week_end: str
    current_date: str
    today: str
    team1: TeamProjection
    team2: TeamProjection
    category_results: Dict[str, CategoryResult]
    team1_score: int
    team2_score: int
    inputs: Optional["MatchupInputs"] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> Dict[str, object]:
        return {
            "week": self.week,
            "weekStart": self.week_start,
            "weekEnd": self.week_end,
            "currentDate": self.current_date,
            "team1": self.team1.to_dict(),
            "team2": self.team2.to_dict(),
            "categoryResults": {
                key: result.to_dict() for key, result in self.category_results.items()
            },
            "team1Score": self.team1_score,
            "team2Score": self.team2_score,
        }


def player_ids(players: List[RosterPlayer]) -> List[int]:
    return [player.player_id for player in players]
