"""Pydantic models for API requests and responses."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StatTotals(BaseModel):
    """The eleven tracked stat fields."""

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


class PlayerDayEntry(BaseModel):
    """A scheduled player on one day and whether they count."""

    player_id: str
    name: str
    team: Optional[str] = None
    stats: StatTotals
    disabled: bool
    auto_disabled: bool
    status: Optional[str] = None
    position: Optional[str] = None


class DayProjection(BaseModel):
    date: str
    day_of_week: str
    month_day: str
    is_past: bool
    is_today: bool
    players: List[PlayerDayEntry] = []
    totals: StatTotals


class TeamProjection(BaseModel):
    name: str
    actual: StatTotals
    projected: StatTotals
    total: StatTotals
    daily_projections: List[DayProjection] = []


class CategoryResult(BaseModel):
    """Category outcome; made/attempted only set for FG% and FT%."""

    key: str
    team1_total: float
    team2_total: float
    winner: str
    team1_made: Optional[float] = None
    team1_attempted: Optional[float] = None
    team2_made: Optional[float] = None
    team2_attempted: Optional[float] = None


class FinalDayProjection(BaseModel):
    date: str
    team1_name: str
    team2_name: str
    team1_total: StatTotals
    team2_total: StatTotals
    category_results: Dict[str, CategoryResult]
    team1_score: int
    team2_score: int


class MatchupProjectionResponse(BaseModel):
    """Response for the matchup projection endpoints."""

    week: Optional[int] = None
    week_start: str
    week_end: str
    current_date: str
    today: str = Field(
        ..., description="Eastern date the projection is as of; status changes recompute against it"
    )
    team1: TeamProjection
    team2: TeamProjection
    category_results: Dict[str, CategoryResult]
    team1_score: int
    team2_score: int
    final_day: Optional[FinalDayProjection] = None


class MatchupProjectionRequest(BaseModel):
    """Roster snapshot to project, as produced by the fantasy data fetcher."""

    snapshot: Dict[str, Any] = Field(
        ..., description="{team1: {name, players}, team2: {...}, week?, weekStart?, weekEnd?, stats?}"
    )
    league_key: Optional[str] = None
    today: Optional[str] = Field(None, description="Eastern date override (YYYY-MM-DD)")
    include_final_day: bool = False


class PlayerStatusRequest(BaseModel):
    status: str = Field(
        ..., description="enabled, enabledForDay, disabled, disabledForWeek, disabledForDay or clear"
    )
    date: Optional[str] = Field(None, description="Date for day-scoped statuses (YYYY-MM-DD)")


class OverridesResponse(BaseModel):
    overrides: Dict[str, Any]
