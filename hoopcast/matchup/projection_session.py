"""Load projection inputs and hold the published projection.

The session is the only owner of mutable state: the disable-state map and
the last successfully computed projection. A projection is published only
once the whole pipeline has finished; a failed or superseded refresh leaves
the previous projection in place.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from hoopcast.matchup.matchup_projection import (
    FinalDayProjection,
    build_matchup_projection,
    project_final_day,
    recompute,
)
from hoopcast.matchup.models import FantasyTeam, MatchupProjection, RosterPlayer, StatLine
from hoopcast.matchup.period_aggregator import resolve_week_bounds
from hoopcast.matchup.player_overrides import (
    DisableState,
    clear_player_status,
    dump_disable_state,
    set_player_status,
)
from hoopcast.matchup.snapshot import MatchupInputs, RosterSnapshot
from hoopcast.player import player_cache
from hoopcast.player.player_averages import actuals_from_game_logs, averages_from_rows
from hoopcast.player.player_index import attach_nba_teams
from hoopcast.schedule import schedule_cache
from hoopcast.schedule.schedule_cache import ScheduleTable
from hoopcast.utils.api_retry import retry_with_backoff
from hoopcast.utils.config import get_season
from hoopcast.utils.dates import eastern_today
from hoopcast.utils.disable_store import DisableStateStore

logger = logging.getLogger(__name__)

RequestKey = Tuple[Optional[str], Optional[int], str, str, str]


class ProjectionFetchError(Exception):
    """Raised when roster, schedule, averages or game-log data cannot be loaded."""


class ProjectionDataSource(ABC):
    """Collaborator that supplies the external tables a projection needs."""

    @abstractmethod
    async def fetch_id_mappings(self, players: Sequence[RosterPlayer]) -> List[Dict[str, Any]]:
        """Mapping rows (``nba_id, yahoo_id, name, team``) covering ``players``."""

    @abstractmethod
    async def fetch_schedule(self, season: str) -> ScheduleTable:
        """ISO date -> NBA team abbreviations playing that day."""

    @abstractmethod
    async def fetch_averages(self, season: str, player_ids: Sequence[int]) -> Dict[int, StatLine]:
        """Per-game averages keyed by player id."""

    @abstractmethod
    async def fetch_actuals(
        self,
        season: str,
        player_ids: Sequence[int],
        week_start: str,
        week_end: str,
        today: str,
    ) -> Dict[int, StatLine]:
        """Stats accrued inside ``[week_start, week_end]`` before today, keyed by player id."""


def _require(value: Any, what: str) -> Any:
    if value is None:
        raise FileNotFoundError(f"No cached {what}")
    return value


_cache_retry = retry_with_backoff(
    max_retries=2, base_delay=0.5, exceptions=(OSError,), silent=True
)


@_cache_retry
def _read_id_mappings() -> List[Dict[str, Any]]:
    return _require(player_cache.load_id_mappings(), "player id mappings")


@_cache_retry
def _read_schedule(season: str) -> ScheduleTable:
    return _require(schedule_cache.load_schedule_table(season), f"schedule for {season}")


@_cache_retry
def _read_averages(season: str) -> List[Dict[str, Any]]:
    return _require(player_cache.load_averages(season), f"averages for {season}")


@_cache_retry
def _read_game_logs(season: str) -> List[Dict[str, Any]]:
    return _require(player_cache.load_game_logs(season), f"game logs for {season}")


class CacheDataSource(ProjectionDataSource):
    """Data source backed by the JSON tables under the cache directory.

    File reads run in a worker thread so the event loop stays free.
    """

    async def fetch_id_mappings(self, players: Sequence[RosterPlayer]) -> List[Dict[str, Any]]:
        rows = await asyncio.to_thread(_read_id_mappings)
        wanted = set()
        for player in players:
            wanted.update(
                player_id
                for player_id in (player.nba_player_id, player.fantasy_player_id)
                if player_id is not None
            )
        return [
            row
            for row in rows
            if row.get("nba_id") in wanted or row.get("yahoo_id") in wanted
        ]

    async def fetch_schedule(self, season: str) -> ScheduleTable:
        return await asyncio.to_thread(_read_schedule, season)

    async def fetch_averages(self, season: str, player_ids: Sequence[int]) -> Dict[int, StatLine]:
        rows = await asyncio.to_thread(_read_averages, season)
        wanted = set(player_ids)
        averages = averages_from_rows(rows, season=season)
        return {player_id: line for player_id, line in averages.items() if player_id in wanted}

    async def fetch_actuals(
        self,
        season: str,
        player_ids: Sequence[int],
        week_start: str,
        week_end: str,
        today: str,
    ) -> Dict[int, StatLine]:
        rows = await asyncio.to_thread(_read_game_logs, season)
        return actuals_from_game_logs(
            rows, week_start, week_end, today, player_ids=player_ids
        )


async def load_inputs(
    source: ProjectionDataSource,
    snapshot: RosterSnapshot,
    season: str,
    today: str,
) -> MatchupInputs:
    """Fetch everything one projection needs.

    The two teams' NBA team mappings are fetched concurrently; the schedule,
    averages and game logs follow one after another.

    Raises:
        ProjectionFetchError: If any collaborator read fails
    """
    try:
        team1_rows, team2_rows = await asyncio.gather(
            source.fetch_id_mappings(snapshot.team1.players),
            source.fetch_id_mappings(snapshot.team2.players),
        )
        team1 = FantasyTeam(
            snapshot.team1.name, tuple(attach_nba_teams(snapshot.team1.players, team1_rows))
        )
        team2 = FantasyTeam(
            snapshot.team2.name, tuple(attach_nba_teams(snapshot.team2.players, team2_rows))
        )

        player_ids = sorted(
            {player.player_id for player in team1.players + team2.players}
        )
        week_start, week_end = resolve_week_bounds(snapshot.week_start, snapshot.week_end, today)

        schedule = await source.fetch_schedule(season)
        averages = await source.fetch_averages(season, player_ids)
        actuals = await source.fetch_actuals(
            season, player_ids, week_start, week_end, today
        )
    except ProjectionFetchError:
        raise
    except Exception as err:
        raise ProjectionFetchError(f"Could not load projection data: {err}") from err

    missing = [player_id for player_id in player_ids if player_id not in averages]
    if missing:
        logger.info(f"No averages for {len(missing)} players, projecting zeros for them")

    return MatchupInputs(
        snapshot=RosterSnapshot(
            team1=team1,
            team2=team2,
            week=snapshot.week,
            week_start=snapshot.week_start,
            week_end=snapshot.week_end,
            score=snapshot.score,
        ),
        schedule=schedule,
        averages=averages,
        actuals=actuals,
    )


def request_key(snapshot: RosterSnapshot, season: str, league: Optional[str] = None) -> RequestKey:
    return (league, snapshot.week, season, snapshot.team1.name, snapshot.team2.name)


class ProjectionSession:
    """Holds the disable-state and the latest published projection.

    Args:
        source: Collaborator supplying schedule, averages and game logs
        store: Persistence for the disable-state
        season: Season to project (defaults to the configured season)
    """

    def __init__(
        self,
        source: Optional[ProjectionDataSource] = None,
        store: Optional[DisableStateStore] = None,
        season: Optional[str] = None,
    ) -> None:
        self.source = source or CacheDataSource()
        self.store = store or DisableStateStore()
        self.season = season or get_season()
        self._lock = threading.Lock()
        self._generation = 0
        self._disable_state: DisableState = self.store.load()
        self.projection: Optional[MatchupProjection] = None

    @property
    def disable_state(self) -> DisableState:
        with self._lock:
            return dict(self._disable_state)

    async def refresh(
        self,
        snapshot: RosterSnapshot,
        league: Optional[str] = None,
        today: Optional[str] = None,
    ) -> Optional[MatchupProjection]:
        """Fetch inputs for ``snapshot`` and publish a new projection.

        If a newer refresh started while this one was loading, the result is
        discarded and the currently published projection is returned.

        Raises:
            ProjectionFetchError: If loading fails; the previous projection stays published
        """
        today = today or eastern_today()
        key = request_key(snapshot, self.season, league)
        with self._lock:
            self._generation += 1
            generation = self._generation

        logger.info(
            f"Refreshing projection for {snapshot.team1.name} vs {snapshot.team2.name} "
            f"(season {self.season}, week {snapshot.week or 'current'})"
        )
        try:
            inputs = await load_inputs(self.source, snapshot, self.season, today)
        except ProjectionFetchError as err:
            logger.error(f"Projection refresh failed, keeping previous projection: {err}")
            raise

        with self._lock:
            if generation != self._generation:
                logger.warning(f"Discarding stale projection result for {key}")
                return self.projection
            projection = build_matchup_projection(inputs, self._disable_state, today)
            self.projection = projection
        return projection

    def set_player_status(
        self, player_id: str, status: str, date: Optional[str] = None
    ) -> Optional[MatchupProjection]:
        """Apply one override, persist it and recompute the published projection.

        Raises:
            ValueError: For an unknown status or a day status without a date
        """
        with self._lock:
            state = set_player_status(self._disable_state, player_id, status, date)
            return self._publish_state(state)

    def clear_player_status(self, player_id: str) -> Optional[MatchupProjection]:
        with self._lock:
            state = clear_player_status(self._disable_state, player_id)
            return self._publish_state(state)

    def _publish_state(self, state: DisableState) -> Optional[MatchupProjection]:
        self.store.save(state)
        self._disable_state = state
        if self.projection is not None:
            self.projection = recompute(self.projection, state)
        return self.projection

    def final_day(self, today: Optional[str] = None) -> Optional[FinalDayProjection]:
        """Today's final-day view for the published projection, if any."""
        with self._lock:
            if self.projection is None or self.projection.inputs is None:
                return None
            return project_final_day(
                self.projection.inputs,
                self._disable_state,
                today or self.projection.today,
            )

    def overrides(self) -> Mapping[str, Any]:
        return dump_disable_state(self.disable_state)
