"""Tests for loading projection inputs and the projection session."""

from __future__ import annotations

import asyncio
from dataclasses import replace
from unittest.mock import patch

import pytest

from hoopcast.matchup.models import FantasyTeam, StatLine
from hoopcast.matchup.player_overrides import DisabledForPeriod
from hoopcast.matchup.projection_session import (
    CacheDataSource,
    ProjectionDataSource,
    ProjectionFetchError,
    ProjectionSession,
    load_inputs,
)
from hoopcast.matchup.snapshot import parse_roster_snapshot
from hoopcast.player import player_cache
from hoopcast.schedule import schedule_cache
from hoopcast.utils.disable_store import DisableStateStore

SEASON = "2025-26"

MAPPING_ROWS = [
    {"nba_id": 1628983, "yahoo_id": 6014, "name": "Shai Gilgeous-Alexander", "team": "OKC"},
    {"nba_id": 203954, "yahoo_id": 5007, "name": "Joel Embiid", "team": "PHI"},
    {"nba_id": 202695, "yahoo_id": 5162, "name": "Kawhi Leonard", "team": "LAC"},
]


class FakeSource(ProjectionDataSource):
    """In-memory source; can hold the schedule read until released."""

    def __init__(self, schedule, averages, actuals=None, fail_with=None):
        self.schedule = schedule
        self.averages = averages
        self.actuals = actuals or {}
        self.fail_with = fail_with
        self.gate = None
        self.blocked = None

    async def fetch_id_mappings(self, players):
        return MAPPING_ROWS

    async def fetch_schedule(self, season):
        if self.gate is not None:
            gate, self.gate = self.gate, None
            self.blocked.set()
            await gate.wait()
        return self.schedule

    async def fetch_averages(self, season, player_ids):
        if self.fail_with is not None:
            raise self.fail_with
        return {pid: line for pid, line in self.averages.items() if pid in player_ids}

    async def fetch_actuals(self, season, player_ids, week_start, week_end, today):
        return self.actuals


@pytest.fixture
def snapshot(raw_snapshot):
    return parse_roster_snapshot(raw_snapshot)


@pytest.fixture
def store(tmp_path):
    return DisableStateStore(tmp_path / "overrides.json")


@pytest.fixture
def source(sample_schedule, sample_averages):
    return FakeSource(sample_schedule, sample_averages)


@pytest.mark.unit
def test_load_inputs_maps_teams_and_ids(source, snapshot, today):
    inputs = asyncio.run(load_inputs(source, snapshot, SEASON, today))

    kawhi = inputs.snapshot.team2.players[0]
    assert kawhi.nba_team == "LAC"
    assert kawhi.nba_player_id == 202695
    assert set(inputs.averages) == {1628983, 203954, 202695}
    assert inputs.snapshot.score == snapshot.score


@pytest.mark.unit
def test_load_inputs_wraps_collaborator_errors(sample_schedule, snapshot, today):
    source = FakeSource(sample_schedule, {}, fail_with=RuntimeError("averages service down"))

    with pytest.raises(ProjectionFetchError, match="averages service down"):
        asyncio.run(load_inputs(source, snapshot, SEASON, today))


@pytest.mark.unit
def test_refresh_publishes_projection(source, store, snapshot, today):
    session = ProjectionSession(source=source, store=store, season=SEASON)

    projection = asyncio.run(session.refresh(snapshot, league="nba.l.1", today=today))

    assert session.projection is projection
    assert projection.team1.name == "Dunk Tank"
    # Embiid is INJ and Kawhi is on IL+; only SGA counts (OKC plays 11-05, 11-07, 11-09)
    assert projection.team1.projected.points == 96.0
    assert projection.team2.projected == StatLine()
    # Live score snapshot is the accrued baseline
    assert projection.category_results["points"].team1_total == 246.0
    assert projection.category_results["points"].team2_total == 120.0


@pytest.mark.unit
def test_failed_refresh_keeps_previous_projection(source, store, snapshot, today):
    session = ProjectionSession(source=source, store=store, season=SEASON)
    previous = asyncio.run(session.refresh(snapshot, today=today))

    source.fail_with = RuntimeError("timeout")
    with pytest.raises(ProjectionFetchError):
        asyncio.run(session.refresh(snapshot, today=today))

    assert session.projection is previous


@pytest.mark.unit
def test_stale_refresh_result_is_discarded(source, store, snapshot, today):
    """A slow earlier refresh never replaces the result of a newer one."""
    session = ProjectionSession(source=source, store=store, season=SEASON)
    other_snapshot = replace(
        snapshot,
        team2=FantasyTeam("Glass Cannons", snapshot.team2.players),
    )

    async def scenario():
        gate = source.gate = asyncio.Event()
        source.blocked = asyncio.Event()
        slow = asyncio.create_task(session.refresh(snapshot, today=today))
        await source.blocked.wait()
        newest = await session.refresh(other_snapshot, today=today)
        gate.set()
        return newest, await slow

    newest, stale = asyncio.run(scenario())

    assert newest.team2.name == "Glass Cannons"
    assert stale is newest
    assert session.projection is newest


@pytest.mark.unit
def test_slow_refresh_never_replaces_newer_one_for_same_matchup(source, store, snapshot, today):
    """An older refresh of the same matchup loses to the newest one."""
    session = ProjectionSession(source=source, store=store, season=SEASON)
    other_snapshot = replace(
        snapshot,
        team2=FantasyTeam("Glass Cannons", snapshot.team2.players),
    )
    latest_scores = replace(snapshot, score=None)

    async def scenario():
        gate = source.gate = asyncio.Event()
        source.blocked = asyncio.Event()
        slow = asyncio.create_task(session.refresh(snapshot, today=today))
        await source.blocked.wait()
        await session.refresh(other_snapshot, today=today)
        newest = await session.refresh(latest_scores, today=today)
        gate.set()
        return newest, await slow

    newest, stale = asyncio.run(scenario())

    assert stale is newest
    assert session.projection is newest
    assert newest.category_results["points"].team1_total == 96.0


@pytest.mark.unit
def test_set_player_status_persists_and_recomputes(source, store, snapshot, today):
    session = ProjectionSession(source=source, store=store, season=SEASON)
    asyncio.run(session.refresh(snapshot, today=today))

    projection = session.set_player_status("1628983", "disabled")

    assert projection.team1.projected == StatLine()
    assert store.load() == {"1628983": DisabledForPeriod("disabled")}

    projection = session.set_player_status("203954", "enabled")
    # PHI plays 11-06 and 11-08
    assert projection.team1.projected.points == 56.0

    projection = session.clear_player_status("1628983")
    assert projection.team1.projected.points == 96.0 + 56.0
    assert session.overrides() == {"203954": "enabled"}


@pytest.mark.unit
def test_session_starts_from_stored_overrides(source, store, snapshot, today):
    store.save({"1628983": DisabledForPeriod()})

    session = ProjectionSession(source=source, store=store, season=SEASON)
    projection = asyncio.run(session.refresh(snapshot, today=today))

    assert projection.team1.projected == StatLine()


@pytest.mark.unit
def test_set_player_status_before_any_projection(store):
    session = ProjectionSession(source=FakeSource({}, {}), store=store, season=SEASON)

    assert session.set_player_status("1", "disabledForDay", "2025-11-05") is None
    assert session.overrides() == {"1": {"days": {"2025-11-05": True}}}
    with pytest.raises(ValueError):
        session.set_player_status("1", "benched")


@pytest.mark.unit
def test_final_day_view(source, store, snapshot, today):
    session = ProjectionSession(source=source, store=store, season=SEASON)
    assert session.final_day() is None

    asyncio.run(session.refresh(snapshot, today=today))
    final_day = session.final_day()

    assert final_day.date == today
    # Score snapshot 150 plus SGA's 32 tonight
    assert final_day.team1_total.points == 182.0
    assert final_day.team2_total.points == 120.0


@pytest.mark.integration
def test_cache_data_source_end_to_end(temp_cache_dir, store, snapshot, sample_schedule, today):
    schedule_cache.save_schedule_table(SEASON, sample_schedule)
    player_cache.save_id_mappings(MAPPING_ROWS)
    player_cache.save_averages(
        SEASON,
        [
            {"player_id": 1628983, "season": SEASON, "points_per_game": 32.0},
            {"player_id": 202695, "season": SEASON, "points_per_game": 24.0},
        ],
    )
    player_cache.save_game_logs(
        SEASON,
        [
            {"player_id": 1628983, "game_date": "2025-11-03", "points": 30},
            {"player_id": 1628983, "game_date": "2025-11-05", "points": 41},
            {"player_id": 202695, "game_date": "2025-11-04", "points": 18},
        ],
    )

    session = ProjectionSession(source=CacheDataSource(), store=store, season=SEASON)
    projection = asyncio.run(session.refresh(snapshot, today=today))

    assert projection.team1.actual.points == 30
    assert projection.team1.projected.points == 96.0
    assert projection.team2.actual.points == 18
    kawhi_days = [
        entry
        for day in projection.team2.daily_projections
        for entry in day.players
    ]
    assert {entry.player_id for entry in kawhi_days} == {"202695"}
    assert all(entry.disabled for entry in kawhi_days)


@pytest.mark.integration
def test_past_period_ignores_later_games(temp_cache_dir, store, snapshot, sample_schedule):
    schedule_cache.save_schedule_table(SEASON, sample_schedule)
    player_cache.save_id_mappings(MAPPING_ROWS)
    player_cache.save_averages(
        SEASON, [{"player_id": 1628983, "season": SEASON, "points_per_game": 32.0}]
    )
    player_cache.save_game_logs(
        SEASON,
        [
            {"player_id": 1628983, "game_date": "2025-11-05", "points": 10},
            {"player_id": 1628983, "game_date": "2025-11-12", "points": 40},
        ],
    )

    session = ProjectionSession(source=CacheDataSource(), store=store, season=SEASON)
    projection = asyncio.run(session.refresh(snapshot, today="2025-11-14"))

    assert projection.team1.actual.points == 10
    assert projection.team1.projected.points == 0.0
    assert projection.team1.total.points == 10


@pytest.mark.integration
def test_cache_data_source_missing_tables(temp_cache_dir, store, snapshot, today):
    session = ProjectionSession(source=CacheDataSource(), store=store, season=SEASON)

    with patch("hoopcast.utils.api_retry.time.sleep") as mock_sleep:
        with pytest.raises(ProjectionFetchError, match="No cached player id mappings"):
            asyncio.run(session.refresh(snapshot, today=today))

    assert mock_sleep.call_count >= 2
    assert session.projection is None
