"""Tests for the JSON-backed caches and the disable-state store."""

from __future__ import annotations

import json

import pytest

from hoopcast.matchup.player_overrides import DisabledForDays, DisabledForPeriod, Enabled
from hoopcast.player import player_cache
from hoopcast.schedule import schedule_cache
from hoopcast.utils.disable_store import DEFAULT_FILENAME, DisableStateStore


@pytest.mark.unit
def test_schedule_round_trip(temp_cache_dir):
    schedule_cache.save_schedule_table(
        "2025-26", {"2025-11-05": ["okc", "LAC"], "2025-11-06T00:00:00": ["PHI"]}
    )

    table = schedule_cache.load_schedule_table("2025-26")

    assert table == {"2025-11-05": ("LAC", "OKC"), "2025-11-06": ("PHI",)}
    assert (temp_cache_dir / "nba_schedules" / "2025-26.json").exists()
    assert schedule_cache.teams_playing(table, "2025-11-05") == ("LAC", "OKC")
    assert schedule_cache.teams_playing(table, "2025-11-07") == ()


@pytest.mark.unit
def test_missing_schedule_loads_none(temp_cache_dir):
    assert schedule_cache.load_schedule_table("1999-00") is None


@pytest.mark.unit
def test_schedule_with_wrong_shape_loads_none(temp_cache_dir):
    path = schedule_cache.get_cache_dir() / "2025-26.json"
    path.write_text(json.dumps(["not", "a", "table"]))

    assert schedule_cache.load_schedule_table("2025-26") is None


@pytest.mark.unit
def test_player_tables_round_trip(temp_cache_dir):
    averages = [{"player_id": 1628983, "points_per_game": 32.1}]
    logs = [{"player_id": 1628983, "game_date": "2025-11-03", "points": 30}]
    mappings = [{"nba_id": 1628983, "yahoo_id": 6014, "team": "OKC"}]

    player_cache.save_averages("2025-26", averages)
    player_cache.save_game_logs("2025-26", logs)
    player_cache.save_id_mappings(mappings)

    assert player_cache.load_averages("2025-26") == averages
    assert player_cache.load_game_logs("2025-26") == logs
    assert player_cache.load_id_mappings() == mappings
    assert player_cache.load_averages("2024-25") is None


@pytest.mark.unit
def test_disable_store_default_path(temp_cache_dir):
    store = DisableStateStore()

    assert store.path == temp_cache_dir / DEFAULT_FILENAME
    assert store.load() == {}


@pytest.mark.unit
def test_disable_store_persists_flat_json(tmp_path):
    store = DisableStateStore(tmp_path / "overrides.json")
    state = {
        "1": Enabled(),
        "2": DisabledForPeriod("disabledForWeek"),
        "3": DisabledForDays(frozenset({"2025-11-05", "2025-11-07"}), "disabled"),
    }

    store.save(state)

    assert json.loads(store.path.read_text()) == {
        "1": "enabled",
        "2": "disabledForWeek",
        "3": {"days": {"2025-11-05": True, "2025-11-07": True}, "week": "disabled"},
    }
    assert DisableStateStore(store.path).load() == state


@pytest.mark.unit
def test_disable_store_corrupt_file_loads_empty(tmp_path, caplog):
    path = tmp_path / "overrides.json"
    path.write_text("{not json")

    assert DisableStateStore(path).load() == {}
    assert "Could not read" in caplog.text


@pytest.mark.unit
def test_disable_store_clear(tmp_path):
    store = DisableStateStore(tmp_path / "overrides.json")
    store.save({"1": Enabled()})

    store.clear()

    assert store.load() == {}
