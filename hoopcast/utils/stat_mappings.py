"""Stat name mapping utilities for converting between different formats.

Maps the nine head-to-head categories and the eleven tracked stat fields
between their representations:
- Engine field names (snake_case: "three_pointers", "field_goals_made")
- Wire keys used by the frontend and roster snapshots (camelCase: "threePointers")
- Yahoo stat ids and category names (e.g., "10" / "Three Pointers Made")
- Averages table columns (e.g., "three_pointers_per_game")
- Game log columns (e.g., "three_pointers_made")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

STAT_FIELDS: Tuple[str, ...] = (
    "points",
    "rebounds",
    "assists",
    "steals",
    "blocks",
    "three_pointers",
    "turnovers",
    "field_goals_made",
    "field_goals_attempted",
    "free_throws_made",
    "free_throws_attempted",
)

CATEGORY_KIND_COUNTING = "counting"
CATEGORY_KIND_RATIO = "ratio"


@dataclass(frozen=True)
class CategoryDefinition:
    """One head-to-head scoring category."""

    key: str
    abbr: str
    yahoo_stat_id: str
    yahoo_name: str
    kind: str = CATEGORY_KIND_COUNTING
    ascending: bool = False  # lower is better (turnovers)
    field: Optional[str] = None
    made_field: Optional[str] = None
    attempted_field: Optional[str] = None

    @property
    def is_ratio(self) -> bool:
        return self.kind == CATEGORY_KIND_RATIO


CATEGORIES: Tuple[CategoryDefinition, ...] = (
    CategoryDefinition("points", "PTS", "12", "Points", field="points"),
    CategoryDefinition("rebounds", "REB", "15", "Rebounds", field="rebounds"),
    CategoryDefinition("assists", "AST", "16", "Assists", field="assists"),
    CategoryDefinition("steals", "STL", "17", "Steals", field="steals"),
    CategoryDefinition("blocks", "BLK", "18", "Blocks", field="blocks"),
    CategoryDefinition(
        "threePointers", "3PM", "10", "Three Pointers Made", field="three_pointers"
    ),
    CategoryDefinition(
        "turnovers", "TO", "19", "Turnovers", ascending=True, field="turnovers"
    ),
    CategoryDefinition(
        "fieldGoalPercentage",
        "FG%",
        "9004003",
        "Field Goal Percentage",
        kind=CATEGORY_KIND_RATIO,
        made_field="field_goals_made",
        attempted_field="field_goals_attempted",
    ),
    CategoryDefinition(
        "freeThrowPercentage",
        "FT%",
        "9007006",
        "Free Throw Percentage",
        kind=CATEGORY_KIND_RATIO,
        made_field="free_throws_made",
        attempted_field="free_throws_attempted",
    ),
)


def build_field_to_wire_mapping() -> Dict[str, str]:
    """Map engine field names to camelCase wire keys.

    Examples:
        >>> build_field_to_wire_mapping()["field_goals_made"]
        'fieldGoalsMade'
    """
    return {field: _to_camel(field) for field in STAT_FIELDS}


def build_wire_to_field_mapping() -> Dict[str, str]:
    """Map camelCase wire keys (and the snake_case names) to engine fields."""
    mapping = {_to_camel(field): field for field in STAT_FIELDS}
    mapping.update({field: field for field in STAT_FIELDS})
    return mapping


def build_averages_column_mapping() -> Dict[str, str]:
    """Map averages table columns (per-game values) to engine fields."""
    return {
        "points_per_game": "points",
        "rebounds_per_game": "rebounds",
        "assists_per_game": "assists",
        "steals_per_game": "steals",
        "blocks_per_game": "blocks",
        "three_pointers_per_game": "three_pointers",
        "turnovers_per_game": "turnovers",
        "field_goals_per_game": "field_goals_made",
        "field_goals_attempted_per_game": "field_goals_attempted",
        "free_throws_per_game": "free_throws_made",
        "free_throws_attempted_per_game": "free_throws_attempted",
    }


def build_game_log_column_mapping() -> Dict[str, str]:
    """Map game log columns (single-game values) to engine fields."""
    return {
        "points": "points",
        "rebounds": "rebounds",
        "assists": "assists",
        "steals": "steals",
        "blocks": "blocks",
        "three_pointers_made": "three_pointers",
        "turnovers": "turnovers",
        "field_goals_made": "field_goals_made",
        "field_goals_attempted": "field_goals_attempted",
        "free_throws_made": "free_throws_made",
        "free_throws_attempted": "free_throws_attempted",
    }


def get_category(key: str) -> Optional[CategoryDefinition]:
    """Look up a category by its key, Yahoo stat id, Yahoo name or abbreviation."""
    for category in CATEGORIES:
        if key in (
            category.key,
            category.yahoo_stat_id,
            category.yahoo_name,
            category.abbr,
        ):
            return category
    return None


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)
