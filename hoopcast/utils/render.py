"""Rendering helpers using Rich."""

from __future__ import annotations

from typing import Mapping, Sequence

from rich.table import Table

from hoopcast.matchup.models import (
    TEAM1,
    CategoryResult,
    DayProjection,
    MatchupProjection,
    StatLine,
    TeamProjection,
)
from hoopcast.utils.stat_mappings import CATEGORIES, CategoryDefinition

DAILY_COLUMNS = (
    ("PTS", "points"),
    ("REB", "rebounds"),
    ("AST", "assists"),
    ("STL", "steals"),
    ("BLK", "blocks"),
    ("3PM", "three_pointers"),
    ("TO", "turnovers"),
    ("FGM/A", None),
    ("FTM/A", None),
)


def _format_category_value(category: CategoryDefinition, value: float) -> str:
    if category.is_ratio:
        return f"{value:.1f}%"
    return f"{value:.1f}"


def _winner_colors(result: CategoryResult) -> Sequence[str]:
    if result.winning_side is None:
        return "yellow", "yellow"
    if result.winning_side == TEAM1:
        return "green", "red"
    return "red", "green"


def _volume(made: float, attempted: float) -> str:
    return f"{made:.1f}/{attempted:.1f}"


def render_category_table(projection: MatchupProjection) -> Table:
    """Category totals with the current winner of each category."""
    team1 = projection.team1
    team2 = projection.team2
    table = Table(title="Projected Category Totals")
    table.add_column("Category", style="bold")
    table.add_column(f"[cyan]Actual[/cyan]\n{team1.name}", justify="right")
    table.add_column(f"[cyan]Actual[/cyan]\n{team2.name}", justify="right")
    table.add_column(f"[magenta]Projection[/magenta]\n{team1.name}", justify="right")
    table.add_column(f"[magenta]Projection[/magenta]\n{team2.name}", justify="right")
    table.add_column("Winner", justify="left")

    for category in CATEGORIES:
        result = projection.category_results.get(category.key)
        if result is None:
            continue
        color1, color2 = _winner_colors(result)

        if category.is_ratio:
            actual1 = _volume(
                team1.actual.get(category.made_field), team1.actual.get(category.attempted_field)
            )
            actual2 = _volume(
                team2.actual.get(category.made_field), team2.actual.get(category.attempted_field)
            )
            projected1 = (
                f"{_format_category_value(category, result.team1_total)} "
                f"({_volume(result.team1_made or 0.0, result.team1_attempted or 0.0)})"
            )
            projected2 = (
                f"{_format_category_value(category, result.team2_total)} "
                f"({_volume(result.team2_made or 0.0, result.team2_attempted or 0.0)})"
            )
        else:
            actual1 = _format_category_value(category, team1.actual.get(category.field))
            actual2 = _format_category_value(category, team2.actual.get(category.field))
            projected1 = _format_category_value(category, result.team1_total)
            projected2 = _format_category_value(category, result.team2_total)

        winner_color = "yellow" if result.winning_side is None else "bold"
        table.add_row(
            category.abbr,
            actual1,
            actual2,
            f"[{color1}]{projected1}[/{color1}]",
            f"[{color2}]{projected2}[/{color2}]",
            f"[{winner_color}]{result.winner}[/{winner_color}]",
        )

    return table


def render_score_summary(projection: MatchupProjection) -> Table:
    table = Table(title=f"Week {projection.week or '-'}: {projection.week_start} - {projection.week_end}")
    table.add_column("Team", justify="left")
    table.add_column("Categories Won", justify="right")
    score1 = projection.team1_score
    score2 = projection.team2_score
    color1 = "green" if score1 > score2 else ("red" if score1 < score2 else "yellow")
    color2 = "green" if score2 > score1 else ("red" if score2 < score1 else "yellow")
    table.add_row(projection.team1.name, f"[{color1}]{score1}[/{color1}]")
    table.add_row(projection.team2.name, f"[{color2}]{score2}[/{color2}]")
    return table


def _stat_cells(totals: StatLine) -> Sequence[str]:
    cells = []
    for _, field in DAILY_COLUMNS:
        if field is not None:
            cells.append(f"{totals.get(field):.1f}")
    cells.append(_volume(totals.field_goals_made, totals.field_goals_attempted))
    cells.append(_volume(totals.free_throws_made, totals.free_throws_attempted))
    return cells


def render_daily_breakdown(team: TeamProjection) -> Table:
    """One row per day of the period; past days show as final."""
    table = Table(title=f"{team.name} Daily Projection")
    table.add_column("Day", justify="left")
    table.add_column("Players", justify="center")
    for label, _ in DAILY_COLUMNS:
        table.add_column(label, justify="right")

    for day in team.daily_projections:
        label = f"{day.day_of_week} {day.month_day}"
        if day.is_today:
            label = f"[bold]{label} (today)[/bold]"
        if day.is_past:
            table.add_row(f"[dim]{label}[/dim]", "[dim]final[/dim]", *["[dim]-[/dim]"] * len(DAILY_COLUMNS))
            continue
        counted = sum(1 for entry in day.players if not entry.disabled)
        table.add_row(label, f"{counted}/{len(day.players)}", *_stat_cells(day.totals))

    table.add_row("[bold]Actual[/bold]", "", *_stat_cells(team.actual))
    table.add_row("[bold]Projected[/bold]", "", *_stat_cells(team.projected))
    table.add_row("[bold]Total[/bold]", "", *_stat_cells(team.total))
    return table


def render_day_players(day: DayProjection, title: str) -> Table:
    """Scheduled players for one day and why each one does or doesn't count."""
    table = Table(title=f"{title}: {day.day_of_week} {day.month_day}")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Player", justify="left")
    table.add_column("Team", justify="center")
    table.add_column("Pos", justify="center")
    table.add_column("Status", justify="left")
    table.add_column("PTS", justify="right")

    for entry in day.players:
        if not entry.disabled:
            state = "[green]counts[/green]"
        elif entry.auto_disabled:
            state = f"[red]auto ({entry.status or entry.position})[/red]"
        else:
            state = "[yellow]disabled[/yellow]"
        table.add_row(
            entry.player_id,
            entry.name,
            entry.team or "-",
            entry.position or "-",
            state,
            f"{entry.stats.points:.1f}",
        )
    return table


def render_overrides(overrides: Mapping[str, object]) -> Table:
    table = Table(title="Player Overrides")
    table.add_column("Player ID", justify="right")
    table.add_column("Override", justify="left")
    for player_id, value in sorted(overrides.items()):
        if isinstance(value, dict):
            days = ", ".join(sorted(value.get("days", {})))
            week = value.get("week")
            label = f"disabled on {days}" + (f" + {week}" if week else "")
        else:
            label = str(value)
        table.add_row(player_id, label)
    return table


def render_final_day_table(final_day) -> Table:
    """Category outcome if today's games finish at the players' averages."""
    table = Table(title=f"Final Day Projection ({final_day.date})")
    table.add_column("Category", style="bold")
    table.add_column(final_day.team1_name, justify="right")
    table.add_column(final_day.team2_name, justify="right")
    table.add_column("Winner", justify="left")

    for category in CATEGORIES:
        result = final_day.resolution.category_results.get(category.key)
        if result is None:
            continue
        color1, color2 = _winner_colors(result)
        table.add_row(
            category.abbr,
            f"[{color1}]{_format_category_value(category, result.team1_total)}[/{color1}]",
            f"[{color2}]{_format_category_value(category, result.team2_total)}[/{color2}]",
            result.winner,
        )
    table.add_row(
        "[bold]Score[/bold]",
        str(final_day.resolution.team1_score),
        str(final_day.resolution.team2_score),
        "",
    )
    return table
