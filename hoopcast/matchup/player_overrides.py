"""Per-player enable/disable overrides.

An override is one of three records; a player with no entry in the
disable-state map is unset and only the auto-disable rules apply.

- ``Enabled``: force-include, beats every disable.
- ``DisabledForPeriod``: force-exclude for the whole remaining period.
- ``DisabledForDays``: force-exclude for specific dates, optionally also
  carrying a whole-period tag.

On disk the overrides keep the flat JSON shape the frontend stores:
``"enabled"``, ``"disabled"``, ``"disabledForWeek"`` or
``{"days": {"2025-11-05": true}, "week": "disabledForWeek"}``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

STATUS_ENABLED = "enabled"
STATUS_ENABLED_FOR_DAY = "enabledForDay"
STATUS_DISABLED = "disabled"
STATUS_DISABLED_FOR_WEEK = "disabledForWeek"
STATUS_DISABLED_FOR_DAY = "disabledForDay"

PERIOD_TAGS = frozenset({STATUS_DISABLED, STATUS_DISABLED_FOR_WEEK})

VALID_STATUSES = (
    STATUS_ENABLED,
    STATUS_ENABLED_FOR_DAY,
    STATUS_DISABLED,
    STATUS_DISABLED_FOR_WEEK,
    STATUS_DISABLED_FOR_DAY,
)


@dataclass(frozen=True)
class Enabled:
    pass


@dataclass(frozen=True)
class DisabledForPeriod:
    tag: str = STATUS_DISABLED


@dataclass(frozen=True)
class DisabledForDays:
    days: FrozenSet[str]
    week: Optional[str] = None


PlayerOverride = Union[Enabled, DisabledForPeriod, DisabledForDays]
DisableState = Dict[str, PlayerOverride]


def parse_override(value: object) -> Optional[PlayerOverride]:
    """Parse one persisted override value; unexpected shapes return None."""
    if value == STATUS_ENABLED:
        return Enabled()
    if isinstance(value, str) and value in PERIOD_TAGS:
        return DisabledForPeriod(value)
    if isinstance(value, dict):
        days = value.get("days") or {}
        week = value.get("week")
        if not isinstance(days, dict):
            logger.debug(f"Ignoring override with non-mapping days: {value!r}")
            return None
        if week is not None and week not in PERIOD_TAGS:
            # Stale enabled flags stored next to a days map carry no disable
            week = None
        disabled_days = frozenset(str(day) for day, flag in days.items() if flag)
        if not disabled_days and week is None:
            return None
        return DisabledForDays(disabled_days, week)

    logger.debug(f"Ignoring malformed override: {value!r}")
    return None


def serialize_override(override: PlayerOverride) -> object:
    if isinstance(override, Enabled):
        return STATUS_ENABLED
    if isinstance(override, DisabledForPeriod):
        return override.tag
    record: Dict[str, object] = {"days": {day: True for day in sorted(override.days)}}
    if override.week:
        record["week"] = override.week
    return record


def parse_disable_state(raw: Optional[Mapping[str, object]]) -> DisableState:
    """Parse a persisted disable-state object, dropping malformed entries."""
    state: DisableState = {}
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug(f"Ignoring malformed disable state: {raw!r}")
        return state

    for player_id, value in raw.items():
        override = parse_override(value)
        if override is not None:
            state[str(player_id)] = override
    return state


def dump_disable_state(state: Mapping[str, PlayerOverride]) -> Dict[str, object]:
    return {player_id: serialize_override(override) for player_id, override in state.items()}


def resolve_manual_flags(
    override: Optional[PlayerOverride], date: str
) -> Tuple[bool, bool]:
    """Return ``(manually_enabled, manually_disabled)`` for a player on ``date``."""
    if isinstance(override, Enabled):
        return True, False
    if isinstance(override, DisabledForPeriod):
        return False, True
    if isinstance(override, DisabledForDays):
        return False, date in override.days or override.week is not None
    return False, False


def set_player_status(
    state: Mapping[str, PlayerOverride],
    player_id: Union[str, int],
    status: str,
    date: Optional[str] = None,
) -> DisableState:
    """Apply one user directive and return the updated disable-state.

    The input mapping is left untouched.

    Args:
        state: Current disable-state keyed by player id
        player_id: Player the directive applies to
        status: One of ``enabled``, ``enabledForDay``, ``disabledForDay``,
            ``disabled`` or ``disabledForWeek``
        date: ISO date, required by the day-scoped statuses

    Returns:
        A new disable-state mapping

    Raises:
        ValueError: For an unknown status or a day-scoped status without a date
    """
    key = str(player_id)
    updated: DisableState = dict(state)
    current = updated.get(key)

    if status == STATUS_ENABLED:
        updated[key] = Enabled()
    elif status == STATUS_DISABLED_FOR_DAY:
        if not date:
            raise ValueError(f"Status {status!r} requires a date")
        week = None
        days: FrozenSet[str] = frozenset()
        if isinstance(current, DisabledForPeriod):
            week = current.tag
        elif isinstance(current, DisabledForDays):
            week = current.week
            days = current.days
        updated[key] = DisabledForDays(days | {date}, week)
    elif status == STATUS_ENABLED_FOR_DAY:
        if not date:
            raise ValueError(f"Status {status!r} requires a date")
        if isinstance(current, DisabledForDays) and date in current.days:
            remaining = current.days - {date}
            if remaining:
                updated[key] = DisabledForDays(remaining, current.week)
            elif current.week:
                updated[key] = DisabledForPeriod(current.week)
            else:
                del updated[key]
    elif status in PERIOD_TAGS:
        updated[key] = DisabledForPeriod(status)
    else:
        raise ValueError(
            f"Unknown player status {status!r}; expected one of {', '.join(VALID_STATUSES)}"
        )

    logger.debug(f"Player {key}: {current!r} -> {updated.get(key)!r} ({status}, {date})")
    return updated


def clear_player_status(
    state: Mapping[str, PlayerOverride], player_id: Union[str, int]
) -> DisableState:
    """Drop any override for ``player_id`` so only the auto rules apply."""
    updated: DisableState = dict(state)
    updated.pop(str(player_id), None)
    return updated
