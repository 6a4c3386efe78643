"""Matchup projection API endpoints."""

import logging
import sys
from dataclasses import asdict, fields, is_dataclass
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

from fastapi import APIRouter, HTTPException

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from app.config import settings
from app.models import (
    FinalDayProjection,
    MatchupProjectionRequest,
    MatchupProjectionResponse,
    OverridesResponse,
    PlayerStatusRequest,
)

from hoopcast.matchup.models import MatchupProjection
from hoopcast.matchup.projection_session import ProjectionFetchError, ProjectionSession
from hoopcast.matchup.snapshot import parse_roster_snapshot
from hoopcast.utils.disable_store import DEFAULT_FILENAME, DisableStateStore

router = APIRouter()

_session: Optional[ProjectionSession] = None


def get_session() -> ProjectionSession:
    """Process-wide projection session, created on first use."""
    global _session
    if _session is None:
        _session = ProjectionSession(
            store=DisableStateStore(settings.cache_dir / DEFAULT_FILENAME),
            season=settings.season,
        )
    return _session


def _plain(value: Any) -> Any:
    """Convert engine dataclasses into plain dicts for pydantic."""
    if is_dataclass(value):
        return asdict(value)
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def _to_response(
    projection: MatchupProjection, session: ProjectionSession, include_final_day: bool
) -> MatchupProjectionResponse:
    data = {
        field.name: _plain(getattr(projection, field.name))
        for field in fields(projection)
        if field.name != "inputs"
    }

    if include_final_day:
        final_day = session.final_day()
        if final_day is not None:
            data["final_day"] = FinalDayProjection(
                date=final_day.date,
                team1_name=final_day.team1_name,
                team2_name=final_day.team2_name,
                team1_total=asdict(final_day.team1_total),
                team2_total=asdict(final_day.team2_total),
                category_results=_plain(final_day.resolution.category_results),
                team1_score=final_day.resolution.team1_score,
                team2_score=final_day.resolution.team2_score,
            )

    return MatchupProjectionResponse(**data)


@router.post("/projection", response_model=MatchupProjectionResponse)
async def create_matchup_projection(body: MatchupProjectionRequest):
    """Project a matchup from a roster snapshot."""
    session = get_session()

    try:
        snapshot = parse_roster_snapshot(body.snapshot)
        projection = await session.refresh(snapshot, league=body.league_key, today=body.today)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProjectionFetchError as e:
        logger.error("Failed to load projection data: %s", e)
        raise HTTPException(status_code=502, detail=f"Failed to load projection data: {str(e)}")
    except Exception as e:
        logger.error("Failed to compute matchup projection: %s", e)
        raise HTTPException(
            status_code=500, detail=f"Failed to compute matchup projection: {str(e)}"
        )

    if projection is None:
        raise HTTPException(status_code=409, detail="Projection request was superseded")

    return _to_response(projection, session, body.include_final_day)


@router.get("/projection", response_model=MatchupProjectionResponse)
def get_matchup_projection(include_final_day: bool = False):
    """Return the last published projection."""
    session = get_session()
    if session.projection is None:
        raise HTTPException(status_code=404, detail="No matchup projection loaded")
    return _to_response(session.projection, session, include_final_day)


@router.post("/players/{player_id}/status", response_model=Optional[MatchupProjectionResponse])
def set_player_status(player_id: str, body: PlayerStatusRequest):
    """Set or clear a player's override and return the recomputed projection.

    The projection keeps the date it was loaded for; POST /projection again to
    move it to a new day.
    """
    session = get_session()

    try:
        if body.status == "clear":
            projection = session.clear_player_status(player_id)
        else:
            projection = session.set_player_status(player_id, body.status, body.date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Failed to update player %s: %s", player_id, e)
        raise HTTPException(status_code=500, detail=f"Failed to update player status: {str(e)}")

    if projection is None:
        return None
    return _to_response(projection, session, include_final_day=False)


@router.get("/overrides", response_model=OverridesResponse)
def get_overrides():
    """Return the persisted player overrides."""
    return OverridesResponse(overrides=dict(get_session().overrides()))
