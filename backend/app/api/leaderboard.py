"""Leaderboard API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_athlete_id
from app.database import get_db
from app.schemas import LeaderboardResponse
from app.services import LeaderboardService

router = APIRouter(prefix="/races", tags=["leaderboard"])


@router.get("/{race_id}/leaderboard", response_model=LeaderboardResponse)
async def get_leaderboard(
    race_id: int,
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Get the race leaderboard as seen by the caller."""
    service = LeaderboardService(db)
    return await service.get_leaderboard(race_id, athlete_id)
