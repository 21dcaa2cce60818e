"""Strava activity API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_strava_fetcher
from app.database import get_db
from app.fetchers import DataFetcher
from app.models import User
from app.schemas import RaceResponse, StravaActivityResponse, SubmitActivityRequest
from app.services import ActivityService

router = APIRouter(prefix="/races", tags=["activities"])


@router.get("/{race_id}/strava-activities", response_model=list[StravaActivityResponse])
async def get_strava_activities(
    race_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    fetcher: DataFetcher = Depends(get_strava_fetcher),
):
    """List the caller's rides that fall inside the race window."""
    service = ActivityService(db, fetcher)
    return await service.list_activities(race_id, user)


@router.post("/{race_id}/submit-activity", response_model=RaceResponse)
async def submit_activity(
    race_id: int,
    data: SubmitActivityRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    fetcher: DataFetcher = Depends(get_strava_fetcher),
):
    """Submit a Strava activity for scoring."""
    service = ActivityService(db, fetcher)
    return await service.submit_activity(race_id, user, data.activity_id)
