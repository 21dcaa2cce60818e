"""Race API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_athlete_id, get_current_user
from app.database import get_db
from app.models import User
from app.schemas import RaceCreate, RaceListResponse, RaceResponse, RaceUpdate
from app.services import RaceService

router = APIRouter(prefix="/races", tags=["races"])


@router.get("", response_model=RaceListResponse)
async def get_races(
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Get all races."""
    service = RaceService(db)
    races, total = await service.get_races(athlete_id)
    return RaceListResponse(items=races, total=total)


@router.get("/participating", response_model=RaceListResponse)
async def get_participating_races(
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Get races the caller participates in."""
    service = RaceService(db)
    races, total = await service.get_participating_races(athlete_id)
    return RaceListResponse(items=races, total=total)


@router.get("/{race_id}", response_model=RaceResponse)
async def get_race(
    race_id: int,
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Get a race with its participants."""
    service = RaceService(db)
    return await service.get_race(race_id, athlete_id)


@router.post("", response_model=RaceResponse, status_code=201)
async def create_race(
    data: RaceCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Create a new race."""
    service = RaceService(db)
    return await service.create_race(data, user)


@router.put("/{race_id}", response_model=RaceResponse)
async def update_race(
    race_id: int,
    data: RaceUpdate,
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Edit a race."""
    service = RaceService(db)
    return await service.update_race(race_id, data, athlete_id)


@router.delete("/{race_id}", status_code=204)
async def delete_race(
    race_id: int,
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a race."""
    service = RaceService(db)
    await service.delete_race(race_id, athlete_id)
