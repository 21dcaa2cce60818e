"""Participant API routes."""

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_athlete_id, get_current_user
from app.database import get_db
from app.models import User
from app.schemas import JoinRaceRequest, RaceResponse
from app.services import ParticipantService

router = APIRouter(prefix="/races", tags=["participants"])


@router.post("/{race_id}/join", response_model=RaceResponse)
async def join_race(
    race_id: int,
    data: JoinRaceRequest | None = Body(None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Join a race with its password."""
    service = ParticipantService(db)
    return await service.join_race(race_id, user, data.password if data else None)


@router.delete("/{race_id}/participants/{participant_id}", status_code=204)
async def delete_participant(
    race_id: int,
    participant_id: int,
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Remove a participant from a race."""
    service = ParticipantService(db)
    await service.remove_participant(race_id, participant_id, athlete_id)
