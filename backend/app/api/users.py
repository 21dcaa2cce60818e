"""User API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_athlete_id
from app.database import get_db
from app.schemas import CurrentUserResponse
from app.services import UserService

router = APIRouter(prefix="/user", tags=["users"])


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(
    athlete_id: int = Depends(get_current_athlete_id),
    db: AsyncSession = Depends(get_db),
):
    """Get the logged-in user's profile."""
    service = UserService(db)
    return await service.get_current_user(athlete_id)
