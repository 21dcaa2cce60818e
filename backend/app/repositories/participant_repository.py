"""Participant repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Participant
from app.repositories.base import BaseRepository


class ParticipantRepository(BaseRepository[Participant]):
    """Repository for Participant model."""

    def __init__(self, session: AsyncSession):
        super().__init__(Participant, session)

    async def get_by_race_and_user(
        self, race_id: int, user_id: int
    ) -> Participant | None:
        """Get a user's participation in a race."""
        result = await self.session.execute(
            select(Participant).where(
                Participant.race_id == race_id,
                Participant.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()
