"""Race repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Participant, Race
from app.repositories.base import BaseRepository


class RaceRepository(BaseRepository[Race]):
    """Repository for Race model.

    Participants, their users and segment results are loaded eagerly by the
    model mapping, so every race returned here is complete.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(Race, session)

    async def get_all_races(self) -> list[Race]:
        """Get every race, most recent start first."""
        result = await self.session.execute(
            select(Race)
            .order_by(Race.start_date.desc(), Race.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_participant(self, user_id: int) -> list[Race]:
        """Get races the user participates in."""
        result = await self.session.execute(
            select(Race)
            .join(Participant, Participant.race_id == Race.id)
            .where(Participant.user_id == user_id)
            .order_by(Race.start_date.desc(), Race.id.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().unique().all())
