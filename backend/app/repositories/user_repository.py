"""User repository."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def upsert(self, athlete_id: int, data: dict[str, Any]) -> tuple[User, bool]:
        """Create or update the user for a Strava athlete.

        Keys in ``data`` are written as given; keys left out keep their stored
        value. Returns the user and whether it was newly created.
        """
        existing = await self.get(athlete_id)
        if existing is None:
            user = await self.create({"id": athlete_id, **data})
            return user, True

        user = await self.update(athlete_id, data)
        return user, False
