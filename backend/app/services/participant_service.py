"""Participant service."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError, RequestValidationFailed
from app.models import User
from app.repositories import ParticipantRepository, RaceRepository
from app.schemas import RaceResponse
from app.services.access_policy import check_join_password, ensure_can_remove_participant
from app.services.responses import race_response
from app.utils import utcnow

logger = logging.getLogger(__name__)


class ParticipantService:
    """Service for joining races and removing participants."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.race_repo = RaceRepository(session)
        self.participant_repo = ParticipantRepository(session)

    async def join_race(
        self, race_id: int, user: User, password: str | None
    ) -> RaceResponse:
        """Add the user to a race.

        The (race, user) unique constraint backs the explicit duplicate check,
        so concurrent joins by the same user still end in a single row.
        """
        race = await self.race_repo.get(race_id)
        if race is None:
            raise NotFoundError(f"Race not found with ID: {race_id}")

        existing = await self.participant_repo.get_by_race_and_user(race.id, user.id)
        if existing is not None:
            logger.info("User %s already a participant in race %s", user.id, race.id)
            raise ConflictError("You are already a participant in this race.")

        check_join_password(race, password, user.id)

        try:
            await self.participant_repo.create({
                "race": race,
                "user": user,
                "submitted_ride": False,
            })
        except IntegrityError as e:
            logger.info("Concurrent duplicate join by user %s for race %s", user.id, race.id)
            raise ConflictError("You are already a participant in this race.") from e

        logger.info("User %s joined race %s", user.id, race.id)
        return race_response(race, user.id, utcnow())

    async def remove_participant(
        self, race_id: int, participant_id: int, athlete_id: int
    ) -> None:
        """Remove a participant and their segment results from a race."""
        race = await self.race_repo.get(race_id)
        if race is None:
            raise NotFoundError(f"Race not found with ID: {race_id}")

        participant = await self.participant_repo.get(participant_id)
        if participant is None:
            raise NotFoundError(f"Participant not found with ID: {participant_id}")
        if participant.race_id != race.id:
            logger.warning(
                "Participant %s does not belong to race %s (belongs to %s)",
                participant_id, race.id, participant.race_id,
            )
            raise RequestValidationFailed("Participant does not belong to this race.")

        ensure_can_remove_participant(race, participant, athlete_id)

        race.participants.remove(participant)
        await self.session.flush()
        logger.info(
            "Participant %s removed from race %s by user %s",
            participant_id, race.id, athlete_id,
        )
