"""Race service."""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, RequestValidationFailed
from app.models import Race, User
from app.repositories import ParticipantRepository, RaceRepository
from app.schemas import RaceCreate, RaceResponse, RaceUpdate
from app.services.access_policy import ensure_organiser
from app.services.responses import race_response
from app.utils import ensure_utc, utcnow

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 4


class RaceService:
    """Service for race operations.

    All races are private: a join password is required on creation and kept
    on edit unless a new one is supplied.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.race_repo = RaceRepository(session)
        self.participant_repo = ParticipantRepository(session)

    async def get_race(self, race_id: int, viewer_id: int) -> RaceResponse:
        """Get a race with participant detail."""
        race = await self.get_race_model(race_id)
        return race_response(race, viewer_id, utcnow())

    async def get_race_model(self, race_id: int) -> Race:
        """Get a race, raising NotFoundError when it does not exist."""
        race = await self.race_repo.get(race_id)
        if race is None:
            raise NotFoundError(f"Race not found with ID: {race_id}")
        return race

    async def get_races(self, viewer_id: int) -> tuple[list[RaceResponse], int]:
        """Get all races as summaries."""
        races = await self.race_repo.get_all_races()
        now = utcnow()
        responses = [
            race_response(race, viewer_id, now, include_participants=False)
            for race in races
        ]
        return responses, len(responses)

    async def get_participating_races(
        self, viewer_id: int
    ) -> tuple[list[RaceResponse], int]:
        """Get races the viewer participates in as summaries."""
        races = await self.race_repo.get_by_participant(viewer_id)
        now = utcnow()
        responses = [
            race_response(race, viewer_id, now, include_participants=False)
            for race in races
        ]
        return responses, len(responses)

    async def create_race(self, data: RaceCreate, organiser: User) -> RaceResponse:
        """Create a race; the organiser becomes its first participant."""
        start_date, end_date = _validate_race_fields(data)
        if data.password is None or len(data.password) < MIN_PASSWORD_LENGTH:
            raise RequestValidationFailed(
                "Password is required for private races and must be at least "
                f"{MIN_PASSWORD_LENGTH} characters"
            )

        race = await self.race_repo.create({
            "race_name": data.race_name.strip(),
            "description": data.description,
            "start_date": start_date,
            "end_date": end_date,
            "segment_ids": _unique_segment_ids(data.segment_ids),
            "organiser": organiser,
            "is_private": True,
            "password": data.password,
            "hide_leaderboard_until_finish": data.hide_leaderboard_until_finish,
            "use_sex_categories": data.use_sex_categories,
        })
        await self.participant_repo.create({
            "race": race,
            "user": organiser,
            "submitted_ride": False,
        })

        logger.info("Race %s created by user %s", race.id, organiser.id)
        return race_response(race, organiser.id, utcnow())

    async def update_race(
        self, race_id: int, data: RaceUpdate, athlete_id: int
    ) -> RaceResponse:
        """Edit a race. Only the organiser may do this."""
        race = await self.get_race_model(race_id)
        ensure_organiser(race, athlete_id, "edit")

        start_date, end_date = _validate_race_fields(data)
        if data.password is not None:
            if len(data.password) < MIN_PASSWORD_LENGTH:
                raise RequestValidationFailed(
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
                )
            race.password = data.password
        elif not race.password:
            raise RequestValidationFailed(
                "This race has no password; a new password is required"
            )

        race.race_name = data.race_name.strip()
        race.description = data.description
        race.start_date = start_date
        race.end_date = end_date
        race.segment_ids = _unique_segment_ids(data.segment_ids)
        race.is_private = True
        race.hide_leaderboard_until_finish = data.hide_leaderboard_until_finish
        race.use_sex_categories = data.use_sex_categories
        await self.session.flush()

        logger.info("Race %s updated by user %s", race.id, athlete_id)
        return race_response(race, athlete_id, utcnow())

    async def delete_race(self, race_id: int, athlete_id: int) -> None:
        """Delete a race with its participants and their segment results."""
        race = await self.get_race_model(race_id)
        ensure_organiser(race, athlete_id, "delete")

        await self.race_repo.delete(race.id)
        logger.info("Race %s deleted by user %s", race_id, athlete_id)


def _validate_race_fields(data: RaceCreate) -> tuple[datetime, datetime]:
    """Check the fields shared by create and edit; return UTC start/end."""
    if data.race_name is None or not data.race_name.strip():
        raise RequestValidationFailed("Race name is required")
    if data.start_date is None or data.end_date is None:
        raise RequestValidationFailed("Start date and end date are required")
    if not data.segment_ids:
        raise RequestValidationFailed("At least one segment ID is required")

    start_date = ensure_utc(data.start_date)
    end_date = ensure_utc(data.end_date)
    if end_date <= start_date:
        raise RequestValidationFailed("End date must be after start date")
    return start_date, end_date


def _unique_segment_ids(segment_ids: list[int]) -> list[int]:
    """Drop duplicate segment ids, keeping the first occurrence."""
    return list(dict.fromkeys(segment_ids))
