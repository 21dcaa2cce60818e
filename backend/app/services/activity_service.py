"""Activity listing and submission (segment matching)."""

import logging
from collections.abc import Iterable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.exceptions import (
    ForbiddenError,
    NotFoundError,
    RequestValidationFailed,
    UnauthenticatedError,
)
from app.fetchers import DataFetcher
from app.models import SegmentResult, User
from app.repositories import ParticipantRepository, RaceRepository
from app.schemas import RaceResponse, StravaActivityResponse
from app.services.responses import race_response
from app.utils import ensure_utc, is_number, utcnow

logger = logging.getLogger(__name__)

UNNAMED_SEGMENT = "Unnamed Segment"


def match_segment_efforts(
    efforts: Iterable[Any],
    race_segment_ids: Iterable[int],
    activity_id: int | None = None,
) -> list[SegmentResult]:
    """Build SegmentResults for the efforts on race segments.

    Malformed efforts (no segment object, non-numeric segment id or elapsed
    time) are logged and skipped. Efforts on segments outside the race are
    ignored.
    """
    wanted = {int(segment_id) for segment_id in race_segment_ids}
    results = []

    for effort in efforts:
        if not isinstance(effort, dict):
            logger.warning("Skipping malformed segment effort in activity %s", activity_id)
            continue

        segment = effort.get("segment")
        if not isinstance(segment, dict):
            logger.warning("Segment effort in activity %s has no segment object", activity_id)
            continue

        segment_id = segment.get("id")
        elapsed_time = effort.get("elapsed_time")
        if not is_number(segment_id) or not is_number(elapsed_time):
            logger.warning(
                "Segment effort in activity %s has invalid id %r or elapsed_time %r",
                activity_id, segment_id, elapsed_time,
            )
            continue

        segment_id = int(segment_id)
        if segment_id not in wanted:
            continue

        name = segment.get("name")
        results.append(SegmentResult(
            segment_id=segment_id,
            segment_name=name if isinstance(name, str) else UNNAMED_SEGMENT,
            elapsed_time_seconds=int(elapsed_time),
        ))

    return results


class ActivityService:
    """Service for listing and submitting Strava activities."""

    def __init__(self, session: AsyncSession, fetcher: DataFetcher):
        self.session = session
        self.fetcher = fetcher
        self.race_repo = RaceRepository(session)
        self.participant_repo = ParticipantRepository(session)

    async def list_activities(
        self, race_id: int, user: User
    ) -> list[StravaActivityResponse]:
        """List the user's rides within the race window."""
        race = await self.race_repo.get(race_id)
        if race is None:
            raise NotFoundError(f"Race not found with ID: {race_id}")

        activities = await self.fetcher.fetch_activities(
            _access_token(user),
            after=ensure_utc(race.start_date),
            before=ensure_utc(race.end_date),
            per_page=get_settings().activities_per_page,
        )
        return [
            StravaActivityResponse(
                id=a.id,
                name=a.name,
                start_date_local=a.start_date_local,
                distance=a.distance,
                elapsed_time=a.elapsed_time,
                type=a.type,
            )
            for a in activities
        ]

    async def submit_activity(
        self, race_id: int, user: User, activity_id: int
    ) -> RaceResponse:
        """Score an activity for the user's participation in a race.

        Results from any earlier submission are replaced, not appended. The
        activity is fetched before anything is touched, so an upstream failure
        leaves the previous results in place.
        """
        race = await self.race_repo.get(race_id)
        if race is None:
            raise NotFoundError(f"Race not found with ID: {race_id}")

        participant = await self.participant_repo.get_by_race_and_user(race.id, user.id)
        if participant is None:
            logger.warning(
                "User %s tried to submit activity %s to race %s without joining",
                user.id, activity_id, race.id,
            )
            raise ForbiddenError("You are not a participant in this race.")

        activity = await self.fetcher.fetch_activity(activity_id, _access_token(user))
        efforts = activity.get("segment_efforts")
        if not isinstance(efforts, list):
            logger.warning("Activity %s has no segment_efforts list", activity_id)
            raise RequestValidationFailed(
                "Selected activity does not contain valid segment efforts."
            )

        results = match_segment_efforts(efforts, race.segment_ids, activity_id)
        if not results:
            logger.warning(
                "Activity %s from user %s matched no segments of race %s",
                activity_id, user.id, race.id,
            )

        participant.segment_results.clear()
        participant.segment_results.extend(results)
        participant.submitted_ride = True
        participant.submitted_activity_id = activity_id
        await self.session.flush()

        logger.info(
            "Activity %s for user %s in race %s scored %d segment(s)",
            activity_id, user.id, race.id, len(results),
        )
        return race_response(race, user.id, utcnow())


def _access_token(user: User) -> str:
    if not user.access_token:
        logger.warning("No Strava access token stored for user %s", user.id)
        raise UnauthenticatedError(
            "Strava access token not available. Please re-authenticate."
        )
    return user.access_token
