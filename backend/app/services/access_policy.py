"""Who may do what with a race, and who may see which numbers."""

import logging
from datetime import datetime

from app.exceptions import ForbiddenError, UnauthenticatedError
from app.models import Participant, Race
from app.schemas import RaceStatusEnum
from app.utils import ensure_utc

logger = logging.getLogger(__name__)


def is_organiser(race: Race, athlete_id: int | None) -> bool:
    return athlete_id is not None and race.organiser_id == athlete_id


def ensure_organiser(race: Race, athlete_id: int, action: str) -> None:
    """Raise ForbiddenError unless the caller organises the race."""
    if not is_organiser(race, athlete_id):
        logger.warning(
            "User %s attempted to %s race %s owned by %s",
            athlete_id, action, race.id, race.organiser_id,
        )
        raise ForbiddenError(f"You are not authorized to {action} this race.")


def ensure_can_remove_participant(
    race: Race, participant: Participant, athlete_id: int
) -> None:
    """The organiser may remove anyone; a participant may remove themself."""
    if is_organiser(race, athlete_id) or participant.user_id == athlete_id:
        return
    logger.warning(
        "User %s attempted to remove participant %s from race %s",
        athlete_id, participant.id, race.id,
    )
    raise ForbiddenError("You are not authorized to manage participants for this race.")


def check_join_password(race: Race, password: str | None, athlete_id: int) -> None:
    """Private races require the exact stored password."""
    if not race.is_private:
        return
    if password is None or race.password is None or password != race.password:
        logger.warning("Incorrect password attempt for race %s by user %s", race.id, athlete_id)
        raise UnauthenticatedError("Incorrect password for private race.")


def race_status(race: Race, now: datetime) -> RaceStatusEnum:
    if now < ensure_utc(race.start_date):
        return RaceStatusEnum.UPCOMING
    if now > ensure_utc(race.end_date):
        return RaceStatusEnum.FINISHED
    return RaceStatusEnum.ONGOING


def has_finished(race: Race, now: datetime) -> bool:
    return ensure_utc(race.end_date) < now


def can_view_times(
    race: Race, participant: Participant, viewer_id: int | None, now: datetime
) -> bool:
    """Whether ``viewer_id`` may see ``participant``'s segment times.

    Only applied to outward responses; stored results always hold real values.
    """
    return (
        is_organiser(race, viewer_id)
        or has_finished(race, now)
        or not race.hide_leaderboard_until_finish
        or (viewer_id is not None and participant.user_id == viewer_id)
    )


def can_view_password(race: Race, viewer_id: int | None) -> bool:
    return is_organiser(race, viewer_id)
