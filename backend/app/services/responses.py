"""Map stored entities to outward responses, applying visibility rules."""

from datetime import datetime

from app.models import Participant, Race, SegmentResult, User
from app.schemas import (
    ParticipantSummary,
    RaceResponse,
    SegmentResultResponse,
    UserSummary,
)
from app.services.access_policy import can_view_password, can_view_times, race_status
from app.utils import ensure_utc


def user_summary(user: User | None) -> UserSummary | None:
    if user is None:
        return None
    return UserSummary(
        strava_id=user.id,
        display_name=user.display_name,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_picture=user.profile_picture,
        sex=user.sex,
    )


def segment_result_response(
    result: SegmentResult, show_time: bool
) -> SegmentResultResponse:
    return SegmentResultResponse(
        segment_id=result.segment_id,
        segment_name=result.segment_name,
        elapsed_time_seconds=result.elapsed_time_seconds if show_time else None,
    )


def participant_summary(
    participant: Participant,
    race: Race,
    viewer_id: int | None,
    now: datetime,
) -> ParticipantSummary:
    show_times = can_view_times(race, participant, viewer_id, now)
    return ParticipantSummary(
        id=participant.id,
        user=user_summary(participant.user),
        submitted_ride=participant.submitted_ride,
        submitted_activity_id=participant.submitted_activity_id,
        segment_results=[
            segment_result_response(r, show_times) for r in participant.segment_results
        ],
    )


def race_response(
    race: Race,
    viewer_id: int | None,
    now: datetime,
    include_participants: bool = True,
) -> RaceResponse:
    """Convert Race model to RaceResponse as seen by ``viewer_id``."""
    participants = None
    if include_participants:
        participants = [
            participant_summary(p, race, viewer_id, now) for p in race.participants
        ]

    return RaceResponse(
        id=race.id,
        race_name=race.race_name,
        description=race.description,
        start_date=ensure_utc(race.start_date),
        end_date=ensure_utc(race.end_date),
        segment_ids=list(race.segment_ids or []),
        organiser=user_summary(race.organiser),
        is_private=race.is_private,
        hide_leaderboard_until_finish=race.hide_leaderboard_until_finish,
        use_sex_categories=race.use_sex_categories,
        status=race_status(race, now),
        participant_count=len(race.participants),
        participants=participants,
        password=race.password if can_view_password(race, viewer_id) else None,
    )
