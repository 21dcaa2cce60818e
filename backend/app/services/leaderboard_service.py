"""Leaderboard service."""

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from app.models import Participant, Race
from app.repositories import RaceRepository
from app.schemas import LeaderboardCategory, LeaderboardEntry, LeaderboardResponse
from app.services.access_policy import can_view_times, race_status
from app.services.responses import segment_result_response, user_summary
from app.utils import utcnow

OVERALL = "Overall"
SEX_CATEGORIES = ("M", "F")
OTHER = "Other"


def _entry(
    participant: Participant, race: Race, viewer_id: int | None, now: datetime
) -> LeaderboardEntry:
    show_times = can_view_times(race, participant, viewer_id, now)
    by_segment = {r.segment_id: r for r in participant.segment_results}

    segment_times = [
        segment_result_response(by_segment[segment_id], show_times)
        for segment_id in race.segment_ids
        if segment_id in by_segment
    ]
    completed = bool(race.segment_ids) and all(
        segment_id in by_segment
        and by_segment[segment_id].elapsed_time_seconds is not None
        for segment_id in race.segment_ids
    )
    total = None
    if completed and show_times:
        total = sum(by_segment[s].elapsed_time_seconds for s in race.segment_ids)

    return LeaderboardEntry(
        participant_id=participant.id,
        user=user_summary(participant.user),
        segment_times=segment_times,
        total_time_seconds=total,
        completed_all_segments=completed,
        times_hidden=not show_times,
    )


def _rank(entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """Rank visible finishers by total time; hidden and DNF rows follow unranked."""
    finishers = sorted(
        (e for e in entries if e.total_time_seconds is not None),
        key=lambda e: (e.total_time_seconds, e.participant_id),
    )
    hidden = [e for e in entries if e.completed_all_segments and e.total_time_seconds is None]
    dnf = [e for e in entries if not e.completed_all_segments]

    for position, entry in enumerate(finishers, 1):
        entry.rank = position
    return finishers + hidden + dnf


def _category_of(participant: Participant) -> str:
    sex = (participant.user.sex or "").upper() if participant.user else ""
    return sex if sex in SEX_CATEGORIES else OTHER


def build_leaderboard(
    race: Race, viewer_id: int | None, now: datetime
) -> LeaderboardResponse:
    """Rank the participants who submitted a ride, as seen by ``viewer_id``."""
    submitted = [p for p in race.participants if p.submitted_ride]

    if race.use_sex_categories:
        names = [*SEX_CATEGORIES, OTHER]
        groups: dict[str, list[LeaderboardEntry]] = {name: [] for name in names}
        for participant in submitted:
            groups[_category_of(participant)].append(_entry(participant, race, viewer_id, now))
    else:
        names = [OVERALL]
        groups = {OVERALL: [_entry(p, race, viewer_id, now) for p in submitted]}

    return LeaderboardResponse(
        race_id=race.id,
        status=race_status(race, now),
        categories=[
            LeaderboardCategory(name=name, entries=_rank(groups[name])) for name in names
        ],
    )


class LeaderboardService:
    """Service for race leaderboards."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.race_repo = RaceRepository(session)

    async def get_leaderboard(self, race_id: int, viewer_id: int) -> LeaderboardResponse:
        """Get the leaderboard of a race."""
        race = await self.race_repo.get(race_id)
        if race is None:
            raise NotFoundError(f"Race not found with ID: {race_id}")
        return build_leaderboard(race, viewer_id, utcnow())
