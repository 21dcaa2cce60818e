"""Leaderboard schemas."""

from pydantic import Field

from app.schemas.common import BaseSchema, RaceStatusEnum
from app.schemas.participant import SegmentResultResponse
from app.schemas.user import UserSummary


class LeaderboardEntry(BaseSchema):
    """One participant's row; ``rank`` is None for DNF or hidden rows."""

    rank: int | None = None
    participant_id: int
    user: UserSummary
    segment_times: list[SegmentResultResponse] = Field(default_factory=list)
    total_time_seconds: int | None = None
    completed_all_segments: bool = False
    times_hidden: bool = False


class LeaderboardCategory(BaseSchema):
    """A ranked group ("Overall", or "M"/"F"/"Other" with sex categories)."""

    name: str
    entries: list[LeaderboardEntry] = Field(default_factory=list)


class LeaderboardResponse(BaseSchema):
    """Leaderboard for a race as seen by the caller."""

    race_id: int
    status: RaceStatusEnum
    categories: list[LeaderboardCategory] = Field(default_factory=list)
