"""Participant schemas."""

from pydantic import Field

from app.schemas.common import BaseSchema
from app.schemas.user import UserSummary


class SegmentResultResponse(BaseSchema):
    """One segment time; ``elapsed_time_seconds`` is None when hidden."""

    segment_id: int
    segment_name: str | None = None
    elapsed_time_seconds: int | None = None


class ParticipantSummary(BaseSchema):
    """Participant as seen by a given viewer."""

    id: int
    user: UserSummary
    submitted_ride: bool = False
    submitted_activity_id: int | None = None
    segment_results: list[SegmentResultResponse] = Field(default_factory=list)


class JoinRaceRequest(BaseSchema):
    """Body of a join request."""

    password: str | None = None
