"""Race schemas."""

from datetime import datetime

from pydantic import Field, model_serializer

from app.schemas.common import BaseSchema, RaceStatusEnum
from app.schemas.participant import ParticipantSummary
from app.schemas.user import UserSummary


class RaceCreate(BaseSchema):
    """Schema for creating a race.

    Required-ness and ordering are checked by RaceService so that every rule
    violation yields the same VALIDATION_ERROR response.
    """

    race_name: str | None = Field(None, max_length=200, description="Race name")
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    segment_ids: list[int] | None = None
    password: str | None = Field(None, max_length=100)
    hide_leaderboard_until_finish: bool = False
    use_sex_categories: bool = False


class RaceUpdate(RaceCreate):
    """Schema for editing a race. An omitted password keeps the current one."""

    pass


class RaceResponse(BaseSchema):
    """Race response schema.

    ``participants`` is only populated for detail views. ``password`` is only
    present for the organiser and is dropped from the payload otherwise.
    """

    id: int
    race_name: str
    description: str | None = None
    start_date: datetime
    end_date: datetime
    segment_ids: list[int]
    organiser: UserSummary | None = None
    is_private: bool
    hide_leaderboard_until_finish: bool = False
    use_sex_categories: bool = False
    status: RaceStatusEnum
    participant_count: int = 0
    participants: list[ParticipantSummary] | None = None
    password: str | None = None

    @model_serializer(mode="wrap")
    def _drop_hidden_password(self, handler):
        data = handler(self)
        if self.password is None:
            data.pop("password", None)
        return data


class RaceListResponse(BaseSchema):
    """Race list response schema."""

    items: list[RaceResponse]
    total: int
