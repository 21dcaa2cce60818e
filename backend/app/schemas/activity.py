"""Strava activity schemas."""

from pydantic import Field

from app.schemas.common import BaseSchema


class StravaActivityResponse(BaseSchema):
    """An activity the caller may submit to a race."""

    id: int
    name: str
    start_date_local: str
    distance: float = 0.0  # meters
    elapsed_time: int = 0  # seconds
    type: str


class SubmitActivityRequest(BaseSchema):
    """Body of an activity submission."""

    activity_id: int = Field(..., gt=0, description="Strava activity ID")
