"""User schemas."""

from pydantic import Field

from app.schemas.common import BaseSchema


class UserSummary(BaseSchema):
    """Public view of a user, embedded in race and participant responses."""

    strava_id: int = Field(..., description="Strava athlete ID")
    display_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_picture: str | None = None
    sex: str | None = None


class CurrentUserResponse(UserSummary):
    """The logged-in user's own profile."""

    city: str | None = None
    state: str | None = None
    country: str | None = None
