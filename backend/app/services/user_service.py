"""User service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import UnauthenticatedError
from app.fetchers import TokenGrant
from app.models import User
from app.repositories import UserRepository
from app.schemas import CurrentUserResponse

logger = logging.getLogger(__name__)


class UserService:
    """Service for the user directory."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def login(self, grant: TokenGrant) -> User:
        """Create or refresh the user behind a successful Strava login.

        Profile fields, access token and expiry are overwritten on every login,
        absent values included. A missing refresh token keeps the stored one.
        The display name is only set when the user has none.
        """
        athlete = grant.athlete
        athlete_id = int(athlete["id"])
        first_name = athlete.get("firstname")
        last_name = athlete.get("lastname")

        data = {
            "first_name": first_name,
            "last_name": last_name,
            "profile_picture": athlete.get("profile_medium") or athlete.get("profile"),
            "sex": athlete.get("sex"),
            "city": athlete.get("city"),
            "state": athlete.get("state"),
            "country": athlete.get("country"),
            "access_token": grant.access_token,
            "token_expires_at": grant.expires_at,
        }
        if grant.refresh_token is not None:
            data["refresh_token"] = grant.refresh_token
        existing = await self.user_repo.get(athlete_id)
        if existing is None or not existing.display_name:
            name = " ".join(part for part in (first_name, last_name) if part)
            data["display_name"] = name or f"Athlete {athlete_id}"

        user, created = await self.user_repo.upsert(athlete_id, data)
        if grant.expires_at is None:
            logger.warning("Access token expiry missing for user %s", athlete_id)
        if user.refresh_token is None:
            logger.warning("No refresh token stored for user %s", athlete_id)
        logger.info("%s user %s", "Created" if created else "Updated", athlete_id)
        return user

    async def get_current_user(self, athlete_id: int) -> CurrentUserResponse:
        """Get the caller's own profile."""
        user = await self.user_repo.get(athlete_id)
        if user is None:
            raise UnauthenticatedError("Authenticated user not found. Please log in again.")
        return CurrentUserResponse(
            strava_id=user.id,
            display_name=user.display_name,
            first_name=user.first_name,
            last_name=user.last_name,
            profile_picture=user.profile_picture,
            sex=user.sex,
            city=user.city,
            state=user.state,
            country=user.country,
        )
