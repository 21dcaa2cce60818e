"""Strava API fetcher."""

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from app.config import get_settings
from app.exceptions import UpstreamError
from app.fetchers.base import ActivityInfo, DataFetcher, TokenGrant
from app.utils import is_number

logger = logging.getLogger(__name__)
settings = get_settings()

RIDE_TYPE = "ride"


def parse_activity(item: Any) -> ActivityInfo | None:
    """Map one entry of /athlete/activities to ActivityInfo.

    Returns None for non-ride activities and for entries missing id, name,
    start_date_local or type.
    """
    if not isinstance(item, dict):
        logger.warning("Skipping non-object activity entry: %r", item)
        return None

    activity_type = item.get("type")
    if not isinstance(activity_type, str):
        logger.warning("Skipping activity with missing type: %s", item.get("id"))
        return None
    if activity_type.lower() != RIDE_TYPE:
        return None

    activity_id = item.get("id")
    name = item.get("name")
    start_date_local = item.get("start_date_local")
    if (
        not is_number(activity_id)
        or not isinstance(name, str)
        or not isinstance(start_date_local, str)
    ):
        logger.warning("Skipping activity with invalid fields: %s", activity_id)
        return None

    distance = item.get("distance")
    if not is_number(distance):
        if distance is not None:
            logger.warning("Activity %s has non-numeric distance %r", activity_id, distance)
        distance = 0.0

    elapsed_time = item.get("elapsed_time")
    if not is_number(elapsed_time):
        if elapsed_time is not None:
            logger.warning(
                "Activity %s has non-numeric elapsed_time %r", activity_id, elapsed_time
            )
        elapsed_time = 0

    return ActivityInfo(
        id=int(activity_id),
        name=name,
        start_date_local=start_date_local,
        type=activity_type,
        distance=float(distance),
        elapsed_time=int(elapsed_time),
    )


class StravaFetcher(DataFetcher):
    """Data fetcher for the Strava v3 API.

    Every call authenticates with the athlete's cached bearer token. Failures
    surface immediately as UpstreamError; there are no retries.
    """

    async def fetch_activities(
        self,
        access_token: str,
        after: datetime,
        before: datetime,
        per_page: int = 50,
    ) -> list[ActivityInfo]:
        """
        Fetch ride activities started within [after, before].

        Args:
            access_token: Athlete's Strava access token
            after: Window start
            before: Window end
            per_page: Maximum number of activities to request

        Returns:
            List of ActivityInfo, rides only
        """
        payload = await self._get_json(
            "/athlete/activities",
            access_token,
            params={
                "after": int(after.timestamp()),
                "before": int(before.timestamp()),
                "per_page": per_page,
            },
        )
        if payload is None:
            return []
        if not isinstance(payload, list):
            logger.error("Unexpected activity list payload type: %s", type(payload).__name__)
            raise UpstreamError("Strava returned an unexpected activity list.")

        activities = []
        for item in payload:
            info = parse_activity(item)
            if info is not None:
                activities.append(info)
        return activities

    async def fetch_activity(self, activity_id: int, access_token: str) -> dict[str, Any]:
        """
        Fetch one activity with its segment efforts.

        Args:
            activity_id: Strava activity ID
            access_token: Athlete's Strava access token

        Returns:
            The raw activity JSON object
        """
        payload = await self._get_json(f"/activities/{activity_id}", access_token)
        if not isinstance(payload, dict) or not payload:
            logger.error("Empty activity detail returned for activity %s", activity_id)
            raise UpstreamError("Fetched activity details from Strava are empty.")
        return payload

    async def exchange_code(self, code: str) -> TokenGrant:
        """Exchange an authorization code at the Strava token endpoint."""
        try:
            response = await self.client.post(
                settings.strava_token_url,
                data={
                    "client_id": settings.strava_client_id,
                    "client_secret": settings.strava_client_secret,
                    "code": code,
                    "grant_type": "authorization_code",
                },
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("Strava token exchange failed with status %s", e.response.status_code)
            raise UpstreamError("Strava token exchange failed.") from e
        except (httpx.RequestError, ValueError) as e:
            logger.error("Strava token exchange failed: %s", e)
            raise UpstreamError("Strava token exchange failed.") from e

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        athlete = payload.get("athlete") if isinstance(payload, dict) else None
        if not access_token or not isinstance(athlete, dict) or athlete.get("id") is None:
            logger.error("Strava token response is missing the access token or athlete")
            raise UpstreamError("Strava token response is incomplete.")

        expires_at = payload.get("expires_at")
        return TokenGrant(
            access_token=access_token,
            refresh_token=payload.get("refresh_token"),
            expires_at=(
                datetime.fromtimestamp(expires_at, tz=timezone.utc)
                if is_number(expires_at)
                else None
            ),
            athlete=athlete,
        )

    async def _get_json(
        self,
        path: str,
        access_token: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """GET a Strava API path; None when the body is empty."""
        try:
            response = await self.client.get(
                path,
                params=params,
                headers={"Authorization": f"Bearer {access_token}"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Strava API error %s for %s", status, path)
            raise UpstreamError(f"Strava API request failed with status {status}.") from e
        except httpx.RequestError as e:
            logger.error("Strava API connection error for %s: %s", path, e)
            raise UpstreamError("Could not reach the Strava API.") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("Strava API returned invalid JSON for %s", path)
            raise UpstreamError("Strava API returned an invalid response.") from e
