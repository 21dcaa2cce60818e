"""Strava OAuth2 login routes.

Only the redirect and the code exchange live here; everything after login
works from the athlete id kept in the signed session.
"""

import logging
import secrets
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import SESSION_ATHLETE_KEY, get_strava_fetcher
from app.config import get_settings
from app.database import get_db
from app.exceptions import UnauthenticatedError
from app.fetchers import DataFetcher
from app.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

SESSION_STATE_KEY = "oauth_state"


def build_authorize_url(state: str) -> str:
    """Strava authorize URL; Strava wants comma-separated scopes."""
    settings = get_settings()
    query = urlencode({
        "client_id": settings.strava_client_id,
        "redirect_uri": settings.strava_redirect_uri,
        "response_type": "code",
        "scope": settings.strava_scope,
        "approval_prompt": "force",
        "state": state,
    })
    return f"{settings.strava_authorize_url}?{query}"


@router.get("/login")
async def login(request: Request):
    """Redirect to Strava for authorization."""
    state = secrets.token_urlsafe(16)
    request.session[SESSION_STATE_KEY] = state
    return RedirectResponse(url=build_authorize_url(state), status_code=302)


@router.get("/callback")
async def callback(
    request: Request,
    code: str = Query(..., min_length=1),
    state: str | None = None,
    db: AsyncSession = Depends(get_db),
    fetcher: DataFetcher = Depends(get_strava_fetcher),
):
    """Finish the Strava login: store tokens, open a session, go to the frontend."""
    expected_state = request.session.pop(SESSION_STATE_KEY, None)
    if expected_state is None or state != expected_state:
        logger.warning("OAuth callback with missing or mismatched state")
        raise UnauthenticatedError("Login state mismatch. Please try again.")

    grant = await fetcher.exchange_code(code)
    user = await UserService(db).login(grant)

    request.session[SESSION_ATHLETE_KEY] = user.id
    return RedirectResponse(url=f"{get_settings().frontend_url}/myraces", status_code=302)


@router.post("/logout", status_code=204)
async def logout(request: Request):
    """End the session."""
    request.session.clear()
