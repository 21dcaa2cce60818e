"""API routers."""

from app.api.activities import router as activities_router
from app.api.auth import router as auth_router
from app.api.leaderboard import router as leaderboard_router
from app.api.participants import router as participants_router
from app.api.races import router as races_router
from app.api.users import router as users_router

__all__ = [
    "races_router",
    "participants_router",
    "activities_router",
    "leaderboard_router",
    "auth_router",
    "users_router",
]
