"""Business logic services."""

from app.services.activity_service import ActivityService
from app.services.leaderboard_service import LeaderboardService
from app.services.participant_service import ParticipantService
from app.services.race_service import RaceService
from app.services.user_service import UserService

__all__ = [
    "RaceService",
    "ParticipantService",
    "ActivityService",
    "LeaderboardService",
    "UserService",
]
