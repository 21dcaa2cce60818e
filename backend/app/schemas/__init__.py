"""Pydantic schemas."""

from app.schemas.activity import StravaActivityResponse, SubmitActivityRequest
from app.schemas.common import BaseSchema, RaceStatusEnum
from app.schemas.leaderboard import (
    LeaderboardCategory,
    LeaderboardEntry,
    LeaderboardResponse,
)
from app.schemas.participant import (
    JoinRaceRequest,
    ParticipantSummary,
    SegmentResultResponse,
)
from app.schemas.race import (
    RaceCreate,
    RaceListResponse,
    RaceResponse,
    RaceUpdate,
)
from app.schemas.user import CurrentUserResponse, UserSummary

__all__ = [
    # Common
    "BaseSchema",
    "RaceStatusEnum",
    # User
    "UserSummary",
    "CurrentUserResponse",
    # Race
    "RaceCreate",
    "RaceUpdate",
    "RaceResponse",
    "RaceListResponse",
    # Participant
    "ParticipantSummary",
    "SegmentResultResponse",
    "JoinRaceRequest",
    # Activity
    "StravaActivityResponse",
    "SubmitActivityRequest",
    # Leaderboard
    "LeaderboardEntry",
    "LeaderboardCategory",
    "LeaderboardResponse",
]
