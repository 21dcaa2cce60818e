"""Data access repositories."""

from app.repositories.base import BaseRepository
from app.repositories.participant_repository import ParticipantRepository
from app.repositories.race_repository import RaceRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RaceRepository",
    "ParticipantRepository",
]
