"""SQLAlchemy models."""

from app.models.participant import Participant
from app.models.race import Race
from app.models.segment_result import SegmentResult
from app.models.user import User

__all__ = [
    "User",
    "Race",
    "Participant",
    "SegmentResult",
]
