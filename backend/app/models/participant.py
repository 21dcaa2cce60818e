"""Participant model."""

from sqlalchemy import BigInteger, Boolean, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import TimestampMixin


class Participant(Base, TimestampMixin):
    """A user's membership in a race (one row per race/user pair)."""

    __tablename__ = "participants"
    __table_args__ = (
        UniqueConstraint("race_id", "user_id", name="uq_participant_race_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("races.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(BigInteger, ForeignKey("users.id"), nullable=False)
    submitted_ride: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    submitted_activity_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    # Relationships
    race = relationship("Race", back_populates="participants")
    user = relationship("User", lazy="selectin")
    segment_results = relationship(
        "SegmentResult",
        back_populates="participant",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="SegmentResult.id",
    )

    def __repr__(self) -> str:
        return (
            f"<Participant(id={self.id}, race_id={self.race_id}, user_id={self.user_id})>"
        )
