"""Race model."""

from datetime import datetime

from sqlalchemy import JSON, BigInteger, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import TimestampMixin


class Race(Base, TimestampMixin):
    """Race table model.

    Participants (and through them segment results) are loaded eagerly with the
    race and deleted with it.
    """

    __tablename__ = "races"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    race_name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    segment_ids: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    organiser_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("users.id"), nullable=False
    )
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    password: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Display options
    hide_leaderboard_until_finish: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    use_sex_categories: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    organiser = relationship("User", lazy="selectin")
    participants = relationship(
        "Participant",
        back_populates="race",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Participant.id",
    )

    def __repr__(self) -> str:
        return f"<Race(id={self.id}, race_name='{self.race_name}')>"
