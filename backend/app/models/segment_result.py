"""Participant segment result model."""

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base
from app.models.base import TimestampMixin


class SegmentResult(Base, TimestampMixin):
    """One participant's elapsed time on one race segment."""

    __tablename__ = "participant_segment_results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    participant_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("participants.id", ondelete="CASCADE"), nullable=False
    )
    segment_id: Mapped[int] = mapped_column(BigInteger, nullable=False)
    segment_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    elapsed_time_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    participant = relationship("Participant", back_populates="segment_results")

    def __repr__(self) -> str:
        return (
            f"<SegmentResult(id={self.id}, segment_id={self.segment_id}, "
            f"elapsed_time_seconds={self.elapsed_time_seconds})>"
        )
