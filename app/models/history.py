"""ExerciseHistory model - immutable per-exercise, per-workout performance snapshot."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, LargeBinary, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.schemas.history import HistoricalSet, decode_historical_sets, encode_historical_sets


class ExerciseHistory(Base):
    """Sets of one exercise as performed in one completed workout.

    Written once when the workout is completed and never updated afterwards.
    The sets live in ``sets_data`` as an encoded blob; ``sets`` decodes them.
    """

    __tablename__ = "exercise_history"
    __table_args__ = (
        Index("ix_exercise_history_name_date", "exercise_name", "workout_date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    workout_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    sets_data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False, default=b"[]")
    workout_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=True, index=True
    )

    workout: Mapped["Workout | None"] = relationship("Workout", back_populates="history")

    def __init__(self, sets: list[HistoricalSet] | None = None, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs["sets_data"] = encode_historical_sets(sets or [])
        super().__init__(**kwargs)

    @property
    def sets(self) -> list[HistoricalSet]:
        return decode_historical_sets(self.sets_data)

    @property
    def total_volume(self) -> float:
        return sum(s.volume for s in self.sets)

    @property
    def best_set(self) -> HistoricalSet | None:
        sets = self.sets
        if not sets:
            return None
        return max(sets, key=lambda s: s.volume)

    @property
    def average_weight(self) -> float:
        sets = self.sets
        if not sets:
            return 0.0
        return sum(s.weight for s in sets) / len(sets)
