"""Workout, Exercise and ExerciseSet models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.enums import MuscleGroup
from app.core.timeutils import seconds_between, utcnow
from app.db.base import Base


class Workout(Base):
    """A logged (or in-progress) training session.

    ``duration`` is written on completion (elapsed wall time, capped);
    ``saved_work_time`` is the sum of set work timers at that moment.
    """

    __tablename__ = "workouts"
    __table_args__ = (
        Index("ix_workouts_date", "date"),
        Index("ix_workouts_is_completed", "is_completed"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    name: Mapped[str] = mapped_column(String(255), default="Workout")
    notes: Mapped[str] = mapped_column(Text, default="")
    duration: Mapped[float] = mapped_column(Float, default=0.0)  # seconds
    saved_work_time: Mapped[float] = mapped_column(Float, default=0.0)  # seconds
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    template_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    repeated_from_workout_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)

    exercises: Mapped[list["Exercise"]] = relationship(
        "Exercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="Exercise.order",
        lazy="selectin",
    )
    history: Mapped[list["ExerciseHistory"]] = relationship(
        "ExerciseHistory", back_populates="workout", cascade="all, delete-orphan"
    )

    def __init__(self, **kwargs):
        # Column defaults only fire on INSERT; derived properties need them before flush.
        kwargs.setdefault("id", uuid.uuid4())
        now = utcnow()
        kwargs.setdefault("date", now)
        kwargs.setdefault("start_date", now)
        kwargs.setdefault("name", "Workout")
        kwargs.setdefault("notes", "")
        kwargs.setdefault("duration", 0.0)
        kwargs.setdefault("saved_work_time", 0.0)
        kwargs.setdefault("is_completed", False)
        kwargs.setdefault("exercises", [])
        kwargs.setdefault("history", [])
        super().__init__(**kwargs)

    @property
    def used_template(self) -> bool:
        return self.template_id is not None

    @property
    def sorted_exercises(self) -> list["Exercise"]:
        return sorted(self.exercises, key=lambda e: e.order)


class Exercise(Base):
    """One movement performed within a workout."""

    __tablename__ = "exercises"
    __table_args__ = (Index("ix_exercises_workout_id", "workout_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    muscle_group: Mapped[str] = mapped_column(String(100), default="")
    order: Mapped[int] = mapped_column(Integer, default=0)
    target_sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    previous_best: Mapped[str | None] = mapped_column(String(255), nullable=True)  # e.g. "225 lbs × 5"
    suggestion_note: Mapped[str | None] = mapped_column(String(500), nullable=True)
    duration: Mapped[float] = mapped_column(Float, default=0.0)  # cardio only, seconds

    workout: Mapped["Workout"] = relationship("Workout", back_populates="exercises")
    sets: Mapped[list["ExerciseSet"]] = relationship(
        "ExerciseSet",
        back_populates="exercise",
        cascade="all, delete-orphan",
        order_by="ExerciseSet.order",
        lazy="selectin",
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("muscle_group", "")
        kwargs.setdefault("order", 0)
        kwargs.setdefault("duration", 0.0)
        kwargs.setdefault("sets", [])
        super().__init__(**kwargs)

    @property
    def is_cardio(self) -> bool:
        return (self.muscle_group or "").lower() == MuscleGroup.CARDIO.value.lower()

    @property
    def sorted_sets(self) -> list["ExerciseSet"]:
        return sorted(self.sets, key=lambda s: s.order)

    @property
    def best_set(self) -> "ExerciseSet | None":
        """Set with the highest volume (first one wins a tie)."""
        if not self.sets:
            return None
        return max(self.sets, key=lambda s: s.volume)

    @property
    def has_progression(self) -> bool:
        """Every set completed at or above target reps. False when no target is set."""
        if self.target_reps is None:
            return False
        return all(s.is_completed and s.reps >= self.target_reps for s in self.sets)


@dataclass(frozen=True)
class TimerIdle:
    """No work timer open on the set."""


@dataclass(frozen=True)
class TimerRunning:
    """Work timer open since ``started_at``; elapsed time is not yet in ``work_time``."""

    started_at: datetime

    def elapsed(self, now: datetime) -> float:
        return max(0.0, seconds_between(self.started_at, now))


TimerState = TimerIdle | TimerRunning


class ExerciseSet(Base):
    """One set: reps × weight, completion flag, previous-session snapshot and work timer."""

    __tablename__ = "exercise_sets"
    __table_args__ = (Index("ix_exercise_sets_exercise_id", "exercise_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False
    )
    reps: Mapped[int] = mapped_column(Integer, default=0)
    weight: Mapped[float] = mapped_column(Float, default=0.0)
    order: Mapped[int] = mapped_column(Integer, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    previous_weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    previous_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    work_time: Mapped[float] = mapped_column(Float, default=0.0)  # committed seconds
    # Persisted so an interrupted session resumes the open timer on next read
    work_start_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="sets")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("reps", 0)
        kwargs.setdefault("weight", 0.0)
        kwargs.setdefault("order", 0)
        kwargs.setdefault("is_completed", False)
        kwargs.setdefault("work_time", 0.0)
        super().__init__(**kwargs)

    @property
    def volume(self) -> float:
        return (self.reps or 0) * (self.weight or 0.0)

    @property
    def is_timer_running(self) -> bool:
        return self.work_start_time is not None

    @property
    def timer_state(self) -> TimerState:
        if self.work_start_time is None:
            return TimerIdle()
        return TimerRunning(self.work_start_time)

    def current_work_time(self, now: datetime | None = None) -> float:
        """Committed work time plus the open timer's elapsed time, without committing it."""
        state = self.timer_state
        committed = self.work_time or 0.0
        if isinstance(state, TimerRunning):
            return committed + state.elapsed(now or utcnow())
        return committed

    def start_timer(self, now: datetime | None = None) -> None:
        """Open the work timer. No-op when it is already running."""
        if isinstance(self.timer_state, TimerIdle):
            self.work_start_time = now or utcnow()

    def stop_timer(self, now: datetime | None = None) -> float:
        """Commit the open timer into ``work_time`` and clear it. Returns the committed delta."""
        state = self.timer_state
        if not isinstance(state, TimerRunning):
            return 0.0
        delta = state.elapsed(now or utcnow())
        self.work_time = (self.work_time or 0.0) + delta
        self.work_start_time = None
        return delta

    def reset_timer(self) -> None:
        self.work_start_time = None
        self.work_time = 0.0
