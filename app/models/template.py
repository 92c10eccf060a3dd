"""Workout template - reusable session blueprint."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import (
    AVERAGE_REST_BETWEEN_SETS,
    AVERAGE_SECONDS_PER_SET,
    DEFAULT_REST_SECONDS,
    DEFAULT_TARGET_REPS,
    DEFAULT_TARGET_SETS,
)
from app.core.timeutils import utcnow
from app.db.base import Base


class WorkoutTemplate(Base):
    """Saved workout structure (name + ordered target exercises)."""

    __tablename__ = "workout_templates"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, default="")
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    category: Mapped[str] = mapped_column(String(100), default="Total Body")
    created_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    last_used: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    times_used: Mapped[int] = mapped_column(Integer, default=0)

    exercises: Mapped[list["TemplateExercise"]] = relationship(
        "TemplateExercise",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateExercise.order",
        lazy="selectin",
    )

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("description", "")
        kwargs.setdefault("is_custom", False)
        kwargs.setdefault("category", "Total Body")
        kwargs.setdefault("created_date", utcnow())
        kwargs.setdefault("times_used", 0)
        kwargs.setdefault("exercises", [])
        super().__init__(**kwargs)

    @property
    def estimated_duration(self) -> float:
        """Seconds: every target set at average work time plus average rest."""
        total_sets = sum(te.target_sets for te in self.exercises)
        return total_sets * (AVERAGE_SECONDS_PER_SET + AVERAGE_REST_BETWEEN_SETS)


class TemplateExercise(Base):
    """Target exercise in a template."""

    __tablename__ = "template_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workout_templates.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    muscle_group: Mapped[str] = mapped_column(String(100), default="")
    order: Mapped[int] = mapped_column(Integer, default=0)
    target_sets: Mapped[int] = mapped_column(Integer, default=DEFAULT_TARGET_SETS)
    target_reps: Mapped[int] = mapped_column(Integer, default=DEFAULT_TARGET_REPS)
    rest_seconds: Mapped[int] = mapped_column(Integer, default=DEFAULT_REST_SECONDS)
    notes: Mapped[str] = mapped_column(Text, default="")

    template: Mapped["WorkoutTemplate"] = relationship("WorkoutTemplate", back_populates="exercises")

    def __init__(self, **kwargs):
        kwargs.setdefault("id", uuid.uuid4())
        kwargs.setdefault("muscle_group", "")
        kwargs.setdefault("order", 0)
        kwargs.setdefault("target_sets", DEFAULT_TARGET_SETS)
        kwargs.setdefault("target_reps", DEFAULT_TARGET_REPS)
        kwargs.setdefault("rest_seconds", DEFAULT_REST_SECONDS)
        kwargs.setdefault("notes", "")
        super().__init__(**kwargs)
