"""Live workout session management.

The app assumes a single workout is in progress at a time. That is a
caller-level invariant: ``begin_workout`` reports a second in-progress
workout in the log but does not close or refuse anything.

Mutations on exercises and sets only change the in-memory objects; the
request-scoped session (``get_db``) commits them. ``complete_workout`` flushes
itself so that the completion flag and its history snapshots persist together.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.exceptions import PersistenceError
from app.core.timeutils import utcnow
from app.models.template import WorkoutTemplate
from app.models.workout import Exercise, ExerciseSet, Workout
from app.services import history as history_store
from app.services.aggregation import elapsed_time, total_work_time
from app.services.progression import (
    ProgressionSuggestion,
    evaluate_progression,
    format_previous_performance,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Workouts
# ---------------------------------------------------------------------------


async def get_active_workout(db: AsyncSession) -> Workout | None:
    """Most recently started workout that is not completed."""
    result = await db.execute(
        select(Workout)
        .where(Workout.is_completed.is_(False))
        .order_by(Workout.start_date.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def recent_workouts(
    db: AsyncSession,
    limit: int = 50,
    skip: int = 0,
    completed_only: bool = False,
) -> list[Workout]:
    """Workouts sorted by date, newest first."""
    stmt = select(Workout)
    if completed_only:
        stmt = stmt.where(Workout.is_completed.is_(True))
    stmt = stmt.order_by(Workout.date.desc()).offset(skip).limit(limit)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def _warn_if_active(db: AsyncSession) -> None:
    active = await get_active_workout(db)
    if active is not None:
        logger.warning(
            "Starting a new workout while workout %s (%s) is still in progress",
            active.id,
            active.name,
        )


async def begin_workout(
    db: AsyncSession,
    name: str = "Workout",
    notes: str = "",
    now: datetime | None = None,
) -> Workout:
    await _warn_if_active(db)
    now = now or utcnow()
    workout = Workout(name=name, notes=notes, date=now, start_date=now)
    db.add(workout)
    await db.flush()
    return workout


async def delete_workout(db: AsyncSession, workout: Workout) -> None:
    """Delete a workout with its exercises, sets and history snapshots."""
    await db.delete(workout)
    await db.flush()


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------


def add_exercise(
    workout: Workout,
    name: str,
    muscle_group: str = "",
    target_sets: int | None = None,
    target_reps: int | None = None,
    seed_set: bool = True,
) -> Exercise:
    """Append an exercise at the end of the workout, seeded with one empty set."""
    exercise = Exercise(
        name=name,
        muscle_group=muscle_group,
        order=len(workout.exercises),
        target_sets=target_sets,
        target_reps=target_reps,
    )
    if seed_set:
        exercise.sets.append(ExerciseSet(order=0))
    workout.exercises.append(exercise)
    return exercise


def remove_exercise(workout: Workout, exercise: Exercise) -> None:
    workout.exercises.remove(exercise)


def _reorder(items, ordered_ids: list[uuid.UUID]) -> None:
    by_id = {item.id: item for item in items}
    if set(ordered_ids) != set(by_id) or len(ordered_ids) != len(by_id):
        raise ValueError("ordered ids must list every item exactly once")
    for position, item_id in enumerate(ordered_ids):
        by_id[item_id].order = position


def reorder_exercises(workout: Workout, ordered_ids: list[uuid.UUID]) -> None:
    """Assign ``order`` 0..n-1 following ``ordered_ids``."""
    _reorder(workout.exercises, ordered_ids)


def find_exercise(workout: Workout, exercise_id: uuid.UUID) -> Exercise | None:
    return next((e for e in workout.exercises if e.id == exercise_id), None)


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------


def add_set(exercise: Exercise, reps: int = 0, weight: float = 0.0) -> ExerciseSet:
    """Append a set after the last one; the previous set's weight is kept for comparison."""
    sorted_sets = exercise.sorted_sets
    last = sorted_sets[-1] if sorted_sets else None
    set_ = ExerciseSet(
        reps=reps,
        weight=weight,
        order=(last.order + 1) if last is not None else 0,
        previous_weight=last.weight if last is not None else None,
    )
    exercise.sets.append(set_)
    return set_


def remove_set(exercise: Exercise, set_: ExerciseSet) -> None:
    exercise.sets.remove(set_)


def reorder_sets(exercise: Exercise, ordered_ids: list[uuid.UUID]) -> None:
    _reorder(exercise.sets, ordered_ids)


def find_set(exercise: Exercise, set_id: uuid.UUID) -> ExerciseSet | None:
    return next((s for s in exercise.sets if s.id == set_id), None)


def toggle_set_completion(set_: ExerciseSet) -> bool:
    set_.is_completed = not set_.is_completed
    return set_.is_completed


def start_set_timer(set_: ExerciseSet, now: datetime | None = None) -> None:
    set_.start_timer(now)


def stop_set_timer(set_: ExerciseSet, now: datetime | None = None) -> float:
    return set_.stop_timer(now)


def reset_set_timer(set_: ExerciseSet) -> None:
    set_.reset_timer()


# ---------------------------------------------------------------------------
# Completion
# ---------------------------------------------------------------------------


async def complete_workout(
    db: AsyncSession,
    workout: Workout,
    now: datetime | None = None,
) -> list[tuple[Exercise, ProgressionSuggestion]]:
    """
    Mark the workout completed and snapshot every exercise into history.

    The completion flag and the snapshots are flushed together; if the store
    rejects the write the session is rolled back and PersistenceError is
    raised so the caller can retry. Completing an already completed workout
    records nothing and returns no suggestions.

    Returns the (exercise, suggestion) pairs for exercises that earned one.
    """
    if workout.is_completed:
        return []

    settings = get_settings()
    now = now or utcnow()
    workout.duration = elapsed_time(workout, now, cap_seconds=settings.elapsed_time_cap_seconds)
    workout.saved_work_time = total_work_time(workout, now)
    workout.is_completed = True

    suggestions: list[tuple[Exercise, ProgressionSuggestion]] = []
    for exercise in workout.sorted_exercises:
        suggestion = evaluate_progression(exercise)
        if suggestion is not None:
            exercise.suggestion_note = suggestion.message
            suggestions.append((exercise, suggestion))

    try:
        history_store.record_workout_snapshots(db, workout)
        await db.flush()
    except SQLAlchemyError as e:
        logger.exception("Completing workout %s failed", workout.id)
        await db.rollback()
        raise PersistenceError("complete workout", str(e)) from e

    logger.info(
        "Workout %s completed: %d exercises, %d suggestions",
        workout.id,
        len(workout.exercises),
        len(suggestions),
    )
    return suggestions


# ---------------------------------------------------------------------------
# Starting from templates / previous workouts
# ---------------------------------------------------------------------------


async def start_from_template(
    db: AsyncSession,
    template: WorkoutTemplate,
    now: datetime | None = None,
) -> Workout:
    """
    New in-progress workout following the template's exercises and targets.

    Each exercise notes the last performance's best set, and every set is
    pre-filled with it as the previous weight/reps to beat.
    """
    await _warn_if_active(db)
    now = now or utcnow()
    workout = Workout(
        name=template.name,
        date=now,
        start_date=now,
        template_id=template.id,
        template_name=template.name,
    )
    template.last_used = now
    template.times_used = (template.times_used or 0) + 1

    for te in sorted(template.exercises, key=lambda t: t.order):
        exercise = Exercise(
            name=te.exercise_name,
            muscle_group=te.muscle_group,
            order=te.order,
            target_sets=te.target_sets,
            target_reps=te.target_reps,
        )
        last = await history_store.last_performance(db, te.exercise_name)
        best = last.best_set if last is not None else None
        if last is not None:
            exercise.previous_best = format_previous_performance(last)
        for i in range(te.target_sets):
            exercise.sets.append(
                ExerciseSet(
                    order=i,
                    previous_weight=best.weight if best is not None else None,
                    previous_reps=best.reps if best is not None else None,
                )
            )
        workout.exercises.append(exercise)

    db.add(workout)
    await db.flush()
    return workout


async def repeat_workout(
    db: AsyncSession,
    source: Workout,
    now: datetime | None = None,
) -> Workout:
    """Copy a past workout's exercises and sets into a new session for comparison."""
    await _warn_if_active(db)
    now = now or utcnow()
    workout = Workout(
        name=source.name,
        date=now,
        start_date=now,
        template_id=source.template_id,
        template_name=source.template_name,
        repeated_from_workout_id=source.id,
    )
    for index, original in enumerate(source.sorted_exercises):
        exercise = Exercise(
            name=original.name,
            muscle_group=original.muscle_group,
            order=index,
            target_sets=original.target_sets,
            target_reps=original.target_reps,
        )
        for original_set in original.sorted_sets:
            exercise.sets.append(
                ExerciseSet(
                    reps=original_set.reps,
                    weight=original_set.weight,
                    order=original_set.order,
                    is_completed=False,
                    previous_weight=original_set.weight,
                    previous_reps=original_set.reps,
                )
            )
        workout.exercises.append(exercise)

    db.add(workout)
    await db.flush()
    return workout
