"""Workout session endpoints: workouts, their exercises and sets, timers and completion."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.constants import MAX_EXERCISES_PER_SESSION, MAX_SETS_PER_EXERCISE_PER_SESSION
from app.db.session import get_db
from app.models.workout import Exercise, ExerciseSet, Workout
from app.schemas.workout import (
    ExerciseCreate,
    ExerciseRead,
    ExerciseSetCreate,
    ExerciseSetRead,
    ExerciseSetUpdate,
    ExerciseUpdate,
    ProgressionSuggestionRead,
    ReorderRequest,
    WorkoutCompletionRead,
    WorkoutCreate,
    WorkoutRead,
    WorkoutSummaryRead,
    WorkoutUpdate,
)
from app.services import workout_session
from app.services.aggregation import (
    elapsed_time,
    formatted_duration,
    total_sets,
    total_volume,
    total_work_time,
)

router = APIRouter()


async def _get_workout(db: AsyncSession, workout_id: uuid.UUID) -> Workout:
    result = await db.execute(select(Workout).where(Workout.id == workout_id))
    workout = result.scalar_one_or_none()
    if not workout:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


def _get_exercise(workout: Workout, exercise_id: uuid.UUID) -> Exercise:
    exercise = workout_session.find_exercise(workout, exercise_id)
    if not exercise:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


def _get_set(exercise: Exercise, set_id: uuid.UUID) -> ExerciseSet:
    set_ = workout_session.find_set(exercise, set_id)
    if not set_:
        raise HTTPException(status_code=404, detail="Set not found")
    return set_


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
    completed_only: bool = False,
):
    """Recent workouts, newest first."""
    workouts = await workout_session.recent_workouts(
        db, limit=limit, skip=skip, completed_only=completed_only
    )
    return [WorkoutRead.model_validate(w) for w in workouts]


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    db: AsyncSession = Depends(get_db),
):
    """Start a new workout."""
    workout = await workout_session.begin_workout(db, name=payload.name, notes=payload.notes)
    return WorkoutRead.model_validate(workout)


@router.get("/active", response_model=WorkoutRead | None)
async def get_active_workout(db: AsyncSession = Depends(get_db)):
    """The workout currently in progress, or null."""
    workout = await workout_session.get_active_workout(db)
    return WorkoutRead.model_validate(workout) if workout else None


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a workout with its exercises and sets."""
    return WorkoutRead.model_validate(await _get_workout(db, workout_id))


@router.patch("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Rename, edit notes or re-date a workout."""
    workout = await _get_workout(db, workout_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(workout, k, v)
    await db.flush()
    return WorkoutRead.model_validate(workout)


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a workout with its exercises, sets and history."""
    workout = await _get_workout(db, workout_id)
    await workout_session.delete_workout(db, workout)
    return None


@router.get("/{workout_id}/summary", response_model=WorkoutSummaryRead)
async def workout_summary(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Volume, set count, elapsed and worked time for one workout."""
    workout = await _get_workout(db, workout_id)
    settings = get_settings()
    return WorkoutSummaryRead(
        workout_id=workout.id,
        total_volume=total_volume(workout),
        total_sets=total_sets(workout),
        elapsed_time=elapsed_time(workout, cap_seconds=settings.elapsed_time_cap_seconds),
        total_work_time=total_work_time(workout),
        formatted_duration=formatted_duration(workout),
    )


@router.post("/{workout_id}/complete", response_model=WorkoutCompletionRead)
async def complete_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Finish the workout, record exercise history and return progression suggestions."""
    workout = await _get_workout(db, workout_id)
    suggestions = await workout_session.complete_workout(db, workout)
    return WorkoutCompletionRead(
        workout=WorkoutRead.model_validate(workout),
        suggestions=[
            ProgressionSuggestionRead(
                exercise_id=exercise.id,
                exercise_name=exercise.name,
                type=s.type,
                amount=s.amount,
                message=s.message,
            )
            for exercise, s in suggestions
        ],
    )


@router.post("/{workout_id}/repeat", response_model=WorkoutRead, status_code=201)
async def repeat_workout(
    workout_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Start a new workout with the same exercises and sets as this one."""
    source = await _get_workout(db, workout_id)
    workout = await workout_session.repeat_workout(db, source)
    return WorkoutRead.model_validate(workout)


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------


@router.post("/{workout_id}/exercises", response_model=ExerciseRead, status_code=201)
async def add_exercise(
    workout_id: uuid.UUID,
    payload: ExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Append an exercise (seeded with one empty set)."""
    workout = await _get_workout(db, workout_id)
    if len(workout.exercises) >= MAX_EXERCISES_PER_SESSION:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {MAX_EXERCISES_PER_SESSION} exercises per session.",
        )
    exercise = workout_session.add_exercise(workout, **payload.model_dump())
    await db.flush()
    return ExerciseRead.model_validate(exercise)


@router.put("/{workout_id}/exercises/order", response_model=WorkoutRead)
async def reorder_exercises(
    workout_id: uuid.UUID,
    payload: ReorderRequest,
    db: AsyncSession = Depends(get_db),
):
    workout = await _get_workout(db, workout_id)
    try:
        workout_session.reorder_exercises(workout, payload.ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await db.flush()
    workout.exercises.sort(key=lambda e: e.order)
    return WorkoutRead.model_validate(workout)


@router.patch("/{workout_id}/exercises/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Edit name, muscle group, targets or cardio duration."""
    exercise = _get_exercise(await _get_workout(db, workout_id), exercise_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(exercise, k, v)
    await db.flush()
    return ExerciseRead.model_validate(exercise)


@router.delete("/{workout_id}/exercises/{exercise_id}", status_code=204)
async def delete_exercise(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Remove an exercise and its sets."""
    workout = await _get_workout(db, workout_id)
    workout_session.remove_exercise(workout, _get_exercise(workout, exercise_id))
    await db.flush()
    return None


# ---------------------------------------------------------------------------
# Sets
# ---------------------------------------------------------------------------


@router.post(
    "/{workout_id}/exercises/{exercise_id}/sets",
    response_model=ExerciseSetRead,
    status_code=201,
)
async def add_set(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: ExerciseSetCreate,
    db: AsyncSession = Depends(get_db),
):
    """Append a set after the last one."""
    exercise = _get_exercise(await _get_workout(db, workout_id), exercise_id)
    if len(exercise.sets) >= MAX_SETS_PER_EXERCISE_PER_SESSION:
        raise HTTPException(
            status_code=400,
            detail=f"Maximum {MAX_SETS_PER_EXERCISE_PER_SESSION} sets per exercise per session.",
        )
    set_ = workout_session.add_set(exercise, reps=payload.reps, weight=payload.weight)
    await db.flush()
    return ExerciseSetRead.model_validate(set_)


@router.put("/{workout_id}/exercises/{exercise_id}/sets/order", response_model=ExerciseRead)
async def reorder_sets(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    payload: ReorderRequest,
    db: AsyncSession = Depends(get_db),
):
    exercise = _get_exercise(await _get_workout(db, workout_id), exercise_id)
    try:
        workout_session.reorder_sets(exercise, payload.ids)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    await db.flush()
    exercise.sets.sort(key=lambda s: s.order)
    return ExerciseRead.model_validate(exercise)


@router.patch(
    "/{workout_id}/exercises/{exercise_id}/sets/{set_id}",
    response_model=ExerciseSetRead,
)
async def update_set(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    payload: ExerciseSetUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update reps, weight or completion of a set."""
    exercise = _get_exercise(await _get_workout(db, workout_id), exercise_id)
    set_ = _get_set(exercise, set_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(set_, k, v)
    await db.flush()
    return ExerciseSetRead.model_validate(set_)


@router.delete("/{workout_id}/exercises/{exercise_id}/sets/{set_id}", status_code=204)
async def delete_set(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    exercise = _get_exercise(await _get_workout(db, workout_id), exercise_id)
    workout_session.remove_set(exercise, _get_set(exercise, set_id))
    await db.flush()
    return None


@router.post(
    "/{workout_id}/exercises/{exercise_id}/sets/{set_id}/toggle",
    response_model=ExerciseSetRead,
)
async def toggle_set(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Flip a set between done and not done."""
    exercise = _get_exercise(await _get_workout(db, workout_id), exercise_id)
    set_ = _get_set(exercise, set_id)
    workout_session.toggle_set_completion(set_)
    await db.flush()
    return ExerciseSetRead.model_validate(set_)


@router.post(
    "/{workout_id}/exercises/{exercise_id}/sets/{set_id}/timer/{action}",
    response_model=ExerciseSetRead,
)
async def set_timer(
    workout_id: uuid.UUID,
    exercise_id: uuid.UUID,
    set_id: uuid.UUID,
    action: str,
    db: AsyncSession = Depends(get_db),
):
    """Start, stop or reset a set's work timer."""
    exercise = _get_exercise(await _get_workout(db, workout_id), exercise_id)
    set_ = _get_set(exercise, set_id)
    if action == "start":
        workout_session.start_set_timer(set_)
    elif action == "stop":
        workout_session.stop_set_timer(set_)
    elif action == "reset":
        workout_session.reset_set_timer(set_)
    else:
        raise HTTPException(status_code=404, detail=f"Unknown timer action: {action}")
    await db.flush()
    return ExerciseSetRead.model_validate(set_)
