"""Workout templates - reusable session blueprints and starting a workout from one."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.models.template import TemplateExercise, WorkoutTemplate
from app.schemas.template import (
    TemplateExerciseCreate,
    TemplateExerciseRead,
    WorkoutTemplateCreate,
    WorkoutTemplateRead,
    WorkoutTemplateUpdate,
)
from app.schemas.workout import WorkoutRead
from app.services import workout_session

router = APIRouter()


async def _get_template(db: AsyncSession, template_id: uuid.UUID) -> WorkoutTemplate:
    result = await db.execute(select(WorkoutTemplate).where(WorkoutTemplate.id == template_id))
    t = result.scalar_one_or_none()
    if not t:
        raise HTTPException(status_code=404, detail="Template not found")
    return t


@router.get("", response_model=list[WorkoutTemplateRead])
async def list_templates(
    db: AsyncSession = Depends(get_db),
    skip: int = 0,
    limit: int = 50,
    category: str | None = None,
):
    """List templates, most recently used first."""
    stmt = select(WorkoutTemplate)
    if category:
        stmt = stmt.where(WorkoutTemplate.category == category)
    stmt = (
        stmt.order_by(
            WorkoutTemplate.last_used.desc().nulls_last(),
            WorkoutTemplate.created_date.desc(),
        )
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return [WorkoutTemplateRead.model_validate(t) for t in result.scalars().all()]


@router.post("", response_model=WorkoutTemplateRead, status_code=201)
async def create_template(
    payload: WorkoutTemplateCreate,
    db: AsyncSession = Depends(get_db),
):
    """Create a template, optionally with its exercises."""
    data = payload.model_dump(exclude={"exercises"})
    t = WorkoutTemplate(**data)
    for i, te in enumerate(payload.exercises):
        fields = te.model_dump()
        if "order" not in te.model_fields_set:
            fields["order"] = i
        t.exercises.append(TemplateExercise(**fields))
    db.add(t)
    await db.flush()
    return WorkoutTemplateRead.model_validate(t)


@router.get("/{template_id}", response_model=WorkoutTemplateRead)
async def get_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a template with its exercises."""
    return WorkoutTemplateRead.model_validate(await _get_template(db, template_id))


@router.patch("/{template_id}", response_model=WorkoutTemplateRead)
async def update_template(
    template_id: uuid.UUID,
    payload: WorkoutTemplateUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Update template name, description or category."""
    t = await _get_template(db, template_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(t, k, v)
    await db.flush()
    return WorkoutTemplateRead.model_validate(t)


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a template and its exercises."""
    t = await _get_template(db, template_id)
    await db.delete(t)
    return None


@router.post("/{template_id}/exercises", response_model=TemplateExerciseRead, status_code=201)
async def add_template_exercise(
    template_id: uuid.UUID,
    payload: TemplateExerciseCreate,
    db: AsyncSession = Depends(get_db),
):
    """Append a target exercise to a template."""
    t = await _get_template(db, template_id)
    fields = payload.model_dump()
    if "order" not in payload.model_fields_set:
        fields["order"] = len(t.exercises)
    te = TemplateExercise(**fields)
    t.exercises.append(te)
    await db.flush()
    return TemplateExerciseRead.model_validate(te)


@router.delete("/{template_id}/exercises/{template_exercise_id}", status_code=204)
async def delete_template_exercise(
    template_id: uuid.UUID,
    template_exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    t = await _get_template(db, template_id)
    te = next((e for e in t.exercises if e.id == template_exercise_id), None)
    if not te:
        raise HTTPException(status_code=404, detail="Template exercise not found")
    t.exercises.remove(te)
    await db.flush()
    return None


@router.post("/{template_id}/start", response_model=WorkoutRead, status_code=201)
async def start_workout_from_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
):
    """Create a new workout from a template, pre-filled with last session's best sets."""
    t = await _get_template(db, template_id)
    workout = await workout_session.start_from_template(db, t)
    return WorkoutRead.model_validate(workout)
