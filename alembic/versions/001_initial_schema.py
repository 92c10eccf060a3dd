"""Initial schema: workouts, exercises, exercise_sets, templates, exercise_history.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "workouts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("saved_work_time", sa.Float(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=True),
        sa.Column("template_name", sa.String(length=255), nullable=True),
        sa.Column("repeated_from_workout_id", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_workouts")),
    )
    op.create_index("ix_workouts_date", "workouts", ["date"], unique=False)
    op.create_index("ix_workouts_is_completed", "workouts", ["is_completed"], unique=False)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workout_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("muscle_group", sa.String(length=100), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("target_sets", sa.Integer(), nullable=True),
        sa.Column("target_reps", sa.Integer(), nullable=True),
        sa.Column("previous_best", sa.String(length=255), nullable=True),
        sa.Column("suggestion_note", sa.String(length=500), nullable=True),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.ForeignKeyConstraint(
            ["workout_id"], ["workouts.id"],
            name=op.f("fk_exercises_workout_id_workouts"), ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exercises")),
    )
    op.create_index("ix_exercises_workout_id", "exercises", ["workout_id"], unique=False)
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=False)

    op.create_table(
        "exercise_sets",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("is_completed", sa.Boolean(), nullable=False),
        sa.Column("previous_weight", sa.Float(), nullable=True),
        sa.Column("previous_reps", sa.Integer(), nullable=True),
        sa.Column("work_time", sa.Float(), nullable=True),
        sa.Column("work_start_time", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ["exercise_id"], ["exercises.id"],
            name=op.f("fk_exercise_sets_exercise_id_exercises"), ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exercise_sets")),
    )
    op.create_index("ix_exercise_sets_exercise_id", "exercise_sets", ["exercise_id"], unique=False)

    op.create_table(
        "workout_templates",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_custom", sa.Boolean(), nullable=False),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("created_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_used", sa.DateTime(timezone=True), nullable=True),
        sa.Column("times_used", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_workout_templates")),
    )
    op.create_index(op.f("ix_workout_templates_name"), "workout_templates", ["name"], unique=False)

    op.create_table(
        "template_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("muscle_group", sa.String(length=100), nullable=True),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("target_sets", sa.Integer(), nullable=True),
        sa.Column("target_reps", sa.Integer(), nullable=True),
        sa.Column("rest_seconds", sa.Integer(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(
            ["template_id"], ["workout_templates.id"],
            name=op.f("fk_template_exercises_template_id_workout_templates"), ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_template_exercises")),
    )
    op.create_index(
        op.f("ix_template_exercises_template_id"), "template_exercises", ["template_id"], unique=False
    )

    op.create_table(
        "exercise_history",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("exercise_name", sa.String(length=255), nullable=False),
        sa.Column("workout_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sets_data", sa.LargeBinary(), nullable=False),
        sa.Column("workout_id", sa.Uuid(), nullable=True),
        sa.ForeignKeyConstraint(
            ["workout_id"], ["workouts.id"],
            name=op.f("fk_exercise_history_workout_id_workouts"), ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exercise_history")),
    )
    op.create_index(
        "ix_exercise_history_name_date", "exercise_history", ["exercise_name", "workout_date"], unique=False
    )
    op.create_index(
        op.f("ix_exercise_history_workout_id"), "exercise_history", ["workout_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_exercise_history_workout_id"), table_name="exercise_history")
    op.drop_index("ix_exercise_history_name_date", table_name="exercise_history")
    op.drop_table("exercise_history")
    op.drop_index(op.f("ix_template_exercises_template_id"), table_name="template_exercises")
    op.drop_table("template_exercises")
    op.drop_index(op.f("ix_workout_templates_name"), table_name="workout_templates")
    op.drop_table("workout_templates")
    op.drop_index("ix_exercise_sets_exercise_id", table_name="exercise_sets")
    op.drop_table("exercise_sets")
    op.drop_index(op.f("ix_exercises_name"), table_name="exercises")
    op.drop_index("ix_exercises_workout_id", table_name="exercises")
    op.drop_table("exercises")
    op.drop_index("ix_workouts_is_completed", table_name="workouts")
    op.drop_index("ix_workouts_date", table_name="workouts")
    op.drop_table("workouts")
