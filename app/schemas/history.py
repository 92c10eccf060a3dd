"""Exercise history schemas and the HistoricalSet blob codec.

``ExerciseHistory.sets_data`` holds a JSON array of
``{"weight": number, "reps": integer, "isCompleted": boolean}`` records.
The decoded ``list[HistoricalSet]`` is the only in-memory representation;
conversion happens at the storage boundary.
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


class HistoricalSet(BaseModel):
    """Immutable copy of one set as performed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    weight: float = Field(allow_inf_nan=False)
    reps: int
    is_completed: bool = Field(alias="isCompleted")

    @property
    def volume(self) -> float:
        return self.weight * self.reps


_historical_sets_adapter = TypeAdapter(list[HistoricalSet])


def encode_historical_sets(sets: list[HistoricalSet]) -> bytes:
    return _historical_sets_adapter.dump_json(list(sets), by_alias=True)


def decode_historical_sets(data: bytes | str | None) -> list[HistoricalSet]:
    """Decode a stored blob. Corrupt or missing data yields an empty list."""
    if not data:
        return []
    try:
        return _historical_sets_adapter.validate_json(data)
    except ValidationError as e:
        logger.warning("Discarding undecodable historical set blob (%d bytes): %s", len(data), e)
        return []


class HistoricalSetRead(BaseModel):
    weight: float
    reps: int
    is_completed: bool
    volume: float


class ExerciseHistoryRead(BaseModel):
    """Snapshot of one exercise in one completed workout, with derived stats."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exercise_name: str
    workout_date: datetime
    workout_id: UUID | None = None
    sets: list[HistoricalSetRead] = []
    total_volume: float = 0.0
    best_set: HistoricalSetRead | None = None
    average_weight: float = 0.0

    @classmethod
    def from_history(cls, history) -> "ExerciseHistoryRead":
        def _set(s: HistoricalSet) -> HistoricalSetRead:
            return HistoricalSetRead(
                weight=s.weight, reps=s.reps, is_completed=s.is_completed, volume=s.volume
            )

        best = history.best_set
        return cls(
            id=history.id,
            exercise_name=history.exercise_name,
            workout_date=history.workout_date,
            workout_id=history.workout_id,
            sets=[_set(s) for s in history.sets],
            total_volume=history.total_volume,
            best_set=_set(best) if best is not None else None,
            average_weight=history.average_weight,
        )


class StartingSuggestionRead(BaseModel):
    """Pre-fill values for a new session, from the last performance's best set."""

    exercise_name: str
    weight: float | None = None
    reps: int | None = None
    previous_best: str | None = None
