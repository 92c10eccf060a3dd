"""Tests for the historical-set codec and the exercise history store."""
import json
import logging
from datetime import timedelta

import pytest
from pydantic import ValidationError

from app.models import ExerciseHistory
from app.schemas.history import HistoricalSet, decode_historical_sets, encode_historical_sets
from app.services import history as history_store
from tests.factories import NOW, make_exercise, make_set, make_workout


def _sets(*pairs, completed=True):
    return [HistoricalSet(weight=w, reps=r, is_completed=completed) for r, w in pairs]


def _history(name, days_ago, *pairs):
    workout = make_workout(date=NOW - timedelta(days=days_ago))
    return ExerciseHistory(
        exercise_name=name,
        workout_date=workout.date,
        workout=workout,
        sets=_sets(*pairs),
    )


class TestHistoricalSetCodec:
    def test_round_trip_keeps_order(self):
        sets = [
            HistoricalSet(weight=135.0, reps=10, is_completed=True),
            HistoricalSet(weight=155.5, reps=8, is_completed=False),
            HistoricalSet(weight=0.0, reps=0, is_completed=False),
        ]
        assert decode_historical_sets(encode_historical_sets(sets)) == sets

    def test_round_trip_empty_list(self):
        assert decode_historical_sets(encode_historical_sets([])) == []

    def test_non_finite_weight_is_rejected(self):
        for weight in (float("inf"), float("-inf"), float("nan")):
            with pytest.raises(ValidationError):
                HistoricalSet(weight=weight, reps=5, is_completed=True)

    def test_non_finite_weight_in_blob_decodes_to_empty(self):
        assert decode_historical_sets(b'[{"weight": Infinity, "reps": 5, "isCompleted": true}]') == []

    def test_wire_format_uses_is_completed_key(self):
        encoded = encode_historical_sets(_sets((5, 100.0)))
        assert json.loads(encoded) == [{"weight": 100.0, "reps": 5, "isCompleted": True}]

    def test_decodes_stored_json(self):
        data = b'[{"weight": 60, "reps": 12, "isCompleted": false}]'
        assert decode_historical_sets(data) == [HistoricalSet(weight=60.0, reps=12, is_completed=False)]

    @pytest.mark.parametrize(
        "data", [b"not json", b'{"weight": 1}', b'[{"reps": "many"}]', b"\xff\xfe["]
    )
    def test_corrupt_blob_decodes_to_empty(self, data, caplog):
        with caplog.at_level(logging.WARNING, logger="app.schemas.history"):
            assert decode_historical_sets(data) == []
        assert "undecodable" in caplog.text

    @pytest.mark.parametrize("data", [b"", None])
    def test_missing_blob_decodes_to_empty(self, data):
        assert decode_historical_sets(data) == []


class TestSnapshotStats:
    def test_total_volume_best_set_and_average(self):
        h = ExerciseHistory(exercise_name="Squat", workout_date=NOW, sets=_sets((5, 200.0), (3, 300.0), (8, 100.0)))
        assert h.total_volume == 1000 + 900 + 800
        assert h.best_set == HistoricalSet(weight=200.0, reps=5, is_completed=True)
        assert h.average_weight == 200.0

    def test_corrupt_row_reads_as_no_sets(self):
        h = ExerciseHistory(exercise_name="Squat", workout_date=NOW)
        h.sets_data = b"\x00garbage"
        assert h.sets == []
        assert h.total_volume == 0
        assert h.best_set is None
        assert h.average_weight == 0.0

    def test_build_snapshot_freezes_sets_in_order(self):
        exercise = make_exercise("Squat", [make_set(5, 225.0, order=1), make_set(8, 185.0, order=0, is_completed=False)])
        workout = make_workout([exercise])

        snapshot = history_store.build_snapshot(exercise, workout)
        exercise.sets[0].weight = 999.0

        assert snapshot.exercise_name == "Squat"
        assert snapshot.workout_date == workout.date
        assert snapshot.workout is workout
        assert snapshot.sets == [
            HistoricalSet(weight=185.0, reps=8, is_completed=False),
            HistoricalSet(weight=225.0, reps=5, is_completed=True),
        ]


class TestHistoryStore:
    @pytest.mark.asyncio
    async def test_personal_record_highest_best_set_volume(self, db):
        db.add_all([
            _history("Squat", 10, (3, 300.0)),  # best set 900
            _history("Squat", 5, (4, 300.0), (1, 100.0)),  # best set 1200
            _history("Front Squat", 1, (10, 500.0)),
        ])
        await db.commit()

        record = await history_store.personal_record(db, "Squat")
        assert record.best_set.volume == 1200

    @pytest.mark.asyncio
    async def test_personal_record_tie_keeps_oldest(self, db):
        older = _history("Squat", 10, (3, 300.0))
        db.add_all([older, _history("Squat", 2, (9, 100.0))])
        await db.commit()

        record = await history_store.personal_record(db, "Squat")
        assert record.id == older.id

    @pytest.mark.asyncio
    async def test_personal_record_none_without_history(self, db):
        assert await history_store.personal_record(db, "Squat") is None

    @pytest.mark.asyncio
    async def test_previous_performances_newest_first_and_limited(self, db):
        db.add_all([_history("Bench Press", d, (5, 100.0 + d)) for d in (1, 8, 3, 20)])
        await db.commit()

        rows = await history_store.previous_performances(db, "Bench Press")
        assert [r.best_set.weight for r in rows] == [101.0, 103.0, 108.0]

        rows = await history_store.previous_performances(db, "Bench Press", limit=10)
        assert len(rows) == 4

    @pytest.mark.asyncio
    async def test_lookup_is_exact_name(self, db):
        db.add(_history("Bench Press", 1, (5, 100.0)))
        await db.commit()

        assert await history_store.last_performance(db, "bench press") is None
        assert (await history_store.last_performance(db, "Bench Press")).exercise_name == "Bench Press"

    @pytest.mark.asyncio
    async def test_progress_trend_window_oldest_first(self, db):
        db.add_all([_history("Deadlift", d, (5, 300.0 + d)) for d in (5, 120, 60, 89)])
        await db.commit()

        rows = await history_store.progress_trend(db, "Deadlift", now=NOW)
        assert [r.best_set.weight for r in rows] == [389.0, 360.0, 305.0]

        rows = await history_store.progress_trend(db, "Deadlift", window_seconds=10 * 86400, now=NOW)
        assert len(rows) == 1

    @pytest.mark.asyncio
    async def test_suggested_starting_values_from_last_best_set(self, db):
        db.add_all([
            _history("Overhead Press", 7, (5, 135.0)),
            _history("Overhead Press", 2, (8, 95.0), (5, 115.0)),
        ])
        await db.commit()

        assert await history_store.suggested_starting_weight(db, "Overhead Press") == 95.0
        assert await history_store.suggested_starting_reps(db, "Overhead Press") == 8

    @pytest.mark.asyncio
    async def test_suggested_starting_values_absent_without_history(self, db):
        assert await history_store.suggested_starting_weight(db, "Overhead Press") is None
        assert await history_store.suggested_starting_reps(db, "Overhead Press") is None

    @pytest.mark.asyncio
    async def test_blob_survives_storage(self, db):
        row = _history("Squat", 1, (5, 225.0), (5, 235.0))
        db.add(row)
        await db.commit()
        db.expunge_all()

        stored = await history_store.last_performance(db, "Squat")
        assert stored.sets == _sets((5, 225.0), (5, 235.0))
