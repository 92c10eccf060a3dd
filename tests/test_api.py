"""End-to-end tests for the HTTP API against a throwaway SQLite database."""
from datetime import datetime, timezone

import pytest

from app.core.timeutils import as_utc

API = "/api/v1"


async def _start_workout(client, name="Push Day"):
    response = await client.post(f"{API}/workouts", json={"name": name})
    assert response.status_code == 201
    return response.json()


async def _add_exercise(client, workout_id, name, **fields):
    response = await client.post(f"{API}/workouts/{workout_id}/exercises", json={"name": name, **fields})
    assert response.status_code == 201
    return response.json()


def _instant(value: str) -> datetime:
    return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


async def _fill_set(client, workout_id, exercise_id, set_id, reps, weight):
    response = await client.patch(
        f"{API}/workouts/{workout_id}/exercises/{exercise_id}/sets/{set_id}",
        json={"reps": reps, "weight": weight, "is_completed": True},
    )
    assert response.status_code == 200
    return response.json()


class TestHealth:
    @pytest.mark.asyncio
    async def test_liveness(self, client):
        response = await client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["app"] == "GymLog API"

    @pytest.mark.asyncio
    async def test_readiness(self, client):
        response = await client.get(f"{API}/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


class TestWorkoutSession:
    @pytest.mark.asyncio
    async def test_log_and_complete_workout(self, client):
        workout = await _start_workout(client)
        wid = workout["id"]
        assert workout["is_completed"] is False
        assert (await client.get(f"{API}/workouts/active")).json()["id"] == wid

        bench = await _add_exercise(client, wid, "Dumbbell Bench Press", muscle_group="Chest", target_reps=10)
        assert len(bench["sets"]) == 1
        eid = bench["id"]
        await _fill_set(client, wid, eid, bench["sets"][0]["id"], 10, 60)
        for reps in (11, 10):
            created = await client.post(
                f"{API}/workouts/{wid}/exercises/{eid}/sets", json={"reps": reps, "weight": 60}
            )
            assert created.status_code == 201
            assert created.json()["previous_weight"] == 60
            toggled = await client.post(
                f"{API}/workouts/{wid}/exercises/{eid}/sets/{created.json()['id']}/toggle"
            )
            assert toggled.json()["is_completed"] is True

        summary = (await client.get(f"{API}/workouts/{wid}/summary")).json()
        assert summary["total_sets"] == 3
        assert summary["total_volume"] == 60 * (10 + 11 + 10)

        response = await client.post(f"{API}/workouts/{wid}/complete")
        assert response.status_code == 200
        body = response.json()
        assert body["workout"]["is_completed"] is True
        assert body["suggestions"] == [
            {
                "exercise_id": eid,
                "exercise_name": "Dumbbell Bench Press",
                "type": "weight",
                "amount": 5,
                "message": "Great work! Try adding 5 lbs next session.",
            }
        ]
        assert (await client.get(f"{API}/workouts/active")).json() is None

        again = await client.post(f"{API}/workouts/{wid}/complete")
        assert again.json()["suggestions"] == []

        history = (await client.get(f"{API}/history/Dumbbell Bench Press")).json()
        assert len(history) == 1
        assert [s["reps"] for s in history[0]["sets"]] == [10, 11, 10]
        assert history[0]["total_volume"] == 1860

        suggestion = (await client.get(f"{API}/history/Dumbbell Bench Press/suggestion")).json()
        assert suggestion["weight"] == 60
        assert suggestion["reps"] == 11
        assert suggestion["previous_best"] == "60 lbs × 11"

    @pytest.mark.asyncio
    async def test_set_timer_actions(self, client):
        wid = (await _start_workout(client))["id"]
        exercise = await _add_exercise(client, wid, "Squat")
        base = f"{API}/workouts/{wid}/exercises/{exercise['id']}/sets/{exercise['sets'][0]['id']}/timer"

        started = (await client.post(f"{base}/start")).json()
        assert started["is_timer_running"] is True

        stopped = (await client.post(f"{base}/stop")).json()
        assert stopped["is_timer_running"] is False
        assert stopped["work_start_time"] is None
        assert stopped["work_time"] >= 0

        reset = (await client.post(f"{base}/reset")).json()
        assert reset["work_time"] == 0

        assert (await client.post(f"{base}/pause")).status_code == 404

    @pytest.mark.asyncio
    async def test_reorder_exercises(self, client):
        wid = (await _start_workout(client))["id"]
        first = await _add_exercise(client, wid, "Squat")
        second = await _add_exercise(client, wid, "Leg Press")

        response = await client.put(
            f"{API}/workouts/{wid}/exercises/order", json={"ids": [second["id"], first["id"]]}
        )
        assert response.status_code == 200
        assert [e["name"] for e in response.json()["exercises"]] == ["Leg Press", "Squat"]

        bad = await client.put(f"{API}/workouts/{wid}/exercises/order", json={"ids": [first["id"]]})
        assert bad.status_code == 400

    @pytest.mark.asyncio
    async def test_remove_exercise_and_set(self, client):
        wid = (await _start_workout(client))["id"]
        exercise = await _add_exercise(client, wid, "Squat")
        eid = exercise["id"]
        set_id = exercise["sets"][0]["id"]

        assert (await client.delete(f"{API}/workouts/{wid}/exercises/{eid}/sets/{set_id}")).status_code == 204
        workout = (await client.get(f"{API}/workouts/{wid}")).json()
        assert workout["exercises"][0]["sets"] == []

        assert (await client.delete(f"{API}/workouts/{wid}/exercises/{eid}")).status_code == 204
        assert (await client.get(f"{API}/workouts/{wid}")).json()["exercises"] == []

    @pytest.mark.asyncio
    async def test_exercise_limit(self, client):
        wid = (await _start_workout(client))["id"]
        for i in range(20):
            await _add_exercise(client, wid, f"Exercise {i}")
        response = await client.post(f"{API}/workouts/{wid}/exercises", json={"name": "One Too Many"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_workout_removes_history(self, client):
        wid = (await _start_workout(client))["id"]
        exercise = await _add_exercise(client, wid, "Squat")
        await _fill_set(client, wid, exercise["id"], exercise["sets"][0]["id"], 5, 225)
        await client.post(f"{API}/workouts/{wid}/complete")
        assert len((await client.get(f"{API}/history/Squat")).json()) == 1

        assert (await client.delete(f"{API}/workouts/{wid}")).status_code == 204
        assert (await client.get(f"{API}/workouts/{wid}")).status_code == 404
        assert (await client.get(f"{API}/history/Squat")).json() == []
        assert (await client.get(f"{API}/history/Squat/last")).json() is None

    @pytest.mark.asyncio
    async def test_repeat_workout(self, client):
        wid = (await _start_workout(client, "Legs"))["id"]
        exercise = await _add_exercise(client, wid, "Squat")
        await _fill_set(client, wid, exercise["id"], exercise["sets"][0]["id"], 5, 225)
        await client.post(f"{API}/workouts/{wid}/complete")

        response = await client.post(f"{API}/workouts/{wid}/repeat")
        assert response.status_code == 201
        repeat = response.json()
        assert repeat["repeated_from_workout_id"] == wid
        repeated_set = repeat["exercises"][0]["sets"][0]
        assert (repeated_set["reps"], repeated_set["weight"], repeated_set["is_completed"]) == (5, 225, False)

    @pytest.mark.asyncio
    async def test_non_finite_weight_is_rejected(self, client):
        wid = (await _start_workout(client))["id"]
        exercise = await _add_exercise(client, wid, "Squat")
        url = f"{API}/workouts/{wid}/exercises/{exercise['id']}/sets/{exercise['sets'][0]['id']}"

        response = await client.patch(
            url,
            content='{"weight": Infinity, "reps": 1, "is_completed": true}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 422
        error = response.json()["detail"][0]
        assert error["loc"][-1] == "weight"
        assert error["input"] == "inf"

        created = await client.post(
            f"{API}/workouts/{wid}/exercises/{exercise['id']}/sets",
            content='{"weight": NaN, "reps": 1}',
            headers={"Content-Type": "application/json"},
        )
        assert created.status_code == 422

        stored = (await client.get(f"{API}/workouts/{wid}")).json()["exercises"][0]["sets"]
        assert [(s["weight"], s["is_completed"]) for s in stored] == [(0, False)]

    @pytest.mark.asyncio
    async def test_date_with_offset_is_stored_as_utc_instant(self, client):
        wid = (await _start_workout(client))["id"]
        expected = datetime(2026, 10, 17, 20, 0, tzinfo=timezone.utc)

        patched = await client.patch(f"{API}/workouts/{wid}", json={"date": "2026-10-18T01:00:00+05:00"})
        assert patched.status_code == 200
        assert _instant(patched.json()["date"]) == expected

        stored = (await client.get(f"{API}/workouts/{wid}")).json()
        assert _instant(stored["date"]) == expected

    @pytest.mark.asyncio
    async def test_unknown_ids_are_404(self, client):
        missing = "00000000-0000-0000-0000-000000000000"
        assert (await client.get(f"{API}/workouts/{missing}")).status_code == 404
        wid = (await _start_workout(client))["id"]
        assert (await client.patch(f"{API}/workouts/{wid}/exercises/{missing}", json={"name": "X"})).status_code == 404


class TestTemplates:
    @pytest.mark.asyncio
    async def test_create_and_start_from_template(self, client):
        response = await client.post(
            f"{API}/templates",
            json={
                "name": "Upper A",
                "category": "Upper Body",
                "exercises": [
                    {"exercise_name": "Bench Press", "target_sets": 3, "target_reps": 5},
                    {"exercise_name": "Pull-Ups", "target_sets": 2, "target_reps": 8},
                ],
            },
        )
        assert response.status_code == 201
        template = response.json()
        assert [e["order"] for e in template["exercises"]] == [0, 1]
        assert template["estimated_duration"] == 5 * (45 + 90)

        listed = (await client.get(f"{API}/templates", params={"category": "Upper Body"})).json()
        assert [t["id"] for t in listed] == [template["id"]]

        started = await client.post(f"{API}/templates/{template['id']}/start")
        assert started.status_code == 201
        workout = started.json()
        assert workout["template_id"] == template["id"]
        assert workout["used_template"] is True
        assert [len(e["sets"]) for e in workout["exercises"]] == [3, 2]

        refreshed = (await client.get(f"{API}/templates/{template['id']}")).json()
        assert refreshed["times_used"] == 1
        assert refreshed["last_used"] is not None

    @pytest.mark.asyncio
    async def test_template_exercises_and_delete(self, client):
        template = (await client.post(f"{API}/templates", json={"name": "Legs"})).json()
        tid = template["id"]

        added = await client.post(f"{API}/templates/{tid}/exercises", json={"exercise_name": "Squat"})
        assert added.status_code == 201
        assert added.json()["target_sets"] == 3

        removed = await client.delete(f"{API}/templates/{tid}/exercises/{added.json()['id']}")
        assert removed.status_code == 204

        assert (await client.delete(f"{API}/templates/{tid}")).status_code == 204
        assert (await client.get(f"{API}/templates/{tid}")).status_code == 404


class TestStats:
    @pytest.mark.asyncio
    async def test_streak_and_summary_after_a_workout(self, client):
        empty = (await client.get(f"{API}/stats/streak")).json()
        assert empty["current_streak"] == 0
        assert empty["last_workout_date"] is None

        wid = (await _start_workout(client))["id"]
        exercise = await _add_exercise(client, wid, "Squat", muscle_group="Legs")
        await _fill_set(client, wid, exercise["id"], exercise["sets"][0]["id"], 5, 200)
        await client.post(f"{API}/workouts/{wid}/complete")

        streak = (await client.get(f"{API}/stats/streak")).json()
        assert streak["current_streak"] == 1
        assert streak["longest_streak"] == 1
        assert streak["workouts_this_week"] == 1
        assert streak["workouts_this_month"] == 1

        summary = (await client.get(f"{API}/stats/summary", params={"range": "all"})).json()
        assert summary["workout_count"] == 1
        assert summary["total_volume"] == 1000
        assert summary["muscle_groups"] == [{"muscle_group": "Legs", "count": 1}]

    @pytest.mark.asyncio
    async def test_personal_record_endpoint(self, client):
        for weight in (180, 200):
            wid = (await _start_workout(client))["id"]
            exercise = await _add_exercise(client, wid, "Squat")
            await _fill_set(client, wid, exercise["id"], exercise["sets"][0]["id"], 5, weight)
            await client.post(f"{API}/workouts/{wid}/complete")

        record = (await client.get(f"{API}/history/Squat/personal-record")).json()
        assert record["best_set"]["weight"] == 200
        assert len((await client.get(f"{API}/history/Squat/trend")).json()) == 2
