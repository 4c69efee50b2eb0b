import json
from datetime import datetime, timezone

from conftest import make_meal_payload, make_workout_payload
from fitplan_service.client.snapshot_store import FileSnapshotStore
from fitplan_service.schemas.plans import MealPlan, UserPlan, WorkoutPlan


def _plan(goal: float = 5.0) -> UserPlan:
    return UserPlan(
        photo="data:image/jpeg;base64,/9j/4AAQ",
        weight_goal_kg=goal,
        current_analysis="Good posture.",
        workout_plan=WorkoutPlan.model_validate(make_workout_payload()),
        meal_plan=MealPlan.model_validate(make_meal_payload()),
        created_at=datetime(2026, 10, 17, 8, 30, tzinfo=timezone.utc),
    )


def test_missing_snapshot_loads_as_none(tmp_path):
    assert FileSnapshotStore(tmp_path / "plan.json").load() is None


def test_round_trip(tmp_path):
    store = FileSnapshotStore(tmp_path / "nested" / "plan.json")
    plan = _plan()
    store.save(plan)
    assert FileSnapshotStore(store.path).load() == plan


def test_snapshot_uses_camel_case_keys(tmp_path):
    store = FileSnapshotStore(tmp_path / "plan.json")
    store.save(_plan())
    data = json.loads(store.path.read_text())
    assert set(data) == {"photo", "weightGoal", "currentAnalysis", "workoutPlan", "mealPlan", "createdAt"}
    assert "weeklySchedule" in data["workoutPlan"]
    assert "dailyCalories" in data["mealPlan"]


def test_save_overwrites_previous_plan(tmp_path):
    store = FileSnapshotStore(tmp_path / "plan.json")
    store.save(_plan(5.0))
    store.save(_plan(8.0))
    assert store.load().weight_goal_kg == 8.0
    assert [p.name for p in tmp_path.iterdir()] == ["plan.json"]


def test_corrupt_snapshot_is_treated_as_absent(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text("{not json")
    assert FileSnapshotStore(path).load() is None
    path.write_text(json.dumps({"photo": "x"}))
    assert FileSnapshotStore(path).load() is None


def test_snapshot_with_invalid_utf8_is_treated_as_absent(tmp_path):
    path = tmp_path / "plan.json"
    path.write_bytes(b'{"photo": "\xff\xfe garbage')
    assert FileSnapshotStore(path).load() is None


def test_clear_is_idempotent(tmp_path):
    store = FileSnapshotStore(tmp_path / "plan.json")
    store.clear()
    store.save(_plan())
    store.clear()
    store.clear()
    assert store.load() is None
