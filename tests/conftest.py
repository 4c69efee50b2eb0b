import json
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure the service package is importable without installation
SERVICE_ROOT = Path(__file__).resolve().parents[1]
if str(SERVICE_ROOT) not in sys.path:
    sys.path.insert(0, str(SERVICE_ROOT))

from fitplan_service.images import encode_data_url  # noqa: E402
from fitplan_service.prompts import STAGE_ANALYSIS, STAGE_MEAL, STAGE_WORKOUT  # noqa: E402

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def make_workout_payload(days: int = 5) -> dict:
    schedule = []
    for idx, weekday in enumerate(WEEKDAYS[:days]):
        exercises = [{"name": "Warm-up: jumping jacks", "sets": "1 set", "reps": "3 min", "rest": "30s rest"}]
        exercises += [
            {"name": f"Exercise {n}", "sets": "3 sets", "reps": "12-15 reps", "rest": "60s rest"} for n in range(1, 4)
        ]
        exercises.append({"name": "Cool-down stretch", "sets": "1 set", "reps": "5 min", "rest": "-"})
        schedule.append({"day": f"{weekday} - Workout {'AB'[idx % 2]}", "exercises": exercises})
    return {"weeklySchedule": schedule, "tips": ["Drink water", "Sleep well", "Stay consistent"]}


def make_meal_payload(meals: int = 5) -> dict:
    names = ["Breakfast", "Morning snack", "Lunch", "Afternoon snack", "Dinner", "Supper"]
    times = ["07:00", "10:00", "12:30", "16:00", "19:30", "21:30"]
    return {
        "dailyCalories": 1800,
        "meals": [
            {"time": times[i], "name": names[i], "foods": ["2 eggs", "1 slice of wholegrain bread"], "calories": 360}
            for i in range(meals)
        ],
        "tips": ["Avoid sugary drinks", "Eat vegetables", "Plan ahead"],
    }


class ScriptedCompleter:
    """Stands in for the model provider; replies are keyed by prompt stage."""

    def __init__(self, replies: dict):
        self.replies = replies
        self.calls = []

    async def __call__(self, spec):
        self.calls.append(spec)
        reply = self.replies[spec.stage]
        if isinstance(reply, BaseException):
            raise reply
        return reply


@pytest.fixture
def good_replies() -> dict:
    return {
        STAGE_ANALYSIS: "You have a solid base. Focus on core strength. Keep going!",
        STAGE_WORKOUT: json.dumps(make_workout_payload()),
        STAGE_MEAL: json.dumps(make_meal_payload()),
    }


@pytest.fixture
def image_data_url() -> str:
    return encode_data_url(b"\xff\xd8\xff\xe0" + b"\x00" * 1024, "image/jpeg")


@pytest.fixture
def api_app():
    from fitplan_service.main import app

    yield app
    app.dependency_overrides.clear()


def override_completer(app, completer: ScriptedCompleter) -> None:
    from fitplan_service.services.plan_generation import PlanGenerationService, get_plan_generation_service

    app.dependency_overrides[get_plan_generation_service] = lambda: PlanGenerationService(completer)


@pytest.fixture
def client(api_app, good_replies):
    completer = ScriptedCompleter(good_replies)
    override_completer(api_app, completer)
    with TestClient(api_app) as c:
        c.completer = completer
        yield c
