import base64
import json

from fastapi.testclient import TestClient

from conftest import ScriptedCompleter, override_completer
from fitplan_service.images import MAX_IMAGE_BYTES
from fitplan_service.prompts import STAGE_ANALYSIS, STAGE_MEAL, STAGE_WORKOUT


def test_health(client: TestClient):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_generate_plan_returns_assembled_payload(client: TestClient, image_data_url: str):
    r = client.post("/api/generate-plan", json={"image": image_data_url, "weightGoal": 5})
    assert r.status_code == 200, r.text
    body = r.json()
    assert set(body) == {"analysis", "workoutPlan", "mealPlan"}
    assert body["analysis"]
    assert len(body["workoutPlan"]["weeklySchedule"]) == 5
    assert body["workoutPlan"]["weeklySchedule"][0]["exercises"][0]["sets"] == "1 set"
    assert body["mealPlan"]["dailyCalories"] == 1800
    assert 5 <= len(body["mealPlan"]["meals"]) <= 6
    assert [spec.stage for spec in client.completer.calls] == [STAGE_ANALYSIS, STAGE_WORKOUT, STAGE_MEAL]


def test_generate_plan_unprefixed_route(client: TestClient, image_data_url: str):
    r = client.post("/generate-plan", json={"image": image_data_url, "weightGoal": "5"})
    assert r.status_code == 200, r.text


def test_missing_fields_are_client_errors(client: TestClient, image_data_url: str):
    for payload in ({}, {"image": image_data_url}, {"weightGoal": 5}, {"image": "", "weightGoal": 5}):
        r = client.post("/api/generate-plan", json=payload)
        assert r.status_code == 400
        assert r.json() == {"error": "Image and weight goal are required"}
    assert client.completer.calls == []


def test_out_of_range_goal_is_rejected(client: TestClient, image_data_url: str):
    for goal in (-1, 50.5, 1000):
        r = client.post("/api/generate-plan", json={"image": image_data_url, "weightGoal": goal})
        assert r.status_code == 400
        assert "error" in r.json()
    assert client.completer.calls == []


def test_non_numeric_goal_is_rejected(client: TestClient, image_data_url: str):
    r = client.post("/api/generate-plan", json={"image": image_data_url, "weightGoal": "a lot"})
    assert r.status_code == 400
    assert "weightGoal" in r.json()["error"]


def test_oversized_image_is_rejected(client: TestClient):
    big = "data:image/jpeg;base64," + base64.b64encode(b"\x00" * (MAX_IMAGE_BYTES + 3)).decode()
    r = client.post("/api/generate-plan", json={"image": big, "weightGoal": 5})
    assert r.status_code == 400
    assert client.completer.calls == []


def test_provider_failure_is_server_error(api_app, good_replies, image_data_url: str):
    replies = {**good_replies, STAGE_MEAL: ConnectionError("provider unreachable")}
    override_completer(api_app, ScriptedCompleter(replies))
    with TestClient(api_app) as c:
        r = c.post("/api/generate-plan", json={"image": image_data_url, "weightGoal": 5})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to generate plan. Please try again."}


def test_malformed_structured_output_is_server_error(api_app, good_replies, image_data_url: str):
    replies = {**good_replies, STAGE_WORKOUT: "here is your plan: {"}
    override_completer(api_app, ScriptedCompleter(replies))
    with TestClient(api_app) as c:
        r = c.post("/api/generate-plan", json={"image": image_data_url, "weightGoal": 5})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to generate plan. Please try again."}


def test_empty_structured_output_still_succeeds(api_app, good_replies, image_data_url: str):
    replies = {**good_replies, STAGE_WORKOUT: "", STAGE_ANALYSIS: ""}
    override_completer(api_app, ScriptedCompleter(replies))
    with TestClient(api_app) as c:
        r = c.post("/api/generate-plan", json={"image": image_data_url, "weightGoal": 5})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["analysis"] == "Analysis unavailable."
    assert body["workoutPlan"] == {"weeklySchedule": [], "tips": []}
    assert json.loads(good_replies[STAGE_MEAL])["dailyCalories"] == body["mealPlan"]["dailyCalories"]
