from fitplan_service.prompts import STAGE_ANALYSIS, STAGE_MEAL, STAGE_WORKOUT, build_plan_prompts


def test_three_independent_prompts(image_data_url):
    prompts = build_plan_prompts(image_data_url, 5.0)
    assert [spec.stage for spec in prompts] == [STAGE_ANALYSIS, STAGE_WORKOUT, STAGE_MEAL]


def test_analysis_prompt_carries_image(image_data_url):
    analysis = build_plan_prompts(image_data_url, 5.0).analysis
    assert analysis.max_tokens == 300
    assert analysis.json_mode is False
    (message,) = analysis.messages
    assert message["role"] == "user"
    parts = {part["type"]: part for part in message["content"]}
    assert parts["image_url"]["image_url"]["url"] == image_data_url
    assert "3 sentences" in parts["text"]["text"]


def test_workout_prompt_mandates_shape(image_data_url):
    workout = build_plan_prompts(image_data_url, 5.0).workout
    assert workout.max_tokens == 2000
    assert workout.json_mode is True
    system, user = workout.messages
    assert system["role"] == "system" and user["role"] == "user"
    for token in ('"weeklySchedule"', '"exercises"', '"sets"', '"reps"', '"rest"', '"tips"', "5-day", "5-6 exercises"):
        assert token in system["content"]
    assert "losing 5kg" in system["content"]
    assert "5kg" in user["content"]
    assert image_data_url not in system["content"]


def test_meal_prompt_mandates_shape(image_data_url):
    meal = build_plan_prompts(image_data_url, 2.5).meal
    assert meal.max_tokens == 2000
    assert meal.json_mode is True
    system, user = meal.messages
    for token in ('"dailyCalories"', '"meals"', '"foods"', '"calories"', '"time"', "5-6 meals"):
        assert token in system["content"]
    assert "2.5kg" in user["content"]


def test_token_ceilings_follow_settings(monkeypatch, image_data_url):
    monkeypatch.setenv("ANALYSIS_MAX_TOKENS", "150")
    monkeypatch.setenv("PLAN_MAX_TOKENS", "not-a-number")
    prompts = build_plan_prompts(image_data_url, 5.0)
    assert prompts.analysis.max_tokens == 150
    assert prompts.workout.max_tokens == 2000
