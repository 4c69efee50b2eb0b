from __future__ import annotations

from dataclasses import dataclass, field
from textwrap import dedent
from typing import Any

from ..config import settings
from ..goals import format_weight_goal

STAGE_ANALYSIS = "analysis"
STAGE_WORKOUT = "workout"
STAGE_MEAL = "meal"

ANALYSIS_PROMPT = (
    "Analyze this body photo and give a brief, motivating assessment of the person's current "
    "body composition. Be professional, respectful and encouraging. Focus on positive aspects "
    "and areas for improvement. Maximum 3 sentences."
)

WORKOUT_JSON_SHAPE = """
{
  "weeklySchedule": [
    {
      "day": "Monday - Workout A",
      "exercises": [
        {
          "name": "Exercise name",
          "sets": "3 sets",
          "reps": "12-15 reps",
          "rest": "60s rest"
        }
      ]
    }
  ],
  "tips": [
    "Tip 1",
    "Tip 2",
    "Tip 3"
  ]
}
""".strip()

MEAL_JSON_SHAPE = """
{
  "dailyCalories": 1800,
  "meals": [
    {
      "time": "07:00",
      "name": "Breakfast",
      "foods": [
        "Food 1 with quantity",
        "Food 2 with quantity"
      ],
      "calories": 400
    }
  ],
  "tips": [
    "Nutrition tip 1",
    "Nutrition tip 2",
    "Nutrition tip 3"
  ]
}
""".strip()


@dataclass(frozen=True)
class PromptSpec:
    stage: str
    messages: list[dict[str, Any]] = field(default_factory=list)
    max_tokens: int = 2000
    json_mode: bool = False


@dataclass(frozen=True)
class PlanPrompts:
    analysis: PromptSpec
    workout: PromptSpec
    meal: PromptSpec

    def __iter__(self):
        return iter((self.analysis, self.workout, self.meal))


def _workout_system_prompt(goal: str) -> str:
    return dedent(
        f"""
        You are a personal trainer who specializes in home workouts. Create a complete, detailed weekly
        workout plan for losing {goal}kg. The plan must only use exercises that can be done at home with
        no equipment or with basic household items (bottles, chairs, etc).

        Return ONLY valid JSON in the following format:
        {{shape}}

        Create a 5-day plan (Monday to Friday) with 5-6 exercises per day. Include a warm-up and a
        cool-down stretch. Be specific and practical.
        """
    ).strip().replace("{shape}", WORKOUT_JSON_SHAPE)


def _meal_system_prompt(goal: str) -> str:
    return dedent(
        f"""
        You are a nutritionist who specializes in healthy weight loss. Create a complete, balanced daily
        meal plan for losing {goal}kg.

        Return ONLY valid JSON in the following format:
        {{shape}}

        Create 5-6 meals per day (breakfast, morning snack, lunch, afternoon snack, dinner, optional
        supper). Be specific with quantities and calories. Focus on healthy, affordable and practical foods.
        """
    ).strip().replace("{shape}", MEAL_JSON_SHAPE)


def build_analysis_prompt(image: str) -> PromptSpec:
    """Single vision turn; the reply is free text."""
    return PromptSpec(
        stage=STAGE_ANALYSIS,
        messages=[
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": ANALYSIS_PROMPT},
                    {"type": "image_url", "image_url": {"url": image}},
                ],
            }
        ],
        max_tokens=settings.analysis_max_tokens,
    )


def build_workout_prompt(weight_goal_kg: float) -> PromptSpec:
    goal = format_weight_goal(weight_goal_kg)
    return PromptSpec(
        stage=STAGE_WORKOUT,
        messages=[
            {"role": "system", "content": _workout_system_prompt(goal)},
            {"role": "user", "content": f"Create a home workout plan to lose {goal}kg."},
        ],
        max_tokens=settings.plan_max_tokens,
        json_mode=True,
    )


def build_meal_prompt(weight_goal_kg: float) -> PromptSpec:
    goal = format_weight_goal(weight_goal_kg)
    return PromptSpec(
        stage=STAGE_MEAL,
        messages=[
            {"role": "system", "content": _meal_system_prompt(goal)},
            {"role": "user", "content": f"Create a meal plan to lose {goal}kg in a healthy way."},
        ],
        max_tokens=settings.plan_max_tokens,
        json_mode=True,
    )


def build_plan_prompts(image: str, weight_goal_kg: float) -> PlanPrompts:
    return PlanPrompts(
        analysis=build_analysis_prompt(image),
        workout=build_workout_prompt(weight_goal_kg),
        meal=build_meal_prompt(weight_goal_kg),
    )
