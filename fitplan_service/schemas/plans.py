import math
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_WEIGHT_GOAL_KG = 50.0


def _whole_calories(value):
    if isinstance(value, float) and math.isfinite(value):
        return round(value)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Exercise(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    name: str
    sets: str
    reps: str
    rest: str


class DayPlan(CamelModel):
    day: str
    exercises: list[Exercise] = Field(default_factory=list)


class WorkoutPlan(CamelModel):
    weekly_schedule: list[DayPlan] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)


class Meal(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True)

    time: str
    name: str
    foods: list[str] = Field(default_factory=list)
    calories: int

    @field_validator("calories", mode="before")
    @classmethod
    def round_calories(cls, value):
        return _whole_calories(value)


class MealPlan(CamelModel):
    daily_calories: int = 0
    meals: list[Meal] = Field(default_factory=list)
    tips: list[str] = Field(default_factory=list)

    @field_validator("daily_calories", mode="before")
    @classmethod
    def round_daily_calories(cls, value):
        return _whole_calories(value)


class GeneratePlanRequest(CamelModel):
    image: str | None = None
    weight_goal: float | None = None


class GeneratePlanResponse(CamelModel):
    analysis: str
    workout_plan: WorkoutPlan
    meal_plan: MealPlan


class ErrorResponse(BaseModel):
    error: str


class UserPlan(CamelModel):
    photo: str
    weight_goal_kg: float = Field(alias="weightGoal", gt=0, le=MAX_WEIGHT_GOAL_KG)
    current_analysis: str
    workout_plan: WorkoutPlan
    meal_plan: MealPlan
    created_at: datetime
