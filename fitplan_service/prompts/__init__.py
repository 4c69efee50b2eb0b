from .fitness_plan import (
    STAGE_ANALYSIS,
    STAGE_MEAL,
    STAGE_WORKOUT,
    PlanPrompts,
    PromptSpec,
    build_analysis_prompt,
    build_meal_prompt,
    build_plan_prompts,
    build_workout_prompt,
)

__all__ = [
    "STAGE_ANALYSIS",
    "STAGE_MEAL",
    "STAGE_WORKOUT",
    "PlanPrompts",
    "PromptSpec",
    "build_analysis_prompt",
    "build_meal_prompt",
    "build_plan_prompts",
    "build_workout_prompt",
]
