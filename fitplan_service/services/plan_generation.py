from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from ..exceptions import PlanGenerationError
from ..logging_config import stage_context
from ..metrics import PLAN_GENERATION_FAILURES_TOTAL, PLANS_GENERATED_TOTAL
from ..prompts import PromptSpec, build_plan_prompts
from ..schemas.plans import GeneratePlanResponse, MealPlan, WorkoutPlan
from . import llm_wrapper
from .response_parser import parse_analysis, parse_meal_plan, parse_workout_plan

logger = structlog.get_logger(__name__)

Completer = Callable[[PromptSpec], Awaitable[str]]


def assemble_plan(analysis: str, workout_plan: WorkoutPlan, meal_plan: MealPlan) -> GeneratePlanResponse:
    return GeneratePlanResponse(analysis=analysis, workout_plan=workout_plan, meal_plan=meal_plan)


class PlanGenerationService:
    """Runs the analysis, workout and meal stages for one (image, goal) pair.

    The three completions are independent and run concurrently. The first
    failure aborts the whole request; there is no partial result.
    """

    def __init__(self, completer: Completer | None = None) -> None:
        self._complete = completer or llm_wrapper.complete

    async def _run_stage(self, spec: PromptSpec) -> str:
        with stage_context(spec.stage):
            text = await self._complete(spec)
            logger.info("plan_stage_completed")
        return text

    async def _run_all(self, specs: list[PromptSpec]) -> list[str]:
        # The group cancels and joins the remaining stages before re-raising.
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(self._run_stage(spec)) for spec in specs]
        except ExceptionGroup as failed:
            raise failed.exceptions[0] from None
        return [task.result() for task in tasks]

    async def generate(self, image: str, weight_goal_kg: float) -> GeneratePlanResponse:
        prompts = build_plan_prompts(image, weight_goal_kg)
        logger.info("plan_generation_started", weight_goal_kg=weight_goal_kg)

        try:
            analysis_text, workout_text, meal_text = await self._run_all(list(prompts))
            plan = assemble_plan(
                parse_analysis(analysis_text),
                parse_workout_plan(workout_text),
                parse_meal_plan(meal_text),
            )
        except PlanGenerationError as exc:
            PLAN_GENERATION_FAILURES_TOTAL.labels(stage=exc.stage or "unknown").inc()
            raise
        except Exception as exc:
            PLAN_GENERATION_FAILURES_TOTAL.labels(stage="unknown").inc()
            raise PlanGenerationError("Plan generation failed") from exc

        PLANS_GENERATED_TOTAL.inc()
        logger.info(
            "plan_generation_completed",
            workout_days=len(plan.workout_plan.weekly_schedule),
            meals=len(plan.meal_plan.meals),
        )
        return plan


def get_plan_generation_service() -> PlanGenerationService:
    return PlanGenerationService()
