"""Turn raw completion text into analysis text and validated plan models.

Empty structured replies become empty plans. Anything else that is not a JSON
object of the expected shape is a fatal ``StructuredOutputError``.
"""

from __future__ import annotations

import json
from typing import TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from ..exceptions import StructuredOutputError
from ..prompts import STAGE_MEAL, STAGE_WORKOUT
from ..schemas.plans import MealPlan, WorkoutPlan

logger = structlog.get_logger(__name__)

ANALYSIS_FALLBACK = "Analysis unavailable."

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_analysis(text: str | None) -> str:
    cleaned = (text or "").strip()
    return cleaned or ANALYSIS_FALLBACK


def _parse_structured(text: str | None, model: type[ModelT], *, stage: str) -> ModelT:
    raw = (text or "").strip()
    if not raw:
        logger.warning("empty_structured_response", stage=stage)
        return model.model_validate({})

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("structured_response_not_json", stage=stage, preview=raw[:500])
        raise StructuredOutputError(f"{stage} response is not valid JSON", stage=stage) from exc

    if not isinstance(payload, dict):
        logger.error("structured_response_not_object", stage=stage, payload_type=type(payload).__name__)
        raise StructuredOutputError(f"{stage} response is not a JSON object", stage=stage)

    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        logger.error("structured_response_invalid_shape", stage=stage, errors=exc.errors(include_url=False))
        raise StructuredOutputError(f"{stage} response does not match the expected shape", stage=stage) from exc


def parse_workout_plan(text: str | None) -> WorkoutPlan:
    return _parse_structured(text, WorkoutPlan, stage=STAGE_WORKOUT)


def parse_meal_plan(text: str | None) -> MealPlan:
    return _parse_structured(text, MealPlan, stage=STAGE_MEAL)
