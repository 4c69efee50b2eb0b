from __future__ import annotations

import math
from typing import Any

from .exceptions import InvalidWeightGoalError
from .schemas.plans import MAX_WEIGHT_GOAL_KG


def validate_weight_goal(value: Any) -> float:
    """Return the goal in kg as a float, accepted only when 0 < goal <= 50."""
    if value is None or isinstance(value, bool):
        raise InvalidWeightGoalError("Weight goal is required")
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
        if not value:
            raise InvalidWeightGoalError("Weight goal is required")
    try:
        goal = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidWeightGoalError(f"Weight goal must be a number, got {value!r}") from exc
    if math.isnan(goal) or goal <= 0 or goal > MAX_WEIGHT_GOAL_KG:
        raise InvalidWeightGoalError(f"Weight goal must be greater than 0 and at most {MAX_WEIGHT_GOAL_KG:g} kg")
    return goal


def format_weight_goal(goal: float) -> str:
    return f"{goal:g}"
