"""Client-side flow: collect a photo and a goal, request a plan, keep the result.

States move ``upload -> generating -> results``; ``reset`` goes back to
``upload``. A plan found in the snapshot store at construction time opens the
orchestrator directly in ``results``.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Protocol

import structlog

from ..exceptions import ImageIntakeError, ImageTooLargeError, InvalidWeightGoalError, OrchestratorStateError
from ..goals import validate_weight_goal
from ..images import MAX_IMAGE_BYTES
from ..schemas.plans import GeneratePlanResponse, UserPlan
from .image_intake import SelectedImage, load_image
from .snapshot_store import SnapshotStore

logger = structlog.get_logger(__name__)

GENERATION_STAGES = (
    "Analyzing body composition",
    "Generating workout plan",
    "Creating meal plan",
)

IMAGE_TOO_LARGE_MESSAGE = f"The photo must be at most {MAX_IMAGE_BYTES // (1024 * 1024)}MB"
IMAGE_INVALID_MESSAGE = "The photo could not be read"
MISSING_INPUT_MESSAGE = "Please upload a photo and set your weight goal"
GOAL_RANGE_MESSAGE = "Weight goal must be greater than 0 and at most 50 kg"
GENERATION_FAILED_MESSAGE = "Failed to generate plan. Please try again."
GENERATION_SUCCEEDED_MESSAGE = "Plan generated successfully!"


class PlanStep(str, Enum):
    UPLOAD = "upload"
    GENERATING = "generating"
    RESULTS = "results"


class PlanApi(Protocol):
    async def generate_plan(self, image: str, weight_goal: float) -> GeneratePlanResponse: ...


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LogNotifier:
    def success(self, message: str) -> None:
        logger.info("user_notification", level="success", message=message)

    def error(self, message: str) -> None:
        logger.warning("user_notification", level="error", message=message)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PlanOrchestrator:
    def __init__(
        self,
        api: PlanApi,
        store: SnapshotStore,
        notifier: Notifier | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._api = api
        self._store = store
        self._notifier = notifier or LogNotifier()
        self._clock = clock

        self.step = PlanStep.UPLOAD
        self.photo: SelectedImage | None = None
        self.weight_goal = ""
        self.user_plan: UserPlan | None = None

        saved = store.load()
        if saved is not None:
            self.user_plan = saved
            self.step = PlanStep.RESULTS
            logger.info("saved_plan_restored", created_at=saved.created_at.isoformat())

    @property
    def can_submit(self) -> bool:
        return self.step == PlanStep.UPLOAD and self.photo is not None and bool(self.weight_goal.strip())

    def _require_step(self, expected: PlanStep, action: str) -> None:
        if self.step != expected:
            raise OrchestratorStateError(f"Cannot {action} while in '{self.step.value}' state")

    def select_photo(self, path: str | Path) -> SelectedImage | None:
        self._require_step(PlanStep.UPLOAD, "select a photo")
        try:
            image = load_image(path)
        except ImageTooLargeError as exc:
            logger.info("photo_rejected", path=str(path), size=exc.size)
            self._notifier.error(IMAGE_TOO_LARGE_MESSAGE)
            return None
        except (ImageIntakeError, OSError) as exc:
            logger.info("photo_unreadable", path=str(path), error=str(exc))
            self._notifier.error(IMAGE_INVALID_MESSAGE)
            return None
        self.photo = image
        return image

    def set_weight_goal(self, value: str) -> None:
        self._require_step(PlanStep.UPLOAD, "change the weight goal")
        self.weight_goal = str(value)

    async def submit(self) -> UserPlan | None:
        self._require_step(PlanStep.UPLOAD, "submit")
        if self.photo is None or not self.weight_goal.strip():
            self._notifier.error(MISSING_INPUT_MESSAGE)
            return None
        try:
            goal = validate_weight_goal(self.weight_goal)
        except InvalidWeightGoalError:
            self._notifier.error(GOAL_RANGE_MESSAGE)
            return None

        self.step = PlanStep.GENERATING
        photo = self.photo.data_url
        try:
            result = await self._api.generate_plan(photo, goal)
            plan = UserPlan(
                photo=photo,
                weight_goal_kg=goal,
                current_analysis=result.analysis,
                workout_plan=result.workout_plan,
                meal_plan=result.meal_plan,
                created_at=self._clock(),
            )
            self._store.save(plan)
        except Exception as exc:
            logger.error("plan_generation_failed", error=str(exc), error_type=type(exc).__name__)
            self.step = PlanStep.UPLOAD
            self._notifier.error(GENERATION_FAILED_MESSAGE)
            return None

        self.user_plan = plan
        self.step = PlanStep.RESULTS
        self._notifier.success(GENERATION_SUCCEEDED_MESSAGE)
        return plan

    def reset(self) -> None:
        if self.step == PlanStep.UPLOAD:
            return
        self._require_step(PlanStep.RESULTS, "reset")
        self._store.clear()
        self.photo = None
        self.weight_goal = ""
        self.user_plan = None
        self.step = PlanStep.UPLOAD
