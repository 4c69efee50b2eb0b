"""Error types shared by the service pipeline and the client."""

from __future__ import annotations


class FitPlanError(Exception):
    pass


class ImageIntakeError(FitPlanError):
    pass


class EmptyImageError(ImageIntakeError):
    pass


class ImageTooLargeError(ImageIntakeError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Image is {size} bytes, the limit is {limit} bytes")
        self.size = size
        self.limit = limit


class PlanGenerationError(FitPlanError):
    """Failure of the plan-generation pipeline. Always fatal for the request."""

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        self.stage = stage


class ModelInvocationError(PlanGenerationError):
    pass


class StructuredOutputError(PlanGenerationError):
    pass


class PlanRequestError(FitPlanError):
    """The client could not obtain a plan from the service."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidWeightGoalError(FitPlanError):
    pass


class OrchestratorStateError(FitPlanError):
    pass
