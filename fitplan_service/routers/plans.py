import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..exceptions import ImageIntakeError, InvalidWeightGoalError, PlanGenerationError
from ..goals import validate_weight_goal
from ..images import MAX_IMAGE_BYTES, decoded_size, ensure_within_limit
from ..schemas.plans import ErrorResponse, GeneratePlanRequest, GeneratePlanResponse
from ..services.plan_generation import PlanGenerationService, get_plan_generation_service

router = APIRouter(tags=["plans"])

logger = structlog.get_logger(__name__)

MISSING_INPUT_ERROR = "Image and weight goal are required"
GENERATION_ERROR = "Failed to generate plan. Please try again."


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/generate-plan",
    response_model=GeneratePlanResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_plan(
    payload: GeneratePlanRequest,
    service: PlanGenerationService = Depends(get_plan_generation_service),
):
    if not payload.image or not payload.weight_goal:
        return error_response(MISSING_INPUT_ERROR, status.HTTP_400_BAD_REQUEST)

    try:
        weight_goal_kg = validate_weight_goal(payload.weight_goal)
        ensure_within_limit(decoded_size(payload.image), MAX_IMAGE_BYTES)
    except (InvalidWeightGoalError, ImageIntakeError) as exc:
        logger.info("generate_plan_rejected", reason=str(exc))
        return error_response(str(exc), status.HTTP_400_BAD_REQUEST)

    try:
        return await service.generate(payload.image, weight_goal_kg)
    except PlanGenerationError as exc:
        logger.error("generate_plan_failed", stage=exc.stage, error=str(exc), exc_info=exc)
    except Exception as exc:
        logger.exception("generate_plan_unexpected_error", error=str(exc))
    return error_response(GENERATION_ERROR, status.HTTP_500_INTERNAL_SERVER_ERROR)
