"""
HTTP client for the fitplan-service ``/api/generate-plan`` endpoint.

Usage:
    async with FitPlanApiClient(base_url) as client:
        result = await client.generate_plan(image_data_url, 5.0)
"""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from ..config import settings
from ..exceptions import PlanRequestError
from ..schemas.plans import GeneratePlanRequest, GeneratePlanResponse

logger = structlog.get_logger(__name__)

GENERATE_PLAN_PATH = "/api/generate-plan"


class FitPlanApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | httpx.Timeout | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = (base_url or settings.fitplan_api_url).rstrip("/")
        if timeout is None:
            timeout = settings.client_timeout_seconds
        self._timeout = httpx.Timeout(timeout) if isinstance(timeout, int | float) else timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> FitPlanApiClient:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def generate_plan(self, image: str, weight_goal: float) -> GeneratePlanResponse:
        if self._client is None:
            raise RuntimeError("FitPlanApiClient must be used as an async context manager")

        body = GeneratePlanRequest(image=image, weight_goal=weight_goal).model_dump(by_alias=True)
        try:
            response = await self._client.post(GENERATE_PLAN_PATH, json=body)
        except httpx.HTTPError as exc:
            logger.error("http_request_failed", path=GENERATE_PLAN_PATH, error=str(exc))
            raise PlanRequestError(f"Request to plan service failed: {exc}") from exc

        if response.status_code != 200:
            logger.error(
                "unexpected_status_code",
                path=GENERATE_PLAN_PATH,
                status_code=response.status_code,
                body_preview=response.text[:500] if response.text else "",
            )
            raise PlanRequestError(_error_message(response), status_code=response.status_code)

        try:
            return GeneratePlanResponse.model_validate_json(response.content)
        except ValidationError as exc:
            logger.error("plan_response_invalid", body_preview=response.text[:500])
            raise PlanRequestError("Plan service returned an invalid payload", status_code=200) from exc


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"Plan service responded with status {response.status_code}"
