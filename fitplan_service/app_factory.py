import os
import uuid
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator


def instrument_with_metrics(app: FastAPI, *, endpoint: str = "/metrics") -> None:
    Instrumentator().instrument(app).expose(app, endpoint=endpoint, include_in_schema=False)


def configure_cors_from_env(app: FastAPI, *, origins_env: str = "CORS_ORIGINS") -> None:
    cors_origins = os.getenv(origins_env, "*")
    allow_origins = [o.strip() for o in cors_origins.split(",") if o.strip()] if cors_origins != "*" else ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=allow_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    detail = f"{location}: {message}" if location else message
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": detail})


def create_service_app(
    *,
    title: str,
    version: str = "0.1.0",
    enable_metrics: bool = True,
    enable_correlation_id: bool = True,
    correlation_header_name: str = "X-Request-ID",
    **fastapi_kwargs: Any,
) -> FastAPI:
    app = FastAPI(title=title, version=version, **fastapi_kwargs)

    if enable_metrics:
        instrument_with_metrics(app)

    configure_cors_from_env(app)

    if enable_correlation_id:
        app.add_middleware(
            CorrelationIdMiddleware,
            header_name=correlation_header_name,
            generator=lambda: str(uuid.uuid4()),
            update_request_header=True,
        )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    return app
