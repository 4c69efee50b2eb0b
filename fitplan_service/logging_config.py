"""structlog setup shared by the HTTP service and the ``fitplan`` command.

Every event carries the service name, the environment and, inside a request,
the correlation id. Events emitted while a pipeline stage runs also carry
``stage`` (see :func:`stage_context`).
"""

import logging
import os
import sys
from contextlib import contextmanager

import sentry_sdk
import structlog
from asgi_correlation_id.context import correlation_id
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.httpx import HttpxIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from structlog.contextvars import bound_contextvars, merge_contextvars

DEFAULT_SERVICE_NAME = "fitplan-service"
DEV_ENVIRONMENTS = frozenset({"local", "dev"})


def _static_fields(**fields):
    def processor(logger, method_name, event_dict):
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _request_correlation(logger, method_name, event_dict):
    cid = correlation_id.get(None)
    if cid is not None:
        event_dict["correlation_id"] = cid
    return event_dict


@contextmanager
def stage_context(stage: str):
    """Tag log events (and the Sentry scope) with the running pipeline stage."""
    with bound_contextvars(stage=stage), sentry_sdk.new_scope() as scope:
        scope.set_tag("stage", stage)
        yield


def _choose_renderer(app_env: str):
    fmt = os.getenv("LOG_FORMAT", "").lower()
    if fmt == "json" or (not fmt and app_env not in DEV_ENVIRONMENTS):
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _init_sentry(service_name: str, app_env: str) -> None:
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return
    sentry_sdk.init(
        dsn=dsn,
        environment=app_env,
        integrations=[
            FastApiIntegration(),
            HttpxIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0")),
        send_default_pii=False,
    )
    sentry_sdk.set_tag("service", service_name)


def configure_logging(default_service_name: str = DEFAULT_SERVICE_NAME, *, stream=None) -> None:
    service_name = os.getenv("SERVICE_NAME", default_service_name)
    app_env = os.getenv("APP_ENV", "local")
    log_level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    _init_sentry(service_name, app_env)

    # stdlib loggers (uvicorn, httpx) write to the same stream.
    logging.basicConfig(format="%(message)s", stream=stream or sys.stdout, level=log_level, force=True)

    structlog.configure(
        processors=[
            merge_contextvars,
            _static_fields(service=service_name, env=app_env),
            _request_correlation,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _choose_renderer(app_env),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
