"""Structured logging utilities built on structlog.

This module configures structlog on top of the standard library logging
module and exposes:

- ``configure_service_logging``: processor chain and renderer selection
  (JSON for production/log aggregation, console for local development).
- ``create_service_logger``: a lazily-resolved logger bound to a name.
- ``install_request_logging``: FastAPI middleware that binds a request id
  into context variables and logs one line per request.

Request URLs to the upstream API carry the credential as a query
parameter, so the httpx/httpcore loggers are held at WARNING.
"""

from __future__ import annotations

import logging
import sys
import time
import uuid
from typing import Any, Callable

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars, merge_contextvars
from structlog.typing import Processor

_SERVICE_CONTEXT = {"service.name": "unknown", "deployment.environment": "development"}

_QUIET_LOGGERS = ("httpx", "httpcore")


def add_service_context(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add service name and deployment environment to every log line."""
    for key, value in _SERVICE_CONTEXT.items():
        event_dict.setdefault(key, value)
    return event_dict


def configure_service_logging(
    service_name: str,
    environment: str = "development",
    log_level: str = "INFO",
    log_format: str = "",
) -> None:
    """Configure structlog for the service.

    Args:
        service_name: Logical service name written to ``service.name``.
        environment: Deployment environment; ``production`` selects JSON
            output unless ``log_format`` says otherwise.
        log_level: Root log level name.
        log_format: ``json`` or ``console``; empty follows ``environment``.
    """
    _SERVICE_CONTEXT["service.name"] = service_name
    _SERVICE_CONTEXT["deployment.environment"] = environment

    fmt = (log_format or "").lower()
    use_json = fmt == "json" or (not fmt and environment == "production")

    processors: list[Processor] = [
        merge_contextvars,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ]
    if use_json:
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors += [
            structlog.dev.set_exc_info,
            structlog.dev.ConsoleRenderer(colors=False),
        ]

    logging.basicConfig(
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Loggers are resolved on every call so a later reconfiguration (one per
    # app instance) is picked up by module-level loggers.
    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def create_service_logger(name: str | None = None) -> Any:
    """Return a lazily-resolved structlog logger, optionally bound to ``name``."""
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()


def install_request_logging(app, service_name: str) -> None:
    """Install middleware that logs one line per HTTP request.

    Only the method, path and status are recorded; query strings and bodies
    are left out of the log.
    """
    from fastapi import Request

    logger = create_service_logger("http")

    @app.middleware("http")
    async def _request_logging_middleware(request: "Request", call_next: Callable):
        clear_contextvars()
        bind_contextvars(
            request_id=request.headers.get("x-request-id") or uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            logger.info(
                "request_completed",
                service=service_name,
                status_code=getattr(response, "status_code", None),
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            clear_contextvars()
