"""Logging helpers with request correlation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from flask import Flask, g, has_request_context, request

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
BASE_LOGGER = "sci_calc_server"


def get_logger(name: str = BASE_LOGGER) -> logging.Logger:
    """Return the service logger, or a child of it for ``name``."""

    base = logging.getLogger(BASE_LOGGER)
    if not base.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        base.addHandler(handler)
        base.setLevel(logging.INFO)
    if name == BASE_LOGGER:
        return base
    return base.getChild(name)


def _request_context() -> dict[str, Any]:
    if not has_request_context():
        return {"request_id": "-", "path": "-", "method": "-"}
    return {
        "request_id": getattr(g, "request_id", "-"),
        "path": request.path,
        "method": request.method,
    }


def install_request_logging(app: Flask) -> None:
    logger = get_logger("http")

    @app.before_request
    def _begin_request() -> None:
        g.request_id = uuid.uuid4().hex
        g.request_started = time.perf_counter()

    @app.after_request
    def _after_request(response):
        duration_ms = 0.0
        if hasattr(g, "request_started"):
            duration_ms = (time.perf_counter() - g.request_started) * 1000
        context = _request_context()
        logger.info(
            "%s %s -> %s (%.2f ms)",
            context["method"],
            context["path"],
            response.status_code,
            duration_ms,
            extra={**context, "status": response.status_code, "duration_ms": round(duration_ms, 2)},
        )
        response.headers.setdefault("X-Request-ID", getattr(g, "request_id", ""))
        return response

    @app.teardown_request
    def _teardown_request(exc):  # pragma: no cover - flask hooks
        if exc is not None:
            logger.error("request error: %s", exc, extra=_request_context())


__all__ = ["BASE_LOGGER", "get_logger", "install_request_logging"]
