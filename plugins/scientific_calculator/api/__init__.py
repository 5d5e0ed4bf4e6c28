"""API routes for the Scientific Calculator plugin."""

from __future__ import annotations

import math

import pydantic
from flask import Blueprint, Response, current_app, request

from common.errors import ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    ERROR_DISPLAY,
    KEYPAD_LAYOUT,
    CalculatorSettings,
    KeypadError,
    evaluate,
    list_constants,
    list_functions,
    load_settings,
    press_key,
)

logger = get_logger("sci_calc.api")


class EvaluatePayload(SchemaModel):
    expression: str


class KeypadPayload(SchemaModel):
    model_config = pydantic.ConfigDict(str_strip_whitespace=False)

    display: str = ""
    key: str


api_bp = Blueprint("scientific_calculator_api", __name__, url_prefix="/api/scientific_calculator")


def _settings() -> CalculatorSettings:
    settings = current_app.config.get("PLUGIN_SETTINGS", {}).get("scientific_calculator", {})
    return load_settings(settings)


def _invalid_request(exc: ValidationError) -> Response:
    return fail(
        ValidationAppError(
            message=str(exc),
            code="sci_calc.invalid_request",
            details=getattr(exc, "details", None),
        )
    )


@api_bp.get("/functions")
def functions() -> Response:
    return ok(
        {
            "functions": list_functions(),
            "constants": list_constants(),
            "keypad": [list(row) for row in KEYPAD_LAYOUT],
        }
    )


@api_bp.post("/evaluate")
def evaluate_endpoint() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(EvaluatePayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)

    settings = _settings()
    result = evaluate(
        payload.expression,
        max_depth=settings.max_depth,
        max_length=settings.max_expression_length,
    )
    if not result.ok:
        logger.info("expression rejected: %s", result.error)
        return fail(ValidationAppError(message=ERROR_DISPLAY, code="sci_calc.invalid_expression"))

    finite = math.isfinite(result.value)
    return ok(
        {
            "expression": result.expression,
            "display": result.display,
            "value": result.value if finite else None,
            "finite": finite,
        }
    )


@api_bp.post("/keypad")
def keypad() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(KeypadPayload, raw_payload)
    except ValidationError as exc:
        return _invalid_request(exc)
    try:
        display = press_key(payload.display, payload.key, settings=_settings())
    except KeypadError as exc:
        return fail(ValidationAppError(message=str(exc), code="sci_calc.invalid_key"))
    return ok({"display": display})


blueprints = [api_bp]


__all__ = ["blueprints", "evaluate_endpoint", "functions", "keypad"]
