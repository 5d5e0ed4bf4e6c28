"""Exports for scientific calculator core."""

from .engine import (
    ERROR_DISPLAY,
    EvaluationResult,
    ExpressionError,
    ExpressionSyntaxError,
    MalformedNumberError,
    NestingDepthError,
    UnknownIdentifierError,
    evaluate,
    evaluate_expression,
    format_result,
    list_constants,
    list_functions,
)
from .keypad import KEYPAD_LAYOUT, KeypadError, press_key
from .settings import CalculatorSettings, load_settings

__all__ = [
    "ERROR_DISPLAY",
    "EvaluationResult",
    "ExpressionError",
    "ExpressionSyntaxError",
    "MalformedNumberError",
    "NestingDepthError",
    "UnknownIdentifierError",
    "evaluate",
    "evaluate_expression",
    "format_result",
    "list_constants",
    "list_functions",
    "KEYPAD_LAYOUT",
    "KeypadError",
    "press_key",
    "CalculatorSettings",
    "load_settings",
]
