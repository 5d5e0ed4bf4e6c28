"""Configuration helpers for the scientific calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .engine import DEFAULT_MAX_DEPTH


@dataclass(frozen=True, slots=True)
class CalculatorSettings:
    max_expression_length: int | None = None
    max_depth: int = DEFAULT_MAX_DEPTH


def _positive_int(raw: Any, default: int | None) -> int | None:
    if raw is None:
        return default
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(value, 1)


def load_settings(raw: Mapping[str, Any] | None) -> CalculatorSettings:
    """Build settings from the ``scientific_calculator`` block of ``config.yml``.

    Missing or malformed values fall back to the engine defaults so a bad
    config file never breaks evaluation. Without ``max_expression_length``
    the input length is not capped.
    """

    raw = raw or {}
    return CalculatorSettings(
        max_expression_length=_positive_int(raw.get("max_expression_length"), None),
        max_depth=_positive_int(raw.get("max_depth"), DEFAULT_MAX_DEPTH),
    )


__all__ = ["CalculatorSettings", "load_settings"]
