"""Button handling for the calculator keypad.

The display text is owned by the caller; :func:`press_key` maps the current
text and one key press to the next text.

A result shown in exponent form, such as ``1e-05``, cannot be extended: the
grammar has no exponent notation, so ``1e-05*2`` reads as ``1`` followed by
the constant ``e`` and evaluates to ``Error``.
"""

from __future__ import annotations

from .engine import ERROR_DISPLAY, evaluate
from .settings import CalculatorSettings

CLEAR_KEY = "C"
DELETE_KEY = "DEL"
EQUALS_KEY = "="

KEYPAD_LAYOUT: tuple[tuple[str, ...], ...] = (
    ("7", "8", "9", "/", "sin", "cos", "tan", CLEAR_KEY),
    ("4", "5", "6", "*", "ln", "log", "sqrt", "("),
    ("1", "2", "3", "-", "^", "e", "pi", ")"),
    ("0", ".", EQUALS_KEY, "+", "exp", "abs", DELETE_KEY),
)

KEYPAD_KEYS = frozenset(key for row in KEYPAD_LAYOUT for key in row)


class KeypadError(ValueError):
    """Raised for a key that is not on the keypad."""


def press_key(display: str, key: str, *, settings: CalculatorSettings | None = None) -> str:
    """Return the display text after pressing ``key``."""

    if key not in KEYPAD_KEYS:
        raise KeypadError(f"Unknown key '{key}'")
    if key == CLEAR_KEY:
        return ""
    if key == DELETE_KEY:
        return display[:-1]
    if key == EQUALS_KEY:
        settings = settings or CalculatorSettings()
        result = evaluate(
            display,
            max_depth=settings.max_depth,
            max_length=settings.max_expression_length,
        )
        return result.display
    # Typing after a failed evaluation starts a new expression.
    if display == ERROR_DISPLAY:
        display = ""
    return display + key


__all__ = [
    "CLEAR_KEY",
    "DELETE_KEY",
    "EQUALS_KEY",
    "KEYPAD_KEYS",
    "KEYPAD_LAYOUT",
    "KeypadError",
    "press_key",
]
