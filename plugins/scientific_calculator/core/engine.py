"""Recursive-descent evaluation for scientific calculator expressions.

The grammar, from loosest to tightest binding::

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := '+' factor | '-' factor
                | operand ['^' factor]
    operand    := '(' expression ')' | number | constant | function factor

Scanning, parsing and arithmetic happen in a single pass over the text. A
unary sign applies to the whole following factor, so ``-2^2`` is ``-(2^2)``,
and a function consumes the whole following factor as its argument, so
``sin 30^2`` is ``sin(900)``.
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Callable

from common.logging import get_logger

logger = get_logger("calculator")

ERROR_DISPLAY = "Error"
DEFAULT_MAX_DEPTH = 100

_NUMBER_CHARS = frozenset(string.digits + ".")
_NAME_CHARS = frozenset(string.ascii_lowercase)


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or evaluated."""

    def __init__(self, message: str, *, position: int | None = None):
        super().__init__(message)
        self.position = position


class ExpressionSyntaxError(ExpressionError):
    """Unexpected character, unbalanced parenthesis or trailing input."""


class UnknownIdentifierError(ExpressionError):
    """A name that is neither a known function nor a constant."""


class MalformedNumberError(ExpressionError):
    """A digit run that does not convert to a float, such as ``1.2.3``."""


class NestingDepthError(ExpressionError):
    """Nesting of parentheses, signs or functions is deeper than allowed."""


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and int(value) % 2 == 1


def _divide(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _power(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf
    except ValueError:
        # math.pow rejects 0 to a negative power and negative bases with
        # fractional exponents; IEEE-754 defines both.
        if base == 0:
            if math.copysign(1.0, base) < 0 and _is_odd_integer(exponent):
                return -math.inf
            return math.inf
        return math.nan


def _ieee(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(value: float) -> float:
        try:
            return fn(value)
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan

    return wrapped


def _degrees(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(value: float) -> float:
        return fn(math.radians(value))

    return _ieee(wrapped)


def _logarithm(fn: Callable[[float], float]) -> Callable[[float], float]:
    def wrapped(value: float) -> float:
        if value == 0:
            return -math.inf
        if value < 0:
            return math.nan
        return fn(value)

    return wrapped


FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sqrt": _ieee(math.sqrt),
    "sin": _degrees(math.sin),
    "cos": _degrees(math.cos),
    "tan": _degrees(math.tan),
    "ln": _logarithm(math.log),
    "log": _logarithm(math.log10),
    "exp": _ieee(math.exp),
    "abs": abs,
}

CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
}


class _Parser:
    """Cursor over a single expression; one instance per evaluation."""

    __slots__ = ("text", "pos", "depth", "max_depth")

    def __init__(self, text: str, *, max_depth: int) -> None:
        self.text = text
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    @property
    def char(self) -> str:
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def _skip_spaces(self) -> None:
        while self.char == " ":
            self.pos += 1

    def _eat(self, symbol: str) -> bool:
        self._skip_spaces()
        if self.char == symbol:
            self.pos += 1
            return True
        return False

    def _unexpected(self) -> ExpressionSyntaxError:
        if not self.char:
            return ExpressionSyntaxError("Unexpected end of expression", position=self.pos)
        return ExpressionSyntaxError(f"Unexpected character '{self.char}'", position=self.pos)

    def parse(self) -> float:
        value = self._expression()
        self._skip_spaces()
        if self.pos < len(self.text):
            raise self._unexpected()
        return value

    def _expression(self) -> float:
        value = self._term()
        while True:
            if self._eat("+"):
                value += self._term()
            elif self._eat("-"):
                value -= self._term()
            else:
                return value

    def _term(self) -> float:
        value = self._factor()
        while True:
            if self._eat("*"):
                value *= self._factor()
            elif self._eat("/"):
                value = _divide(value, self._factor())
            else:
                return value

    def _factor(self) -> float:
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingDepthError(
                f"Expression nests deeper than {self.max_depth} levels", position=self.pos
            )
        try:
            if self._eat("+"):
                return self._factor()
            if self._eat("-"):
                return -self._factor()
            value = self._operand()
            if self._eat("^"):
                value = _power(value, self._factor())
            return value
        finally:
            self.depth -= 1

    def _operand(self) -> float:
        self._skip_spaces()
        start = self.pos
        if self._eat("("):
            value = self._expression()
            if not self._eat(")"):
                raise ExpressionSyntaxError(
                    f"Missing ')' for '(' at position {start}", position=self.pos
                )
            return value
        if self.char in _NUMBER_CHARS:
            while self.char in _NUMBER_CHARS:
                self.pos += 1
            literal = self.text[start : self.pos]
            try:
                return float(literal)
            except ValueError as exc:
                raise MalformedNumberError(f"Malformed number '{literal}'", position=start) from exc
        if self.char in _NAME_CHARS:
            while self.char in _NAME_CHARS:
                self.pos += 1
            name = self.text[start : self.pos]
            if name in CONSTANTS:
                return CONSTANTS[name]
            func = FUNCTIONS.get(name)
            if func is None:
                raise UnknownIdentifierError(f"Unknown function '{name}'", position=start)
            return func(self._factor())
        raise self._unexpected()


def evaluate_expression(
    text: str,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_length: int | None = None,
) -> float:
    """Evaluate ``text`` and return the value, raising :class:`ExpressionError`.

    Length is unbounded unless ``max_length`` is given; nesting is always
    limited by ``max_depth``.
    """

    if not isinstance(text, str):
        raise ExpressionSyntaxError("Expression must be a string")
    if max_length is not None and len(text) > max_length:
        raise ExpressionSyntaxError("Expression is too long", position=max_length)
    return _Parser(text, max_depth=max_depth).parse()


def format_result(value: float) -> str:
    """Render a value so that ``float(text)`` gives the same double back."""

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(float(value))


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of :func:`evaluate`: a value or an internal error message."""

    expression: str
    value: float | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        if self.error is not None or self.value is None:
            return ERROR_DISPLAY
        return format_result(self.value)


def evaluate(
    text: str,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_length: int | None = None,
) -> EvaluationResult:
    """Evaluate ``text`` without raising; failures come back as an error result."""

    try:
        value = evaluate_expression(text, max_depth=max_depth, max_length=max_length)
    except ExpressionError as exc:
        logger.debug("rejected expression %r: %s", text, exc)
        return EvaluationResult(expression=str(text), error=str(exc))
    except RecursionError:
        logger.debug("rejected expression %r: interpreter recursion limit", text)
        return EvaluationResult(expression=str(text), error="Expression is nested too deeply")
    return EvaluationResult(expression=text, value=value)


def list_functions() -> list[str]:
    return sorted(FUNCTIONS)


def list_constants() -> list[str]:
    return sorted(CONSTANTS)


__all__ = [
    "CONSTANTS",
    "DEFAULT_MAX_DEPTH",
    "ERROR_DISPLAY",
    "FUNCTIONS",
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
]
