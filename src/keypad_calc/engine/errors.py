"""Exceptions raised by the evaluation stages."""

from keypad_calc.models import EvaluationErrorKind


class EvaluationError(Exception):
    """Base exception for evaluation errors."""
    kind: EvaluationErrorKind = EvaluationErrorKind.MALFORMED


class MalformedExpressionError(EvaluationError):
    """Raised when the tokens do not reduce to exactly one value."""
    kind = EvaluationErrorKind.MALFORMED


class DivisionByZeroError(EvaluationError):
    """Raised when a division's right operand is exactly zero."""
    kind = EvaluationErrorKind.DIVIDE_BY_ZERO


class NonFiniteResultError(EvaluationError):
    """Raised when a computed value is infinite or NaN."""
    kind = EvaluationErrorKind.NON_FINITE
