"""Expression engine - tokenizer, postfix converter, evaluator and normalizer."""

from keypad_calc.engine.errors import (
    DivisionByZeroError,
    EvaluationError,
    MalformedExpressionError,
    NonFiniteResultError,
)
from keypad_calc.engine.evaluator import evaluate_postfix
from keypad_calc.engine.normalizer import normalize
from keypad_calc.engine.pipeline import evaluate
from keypad_calc.engine.postfix import to_postfix
from keypad_calc.engine.tokenizer import tokenize

__all__ = [
    "DivisionByZeroError",
    "EvaluationError",
    "MalformedExpressionError",
    "NonFiniteResultError",
    "evaluate",
    "evaluate_postfix",
    "normalize",
    "to_postfix",
    "tokenize",
]
