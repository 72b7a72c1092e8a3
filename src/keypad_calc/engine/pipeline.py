"""
Evaluation pipeline: the single entry point keypads call.

tokenize -> to_postfix -> evaluate_postfix -> normalize
"""

import structlog

from keypad_calc.engine.errors import EvaluationError
from keypad_calc.engine.evaluator import evaluate_postfix
from keypad_calc.engine.normalizer import DEFAULT_PLACES, normalize
from keypad_calc.engine.postfix import to_postfix
from keypad_calc.engine.tokenizer import tokenize
from keypad_calc.models import EvaluationResult

logger = structlog.get_logger()


def evaluate(text: str, places: int = DEFAULT_PLACES) -> EvaluationResult:
    """
    Evaluate keypad text and return its display string or error kind.

    Stage failures are caught here and never escape as exceptions.
    """
    try:
        tokens = tokenize(text)
        postfix = to_postfix(tokens)
        value = evaluate_postfix(postfix)
        display = normalize(value, places)
    except EvaluationError as e:
        logger.debug("Evaluation failed", expression=text, error=e.kind.value, reason=str(e))
        return EvaluationResult.failure(text, e.kind)

    logger.debug(
        "Evaluated expression",
        expression=text,
        postfix=" ".join(str(t) for t in postfix),
        result=display,
    )
    return EvaluationResult.success(text, display)
