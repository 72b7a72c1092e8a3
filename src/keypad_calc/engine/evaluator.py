"""Postfix evaluation with an explicit value stack."""

import operator
from typing import Callable

from keypad_calc.engine.errors import DivisionByZeroError, MalformedExpressionError
from keypad_calc.models import Operand, OperatorSymbol, Token

_BIN_OPS: dict[OperatorSymbol, Callable[[float, float], float]] = {
    OperatorSymbol.ADD: operator.add,
    OperatorSymbol.SUBTRACT: operator.sub,
    OperatorSymbol.MULTIPLY: operator.mul,
    OperatorSymbol.DIVIDE: operator.truediv,
}


def parse_operand(token: Operand) -> float:
    """Parse an operand's text; a bare sign or a second dot is malformed."""
    try:
        return float(token.text)
    except ValueError as e:
        raise MalformedExpressionError(f"Invalid number: {token.text!r}") from e


def evaluate_postfix(postfix: list[Token]) -> float:
    """
    Reduce a postfix sequence to a single float.

    Raises:
        MalformedExpressionError: an operator lacks operands, an operand is
            not a number, or the sequence does not leave exactly one value.
        DivisionByZeroError: a division's right operand is exactly zero.
    """
    stack: list[float] = []

    for token in postfix:
        if isinstance(token, Operand):
            stack.append(parse_operand(token))
            continue

        if len(stack) < 2:
            raise MalformedExpressionError(f"Operator {token} is missing an operand")
        right = stack.pop()
        left = stack.pop()

        if token.symbol is OperatorSymbol.DIVIDE and right == 0:
            raise DivisionByZeroError("Cannot divide by zero")

        stack.append(_BIN_OPS[token.symbol](left, right))

    if len(stack) != 1:
        raise MalformedExpressionError(
            f"Expression reduced to {len(stack)} values, expected 1"
        )
    return stack[0]
