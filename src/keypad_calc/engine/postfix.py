"""Infix -> postfix conversion (shunting-yard, left-associative only)."""

from keypad_calc.models import Operand, Operator, Token


def to_postfix(tokens: list[Token]) -> list[Token]:
    """
    Reorder infix tokens into postfix (Reverse Polish) order.

    ``*`` and ``/`` bind tighter than ``+`` and ``-``. Pending operators of
    greater or equal precedence are flushed before an incoming operator is
    stacked, so ``8-3-2`` becomes ``8 3 - 2 -``.
    """
    output: list[Token] = []
    pending: list[Operator] = []

    for token in tokens:
        if isinstance(token, Operand):
            output.append(token)
            continue
        while pending and pending[-1].precedence >= token.precedence:
            output.append(pending.pop())
        pending.append(token)

    while pending:
        output.append(pending.pop())

    return output
