"""
Tokenizer: raw keypad text -> operand/operator tokens.

Digits and the decimal point accumulate into the current operand. A minus
sign at the very start, or right after another operator, begins a negative
literal instead of acting as subtraction. Any other character is ignored.
"""

from keypad_calc.models import Operand, Operator, OperatorSymbol, Token, is_operator

DIGITS = frozenset("0123456789.")


def tokenize(text: str) -> list[Token]:
    """
    Scan ``text`` left to right into tokens.

    Never raises; sequences that cannot be evaluated (a bare ``-``, two dots,
    a dangling operator) are reported by the evaluator.

    The result never holds two operands or two operators in a row. A second
    operator other than ``-`` replaces the previous one, matching what the
    keypad does when an operator button is pressed twice.
    """
    tokens: list[Token] = []
    number = ""

    for ch in text:
        if ch in DIGITS:
            number += ch
            continue
        if not is_operator(ch):
            continue

        if number:
            tokens.append(Operand(text=number))
            number = ""

        after_operator = not tokens or isinstance(tokens[-1], Operator)
        if ch == OperatorSymbol.SUBTRACT.value and after_operator:
            number = "-"
        elif tokens and isinstance(tokens[-1], Operator):
            tokens[-1] = Operator(symbol=OperatorSymbol(ch))
        else:
            tokens.append(Operator(symbol=OperatorSymbol(ch)))

    if number:
        tokens.append(Operand(text=number))

    return tokens
