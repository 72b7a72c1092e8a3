"""Rounding and canonical display formatting of computed values."""

import math
from decimal import Decimal

from keypad_calc.engine.errors import NonFiniteResultError

DEFAULT_PLACES = 12


def normalize(value: float, places: int = DEFAULT_PLACES) -> str:
    """
    Round ``value`` to ``places`` decimal places and render it for display.

    The string is plain decimal notation (never ``1e-05``) so it can be
    typed back into the keypad and evaluate to itself. Whole numbers drop
    the fractional part and negative zero shows as ``0``.
    """
    if not math.isfinite(value):
        raise NonFiniteResultError(f"Result is not finite: {value}")

    rounded = round(value, places)
    if rounded.is_integer():
        return str(int(rounded))
    return format(Decimal(repr(rounded)), "f")
