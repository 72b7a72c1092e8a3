"""
Keypad session: the stateful owner of the expression buffer.

A session applies the input rules of the button surface (no ``00``, one
decimal point per number, operators replace a trailing operator) and hands
the buffer to the stateless engine when ``=`` is pressed.
"""

from uuid import UUID, uuid4

import structlog

from keypad_calc.config import Settings, settings as default_settings
from keypad_calc.engine import evaluate
from keypad_calc.models import (
    EvaluationResult,
    HistoryEntry,
    SessionState,
    is_operator,
)

logger = structlog.get_logger()


class InvalidKeyError(ValueError):
    """Raised when a key label does not match any keypad button."""
    pass


# Button labels and keyboard aliases -> canonical key
KEY_ALIASES = {
    "×": "*",
    "x": "*",
    "÷": "/",
    "−": "-",
    "c": "C",
    "esc": "C",
    "⌫": "back",
    "<": "back",
    "b": "back",
    "backspace": "back",
    "\r": "=",
    "\n": "=",
    "enter": "=",
}


class KeypadSession:
    """A calculator screen plus the expression typed into it."""

    def __init__(self, config: Settings | None = None, session_id: UUID | None = None):
        self.config = config or default_settings
        self.session_id = session_id or uuid4()
        self.expression = ""
        self.sub_display = ""
        self.last_result: EvaluationResult | None = None
        self.history: list[HistoryEntry] = []

    # -------------------------------------------------------------------------
    # Screen
    # -------------------------------------------------------------------------

    @property
    def display(self) -> str:
        """Main screen line; an error shows until the next key press."""
        if not self.expression and self.last_result is not None and not self.last_result.ok:
            return self.config.error_text
        return self.expression or self.config.empty_display

    def current_number(self) -> str:
        """The number being typed, i.e. everything after the last operator."""
        i = len(self.expression) - 1
        while i >= 0 and not is_operator(self.expression[i]):
            i -= 1
        return self.expression[i + 1:]

    def state(self) -> SessionState:
        return SessionState(
            session_id=self.session_id,
            expression=self.expression,
            display=self.display,
            sub_display=self.sub_display,
            last_error=self.last_result.error if self.last_result else None,
            history_size=len(self.history),
        )

    # -------------------------------------------------------------------------
    # Buttons
    # -------------------------------------------------------------------------

    def press_digit(self, ch: str) -> None:
        """Append a digit or the decimal point."""
        if len(ch) != 1 or ch not in "0123456789.":
            raise InvalidKeyError(f"Not a digit key: {ch!r}")
        self._touch()
        if self.expression == "0" and ch == "0":
            return
        if ch == "." and "." in self.current_number():
            return
        self.expression += ch

    def press_operator(self, op: str) -> None:
        """Append an operator, replacing a trailing one."""
        if not is_operator(op):
            raise InvalidKeyError(f"Not an operator key: {op!r}")
        self._touch()
        if not self.expression:
            # Only a leading minus may start an expression
            if op == "-":
                self.expression = "-"
            return
        if is_operator(self.expression[-1]):
            self.expression = self.expression[:-1] + op
        else:
            self.expression += op

    def backspace(self) -> None:
        self._touch()
        self.expression = self.expression[:-1]

    def clear(self) -> None:
        self.expression = ""
        self.sub_display = ""
        self.last_result = None

    def equals(self) -> EvaluationResult | None:
        """
        Evaluate the buffer.

        The buffer becomes the result string on success and is emptied on
        failure. Returns None when there is nothing to evaluate.
        """
        if not self.expression:
            return None

        expression = self.expression
        if self.config.strip_trailing_operator and is_operator(expression[-1]):
            expression = expression[:-1]

        result = evaluate(expression, places=self.config.precision)
        self.sub_display = expression
        self.expression = result.value if result.ok else ""
        self.last_result = result
        self._record(result)

        logger.debug(
            "Keypad equals",
            session_id=str(self.session_id),
            expression=expression,
            display=self.display,
        )
        return result

    def press(self, key: str) -> EvaluationResult | None:
        """Dispatch one button press by its label."""
        canonical = KEY_ALIASES.get(key, KEY_ALIASES.get(key.lower(), key))
        if canonical == "=":
            return self.equals()
        if canonical == "C":
            self.clear()
        elif canonical == "back":
            self.backspace()
        elif is_operator(canonical):
            self.press_operator(canonical)
        elif len(canonical) == 1 and canonical in "0123456789.":
            self.press_digit(canonical)
        else:
            raise InvalidKeyError(f"Unknown key: {key!r}")
        return None

    def press_many(self, keys: str) -> EvaluationResult | None:
        """Press each character of ``keys`` in order; returns the last equals result."""
        result = None
        for key in keys:
            if key.isspace() and key not in "\r\n":
                continue
            outcome = self.press(key)
            if outcome is not None:
                result = outcome
        return result

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def get_history(self) -> list[HistoryEntry]:
        """Return evaluation history, oldest first."""
        return self.history.copy()

    def clear_history(self) -> None:
        self.history.clear()

    def _record(self, result: EvaluationResult) -> None:
        """Record an evaluation, keeping at most ``history_limit`` entries."""
        limit = self.config.history_limit
        if limit == 0:
            return
        self.history.append(
            HistoryEntry(expression=result.expression, result=result.value, error=result.error)
        )
        del self.history[:-limit]

    def _touch(self) -> None:
        """Any edit dismisses the sub-display and error indicator."""
        self.last_result = None
        self.sub_display = ""
