"""
Core data models for Keypad Calc.

Defines the token variants produced by the tokenizer, the evaluation
result returned by the engine, and the request/response schemas used by
the HTTP API.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# Enums
# =============================================================================

class OperatorSymbol(str, Enum):
    """The four binary operators a keypad can enter."""
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


class EvaluationErrorKind(str, Enum):
    """Why an expression could not be evaluated."""
    MALFORMED = "malformed"
    DIVIDE_BY_ZERO = "divide_by_zero"
    NON_FINITE = "non_finite"


PRECEDENCE: dict[OperatorSymbol, int] = {
    OperatorSymbol.ADD: 1,
    OperatorSymbol.SUBTRACT: 1,
    OperatorSymbol.MULTIPLY: 2,
    OperatorSymbol.DIVIDE: 2,
}

OPERATOR_CHARS = frozenset(symbol.value for symbol in OperatorSymbol)


def is_operator(ch: str) -> bool:
    """Check whether a single character is one of the binary operators."""
    return ch in OPERATOR_CHARS


# =============================================================================
# Token Models
# =============================================================================

class Operand(BaseModel):
    """A numeric literal, possibly carrying a leading minus sign."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["operand"] = "operand"
    text: str = Field(..., min_length=1)

    def __str__(self) -> str:
        return self.text


class Operator(BaseModel):
    """A binary operator token."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"
    symbol: OperatorSymbol

    @property
    def precedence(self) -> int:
        return PRECEDENCE[self.symbol]

    def __str__(self) -> str:
        return self.symbol.value


Token = Annotated[Union[Operand, Operator], Field(discriminator="kind")]


# =============================================================================
# Evaluation Models
# =============================================================================

class EvaluationResult(BaseModel):
    """
    Outcome of evaluating one expression.

    Exactly one of ``value`` (the canonical display string) and ``error``
    is set.
    """
    model_config = ConfigDict(frozen=True)

    expression: str
    value: str | None = None
    error: EvaluationErrorKind | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "EvaluationResult":
        if (self.value is None) == (self.error is None):
            raise ValueError("EvaluationResult needs exactly one of value or error")
        return self

    @classmethod
    def success(cls, expression: str, value: str) -> "EvaluationResult":
        return cls(expression=expression, value=value)

    @classmethod
    def failure(cls, expression: str, error: EvaluationErrorKind) -> "EvaluationResult":
        return cls(expression=expression, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def display(self, error_text: str = "Error") -> str:
        """Text a keypad screen shows for this outcome."""
        return self.value if self.value is not None else error_text


class HistoryEntry(BaseModel):
    """One completed evaluation recorded by a keypad session."""
    expression: str
    result: str | None = None
    error: EvaluationErrorKind | None = None
    created_at: datetime = Field(default_factory=datetime.utcnow)


# =============================================================================
# API Models
# =============================================================================

class EvaluateRequest(BaseModel):
    """Request model for evaluating a raw expression."""
    expression: str = Field(..., max_length=1024)


class EvaluateResponse(BaseModel):
    """Response model for a raw expression evaluation."""
    expression: str
    result: str | None = None
    error: EvaluationErrorKind | None = None
    display: str


class KeyPress(BaseModel):
    """Request model for pressing a keypad button."""
    key: str = Field(..., min_length=1, max_length=8)


class SessionState(BaseModel):
    """Snapshot of a keypad session as rendered on screen."""
    session_id: UUID = Field(default_factory=uuid4)
    expression: str
    display: str
    sub_display: str = ""
    last_error: EvaluationErrorKind | None = None
    history_size: int = 0
