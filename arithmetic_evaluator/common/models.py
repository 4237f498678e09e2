"""Pydantic models for evaluation results."""
import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


def format_number(value: float) -> str:
    """
    Render a result the way the calculator prints it.

    Integral values are printed without a trailing ``.0`` while they are
    exactly representable; everything else uses ``repr``.

    :param float value: Result to render

    :return: Text representation
    :rtype: str
    """
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


class ErrorReport(BaseModel):
    """Structured description of a failed evaluation."""

    model_config = ConfigDict(frozen=True)

    kind: str = Field(..., description="Error class name, e.g. DivisionByZeroError")
    message: str = Field(..., description="Human readable message")
    position: Optional[int] = Field(default=None, ge=0, description="0-based offset in the input")


class EvaluationResult(BaseModel):
    """Outcome of evaluating one line: either a numeric result or an error."""

    expression: str = Field(..., description="Original input line")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    variable: Optional[str] = Field(default=None, description="Variable assigned by the line, if any")
    error: Optional[ErrorReport] = Field(default=None, description="Error report when evaluation failed")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "EvaluationResult":
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' and 'error' must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def format(self) -> str:
        """
        Format the outcome as a results-file line.

        :return: ``expression = value`` or ``expression -> ERROR: message``
        :rtype: str
        """
        if self.error is not None:
            return f"{self.expression} -> ERROR: {self.error.message}"
        return f"{self.expression} = {format_number(self.result)}"
