"""Evaluator configuration."""
from pydantic import BaseModel, ConfigDict, Field


# Largest n for which n! is still a finite float64
MAX_FLOAT_FACTORIAL = 170

DEFAULT_MAX_DEPTH = 100
# Each nesting level costs up to five interpreter frames while parsing
MAX_DEPTH_LIMIT = 150


class EvaluatorConfig(BaseModel):
    """
    Limits applied while parsing and evaluating expressions.

    Immutable: a session keeps the same limits for its whole lifetime.
    """

    model_config = ConfigDict(frozen=True)

    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        le=MAX_DEPTH_LIMIT,
        description="Maximum nesting depth accepted by the parser",
    )
    max_factorial: int = Field(
        default=MAX_FLOAT_FACTORIAL,
        ge=0,
        le=MAX_FLOAT_FACTORIAL,
        description="Largest operand accepted by the factorial operator",
    )
