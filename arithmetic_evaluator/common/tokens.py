"""Token model produced by the tokenizer."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_evaluator.common.operators import Operator


class TokenKind(Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    COMMA = ","
    END_OF_INPUT = "end of input"


class Token(BaseModel):
    """A lexeme of the input, immutable once produced."""

    model_config = ConfigDict(frozen=True)

    kind: TokenKind
    text: str = Field(..., description="Raw source text of the token")
    position: int = Field(..., ge=0, description="0-based offset of the first character")
    value: Optional[float] = Field(default=None, description="Numeric value of a NUMBER token")
    operator: Optional[Operator] = Field(default=None, description="Operator of an OPERATOR token")

    def is_operator(self, *operators: Operator) -> bool:
        return self.kind is TokenKind.OPERATOR and self.operator in operators

    def describe(self) -> str:
        """Short form used in error messages."""
        if self.kind is TokenKind.END_OF_INPUT:
            return "end of input"
        return f"'{self.text}'"
