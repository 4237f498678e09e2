"""Error taxonomy shared by the tokenizer, parser and evaluator."""
from typing import Optional

from arithmetic_evaluator.common.models import ErrorReport


class CalculatorError(ValueError):
    """
    Base class of every error reported for a single input line.

    Subclasses ``ValueError`` so callers that only expect malformed-input
    errors keep catching them.

    :param str message: Human readable description
    :param int position: 0-based offset in the input, when known
    """

    def __init__(self, message: str, position: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    @property
    def kind(self) -> str:
        return type(self).__name__

    def report(self) -> ErrorReport:
        """Convert the exception into a serialisable error report."""
        return ErrorReport(kind=self.kind, message=self.message, position=self.position)

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class LexError(CalculatorError):
    """Malformed token in the input text."""

    def __init__(self, message: str, position: int, char: Optional[str] = None):
        super().__init__(message, position)
        self.char = char


# Parser errors

class ParseError(CalculatorError):
    """Input does not follow the expression grammar."""


class EmptyExpressionError(ParseError):
    pass


class MissingOperandError(ParseError):
    pass


class UnmatchedParenthesisError(ParseError):
    pass


class UnexpectedTokenError(ParseError):
    pass


class NestingTooDeepError(ParseError):
    pass


# Evaluation errors

class EvalError(CalculatorError):
    """Expression is well formed but cannot be evaluated."""


class UndefinedSymbolError(EvalError):
    def __init__(self, name: str, position: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message or f"Undefined symbol '{name}'", position)
        self.name = name


class DivisionByZeroError(EvalError):
    pass


class DomainError(EvalError):
    pass


class UnknownFunctionError(EvalError):
    def __init__(self, name: str, position: Optional[int] = None):
        super().__init__(f"Unknown function '{name}'", position)
        self.name = name


class ArityMismatchError(EvalError):
    def __init__(self, name: str, expected: int, got: int, position: Optional[int] = None):
        plural = "" if expected == 1 else "s"
        super().__init__(f"Function '{name}' expects {expected} argument{plural}, got {got}", position)
        self.name = name
        self.expected = expected
        self.got = got


class ReservedNameError(EvalError):
    def __init__(self, name: str, position: Optional[int] = None):
        super().__init__(f"Cannot assign to reserved name '{name}'", position)
        self.name = name
