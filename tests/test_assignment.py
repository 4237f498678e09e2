"""Test class AssignmentHandler."""
import pytest

from arithmetic_evaluator.common.config import EvaluatorConfig
from arithmetic_evaluator.common.errors import (
    DivisionByZeroError,
    EmptyExpressionError,
    NestingTooDeepError,
    ReservedNameError,
    UndefinedSymbolError,
    UnexpectedTokenError,
)
from arithmetic_evaluator.engine.assignment import AssignmentHandler
from arithmetic_evaluator.engine.symbols import SymbolTable


@pytest.fixture
def symbols() -> SymbolTable:
    """Fresh symbol table with built-ins."""
    return SymbolTable.with_builtins()


def test_assignment_round_trip(symbols: SymbolTable) -> None:
    """Assigned variables are usable in later expressions and can be redefined."""
    result = AssignmentHandler.execute("x = 10", symbols)
    assert result.variable == "x"
    assert result.result == 10.0
    assert AssignmentHandler.execute("x * 2", symbols).result == 20.0

    AssignmentHandler.execute("x = 5", symbols)
    assert AssignmentHandler.execute("x * 2", symbols).result == 10.0


def test_assignment_uses_previous_value(symbols: SymbolTable) -> None:
    """The right-hand side sees the old value of the variable."""
    AssignmentHandler.execute("n = 3", symbols)
    AssignmentHandler.execute("n = n! + 1", symbols)
    assert symbols.lookup("n") == 7.0


def test_expression_does_not_mutate(symbols: SymbolTable) -> None:
    """Plain expressions return the bare result and leave variables alone."""
    result = AssignmentHandler.execute("1 + 2", symbols)
    assert result.variable is None
    assert result.result == 3.0
    assert symbols.variables == {}


def test_equality_is_not_assignment(symbols: SymbolTable) -> None:
    """'x == 1' compares instead of assigning."""
    symbols.assign("x", 1.0)
    result = AssignmentHandler.execute("x == 1", symbols)
    assert result.variable is None
    assert result.result == 1.0
    assert symbols.variables == {"x": 1.0}


@pytest.mark.parametrize("text", ["x = 1 / 0", "x = y + 1", "x = (1", "x = 1 @ 2"])
def test_failed_assignment_creates_nothing(text: str, symbols: SymbolTable) -> None:
    """A failing right-hand side does not create the variable."""
    with pytest.raises(ValueError):
        AssignmentHandler.execute(text, symbols)
    assert "x" not in symbols.variables


def test_failed_assignment_keeps_old_value(symbols: SymbolTable) -> None:
    """A failing right-hand side does not modify an existing variable."""
    AssignmentHandler.execute("x = 4", symbols)
    with pytest.raises(DivisionByZeroError):
        AssignmentHandler.execute("x = x / 0", symbols)
    assert symbols.lookup("x") == 4.0


@pytest.mark.parametrize("text", ["pi = 3", "sin = 1", "e = 1 / 0"])
def test_reserved_name(text: str, symbols: SymbolTable) -> None:
    """Constants and functions cannot be assigned, whatever the right-hand side."""
    with pytest.raises(ReservedNameError) as exc_info:
        AssignmentHandler.execute(text, symbols)
    assert exc_info.value.position == 0
    assert symbols.variables == {}


def test_unknown_variable(symbols: SymbolTable) -> None:
    """Using a variable before assigning it fails."""
    with pytest.raises(UndefinedSymbolError):
        AssignmentHandler.execute("y + 1", symbols)


@pytest.mark.parametrize("text,error", [
    ("x =", EmptyExpressionError),
    ("x = y = 1", UnexpectedTokenError),
    ("1 = 2", UnexpectedTokenError),
    ("(x) = 2", UnexpectedTokenError),
])
def test_malformed_assignments(text: str, error: type, symbols: SymbolTable) -> None:
    """Only a single leading 'name =' is an assignment."""
    with pytest.raises(error):
        AssignmentHandler.execute(text, symbols)
    assert symbols.variables == {}


def test_config_is_applied(symbols: SymbolTable) -> None:
    """The nesting limit of the configuration is used for both forms."""
    config = EvaluatorConfig(max_depth=2)
    with pytest.raises(NestingTooDeepError):
        AssignmentHandler.execute("(((1)))", symbols, config)
    with pytest.raises(NestingTooDeepError):
        AssignmentHandler.execute("x = (((1)))", symbols, config)
