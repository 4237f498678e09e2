"""Evaluate expression trees against a symbol table."""
import math
import operator
from typing import Callable, Dict, List, Optional, Tuple

from arithmetic_evaluator.common.config import MAX_FLOAT_FACTORIAL, EvaluatorConfig
from arithmetic_evaluator.common.errors import (
    ArityMismatchError,
    DivisionByZeroError,
    DomainError,
    EvalError,
)
from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.nodes import (
    BinaryOp,
    ExprNode,
    FunctionCall,
    Literal,
    UnaryOp,
    VariableRef,
    children,
)
from arithmetic_evaluator.common.operators import OPERATORS, Operator
from arithmetic_evaluator.engine.symbols import SymbolTable


def _boolean(flag: bool) -> float:
    return 1.0 if flag else 0.0


def _modulus(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError("modulus by zero")
    # IEEE remainder: the result takes the sign of the dividend
    return math.fmod(a, b)


def factorial(x: float) -> float:
    """
    Compute ``x!`` iteratively for a non-negative integer-valued float.

    :param float x: Operand

    :return: Factorial of ``x``
    :rtype: float
    :raises ValueError: If ``x`` is negative, fractional or too large
    """
    if not math.isfinite(x) or not x.is_integer():
        raise ValueError(f"factorial is only defined for integers, got {x!r}")
    if x < 0:
        raise ValueError(f"factorial is not defined for negative numbers, got {x:g}")
    if x > MAX_FLOAT_FACTORIAL:
        raise ValueError(f"factorial of {x:g} is too large")
    result = 1
    for i in range(2, int(x) + 1):
        result *= i
    return float(result)


# Mapping of unary operators to their numeric behaviour
UNARY_OPERATIONS: Dict[Operator, Callable[[float], float]] = {
    Operator.NEGATE: operator.neg,
    Operator.IDENTITY: operator.pos,
    Operator.NOT: lambda x: _boolean(x == 0),
    Operator.FACTORIAL: factorial,
}

# Mapping of binary operators to their numeric behaviour
BINARY_OPERATIONS: Dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
    Operator.MODULUS: _modulus,
    Operator.POWER: math.pow,
    Operator.EQUAL: lambda a, b: _boolean(a == b),
    Operator.NOT_EQUAL: lambda a, b: _boolean(a != b),
    Operator.LESS: lambda a, b: _boolean(a < b),
    Operator.LESS_EQUAL: lambda a, b: _boolean(a <= b),
    Operator.GREATER: lambda a, b: _boolean(a > b),
    Operator.GREATER_EQUAL: lambda a, b: _boolean(a >= b),
    Operator.AND: lambda a, b: _boolean(a != 0 and b != 0),
    Operator.NAND: lambda a, b: _boolean(not (a != 0 and b != 0)),
    Operator.OR: lambda a, b: _boolean(a != 0 or b != 0),
    Operator.NOR: lambda a, b: _boolean(not (a != 0 or b != 0)),
}


class Evaluator:
    """
    Iterative evaluator for expression trees.

    The tree is walked with an explicit work stack instead of recursion, so
    long operator chains, stacked factorials and deep parentheses cannot
    exhaust the interpreter stack. Operands are evaluated left to right and
    the first failure aborts the evaluation.

    Every operator is dispatched through :data:`UNARY_OPERATIONS` or
    :data:`BINARY_OPERATIONS`; an operator missing from both tables is
    reported as an :class:`EvalError` instead of being ignored.
    """

    def __init__(self, symbols: SymbolTable, config: Optional[EvaluatorConfig] = None):
        self.symbols = symbols
        self.config = config or EvaluatorConfig()

    def evaluate(self, root: ExprNode) -> float:
        """
        Evaluate an expression tree.

        :param ExprNode root: Root node produced by the parser

        :return: Numeric result
        :rtype: float
        :raises EvalError: On undefined symbols, domain errors, division by zero or bad calls
        """
        values: List[float] = []
        # (node, operands_ready): a node is pushed once to schedule its children
        # and a second time to combine their values
        work: List[Tuple[ExprNode, bool]] = [(root, False)]

        while work:
            node, ready = work.pop()

            if isinstance(node, Literal):
                values.append(node.value)
            elif isinstance(node, VariableRef):
                values.append(self.symbols.lookup(node.name, node.position))
            elif not ready:
                if isinstance(node, FunctionCall):
                    self._check_call(node)
                work.append((node, True))
                work.extend((child, False) for child in reversed(children(node)))
            else:
                count = len(children(node))
                operands = values[len(values) - count:]
                del values[len(values) - count:]
                values.append(self._apply(node, operands))

        return float(values.pop())

    def _check_call(self, node: FunctionCall) -> None:
        function = self.symbols.function(node.name, node.position)
        if len(node.args) != function.arity:
            raise ArityMismatchError(node.name, function.arity, len(node.args), node.position)

    def _apply(self, node: ExprNode, operands: List[float]) -> float:
        """Apply the operation of ``node`` to already evaluated operands."""
        if isinstance(node, FunctionCall):
            label = node.name
            fn = self.symbols.function(node.name, node.position).implementation
        elif isinstance(node, UnaryOp):
            label = OPERATORS[node.op].symbol
            fn = UNARY_OPERATIONS.get(node.op)
            if node.op is Operator.FACTORIAL and operands[0] > self.config.max_factorial:
                raise DomainError(
                    f"factorial of {operands[0]:g} exceeds the limit of {self.config.max_factorial}",
                    node.position,
                )
        elif isinstance(node, BinaryOp):
            label = OPERATORS[node.op].symbol
            fn = BINARY_OPERATIONS.get(node.op)
        else:
            raise EvalError(f"Cannot evaluate node of type {type(node).__name__}", node.position)

        if fn is None:
            raise EvalError(f"Operator '{label}' is not supported here", node.position)

        try:
            return float(fn(*operands))
        except ZeroDivisionError:
            raise DivisionByZeroError(f"Division by zero in '{label}'", node.position) from None
        except (ValueError, OverflowError) as exc:
            logger.debug(f"🧮 {label}{tuple(operands)} failed: {exc}")
            raise DomainError(f"{label}: {exc}", node.position) from None


def evaluate(root: ExprNode, symbols: SymbolTable, config: Optional[EvaluatorConfig] = None) -> float:
    """Evaluate ``root`` with ``symbols``; see :class:`Evaluator`."""
    return Evaluator(symbols, config).evaluate(root)
