"""Operator enumeration and the static operator descriptor table."""
from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class Operator(Enum):
    # binary arithmetic
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULUS = "modulus"
    POWER = "power"
    # relational
    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    LESS = "less"
    LESS_EQUAL = "less_equal"
    GREATER = "greater"
    GREATER_EQUAL = "greater_equal"
    # boolean
    AND = "and"
    NAND = "nand"
    OR = "or"
    NOR = "nor"
    # unary
    NOT = "not"
    NEGATE = "negate"
    IDENTITY = "identity"
    FACTORIAL = "factorial"
    # statement level
    ASSIGN = "assign"


class Associativity(Enum):
    LEFT = "left"
    RIGHT = "right"


class Arity(Enum):
    PREFIX = "prefix"
    POSTFIX = "postfix"
    BINARY = "binary"


class OperatorKind(Enum):
    ARITHMETIC = "arithmetic"
    RELATIONAL = "relational"
    BOOLEAN = "boolean"
    ASSIGNMENT = "assignment"


class OperatorDescriptor(BaseModel):
    """Binding properties of one operator."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(..., description="Canonical spelling used in messages")
    precedence: int = Field(..., ge=0, description="Higher binds tighter")
    associativity: Associativity
    arity: Arity
    kind: OperatorKind


# Precedence levels, lowest to highest
ASSIGNMENT_LEVEL = 0
OR_LEVEL = 1
AND_LEVEL = 2
EQUALITY_LEVEL = 3
RELATIONAL_LEVEL = 4
ADDITIVE_LEVEL = 5
MULTIPLICATIVE_LEVEL = 6
POWER_LEVEL = 7
PREFIX_LEVEL = 8
POSTFIX_LEVEL = 9


def _op(symbol: str, precedence: int, associativity: Associativity, arity: Arity, kind: OperatorKind) -> OperatorDescriptor:
    return OperatorDescriptor(
        symbol=symbol, precedence=precedence, associativity=associativity, arity=arity, kind=kind
    )


_L, _R = Associativity.LEFT, Associativity.RIGHT
_ARITH, _REL, _BOOL = OperatorKind.ARITHMETIC, OperatorKind.RELATIONAL, OperatorKind.BOOLEAN

OPERATORS: Dict[Operator, OperatorDescriptor] = {
    Operator.ASSIGN: _op("=", ASSIGNMENT_LEVEL, _R, Arity.BINARY, OperatorKind.ASSIGNMENT),
    Operator.OR: _op("or", OR_LEVEL, _L, Arity.BINARY, _BOOL),
    Operator.NOR: _op("nor", OR_LEVEL, _L, Arity.BINARY, _BOOL),
    Operator.AND: _op("and", AND_LEVEL, _L, Arity.BINARY, _BOOL),
    Operator.NAND: _op("nand", AND_LEVEL, _L, Arity.BINARY, _BOOL),
    Operator.EQUAL: _op("==", EQUALITY_LEVEL, _L, Arity.BINARY, _REL),
    Operator.NOT_EQUAL: _op("!=", EQUALITY_LEVEL, _L, Arity.BINARY, _REL),
    Operator.LESS: _op("<", RELATIONAL_LEVEL, _L, Arity.BINARY, _REL),
    Operator.LESS_EQUAL: _op("<=", RELATIONAL_LEVEL, _L, Arity.BINARY, _REL),
    Operator.GREATER: _op(">", RELATIONAL_LEVEL, _L, Arity.BINARY, _REL),
    Operator.GREATER_EQUAL: _op(">=", RELATIONAL_LEVEL, _L, Arity.BINARY, _REL),
    Operator.ADD: _op("+", ADDITIVE_LEVEL, _L, Arity.BINARY, _ARITH),
    Operator.SUBTRACT: _op("-", ADDITIVE_LEVEL, _L, Arity.BINARY, _ARITH),
    Operator.MULTIPLY: _op("*", MULTIPLICATIVE_LEVEL, _L, Arity.BINARY, _ARITH),
    Operator.DIVIDE: _op("/", MULTIPLICATIVE_LEVEL, _L, Arity.BINARY, _ARITH),
    Operator.MODULUS: _op("%", MULTIPLICATIVE_LEVEL, _L, Arity.BINARY, _ARITH),
    Operator.POWER: _op("^", POWER_LEVEL, _R, Arity.BINARY, _ARITH),
    Operator.NEGATE: _op("-", PREFIX_LEVEL, _R, Arity.PREFIX, _ARITH),
    Operator.IDENTITY: _op("+", PREFIX_LEVEL, _R, Arity.PREFIX, _ARITH),
    Operator.NOT: _op("not", PREFIX_LEVEL, _R, Arity.PREFIX, _BOOL),
    Operator.FACTORIAL: _op("!", POSTFIX_LEVEL, _L, Arity.POSTFIX, _ARITH),
}

# Spellings recognised by the tokenizer, longest first so that "**" wins over "*"
SYMBOLS: Dict[str, Operator] = {
    "**": Operator.POWER,
    ">=": Operator.GREATER_EQUAL,
    "<=": Operator.LESS_EQUAL,
    "==": Operator.EQUAL,
    "!=": Operator.NOT_EQUAL,
    "&&": Operator.AND,
    "||": Operator.OR,
    "+": Operator.ADD,
    "-": Operator.SUBTRACT,
    "*": Operator.MULTIPLY,
    "/": Operator.DIVIDE,
    "%": Operator.MODULUS,
    "^": Operator.POWER,
    ">": Operator.GREATER,
    "<": Operator.LESS,
    "=": Operator.ASSIGN,
    "!": Operator.FACTORIAL,
}

KEYWORDS: Dict[str, Operator] = {
    "and": Operator.AND,
    "or": Operator.OR,
    "nand": Operator.NAND,
    "nor": Operator.NOR,
    "not": Operator.NOT,
    "mod": Operator.MODULUS,
}

# "+" and "-" in operand position are read as their prefix forms
PREFIX_FORMS: Dict[Operator, Operator] = {
    Operator.ADD: Operator.IDENTITY,
    Operator.SUBTRACT: Operator.NEGATE,
    Operator.NOT: Operator.NOT,
}
