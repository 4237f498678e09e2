"""Symbol table: built-in constants and functions plus user variables."""
import math
from typing import Callable, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_evaluator.common.errors import ReservedNameError, UndefinedSymbolError, UnknownFunctionError


class FunctionDescriptor(BaseModel):
    """A pure numeric built-in function with a fixed number of arguments."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name used to call the function")
    arity: int = Field(..., ge=0, description="Required number of arguments")
    implementation: Callable[..., float] = Field(..., description="Numeric behaviour of the function")


def _sign(x: float) -> float:
    if x == 0 or math.isnan(x):
        return x
    return math.copysign(1.0, x)


def _min(a: float, b: float) -> float:
    # A NaN operand is ignored, whatever its position
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def _max(a: float, b: float) -> float:
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


BUILTIN_CONSTANTS: Dict[str, float] = {
    "pi": math.pi,
    "tau": math.tau,
    "e": math.e,
    "true": 1.0,
    "false": 0.0,
}

BUILTIN_FUNCTIONS: Dict[str, FunctionDescriptor] = {
    descriptor.name: descriptor
    for descriptor in (
        FunctionDescriptor(name="sin", arity=1, implementation=math.sin),
        FunctionDescriptor(name="cos", arity=1, implementation=math.cos),
        FunctionDescriptor(name="tan", arity=1, implementation=math.tan),
        FunctionDescriptor(name="abs", arity=1, implementation=math.fabs),
        FunctionDescriptor(name="sqrt", arity=1, implementation=math.sqrt),
        FunctionDescriptor(name="radians", arity=1, implementation=math.radians),
        FunctionDescriptor(name="degrees", arity=1, implementation=math.degrees),
        FunctionDescriptor(name="ln", arity=1, implementation=math.log),
        FunctionDescriptor(name="log2", arity=1, implementation=math.log2),
        FunctionDescriptor(name="log10", arity=1, implementation=math.log10),
        FunctionDescriptor(name="exp", arity=1, implementation=math.exp),
        FunctionDescriptor(name="sign", arity=1, implementation=_sign),
        FunctionDescriptor(name="min", arity=2, implementation=_min),
        FunctionDescriptor(name="max", arity=2, implementation=_max),
        FunctionDescriptor(name="pow", arity=2, implementation=math.pow),
    )
}


class SymbolTable(BaseModel):
    """
    Mapping from names to constants, functions and user variables.

    Constants and functions are fixed when the table is built; variables are
    created or overwritten through :meth:`assign` only. Names are
    case-sensitive.
    """

    constants: Dict[str, float] = Field(default_factory=dict, description="Read-only named values")
    functions: Dict[str, FunctionDescriptor] = Field(default_factory=dict, description="Read-only functions")
    variables: Dict[str, float] = Field(default_factory=dict, description="User variables")

    @classmethod
    def with_builtins(cls) -> "SymbolTable":
        """Build a table seeded with the built-in constants and functions."""
        return cls(constants=dict(BUILTIN_CONSTANTS), functions=dict(BUILTIN_FUNCTIONS))

    def is_reserved(self, name: str) -> bool:
        return name in self.constants or name in self.functions

    def lookup(self, name: str, position: Optional[int] = None) -> float:
        """
        Resolve a bare name to its value.

        :param str name: Constant or variable name
        :param int position: Source position reported on failure

        :return: Value bound to the name
        :rtype: float
        :raises UndefinedSymbolError: If the name is neither a constant nor a variable
        """
        if name in self.constants:
            return self.constants[name]
        if name in self.variables:
            return self.variables[name]
        if name in self.functions:
            raise UndefinedSymbolError(name, position, message=f"'{name}' is a function, call it as {name}(...)")
        raise UndefinedSymbolError(name, position)

    def function(self, name: str, position: Optional[int] = None) -> FunctionDescriptor:
        """
        Resolve a function name.

        :param str name: Function name
        :param int position: Source position reported on failure

        :return: Function descriptor
        :rtype: FunctionDescriptor
        :raises UnknownFunctionError: If no function has that name
        """
        if name not in self.functions:
            raise UnknownFunctionError(name, position)
        return self.functions[name]

    def assign(self, name: str, value: float) -> None:
        """
        Bind a user variable, replacing any previous value.

        :param str name: Variable name
        :param float value: New value
        :raises ReservedNameError: If the name belongs to a constant or function
        """
        if self.is_reserved(name):
            raise ReservedNameError(name)
        self.variables[name] = value

    def snapshot(self) -> Mapping[str, float]:
        """Copy of the current user variables."""
        return dict(self.variables)
