"""Expression tree nodes produced by the parser."""
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_evaluator.common.operators import Operator


class Node(BaseModel):
    """Common base of all expression tree nodes."""

    model_config = ConfigDict(frozen=True)

    position: int = Field(default=0, ge=0, description="Offset of the token that introduced the node")


class Literal(Node):
    value: float


class VariableRef(Node):
    name: str


class UnaryOp(Node):
    op: Operator
    operand: "ExprNode"


class BinaryOp(Node):
    op: Operator
    left: "ExprNode"
    right: "ExprNode"


class FunctionCall(Node):
    name: str
    args: List["ExprNode"] = Field(default_factory=list)


ExprNode = Union[Literal, VariableRef, UnaryOp, BinaryOp, FunctionCall]

for _model in (UnaryOp, BinaryOp, FunctionCall):
    _model.model_rebuild()


def children(node: ExprNode) -> List[ExprNode]:
    """Return the direct children of ``node`` in evaluation order."""
    if isinstance(node, UnaryOp):
        return [node.operand]
    if isinstance(node, BinaryOp):
        return [node.left, node.right]
    if isinstance(node, FunctionCall):
        return list(node.args)
    return []
