"""Parse a token stream into an expression tree."""
from typing import Iterable, Iterator, List, Optional

from arithmetic_evaluator.common.config import DEFAULT_MAX_DEPTH
from arithmetic_evaluator.common.errors import (
    EmptyExpressionError,
    MissingOperandError,
    NestingTooDeepError,
    UnexpectedTokenError,
    UnmatchedParenthesisError,
)
from arithmetic_evaluator.common.lexer import tokenize
from arithmetic_evaluator.common.nodes import BinaryOp, ExprNode, FunctionCall, Literal, UnaryOp, VariableRef
from arithmetic_evaluator.common.operators import OPERATORS, OR_LEVEL, PREFIX_FORMS, Arity, Associativity, Operator
from arithmetic_evaluator.common.tokens import Token, TokenKind


# Lowest precedence an operand of a full expression may bind at; excludes "="
LOWEST_PRECEDENCE = OR_LEVEL


class ExpressionParser:
    """
    Precedence-climbing parser for arithmetic and boolean expressions.

    Design constraints:
        - No eval(), no dynamic code execution
        - Tokens are consumed strictly left to right with one token of lookahead
        - Recursion depth is bounded by ``max_depth``

    Algorithm:
        ``_parse_expression(min_prec)`` parses a prefix/postfix operand and then
        keeps folding binary operators whose precedence is at least ``min_prec``.
        The right operand of a left-associative operator is parsed with
        ``precedence + 1``, of a right-associative one with ``precedence``,
        which makes ``2 ^ 3 ^ 2`` group as ``2 ^ (3 ^ 2)``.

    Examples:
        - ``2 + 3 * 4`` -> ``(+ 2 (* 3 4))``
        - ``-3!`` -> ``(negate (factorial 3))``
    """

    def __init__(self, tokens: Iterable[Token], max_depth: int = DEFAULT_MAX_DEPTH):
        self._tokens: Iterator[Token] = iter(tokens)
        self._current: Token = next(self._tokens)
        self._depth = 0
        self.max_depth = max_depth

    @classmethod
    def parse_text(cls, text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> ExprNode:
        """
        Tokenize and parse ``text`` in one step.

        :param str text: Expression text
        :param int max_depth: Maximum nesting depth

        :return: Root of the expression tree
        :rtype: ExprNode
        :raises LexError: On malformed tokens
        :raises ParseError: On grammar violations
        """
        return cls(tokenize(text), max_depth=max_depth).parse()

    def parse(self) -> ExprNode:
        """
        Parse the complete token stream into a single expression.

        :return: Root of the expression tree
        :rtype: ExprNode
        :raises ParseError: On grammar violations
        """
        if self._current.kind is TokenKind.END_OF_INPUT:
            raise EmptyExpressionError("Expression is empty", self._current.position)

        root = self._parse_expression(LOWEST_PRECEDENCE)

        token = self._current
        if token.kind is TokenKind.RIGHT_PAREN:
            raise UnmatchedParenthesisError("Unmatched ')'", token.position)
        if token.kind is not TokenKind.END_OF_INPUT:
            raise UnexpectedTokenError(
                f"Unexpected {token.describe()} after complete expression", token.position
            )
        return root

    def _advance(self) -> Token:
        token = self._current
        if token.kind is not TokenKind.END_OF_INPUT:
            self._current = next(self._tokens)
        return token

    def _enter(self, token: Token) -> None:
        self._depth += 1
        if self._depth > self.max_depth:
            raise NestingTooDeepError(f"Expression nested deeper than {self.max_depth} levels", token.position)

    def _leave(self) -> None:
        self._depth -= 1

    def _binary_operator(self) -> Optional[Operator]:
        """Return the binary operator at the cursor, or None."""
        token = self._current
        if token.kind is not TokenKind.OPERATOR:
            return None
        if OPERATORS[token.operator].arity is not Arity.BINARY:
            return None
        return token.operator

    def _parse_expression(self, min_prec: int) -> ExprNode:
        left = self._parse_prefix()
        while True:
            op = self._binary_operator()
            if op is None:
                break
            descriptor = OPERATORS[op]
            if descriptor.precedence < min_prec:
                break
            token = self._advance()
            if descriptor.associativity is Associativity.LEFT:
                next_prec = descriptor.precedence + 1
            else:
                next_prec = descriptor.precedence
            self._enter(token)
            right = self._parse_expression(next_prec)
            self._leave()
            left = BinaryOp(op=op, left=left, right=right, position=token.position)
        return left

    def _parse_prefix(self) -> ExprNode:
        token = self._current
        if token.kind is TokenKind.OPERATOR and token.operator in PREFIX_FORMS:
            self._advance()
            self._enter(token)
            operand = self._parse_prefix()
            self._leave()
            return UnaryOp(op=PREFIX_FORMS[token.operator], operand=operand, position=token.position)
        return self._parse_postfix()

    def _parse_postfix(self) -> ExprNode:
        node = self._parse_primary()
        while self._current.is_operator(Operator.FACTORIAL):
            token = self._advance()
            node = UnaryOp(op=Operator.FACTORIAL, operand=node, position=token.position)
        return node

    def _parse_primary(self) -> ExprNode:
        token = self._current

        if token.kind is TokenKind.NUMBER:
            self._advance()
            return Literal(value=token.value, position=token.position)

        if token.kind is TokenKind.IDENTIFIER:
            self._advance()
            if self._current.kind is TokenKind.LEFT_PAREN:
                return FunctionCall(name=token.text, args=self._parse_arguments(token), position=token.position)
            return VariableRef(name=token.text, position=token.position)

        if token.kind is TokenKind.LEFT_PAREN:
            self._advance()
            self._enter(token)
            node = self._parse_expression(LOWEST_PRECEDENCE)
            self._leave()
            self._expect_closing(token)
            return node

        if token.kind is TokenKind.RIGHT_PAREN and self._depth == 0:
            raise UnmatchedParenthesisError("Unmatched ')'", token.position)

        raise MissingOperandError(f"Expected an operand, found {token.describe()}", token.position)

    def _expect_closing(self, opening: Token) -> None:
        token = self._current
        if token.kind is TokenKind.RIGHT_PAREN:
            self._advance()
            return
        if token.kind is TokenKind.END_OF_INPUT:
            raise UnmatchedParenthesisError("Missing ')' for '('", opening.position)
        raise UnexpectedTokenError(f"Expected ')', found {token.describe()}", token.position)

    def _parse_arguments(self, name: Token) -> List[ExprNode]:
        """Parse ``'(' [expr (',' expr)*] ')'``; the cursor is on the opening parenthesis."""
        opening = self._advance()
        args: List[ExprNode] = []
        if self._current.kind is TokenKind.RIGHT_PAREN:
            self._advance()
            return args

        self._enter(opening)
        while True:
            args.append(self._parse_expression(LOWEST_PRECEDENCE))
            token = self._current
            if token.kind is TokenKind.COMMA:
                self._advance()
                continue
            if token.kind is TokenKind.RIGHT_PAREN:
                self._advance()
                break
            if token.kind is TokenKind.END_OF_INPUT:
                raise UnmatchedParenthesisError(f"Missing ')' in call to '{name.text}'", opening.position)
            raise UnexpectedTokenError(
                f"Expected ',' or ')' in call to '{name.text}', found {token.describe()}", token.position
            )
        self._leave()
        return args
