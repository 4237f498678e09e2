"""Detect ``name = expression`` input and commit the result to the symbol table."""
from itertools import islice
from typing import Optional

from arithmetic_evaluator.common.config import EvaluatorConfig
from arithmetic_evaluator.common.errors import ReservedNameError
from arithmetic_evaluator.common.lexer import Tokenizer
from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.models import EvaluationResult
from arithmetic_evaluator.common.operators import Operator
from arithmetic_evaluator.common.parser import ExpressionParser
from arithmetic_evaluator.common.tokens import TokenKind
from arithmetic_evaluator.engine.evaluator import Evaluator
from arithmetic_evaluator.engine.symbols import SymbolTable


class AssignmentHandler:
    """
    Entry point of the evaluation pipeline for one line of input.

    ``x = <expression>`` evaluates the right-hand side and stores it in the
    variables of the symbol table; any other input is evaluated as a plain
    expression and leaves the table untouched. ``==`` is tokenized as the
    equality operator, so ``x == 1`` is never mistaken for an assignment.

    The table is only written after the right-hand side evaluated
    successfully, so a failed assignment never creates or changes a variable.
    """

    @staticmethod
    def execute(
        text: str, symbols: SymbolTable, config: Optional[EvaluatorConfig] = None
    ) -> EvaluationResult:
        """
        Evaluate one line, performing the assignment it contains, if any.

        :param str text: Expression or assignment
        :param SymbolTable symbols: Symbol table read, and written on assignment
        :param EvaluatorConfig config: Parser and evaluator limits

        :return: Successful evaluation result, with ``variable`` set for assignments
        :rtype: EvaluationResult
        :raises CalculatorError: On lexical, grammar or evaluation errors
        """
        config = config or EvaluatorConfig()
        tokenizer = Tokenizer(text=text)

        # Look at the first two tokens only; the rest of the stream feeds the parser
        tokens = tokenizer.tokens()
        head = list(islice(tokens, 2))
        is_assignment = (
            len(head) == 2
            and head[0].kind is TokenKind.IDENTIFIER
            and head[1].is_operator(Operator.ASSIGN)
        )

        if not is_assignment:
            # Restart the scan so the parser sees the complete input
            tree = ExpressionParser(tokenizer.tokens(), max_depth=config.max_depth).parse()
            value = Evaluator(symbols, config).evaluate(tree)
            return EvaluationResult(expression=text, result=value)

        name = head[0].text
        if symbols.is_reserved(name):
            raise ReservedNameError(name, head[0].position)

        tree = ExpressionParser(tokens, max_depth=config.max_depth).parse()
        value = Evaluator(symbols, config).evaluate(tree)
        symbols.assign(name, value)
        logger.info(f"📝 {name} = {value!r}")
        return EvaluationResult(expression=text, result=value, variable=name)
