"""Evaluation session owning one symbol table."""
from typing import Mapping

from pydantic import BaseModel, Field

from arithmetic_evaluator.common.config import EvaluatorConfig
from arithmetic_evaluator.common.errors import CalculatorError
from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.models import EvaluationResult
from arithmetic_evaluator.engine.assignment import AssignmentHandler
from arithmetic_evaluator.engine.symbols import SymbolTable


class Session(BaseModel):
    """
    A sequence of evaluations sharing the same variables.

    Lifecycle:
        - Created with the built-in constants and functions seeded
        - Each input line is evaluated to completion before the next one
        - Failed lines leave the variables untouched and the session usable
    """

    symbols: SymbolTable = Field(default_factory=SymbolTable.with_builtins, description="Names visible to expressions")
    config: EvaluatorConfig = Field(default_factory=EvaluatorConfig, description="Parser and evaluator limits")

    @property
    def variables(self) -> Mapping[str, float]:
        """Copy of the user variables defined so far."""
        return self.symbols.snapshot()

    def evaluate(self, text: str) -> float:
        """
        Evaluate one line and return its value.

        :param str text: Expression or assignment

        :return: Numeric result
        :rtype: float
        :raises CalculatorError: If the line cannot be evaluated
        """
        logger.debug(f"🧮 Evaluating {text!r}")
        return AssignmentHandler.execute(text, self.symbols, self.config).result

    def run(self, text: str) -> EvaluationResult:
        """
        Evaluate one line, reporting failures as data instead of raising.

        :param str text: Expression or assignment

        :return: Result carrying either the value or an error report
        :rtype: EvaluationResult
        """
        logger.debug(f"🧮 Evaluating {text!r}")
        try:
            return AssignmentHandler.execute(text, self.symbols, self.config)
        except CalculatorError as exc:
            logger.info(f"🧮❌ {exc.kind} in {text!r}: {exc}")
            return EvaluationResult(expression=text, error=exc.report())
