"""Evaluate a list of expressions in one session and write a results file."""
from pathlib import Path
from typing import Iterable, List

from pydantic import BaseModel, Field

from arithmetic_evaluator.common.logger import logger
from arithmetic_evaluator.common.models import EvaluationResult
from arithmetic_evaluator.engine.session import Session


class BatchRunner(BaseModel):
    """
    Sequential evaluator for files of expressions.

    Features:
        - Evaluates lines in file order, so assignments are visible to later lines.
        - Writes each result to disk as soon as it is computed.
        - A failing line is recorded as an error and never stops the batch.
    """

    output_file: Path = Field(..., description="Path to write computation results")
    session: Session = Field(default_factory=Session, description="Session shared by every line")

    def run(self, expressions: Iterable[str]) -> List[EvaluationResult]:
        """
        Evaluate every expression and write one result line per expression.

        :param Iterable[str] expressions: Expressions in evaluation order

        :return: Results in input order
        :rtype: List[EvaluationResult]
        """
        logger.info(f"📄 Writing results to {self.output_file}")
        results: List[EvaluationResult] = []

        with self.output_file.open("w", encoding="utf-8") as f_out:
            for line_number, expression in enumerate(expressions, start=1):
                result = self.session.run(expression)
                if result.ok:
                    logger.debug(f"✅ Line {line_number}: {result.result!r}")
                else:
                    logger.error(f"❌ Line {line_number}: {result.error.kind}: {result.error.message}")

                f_out.write(f"{result.format()}\n")
                f_out.flush()
                results.append(result)

        failed = sum(1 for result in results if not result.ok)
        logger.info(f"📄 Evaluated {len(results)} expressions, {failed} failed")
        return results
