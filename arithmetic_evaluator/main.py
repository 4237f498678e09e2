"""
Command-line entry point.

This script:
- Evaluates a single expression given as argument, or
- Evaluates every line of an operations file (text or archive) in one session, or
- Starts an interactive prompt when neither is given

Variables assigned on one line are visible to the following lines of the
same run.
"""

import argparse
from pathlib import Path
import sys
from typing import List, Literal, Optional, TextIO

from pydantic import BaseModel, FilePath, ValidationError

from arithmetic_evaluator.batch.reader import load_expressions
from arithmetic_evaluator.batch.runner import BatchRunner
from arithmetic_evaluator.common.config import DEFAULT_MAX_DEPTH, EvaluatorConfig
from arithmetic_evaluator.common.logger import logger, set_level
from arithmetic_evaluator.common.models import EvaluationResult, format_number
from arithmetic_evaluator.engine.session import Session


PROMPT = ">>> "


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : str, optional
        Expression evaluated once before exiting.
    file_path : FilePath, optional
        Path to the file containing expressions, one per line.
    config : EvaluatorConfig
        Parser and evaluator limits.
    log_level : str
        Verbosity of the package logger.
    """

    expression: Optional[str] = None
    file_path: Optional[FilePath] = None
    config: EvaluatorConfig = EvaluatorConfig()
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param list argv: Arguments, defaults to ``sys.argv[1:]``

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        description="Arithmetic and boolean expression evaluator"
    )

    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate; starts an interactive prompt when omitted",
    )
    parser.add_argument(
        "-f",
        "--file",
        dest="file_path",
        help="Path to a .txt, .zip, .tar.xz or .7z file containing one expression per line",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum nesting depth of an expression",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        help="Logging verbosity (DEBUG, INFO, WARNING, ERROR)",
    )

    args = parser.parse_args(argv)

    if args.expression is not None and args.file_path is not None:
        parser.error("an expression and --file cannot be combined")

    try:
        return CliArgs(
            expression=args.expression,
            file_path=args.file_path,
            config=EvaluatorConfig(max_depth=args.max_depth),
            log_level=args.log_level,
        )
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Name the results file written beside an expressions file.

    Every extension is folded into the stem, so ``ops.txt`` and ``ops.7z``
    in the same folder never share a results file:
    ``batches/ops.tar.xz`` -> ``batches/ops_tar_xz_results.txt``.

    :param Path input_path: Expressions file or archive

    :return: Path of the results file
    :rtype: Path
    """
    suffixes = "".join(input_path.suffixes)
    base = input_path.name[: len(input_path.name) - len(suffixes)] if suffixes else input_path.name
    suffix_safe = suffixes.replace(".", "_")
    return input_path.with_name(f"{base}{suffix_safe}_results.txt")


def render(result: EvaluationResult) -> str:
    """Format a result for the interactive prompt."""
    if result.error is not None:
        return f"Error: {result.error.message}"
    prefix = f"{result.variable} " if result.variable else ""
    return f"{prefix}= {format_number(result.result)}"


def repl(session: Session, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> None:
    """
    Read lines until end of input and print each result.

    :param Session session: Session evaluating the lines
    :param TextIO stdin: Input stream
    :param TextIO stdout: Output stream
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            break
        line = line.strip()
        if not line:
            continue
        stdout.write(render(session.run(line)) + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function executed by the ``arithmetic-evaluator`` console script.

    :return: Process exit status
    :rtype: int
    """
    cli_args = parse_args(argv)
    set_level(cli_args.log_level)
    session = Session(config=cli_args.config)

    if cli_args.file_path is not None:
        input_path = Path(cli_args.file_path)
        output_path = build_output_path(input_path)
        try:
            expressions = load_expressions(input_path)
        except ValueError as exc:
            logger.error(f"📄❌ Cannot read {input_path}: {exc}")
            return 2
        results = BatchRunner(output_file=output_path, session=session).run(expressions)
        print(f"{len(results)} results written to {output_path}")
        return 0 if all(result.ok for result in results) else 1

    if cli_args.expression is not None:
        result = session.run(cli_args.expression)
        print(render(result) if not result.ok else format_number(result.result))
        return 0 if result.ok else 1

    try:
        repl(session)
    except KeyboardInterrupt:
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
