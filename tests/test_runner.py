"""Test class BatchRunner."""
from pathlib import Path

import pytest

from arithmetic_evaluator.batch.runner import BatchRunner
from arithmetic_evaluator.engine.session import Session


@pytest.fixture
def tmp_output_file(tmp_path: Path) -> Path:
    """Create a temporary output file path."""
    return tmp_path / "results.txt"


def test_runner_writes_results(tmp_output_file: Path) -> None:
    """Each expression produces one line in input order."""
    runner = BatchRunner(output_file=tmp_output_file)
    results = runner.run(["2 + 3", "4 * 5", "2 ^ 3 ^ 2"])

    assert [r.result for r in results] == [5.0, 20.0, 512.0]
    assert tmp_output_file.read_text().splitlines() == [
        "2 + 3 = 5",
        "4 * 5 = 20",
        "2 ^ 3 ^ 2 = 512",
    ]


def test_runner_records_errors_and_continues(tmp_output_file: Path) -> None:
    """Failing lines are written as errors and later lines still run."""
    runner = BatchRunner(output_file=tmp_output_file)
    results = runner.run(["2 +", "1 / 0", "3 * 3"])

    assert [r.ok for r in results] == [False, False, True]
    lines = tmp_output_file.read_text().splitlines()
    assert lines[0].startswith("2 + -> ERROR: ")
    assert lines[1] == "1 / 0 -> ERROR: Division by zero in '/'"
    assert lines[2] == "3 * 3 = 9"


def test_runner_shares_variables_between_lines(tmp_output_file: Path) -> None:
    """Assignments are visible to later lines and kept in the session."""
    session = Session()
    runner = BatchRunner(output_file=tmp_output_file, session=session)
    runner.run(["x = 10", "y = x / 4", "x * y"])

    assert tmp_output_file.read_text().splitlines()[-1] == "x * y = 25"
    assert session.variables == {"x": 10.0, "y": 2.5}


def test_runner_empty_input(tmp_output_file: Path) -> None:
    """No expressions produce an empty results file."""
    assert BatchRunner(output_file=tmp_output_file).run([]) == []
    assert tmp_output_file.read_text() == ""
