"""Tests for solution files."""

from datetime import date
from pathlib import Path

import pytest

from calsat.exceptions import ParseError, ValidationError
from calsat.solution import read_solution_file, write_solution_file
from calsat.solver import (
    BinaryDateConstraint,
    Operator,
    Problem,
    ProblemValidator,
    SolveResult,
    SolverService,
)


@pytest.fixture
def problem() -> Problem:
    return ProblemValidator().build_problem(
        2,
        date(2025, 3, 3),
        date(2025, 3, 7),
        [BinaryDateConstraint(0, Operator.LT, 1)],
        meeting_names=["kickoff", "review"],
    )


def test_write_then_read(tmp_path: Path, problem: Problem):
    result = SolverService(problem).solve()
    path = tmp_path / "solution.yaml"
    write_solution_file(path, result)

    assert path.read_text(encoding="utf-8") == (
        "solution:\n  kickoff: '2025-03-03'\n  review: '2025-03-04'\n"
    )
    assert read_solution_file(path, problem) == [date(2025, 3, 3), date(2025, 3, 4)]


def test_write_unsatisfiable_rejected(tmp_path: Path, problem: Problem):
    result = SolveResult(problem=problem, solution=None, domain_sizes=[0, 0])
    with pytest.raises(ValueError, match="unsatisfiable"):
        write_solution_file(tmp_path / "solution.yaml", result)


def test_read_orders_by_meeting_index(tmp_path: Path, problem: Problem):
    path = tmp_path / "solution.yaml"
    path.write_text("solution:\n  review: 2025-03-06\n  kickoff: 2025-03-05\n")
    assert read_solution_file(path, problem) == [date(2025, 3, 5), date(2025, 3, 6)]


def test_read_numeric_meeting_keys(tmp_path: Path):
    unnamed = ProblemValidator().build_problem(2, date(2025, 3, 3), date(2025, 3, 7), [])
    path = tmp_path / "solution.yaml"
    path.write_text("solution:\n  0: 2025-03-05\n  1: 2025-03-03\n")
    assert read_solution_file(path, unnamed) == [date(2025, 3, 5), date(2025, 3, 3)]


def test_read_missing_meeting(tmp_path: Path, problem: Problem):
    path = tmp_path / "solution.yaml"
    path.write_text("solution:\n  kickoff: 2025-03-05\n")
    with pytest.raises(ValidationError, match="missing meetings: review"):
        read_solution_file(path, problem)


def test_read_unknown_meeting(tmp_path: Path, problem: Problem):
    path = tmp_path / "solution.yaml"
    path.write_text("solution:\n  kickoff: 2025-03-05\n  review: 2025-03-06\n  lunch: 2025-03-06\n")
    with pytest.raises(ValidationError, match="unknown meetings: lunch"):
        read_solution_file(path, problem)


def test_read_bad_date(tmp_path: Path, problem: Problem):
    path = tmp_path / "solution.yaml"
    path.write_text("solution:\n  kickoff: soon\n  review: 2025-03-06\n")
    with pytest.raises(ValidationError, match="Invalid solution structure"):
        read_solution_file(path, problem)


def test_read_not_a_mapping(tmp_path: Path, problem: Problem):
    path = tmp_path / "solution.yaml"
    path.write_text("just text\n")
    with pytest.raises(ParseError):
        read_solution_file(path, problem)
