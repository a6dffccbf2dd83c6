"""Pytest configuration and fixtures for calsat tests."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import date, timedelta

import pytest

from calsat.logger import reset_logger
from calsat.solver import DateConstraint, find_violations

# Monday 2025-01-06; tests count days from here
BASE_DATE = date(2025, 1, 6)


def day(offset: int) -> date:
    """Date ``offset`` days after BASE_DATE.

    Example:
        day(0) == date(2025, 1, 6), day(4) == date(2025, 1, 10)
    """
    return BASE_DATE + timedelta(days=offset)


@pytest.fixture(autouse=True)
def silent_logger() -> Iterator[None]:
    """Keep the calsat logger silent and handler-free between tests."""
    reset_logger()
    yield
    reset_logger()


def assert_valid_solution(
    solution: Sequence[date] | None,
    n_meetings: int,
    range_start: date,
    range_end: date,
    constraints: Sequence[DateConstraint],
) -> None:
    """Assert that a solution exists, is in range and satisfies every constraint."""
    assert solution is not None, "Expected a solution"
    assert len(solution) == n_meetings
    for index, value in enumerate(solution):
        assert range_start <= value <= range_end, f"Meeting {index} on {value} is out of range"
    violations = find_violations(solution, constraints)
    assert not violations, f"Violated constraints: {[str(c) for c in violations]}"
