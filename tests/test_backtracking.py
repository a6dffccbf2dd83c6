"""Tests for the backtracking search."""

import sys
from datetime import date

import pytest

from calsat.exceptions import SolveTimeoutError
from calsat.solver import (
    AlgorithmType,
    BacktrackingSearch,
    BinaryDateConstraint,
    DomainStore,
    Operator,
    SolverConfig,
    UnaryDateConstraint,
    create_algorithm,
)
from tests.conftest import day


def test_first_solution_in_chronological_order():
    """Meetings are filled in index order with the earliest consistent date."""
    domains = DomainStore.initialize(3, day(0), day(4))
    constraints = [
        BinaryDateConstraint(0, Operator.LT, 1),
        BinaryDateConstraint(1, Operator.LT, 2),
    ]
    result = BacktrackingSearch(domains, constraints).search()
    assert result.solution == [day(0), day(1), day(2)]


def test_backtracks_over_earlier_choice():
    """A later constraint forces meeting 0 away from its first candidate."""
    domains = DomainStore.initialize(2, day(0), day(2))
    constraints = [
        BinaryDateConstraint(0, Operator.GT, 1),
        UnaryDateConstraint(1, Operator.EQ, day(1)),
    ]
    result = BacktrackingSearch(domains, constraints).search()
    assert result.solution == [day(2), day(1)]
    assert result.algorithm_metadata["backtracks"] >= 1


def test_no_solution_returns_none():
    domains = DomainStore.initialize(2, day(0), day(0))
    result = BacktrackingSearch(domains, [BinaryDateConstraint(0, Operator.NE, 1)]).search()
    assert result.solution is None
    assert result.algorithm_metadata["nodes"] == 2


def test_empty_domain_fails_without_error():
    domains = DomainStore([[day(0), day(1)], []])
    result = BacktrackingSearch(domains, []).search()
    assert result.solution is None


def test_zero_meetings_is_empty_solution():
    result = BacktrackingSearch(DomainStore([]), []).search()
    assert result.solution == []
    assert result.algorithm_metadata["nodes"] == 0


def test_only_uses_pruned_domains():
    """Dates missing from a domain are never tried."""
    domains = DomainStore([[day(3), day(5)], [day(1), day(4)]])
    result = BacktrackingSearch(domains, [BinaryDateConstraint(0, Operator.LE, 1)]).search()
    assert result.solution == [day(3), day(4)]


def test_repeated_search_is_stable():
    domains = DomainStore.initialize(2, day(0), day(3))
    search = BacktrackingSearch(domains, [BinaryDateConstraint(0, Operator.GT, 1)])
    first = search.search()
    second = search.search()
    assert first.solution == second.solution == [day(1), day(0)]
    assert first.algorithm_metadata["nodes"] == second.algorithm_metadata["nodes"]


def test_deep_problem_does_not_overflow():
    """A long chain recurses once per meeting."""
    n = 1100
    domains = DomainStore([[day(i)] for i in range(n)])
    constraints = [BinaryDateConstraint(i, Operator.LT, i + 1) for i in range(n - 1)]
    result = BacktrackingSearch(domains, constraints).search()
    assert result.solution == [day(i) for i in range(n)]
    assert result.algorithm_metadata["max_depth"] == n


def test_time_limit_raises():
    """An exhaustive search with a tiny time limit is cancelled."""
    n = 12
    domains = DomainStore.initialize(n, day(0), day(29))
    # The contradiction only shows once the last two meetings are assigned
    constraints = [
        BinaryDateConstraint(n - 2, Operator.LT, n - 1),
        BinaryDateConstraint(n - 1, Operator.LT, n - 2),
    ]
    config = SolverConfig(time_limit_seconds=0.05)
    with pytest.raises(SolveTimeoutError, match="time limit"):
        BacktrackingSearch(domains, constraints, config=config).search()


def test_recursion_limit_restored_after_deep_search():
    """Raising the limit for a deep search does not outlive the search."""
    before = sys.getrecursionlimit()
    n = before + 10
    domains = DomainStore([[day(0)] for _ in range(n)])
    result = BacktrackingSearch(domains, []).search()

    assert result.solution is not None
    assert len(result.solution) == n
    assert sys.getrecursionlimit() == before


def test_recursion_limit_restored_after_timeout():
    before = sys.getrecursionlimit()
    n = before + 10
    domains = DomainStore.initialize(n, day(0), day(1))
    constraints = [BinaryDateConstraint(n - 1, Operator.NE, n - 1)]
    config = SolverConfig(time_limit_seconds=0.01)
    with pytest.raises(SolveTimeoutError):
        BacktrackingSearch(domains, constraints, config=config).search()
    assert sys.getrecursionlimit() == before


def test_domains_sorted_once_per_search(monkeypatch: pytest.MonkeyPatch):
    """Candidate lists are built up front, not on every visit."""
    domains = DomainStore.initialize(3, day(0), day(3))
    calls: list[int] = []
    original = DomainStore.sorted_values

    def counting(self: DomainStore, variable: int) -> list[date]:
        calls.append(variable)
        return original(self, variable)

    monkeypatch.setattr(DomainStore, "sorted_values", counting)
    # Forces repeated revisits of meetings 1 and 2
    constraints = [
        BinaryDateConstraint(0, Operator.GT, 1),
        BinaryDateConstraint(1, Operator.GT, 2),
    ]
    result = BacktrackingSearch(domains, constraints).search()

    assert result.solution == [day(2), day(1), day(0)]
    assert result.algorithm_metadata["backtracks"] > 0
    assert sorted(calls) == [0, 1, 2]


def test_create_algorithm():
    domains = DomainStore.initialize(1, day(0), day(1))
    algorithm = create_algorithm(AlgorithmType.BACKTRACKING, domains, [])
    assert isinstance(algorithm, BacktrackingSearch)
    assert algorithm.search().solution == [day(0)]
