"""Chronological backtracking search over pruned date domains."""

import sys
import time
from collections.abc import Sequence
from datetime import date

from calsat.exceptions import SolveTimeoutError
from calsat.logger import checks_enabled, get_logger

from ..config import SolverConfig
from ..consistency import assignment_consistent
from ..constraints import DateConstraint
from ..core import Assignment, SearchResult
from ..domains import DomainStore

logger = get_logger()

# Frames kept free for callers above the search and checks below its deepest level
_RECURSION_HEADROOM = 1000


class BacktrackingSearch:
    """Depth-first search assigning meetings in index order.

    This search:
    1. Picks the first unassigned meeting
    2. Tries its remaining dates in chronological order
    3. Re-validates the whole partial assignment after each tentative date
    4. Recurses on success and undoes the date on failure

    Running out of candidates is reported as None, never as an exception.
    """

    def __init__(
        self,
        domains: DomainStore,
        constraints: Sequence[DateConstraint],
        *,
        config: SolverConfig | None = None,
    ):
        """Initialize the search.

        Args:
            domains: Pruned domains, read-only during search
            constraints: Full constraint set
            config: Optional solver configuration (time limit)
        """
        self.domains = domains
        self.constraints = tuple(constraints)
        self.config = config or SolverConfig()
        self.n_meetings = len(domains)

        self._candidates: list[list[date]] = []
        self._deadline: float | None = None
        self._nodes = 0
        self._backtracks = 0
        self._max_depth = 0

    def search(self) -> SearchResult:
        """Run the search from an empty assignment.

        Returns:
            SearchResult with a list of dates or None, plus statistics

        Raises:
            SolveTimeoutError: If the configured time limit expires
        """
        self._nodes = 0
        self._backtracks = 0
        self._max_depth = 0
        self._deadline = None
        if self.config.time_limit_seconds is not None:
            self._deadline = time.monotonic() + self.config.time_limit_seconds

        # Domains are read-only from here on
        self._candidates = [self.domains.sorted_values(v) for v in range(self.n_meetings)]

        previous_limit = sys.getrecursionlimit()
        self._ensure_recursion_limit()
        started = time.monotonic()
        try:
            solution = self._backtrack(Assignment(self.n_meetings), depth=0)
        finally:
            sys.setrecursionlimit(previous_limit)
        elapsed = time.monotonic() - started

        if solution is None:
            logger.changes(f"No solution after {self._nodes} candidate dates")
        else:
            logger.changes(
                f"Solution found after {self._nodes} candidate dates, "
                f"{self._backtracks} backtracks"
            )

        return SearchResult(
            solution=solution,
            algorithm_metadata={
                "algorithm": "backtracking",
                "nodes": self._nodes,
                "backtracks": self._backtracks,
                "max_depth": self._max_depth,
                "elapsed_seconds": elapsed,
            },
        )

    def _backtrack(self, assignment: Assignment, depth: int) -> list[date] | None:
        """Extend ``assignment`` to a complete consistent one, or return None."""
        variable = assignment.first_unassigned()
        if variable is None:
            return assignment.to_dates()

        self._max_depth = max(self._max_depth, depth + 1)
        for candidate in self._candidates[variable]:
            self._check_deadline()
            self._nodes += 1
            assignment.assign(variable, candidate)

            if assignment_consistent(assignment, self.constraints):
                if checks_enabled():
                    logger.checks(f"{'  ' * depth}Meeting {variable} = {candidate}")
                result = self._backtrack(assignment, depth + 1)
                if result is not None:
                    return result
            elif checks_enabled():
                logger.checks(f"{'  ' * depth}Meeting {variable} = {candidate} is inconsistent")

            assignment.unassign(variable)

        self._backtracks += 1
        logger.debug(f"{'  ' * depth}Backtracking from meeting {variable}")
        return None

    def _check_deadline(self) -> None:
        if self._deadline is not None and time.monotonic() > self._deadline:
            msg = (
                f"Search exceeded time limit of {self.config.time_limit_seconds}s "
                f"after {self._nodes} candidate dates"
            )
            raise SolveTimeoutError(msg)

    def _ensure_recursion_limit(self) -> None:
        needed = self.n_meetings + _RECURSION_HEADROOM
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)
