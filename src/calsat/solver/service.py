"""High-level solving service and the solve() entry point."""

from collections.abc import Iterable
from datetime import date

from calsat.exceptions import CalsatError
from calsat.logger import get_logger

from .algorithms import create_algorithm
from .config import SolverConfig
from .consistency import find_violations
from .constraints import DateConstraint
from .core import Problem, SolveResult
from .domains import DomainStore
from .preprocessors import create_preprocessor
from .validator import ProblemValidator

logger = get_logger()


class SolverService:
    """Coordinates one solve of a Problem.

    This service runs:
    - DomainStore initialization from the date range
    - PreProcessor (node and arc consistency)
    - SearchAlgorithm (backtracking)

    Every call to solve() builds fresh domains and a fresh assignment, so a
    service can be reused and separate services never share state.
    """

    def __init__(self, problem: Problem, config: SolverConfig | None = None):
        """Initialize the service.

        Args:
            problem: A validated problem (see ProblemValidator.build_problem)
            config: Optional solver configuration
        """
        self.problem = problem
        self.config = config or SolverConfig()

    def solve(self) -> SolveResult:
        """Solve the problem.

        Returns:
            SolveResult whose ``solution`` is None when the problem is unsatisfiable

        Raises:
            SolveTimeoutError: If a time limit is configured and expires
        """
        problem = self.problem
        domains = DomainStore.initialize(problem.n_meetings, problem.range_start, problem.range_end)
        logger.changes(
            f"Solving {problem.n_meetings} meetings over "
            f"{problem.range_start}..{problem.range_end} "
            f"with {len(problem.constraints)} constraints"
        )

        preprocess_result = None
        preprocessor = create_preprocessor(self.config.preprocessor.type)
        if preprocessor:
            preprocess_result = preprocessor.process(domains, problem.constraints)

        algorithm = create_algorithm(
            self.config.algorithm.type,
            domains,
            problem.constraints,
            config=self.config,
        )
        search_result = algorithm.search()

        solution = search_result.solution
        if solution is not None and self.config.verify_solution:
            self._verify(solution)

        return SolveResult(
            problem=problem,
            solution=solution,
            domain_sizes=domains.sizes(),
            preprocess_result=preprocess_result,
            search_metadata=search_result.algorithm_metadata,
        )

    def _verify(self, solution: list[date]) -> None:
        problem = self.problem
        out_of_range = [
            i for i, d in enumerate(solution) if not problem.range_start <= d <= problem.range_end
        ]
        violations = find_violations(solution, problem.constraints)
        if out_of_range or violations or len(solution) != problem.n_meetings:
            msg = (
                f"Search returned an invalid assignment: meetings out of range {out_of_range}, "
                f"violated constraints {[str(c) for c in violations]}"
            )
            raise CalsatError(msg)


def solve(
    n_meetings: int,
    range_start: date,
    range_end: date,
    constraints: Iterable[DateConstraint],
    config: SolverConfig | None = None,
) -> list[date] | None:
    """Find dates for ``n_meetings`` meetings satisfying every constraint.

    Args:
        n_meetings: Number of meetings, indexed 0..n_meetings-1
        range_start: First allowed date (inclusive)
        range_end: Last allowed date (inclusive)
        constraints: Unary and binary date constraints
        config: Optional solver configuration

    Returns:
        One date per meeting index, or None if no assignment exists. Zero meetings
        always give an empty list, whatever the constraints

    Raises:
        InvalidProblemError: If the arguments break the contract (negative count,
            out-of-range meeting index, non-date literal)
    """
    validator = ProblemValidator()
    if validator.validate_meeting_count(n_meetings) == 0:
        # Nothing to place; constraints cannot reference any meeting
        validator.validate_date(range_start, "Range start")
        validator.validate_date(range_end, "Range end")
        return []

    problem = validator.build_problem(n_meetings, range_start, range_end, constraints)
    return SolverService(problem, config).solve().solution
