"""Algorithm factory and exports."""

from collections.abc import Sequence

from ..config import AlgorithmType, SolverConfig
from ..constraints import DateConstraint
from ..domains import DomainStore
from .backtracking import BacktrackingSearch


def create_algorithm(
    algorithm_type: AlgorithmType,
    domains: DomainStore,
    constraints: Sequence[DateConstraint],
    *,
    config: SolverConfig | None = None,
) -> BacktrackingSearch:
    """Create a search algorithm instance.

    Args:
        algorithm_type: Type of algorithm to create
        domains: Domains after preprocessing
        constraints: Full constraint set
        config: Optional solver configuration

    Returns:
        Algorithm instance ready to search
    """
    if algorithm_type == AlgorithmType.BACKTRACKING:
        return BacktrackingSearch(domains, constraints, config=config)

    msg = f"Unknown algorithm type: {algorithm_type}"
    raise ValueError(msg)


__all__ = ["BacktrackingSearch", "create_algorithm"]
