"""Protocol definitions for the solver."""

from collections.abc import Sequence
from typing import Protocol

from .constraints import DateConstraint
from .core import PreProcessResult, SearchResult
from .domains import DomainStore


class PreProcessor(Protocol):
    """Protocol for domain-narrowing steps run once before search."""

    def process(
        self,
        domains: DomainStore,
        constraints: Sequence[DateConstraint],
    ) -> PreProcessResult:
        """Narrow ``domains`` in place.

        Args:
            domains: Domain store of the current solve
            constraints: Full constraint set

        Returns:
            PreProcessResult with per-meeting removal counts and metadata
        """
        ...


class SearchAlgorithm(Protocol):
    """Protocol for search algorithms."""

    def search(self) -> SearchResult:
        """Run the search.

        Returns:
            SearchResult with a solution or None, plus statistics
        """
        ...
