"""Node and arc consistency pre-processor."""

from collections.abc import Sequence
from datetime import date
from typing import Any

from calsat.logger import debug_enabled, get_logger

from ..constraints import (
    BinaryDateConstraint,
    DateConstraint,
    Operator,
    UnaryDateConstraint,
    evaluate,
)
from ..core import PreProcessResult
from ..domains import DomainStore

logger = get_logger()


def supported_values(
    domain: frozenset[date], op: Operator, other: frozenset[date]
) -> frozenset[date]:
    """Dates in ``domain`` having at least one ``d2`` in ``other`` with ``d op d2``.

    Ordering operators only need the extreme date of ``other`` as a witness:
    if the latest date of ``other`` does not follow ``d`` then none does.
    """
    if not other:
        return frozenset()

    match op:
        case Operator.EQ:
            return domain & other
        case Operator.NE:
            # Any second candidate supports every date
            if len(other) > 1:
                return domain
            return domain - other
        case Operator.LT | Operator.LE:
            witness = max(other)
        case Operator.GT | Operator.GE:
            witness = min(other)

    return frozenset(d for d in domain if evaluate(op, d, witness))


class ConsistencyPreProcessor:
    """Narrows domains once before search.

    This pre-processor:
    1. Applies node consistency for every unary constraint
    2. Revises both meetings of every binary constraint against the domains
       left by step 1 (one pass, no fixed point)

    Every binary revision reads the same post-node-consistency snapshot and the
    surviving sets are intersected, so the result does not depend on the order
    of the constraints.
    """

    def __init__(self, config: dict[str, Any] | None = None):
        """Initialize the pre-processor.

        Args:
            config: Optional configuration (currently unused)
        """
        self.config = config or {}

    def process(
        self,
        domains: DomainStore,
        constraints: Sequence[DateConstraint],
    ) -> PreProcessResult:
        """Run node then arc consistency, narrowing ``domains`` in place.

        Args:
            domains: Domain store of the current solve
            constraints: Full constraint set

        Returns:
            PreProcessResult with per-meeting removal counts
        """
        unary = [c for c in constraints if isinstance(c, UnaryDateConstraint)]
        binary = [c for c in constraints if isinstance(c, BinaryDateConstraint)]

        node_removed = self._apply_node_consistency(domains, unary)
        arc_removed = self._apply_arc_consistency(domains, binary)

        removed_by_variable: dict[int, int] = {}
        for counts in (node_removed, arc_removed):
            for variable, count in counts.items():
                removed_by_variable[variable] = removed_by_variable.get(variable, 0) + count

        result = PreProcessResult(
            removed_by_variable=removed_by_variable,
            metadata={
                "algorithm": "consistency",
                "node_removed": sum(node_removed.values()),
                "arc_removed": sum(arc_removed.values()),
                "unary_constraints": len(unary),
                "binary_constraints": len(binary),
            },
        )
        logger.changes(
            f"Preprocessing removed {result.total_removed} candidate dates "
            f"(node: {result.metadata['node_removed']}, arc: {result.metadata['arc_removed']})"
        )
        for variable, size in enumerate(domains.sizes()):
            if size == 0:
                logger.changes(f"Meeting {variable} has no candidate dates left")
        return result

    def node_consistency(
        self, domains: DomainStore, constraint: UnaryDateConstraint
    ) -> frozenset[date]:
        """Remove dates of the constrained meeting that violate the unary constraint.

        Returns:
            The removed dates
        """
        return domains.prune(
            constraint.variable, lambda d: evaluate(constraint.op, d, constraint.value)
        )

    def _apply_node_consistency(
        self, domains: DomainStore, constraints: list[UnaryDateConstraint]
    ) -> dict[int, int]:
        removed: dict[int, int] = {}
        for constraint in constraints:
            dropped = self.node_consistency(domains, constraint)
            if dropped:
                removed[constraint.variable] = removed.get(constraint.variable, 0) + len(dropped)
            if debug_enabled():
                logger.debug(
                    f"  node [{constraint}]: removed {len(dropped)}, "
                    f"{len(domains.get(constraint.variable))} left"
                )
        return removed

    def arc_consistency(
        self,
        snapshot: Sequence[frozenset[date]],
        constraint: BinaryDateConstraint,
    ) -> dict[int, frozenset[date]]:
        """Compute the supported dates of both meetings of a binary constraint.

        The left meeting is revised with the constraint's operator, the right
        meeting with its converse. A constraint relating a meeting to itself
        keeps only the dates d with ``d op d``.

        Args:
            snapshot: Domains to read support from (not modified)
            constraint: The binary constraint

        Returns:
            Mapping of meeting index to its supported dates
        """
        left, op, right = constraint.left, constraint.op, constraint.right
        if left == right:
            return {left: frozenset(d for d in snapshot[left] if evaluate(op, d, d))}

        return {
            left: supported_values(snapshot[left], op, snapshot[right]),
            right: supported_values(snapshot[right], op.converse, snapshot[left]),
        }

    def _apply_arc_consistency(
        self, domains: DomainStore, constraints: list[BinaryDateConstraint]
    ) -> dict[int, int]:
        snapshot = domains.snapshot()
        survivors: dict[int, frozenset[date]] = {}

        for constraint in constraints:
            for variable, supported in self.arc_consistency(snapshot, constraint).items():
                survivors[variable] = survivors.get(variable, snapshot[variable]) & supported
            if debug_enabled():
                logger.debug(
                    f"  arc [{constraint}]: "
                    f"{constraint.left} -> {len(survivors[constraint.left])}, "
                    f"{constraint.right} -> {len(survivors[constraint.right])}"
                )

        removed: dict[int, int] = {}
        for variable, narrowed in survivors.items():
            dropped = domains.replace(variable, narrowed)
            if dropped:
                removed[variable] = len(dropped)
        return removed
