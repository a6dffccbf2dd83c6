"""Core dataclasses for the solver."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from .constraints import DateConstraint


def _default_dict() -> dict[str, Any]:
    return {}


@dataclass(frozen=True)
class Assigned:
    """A slot holding a concrete date."""

    value: date


@dataclass(frozen=True)
class Unassigned:
    """A slot with no date yet."""


UNASSIGNED = Unassigned()

Slot = Assigned | Unassigned


class Assignment:
    """Partial assignment of dates to meetings, one slot per meeting index.

    Mutated in place by the search. The number of assigned slots is tracked so
    completeness is a count comparison rather than a scan.
    """

    def __init__(self, size: int):
        self._slots: list[Slot] = [UNASSIGNED] * size
        self._assigned_count = 0

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, index: int) -> Slot:
        return self._slots[index]

    def assign(self, index: int, value: date) -> None:
        if isinstance(self._slots[index], Unassigned):
            self._assigned_count += 1
        self._slots[index] = Assigned(value)

    def unassign(self, index: int) -> None:
        if isinstance(self._slots[index], Assigned):
            self._assigned_count -= 1
        self._slots[index] = UNASSIGNED

    def value(self, index: int) -> date | None:
        """Return the date at ``index`` or None if unassigned."""
        match self._slots[index]:
            case Assigned(value=value):
                return value
            case Unassigned():
                return None

    @property
    def assigned_count(self) -> int:
        return self._assigned_count

    def is_complete(self) -> bool:
        return self._assigned_count == len(self._slots)

    def first_unassigned(self) -> int | None:
        """Return the lowest unassigned index, or None when complete."""
        if self.is_complete():
            return None
        for index, slot in enumerate(self._slots):
            if isinstance(slot, Unassigned):
                return index
        return None

    def to_dates(self) -> list[date]:
        """Copy a complete assignment out as a plain list of dates.

        Raises:
            ValueError: If any slot is still unassigned
        """
        if not self.is_complete():
            msg = f"Assignment is incomplete: {self._assigned_count}/{len(self._slots)} assigned"
            raise ValueError(msg)
        return [slot.value for slot in self._slots if isinstance(slot, Assigned)]

    def __repr__(self) -> str:
        rendered = ", ".join(
            slot.value.isoformat() if isinstance(slot, Assigned) else "_" for slot in self._slots
        )
        return f"Assignment([{rendered}])"


@dataclass(frozen=True)
class Problem:
    """A complete date-scheduling problem."""

    n_meetings: int
    range_start: date
    range_end: date
    constraints: tuple[DateConstraint, ...]
    meeting_names: tuple[str, ...] = ()

    def name_of(self, index: int) -> str:
        """Display name for a meeting index (falls back to the index)."""
        if index < len(self.meeting_names):
            return self.meeting_names[index]
        return str(index)


@dataclass
class PreProcessResult:
    """Result from a pre-processor (e.g., node and arc consistency)."""

    removed_by_variable: dict[int, int]
    metadata: dict[str, Any] = field(default_factory=_default_dict)

    @property
    def total_removed(self) -> int:
        return sum(self.removed_by_variable.values())


@dataclass
class SearchResult:
    """Result from a search algorithm. ``solution`` is None when none exists."""

    solution: list[date] | None
    algorithm_metadata: dict[str, Any] = field(default_factory=_default_dict)


@dataclass
class SolveResult:
    """Complete result of a solve including statistics."""

    problem: Problem
    solution: list[date] | None
    domain_sizes: list[int]  # After preprocessing
    preprocess_result: PreProcessResult | None = None
    search_metadata: dict[str, Any] = field(default_factory=_default_dict)

    @property
    def satisfiable(self) -> bool:
        return self.solution is not None

    def named_solution(self) -> dict[str, date] | None:
        """Map meeting display names to their dates."""
        if self.solution is None:
            return None
        return {self.problem.name_of(i): d for i, d in enumerate(self.solution)}
