"""Per-meeting candidate date sets."""

from collections.abc import Callable, Iterable, Iterator
from datetime import date, timedelta


def date_range(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive (nothing if start > end)."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


class DomainStore:
    """Candidate dates for each meeting of a single solve.

    Domains only ever shrink. Every narrowing builds a new frozenset from the
    current one and swaps it in, so callers iterating an old domain are never
    affected by a prune.
    """

    def __init__(self, domains: Iterable[Iterable[date]]):
        self._domains: list[frozenset[date]] = [frozenset(d) for d in domains]

    @classmethod
    def initialize(cls, size: int, start: date, end: date) -> "DomainStore":
        """Create ``size`` domains, each holding every date in [start, end]."""
        full = frozenset(date_range(start, end))
        return cls([full] * size)

    def __len__(self) -> int:
        return len(self._domains)

    def get(self, variable: int) -> frozenset[date]:
        return self._domains[variable]

    def sorted_values(self, variable: int) -> list[date]:
        """Candidate dates for ``variable`` in chronological order."""
        return sorted(self._domains[variable])

    def sizes(self) -> list[int]:
        return [len(d) for d in self._domains]

    def is_empty(self, variable: int) -> bool:
        return not self._domains[variable]

    def prune(self, variable: int, predicate: Callable[[date], bool]) -> frozenset[date]:
        """Keep only dates satisfying ``predicate``.

        Returns:
            The dates that were removed
        """
        current = self._domains[variable]
        kept = frozenset(d for d in current if predicate(d))
        self._domains[variable] = kept
        return current - kept

    def replace(self, variable: int, dates: Iterable[date]) -> frozenset[date]:
        """Swap in a narrowed domain.

        Returns:
            The dates that were removed

        Raises:
            ValueError: If ``dates`` contains a date not already in the domain
        """
        current = self._domains[variable]
        narrowed = frozenset(dates)
        if not narrowed <= current:
            extra = sorted(narrowed - current)
            msg = f"Domain of meeting {variable} cannot grow (would add {extra[0]})"
            raise ValueError(msg)
        self._domains[variable] = narrowed
        return current - narrowed

    def snapshot(self) -> list[frozenset[date]]:
        """Current domains; safe to keep since domains are immutable sets."""
        return list(self._domains)
