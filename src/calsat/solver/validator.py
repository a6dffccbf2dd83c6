"""Input validation for solve() arguments."""

from collections.abc import Iterable, Sequence
from datetime import date, datetime

from calsat.exceptions import InvalidProblemError
from calsat.logger import get_logger

from .constraints import BinaryDateConstraint, DateConstraint, UnaryDateConstraint
from .core import Problem

logger = get_logger()


class ProblemValidator:
    """Checks caller-supplied problem data and builds a Problem.

    Every contract violation raises InvalidProblemError before any solving
    work is done, so it is never confused with an unsatisfiable problem.
    """

    def validate_meeting_count(self, n_meetings: int) -> int:
        if isinstance(n_meetings, bool) or not isinstance(n_meetings, int):
            msg = f"Number of meetings must be an integer, got {type(n_meetings).__name__}"
            raise InvalidProblemError(msg)
        if n_meetings < 0:
            msg = f"Number of meetings must be >= 0, got {n_meetings}"
            raise InvalidProblemError(msg)
        return n_meetings

    def validate_date(self, value: object, what: str) -> date:
        # datetime is a date subclass but does not compare with plain dates
        if isinstance(value, datetime) or not isinstance(value, date):
            msg = f"{what} must be a date, got {type(value).__name__}"
            raise InvalidProblemError(msg)
        return value

    def validate_index(self, index: object, n_meetings: int, constraint: object) -> int:
        if isinstance(index, bool) or not isinstance(index, int):
            msg = f"Meeting index must be an integer in constraint {constraint}"
            raise InvalidProblemError(msg)
        if not 0 <= index < n_meetings:
            valid = f"meetings 0..{n_meetings - 1}" if n_meetings else "no meetings"
            msg = f"Constraint {constraint} references meeting {index}, but there are {valid}"
            raise InvalidProblemError(msg)
        return index

    def validate_constraint(self, constraint: object, n_meetings: int) -> DateConstraint:
        """Check a single constraint against the number of meetings."""
        match constraint:
            case UnaryDateConstraint(variable=variable, value=value):
                self.validate_index(variable, n_meetings, constraint)
                self.validate_date(value, f"Literal of constraint {constraint}")
                return constraint
            case BinaryDateConstraint(left=left, right=right):
                self.validate_index(left, n_meetings, constraint)
                self.validate_index(right, n_meetings, constraint)
                return constraint
            case _:
                msg = f"Not a date constraint: {constraint!r}"
                raise InvalidProblemError(msg)

    def build_problem(
        self,
        n_meetings: int,
        range_start: date,
        range_end: date,
        constraints: Iterable[DateConstraint],
        meeting_names: Sequence[str] = (),
    ) -> Problem:
        """Validate all inputs and bundle them into a Problem.

        Duplicate constraints are dropped; first-seen order is kept.

        Raises:
            InvalidProblemError: On any contract violation
        """
        n_meetings = self.validate_meeting_count(n_meetings)
        range_start = self.validate_date(range_start, "Range start")
        range_end = self.validate_date(range_end, "Range end")

        if meeting_names and len(meeting_names) != n_meetings:
            msg = f"Got {len(meeting_names)} meeting names for {n_meetings} meetings"
            raise InvalidProblemError(msg)

        validated = [self.validate_constraint(c, n_meetings) for c in constraints]
        unique = tuple(dict.fromkeys(validated))

        if range_start > range_end:
            logger.changes(f"Date range {range_start}..{range_end} is empty")

        return Problem(
            n_meetings=n_meetings,
            range_start=range_start,
            range_end=range_end,
            constraints=unique,
            meeting_names=tuple(meeting_names),
        )
