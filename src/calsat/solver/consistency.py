"""Consistency checks for dates and (partial) assignments."""

from collections.abc import Iterable, Sequence
from datetime import date

from .constraints import BinaryDateConstraint, DateConstraint, UnaryDateConstraint, evaluate
from .core import Assignment


def pair_consistent(left: date, right: date, constraint: DateConstraint) -> bool:
    """Evaluate the constraint's operator on (left, right).

    For a unary constraint ``right`` is its literal date.
    """
    return evaluate(constraint.op, left, right)


def assignment_consistent(assignment: Assignment, constraints: Iterable[DateConstraint]) -> bool:
    """Check every constraint whose meetings are all assigned.

    Constraints touching an unassigned meeting are skipped; the first
    violated constraint short-circuits to False.
    """
    for constraint in constraints:
        match constraint:
            case UnaryDateConstraint(variable=variable, value=literal):
                value = assignment.value(variable)
                if value is not None and not pair_consistent(value, literal, constraint):
                    return False
            case BinaryDateConstraint(left=left, right=right):
                left_value = assignment.value(left)
                right_value = assignment.value(right)
                if left_value is None or right_value is None:
                    continue
                if not pair_consistent(left_value, right_value, constraint):
                    return False
    return True


def find_violations(
    values: Sequence[date], constraints: Iterable[DateConstraint]
) -> list[DateConstraint]:
    """Return every constraint violated by a complete list of dates."""
    violations: list[DateConstraint] = []
    for constraint in constraints:
        match constraint:
            case UnaryDateConstraint(variable=variable, value=literal):
                ok = pair_consistent(values[variable], literal, constraint)
            case BinaryDateConstraint(left=left, right=right):
                ok = pair_consistent(values[left], values[right], constraint)
        if not ok:
            violations.append(constraint)
    return violations
