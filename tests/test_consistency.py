"""Tests for pair and assignment consistency checks."""

from calsat.solver import (
    UNASSIGNED,
    Assigned,
    Assignment,
    BinaryDateConstraint,
    Operator,
    UnaryDateConstraint,
    assignment_consistent,
    find_violations,
    pair_consistent,
)
from tests.conftest import day


class TestAssignment:
    """Test the slot-based partial assignment."""

    def test_starts_unassigned(self):
        assignment = Assignment(3)
        assert len(assignment) == 3
        assert assignment.assigned_count == 0
        assert not assignment.is_complete()
        assert assignment[1] == UNASSIGNED
        assert assignment.value(1) is None
        assert assignment.first_unassigned() == 0

    def test_assign_and_unassign_track_count(self):
        assignment = Assignment(2)
        assignment.assign(1, day(0))
        assert assignment[1] == Assigned(day(0))
        assert assignment.first_unassigned() == 0

        # Reassigning a slot does not double count
        assignment.assign(1, day(2))
        assert assignment.assigned_count == 1

        assignment.assign(0, day(1))
        assert assignment.is_complete()
        assert assignment.first_unassigned() is None
        assert assignment.to_dates() == [day(1), day(2)]

        assignment.unassign(0)
        assignment.unassign(0)
        assert assignment.assigned_count == 1
        assert not assignment.is_complete()

    def test_empty_assignment_is_complete(self):
        assignment = Assignment(0)
        assert assignment.is_complete()
        assert assignment.to_dates() == []

    def test_to_dates_is_a_copy(self):
        assignment = Assignment(1)
        assignment.assign(0, day(0))
        values = assignment.to_dates()
        assignment.assign(0, day(3))
        assert values == [day(0)]

    def test_to_dates_rejects_incomplete(self):
        assignment = Assignment(2)
        assignment.assign(0, day(0))
        try:
            assignment.to_dates()
        except ValueError as e:
            assert "incomplete" in str(e)
        else:
            raise AssertionError("Expected ValueError")


def test_pair_consistent_uses_constraint_operator():
    constraint = BinaryDateConstraint(0, Operator.LE, 1)
    assert pair_consistent(day(0), day(0), constraint)
    assert pair_consistent(day(0), day(1), constraint)
    assert not pair_consistent(day(1), day(0), constraint)


def test_pair_consistent_unary_against_literal():
    constraint = UnaryDateConstraint(0, Operator.GT, day(2))
    assert pair_consistent(day(3), constraint.value, constraint)
    assert not pair_consistent(day(2), constraint.value, constraint)


class TestAssignmentConsistent:
    """Test consistency of partial assignments."""

    def test_constraints_on_unassigned_meetings_are_skipped(self):
        constraints = [
            BinaryDateConstraint(0, Operator.LT, 1),
            UnaryDateConstraint(2, Operator.EQ, day(4)),
        ]
        assignment = Assignment(3)
        assert assignment_consistent(assignment, constraints)

        assignment.assign(0, day(3))
        assert assignment_consistent(assignment, constraints)

    def test_binary_violation_when_both_assigned(self):
        constraints = [BinaryDateConstraint(0, Operator.LT, 1)]
        assignment = Assignment(2)
        assignment.assign(0, day(3))
        assignment.assign(1, day(3))
        assert not assignment_consistent(assignment, constraints)

        assignment.assign(1, day(4))
        assert assignment_consistent(assignment, constraints)

    def test_unary_violation(self):
        constraints = [UnaryDateConstraint(0, Operator.NE, day(1))]
        assignment = Assignment(1)
        assignment.assign(0, day(1))
        assert not assignment_consistent(assignment, constraints)

    def test_any_violation_fails(self):
        constraints = [
            BinaryDateConstraint(0, Operator.NE, 1),
            BinaryDateConstraint(1, Operator.GE, 2),
        ]
        assignment = Assignment(3)
        assignment.assign(0, day(0))
        assignment.assign(1, day(1))
        assignment.assign(2, day(2))
        assert not assignment_consistent(assignment, constraints)

    def test_does_not_modify_assignment(self):
        constraints = [BinaryDateConstraint(0, Operator.GT, 1)]
        assignment = Assignment(2)
        assignment.assign(0, day(0))
        assignment.assign(1, day(1))
        assignment_consistent(assignment, constraints)
        assert assignment.to_dates() == [day(0), day(1)]


def test_find_violations_lists_every_violated_constraint():
    constraints = [
        BinaryDateConstraint(0, Operator.LT, 1),
        BinaryDateConstraint(1, Operator.EQ, 2),
        UnaryDateConstraint(2, Operator.LE, day(1)),
    ]
    violations = find_violations([day(0), day(1), day(2)], constraints)
    assert violations == [constraints[1], constraints[2]]


def test_find_violations_empty_for_valid_values():
    constraints = [BinaryDateConstraint(0, Operator.LT, 1)]
    assert find_violations([day(0), day(1)], constraints) == []
