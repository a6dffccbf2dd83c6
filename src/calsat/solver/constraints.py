"""Relational date constraints and the operator semantics shared by every solver layer."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from calsat.exceptions import InvalidProblemError


class Operator(str, Enum):
    """Relational operator between two dates."""

    EQ = "=="
    NE = "!="
    GT = ">"  # left strictly after right
    LT = "<"  # left strictly before right
    GE = ">="
    LE = "<="

    @classmethod
    def parse(cls, symbol: "str | Operator") -> "Operator":
        """Convert an operator symbol such as ``"<="`` to an Operator.

        Raises:
            InvalidProblemError: If the symbol is not one of the six operators
        """
        if isinstance(symbol, Operator):
            return symbol
        try:
            return cls(symbol.strip())
        except (ValueError, AttributeError):
            valid = ", ".join(op.value for op in cls)
            msg = f"Unknown operator {symbol!r}. Valid operators: {valid}"
            raise InvalidProblemError(msg) from None

    @property
    def converse(self) -> "Operator":
        """Operator that holds for (right, left) exactly when self holds for (left, right)."""
        return _CONVERSE[self]

    def __str__(self) -> str:
        return self.value


_CONVERSE = {
    Operator.EQ: Operator.EQ,
    Operator.NE: Operator.NE,
    Operator.GT: Operator.LT,
    Operator.LT: Operator.GT,
    Operator.GE: Operator.LE,
    Operator.LE: Operator.GE,
}


def evaluate(op: Operator, left: date, right: date) -> bool:
    """Return whether ``left op right`` holds."""
    match op:
        case Operator.EQ:
            return left == right
        case Operator.NE:
            return left != right
        case Operator.GT:
            return left > right
        case Operator.LT:
            return left < right
        case Operator.GE:
            return left >= right
        case Operator.LE:
            return left <= right


@dataclass(frozen=True)
class UnaryDateConstraint:
    """Relates one meeting's date to a fixed date: ``meetings[variable] op value``."""

    variable: int
    op: Operator
    value: date

    def __post_init__(self) -> None:
        object.__setattr__(self, "op", Operator.parse(self.op))

    @property
    def arity(self) -> int:
        return 1

    @property
    def variables(self) -> tuple[int, ...]:
        return (self.variable,)

    def __str__(self) -> str:
        return f"{self.variable} {self.op} {self.value}"


@dataclass(frozen=True)
class BinaryDateConstraint:
    """Relates two meetings' dates: ``meetings[left] op meetings[right]``."""

    left: int
    op: Operator
    right: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "op", Operator.parse(self.op))

    @property
    def arity(self) -> int:
        return 2

    @property
    def variables(self) -> tuple[int, ...]:
        return (self.left, self.right)

    def __str__(self) -> str:
        return f"{self.left} {self.op} {self.right}"


DateConstraint = UnaryDateConstraint | BinaryDateConstraint
