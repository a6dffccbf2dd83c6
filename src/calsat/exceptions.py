"""Custom exceptions for calsat."""


class CalsatError(Exception):
    """Base exception for all calsat errors."""

    pass


class ValidationError(CalsatError):
    """Raised when a problem or configuration fails validation."""

    pass


class InvalidProblemError(ValidationError):
    """Raised when solve() is called with arguments that break its contract.

    Distinct from an unsatisfiable problem, which is reported as no solution.
    """

    pass


class ParseError(CalsatError):
    """Raised when a problem or solution file cannot be parsed."""

    pass


class SolveTimeoutError(CalsatError):
    """Raised when the search exceeds its configured time limit."""

    pass
