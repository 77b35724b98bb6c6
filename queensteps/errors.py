"""Exception hierarchy for the N-Queens solvers."""


class QueensError(Exception):
    """Base exception for solver failures."""


class InvalidParameterError(QueensError, ValueError):
    """Raised when a board size or algorithm parameter is rejected before search."""


class InvariantViolation(QueensError, RuntimeError):
    """Raised when an internal board invariant is broken (programming error)."""
