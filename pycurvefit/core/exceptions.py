"""
Exception hierarchy for PyCurveFit.

All exceptions inherit from PyCurveFitError to allow catching any
library-specific error. Input problems derive from ValidationError,
numeric failures from NumericalError.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from __future__ import annotations

from typing import Any


class PyCurveFitError(Exception):
    """Base exception for all PyCurveFit errors."""
    pass


class ValidationError(PyCurveFitError):
    """
    Input validation failed.

    Raised for malformed or empty input, an arity that does not match what
    a strategy expects, or an invalid error-bound sign combination.
    """
    pass


class MismatchedArityError(ValidationError):
    """
    Coordinates in one batch have different arities.

    Attributes:
        expected_arity: Arity of the first datum in the batch
        actual_arity: Arity of the offending datum
        index: Position of the offending datum in the batch
    """

    def __init__(
        self,
        message: str,
        expected_arity: int | None = None,
        actual_arity: int | None = None,
        index: int | None = None
    ):
        super().__init__(message)
        self.expected_arity = expected_arity
        self.actual_arity = actual_arity
        self.index = index


class MissingWeightError(ValidationError):
    """
    A weighted strategy was given data without error bounds.

    Attributes:
        indices: Positions of the data points lacking sigma
    """

    def __init__(self, message: str, indices: tuple[int, ...] = ()):
        super().__init__(message)
        self.indices = tuple(indices)


class NumericalError(PyCurveFitError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when the normal-equations matrix of a fit cannot be inverted,
    typically because the data are collinear or degenerate.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (the matrix order)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class DomainError(NumericalError):
    """
    A value lies outside the domain of the function applied to it.

    Raised by the exponential fit for non-positive dependent values (the
    logarithm is undefined there) and by piecewise functions evaluated
    outside their knot range.

    Attributes:
        value: The offending value
        index: Position of the offending datum, if it came from a batch
    """

    def __init__(self, message: str, value: Any = None, index: int | None = None):
        super().__init__(message)
        self.value = value
        self.index = index


class StrategyNotFoundError(PyCurveFitError):
    """
    A strategy name prefix did not resolve to exactly one strategy.

    Attributes:
        prefix: The name or prefix supplied by the caller
        shape: The curve shape the lookup was restricted to
        candidates: Registered names that matched the prefix (empty if none)
    """

    def __init__(
        self,
        message: str,
        prefix: str | None = None,
        shape: Any = None,
        candidates: tuple[str, ...] = ()
    ):
        super().__init__(message)
        self.prefix = prefix
        self.shape = shape
        self.candidates = tuple(candidates)
