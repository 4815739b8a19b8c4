"""
Input validation utilities for PyCurveFit.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No default handling of edge cases
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from __future__ import annotations

from typing import Any, Sequence

from pycurvefit.core.exceptions import (
    DomainError,
    MismatchedArityError,
    MissingWeightError,
    ValidationError,
)
from pycurvefit.core.protocols import CoordinateLike


def check_not_empty(data: Sequence[Any] | None, name: str) -> None:
    """
    Verify a batch is present and has at least one element.

    Args:
        data: Batch to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If data is None or empty
    """
    if data is None:
        raise ValidationError(f"{name}: must not be None")
    if len(data) == 0:
        raise ValidationError(f"{name}: must contain at least one data point")


def check_min_points(data: Sequence[Any], min_points: int, name: str) -> None:
    """
    Verify a batch has at least the minimum number of points.

    Raises:
        ValidationError: If data has fewer than min_points elements
    """
    if len(data) < min_points:
        raise ValidationError(
            f"{name}: requires at least {min_points} data points, got {len(data)}"
        )


def check_arity(data: Sequence[CoordinateLike], arity: int, name: str) -> None:
    """
    Verify every datum has exactly the given arity.

    Used by strategies, where a wrong arity is a contract violation by the
    caller rather than an inconsistent batch.

    Raises:
        ValidationError: If any datum has a different arity
    """
    for i, datum in enumerate(data):
        if datum.arity != arity:
            raise ValidationError(
                f"{name}: expected arity {arity}, got {datum.arity} at index {i}"
            )


def check_uniform_arity(data: Sequence[CoordinateLike], name: str) -> int:
    """
    Verify every datum shares the arity of the first one.

    Args:
        data: Non-empty batch to check
        name: Parameter name for error messages

    Returns:
        The common arity

    Raises:
        MismatchedArityError: If arities differ
    """
    expected = data[0].arity
    for i, datum in enumerate(data):
        if datum.arity != expected:
            raise MismatchedArityError(
                f"{name}: inconsistent arity, expected {expected} (from index 0), "
                f"got {datum.arity} at index {i}",
                expected_arity=expected,
                actual_arity=datum.arity,
                index=i,
            )
    return expected


def check_weights_present(data: Sequence[CoordinateLike], name: str) -> None:
    """
    Verify every datum carries an error bound.

    Raises:
        MissingWeightError: Listing every index without sigma
    """
    missing = tuple(i for i, datum in enumerate(data) if datum.sigma is None)
    if missing:
        shown = ", ".join(str(i) for i in missing[:10])
        more = f" (and {len(missing) - 10} more)" if len(missing) > 10 else ""
        raise MissingWeightError(
            f"{name}: weighted fit requires sigma on every data point; "
            f"{len(missing)} of {len(data)} lack one, at indices {shown}{more}",
            indices=missing,
        )


def check_positive_values(data: Sequence[CoordinateLike], name: str) -> None:
    """
    Verify every dependent value is strictly positive.

    Raises:
        DomainError: At the first non-positive value
    """
    for i, datum in enumerate(data):
        if not datum.value > 0:
            raise DomainError(
                f"{name}: dependent values must be positive, got {datum.value} at index {i}",
                value=datum.value,
                index=i,
            )


def check_distinct(values: Sequence[Any], name: str) -> None:
    """
    Verify a sorted sequence is strictly increasing.

    Raises:
        ValidationError: At the first repeated value
    """
    for i in range(1, len(values)):
        if not values[i] > values[i - 1]:
            raise ValidationError(
                f"{name}: values must be distinct, {values[i]} repeats at index {i}"
            )
