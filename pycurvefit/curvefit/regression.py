"""
Regression helper.

Builds design matrices, observed-value vectors and weight matrices from a
coordinate batch, and solves least-squares systems through the (weighted)
pseudo-inverse. Every function is stateless: each call builds fresh
matrices owned by the caller.

Rows follow input order. Callers that care about row order must sort
before calling; least-squares coefficients do not depend on it.

Every function accepts an optional numeric context. When omitted, the
context is inferred from the values in the batch.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from pycurvefit.core.compute.algebra import FLOAT64, context_for
from pycurvefit.core.exceptions import ValidationError
from pycurvefit.core.protocols import CoordinateLike, NumericContext
from pycurvefit.core.validation import (
    check_not_empty,
    check_uniform_arity,
    check_weights_present,
)


def batch_values(data: Sequence[CoordinateLike]) -> list[Any]:
    """All ordinates and dependent values of a batch, flattened."""
    values: list[Any] = []
    for datum in data:
        values.extend(datum.ordinate(i) for i in range(datum.arity))
        values.append(datum.value)
    return values


def _resolve(data: Sequence[CoordinateLike], context: NumericContext | None) -> NumericContext:
    if context is not None:
        return context
    return context_for(batch_values(data))


def design_matrix(
    data: Sequence[CoordinateLike],
    degree: int,
    context: NumericContext | None = None,
) -> Any:
    """
    Polynomial design matrix for 2-D data.

    Row i is [1, xᵢ, xᵢ², …, xᵢ^degree], with xᵢ the first ordinate.

    Args:
        data: Coordinates, in the row order wanted
        degree: Model order, at least 1 (linear)
        context: Numeric context; inferred from data if None

    Returns:
        n × (degree + 1) matrix

    Raises:
        ValidationError: If degree < 1 or data is empty
    """
    if degree < 1:
        raise ValidationError(f"degree: order of model must be at least 1 (linear), got {degree}")
    check_not_empty(data, 'data')
    ctx = _resolve(data, context)
    one = ctx.scalar(1)
    rows = []
    for datum in data:
        x = ctx.scalar(datum.ordinate(0))
        row = [one]
        for _ in range(degree):
            row.append(row[-1] * x)
        rows.append(row)
    return ctx.matrix(rows)


def observed_values(
    data: Sequence[CoordinateLike],
    context: NumericContext | None = None,
) -> Any:
    """Column vector of dependent values, in input order."""
    check_not_empty(data, 'data')
    ctx = _resolve(data, context)
    return ctx.column([ctx.scalar(datum.value) for datum in data])


def weight_matrix(
    data: Sequence[CoordinateLike],
    context: NumericContext | None = None,
) -> Any:
    """
    Diagonal weight matrix with entries 1/σᵢ².

    Raises:
        MissingWeightError: If any datum lacks an error bound
    """
    check_not_empty(data, 'data')
    check_weights_present(data, 'data')
    ctx = _resolve(data, context)
    one = ctx.scalar(1)
    weights = []
    for datum in data:
        sigma = ctx.scalar(datum.sigma)
        weights.append(one / (sigma * sigma))
    return ctx.diagonal(weights)


def design_matrix_3d(
    data: Sequence[CoordinateLike],
    context: NumericContext | None = None,
) -> Any:
    """
    Bilinear-surface design matrix for 3-D data.

    Row i is [1, xᵢ, yᵢ, xᵢyᵢ].

    Raises:
        ValidationError: If any datum does not have exactly two ordinates
    """
    check_not_empty(data, 'data')
    ctx = _resolve(data, context)
    one = ctx.scalar(1)
    rows = []
    for i, datum in enumerate(data):
        if datum.arity != 2:
            raise ValidationError(f"data: expected arity 2, got {datum.arity} at index {i}")
        x = ctx.scalar(datum.ordinate(0))
        y = ctx.scalar(datum.ordinate(1))
        rows.append([one, x, y, x * y])
    return ctx.matrix(rows)


def design_matrix_multi(
    data: Sequence[CoordinateLike],
    context: NumericContext | None = None,
) -> Any:
    """
    First-order design matrix for data of any arity.

    Row i is [1, x₁, …, xₖ] taken directly from the datum's ordinates.

    Raises:
        MismatchedArityError: If arities differ across the batch
    """
    check_not_empty(data, 'data')
    check_uniform_arity(data, 'data')
    ctx = _resolve(data, context)
    one = ctx.scalar(1)
    rows = []
    for datum in data:
        rows.append([one] + [ctx.scalar(datum.ordinate(k)) for k in range(datum.arity)])
    return ctx.matrix(rows)


def _matrix_context(m: Any) -> NumericContext:
    if isinstance(m, np.ndarray):
        return FLOAT64
    return context_for(list(m))


def pseudo_inverse(X: Any, context: NumericContext | None = None) -> Any:
    """
    Moore-Penrose pseudo-inverse (XᵗX)⁻¹Xᵗ of a full-column-rank matrix.

    Raises:
        SingularMatrixError: If XᵗX is not invertible
    """
    ctx = context if context is not None else _matrix_context(X)
    Xt = ctx.transpose(X)
    XtX = ctx.matmul(Xt, X)
    return ctx.matmul(ctx.inverse(XtX, name="X'X"), Xt)


def weighted_pseudo_inverse(X: Any, W: Any, context: NumericContext | None = None) -> Any:
    """
    Weighted pseudo-inverse (XᵗWX)⁻¹XᵗW.

    Raises:
        SingularMatrixError: If XᵗWX is not invertible
    """
    ctx = context if context is not None else _matrix_context(X)
    XtW = ctx.matmul(ctx.transpose(X), W)
    XtWX = ctx.matmul(XtW, X)
    return ctx.matmul(ctx.inverse(XtWX, name="X'WX"), XtW)


def least_squares(
    X: Any,
    y: Any,
    weights: Any | None = None,
    context: NumericContext | None = None,
) -> Any:
    """
    Solve min ‖W^½(y - Xβ)‖² for β.

    Args:
        X: Design matrix (n × p)
        y: Observed values (n × 1)
        weights: Diagonal weight matrix (n × n), or None for ordinary
            least squares
        context: Numeric context the matrices belong to; inferred from X
            if None

    Returns:
        Coefficient column β (p × 1)
    """
    ctx = context if context is not None else _matrix_context(X)
    if weights is None:
        P = pseudo_inverse(X, ctx)
    else:
        P = weighted_pseudo_inverse(X, weights, ctx)
    return ctx.matmul(P, y)


def column_entries(beta: Any, context: NumericContext) -> list[Any]:
    """Entries of a column vector, top to bottom."""
    rows, _ = context.shape(beta)
    return [context.entry(beta, i, 0) for i in range(rows)]
