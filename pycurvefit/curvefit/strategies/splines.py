"""
Natural cubic spline interpolation.

Interpolates every data point with a piecewise cubic whose first and
second derivatives are continuous at interior knots and whose second
derivative vanishes at both ends.

For segment i on [xᵢ, xᵢ₊₁]:

    Sᵢ(t) = aᵢ + bᵢ(t-xᵢ) + cᵢ(t-xᵢ)² + dᵢ(t-xᵢ)³

The cᵢ solve a tridiagonal system (Thomas algorithm); aᵢ, bᵢ and dᵢ
follow from them.
"""

from __future__ import annotations

from typing import Any, Sequence

from pycurvefit.core.diagnostics import Diagnostics
from pycurvefit.core.protocols import NumericContext
from pycurvefit.core.validation import check_distinct
from pycurvefit.curvefit.coordinates import Coordinates2D
from pycurvefit.curvefit.shape import CurveShape
from pycurvefit.curvefit.solution import CubicSplineSegment, PiecewiseFunction
from pycurvefit.curvefit.strategies.base import BaseStrategy


def solve_tridiagonal(
    sub: Sequence[Any],
    diag: Sequence[Any],
    sup: Sequence[Any],
    rhs: Sequence[Any],
) -> list[Any]:
    """
    Solve a tridiagonal system with the Thomas algorithm.

    Args:
        sub: Sub-diagonal (sub[0] unused)
        diag: Main diagonal
        sup: Super-diagonal (sup[n-1] unused)
        rhs: Right-hand side

    Returns:
        Solution vector
    """
    n = len(diag)
    cp = [None] * n
    dp = [None] * n
    cp[0] = sup[0] / diag[0]
    dp[0] = rhs[0] / diag[0]
    for i in range(1, n):
        denom = diag[i] - sub[i] * cp[i - 1]
        cp[i] = sup[i] / denom
        dp[i] = (rhs[i] - sub[i] * dp[i - 1]) / denom

    x = [None] * n
    x[n - 1] = dp[n - 1]
    for i in range(n - 2, -1, -1):
        x[i] = dp[i] - cp[i] * x[i + 1]
    return x


class CubicSplines(BaseStrategy):
    """
    Natural cubic spline through every point.

    Works on a copy sorted by x. Requires at least two points with
    distinct x values.
    """

    name = 'cubic splines'
    description = 'Natural cubic spline interpolating every point'
    supported_shape = CurveShape.CURVE_2D
    min_points = 2

    def _fit(
        self,
        data: list[Coordinates2D],
        context: NumericContext,
        diagnostics: Diagnostics,
    ) -> PiecewiseFunction:
        ordered = sorted(data, key=Coordinates2D.by_x)
        x = [context.scalar(c.x) for c in ordered]
        y = [context.scalar(c.y) for c in ordered]
        check_distinct(x, 'x')

        n = len(x)
        zero = context.scalar(0)
        one = context.scalar(1)
        h = [x[i + 1] - x[i] for i in range(n - 1)]

        # natural boundary: rows 0 and n-1 pin c to zero
        sub = [zero] * n
        diag = [one] * n
        sup = [zero] * n
        rhs = [zero] * n
        for i in range(1, n - 1):
            sub[i] = h[i - 1]
            diag[i] = 2 * (h[i - 1] + h[i])
            sup[i] = h[i]
            rhs[i] = 3 * (y[i + 1] - y[i]) / h[i] - 3 * (y[i] - y[i - 1]) / h[i - 1]
        c = solve_tridiagonal(sub, diag, sup, rhs)

        segments = []
        for i in range(n - 1):
            b = (y[i + 1] - y[i]) / h[i] - h[i] * (2 * c[i] + c[i + 1]) / 3
            d = (c[i + 1] - c[i]) / (3 * h[i])
            segments.append(CubicSplineSegment(y[i], b, c[i], d, x[i], x[i + 1]))
        return PiecewiseFunction(segments, context)
