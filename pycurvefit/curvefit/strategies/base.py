"""
Shared machinery for fitting strategies.

BaseStrategy runs the precondition checks, copies the caller's batch into
the strategy's own coordinate representation, resolves the numeric context
and the diagnostics channel, and then hands off to `_fit`.
"""

from __future__ import annotations

from typing import Any, Sequence

from pycurvefit.core.compute.algebra import context_for
from pycurvefit.core.diagnostics import Diagnostics, default_diagnostics
from pycurvefit.core.exceptions import ValidationError
from pycurvefit.core.protocols import CoordinateLike, NumericContext
from pycurvefit.core.validation import (
    check_arity,
    check_min_points,
    check_not_empty,
    check_uniform_arity,
)
from pycurvefit.curvefit.coordinates import Coordinates, to_2d, to_3d, to_generic
from pycurvefit.curvefit.regression import batch_values
from pycurvefit.curvefit.shape import CurveShape


_NORMALIZERS = {
    CurveShape.CURVE_2D: to_2d,
    CurveShape.CURVE_3D: to_3d,
    CurveShape.MULTI: to_generic,
}

_ARITY = {
    CurveShape.CURVE_2D: 1,
    CurveShape.CURVE_3D: 2,
}


class BaseStrategy:
    """
    Base class for the built-in strategies.

    Subclasses set `name`, `description` and `supported_shape`, and
    implement `_fit(data, context, diagnostics)`.
    """

    name: str = ''
    description: str = ''
    supported_shape: CurveShape = CurveShape.CURVE_2D
    min_points: int = 1

    def fit(
        self,
        data: Sequence[CoordinateLike],
        *,
        context: NumericContext | None = None,
        diagnostics: Diagnostics | None = None,
    ) -> Any:
        """
        Fit a function to the data.

        Args:
            data: Coordinates to fit; never modified
            context: Numeric context; inferred from the data if None
            diagnostics: Channel for non-fatal findings; warnings module if None

        Returns:
            The fitted function

        Raises:
            ValidationError: If data is empty, too short, or has the wrong arity
        """
        check_not_empty(data, 'data')
        self._check_arity(data)
        check_min_points(data, self.min_points, 'data')

        normalized = [_NORMALIZERS[self.supported_shape](c) for c in data]
        if context is None:
            context = context_for(batch_values(normalized))
        if diagnostics is None:
            diagnostics = default_diagnostics()
        return self._fit(normalized, context, diagnostics)

    def _fit(
        self,
        data: list[Coordinates],
        context: NumericContext,
        diagnostics: Diagnostics,
    ) -> Any:
        raise NotImplementedError

    def _check_arity(self, data: Sequence[CoordinateLike]) -> None:
        expected = _ARITY.get(self.supported_shape)
        if expected is not None:
            check_arity(data, expected, 'data')
            return
        arity = check_uniform_arity(data, 'data')
        if arity < 1:
            raise ValidationError(f"data: requires at least one ordinate, got arity {arity}")

    def _check_solution_shape(
        self,
        beta: Any,
        expected_rows: int,
        context: NumericContext,
        diagnostics: Diagnostics,
    ) -> None:
        """Report a coefficient vector that is not expected_rows × 1."""
        rows, cols = context.shape(beta)
        if (rows, cols) != (expected_rows, 1):
            diagnostics.warn(
                f"{self.name}: solution has shape {rows}×{cols}, expected {expected_rows}×1",
                strategy=self.name,
                shape=(rows, cols),
                expected=(expected_rows, 1),
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
