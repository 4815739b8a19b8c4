"""
First-order fits over several independent variables.
"""

from __future__ import annotations

from pycurvefit.core.diagnostics import Diagnostics
from pycurvefit.core.protocols import NumericContext
from pycurvefit.curvefit.coordinates import Coordinates
from pycurvefit.curvefit.regression import (
    column_entries,
    design_matrix_3d,
    design_matrix_multi,
    least_squares,
    observed_values,
)
from pycurvefit.curvefit.shape import CurveShape
from pycurvefit.curvefit.solution import Polynomial, Term
from pycurvefit.curvefit.strategies.base import BaseStrategy


def variable_names(arity: int) -> tuple[str, ...]:
    """x1, x2, …, x<arity>."""
    return tuple(f"x{i + 1}" for i in range(arity))


class MultidimensionalFit(BaseStrategy):
    """
    Hyperplane y = c₀ + c₁x1 + … + c_k xk.

    No interaction or higher-order terms. Accepts any arity of at least 1,
    uniform across the batch.
    """

    name = 'multidimensional fit'
    description = 'Hyperplane through data of any arity, one term per ordinate'
    supported_shape = CurveShape.MULTI

    def _fit(
        self,
        data: list[Coordinates],
        context: NumericContext,
        diagnostics: Diagnostics,
    ) -> Polynomial:
        arity = data[0].arity
        X = design_matrix_multi(data, context)
        y = observed_values(data, context)
        beta = least_squares(X, y, context=context)
        self._check_solution_shape(beta, arity + 1, context, diagnostics)

        coefficients = column_entries(beta, context)
        variables = variable_names(arity)
        terms = [Term(coefficients[0])]
        terms.extend(Term(c, ((v, 1),)) for v, c in zip(variables, coefficients[1:]))
        return Polynomial(terms, variables, context)


class Simple3DFit(BaseStrategy):
    """Bilinear surface z = A + Bx + Cy + Dxy."""

    name = 'simple 3D fit'
    description = 'Bilinear surface z = A + Bx + Cy + Dxy'
    supported_shape = CurveShape.CURVE_3D

    def _fit(
        self,
        data: list[Coordinates],
        context: NumericContext,
        diagnostics: Diagnostics,
    ) -> Polynomial:
        X = design_matrix_3d(data, context)
        z = observed_values(data, context)
        beta = least_squares(X, z, context=context)
        self._check_solution_shape(beta, 4, context, diagnostics)

        const, cx, cy, cxy = column_entries(beta, context)[:4]
        terms = [
            Term(const),
            Term(cx, (('x', 1),)),
            Term(cy, (('y', 1),)),
            Term(cxy, (('x', 1), ('y', 1))),
        ]
        return Polynomial(terms, ('x', 'y'), context)
