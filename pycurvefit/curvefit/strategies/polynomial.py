"""
Polynomial least-squares strategies for 2-D data.

Linear and parabolic fits, unweighted or weighted by 1/σ². The weighted
variants never fall back to an unweighted fit: a datum without σ is an
error.
"""

from __future__ import annotations


from pycurvefit.core.diagnostics import Diagnostics
from pycurvefit.core.protocols import NumericContext
from pycurvefit.curvefit.coordinates import Coordinates
from pycurvefit.curvefit.regression import (
    column_entries,
    design_matrix,
    least_squares,
    observed_values,
    weight_matrix,
)
from pycurvefit.curvefit.shape import CurveShape
from pycurvefit.curvefit.solution import Polynomial
from pycurvefit.curvefit.strategies.base import BaseStrategy


class PolynomialStrategy(BaseStrategy):
    """
    Least-squares polynomial y = c₀ + c₁x + … + c_d x^d.

    Args:
        degree: Model order (1 = linear, 2 = parabolic)
        weighted: Weight each datum by 1/σ²
    """

    supported_shape = CurveShape.CURVE_2D

    def __init__(self, degree: int, weighted: bool = False):
        self.degree = degree
        self.weighted = weighted

    def _fit(
        self,
        data: list[Coordinates],
        context: NumericContext,
        diagnostics: Diagnostics,
    ) -> Polynomial:
        W = weight_matrix(data, context) if self.weighted else None
        X = design_matrix(data, self.degree, context)
        y = observed_values(data, context)
        beta = least_squares(X, y, W, context)
        self._check_solution_shape(beta, self.degree + 1, context, diagnostics)
        return Polynomial.univariate(column_entries(beta, context), context)


class LinearFit(PolynomialStrategy):
    name = 'linear fit'
    description = 'Least-squares straight line y = a + bx'

    def __init__(self):
        super().__init__(degree=1)


class ParabolicFit(PolynomialStrategy):
    name = 'parabolic fit'
    description = 'Least-squares parabola y = a + bx + cx²'

    def __init__(self):
        super().__init__(degree=2)


class WeightedLinearFit(PolynomialStrategy):
    name = 'weighted linear fit'
    description = 'Straight line fitted with weights 1/σ²; every point needs σ'

    def __init__(self):
        super().__init__(degree=1, weighted=True)


class WeightedParabolicFit(PolynomialStrategy):
    name = 'weighted parabolic fit'
    description = 'Parabola fitted with weights 1/σ²; every point needs σ'

    def __init__(self):
        super().__init__(degree=2, weighted=True)
