"""
Built-in fitting strategies.

    LinearFit, ParabolicFit:                   unweighted polynomial least squares
    WeightedLinearFit, WeightedParabolicFit:   weighted by 1/σ²
    ExponentialFit:                            y = A·exp(Bx), log-linearized
    MultidimensionalFit:                       hyperplane over any arity
    Simple3DFit:                               z = A + Bx + Cy + Dxy
    CubicSplines:                              natural cubic spline
"""

from pycurvefit.curvefit.strategies.base import BaseStrategy
from pycurvefit.curvefit.strategies.exponential import ExponentialFit
from pycurvefit.curvefit.strategies.multidimensional import MultidimensionalFit, Simple3DFit
from pycurvefit.curvefit.strategies.polynomial import (
    LinearFit,
    ParabolicFit,
    PolynomialStrategy,
    WeightedLinearFit,
    WeightedParabolicFit,
)
from pycurvefit.curvefit.strategies.splines import CubicSplines

BUILTIN_STRATEGIES = (
    CubicSplines,
    ExponentialFit,
    LinearFit,
    MultidimensionalFit,
    ParabolicFit,
    Simple3DFit,
    WeightedLinearFit,
    WeightedParabolicFit,
)

__all__ = [
    "BaseStrategy",
    "PolynomialStrategy",
    "CubicSplines",
    "ExponentialFit",
    "LinearFit",
    "MultidimensionalFit",
    "ParabolicFit",
    "Simple3DFit",
    "WeightedLinearFit",
    "WeightedParabolicFit",
    "BUILTIN_STRATEGIES",
]
