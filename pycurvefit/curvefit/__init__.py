"""
Curve fitting.

Fits polynomials, exponentials, hyperplanes, bilinear surfaces and natural
cubic splines to coordinate data, dispatching by a unique name prefix.

Public API:
    CurveFitter(data, ...).fit_to_data(name) -> fitted function
    fit(data, name, ...) -> fitted function

Example:
    >>> from pycurvefit.curvefit import Coordinates2D, fit
    >>> line = fit([Coordinates2D(x, 2 * x + 1) for x in range(5)], 'lin')
    >>> round(line(10), 9)
    21.0
"""

from pycurvefit.curvefit.coordinates import (
    Coordinates,
    Coordinates2D,
    Coordinates3D,
    ErrorBounds,
    axis_key,
    to_2d,
    to_3d,
    to_generic,
)
from pycurvefit.curvefit.registry import (
    DEFAULT_STRATEGIES,
    StrategyRegistry,
    StrategySpec,
    default_registry,
)
from pycurvefit.curvefit.shape import Axis, CurveShape
from pycurvefit.curvefit.solution import (
    CubicSplineSegment,
    ExponentialFunction,
    PiecewiseFunction,
    Polynomial,
    Term,
)
from pycurvefit.curvefit.solvers import CurveFitter, fit

__all__ = [
    "fit",
    "CurveFitter",
    # Data
    "Coordinates",
    "Coordinates2D",
    "Coordinates3D",
    "ErrorBounds",
    "axis_key",
    "to_2d",
    "to_3d",
    "to_generic",
    "Axis",
    "CurveShape",
    # Registry
    "DEFAULT_STRATEGIES",
    "StrategyRegistry",
    "StrategySpec",
    "default_registry",
    # Fitted functions
    "CubicSplineSegment",
    "ExponentialFunction",
    "PiecewiseFunction",
    "Polynomial",
    "Term",
]
