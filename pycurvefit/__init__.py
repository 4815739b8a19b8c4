"""
PyCurveFit: curve fitting at float64 or arbitrary precision.

Fits linear, parabolic (optionally weighted), exponential,
multidimensional, bilinear-surface and natural cubic spline models to
coordinate data. Inputs given as Decimal, Fraction or SymPy numbers are
fitted at the precision they carry.

Submodules:
    curvefit: Coordinates, strategies, registry and dispatch
    core: Exceptions, protocols, diagnostics and numeric contexts
"""

import logging

__version__ = "0.1.0"

from pycurvefit import curvefit
from pycurvefit.curvefit import CurveFitter, fit

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "curvefit",
    "CurveFitter",
    "fit",
]
