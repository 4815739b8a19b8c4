"""
Shared compute infrastructure for PyCurveFit.

This module provides the numeric contexts (scalar conversion and matrix
algebra at a fixed precision) and precision constants shared by the
regression helper and every fitting strategy.

IMPORTANT: This is NOT where fitting strategies live. Those go in
curvefit/strategies/. This module contains shared NUMERIC infrastructure.

Submodules:
    algebra: Float64Context, SympyContext and context selection
    precision: Numerical precision constants and utilities
"""

from pycurvefit.core.compute.algebra import (
    FLOAT64,
    Float64Context,
    SympyContext,
    context_for,
)
from pycurvefit.core.compute.precision import (
    DEFAULT_DPS,
    EPSILON_64,
    are_equal_within,
    context_epsilon,
)

__all__ = [
    # Contexts
    "FLOAT64",
    "Float64Context",
    "SympyContext",
    "context_for",
    # Precision
    "DEFAULT_DPS",
    "EPSILON_64",
    "are_equal_within",
    "context_epsilon",
]
