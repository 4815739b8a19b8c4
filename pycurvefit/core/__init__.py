"""
Core infrastructure for PyCurveFit.

This module provides shared abstractions and utilities used by the
curve-fitting engine.

Key components:
    protocols: CoordinateLike, NumericContext, CurveFittingStrategy protocols
    exceptions: Exception hierarchy
    validation: Input validators
    diagnostics: Channel for non-fatal findings
    compute: Numeric contexts and precision constants
"""

from pycurvefit.core.protocols import CoordinateLike, CurveFittingStrategy, NumericContext
from pycurvefit.core.diagnostics import (
    CollectingDiagnostics,
    Diagnostics,
    FitDiagnosticWarning,
    WarningsDiagnostics,
)
from pycurvefit.core.exceptions import (
    PyCurveFitError,
    ValidationError,
    MismatchedArityError,
    MissingWeightError,
    NumericalError,
    SingularMatrixError,
    DomainError,
    StrategyNotFoundError,
)

__all__ = [
    # Protocols
    "CoordinateLike",
    "CurveFittingStrategy",
    "NumericContext",
    # Diagnostics
    "CollectingDiagnostics",
    "Diagnostics",
    "FitDiagnosticWarning",
    "WarningsDiagnostics",
    # Exceptions
    "PyCurveFitError",
    "ValidationError",
    "MismatchedArityError",
    "MissingWeightError",
    "NumericalError",
    "SingularMatrixError",
    "DomainError",
    "StrategyNotFoundError",
]
