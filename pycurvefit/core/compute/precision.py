"""
Numerical precision constants and utilities.

Provides machine epsilon, the default decimal precision for exact inputs,
and precision-related helpers used by both numeric contexts.
"""

import numpy as np
from typing import Any


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Significant decimal digits used when inputs are exact (Fraction, Rational)
# and therefore carry no precision of their own. Matches IEEE decimal128.
DEFAULT_DPS: int = 34

# Condition number above which a float64 normal-equations matrix is
# treated as singular: past 1/eps the inverse has no correct digits.
SINGULARITY_CONDITION_LIMIT: float = 1.0 / EPSILON_64

_LOG2_10 = 3.3219280948873626


def prec_to_dps(prec: int) -> int:
    """Convert binary precision (bits) to decimal digits."""
    return max(1, int(round(int(prec) / _LOG2_10) - 1))


def dps_to_prec(dps: int) -> int:
    """Convert decimal digits to binary precision (bits)."""
    return max(1, int(round((int(dps) + 1) * _LOG2_10)))


def context_epsilon(dps: int | None) -> float | Any:
    """
    Half a unit in the last place for a given decimal precision.

    Args:
        dps: Significant decimal digits, or None for float64

    Returns:
        EPSILON_64 / 2 for float64, else 10^(1 - dps) / 2 as a float
    """
    if dps is None:
        return EPSILON_64 / 2.0
    return 10.0 ** (1 - dps) / 2.0


def are_equal_within(a: Any, b: Any, epsilon: Any) -> bool:
    """
    Check whether two scalars differ by no more than epsilon.

    Works on any numeric type supporting subtraction, abs() and ordering
    (float, Decimal, sympy.Float).
    """
    return bool(abs(a - b) <= epsilon)
