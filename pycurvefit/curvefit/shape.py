"""
Curve shapes and axes.

The shape of a batch is inferred from its arity and decides which
strategies are eligible to fit it.
"""

from __future__ import annotations

from enum import Enum


class CurveShape(Enum):
    """Dimensionality class of a coordinate batch."""

    CURVE_2D = '2D'
    CURVE_3D = '3D'
    MULTI = 'multi'

    @classmethod
    def for_arity(cls, arity: int) -> CurveShape:
        """Arity 1 is a 2-D curve, arity 2 a 3-D surface, anything else multi."""
        if arity == 1:
            return cls.CURVE_2D
        if arity == 2:
            return cls.CURVE_3D
        return cls.MULTI


class Axis(Enum):
    """Euclidean axes used by axis-based ordering."""

    X = 'x'
    Y = 'y'
    Z = 'z'
