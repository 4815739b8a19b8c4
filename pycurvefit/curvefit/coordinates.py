"""
Coordinate data.

A coordinate is an ordered tuple of independent ordinates, one dependent
value, and an optional error bound. Coordinates2D and Coordinates3D add
named accessors and per-axis sort keys; conversion functions copy any
CoordinateLike into a concrete representation without touching the
original.

Usage:
    >>> c = Coordinates2D(1.0, 2.5, sigma=0.1)
    >>> c.error_bounds()
    ErrorBounds(lower=2.4, upper=2.6)
    >>> sorted(batch, key=axis_key(Axis.X, CurveShape.CURVE_2D))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from pycurvefit.core.exceptions import ValidationError
from pycurvefit.core.protocols import CoordinateLike
from pycurvefit.curvefit.shape import Axis, CurveShape


@dataclass(frozen=True)
class ErrorBounds:
    """
    Absolute error range around a value, half-open: lower <= v < upper.
    """
    lower: Any
    upper: Any

    def __contains__(self, v: Any) -> bool:
        return bool(self.lower <= v < self.upper)


class Coordinates:
    """
    A data point with any number of independent ordinates.

    Constructed from values where all but the last are ordinates and the
    last is the dependent value. Arity is fixed at construction.

    Coordinates compare by identity; only the error bound can change after
    construction.
    """

    __slots__ = ('_ordinates', '_value', '_low_error', '_high_error')

    def __init__(self, values: Sequence[Any], *, sigma: Any = None):
        values = tuple(values)
        if len(values) < 2:
            raise ValidationError(
                f"values: need at least one ordinate and a value, got {len(values)} element(s)"
            )
        self._ordinates = values[:-1]
        self._value = values[-1]
        self._low_error = None
        self._high_error = None
        if sigma is not None:
            self.set_symmetric_error(sigma)

    @property
    def arity(self) -> int:
        return len(self._ordinates)

    @property
    def ordinates(self) -> tuple[Any, ...]:
        return self._ordinates

    def ordinate(self, index: int) -> Any:
        """
        Independent ordinate at index.

        Negative indices count back from the last ordinate.

        Raises:
            ValidationError: If index is outside [-arity, arity)
        """
        n = len(self._ordinates)
        if not -n <= index < n:
            raise ValidationError(f"index {index} out of range for arity {n}")
        return self._ordinates[index]

    @property
    def value(self) -> Any:
        return self._value

    @property
    def low_error(self) -> Any | None:
        return self._low_error

    @property
    def high_error(self) -> Any | None:
        return self._high_error

    @property
    def sigma(self) -> Any | None:
        """
        Error estimate for weighting.

        The symmetric bound if one is set; half the width of the range for
        an asymmetric bound; None without a bound.
        """
        if self._high_error is None:
            return None
        if self._low_error is None:
            return self._high_error
        return (self._high_error - self._low_error) / 2

    def set_symmetric_error(self, sigma: Any) -> None:
        """
        Set a symmetric error bound value ± sigma.

        Raises:
            ValidationError: If sigma is not positive
        """
        if not sigma > 0:
            raise ValidationError(f"sigma: must be positive, got {sigma}")
        self._low_error = None
        self._high_error = sigma

    def set_asymmetric_error(self, low: Any, high: Any) -> None:
        """
        Set an asymmetric error bound, both ends relative to the value.

        Raises:
            ValidationError: Unless low < 0 < high
        """
        if not (low < 0 and high > 0):
            raise ValidationError(
                f"asymmetric error: requires low < 0 < high, got low={low}, high={high}"
            )
        self._low_error = low
        self._high_error = high

    def error_bounds(self) -> ErrorBounds | None:
        """Absolute range of the value, or None if no bound is set."""
        if self._high_error is None:
            return None
        if self._low_error is None:
            return ErrorBounds(self._value - self._high_error, self._value + self._high_error)
        return ErrorBounds(self._value + self._low_error, self._value + self._high_error)

    def _error_suffix(self) -> str:
        if self._high_error is None:
            return ""
        if self._low_error is None:
            return f" ± {self._high_error}"
        return f" ({self._low_error}, {self._high_error})"

    def __str__(self) -> str:
        ordinates = ", ".join(str(x) for x in self._ordinates)
        return f"{ordinates}: {self._value}{self._error_suffix()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._ordinates) + [self._value]!r}, sigma={self.sigma!r})"


class Coordinates2D(Coordinates):
    """A point (x, y) on a 2-D curve."""

    __slots__ = ()

    def __init__(self, x: Any, y: Any, sigma: Any = None):
        super().__init__((x, y), sigma=sigma)

    @property
    def x(self) -> Any:
        return self._ordinates[0]

    @property
    def y(self) -> Any:
        return self._value

    @staticmethod
    def by_x(c: CoordinateLike) -> Any:
        return c.ordinate(0)

    @staticmethod
    def by_y(c: CoordinateLike) -> Any:
        return c.value

    def __str__(self) -> str:
        # only a symmetric error is shown
        suffix = f" ± {self._high_error}" if self._low_error is None and self._high_error is not None else ""
        return f"(x:{self.x}, y:{self.y}{suffix})"

    def __repr__(self) -> str:
        return f"Coordinates2D({self.x!r}, {self.y!r}, sigma={self.sigma!r})"


class Coordinates3D(Coordinates):
    """A point (x, y, z) on a 3-D surface."""

    __slots__ = ()

    def __init__(self, x: Any, y: Any, z: Any, sigma: Any = None):
        super().__init__((x, y, z), sigma=sigma)

    @property
    def x(self) -> Any:
        return self._ordinates[0]

    @property
    def y(self) -> Any:
        return self._ordinates[1]

    @property
    def z(self) -> Any:
        return self._value

    @staticmethod
    def by_x(c: CoordinateLike) -> Any:
        return c.ordinate(0)

    @staticmethod
    def by_y(c: CoordinateLike) -> Any:
        return c.ordinate(1)

    @staticmethod
    def by_z(c: CoordinateLike) -> Any:
        return c.value

    def __str__(self) -> str:
        suffix = f" ± {self._high_error}" if self._low_error is None and self._high_error is not None else ""
        return f"(x:{self.x}, y:{self.y}, z:{self.z}{suffix})"

    def __repr__(self) -> str:
        return f"Coordinates3D({self.x!r}, {self.y!r}, {self.z!r}, sigma={self.sigma!r})"


# === Sort keys ===

def by_ordinate(index: int) -> Callable[[CoordinateLike], Any]:
    """Sort key on a single ordinate."""
    def key(c: CoordinateLike) -> Any:
        return c.ordinate(index)
    return key


def by_ordinates(*indices: int) -> Callable[[CoordinateLike], tuple[Any, ...]]:
    """Lexicographic sort key over several ordinates, in the given order."""
    def key(c: CoordinateLike) -> tuple[Any, ...]:
        return tuple(c.ordinate(i) for i in indices)
    return key


_AXIS_KEYS: dict[CurveShape, dict[Axis, Callable[[CoordinateLike], Any]]] = {
    CurveShape.CURVE_2D: {
        Axis.X: Coordinates2D.by_x,
        Axis.Y: Coordinates2D.by_y,
    },
    CurveShape.CURVE_3D: {
        Axis.X: Coordinates3D.by_x,
        Axis.Y: Coordinates3D.by_y,
        Axis.Z: Coordinates3D.by_z,
    },
    CurveShape.MULTI: {
        Axis.X: by_ordinate(0),
        Axis.Y: by_ordinate(1),
        Axis.Z: by_ordinate(2),
    },
}


def axis_key(axis: Axis, shape: CurveShape) -> Callable[[CoordinateLike], Any]:
    """
    Sort key for an axis, interpreted according to the curve shape.

    For 2-D curves Y is the dependent value; for 3-D surfaces Z is. In the
    multi-dimensional case every axis names an ordinate.

    Raises:
        ValidationError: If the shape has no such axis
    """
    keys = _AXIS_KEYS[shape]
    if axis not in keys:
        raise ValidationError(f"axis {axis.name} is not defined for {shape.value} data")
    return keys[axis]


# === Conversions ===

def _copy_errors(source: CoordinateLike, target: Coordinates) -> Coordinates:
    if source.low_error is not None:
        target.set_asymmetric_error(source.low_error, source.high_error)
    elif source.high_error is not None:
        target.set_symmetric_error(source.high_error)
    return target


def to_2d(c: CoordinateLike) -> Coordinates2D:
    """
    Copy a coordinate into a Coordinates2D, preserving its error bound.

    Raises:
        ValidationError: If the coordinate's arity is not 1
    """
    if c.arity != 1:
        raise ValidationError(f"cannot convert arity {c.arity} coordinate to 2D")
    return _copy_errors(c, Coordinates2D(c.ordinate(0), c.value))


def to_3d(c: CoordinateLike) -> Coordinates3D:
    """
    Copy a coordinate into a Coordinates3D, preserving its error bound.

    Raises:
        ValidationError: If the coordinate's arity is not 2
    """
    if c.arity != 2:
        raise ValidationError(f"cannot convert arity {c.arity} coordinate to 3D")
    return _copy_errors(c, Coordinates3D(c.ordinate(0), c.ordinate(1), c.value))


def to_generic(c: CoordinateLike) -> Coordinates:
    """Copy any coordinate into a plain Coordinates, preserving its error bound."""
    values = [c.ordinate(i) for i in range(c.arity)]
    values.append(c.value)
    return _copy_errors(c, Coordinates(values))
