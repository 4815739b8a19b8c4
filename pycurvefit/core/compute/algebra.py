"""
Numeric contexts: scalar and matrix algebra at a fixed precision.

A numeric context converts input values to its scalar type and performs the
handful of matrix operations the fitting layer needs (construction,
transpose, product, inversion, element access). Two contexts exist:

    Float64Context: NumPy arrays, SciPy LAPACK inversion, IEEE doubles
    SympyContext:   sympy.Float scalars and sympy.Matrix at `dps` digits

Both raise SingularMatrixError instead of returning a garbage inverse, and
DomainError instead of returning NaN from a logarithm.

Conventions:
    - Matrices are fresh values, never mutated after construction
    - Errors are raised immediately with clear messages
"""

from __future__ import annotations

import decimal
import math
from fractions import Fraction
from typing import Any, Iterable, Sequence

import mpmath
import numpy as np
import sympy
from numpy.typing import NDArray
from scipy import linalg as sp_linalg

from pycurvefit.core.exceptions import (
    DomainError,
    NumericalError,
    SingularMatrixError,
    ValidationError,
)
from pycurvefit.core.compute.precision import (
    DEFAULT_DPS,
    EPSILON_64,
    SINGULARITY_CONDITION_LIMIT,
    context_epsilon,
    prec_to_dps,
)


_FLOAT_TYPES = (int, float, np.integer, np.floating)


class Float64Context:
    """
    Double-precision context backed by NumPy and SciPy.

    Scalars are plain Python floats so that division by zero raises
    instead of silently producing inf.
    """

    name = 'float64'
    dps = None

    @property
    def epsilon(self) -> float:
        return context_epsilon(None)

    def scalar(self, value: Any) -> float:
        try:
            result = float(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"value {value!r}: not a real number: {e}") from e
        if not math.isfinite(result):
            raise ValidationError(f"value {value!r}: non-finite values are not supported")
        return result

    def matrix(self, rows: Sequence[Sequence[Any]]) -> NDArray[np.float64]:
        result = np.array(rows, dtype=np.float64)
        if result.ndim != 2:
            raise ValidationError(
                f"matrix: expected 2D rows, got {result.ndim}D with shape {result.shape}"
            )
        return result

    def column(self, values: Iterable[Any]) -> NDArray[np.float64]:
        return np.array(list(values), dtype=np.float64).reshape(-1, 1)

    def diagonal(self, values: Iterable[Any]) -> NDArray[np.float64]:
        return np.diag(np.array(list(values), dtype=np.float64))

    def transpose(self, m: NDArray[np.float64]) -> NDArray[np.float64]:
        return m.T.copy()

    def matmul(self, a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
        return a @ b

    def shape(self, m: NDArray[np.float64]) -> tuple[int, int]:
        rows, cols = m.shape
        return int(rows), int(cols)

    def entry(self, m: NDArray[np.float64], row: int, col: int) -> float:
        return float(m[row, col])

    def inverse(self, m: NDArray[np.float64], name: str = 'matrix') -> NDArray[np.float64]:
        """
        Invert a square matrix.

        Raises:
            SingularMatrixError: If the numerical rank is deficient, the
                condition number exceeds SINGULARITY_CONDITION_LIMIT, or
                LAPACK reports singularity
        """
        rows, cols = m.shape
        if rows != cols:
            raise ValidationError(f"{name}: cannot invert non-square {rows}×{cols} matrix")

        if not np.all(np.isfinite(m)):
            raise SingularMatrixError(
                f"{name} contains non-finite entries",
                matrix_name=name,
                expected_rank=rows,
            )

        # same tolerance as np.linalg.matrix_rank
        s = np.linalg.svd(m, compute_uv=False)
        rank = int(np.sum(s > s[0] * rows * EPSILON_64)) if s[0] > 0 else 0
        cond = float(s[0] / s[-1]) if s[-1] > 0 else float('inf')
        if rank < rows or cond > SINGULARITY_CONDITION_LIMIT:
            raise SingularMatrixError(
                f"{name} is singular or nearly singular: rank {rank} of {rows}, "
                f"condition number {cond:.3e} (limit {SINGULARITY_CONDITION_LIMIT:.3e}). "
                f"This indicates collinear or degenerate data.",
                matrix_name=name,
                condition_number=cond,
                rank=rank,
                expected_rank=rows,
            )
        try:
            return sp_linalg.inv(m)
        except sp_linalg.LinAlgError as e:
            raise SingularMatrixError(
                f"{name} is singular: {e}",
                matrix_name=name,
                condition_number=cond,
                expected_rank=rows,
            ) from e

    def sign(self, x: float) -> int:
        return (x > 0) - (x < 0)

    def log(self, x: float) -> float:
        if x <= 0:
            raise DomainError(f"ln({x!r}) is undefined for non-positive values", value=x)
        return math.log(x)

    def exp(self, x: float) -> float:
        try:
            return math.exp(x)
        except OverflowError as e:
            raise NumericalError(f"exp({x!r}) overflows float64") from e

    def __repr__(self) -> str:
        return "Float64Context()"


class SympyContext:
    """
    Arbitrary-precision context backed by SymPy.

    Every scalar is a sympy.Float rounded to `dps` significant digits, so
    all arithmetic between scalars and matrices stays at that precision.
    """

    name = 'sympy'

    def __init__(self, dps: int = DEFAULT_DPS):
        if int(dps) < 1:
            raise ValidationError(f"dps: must be at least 1, got {dps}")
        self.dps = int(dps)

    @property
    def epsilon(self) -> sympy.Float:
        return sympy.Float(10, self.dps) ** (1 - self.dps) / 2

    def scalar(self, value: Any) -> sympy.Float:
        if isinstance(value, sympy.Basic):
            number = value
        elif isinstance(value, (float, np.floating)):
            # repr() keeps the shortest decimal that round-trips, not the
            # binary expansion
            number = sympy.Float(repr(float(value)), self.dps)
        elif isinstance(value, decimal.Decimal):
            number = sympy.Float(str(value), self.dps)
        elif isinstance(value, Fraction):
            number = sympy.Rational(value.numerator, value.denominator)
        elif isinstance(value, (int, np.integer)):
            number = sympy.Integer(int(value))
        else:
            try:
                number = sympy.sympify(value)
            except (sympy.SympifyError, TypeError) as e:
                raise ValidationError(f"value {value!r}: not a real number: {e}") from e

        try:
            result = sympy.Float(number.evalf(self.dps), self.dps)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"value {value!r}: not a real number: {e}") from e
        if not result.is_finite:
            raise ValidationError(f"value {value!r}: non-finite values are not supported")
        return result

    def matrix(self, rows: Sequence[Sequence[Any]]) -> sympy.Matrix:
        return sympy.Matrix([list(row) for row in rows])

    def column(self, values: Iterable[Any]) -> sympy.Matrix:
        return sympy.Matrix([[v] for v in values])

    def diagonal(self, values: Iterable[Any]) -> sympy.Matrix:
        return sympy.diag(*list(values))

    def transpose(self, m: sympy.Matrix) -> sympy.Matrix:
        return m.T

    def matmul(self, a: sympy.Matrix, b: sympy.Matrix) -> sympy.Matrix:
        return a * b

    def shape(self, m: sympy.Matrix) -> tuple[int, int]:
        rows, cols = m.shape
        return int(rows), int(cols)

    def entry(self, m: sympy.Matrix, row: int, col: int) -> sympy.Float:
        return m[row, col]

    def inverse(self, m: sympy.Matrix, name: str = 'matrix') -> sympy.Matrix:
        """
        Invert a square matrix.

        An exactly zero determinant is singular. Otherwise the 1-norm
        condition number is computed with mpmath at `dps` digits and the
        matrix is singular when it exceeds 1/eps, past which the inverse
        has no correct digits at this precision.

        Raises:
            SingularMatrixError: If the matrix is singular at this precision
        """
        rows, cols = m.shape
        if rows != cols:
            raise ValidationError(f"{name}: cannot invert non-square {rows}×{cols} matrix")

        if m.det(method='berkowitz') == 0:
            raise SingularMatrixError(
                f"{name} is singular: determinant is exactly zero. "
                f"This indicates collinear or degenerate data.",
                matrix_name=name,
                expected_rank=rows,
            )

        cond = self.condition_number(m)
        limit = 1 / self.epsilon
        if cond > limit:
            raise SingularMatrixError(
                f"{name} is singular or nearly singular at {self.dps} digits: "
                f"condition number {sympy.N(cond, 5)} (limit {sympy.N(limit, 5)}). "
                f"This indicates collinear or degenerate data.",
                matrix_name=name,
                condition_number=float(cond),
                expected_rank=rows,
            )
        try:
            return m.inv()
        except (ValueError, ZeroDivisionError) as e:
            raise SingularMatrixError(
                f"{name} is singular: {e}",
                matrix_name=name,
                expected_rank=rows,
            ) from e

    def condition_number(self, m: sympy.Matrix) -> sympy.Expr:
        """
        1-norm condition number of a square matrix at this precision.

        Returns:
            ||M||₁·||M⁻¹||₁ as a sympy.Float, or sympy.oo if mpmath finds
            the matrix numerically singular
        """
        with mpmath.workdps(self.dps):
            a = mpmath.matrix([
                [mpmath.mpf(str(sympy.Float(e, self.dps))) for e in m.row(i)]
                for i in range(m.rows)
            ])
            try:
                inv = mpmath.inverse(a)
            except ZeroDivisionError:
                return sympy.oo
            cond = mpmath.mnorm(a, 1) * mpmath.mnorm(inv, 1)
            return sympy.Float(str(cond), self.dps)

    def sign(self, x: sympy.Float) -> int:
        return int(sympy.sign(x))

    def log(self, x: sympy.Float) -> sympy.Float:
        if x <= 0:
            raise DomainError(f"ln({x}) is undefined for non-positive values", value=x)
        return sympy.Float(sympy.log(x).evalf(self.dps), self.dps)

    def exp(self, x: sympy.Float) -> sympy.Float:
        return sympy.Float(sympy.exp(x).evalf(self.dps), self.dps)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SympyContext) and other.dps == self.dps

    def __hash__(self) -> int:
        return hash((self.name, self.dps))

    def __repr__(self) -> str:
        return f"SympyContext(dps={self.dps})"


FLOAT64 = Float64Context()


def context_for(values: Iterable[Any], dps: int | None = None) -> Float64Context | SympyContext:
    """
    Select the numeric context implied by a collection of values.

    Plain ints and floats (Python or NumPy) select float64. Any Decimal,
    Fraction or SymPy number selects SymPy, at the largest precision carried
    by the values: the bit precision of sympy.Float values, the active
    decimal context for Decimal values, and DEFAULT_DPS for exact rationals.

    Args:
        values: Scalars to inspect
        dps: Force a SymPy context at this many digits

    Returns:
        The numeric context for the values
    """
    if dps is not None:
        return SympyContext(dps)

    carried: list[int] = []
    exact = False
    for value in values:
        if isinstance(value, bool):
            raise ValidationError(f"value {value!r}: booleans are not numeric data")
        if isinstance(value, _FLOAT_TYPES):
            continue
        if isinstance(value, sympy.Float):
            carried.append(prec_to_dps(value._prec))
        elif isinstance(value, decimal.Decimal):
            carried.append(decimal.getcontext().prec)
        else:
            exact = True

    if not carried and not exact:
        return FLOAT64
    return SympyContext(max(carried) if carried else DEFAULT_DPS)
