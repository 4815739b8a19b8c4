"""
Core protocols for PyCurveFit.

These define structural interfaces that implementations must satisfy.
We use Protocol (structural typing) rather than ABC (nominal typing) so
callers can bring their own coordinate types and strategies.

Design Principles:
    - Minimal contracts: prescribe only what every fit needs
    - Explicit conversion: strategies copy foreign coordinates into their
      own representation instead of relying on a class hierarchy
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from pycurvefit.core.diagnostics import Diagnostics
    from pycurvefit.curvefit.shape import CurveShape


@runtime_checkable
class CoordinateLike(Protocol):
    """
    Capability interface of a single data point.

    A coordinate has `arity` independent ordinates, one dependent value and
    optionally an error bound, either symmetric (high_error only) or
    asymmetric (low_error < 0 < high_error, relative to the value).
    """

    @property
    def arity(self) -> int:
        """Number of independent ordinates."""
        ...

    def ordinate(self, index: int) -> Any:
        """Independent ordinate at index; negative indices count from the end."""
        ...

    @property
    def value(self) -> Any:
        """Dependent value."""
        ...

    @property
    def low_error(self) -> Any | None:
        """Relative lower error bound, or None for a symmetric or absent bound."""
        ...

    @property
    def high_error(self) -> Any | None:
        """Relative upper (or symmetric) error bound, or None."""
        ...

    @property
    def sigma(self) -> Any | None:
        """Error estimate used for weighting, or None if no bound is set."""
        ...


@runtime_checkable
class NumericContext(Protocol):
    """
    Protocol for the numeric collaborator.

    Converts values to the context's scalar type and performs matrix
    algebra at the context's precision. Scalars support the Python
    arithmetic operators and ordering.
    """

    name: str
    dps: int | None

    @property
    def epsilon(self) -> Any:
        """Half a unit in the last place at this precision."""
        ...

    def scalar(self, value: Any) -> Any: ...

    def matrix(self, rows: Sequence[Sequence[Any]]) -> Any: ...

    def column(self, values: Iterable[Any]) -> Any: ...

    def diagonal(self, values: Iterable[Any]) -> Any: ...

    def transpose(self, m: Any) -> Any: ...

    def matmul(self, a: Any, b: Any) -> Any: ...

    def shape(self, m: Any) -> tuple[int, int]: ...

    def entry(self, m: Any, row: int, col: int) -> Any: ...

    def inverse(self, m: Any, name: str = 'matrix') -> Any:
        """
        Invert a square matrix.

        Raises:
            SingularMatrixError: If the matrix is not invertible
        """
        ...

    def sign(self, x: Any) -> int: ...

    def log(self, x: Any) -> Any:
        """
        Natural logarithm.

        Raises:
            DomainError: If x is not positive
        """
        ...

    def exp(self, x: Any) -> Any: ...


@runtime_checkable
class CurveFittingStrategy(Protocol):
    """
    Protocol for fitting strategies.

    Each strategy takes a batch of coordinates and produces a fitted
    function. Strategies are stateless; all per-fit state lives inside a
    single fit() call.
    """

    @property
    def name(self) -> str:
        """
        Registry name, unique per shape.

        Convention: lower-case words, e.g. 'linear fit', 'cubic splines'.
        """
        ...

    @property
    def supported_shape(self) -> 'CurveShape':
        """The curve shape this strategy is registered for."""
        ...

    def fit(
        self,
        data: Sequence[CoordinateLike],
        *,
        context: NumericContext | None = None,
        diagnostics: 'Diagnostics | None' = None,
    ) -> Any:
        """
        Fit a function to the data.

        Args:
            data: Coordinates to fit
            context: Numeric context; inferred from the data if None
            diagnostics: Channel for non-fatal warnings

        Returns:
            The fitted function

        Raises:
            ValidationError: If data is empty or has the wrong arity
            NumericalError: If numerical issues prevent a solution
        """
        ...
