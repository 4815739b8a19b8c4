"""
Fit dispatch.

This module provides CurveFitter, which holds a coordinate batch, its
shape and numeric context, and dispatches named fits to the strategy
registry, plus the fit() function (public API).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from pycurvefit.core.compute.algebra import context_for
from pycurvefit.core.diagnostics import Diagnostics, default_diagnostics
from pycurvefit.core.exceptions import ValidationError
from pycurvefit.core.protocols import CoordinateLike, CurveFittingStrategy, NumericContext
from pycurvefit.core.validation import check_not_empty, check_uniform_arity
from pycurvefit.curvefit.coordinates import by_ordinate, by_ordinates
from pycurvefit.curvefit.regression import batch_values
from pycurvefit.curvefit.registry import DEFAULT_STRATEGIES, StrategyRegistry, default_registry
from pycurvefit.curvefit.shape import CurveShape

logger = logging.getLogger(__name__)


class CurveFitter:
    """
    Dispatcher for fitting one coordinate batch.

    Construct once, optionally sort, then fit any number of times. Each
    fit is independent and leaves the batch unchanged.

    Args:
        data: Non-empty coordinates of uniform arity; copied, not retained
        registry: Strategy registry; the built-in registry if None
        dps: Force arbitrary precision at this many digits; inferred from
            the data if None
        diagnostics: Channel for non-fatal findings; warnings module if None

    Raises:
        ValidationError: If data is empty
        MismatchedArityError: If arities differ within the batch

    Example:
        >>> fitter = CurveFitter([Coordinates2D(x, y) for x, y in points])
        >>> fitter.sort_in_x()
        >>> line = fitter.fit_to_data('lin')
        >>> line(2.0)
    """

    def __init__(
        self,
        data: Iterable[CoordinateLike],
        *,
        registry: StrategyRegistry | None = None,
        dps: int | None = None,
        diagnostics: Diagnostics | None = None,
    ):
        batch = list(data) if data is not None else None
        check_not_empty(batch, 'data')
        arity = check_uniform_arity(batch, 'data')
        if arity < 1:
            raise ValidationError(f"data: requires at least one ordinate, got arity {arity}")

        self._data = batch
        self._arity = arity
        self._shape = CurveShape.for_arity(arity)
        self._context = context_for(batch_values(batch), dps=dps)
        self._registry = registry if registry is not None else default_registry()
        self._diagnostics = diagnostics if diagnostics is not None else default_diagnostics()

    @property
    def data(self) -> tuple[CoordinateLike, ...]:
        return tuple(self._data)

    @property
    def shape(self) -> CurveShape:
        return self._shape

    @property
    def arity(self) -> int:
        return self._arity

    @property
    def context(self) -> NumericContext:
        return self._context

    # === Ordering ===

    def _sort(self, key: Callable[[CoordinateLike], Any], label: str) -> None:
        # build the sorted list first; fits in flight keep the old one
        self._data = sorted(self._data, key=key)
        logger.debug("sorted %d points by %s", len(self._data), label)

    def sort_in_x(self) -> None:
        """Order the batch ascending by the first ordinate."""
        self._sort(by_ordinate(0), 'x')

    def sort_in_y(self) -> None:
        """
        Order the batch ascending by the second ordinate.

        Raises:
            ValidationError: If the batch has a single ordinate
        """
        if self._arity < 2:
            raise ValidationError(
                f"sort_in_y: requires at least 2 ordinates, batch has {self._arity}"
            )
        self._sort(by_ordinate(1), 'y')

    def sort_by(self, *ordinates: int) -> None:
        """
        Order the batch lexicographically by several ordinate indices.

        Raises:
            ValidationError: If no index is given or an index is out of range
        """
        if not ordinates:
            raise ValidationError("sort_by: requires at least one ordinate index")
        for i in ordinates:
            if not -self._arity <= i < self._arity:
                raise ValidationError(
                    f"sort_by: ordinate {i} out of range for arity {self._arity}"
                )
        self._sort(by_ordinates(*ordinates), f"ordinates {ordinates}")

    # === Fitting ===

    def available_strategies(self) -> tuple[str, ...]:
        """Names of the strategies registered for this batch's shape."""
        return self._registry.names(self._shape)

    def strategy_for(self, name: str | None = None) -> CurveFittingStrategy:
        """
        Resolve a strategy name prefix for this batch's shape.

        Args:
            name: Case- and whitespace-insensitive unique prefix, with an
                optional trailing '*'; the shape's default if None

        Raises:
            StrategyNotFoundError: If the prefix matches none or several
        """
        if name is None:
            name = DEFAULT_STRATEGIES[self._shape]
        return self._registry.create(name, self._shape)

    def fit_to_data(self, name: str | None = None) -> Any:
        """
        Fit the batch with the named strategy.

        Args:
            name: Strategy name prefix; the shape's default if None

        Returns:
            The fitted function

        Raises:
            StrategyNotFoundError: If the name does not resolve
            ValidationError: If the data do not meet the strategy's needs
            NumericalError: If the fit is numerically impossible
        """
        strategy = self.strategy_for(name)
        data = self._data
        logger.debug("fitting %d points with %r", len(data), strategy.name)
        return strategy.fit(data, context=self._context, diagnostics=self._diagnostics)

    def __repr__(self) -> str:
        return (
            f"CurveFitter({len(self._data)} points, shape={self._shape.value}, "
            f"context={self._context!r})"
        )


def fit(
    coordinates: Iterable[CoordinateLike],
    name: str | None = None,
    **options: Any,
) -> Any:
    """
    Fit a function to coordinates in one call.

    Args:
        coordinates: Data to fit
        name: Strategy name prefix; the shape's default if None
        **options: Passed to CurveFitter (registry, dps, diagnostics)

    Returns:
        The fitted function
    """
    return CurveFitter(coordinates, **options).fit_to_data(name)
