"""
Fitted function types.

Every strategy returns one of these. They are immutable, owned by the
caller, and evaluate in the numeric context they were fitted in:

    Polynomial:          sum of Terms over named variables
    ExponentialFunction: A·exp(B·x)
    PiecewiseFunction:   ordered, contiguous CubicSplineSegments
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence

from pycurvefit.core.compute.precision import are_equal_within
from pycurvefit.core.exceptions import DomainError, ValidationError
from pycurvefit.core.protocols import NumericContext


@dataclass(frozen=True)
class Term:
    """
    One coefficient times a product of variable powers.

    Attributes:
        coefficient: Scalar in the owning polynomial's context
        orders: (variable, order) pairs, order >= 1; empty for the constant
    """
    coefficient: Any
    orders: tuple[tuple[str, int], ...] = ()

    def __post_init__(self):
        for variable, order in self.orders:
            if not isinstance(order, int) or order < 0:
                raise ValidationError(
                    f"order of {variable!r}: must be a non-negative integer, got {order!r}"
                )
        # zero orders carry no information; drop them so lookups compare equal
        cleaned = tuple(sorted((v, o) for v, o in self.orders if o > 0))
        object.__setattr__(self, 'orders', cleaned)

    def order(self, variable: str) -> int:
        return dict(self.orders).get(variable, 0)

    @property
    def degree(self) -> int:
        return sum(order for _, order in self.orders)

    def evaluate(self, values: Mapping[str, Any]) -> Any:
        result = self.coefficient
        for variable, order in self.orders:
            result = result * values[variable] ** order
        return result

    def __str__(self) -> str:
        factors = [
            variable if order == 1 else f"{variable}^{order}"
            for variable, order in self.orders
        ]
        return "·".join([str(self.coefficient)] + factors)


class Polynomial:
    """
    Polynomial in one or more named variables.

    Args:
        terms: Terms of the polynomial, in display order
        variables: Variable names, in positional-argument order
        context: Numeric context the coefficients belong to

    Raises:
        ValidationError: If a term uses a variable not in `variables`
    """

    def __init__(
        self,
        terms: Sequence[Term],
        variables: Sequence[str],
        context: NumericContext,
    ):
        self._terms = tuple(terms)
        self._variables = tuple(variables)
        self._context = context
        known = set(self._variables)
        for term in self._terms:
            for variable, _ in term.orders:
                if variable not in known:
                    raise ValidationError(
                        f"term {term}: variable {variable!r} not in {self._variables}"
                    )

    @classmethod
    def univariate(
        cls,
        coefficients: Sequence[Any],
        context: NumericContext,
        variable: str = 'x',
    ) -> Polynomial:
        """Polynomial c₀ + c₁x + c₂x² + … from coefficients in ascending order."""
        terms = [
            Term(c, ((variable, power),) if power else ())
            for power, c in enumerate(coefficients)
        ]
        return cls(terms, (variable,), context)

    @property
    def variables(self) -> tuple[str, ...]:
        return self._variables

    @property
    def context(self) -> NumericContext:
        return self._context

    @property
    def coefficients(self) -> tuple[Any, ...]:
        return tuple(term.coefficient for term in self._terms)

    def count_terms(self) -> int:
        return len(self._terms)

    def order(self, variable: str) -> int:
        """Highest power of `variable` across all terms."""
        return max((term.order(variable) for term in self._terms), default=0)

    def coefficient_of(self, **orders: int) -> Any:
        """
        Coefficient of the term with exactly these variable orders.

        >>> p.coefficient_of()          # constant term
        >>> p.coefficient_of(x=1, y=1)  # the xy term

        Returns zero in the polynomial's context when there is no such term.
        """
        key = tuple(sorted((v, o) for v, o in orders.items() if o > 0))
        for term in self._terms:
            if term.orders == key:
                return term.coefficient
        return self._context.scalar(0)

    def __iter__(self) -> Iterator[Term]:
        return iter(self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """
        Evaluate at a point given positionally (in `variables` order) or by
        keyword.

        Raises:
            ValidationError: If a variable is missing or given twice
        """
        if len(args) > len(self._variables):
            raise ValidationError(
                f"expected at most {len(self._variables)} positional arguments, got {len(args)}"
            )
        values = dict(zip(self._variables, args))
        for name, value in kwargs.items():
            if name in values:
                raise ValidationError(f"variable {name!r} given twice")
            if name not in self._variables:
                raise ValidationError(f"unknown variable {name!r}; expected {self._variables}")
            values[name] = value
        missing = [v for v in self._variables if v not in values]
        if missing:
            raise ValidationError(f"missing values for {missing}")

        ctx = self._context
        point = {name: ctx.scalar(value) for name, value in values.items()}
        total = ctx.scalar(0)
        for term in self._terms:
            total = total + term.evaluate(point)
        return total

    def __str__(self) -> str:
        return " + ".join(str(term) for term in self._terms) or "0"

    def __repr__(self) -> str:
        return f"Polynomial({self}, variables={self._variables})"


class ExponentialFunction:
    """
    y = A·exp(B·x).

    Attributes:
        amplitude: A
        rate: B
    """

    def __init__(self, amplitude: Any, rate: Any, context: NumericContext, variable: str = 'x'):
        self.amplitude = amplitude
        self.rate = rate
        self.variable = variable
        self._context = context

    @property
    def context(self) -> NumericContext:
        return self._context

    def __call__(self, x: Any) -> Any:
        ctx = self._context
        return self.amplitude * ctx.exp(self.rate * ctx.scalar(x))

    def __str__(self) -> str:
        return f"{self.amplitude}·exp({self.rate}·{self.variable})"

    def __repr__(self) -> str:
        return f"ExponentialFunction(amplitude={self.amplitude!r}, rate={self.rate!r})"


@dataclass(frozen=True)
class CubicSplineSegment:
    """
    S(x) = a + b(x-lower) + c(x-lower)² + d(x-lower)³ on [lower, upper].
    """
    a: Any
    b: Any
    c: Any
    d: Any
    lower: Any
    upper: Any

    def evaluate(self, x: Any, derivative: int = 0) -> Any:
        """
        Value or derivative of the segment polynomial at x.

        Raises:
            ValidationError: If derivative is not 0, 1, 2 or 3
        """
        dx = x - self.lower
        if derivative == 0:
            return self.a + dx * (self.b + dx * (self.c + dx * self.d))
        if derivative == 1:
            return self.b + dx * (2 * self.c + 3 * self.d * dx)
        if derivative == 2:
            return 2 * self.c + 6 * self.d * dx
        if derivative == 3:
            return 6 * self.d
        raise ValidationError(f"derivative: must be 0, 1, 2 or 3, got {derivative}")

    def __contains__(self, x: Any) -> bool:
        return bool(self.lower <= x < self.upper)


class PiecewiseFunction:
    """
    Function defined by contiguous cubic segments.

    Segment i covers [knotᵢ, knotᵢ₊₁); the last segment also contains its
    upper knot. Arguments within the context epsilon outside the knot range
    are attributed to the nearest end segment.

    Raises:
        ValidationError: If segments are empty or not contiguous
    """

    def __init__(self, segments: Sequence[CubicSplineSegment], context: NumericContext):
        if not segments:
            raise ValidationError("segments: must contain at least one segment")
        for i in range(1, len(segments)):
            if segments[i].lower != segments[i - 1].upper:
                raise ValidationError(
                    f"segments: segment {i} starts at {segments[i].lower}, "
                    f"previous ends at {segments[i - 1].upper}"
                )
        self._segments = tuple(segments)
        self._lowers = [s.lower for s in self._segments]
        self._context = context

    @property
    def segments(self) -> tuple[CubicSplineSegment, ...]:
        return self._segments

    @property
    def knots(self) -> tuple[Any, ...]:
        return tuple(self._lowers) + (self._segments[-1].upper,)

    @property
    def context(self) -> NumericContext:
        return self._context

    @property
    def lower(self) -> Any:
        return self._segments[0].lower

    @property
    def upper(self) -> Any:
        return self._segments[-1].upper

    def segment_for(self, x: Any) -> CubicSplineSegment:
        """
        The segment whose interval contains x.

        Raises:
            DomainError: If x lies outside the knot range
        """
        eps = self._context.epsilon
        below = x < self.lower and not are_equal_within(x, self.lower, eps)
        above = x > self.upper and not are_equal_within(x, self.upper, eps)
        if below or above:
            raise DomainError(
                f"x={x} is outside the fitted range [{self.lower}, {self.upper}]",
                value=x,
            )
        i = bisect_right(self._lowers, x) - 1
        return self._segments[min(max(i, 0), len(self._segments) - 1)]

    def __call__(self, x: Any, derivative: int = 0) -> Any:
        x = self._context.scalar(x)
        return self.segment_for(x).evaluate(x, derivative)

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[CubicSplineSegment]:
        return iter(self._segments)

    def __repr__(self) -> str:
        return f"PiecewiseFunction({len(self._segments)} segments on [{self.lower}, {self.upper}])"
