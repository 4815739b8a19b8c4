"""
Tests for fitted function types.
"""

import math

import pytest
import sympy

from pycurvefit.core.compute import FLOAT64, SympyContext
from pycurvefit.core.exceptions import DomainError, ValidationError
from pycurvefit.curvefit.solution import (
    CubicSplineSegment,
    ExponentialFunction,
    PiecewiseFunction,
    Polynomial,
    Term,
)


# ═══════════════════════════════════════════════════════════════════════
# Polynomial
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def surface():
    """1 + 2x - 3y + 0.5xy"""
    return Polynomial(
        [Term(1.0), Term(2.0, (("x", 1),)), Term(-3.0, (("y", 1),)),
         Term(0.5, (("x", 1), ("y", 1)))],
        ("x", "y"),
        FLOAT64,
    )


class TestTerm:

    def test_zero_orders_dropped(self):
        assert Term(1.0, (("x", 0),)).orders == ()

    def test_orders_sorted(self):
        assert Term(1.0, (("y", 1), ("x", 2))).orders == (("x", 2), ("y", 1))

    def test_negative_order(self):
        with pytest.raises(ValidationError, match="non-negative"):
            Term(1.0, (("x", -1),))

    def test_degree_and_evaluate(self):
        t = Term(3.0, (("x", 2), ("y", 1)))
        assert t.degree == 3
        assert t.evaluate({"x": 2.0, "y": 0.5}) == 6.0


class TestPolynomial:

    def test_univariate(self):
        p = Polynomial.univariate([1.0, -2.0, 0.5], FLOAT64)
        assert p.count_terms() == 3
        assert p.order("x") == 2
        assert p.coefficients == (1.0, -2.0, 0.5)
        assert p(2.0) == 1.0 - 4.0 + 2.0

    def test_coefficient_lookup(self, surface):
        assert surface.coefficient_of() == 1.0
        assert surface.coefficient_of(x=1) == 2.0
        assert surface.coefficient_of(x=1, y=1) == 0.5
        assert surface.coefficient_of(x=2) == 0.0

    def test_iteration(self, surface):
        assert [t.degree for t in surface] == [0, 1, 1, 2]
        assert len(surface) == 4

    def test_positional_and_keyword(self, surface):
        expected = 1.0 + 2.0 * 2.0 - 3.0 * 4.0 + 0.5 * 8.0
        assert surface(2.0, 4.0) == expected
        assert surface(y=4.0, x=2.0) == expected
        assert surface(2.0, y=4.0) == expected

    def test_missing_variable(self, surface):
        with pytest.raises(ValidationError, match="missing"):
            surface(2.0)

    def test_duplicate_variable(self, surface):
        with pytest.raises(ValidationError, match="given twice"):
            surface(2.0, x=1.0, y=1.0)

    def test_unknown_variable(self, surface):
        with pytest.raises(ValidationError, match="unknown variable"):
            surface(x=1.0, y=1.0, z=1.0)

    def test_term_variable_must_be_declared(self):
        with pytest.raises(ValidationError, match="not in"):
            Polynomial([Term(1.0, (("z", 1),))], ("x",), FLOAT64)

    def test_evaluates_in_its_context(self):
        ctx = SympyContext(40)
        p = Polynomial.univariate([ctx.scalar(1), ctx.scalar(3)], ctx)
        value = p(sympy.Rational(1, 3))
        assert isinstance(value, sympy.Float)
        assert abs(value - 2) < sympy.Float("1e-38", 40)

    def test_str(self):
        assert str(Polynomial.univariate([1.0, 2.0], FLOAT64)) == "1.0 + 2.0·x"


# ═══════════════════════════════════════════════════════════════════════
# Exponential
# ═══════════════════════════════════════════════════════════════════════


class TestExponentialFunction:

    def test_evaluate(self):
        f = ExponentialFunction(2.0, 0.5, FLOAT64)
        assert math.isclose(f(2.0), 2.0 * math.e)
        assert (f.amplitude, f.rate) == (2.0, 0.5)


# ═══════════════════════════════════════════════════════════════════════
# Piecewise
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def two_segments():
    # f = x on [0, 1), f = 1 + (x - 1)² on [1, 2]
    return PiecewiseFunction(
        [CubicSplineSegment(0.0, 1.0, 0.0, 0.0, 0.0, 1.0),
         CubicSplineSegment(1.0, 0.0, 1.0, 0.0, 1.0, 2.0)],
        FLOAT64,
    )


class TestPiecewiseFunction:

    def test_segment_selection(self, two_segments):
        assert two_segments(0.5) == 0.5
        assert two_segments(1.0) == 1.0
        assert two_segments(1.5) == 1.25

    def test_upper_knot_is_closed(self, two_segments):
        assert two_segments(2.0) == 2.0
        assert two_segments.segment_for(2.0) is two_segments.segments[-1]

    def test_interval_lower_bound_belongs_to_next_segment(self, two_segments):
        assert two_segments.segment_for(1.0) is two_segments.segments[1]

    @pytest.mark.parametrize("x", [-1e-17, -1e-16])
    def test_within_epsilon_of_range(self, two_segments, x):
        assert two_segments.segment_for(x) is two_segments.segments[0]

    @pytest.mark.parametrize("x", [-0.1, 2.1])
    def test_outside_range(self, two_segments, x):
        with pytest.raises(DomainError, match="outside the fitted range"):
            two_segments(x)

    def test_derivatives(self, two_segments):
        assert two_segments(1.5, derivative=1) == 1.0
        assert two_segments(1.5, derivative=2) == 2.0
        assert two_segments(1.5, derivative=3) == 0.0

    def test_derivative_order_limit(self, two_segments):
        with pytest.raises(ValidationError, match="derivative"):
            two_segments(1.5, derivative=4)

    def test_knots(self, two_segments):
        assert two_segments.knots == (0.0, 1.0, 2.0)
        assert (two_segments.lower, two_segments.upper) == (0.0, 2.0)

    def test_non_contiguous(self):
        with pytest.raises(ValidationError, match="segment 1 starts at"):
            PiecewiseFunction(
                [CubicSplineSegment(0, 0, 0, 0, 0.0, 1.0),
                 CubicSplineSegment(0, 0, 0, 0, 1.5, 2.0)],
                FLOAT64,
            )

    def test_empty(self):
        with pytest.raises(ValidationError):
            PiecewiseFunction([], FLOAT64)
