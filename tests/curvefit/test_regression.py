"""
Tests for the regression helper.

Validates:
    - Design matrices (polynomial, bilinear surface, multidimensional)
    - Observed values and weight matrices
    - (Weighted) pseudo-inverse and least squares
    - Typed failures for bad degree, missing sigma, mixed arity, singularity
"""

from fractions import Fraction

import numpy as np
import pytest
import sympy

from pycurvefit.core.compute import FLOAT64, SympyContext
from pycurvefit.core.exceptions import (
    MismatchedArityError,
    MissingWeightError,
    SingularMatrixError,
    ValidationError,
)
from pycurvefit.curvefit.coordinates import Coordinates, Coordinates2D, Coordinates3D
from pycurvefit.curvefit.regression import (
    batch_values,
    column_entries,
    design_matrix,
    design_matrix_3d,
    design_matrix_multi,
    least_squares,
    observed_values,
    pseudo_inverse,
    weight_matrix,
    weighted_pseudo_inverse,
)


# ═══════════════════════════════════════════════════════════════════════
# Matrix construction
# ═══════════════════════════════════════════════════════════════════════


class TestDesignMatrix:

    def test_parabolic_rows_in_input_order(self, make_points):
        X = design_matrix(make_points([2.0, -1.0, 3.0], [0, 0, 0]), 2)
        np.testing.assert_array_equal(X, [[1, 2, 4], [1, -1, 1], [1, 3, 9]])

    def test_linear_shape(self, exact_line):
        assert FLOAT64.shape(design_matrix(exact_line, 1)) == (len(exact_line), 2)

    @pytest.mark.parametrize("degree", [0, -1])
    def test_degree_below_one(self, exact_line, degree):
        with pytest.raises(ValidationError, match="at least 1"):
            design_matrix(exact_line, degree)

    def test_empty(self):
        with pytest.raises(ValidationError):
            design_matrix([], 1)

    def test_observed_values(self, make_points):
        y = observed_values(make_points([1, 2, 3], [4.0, 5.0, 6.0]))
        np.testing.assert_array_equal(y, [[4.0], [5.0], [6.0]])

    def test_surface_rows(self):
        X = design_matrix_3d([Coordinates3D(2.0, 3.0, 0.0), Coordinates3D(-1.0, 4.0, 0.0)])
        np.testing.assert_array_equal(X, [[1, 2, 3, 6], [1, -1, 4, -4]])

    def test_surface_requires_arity_two(self):
        with pytest.raises(ValidationError, match="expected arity 2"):
            design_matrix_3d([Coordinates2D(1, 2)])

    def test_multi_rows(self):
        X = design_matrix_multi([Coordinates([1, 2, 3, 0]), Coordinates([4, 5, 6, 0])])
        np.testing.assert_array_equal(X, [[1, 1, 2, 3], [1, 4, 5, 6]])

    def test_multi_mixed_arity(self):
        data = [Coordinates([1, 2, 3, 0]), Coordinates([4, 5, 0])]
        with pytest.raises(MismatchedArityError) as exc_info:
            design_matrix_multi(data)
        assert exc_info.value.index == 1

    def test_batch_values(self):
        assert batch_values([Coordinates3D(1, 2, 3), Coordinates3D(4, 5, 6)]) == [1, 2, 3, 4, 5, 6]


class TestWeightMatrix:

    def test_inverse_variance(self, make_points):
        W = weight_matrix(make_points([1, 2], [1, 1], sigma=0.5))
        np.testing.assert_allclose(W, [[4.0, 0.0], [0.0, 4.0]])

    def test_asymmetric_sigma(self):
        c = Coordinates2D(1.0, 1.0)
        c.set_asymmetric_error(-1.0, 3.0)
        np.testing.assert_allclose(weight_matrix([c]), [[0.25]])

    def test_missing_sigma(self, make_points):
        data = make_points([1, 2, 3], [1, 1, 1], sigma=0.5)
        data[1] = Coordinates2D(2, 1)
        with pytest.raises(MissingWeightError) as exc_info:
            weight_matrix(data)
        assert exc_info.value.indices == (1,)


# ═══════════════════════════════════════════════════════════════════════
# Solving
# ═══════════════════════════════════════════════════════════════════════


class TestPseudoInverse:

    def test_left_inverse(self, exact_line):
        X = design_matrix(exact_line, 1)
        np.testing.assert_allclose(pseudo_inverse(X) @ X, np.eye(2), atol=1e-12)

    def test_matches_numpy_pinv(self, anscombe_1):
        X = design_matrix(anscombe_1, 2)
        np.testing.assert_allclose(pseudo_inverse(X, FLOAT64), np.linalg.pinv(X), rtol=1e-10)

    def test_weighted_with_unit_weights_is_unweighted(self, anscombe_1):
        X = design_matrix(anscombe_1, 1)
        W = np.eye(len(anscombe_1))
        np.testing.assert_allclose(weighted_pseudo_inverse(X, W), pseudo_inverse(X), rtol=1e-12)

    def test_singular_when_x_repeats(self, make_points):
        X = design_matrix(make_points([2.0, 2.0, 2.0], [1.0, 2.0, 3.0]), 1)
        with pytest.raises(SingularMatrixError) as exc_info:
            pseudo_inverse(X)
        assert exc_info.value.matrix_name == "X'X"


class TestLeastSquares:

    def test_recovers_line(self, exact_line):
        beta = least_squares(design_matrix(exact_line, 1), observed_values(exact_line))
        np.testing.assert_allclose(column_entries(beta, FLOAT64), [-1.25, 2.5], atol=1e-12)

    def test_weights_pull_towards_precise_points(self, make_points):
        data = make_points([0.0, 1.0, 2.0], [0.0, 1.0, 0.0], sigma=1.0)
        data[1].set_symmetric_error(1e-3)
        X = design_matrix(data, 1)
        y = observed_values(data)
        plain = column_entries(least_squares(X, y), FLOAT64)
        weighted = column_entries(least_squares(X, y, weight_matrix(data)), FLOAT64)
        # the weighted line passes almost through (1, 1)
        assert abs(weighted[0] + weighted[1] - 1.0) < abs(plain[0] + plain[1] - 1.0)

    def test_exact_inputs_solve_in_sympy(self, make_points):
        data = make_points([Fraction(0), Fraction(1), Fraction(2)],
                           [Fraction(1, 3), Fraction(2, 3), Fraction(1)])
        X = design_matrix(data, 1)
        beta = least_squares(X, observed_values(data))
        intercept, slope = column_entries(beta, SympyContext(34))
        assert isinstance(intercept, sympy.Float)
        assert abs(intercept - sympy.Rational(1, 3)) < sympy.Float("1e-30", 34)
        assert abs(slope - sympy.Rational(1, 3)) < sympy.Float("1e-30", 34)
