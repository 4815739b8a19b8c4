"""
Tests for the PyCurveFit exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyCurveFitError)
    - Diagnostic attributes on each subclass
    - Default attribute values (None / empty for optional attributes)
"""

import pytest

from pycurvefit.core.exceptions import (
    DomainError,
    MismatchedArityError,
    MissingWeightError,
    NumericalError,
    PyCurveFitError,
    SingularMatrixError,
    StrategyNotFoundError,
    ValidationError,
)
from pycurvefit.curvefit.shape import CurveShape


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyCurveFitError."""

    @pytest.mark.parametrize("cls", [
        ValidationError,
        MismatchedArityError,
        MissingWeightError,
        NumericalError,
        SingularMatrixError,
        DomainError,
        StrategyNotFoundError,
    ])
    def test_is_pycurvefit_error(self, cls):
        with pytest.raises(PyCurveFitError):
            raise cls("failed")

    def test_arity_and_weight_errors_are_validation_errors(self):
        assert issubclass(MismatchedArityError, ValidationError)
        assert issubclass(MissingWeightError, ValidationError)

    def test_numeric_failures_are_numerical_errors(self):
        assert issubclass(SingularMatrixError, NumericalError)
        assert issubclass(DomainError, NumericalError)

    def test_strategy_not_found_is_not_validation_error(self):
        assert not issubclass(StrategyNotFoundError, ValidationError)

    def test_not_value_error(self):
        assert not issubclass(PyCurveFitError, ValueError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestAttributes:

    def test_mismatched_arity(self):
        err = MismatchedArityError("bad", expected_arity=1, actual_arity=2, index=4)
        assert (err.expected_arity, err.actual_arity, err.index) == (1, 2, 4)
        assert str(err) == "bad"

    def test_mismatched_arity_defaults(self):
        err = MismatchedArityError("bad")
        assert err.expected_arity is None
        assert err.actual_arity is None
        assert err.index is None

    def test_missing_weight_indices_are_tuple(self):
        err = MissingWeightError("bad", indices=[0, 3])
        assert err.indices == (0, 3)

    def test_singular_matrix(self):
        err = SingularMatrixError(
            "singular", matrix_name="X'X", condition_number=1e20, rank=1, expected_rank=2
        )
        assert err.matrix_name == "X'X"
        assert err.condition_number == 1e20
        assert err.rank == 1
        assert err.expected_rank == 2

    def test_singular_matrix_defaults(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None

    def test_domain_error(self):
        err = DomainError("bad", value=-1.0, index=2)
        assert err.value == -1.0
        assert err.index == 2

    def test_strategy_not_found(self):
        err = StrategyNotFoundError(
            "ambiguous", prefix="w", shape=CurveShape.CURVE_2D,
            candidates=["weighted linear fit", "weighted parabolic fit"],
        )
        assert err.prefix == "w"
        assert err.shape is CurveShape.CURVE_2D
        assert err.candidates == ("weighted linear fit", "weighted parabolic fit")

    def test_strategy_not_found_defaults(self):
        err = StrategyNotFoundError("none")
        assert err.candidates == ()
