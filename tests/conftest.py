"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pycurvefit.core.diagnostics import CollectingDiagnostics
from pycurvefit.curvefit.coordinates import Coordinates, Coordinates2D, Coordinates3D


# Anscombe's quartet (Anscombe 1973). x is shared by datasets I-III.
ANSCOMBE_X = [10, 8, 13, 9, 11, 14, 6, 4, 12, 7, 5]
ANSCOMBE_Y1 = [8.04, 6.95, 7.58, 8.81, 8.33, 9.96, 7.24, 4.26, 10.84, 4.82, 5.68]
ANSCOMBE_Y2 = [9.14, 8.14, 8.74, 8.77, 9.26, 8.10, 6.13, 3.10, 9.13, 7.26, 4.74]
ANSCOMBE_Y3 = [7.46, 6.77, 12.74, 7.11, 7.81, 8.84, 6.08, 5.39, 8.15, 6.42, 5.73]
ANSCOMBE_X4 = [8, 8, 8, 8, 8, 8, 8, 19, 8, 8, 8]
ANSCOMBE_Y4 = [6.58, 5.76, 7.71, 8.84, 8.47, 7.04, 5.25, 12.50, 5.56, 7.91, 6.89]


def points_2d(xs, ys, sigma=None):
    return [Coordinates2D(x, y, sigma=sigma) for x, y in zip(xs, ys)]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def anscombe_1():
    return points_2d(ANSCOMBE_X, ANSCOMBE_Y1)


@pytest.fixture
def anscombe_2():
    return points_2d(ANSCOMBE_X, ANSCOMBE_Y2)


@pytest.fixture
def anscombe_3():
    return points_2d(ANSCOMBE_X, ANSCOMBE_Y3)


@pytest.fixture
def anscombe_4():
    return points_2d(ANSCOMBE_X4, ANSCOMBE_Y4)


@pytest.fixture
def exact_line():
    """Points exactly on y = 2.5x - 1.25."""
    xs = [-3.0, -1.0, 0.0, 0.5, 2.0, 4.0, 7.5]
    return points_2d(xs, [2.5 * x - 1.25 for x in xs])


@pytest.fixture
def exact_parabola():
    """Points exactly on y = 1 - 2x + 0.5x²."""
    xs = [-2.0, -1.0, 0.0, 1.0, 2.0, 3.0, 5.0]
    return points_2d(xs, [1.0 - 2.0 * x + 0.5 * x * x for x in xs])


@pytest.fixture
def exact_surface():
    """Points exactly on z = 1 + 2x - 3y + 0.5xy over a 4×3 grid."""
    return [
        Coordinates3D(x, y, 1.0 + 2.0 * x - 3.0 * y + 0.5 * x * y)
        for x in (0.0, 1.0, 2.0, 3.0)
        for y in (-1.0, 0.0, 2.0)
    ]


@pytest.fixture
def exact_hyperplane(rng):
    """Points exactly on y = 4 + x1 - 2x2 + 3x3."""
    X = rng.uniform(-5.0, 5.0, size=(20, 3))
    y = 4.0 + X @ np.array([1.0, -2.0, 3.0])
    return [Coordinates(list(row) + [value]) for row, value in zip(X.tolist(), y.tolist())]


@pytest.fixture
def collecting():
    return CollectingDiagnostics()


@pytest.fixture
def make_points():
    """Factory building a 2-D batch from x and y sequences."""
    return points_2d
