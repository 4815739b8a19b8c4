"""
Exponential fit y = A·e^(Bx).

Linearizes to ln y = ln A + Bx and solves the y-weighted normal equations

    | Σy    Σxy  | |a|   | Σy·ln y  |
    | Σxy   Σx²y | |b| = | Σxy·ln y |

so that A = e^a and B = b. Weighting by y offsets the emphasis the
logarithm puts on small values.
"""

from __future__ import annotations

import logging

from pycurvefit.core.diagnostics import Diagnostics
from pycurvefit.core.protocols import NumericContext
from pycurvefit.core.validation import check_positive_values
from pycurvefit.curvefit.coordinates import Coordinates2D
from pycurvefit.curvefit.regression import column_entries
from pycurvefit.curvefit.shape import CurveShape
from pycurvefit.curvefit.solution import ExponentialFunction
from pycurvefit.curvefit.strategies.base import BaseStrategy

logger = logging.getLogger(__name__)


class ExponentialFit(BaseStrategy):
    name = 'exponential fit'
    description = 'Exponential y = A·exp(Bx) via y-weighted log-linearization'
    supported_shape = CurveShape.CURVE_2D

    def _fit(
        self,
        data: list[Coordinates2D],
        context: NumericContext,
        diagnostics: Diagnostics,
    ) -> ExponentialFunction:
        check_positive_values(data, 'data')

        zero = context.scalar(0)
        sum_y = sum_xy = sum_xxy = sum_ylny = sum_xylny = zero
        for c in data:
            x = context.scalar(c.x)
            y = context.scalar(c.y)
            ln_y = context.log(y)
            sum_y += y
            sum_xy += x * y
            sum_xxy += x * x * y
            sum_ylny += y * ln_y
            sum_xylny += x * y * ln_y

        M = context.matrix([[sum_y, sum_xy], [sum_xy, sum_xxy]])
        rhs = context.column([sum_ylny, sum_xylny])
        beta = context.matmul(context.inverse(M, name='exponential normal matrix'), rhs)
        self._check_solution_shape(beta, 2, context, diagnostics)

        a, b = column_entries(beta, context)[:2]
        amplitude = context.exp(a)
        logger.info("exponential fit: A=%s, B=%s", amplitude, b)
        return ExponentialFunction(amplitude, b, context)
