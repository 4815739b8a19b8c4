"""
Strategy registry.

Maps (name, shape) to a strategy factory and resolves user-supplied name
prefixes to a single strategy. Names compare case- and
whitespace-insensitively; a trailing '*' is accepted as a wildcard.

Resolution rule, restricted to the requested shape:
    1. A registered name equal to the normalized prefix wins outright.
    2. Otherwise exactly one name starting with the prefix resolves.
    3. Zero or several candidates raise StrategyNotFoundError.

Usage:
    >>> registry = default_registry()
    >>> registry.create('lin', CurveShape.CURVE_2D)
    LinearFit(name='linear fit')
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable

from pycurvefit.core.exceptions import StrategyNotFoundError, ValidationError
from pycurvefit.core.protocols import CurveFittingStrategy
from pycurvefit.curvefit.shape import CurveShape
from pycurvefit.curvefit.strategies import BUILTIN_STRATEGIES

logger = logging.getLogger(__name__)


DEFAULT_STRATEGIES: dict[CurveShape, str] = {
    CurveShape.CURVE_2D: 'linear fit',
    CurveShape.CURVE_3D: 'simple 3D fit',
    CurveShape.MULTI: 'multidimensional fit',
}


def normalize_name(name: str) -> str:
    """Lower-case, strip all whitespace and one trailing '*' wildcard."""
    if not isinstance(name, str):
        raise ValidationError(f"name: expected str, got {type(name).__name__}")
    normalized = "".join(name.split()).lower()
    if normalized.endswith('*'):
        normalized = normalized[:-1]
    return normalized


@dataclass(frozen=True)
class StrategySpec:
    """
    One registry entry.

    Attributes:
        name: Display name, e.g. 'simple 3D fit'
        shape: Curve shape the strategy is registered for
        factory: Zero-argument callable returning a strategy instance
    """
    name: str
    shape: CurveShape
    factory: Callable[[], CurveFittingStrategy]

    @property
    def key(self) -> str:
        return normalize_name(self.name)


class StrategyRegistry:
    """Named strategy factories, grouped by curve shape."""

    def __init__(self):
        self._entries: dict[CurveShape, dict[str, StrategySpec]] = {
            shape: {} for shape in CurveShape
        }

    def register(
        self,
        name: str,
        shape: CurveShape,
        factory: Callable[[], CurveFittingStrategy],
        replace: bool = False,
    ) -> StrategySpec:
        """
        Add a strategy under a name for one shape.

        Raises:
            ValidationError: If the name is empty, or already registered for
                the shape and replace is False
        """
        spec = StrategySpec(name, shape, factory)
        if not spec.key:
            raise ValidationError(f"name: must contain a non-whitespace character, got {name!r}")
        entries = self._entries[shape]
        if spec.key in entries and not replace:
            raise ValidationError(
                f"name: {name!r} is already registered for {shape.value} data"
            )
        entries[spec.key] = spec
        return spec

    def names(self, shape: CurveShape) -> tuple[str, ...]:
        """Registered display names for a shape, sorted."""
        return tuple(sorted(spec.name for spec in self._entries[shape].values()))

    def resolve(self, prefix: str, shape: CurveShape) -> StrategySpec:
        """
        Resolve a name prefix to one registry entry.

        Raises:
            StrategyNotFoundError: If no entry or several entries match
        """
        key = normalize_name(prefix)
        entries = self._entries[shape]
        if key in entries:
            return entries[key]

        candidates = tuple(sorted(
            spec.name for k, spec in entries.items() if k.startswith(key)
        ))
        if len(candidates) == 1:
            return entries[normalize_name(candidates[0])]

        if candidates:
            reason = f"is ambiguous, matches {', '.join(candidates)}"
        else:
            reason = f"matches none of {', '.join(self.names(shape)) or 'no registered strategies'}"
        raise StrategyNotFoundError(
            f"strategy {prefix!r} for {shape.value} data {reason}",
            prefix=prefix,
            shape=shape,
            candidates=candidates,
        )

    def create(self, prefix: str, shape: CurveShape) -> CurveFittingStrategy:
        """Resolve a prefix and instantiate the strategy."""
        spec = self.resolve(prefix, shape)
        logger.debug("resolved %r to %r for %s data", prefix, spec.name, shape.value)
        return spec.factory()

    def __contains__(self, item: tuple[str, CurveShape]) -> bool:
        name, shape = item
        return normalize_name(name) in self._entries[shape]


def register_builtins(registry: StrategyRegistry) -> StrategyRegistry:
    """Register the built-in strategies under their own names and shapes."""
    for strategy_cls in BUILTIN_STRATEGIES:
        registry.register(strategy_cls.name, strategy_cls.supported_shape, strategy_cls)
    return registry


@lru_cache(maxsize=None)
def default_registry() -> StrategyRegistry:
    """The shared registry holding the built-in strategies, built on first use."""
    return register_builtins(StrategyRegistry())
