"""
Diagnostics channel for non-fatal findings.

Fitting code never raises for problems that indicate an internal
inconsistency rather than bad input (for example a solved coefficient
vector of unexpected shape). It reports them to a Diagnostics channel
supplied by the caller instead.

Channels:
    WarningsDiagnostics: emits FitDiagnosticWarning via the warnings module
    CollectingDiagnostics: records messages for later inspection
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class FitDiagnosticWarning(RuntimeWarning):
    """Warning category for non-fatal fitting diagnostics."""
    pass


@runtime_checkable
class Diagnostics(Protocol):
    """Receives non-fatal diagnostic messages from fitting code."""

    def warn(self, message: str, **details: Any) -> None:
        """
        Report a diagnostic.

        Args:
            message: Human-readable description
            **details: Structured context (strategy name, shapes, ...)
        """
        ...


class WarningsDiagnostics:
    """Default channel: forwards every message to warnings.warn()."""

    def __init__(self, stacklevel: int = 3):
        self.stacklevel = stacklevel

    def warn(self, message: str, **details: Any) -> None:
        logger.debug("%s", message, extra={'diagnostics': details})
        warnings.warn(message, FitDiagnosticWarning, stacklevel=self.stacklevel)


@dataclass
class CollectingDiagnostics:
    """
    Channel that keeps every message.

    Attributes:
        records: (message, details) pairs in the order they were reported
    """
    records: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    def warn(self, message: str, **details: Any) -> None:
        self.records.append((message, dict(details)))

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(message for message, _ in self.records)

    def has_warning(self, substring: str) -> bool:
        """Check if any message contains the given substring."""
        return any(substring in m for m in self.messages)

    def clear(self) -> None:
        self.records.clear()


def default_diagnostics() -> Diagnostics:
    """Channel used when the caller supplies none."""
    return WarningsDiagnostics()
