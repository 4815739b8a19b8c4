"""
Tests for the diagnostics channels.
"""

import logging
import warnings

import pytest

from pycurvefit.core.diagnostics import (
    CollectingDiagnostics,
    Diagnostics,
    FitDiagnosticWarning,
    WarningsDiagnostics,
    default_diagnostics,
)


class TestWarningsDiagnostics:

    def test_emits_fit_diagnostic_warning(self):
        with pytest.warns(FitDiagnosticWarning, match="unexpected shape"):
            WarningsDiagnostics().warn("unexpected shape", strategy="linear fit")

    def test_warning_is_runtime_warning(self):
        assert issubclass(FitDiagnosticWarning, RuntimeWarning)

    def test_logs_at_debug_level_only(self, caplog):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore")
            with caplog.at_level(logging.DEBUG, logger="pycurvefit.core.diagnostics"):
                WarningsDiagnostics().warn("bad solution", shape=(3, 1))
        assert "bad solution" in caplog.text
        assert caplog.records[0].diagnostics == {"shape": (3, 1)}
        assert all(r.levelno == logging.DEBUG for r in caplog.records)

    def test_default_channel(self):
        assert isinstance(default_diagnostics(), WarningsDiagnostics)


class TestCollectingDiagnostics:

    def test_records_messages_and_details(self):
        diag = CollectingDiagnostics()
        diag.warn("first", strategy="a")
        diag.warn("second")
        assert diag.messages == ("first", "second")
        assert diag.records[0] == ("first", {"strategy": "a"})

    def test_has_warning(self):
        diag = CollectingDiagnostics()
        diag.warn("solution has shape 3×1, expected 2×1")
        assert diag.has_warning("expected 2×1")
        assert not diag.has_warning("singular")

    def test_clear(self):
        diag = CollectingDiagnostics()
        diag.warn("x")
        diag.clear()
        assert diag.messages == ()

    def test_no_warning_emitted(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            CollectingDiagnostics().warn("quiet")

    def test_satisfies_protocol(self):
        assert isinstance(CollectingDiagnostics(), Diagnostics)
        assert isinstance(WarningsDiagnostics(), Diagnostics)
