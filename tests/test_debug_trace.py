"""Tests for debug_trace.py: switches, category gating and the trace file."""
from __future__ import annotations

import logging
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import debug_trace
from debug_trace import close_log, configure, is_enabled, trace, trace_call
from measurement.host import ElementScene
from measurement.scheduling import ManualFrameScheduler
from measurement.session import MeasurementSession
from settings import DebugSettings, SettingsManager


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clean_trace_state(monkeypatch):
    monkeypatch.delenv("DIMSYNC_TRACE", raising=False)
    monkeypatch.delenv("DIMSYNC_TRACE_TICKS", raising=False)
    configure(DebugSettings())
    yield
    configure(None)


@pytest.fixture()
def records(caplog):
    """caplog attached to the trace logger, which does not propagate."""
    logger = logging.getLogger("dimsync.trace")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)


# ---------------------------------------------------------------------------
# Switches
# ---------------------------------------------------------------------------

class TestSwitches:
    def test_off_by_default(self, records):
        assert not is_enabled()
        trace("nothing", "SYNC")
        assert records.messages == []

    def test_env_var(self, monkeypatch, records):
        monkeypatch.setenv("DIMSYNC_TRACE", "1")
        trace("labelled", "SYNC")
        assert records.messages == ["[SYNC] labelled"]

    def test_settings_section(self, records):
        configure(DebugSettings(trace=True))
        assert is_enabled()
        trace("from settings", "SYNC")
        assert records.messages == ["[SYNC] from settings"]


class TestNoisyCategories:
    def test_tick_dropped(self, monkeypatch, records):
        monkeypatch.setenv("DIMSYNC_TRACE", "1")
        trace("tick", "TICK")
        trace("kept", "SYNC")
        assert records.messages == ["[SYNC] kept"]

    def test_tick_enabled_separately(self, monkeypatch, records):
        monkeypatch.setenv("DIMSYNC_TRACE", "1")
        monkeypatch.setenv("DIMSYNC_TRACE_TICKS", "1")
        trace("tick", "TICK")
        assert records.messages == ["[TICK] tick"]


# ---------------------------------------------------------------------------
# trace_call
# ---------------------------------------------------------------------------

class TestTraceCall:
    def test_entry_and_exit(self, monkeypatch, records):
        monkeypatch.setenv("DIMSYNC_TRACE", "1")

        @trace_call("SYNC")
        def work():
            return 42

        assert work() == 42
        assert records.messages[0].startswith("[SYNC] >>> ")
        assert records.messages[1].startswith("[SYNC] <<< ")

    def test_exception_reraised_and_logged(self, monkeypatch, records):
        monkeypatch.setenv("DIMSYNC_TRACE", "1")

        @trace_call("SYNC")
        def broken():
            raise ValueError("bad arrow")

        with pytest.raises(ValueError):
            broken()
        assert any(m.startswith("[ERROR] !!! ") and "ValueError: bad arrow" in m
                   for m in records.messages)

    def test_disabled_passthrough(self, records):
        @trace_call()
        def work(x):
            return x * 2

        assert work(3) == 6
        assert records.messages == []


# ---------------------------------------------------------------------------
# Trace file
# ---------------------------------------------------------------------------

class TestTraceFile:
    def test_file_written(self, tmp_path):
        path = tmp_path / "trace.log"
        configure(DebugSettings(trace=True, trace_file=str(path)))
        trace("to file", "SYNC")
        close_log()
        assert "[SYNC] to file" in path.read_text(encoding="utf-8")

    def test_session_close_releases_file(self, tmp_path):
        sm = SettingsManager(settings_dir=tmp_path)
        sm.settings.debug.trace = True
        sm.settings.debug.trace_file = str(tmp_path / "session.log")
        session = MeasurementSession(ElementScene(), sm, ManualFrameScheduler())
        session.synchronizer.reset()
        assert debug_trace._file_handler is not None
        session.close()
        assert debug_trace._file_handler is None
        assert ">>> ArrowLabelSynchronizer.reset" in (tmp_path / "session.log").read_text(encoding="utf-8")
