"""
debug_trace.py

Debug instrumentation for the label synchronizer.

Tracing is off unless ``[debug] trace = true`` is set in settings.toml or
the ``DIMSYNC_TRACE`` environment variable is set. Trace lines go to the
``dimsync.trace`` logger, and to ``[debug] trace_file`` when configured.

The ``[debug]`` section comes from the global settings unless
:func:`configure` was given another one; tracing is process-wide, so the
most recently configured section wins.
"""

import logging
import os
from functools import wraps
from typing import Optional

from settings import DebugSettings, get_settings

# Categories that fire on every scene change (very verbose)
NOISY_CATEGORIES = {"TICK"}

_logger = logging.getLogger("dimsync.trace")
_logger.propagate = False
_stderr_handler: Optional[logging.StreamHandler] = None
_file_handler: Optional[logging.FileHandler] = None
_debug_settings: Optional[DebugSettings] = None


def configure(debug_settings: Optional[DebugSettings]) -> None:
    """Use *debug_settings* instead of the global ``[debug]`` section.

    Passing None reverts to the global settings. Any open trace file is
    closed so the next trace line honours the new ``trace_file``.
    """
    global _debug_settings
    close_log()
    _debug_settings = debug_settings


def _current() -> DebugSettings:
    return _debug_settings or get_settings().settings.debug


def is_enabled() -> bool:
    """Return True if tracing is switched on."""
    if os.environ.get("DIMSYNC_TRACE"):
        return True
    return _current().trace


def _ensure_handlers() -> None:
    global _stderr_handler, _file_handler
    if _stderr_handler is None:
        _stderr_handler = logging.StreamHandler()
        _stderr_handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s"))
        _logger.addHandler(_stderr_handler)
        _logger.setLevel(logging.DEBUG)
    path = _current().trace_file
    if not path or _file_handler is not None:
        return
    try:
        _file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    except OSError as e:
        logging.getLogger(__name__).warning("Cannot open trace file %s: %s", path, e)
        return
    _file_handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s"))
    _logger.addHandler(_file_handler)


def trace(msg: str, category: str = "INFO"):
    """Emit a trace message tagged with *category*."""
    if not is_enabled():
        return
    if category in NOISY_CATEGORIES and not os.environ.get("DIMSYNC_TRACE_TICKS"):
        return
    _ensure_handlers()
    _logger.debug("[%s] %s", category, msg)


def trace_call(category: str = "CALL"):
    """Decorator to trace function calls."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not is_enabled():
                return func(*args, **kwargs)
            func_name = func.__qualname__
            trace(f">>> {func_name}", category)
            try:
                result = func(*args, **kwargs)
                trace(f"<<< {func_name}", category)
                return result
            except Exception as e:
                trace(f"!!! {func_name} raised {type(e).__name__}: {e}", "ERROR")
                raise
        return wrapper
    return decorator


def close_log():
    """Detach and close the trace file."""
    global _file_handler
    if _file_handler:
        _logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
