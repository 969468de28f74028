"""
debug_trace.py

Debug instrumentation built on the standard logging module.
Enable file tracing by setting DEBUG_TRACE = True below or by exporting
STEREOTEXT_TRACE=1.
"""

import logging
import os
import traceback
from functools import wraps

# Set to True to enable debug tracing
DEBUG_TRACE = os.environ.get("STEREOTEXT_TRACE", "") not in ("", "0")

# Set to True to trace paint events (very verbose)
TRACE_PAINT = False

# Log file (None for stderr only)
LOG_FILE = "stereotext_debug.log"

LOGGER_NAME = "stereotext"
LOG_FORMAT = "[%(asctime)s.%(msecs)03d] [%(category)s] %(message)s"

_logger = logging.getLogger(LOGGER_NAME)
_file_handler = None
_configured = False


def configure_logging(level: int = logging.INFO) -> None:
    """Attach stderr (and, when tracing, file) handlers to the root logger.

    Module loggers and the trace logger both propagate there.
    """
    global _file_handler, _configured
    if _configured:
        return
    _configured = True
    root = logging.getLogger()
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S", defaults={"category": "LOG"})
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)
    if DEBUG_TRACE and LOG_FILE:
        try:
            _file_handler = logging.FileHandler(LOG_FILE, mode="w", encoding="utf-8")
        except OSError:
            _file_handler = None
        else:
            _file_handler.setFormatter(formatter)
            root.addHandler(_file_handler)
    root.setLevel(logging.DEBUG if DEBUG_TRACE else level)


def trace(msg: str, category: str = "INFO"):
    """Log a trace message tagged with a category."""
    if not DEBUG_TRACE:
        return
    if category == "PAINT" and not TRACE_PAINT:
        return
    level = logging.ERROR if category in ("ERROR", "CRASH") else logging.DEBUG
    _logger.log(level, msg, extra={"category": category})


def trace_exception(msg: str = "Exception"):
    """Log the active exception with its traceback."""
    trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def trace_call(category: str = "CALL"):
    """Decorator to trace function calls."""
    def decorator(func):
        if not DEBUG_TRACE:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
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
    """Detach and close the file handler."""
    global _file_handler
    if _file_handler:
        logging.getLogger().removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None
