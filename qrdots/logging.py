"""QR-Dots structured logging: console/JSON formatters, AUDIT level and call tracing."""

import functools
import json
import logging
import sys
import time
import traceback
from datetime import datetime, timezone

ROOT_LOGGER = "qrdots"

# Custom AUDIT level (between WARNING=30 and ERROR=40)
AUDIT = 35
logging.addLevelName(AUDIT, "AUDIT")


def _truncate(value: object, max_len: int = 80) -> str:
    """Truncate a string for safe logging."""
    s = str(value)
    if len(s) > max_len:
        return s[:max_len] + "..."
    return s


def _timestamp(record: logging.LogRecord, fmt: str) -> str:
    return datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(fmt)[:-3]


def _summarize_arg(value: object) -> str:
    """Short, log-safe rendering of a call argument.

    Images, surfaces and module matrices are reduced to their type name (plus
    dimensions where cheap) so a traced render call never dumps pixel data.
    """
    type_name = type(value).__name__
    if "Image" in type_name or "Surface" in type_name:
        size = getattr(value, "size", None)
        return f"<{type_name} {size[0]}x{size[1]}>" if size else f"<{type_name}>"
    if isinstance(value, list) and value and isinstance(value[0], list):
        return f"<matrix {len(value)}x{len(value[0])}>"
    s = repr(value)
    if len(s) > 100:
        return f"<{type_name}>"
    return _truncate(s, 80)


def _summarize_result(result: object) -> str:
    if isinstance(result, (str, int, float, bool)):
        return _truncate(repr(result), 80)
    if isinstance(result, (list, tuple)):
        return f"{type(result).__name__}[{len(result)}]"
    if isinstance(result, dict):
        return f"dict[{len(result)} keys]"
    size = getattr(result, "size", None)
    if isinstance(size, tuple) and len(size) == 2:
        return f"{type(result).__name__}[{size[0]}x{size[1]}]"
    return type(result).__name__


class JsonFormatter(logging.Formatter):
    """Outputs one JSON object per line for machine parsing."""

    def format(self, record):
        entry = {
            "ts": _timestamp(record, "%Y-%m-%dT%H:%M:%S.%f") + "Z",
            "level": record.levelname,
            "src": record.name,
        }
        if hasattr(record, "event"):
            entry["event"] = record.event
        if hasattr(record, "duration_ms"):
            entry["duration_ms"] = round(record.duration_ms, 2)
        if hasattr(record, "ctx"):
            entry["ctx"] = record.ctx
        if record.getMessage() and not hasattr(record, "event"):
            entry["msg"] = record.getMessage()
        if record.exc_info and record.exc_info[1]:
            entry["traceback"] = traceback.format_exception(*record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human-readable colored console output."""

    COLORS = {
        "DEBUG": "\033[36m",    # cyan
        "INFO": "\033[32m",     # green
        "AUDIT": "\033[35m",    # magenta
        "WARNING": "\033[33m",  # yellow
        "ERROR": "\033[31m",    # red
    }
    RESET = "\033[0m"

    def format(self, record):
        color = self.COLORS.get(record.levelname, "")
        parts = [
            _timestamp(record, "%H:%M:%S.%f"),
            f"{color}{record.levelname:5s}{self.RESET}",
            f"[{record.name}]",
        ]

        if hasattr(record, "event"):
            parts.append(record.event)
        if hasattr(record, "duration_ms"):
            parts.append(f"({record.duration_ms:.1f}ms)")

        if getattr(record, "ctx", None):
            parts.append(" ".join(f"{k}={_truncate(v)}" for k, v in record.ctx.items()))
        elif record.getMessage() and not hasattr(record, "event"):
            parts.append(record.getMessage())

        if record.exc_info and record.exc_info[1]:
            parts.append(f"\n{''.join(traceback.format_exception(*record.exc_info))}")

        return " ".join(parts)


def setup_logging(level: str = "INFO", log_file: str | None = None, json_format: bool = False):
    """Configure the root qrdots logger.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, AUDIT).
        log_file: If set, also write JSON logs to this file path.
        json_format: If True, use JSON format on the console too.
    """
    root = logging.getLogger(ROOT_LOGGER)
    level_name = level.upper()
    root.setLevel(AUDIT if level_name == "AUDIT" else getattr(logging, level_name, logging.INFO))
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(JsonFormatter() if json_format else ConsoleFormatter())
    root.addHandler(console)

    # File handler is always JSON
    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(JsonFormatter())
        root.addHandler(fh)


def get_logger(module_name: str) -> logging.Logger:
    """Get a logger scoped under the qrdots namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{module_name}")


def _emit(log: logging.Logger, level: int, event: str, ctx: dict,
          duration_ms: float | None = None, exc_info=None):
    record = log.makeRecord(
        name=log.name, level=level, fn="", lno=0,
        msg="", args=(), exc_info=exc_info,
    )
    record.event = event
    record.ctx = ctx
    if duration_ms is not None:
        record.duration_ms = duration_ms
    log.handle(record)


def audit(event: str, logger: logging.Logger | None = None, **context):
    """Emit an AUDIT-level structured log entry.

    Args:
        event: Machine-readable event tag (e.g., "dots.rendered").
        logger: Logger to use. Defaults to the qrdots root logger.
        **context: Key-value pairs for the event context.
    """
    log = logger or logging.getLogger(ROOT_LOGGER)
    if log.isEnabledFor(AUDIT):
        _emit(log, AUDIT, event, context)


def trace(func=None, *, logger_name: str | None = None):
    """Decorator that auto-logs function entry/exit with timing.

    - DEBUG on entry with arguments
    - INFO on exit with duration
    - ERROR on exception with traceback and duration (then re-raised)
    """
    def decorator(fn):
        _logger_name = logger_name or fn.__module__.replace(f"{ROOT_LOGGER}.", "")
        log = get_logger(_logger_name)

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            fn_name = fn.__name__

            # Skip argument formatting unless DEBUG is enabled
            if log.isEnabledFor(logging.DEBUG):
                _emit(log, logging.DEBUG, f"{fn_name}.enter", {
                    "args": [_summarize_arg(a) for a in args],
                    "kwargs": {k: _summarize_arg(v) for k, v in kwargs.items()},
                })

            start = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except Exception:
                elapsed = (time.perf_counter() - start) * 1000
                _emit(log, logging.ERROR, f"{fn_name}.error", {"function": fn_name},
                      duration_ms=elapsed, exc_info=sys.exc_info())
                raise

            elapsed = (time.perf_counter() - start) * 1000
            if log.isEnabledFor(logging.INFO):
                _emit(log, logging.INFO, f"{fn_name}.done",
                      {"result": _summarize_result(result)}, duration_ms=elapsed)
            return result

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
