"""
Projekt L Logging Subsystem

Purpose
-------
One logging stack for the progression engine. Records are put on a bounded
queue by the calling thread and written by a background listener, so an XP
award never waits on console or file I/O.

Every record carries the operation context bound with `LogContext`
(user, entity, component, operation and a short correlation id), which lets
one award be followed from the service down into the domain model.

Output
------
- Console: JSON in production or when LOG_JSON is set, otherwise plain text
  (colored on a TTY).
- Optional daily rotating JSON file under LOGS_DIR when LOG_TO_FILE is on.

Nothing here runs at import time; the host application calls
`setup_logging()` once and `shutdown_logging()` on exit.
"""

from __future__ import annotations

import json
import logging
import queue
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import QueueHandler, QueueListener, TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from projekt_l.core.config.config import Config

CONTEXT_FIELDS = ("user_id", "entity_id", "correlation_id", "component", "operation")
UNSET = "N/A"

_INITIALIZED_FLAG = "_projekt_l_logging_initialized"

_log_context: ContextVar[Mapping[str, Any]] = ContextVar("projekt_l_log_context", default={})
_listener: Optional[QueueListener] = None


@dataclass(frozen=True)
class LoggerConfig:
    """Resolved logging settings; build one from Config with `from_config()`."""

    level: int = logging.INFO
    use_json: bool = False
    use_colors: bool = False
    log_file: Optional[Path] = None
    queue_max_size: int = 10_000

    console_format: str = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def from_config(cls) -> "LoggerConfig":
        Config.validate()
        use_json = Config.is_production() if Config.LOG_JSON is None else bool(Config.LOG_JSON)
        log_file = None
        if Config.LOG_TO_FILE:
            log_file = Path(Config.LOGS_DIR).resolve() / "projekt_l.json.log"

        return cls(
            level=getattr(logging, str(Config.LOG_LEVEL).upper(), logging.INFO),
            use_json=use_json,
            use_colors=not use_json and bool(Config.LOG_COLORS) and sys.stdout.isatty(),
            log_file=log_file,
        )


# ============================================================================
# Filters & Formatters
# ============================================================================


class ContextFilter(logging.Filter):
    """Copy the bound operation context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context = _log_context.get()
        for field in CONTEXT_FIELDS:
            setattr(record, field, context.get(field) or UNSET)
        if record.component == UNSET:
            record.component = record.name.split(".", 1)[0]
        return True


class ColoredFormatter(logging.Formatter):
    LEVEL_COLORS: Dict[int, str] = {
        logging.DEBUG: "\033[90m",
        logging.INFO: "\033[94m",
        logging.WARNING: "\033[93m",
        logging.ERROR: "\033[91m",
        logging.CRITICAL: "\033[1;91m",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        return f"{color}{text}\033[0m" if color else text


# Attributes every LogRecord has; anything else on a record came from `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record: fixed fields, bound context, then `extra`."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        payload.update(
            (field, getattr(record, field))
            for field in CONTEXT_FIELDS
            if getattr(record, field, None) not in (None, UNSET)
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in CONTEXT_FIELDS and not key.startswith("_")
        }
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, ensure_ascii=False, default=str)


class _DroppingQueueHandler(QueueHandler):
    """Never block the caller: a full queue drops the record."""

    def enqueue(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        try:
            self.queue.put_nowait(record)
        except queue.Full:
            sys.stderr.write("Projekt L logging queue full; dropping log record.\n")


# ============================================================================
# Setup / Teardown
# ============================================================================


def _output_handlers(settings: LoggerConfig) -> List[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    if settings.use_json:
        console.setFormatter(JSONFormatter())
    else:
        formatter_cls = ColoredFormatter if settings.use_colors else logging.Formatter
        console.setFormatter(formatter_cls(fmt=settings.console_format, datefmt=settings.date_format))
    handlers: List[logging.Handler] = [console]

    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        daily = TimedRotatingFileHandler(
            filename=str(settings.log_file),
            when="midnight",
            backupCount=1,
            encoding="utf-8",
            utc=True,
        )
        daily.setFormatter(JSONFormatter())
        handlers.append(daily)

    for handler in handlers:
        handler.setLevel(settings.level)
    return handlers


def setup_logging(settings: Optional[LoggerConfig] = None) -> None:
    """
    Route the root logger through the queue.

    Later calls are no-ops until `shutdown_logging()` runs.
    """
    global _listener

    root = logging.getLogger()
    if getattr(root, _INITIALIZED_FLAG, False):
        return

    Config.validate()
    settings = settings or LoggerConfig.from_config()

    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(settings.queue_max_size)
    _listener = QueueListener(log_queue, *_output_handlers(settings), respect_handler_level=True)
    _listener.start()

    queue_handler = _DroppingQueueHandler(log_queue)
    queue_handler.setLevel(settings.level)
    # Context lives in ContextVars of the calling thread, so capture it before queuing.
    queue_handler.addFilter(ContextFilter())

    root.handlers.clear()
    root.setLevel(settings.level)
    root.addHandler(queue_handler)
    setattr(root, _INITIALIZED_FLAG, True)

    logging.getLogger(__name__).info(
        "Logging initialized",
        extra={
            "environment": Config.ENVIRONMENT,
            "log_level": logging.getLevelName(settings.level),
            "json": settings.use_json,
            "file": str(settings.log_file) if settings.log_file else None,
        },
    )


def shutdown_logging() -> None:
    """Flush the queue and detach every root handler."""
    global _listener

    root = logging.getLogger()
    if not getattr(root, _INITIALIZED_FLAG, False):
        return

    logging.getLogger(__name__).info("Shutting down logging subsystem")
    if _listener is not None:
        _listener.stop()
        for handler in _listener.handlers:
            handler.close()
        _listener = None

    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    setattr(root, _INITIALIZED_FLAG, False)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ============================================================================
# Operation Context
# ============================================================================


class LogContext:
    """
    Bind operation context to every record logged inside the block.

    >>> with LogContext(user_id="u-1", entity_id="skill:running", operation="apply_event"):
    ...     logger.info("XP awarded")
    """

    def __init__(
        self,
        user_id: Optional[Any] = None,
        entity_id: Optional[Any] = None,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        self.context: Dict[str, Any] = {
            "user_id": UNSET if user_id is None else str(user_id),
            "entity_id": UNSET if entity_id is None else str(entity_id),
            "component": component,
            "operation": operation,
            "correlation_id": correlation_id or uuid.uuid4().hex[:8],
            **extra,
        }
        self._token: Optional[Token[Mapping[str, Any]]] = None

    def __enter__(self) -> "LogContext":
        self._token = _log_context.set(self.context)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get())


def clear_log_context() -> None:
    _log_context.set({})
