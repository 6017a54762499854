from __future__ import annotations

import contextvars
import json
import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from types import TracebackType
from typing import Any, Callable

from consultadesk.app.common.log_redaction import redact_text, redact_value

_RUN_ID: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="-")
_VISIT_ID: contextvars.ContextVar[str] = contextvars.ContextVar("visit_id", default="-")
_SOFT_KEY = "is_soft_crash"
_FATAL_KEY = "is_fatal_crash"


class _ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = _RUN_ID.get()
        record.visit_id = _VISIT_ID.get()
        return True


class _SoftCrashFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, _SOFT_KEY, False))


class _FatalCrashFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return bool(getattr(record, _FATAL_KEY, False) or record.levelno >= logging.CRITICAL)


class _ExcludeCrashFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return not bool(getattr(record, _SOFT_KEY, False) or getattr(record, _FATAL_KEY, False))


class _StructuredFormatter(logging.Formatter):
    def __init__(self, *, json_mode: bool) -> None:
        super().__init__()
        self._json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_text(record.getMessage()),
            "run_id": getattr(record, "run_id", "-"),
            "visit_id": getattr(record, "visit_id", "-"),
            "module": record.module,
            "func": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["traceback"] = redact_text(self.formatException(record.exc_info))
        if self._json_mode:
            return json.dumps(payload, ensure_ascii=False)
        return " ".join(f"{key}={value}" for key, value in payload.items())


class ContextLoggerAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = kwargs.get("extra", {})
        merged = {"run_id": _RUN_ID.get(), "visit_id": _VISIT_ID.get(), **extra}
        kwargs["extra"] = redact_value(merged)
        return redact_value(msg), kwargs


def _rotating_handler(path: Path, max_bytes: int, backups: int) -> RotatingFileHandler:
    return RotatingFileHandler(path, maxBytes=max_bytes, backupCount=backups, encoding="utf-8")


def configure_logging(app_name: str, log_dir: Path, level: str = "INFO", json: bool = True) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = _StructuredFormatter(json_mode=json)
    context_filter = _ContextFilter()

    console = logging.StreamHandler(stream=sys.__stderr__)
    app_file = _rotating_handler(log_dir / "app.log", 2_000_000, 5)
    for handler in (console, app_file):
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        handler.addFilter(_ExcludeCrashFilter())
        root_logger.addHandler(handler)

    soft_file = _rotating_handler(log_dir / "crash_soft.log", 1_000_000, 3)
    soft_file.setFormatter(formatter)
    soft_file.addFilter(context_filter)
    soft_file.addFilter(_SoftCrashFilter())
    root_logger.addHandler(soft_file)

    fatal_file = _rotating_handler(log_dir / "crash_fatal.log", 1_000_000, 3)
    fatal_file.setFormatter(formatter)
    fatal_file.addFilter(context_filter)
    fatal_file.addFilter(_FatalCrashFilter())
    root_logger.addHandler(fatal_file)

    logging.captureWarnings(True)
    get_logger(__name__).info("logging_configured app=%s", app_name)


def get_logger(name: str) -> logging.LoggerAdapter:
    return ContextLoggerAdapter(logging.getLogger(name), {})


def set_run_context(run_id: str) -> None:
    _RUN_ID.set(run_id)


def set_visit_context(visit_id: str | None) -> None:
    """Asocia las trazas siguientes a la visita en curso ("-" sin visita)."""
    _VISIT_ID.set(visit_id or "-")


def log_soft_exception(logger: logging.LoggerAdapter, exc: Exception, context: dict[str, Any]) -> None:
    logger.error(
        "soft_exception",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={_SOFT_KEY: True, "context": context},
    )
    logger.warning(
        "soft_exception_operational error=%s",
        type(exc).__name__,
        extra={"context": context},
    )


ExceptionHandler = Callable[[type[BaseException], BaseException, TracebackType | None], None]


def fatal_exception_handler(logger: logging.LoggerAdapter) -> ExceptionHandler:
    def _handler(exc_type: type[BaseException], exc_value: BaseException, exc_traceback: TracebackType | None) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            if sys.__excepthook__:
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.critical(
            "unhandled_exception",
            exc_info=(exc_type, exc_value, exc_traceback),
            extra={_FATAL_KEY: True},
        )

    return _handler


def install_global_exception_hook(logger: logging.LoggerAdapter) -> None:
    handler = fatal_exception_handler(logger)
    sys.excepthook = handler

    def _thread_hook(args: threading.ExceptHookArgs) -> None:
        handler(args.exc_type, args.exc_value, args.exc_traceback)

    threading.excepthook = _thread_hook  # type: ignore[assignment]
