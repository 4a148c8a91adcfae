"""Structured local logging, log readback, and crash hook setup."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any

from .config import config_root


_LOGGER_NAME = "glyphart"
LOG_FILE_NAME = "glyphart.log"
FAULT_FILE_NAME = "fault.log"
_EXTRA_FIELDS = ("event", "crash_id", "run_id", "duration_ms", "thread_name")

_installed_hooks: dict[str, Any] = {}


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    """One JSON object per line. Known ``extra`` fields are lifted to top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update({name: getattr(record, name) for name in _EXTRA_FIELDS if hasattr(record, name)})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(
    keep_files: int = 7,
    console: bool = True,
    level: int = logging.INFO,
    directory: Path | None = None,
) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    target = directory or log_dir()
    target.mkdir(parents=True, exist_ok=True)
    rotating = logging.handlers.TimedRotatingFileHandler(
        filename=str(target / LOG_FILE_NAME),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    rotating.setFormatter(JsonFormatter())
    logger.addHandler(rotating)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(console_handler)

    logger.info("logging configured keep_files=%s", keep_files, extra={"event": "logging_configured"})
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def read_log_events(directory: Path | None = None, prefix: str = "", limit: int = 200) -> list[dict[str, Any]]:
    """Return the newest structured events from the current log file, oldest first.

    Only lines carrying an ``event`` field that starts with ``prefix`` are kept.
    Lines that are not JSON objects (a torn final write, a foreign handler) are skipped.
    """
    path = (directory or log_dir()) / LOG_FILE_NAME
    if not path.exists():
        return []
    events: list[dict[str, Any]] = []
    with path.open("r", encoding="utf-8", errors="replace") as fh:
        for line in fh:
            try:
                row = json.loads(line)
            except json.JSONDecodeError:
                continue
            event = row.get("event") if isinstance(row, dict) else None
            if isinstance(event, str) and event.startswith(prefix):
                events.append(row)
    return events[-limit:] if limit > 0 else []


def _report_crash(logger: logging.Logger, event: str, exc_info: tuple, **extra: Any) -> str:
    crash_id = uuid.uuid4().hex
    logger.critical(
        "%s crash_id=%s",
        event.replace("_", " "),
        crash_id,
        exc_info=exc_info,
        extra={"event": event, "crash_id": crash_id, **extra},
    )
    return crash_id


def install_crash_hooks(directory: Path | None = None) -> Path:
    """Route uncaught exceptions to the log and dump hard faults to ``fault.log``.

    Calling it again replaces the previous installation. ``remove_crash_hooks``
    restores the interpreter hooks that were active before the first call.
    """
    logger = get_logger()
    if _installed_hooks:
        remove_crash_hooks()

    def _excepthook(exc_type, exc_value, exc_tb) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        _report_crash(logger, "uncaught_exception", (exc_type, exc_value, exc_tb))

    def _thread_excepthook(args: threading.ExceptHookArgs) -> None:
        _report_crash(
            logger,
            "thread_exception",
            (args.exc_type, args.exc_value, args.exc_traceback),
            thread_name=getattr(args.thread, "name", "?"),
        )

    fault_path = (directory or log_dir()) / FAULT_FILE_NAME
    fault_path.parent.mkdir(parents=True, exist_ok=True)
    fault_stream: IO[str] = fault_path.open("a", encoding="utf-8")

    _installed_hooks.update(
        excepthook=sys.excepthook,
        thread_excepthook=threading.excepthook,
        fault_stream=fault_stream,
    )
    sys.excepthook = _excepthook
    threading.excepthook = _thread_excepthook
    faulthandler.enable(file=fault_stream, all_threads=True)
    logger.info("crash hooks installed fault_log=%s", fault_path, extra={"event": "crash_hooks_installed"})
    return fault_path


def remove_crash_hooks() -> None:
    if not _installed_hooks:
        return
    faulthandler.disable()
    sys.excepthook = _installed_hooks.pop("excepthook")
    threading.excepthook = _installed_hooks.pop("thread_excepthook")
    _installed_hooks.pop("fault_stream").close()
