"""Single-flight generation controller with atomic document publication."""

from __future__ import annotations

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable

from glyphart_renderer import ArtDocument, GlyphArtError, RawBitmap, RenderConfig, generate_art

from .logging_setup import get_logger


class GenerationState(str, Enum):
    IDLE = "Idle"
    QUEUED = "Queued"
    RUNNING = "Running"
    READY = "Ready"
    FAILED = "Failed"


class GenerationSuperseded(RuntimeError):
    """A newer request replaced this run before its result could be published."""


@dataclass
class GenerationStatus:
    state: GenerationState = GenerationState.IDLE
    runs_completed: int = 0
    runs_superseded: int = 0
    runs_failed: int = 0
    last_error: str | None = None
    last_duration_ms: float = 0.0
    last_run_id: int | None = None


class GenerationController:
    """Runs generation requests one at a time on a worker thread.

    The newest request always wins: anything submitted earlier that has not
    published yet fails with ``GenerationSuperseded``. ``document`` only ever
    changes to the complete result of the newest successful run.
    """

    def __init__(self, generator: Callable[[RawBitmap, RenderConfig], ArtDocument] | None = None) -> None:
        self._generate = generator or generate_art
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="glyphart-generation")
        self._lock = threading.RLock()
        self._status = GenerationStatus()
        self._document: ArtDocument | None = None
        self._latest_ticket = 0
        self._events: list[dict[str, Any]] = []
        self._logger = get_logger("generation")

    def __enter__(self) -> "GenerationController":
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    @property
    def status(self) -> GenerationStatus:
        with self._lock:
            return replace(self._status)

    @property
    def document(self) -> ArtDocument | None:
        with self._lock:
            return self._document

    def recent_events(self, limit: int = 200) -> list[dict[str, Any]]:
        with self._lock:
            return list(self._events[-limit:])

    def _log_event(self, event: str, **fields: Any) -> None:
        row = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "event": event,
            "state": self._status.state.value,
        }
        row.update(fields)
        self._events.append(row)
        if len(self._events) > 1000:
            self._events = self._events[-1000:]
        extra = {"event": event, "run_id": fields.get("run_id")}
        if "duration_ms" in fields:
            extra["duration_ms"] = fields["duration_ms"]
        self._logger.info("%s %s", event, " ".join(f"{k}={v}" for k, v in fields.items()), extra=extra)

    def submit(self, bitmap: RawBitmap, config: RenderConfig) -> Future[ArtDocument]:
        with self._lock:
            self._latest_ticket += 1
            ticket = self._latest_ticket
            self._status.state = GenerationState.QUEUED
            self._log_event("run_queued", run_id=ticket, target_width=config.target_width)
            return self._executor.submit(self._run, ticket, bitmap, config)

    def generate(self, bitmap: RawBitmap, config: RenderConfig, timeout: float | None = None) -> ArtDocument:
        return self.submit(bitmap, config).result(timeout=timeout)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def _supersede(self, ticket: int) -> GenerationSuperseded:
        self._status.runs_superseded += 1
        self._log_event("run_superseded", run_id=ticket, latest_run_id=self._latest_ticket)
        return GenerationSuperseded(f"run {ticket} superseded by run {self._latest_ticket}")

    def _run(self, ticket: int, bitmap: RawBitmap, config: RenderConfig) -> ArtDocument:
        with self._lock:
            if ticket != self._latest_ticket:
                raise self._supersede(ticket)
            self._status.state = GenerationState.RUNNING
            self._log_event("run_start", run_id=ticket)

        start = time.perf_counter()
        try:
            document = self._generate(bitmap, config)
        except Exception as exc:
            with self._lock:
                if ticket != self._latest_ticket:
                    raise self._supersede(ticket) from exc
                self._status.runs_failed += 1
                self._status.last_error = str(exc)
                self._status.last_run_id = ticket
                self._status.state = GenerationState.FAILED
                self._log_event(
                    "run_error",
                    run_id=ticket,
                    error=type(exc).__name__,
                    expected=isinstance(exc, GlyphArtError),
                    message=str(exc),
                )
            raise
        elapsed_ms = (time.perf_counter() - start) * 1000

        with self._lock:
            if ticket != self._latest_ticket:
                raise self._supersede(ticket)
            self._document = document
            self._status.state = GenerationState.READY
            self._status.runs_completed += 1
            self._status.last_error = None
            self._status.last_duration_ms = elapsed_ms
            self._status.last_run_id = ticket
            self._log_event(
                "run_ok",
                run_id=ticket,
                width=document.width,
                height=document.height,
                duration_ms=round(elapsed_ms, 1),
            )
        return document
