"""Reporting sinks for session lifecycle and test step outcomes."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, TextIO

from rich.console import Console

from .models import ReportLevel, StepOutcome, StepStatus

LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = {
    ReportLevel.DEBUG: logging.DEBUG,
    ReportLevel.INFO: logging.INFO,
    ReportLevel.WARNING: logging.WARNING,
    ReportLevel.ERROR: logging.ERROR,
}

_STATUS_LEVELS = {
    StepStatus.PASS: ReportLevel.INFO,
    StepStatus.INFO: ReportLevel.INFO,
    StepStatus.SKIP: ReportLevel.WARNING,
    StepStatus.FAIL: ReportLevel.ERROR,
}


def _format_outcome(outcome: StepOutcome) -> str:
    text = f"{outcome.status.value.upper()} {outcome.name}"
    if outcome.detail:
        text += f": {outcome.detail}"
    return text


class Reporter(ABC):
    """Sink for harness milestones.

    Implementations must accept calls from several execution contexts at once.
    """

    @abstractmethod
    def record(
        self, level: ReportLevel, message: str, *, context_id: Optional[str] = None
    ) -> None:
        """Record a free-form message."""

    @abstractmethod
    def record_outcome(self, outcome: StepOutcome) -> None:
        """Record the result of a named step."""

    def record_step_outcome(
        self,
        name: str,
        status: StepStatus,
        detail: Optional[str] = None,
        *,
        context_id: Optional[str] = None,
    ) -> StepOutcome:
        outcome = StepOutcome(
            name=name, status=StepStatus(status), detail=detail, context_id=context_id
        )
        self.record_outcome(outcome)
        return outcome


class NullReporter(Reporter):
    """Reporter that drops everything."""

    def record(
        self, level: ReportLevel, message: str, *, context_id: Optional[str] = None
    ) -> None:
        return

    def record_outcome(self, outcome: StepOutcome) -> None:
        return


class LoggingReporter(Reporter):
    """Forward reports to the standard ``logging`` module."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or LOGGER

    def record(
        self, level: ReportLevel, message: str, *, context_id: Optional[str] = None
    ) -> None:
        if context_id:
            message = f"[{context_id}] {message}"
        self._logger.log(_LOG_LEVELS[ReportLevel(level)], message)

    def record_outcome(self, outcome: StepOutcome) -> None:
        self.record(
            _STATUS_LEVELS[outcome.status], _format_outcome(outcome), context_id=outcome.context_id
        )


class ConsoleReporter(Reporter):
    """Print reports to the terminal using Rich."""

    _STYLES = {
        ReportLevel.DEBUG: "dim",
        ReportLevel.INFO: "cyan",
        ReportLevel.WARNING: "yellow",
        ReportLevel.ERROR: "red",
    }
    _STATUS_STYLES = {
        StepStatus.PASS: "green",
        StepStatus.FAIL: "red",
        StepStatus.SKIP: "yellow",
        StepStatus.INFO: "cyan",
    }

    def __init__(self, console: Optional[Console] = None) -> None:
        self._console = console or Console(stderr=True)
        self._lock = threading.Lock()

    def record(
        self, level: ReportLevel, message: str, *, context_id: Optional[str] = None
    ) -> None:
        level = ReportLevel(level)
        prefix = f"[{level.value.upper()}]"
        if context_id:
            prefix += f" [{context_id}]"
        with self._lock:
            self._console.print(f"{prefix} {message}", style=self._STYLES[level], markup=False)

    def record_outcome(self, outcome: StepOutcome) -> None:
        with self._lock:
            self._console.print(
                _format_outcome(outcome),
                style=self._STATUS_STYLES[outcome.status],
                markup=False,
            )


class FileReporter(Reporter):
    """Append timestamped lines to a per-run log file.

    Writes from every execution context go through one lock so lines never
    interleave.
    """

    def __init__(self, log_dir: Path, *, now: Optional[datetime] = None) -> None:
        started = now or datetime.now()
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        self.path = log_dir / f"test_execution_{started:%Y%m%d_%H%M%S}.log"
        self._lock = threading.Lock()
        self._handle: Optional[TextIO] = self.path.open("a", encoding="utf-8")

    def record(
        self, level: ReportLevel, message: str, *, context_id: Optional[str] = None
    ) -> None:
        self._write(ReportLevel(level).value.upper(), message, context_id)

    def record_outcome(self, outcome: StepOutcome) -> None:
        level = _STATUS_LEVELS[outcome.status]
        self._write(level.value.upper(), _format_outcome(outcome), outcome.context_id)

    def _write(self, level: str, message: str, context_id: Optional[str]) -> None:
        timestamp = f"{datetime.now():%Y-%m-%d %H:%M:%S}"
        context = f" [{context_id}]" if context_id else ""
        line = f"[{timestamp}] [{level}]{context} {message}\n"
        with self._lock:
            if self._handle is None:
                raise ValueError(f"Reporter for {self.path} is closed")
            self._handle.write(line)
            self._handle.flush()

    def close(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.close()
                self._handle = None


class CompositeReporter(Reporter):
    """Fan-out reporter that propagates records to several reporters."""

    def __init__(self, reporters: Iterable[Reporter]) -> None:
        self._reporters = list(reporters)

    def record(
        self, level: ReportLevel, message: str, *, context_id: Optional[str] = None
    ) -> None:
        for reporter in self._reporters:
            reporter.record(level, message, context_id=context_id)

    def record_outcome(self, outcome: StepOutcome) -> None:
        for reporter in self._reporters:
            reporter.record_outcome(outcome)

    def close(self) -> None:
        for reporter in self._reporters:
            close = getattr(reporter, "close", None)
            if close is not None:
                close()
