"""Factories for constructing harness components from configuration."""

from __future__ import annotations

from typing import Optional

from .browser.waits import Waiter
from .config import HarnessConfig
from .reporting import CompositeReporter, ConsoleReporter, FileReporter, LoggingReporter, Reporter
from .session_manager import SessionFactory, SessionManager


def build_reporter(
    config: HarnessConfig, *, console: bool = False, log_file: bool = True
) -> CompositeReporter:
    reporters: list[Reporter] = [LoggingReporter()]
    if log_file:
        reporters.append(FileReporter(config.artifacts.log_dir))
    if console:
        reporters.append(ConsoleReporter())
    return CompositeReporter(reporters)


def build_session_manager(
    config: HarnessConfig,
    reporter: Optional[Reporter] = None,
    *,
    session_factory: Optional[SessionFactory] = None,
) -> SessionManager:
    kwargs: dict[str, SessionFactory] = {}
    if session_factory is not None:
        kwargs["session_factory"] = session_factory
    return SessionManager(
        config.browser,
        base_url=config.base_url,
        reporter=reporter,
        **kwargs,
    )


def build_waiter(config: HarnessConfig, reporter: Optional[Reporter] = None) -> Waiter:
    return Waiter(
        timeout=config.browser.explicit_wait,
        poll_interval=config.browser.poll_interval,
        reporter=reporter,
    )
