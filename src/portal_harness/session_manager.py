"""Per-execution-context browser session registry."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Callable, Optional

from .browser.base import BrowserSession
from .browser.launch import LaunchPlan, build_launch_plan
from .browser.playwright_session import build_session
from .config import BrowserConfig
from .errors import SessionLaunchError
from .models import ReportLevel
from .reporting import NullReporter, Reporter

LOGGER = logging.getLogger(__name__)

SessionFactory = Callable[[LaunchPlan, str], BrowserSession]


def current_context_id() -> str:
    """Identity of the calling execution context (the current thread)."""

    thread = threading.current_thread()
    return f"{thread.name}-{thread.ident}"


class SessionManager:
    """Create, hand out and tear down one browser session per execution context.

    Only the owning context reads or writes its own binding; the lock guards
    the shared mapping itself, never a browser launch or shutdown.
    """

    def __init__(
        self,
        config: BrowserConfig,
        *,
        base_url: Optional[str] = None,
        session_factory: SessionFactory = build_session,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self._config = config
        self._base_url = base_url
        self._session_factory = session_factory
        self._reporter = reporter or NullReporter()
        self._sessions: dict[str, BrowserSession] = {}
        self._lock = threading.Lock()

    def acquire(self, context_id: Optional[str] = None) -> BrowserSession:
        """Return the session bound to ``context_id``, launching one if needed."""

        context_id = context_id or current_context_id()
        with self._lock:
            existing = self._sessions.get(context_id)
        if existing is not None:
            if existing.is_open:
                return existing
            LOGGER.warning(
                "Session %s for context %s is no longer open; replacing it",
                existing.session_id,
                context_id,
            )
            self._discard(context_id, existing)

        plan = build_launch_plan(self._config, base_url=self._base_url)
        session = self._session_factory(plan, context_id)
        try:
            session.start()
        except SessionLaunchError:
            self._report(
                ReportLevel.ERROR,
                f"Failed to launch {plan.kind.value} session",
                context_id=context_id,
            )
            raise
        except Exception as exc:
            self._report(
                ReportLevel.ERROR,
                f"Failed to launch {plan.kind.value} session",
                context_id=context_id,
            )
            raise SessionLaunchError(
                f"Failed to launch {plan.kind.value} browser: {exc}"
            ) from exc

        with self._lock:
            self._sessions[context_id] = session
        self._report(
            ReportLevel.INFO,
            f"Session {session.session_id} created ({plan.kind.value}, "
            f"headless={plan.headless})",
            context_id=context_id,
        )
        return session

    def release(self, context_id: Optional[str] = None) -> None:
        """Stop and unbind the session for ``context_id``; no-op if there is none."""

        context_id = context_id or current_context_id()
        with self._lock:
            session = self._sessions.pop(context_id, None)
        if session is None:
            return
        try:
            session.stop()
        finally:
            self._report(
                ReportLevel.INFO,
                f"Session {session.session_id} destroyed",
                context_id=context_id,
            )

    def current(self, context_id: Optional[str] = None) -> Optional[BrowserSession]:
        with self._lock:
            return self._sessions.get(context_id or current_context_id())

    def active_contexts(self) -> list[str]:
        with self._lock:
            return list(self._sessions)

    @contextmanager
    def session(self, context_id: Optional[str] = None) -> Iterator[BrowserSession]:
        """Acquire a session for the duration of a block, releasing it on exit."""

        context_id = context_id or current_context_id()
        browser_session = self.acquire(context_id)
        try:
            yield browser_session
        finally:
            self.release(context_id)

    def release_all(self) -> None:
        """Release every bound session, e.g. at process shutdown.

        Sessions created on other threads are stopped from the calling thread;
        call this only once those threads are done.
        """

        errors: list[BaseException] = []
        for context_id in self.active_contexts():
            try:
                self.release(context_id)
            except Exception as exc:
                LOGGER.exception("Failed to release session for context %s", context_id)
                errors.append(exc)
        if errors:
            raise errors[0]

    def _discard(self, context_id: str, session: BrowserSession) -> None:
        with self._lock:
            if self._sessions.get(context_id) is session:
                del self._sessions[context_id]
        try:
            session.stop()
        except Exception:
            LOGGER.warning(
                "Error while stopping dead session %s", session.session_id, exc_info=True
            )

    def _report(self, level: ReportLevel, message: str, *, context_id: str) -> None:
        """Record a lifecycle milestone; a failing sink never undoes a launch or teardown."""

        try:
            self._reporter.record(level, message, context_id=context_id)
        except Exception:
            LOGGER.warning("Failed to report %r for context %s", message, context_id, exc_info=True)
