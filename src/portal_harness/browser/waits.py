"""Condition polling against a browser session."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from typing import Any, Callable, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from ..errors import InteractionError, WaitTimeoutError
from ..models import ReportLevel, WaitKind, WaitSpec
from ..reporting import NullReporter, Reporter
from .base import BrowserSession

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0
DEFAULT_POLL_INTERVAL = 0.25
# Upper bound for a single Playwright call made while probing.
PROBE_TIMEOUT_MS = 250
# Raised while the page is mid-navigation; the next poll sees the new document.
NAVIGATION_ERRORS = (
    "Execution context was destroyed",
    "Cannot find context with specified id",
    "frame was detached",
)

Probe = Callable[[Any, WaitSpec], Any]


def _probe_visible(page: Any, spec: WaitSpec) -> Any:
    locator = page.locator(spec.target).first
    return locator if locator.is_visible() else None


def _probe_clickable(page: Any, spec: WaitSpec) -> Any:
    locator = page.locator(spec.target).first
    if locator.is_visible() and locator.is_enabled(timeout=PROBE_TIMEOUT_MS):
        return locator
    return None


def _probe_present(page: Any, spec: WaitSpec) -> Any:
    locator = page.locator(spec.target)
    return locator.first if locator.count() > 0 else None


def _probe_invisible(page: Any, spec: WaitSpec) -> Any:
    return None if page.locator(spec.target).first.is_visible() else True


def _probe_all_visible(page: Any, spec: WaitSpec) -> Any:
    locator = page.locator(spec.target)
    count = locator.count()
    if count == 0:
        return None
    if all(locator.nth(index).is_visible() for index in range(count)):
        return locator.all()
    return None


def _probe_text_contains(page: Any, spec: WaitSpec) -> Any:
    locator = page.locator(spec.target)
    if locator.count() == 0:
        return None
    text = locator.first.inner_text(timeout=PROBE_TIMEOUT_MS)
    return True if spec.expected in text else None


def _probe_url_contains(page: Any, spec: WaitSpec) -> Any:
    return True if spec.expected in page.url else None


def _probe_title_contains(page: Any, spec: WaitSpec) -> Any:
    return True if spec.expected in page.title() else None


def _probe_stale(page: Any, spec: WaitSpec) -> Any:
    try:
        connected = spec.target.evaluate("node => node.isConnected")
    except PlaywrightError:
        # the handle's frame or context is gone
        return True
    return None if connected else True


_PROBES: dict[WaitKind, Probe] = {
    WaitKind.VISIBLE: _probe_visible,
    WaitKind.CLICKABLE: _probe_clickable,
    WaitKind.PRESENT: _probe_present,
    WaitKind.INVISIBLE: _probe_invisible,
    WaitKind.ALL_VISIBLE: _probe_all_visible,
    WaitKind.TEXT_CONTAINS: _probe_text_contains,
    WaitKind.URL_CONTAINS: _probe_url_contains,
    WaitKind.TITLE_CONTAINS: _probe_title_contains,
    WaitKind.STALE: _probe_stale,
}


class Waiter:
    """Poll a :class:`WaitSpec` against a session until it holds or times out.

    Waiting is purely observational: probes only read page state. A waiter
    holds no per-session state and may be shared across execution contexts.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        *,
        reporter: Optional[Reporter] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        self.timeout = timeout
        self.poll_interval = poll_interval
        self._reporter = reporter or NullReporter()
        self._clock = clock
        self._sleep = sleep

    def wait_for(self, session: BrowserSession, spec: WaitSpec) -> Any:
        """Return the value satisfying ``spec`` or raise :class:`WaitTimeoutError`.

        Element conditions return the matching locator (a list of locators for
        ``ALL_VISIBLE``); the remaining conditions return ``True``.
        """

        if spec.kind == WaitKind.STALE and hasattr(spec.target, "element_handle"):
            handle = self._pin(spec)
            if handle is None:
                return True
            spec = replace(spec, target=handle)
        probe = _PROBES[spec.kind]
        timeout = self.timeout if spec.timeout is None else spec.timeout
        page = session.page
        started = self._clock()
        deadline = started + timeout
        while True:
            result = self._evaluate(probe, page, spec)
            if result is not None:
                return result
            now = self._clock()
            if now >= deadline:
                elapsed = now - started
                error = WaitTimeoutError(
                    spec.kind.value,
                    spec.describe_target(),
                    timeout,
                    elapsed,
                    expected=spec.expected,
                )
                self._reporter.record(
                    ReportLevel.WARNING, str(error), context_id=session.context_id
                )
                raise error
            self._sleep(min(self.poll_interval, deadline - now))

    @staticmethod
    def _pin(spec: WaitSpec) -> Any:
        """Resolve a locator to the node it matches now, or ``None`` if it matches nothing.

        A locator re-queries on every call and would follow a re-rendered
        replacement node, so staleness is tracked on a fixed element handle.
        """

        try:
            return spec.target.element_handle(timeout=PROBE_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            return None
        except PlaywrightError as exc:
            raise InteractionError(
                f"Failed to resolve {spec.describe_target()} for stale wait: {exc}"
            ) from exc

    @staticmethod
    def _evaluate(probe: Probe, page: Any, spec: WaitSpec) -> Any:
        try:
            return probe(page, spec)
        except PlaywrightTimeoutError:
            return None
        except PlaywrightError as exc:
            if any(marker in str(exc) for marker in NAVIGATION_ERRORS):
                LOGGER.debug("Page navigating during %s wait: %s", spec.kind.value, exc)
                return None
            raise InteractionError(
                f"Failed to evaluate {spec.kind.value} condition "
                f"for {spec.describe_target()}: {exc}"
            ) from exc

    def pause_for(self, seconds: float) -> None:
        """Block unconditionally for ``seconds``.

        Only for situations with nothing observable to wait on, such as an
        animation settling. Prefer :meth:`wait_for`.
        """

        if seconds < 0:
            raise ValueError("seconds must not be negative")
        LOGGER.debug("Pausing for %.2fs without a wait condition", seconds)
        self._sleep(seconds)

    def visible(
        self, session: BrowserSession, selector: str, timeout: Optional[float] = None
    ) -> Any:
        return self.wait_for(session, WaitSpec(WaitKind.VISIBLE, selector, timeout=timeout))

    def clickable(
        self, session: BrowserSession, selector: str, timeout: Optional[float] = None
    ) -> Any:
        return self.wait_for(session, WaitSpec(WaitKind.CLICKABLE, selector, timeout=timeout))

    def present(
        self, session: BrowserSession, selector: str, timeout: Optional[float] = None
    ) -> Any:
        return self.wait_for(session, WaitSpec(WaitKind.PRESENT, selector, timeout=timeout))

    def invisible(
        self, session: BrowserSession, selector: str, timeout: Optional[float] = None
    ) -> bool:
        return self.wait_for(session, WaitSpec(WaitKind.INVISIBLE, selector, timeout=timeout))

    def all_visible(
        self, session: BrowserSession, selector: str, timeout: Optional[float] = None
    ) -> list[Any]:
        return self.wait_for(session, WaitSpec(WaitKind.ALL_VISIBLE, selector, timeout=timeout))

    def text_contains(
        self,
        session: BrowserSession,
        selector: str,
        text: str,
        timeout: Optional[float] = None,
    ) -> bool:
        spec = WaitSpec(WaitKind.TEXT_CONTAINS, selector, expected=text, timeout=timeout)
        return self.wait_for(session, spec)

    def url_contains(
        self, session: BrowserSession, fragment: str, timeout: Optional[float] = None
    ) -> bool:
        spec = WaitSpec(WaitKind.URL_CONTAINS, expected=fragment, timeout=timeout)
        return self.wait_for(session, spec)

    def title_contains(
        self, session: BrowserSession, fragment: str, timeout: Optional[float] = None
    ) -> bool:
        spec = WaitSpec(WaitKind.TITLE_CONTAINS, expected=fragment, timeout=timeout)
        return self.wait_for(session, spec)

    def stale(
        self, session: BrowserSession, element: Any, timeout: Optional[float] = None
    ) -> bool:
        """Wait until ``element`` (a locator from the element waits or a handle) is detached."""
        return self.wait_for(session, WaitSpec(WaitKind.STALE, element, timeout=timeout))
