"""Playwright-powered browser session implementation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from playwright.sync_api import Error, sync_playwright

from ..errors import InteractionError, SessionLaunchError
from .base import BrowserSession
from .launch import LaunchPlan

LOGGER = logging.getLogger(__name__)


class PlaywrightBrowserSession(BrowserSession):
    """Browser session backed by Playwright's sync API.

    Playwright's sync objects are bound to the thread that created them, so a
    session must be started, used and stopped on one thread.
    """

    def __init__(self, plan: LaunchPlan, context_id: str) -> None:
        super().__init__(context_id)
        self._plan = plan
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    @property
    def plan(self) -> LaunchPlan:
        return self._plan

    def start(self) -> None:
        if self._page is not None:
            return
        LOGGER.debug(
            "Starting %s session %s for context %s",
            self._plan.kind.value,
            self.session_id,
            self.context_id,
        )
        try:
            self._playwright = sync_playwright().start()
            browser_type = getattr(self._playwright, self._plan.engine)
            self._browser = browser_type.launch(**self._plan.launch_kwargs)
            self._context = self._browser.new_context(**self._plan.context_kwargs)
            self._context.set_default_timeout(self._plan.default_timeout_ms)
            self._page = self._context.new_page()
        except Exception as exc:
            self._close_quietly()
            raise SessionLaunchError(
                f"Failed to launch {self._plan.kind.value} browser: {exc}"
            ) from exc

    def stop(self) -> None:
        if self._playwright is None:
            return
        LOGGER.debug("Stopping session %s for context %s", self.session_id, self.context_id)
        try:
            if self._context:
                self._context.close()
        finally:
            try:
                if self._browser:
                    self._browser.close()
            finally:
                self._playwright.stop()
                self._reset()

    @property
    def is_open(self) -> bool:
        return (
            self._page is not None
            and self._browser is not None
            and self._browser.is_connected()
            and not self._page.is_closed()
        )

    @property
    def page(self) -> Any:
        if self._page is None:
            raise InteractionError(f"Session {self.session_id} is not started")
        return self._page

    def screenshot(self, path: Path) -> bytes:
        try:
            return self.page.screenshot(path=str(path), full_page=True)
        except Error as exc:
            raise InteractionError(f"Failed to capture screenshot: {exc}") from exc

    def _close_quietly(self) -> None:
        """Release whatever a failed launch managed to create."""

        for resource in (self._context, self._browser):
            if resource is None:
                continue
            try:
                resource.close()
            except Exception:  # pragma: no cover - partial launch cleanup
                LOGGER.debug("Ignoring error while closing %r", resource, exc_info=True)
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except Exception:  # pragma: no cover - partial launch cleanup
                LOGGER.debug("Ignoring error while stopping Playwright", exc_info=True)
        self._reset()

    def _reset(self) -> None:
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None


def build_session(plan: LaunchPlan, context_id: str) -> PlaywrightBrowserSession:
    return PlaywrightBrowserSession(plan, context_id)
