"""
Base page class for the admin portal page objects.

Every lookup goes through the :class:`~portal_harness.browser.waits.Waiter`,
so page objects never race the asynchronous rendering of the portal.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from playwright.sync_api import Error as PlaywrightError

from ..browser.base import BrowserSession
from ..browser.waits import Waiter
from ..errors import InteractionError, WaitTimeoutError

LOGGER = logging.getLogger(__name__)


class BasePage:
    """
    Common navigation, interaction and query helpers.

    Attributes:
        session: Browser session the page is driven through.
        waiter: Waiter used for every element lookup.
        base_url: Base URL of the portal; paths are resolved against it.
    """

    URL_PATH = ""

    def __init__(
        self, session: BrowserSession, waiter: Waiter, base_url: Optional[str] = None
    ) -> None:
        self.session = session
        self.waiter = waiter
        self.base_url = (base_url or "").rstrip("/")

    @property
    def page(self) -> Any:
        return self.session.page

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate_to(self, path: str = "") -> None:
        url = f"{self.base_url}{path}"
        LOGGER.debug("Navigating to %s", url)
        try:
            self.page.goto(url)
        except PlaywrightError as exc:
            raise InteractionError(f"Failed to open {url}: {exc}") from exc

    def open(self) -> "BasePage":
        self.navigate_to(self.URL_PATH)
        return self

    @property
    def current_url(self) -> str:
        return self.page.url

    # -------------------------------------------------------------------------
    # Interactions
    # -------------------------------------------------------------------------

    def click(self, selector: str, timeout: Optional[float] = None) -> None:
        element = self.waiter.clickable(self.session, selector, timeout)
        try:
            element.click()
        except PlaywrightError as exc:
            raise InteractionError(f"Failed to click {selector}: {exc}") from exc

    def type_into(self, selector: str, text: str, timeout: Optional[float] = None) -> None:
        """Clear the field matched by ``selector`` and type ``text``."""

        element = self.waiter.visible(self.session, selector, timeout)
        try:
            element.fill(text)
        except PlaywrightError as exc:
            raise InteractionError(f"Failed to type into {selector}: {exc}") from exc

    def select(self, selector: str, option: str, timeout: Optional[float] = None) -> None:
        element = self.waiter.visible(self.session, selector, timeout)
        try:
            element.select_option(label=option)
        except PlaywrightError as exc:
            raise InteractionError(f"Failed to select {option!r} in {selector}: {exc}") from exc

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def text_of(self, selector: str, timeout: Optional[float] = None) -> str:
        element = self.waiter.visible(self.session, selector, timeout)
        try:
            return element.inner_text().strip()
        except PlaywrightError as exc:
            raise InteractionError(f"Failed to read text of {selector}: {exc}") from exc

    def is_displayed(self, selector: str, timeout: Optional[float] = None) -> bool:
        """Whether ``selector`` becomes visible within ``timeout``.

        Only a wait timeout counts as "not displayed"; any other failure is
        raised to the caller.
        """

        try:
            self.waiter.visible(self.session, selector, timeout)
        except WaitTimeoutError:
            return False
        return True

    def count(self, selector: str) -> int:
        return self.page.locator(selector).count()

    def visible_count(self, selector: str, timeout: Optional[float] = None) -> int:
        """Number of rendered matches, or 0 if none render within ``timeout``."""

        try:
            return len(self.waiter.all_visible(self.session, selector, timeout))
        except WaitTimeoutError:
            return 0


def xpath_literal(value: str) -> str:
    """Quote ``value`` for use inside an XPath expression."""

    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"
