"""Browser session abstractions."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass
class BrowserState:
    """Snapshot of where a session currently is."""

    url: Optional[str] = None
    title: Optional[str] = None


class BrowserSession(ABC):
    """A live browser owned by exactly one execution context.

    Implementations are not thread-safe: only the owning context may drive
    the session.
    """

    def __init__(self, context_id: str) -> None:
        self.context_id = context_id
        self.session_id = uuid.uuid4().hex

    @abstractmethod
    def start(self) -> None:
        """Launch the browser. Raises ``SessionLaunchError`` on failure."""

    @abstractmethod
    def stop(self) -> None:
        """Terminate the browser. Calling it more than once is a no-op."""

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Whether the browser is running and usable."""

    @property
    @abstractmethod
    def page(self) -> Any:
        """The page interactions and waits are issued against."""

    @abstractmethod
    def screenshot(self, path: Path) -> bytes:
        """Write a PNG screenshot to ``path`` and return its bytes."""

    def snapshot(self) -> BrowserState:
        page = self.page
        return BrowserState(url=page.url, title=page.title())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(context_id={self.context_id!r}, "
            f"session_id={self.session_id!r}, open={self.is_open})"
        )
