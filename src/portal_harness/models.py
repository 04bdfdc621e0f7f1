"""Shared models used across the portal harness."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import ConfigurationError


class BrowserKind(str, enum.Enum):
    """Browsers a session can be launched with."""

    CHROMIUM = "chromium"
    CHROME = "chrome"
    EDGE = "edge"
    FIREFOX = "firefox"
    WEBKIT = "webkit"
    SAFARI = "safari"

    @classmethod
    def parse(cls, value: "str | BrowserKind") -> "BrowserKind":
        if isinstance(value, BrowserKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ", ".join(kind.value for kind in cls)
            raise ConfigurationError(
                f"Unsupported browser: {value!r} (expected one of: {supported})"
            ) from None


class WaitKind(str, enum.Enum):
    """Conditions understood by the waiter."""

    VISIBLE = "visible"
    CLICKABLE = "clickable"
    PRESENT = "present"
    INVISIBLE = "invisible"
    ALL_VISIBLE = "all_visible"
    TEXT_CONTAINS = "text_contains"
    URL_CONTAINS = "url_contains"
    TITLE_CONTAINS = "title_contains"
    STALE = "stale"


_SELECTOR_KINDS = frozenset(
    {
        WaitKind.VISIBLE,
        WaitKind.CLICKABLE,
        WaitKind.PRESENT,
        WaitKind.INVISIBLE,
        WaitKind.ALL_VISIBLE,
        WaitKind.TEXT_CONTAINS,
    }
)
_EXPECTED_KINDS = frozenset(
    {WaitKind.TEXT_CONTAINS, WaitKind.URL_CONTAINS, WaitKind.TITLE_CONTAINS}
)


@dataclass(frozen=True)
class WaitSpec:
    """A condition to poll for, plus the time allowed for it.

    ``target`` is a selector string for element conditions and an element
    handle for ``STALE``. A ``timeout`` of ``None`` means the waiter's default.
    """

    kind: WaitKind
    target: Any = None
    expected: Optional[str] = None
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        kind = WaitKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if kind in _SELECTOR_KINDS and not isinstance(self.target, str):
            raise ValueError(f"{kind.value} wait requires a selector string")
        if kind in _EXPECTED_KINDS and self.expected is None:
            raise ValueError(f"{kind.value} wait requires expected text")
        if kind == WaitKind.STALE and self.target is None:
            raise ValueError("stale wait requires an element handle")
        if self.timeout is not None and self.timeout < 0:
            raise ValueError("timeout must not be negative")

    def describe_target(self) -> Optional[str]:
        if self.target is None:
            return None
        if isinstance(self.target, str):
            return self.target
        return repr(self.target)


class ReportLevel(str, enum.Enum):
    """Severity of a reported message."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class StepStatus(str, enum.Enum):
    """Outcome of a test step."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    INFO = "info"


class StepOutcome(BaseModel):
    """Result of a single named step, as passed to reporters."""

    model_config = ConfigDict(frozen=True)

    name: str
    status: StepStatus
    detail: Optional[str] = None
    context_id: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
