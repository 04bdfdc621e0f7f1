"""Per-browser launch settings.

Each :class:`~portal_harness.models.BrowserKind` has exactly one arm in
``_LAUNCH_ARMS``; adding a browser means adding an enum member and an arm.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..config import BrowserConfig
from ..errors import ConfigurationError
from ..models import BrowserKind

LOGGER = logging.getLogger(__name__)

CHROMIUM_ARGS = (
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-notifications",
    "--disable-popup-blocking",
    "--start-maximized",
)

FIREFOX_PREFS = {
    "dom.webnotifications.enabled": False,
    "dom.push.enabled": False,
    "permissions.default.desktop-notification": 2,
}


@dataclass(frozen=True)
class LaunchPlan:
    """Everything needed to start one browser session."""

    kind: BrowserKind
    engine: str
    launch_kwargs: dict[str, Any] = field(default_factory=dict)
    context_kwargs: dict[str, Any] = field(default_factory=dict)
    default_timeout_ms: float = 10_000

    @property
    def headless(self) -> bool:
        return bool(self.launch_kwargs.get("headless", False))


def _viewport(config: BrowserConfig) -> dict[str, int]:
    return {"width": config.viewport_width, "height": config.viewport_height}


def _chromium_family(
    config: BrowserConfig, channel: Optional[str] = None
) -> tuple[dict[str, Any], dict[str, Any]]:
    launch_kwargs: dict[str, Any] = {"headless": config.headless, "args": list(CHROMIUM_ARGS)}
    if channel:
        launch_kwargs["channel"] = channel
    if config.headless:
        # --start-maximized has no effect without a window
        context_kwargs: dict[str, Any] = {"viewport": _viewport(config)}
    else:
        context_kwargs = {"no_viewport": True}
    return launch_kwargs, context_kwargs


def _chromium(config: BrowserConfig) -> tuple[str, dict[str, Any], dict[str, Any]]:
    return ("chromium", *_chromium_family(config))


def _chrome(config: BrowserConfig) -> tuple[str, dict[str, Any], dict[str, Any]]:
    return ("chromium", *_chromium_family(config, channel="chrome"))


def _edge(config: BrowserConfig) -> tuple[str, dict[str, Any], dict[str, Any]]:
    return ("chromium", *_chromium_family(config, channel="msedge"))


def _firefox(config: BrowserConfig) -> tuple[str, dict[str, Any], dict[str, Any]]:
    launch_kwargs = {"headless": config.headless, "firefox_user_prefs": dict(FIREFOX_PREFS)}
    return "firefox", launch_kwargs, {"viewport": _viewport(config)}


def _webkit(config: BrowserConfig) -> tuple[str, dict[str, Any], dict[str, Any]]:
    return "webkit", {"headless": config.headless}, {"viewport": _viewport(config)}


def _safari(config: BrowserConfig) -> tuple[str, dict[str, Any], dict[str, Any]]:
    if config.headless:
        LOGGER.info("Safari sessions cannot run headless; ignoring the headless flag")
    return "webkit", {"headless": False}, {"viewport": _viewport(config)}


_LAUNCH_ARMS: dict[
    BrowserKind, Callable[[BrowserConfig], tuple[str, dict[str, Any], dict[str, Any]]]
] = {
    BrowserKind.CHROMIUM: _chromium,
    BrowserKind.CHROME: _chrome,
    BrowserKind.EDGE: _edge,
    BrowserKind.FIREFOX: _firefox,
    BrowserKind.WEBKIT: _webkit,
    BrowserKind.SAFARI: _safari,
}


def build_launch_plan(config: BrowserConfig, *, base_url: Optional[str] = None) -> LaunchPlan:
    """Resolve ``config`` into a :class:`LaunchPlan` without starting anything.

    Raises :class:`ConfigurationError` for an unsupported browser name.
    """

    kind = BrowserKind.parse(config.name)
    arm = _LAUNCH_ARMS.get(kind)
    if arm is None:
        raise ConfigurationError(f"No launcher registered for browser {kind.value!r}")
    engine, launch_kwargs, context_kwargs = arm(config)
    if base_url:
        context_kwargs["base_url"] = base_url
    return LaunchPlan(
        kind=kind,
        engine=engine,
        launch_kwargs=launch_kwargs,
        context_kwargs=context_kwargs,
        default_timeout_ms=config.implicit_wait * 1000,
    )
