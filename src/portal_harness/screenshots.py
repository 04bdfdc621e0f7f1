"""Screenshot capture for failed or noteworthy steps."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from .browser.base import BrowserSession

LOGGER = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def _safe_label(label: str) -> str:
    return _UNSAFE_CHARS.sub("_", label).strip("_") or "screenshot"


def capture(
    session: BrowserSession,
    label: str = "screenshot",
    directory: Path = Path("test-output/screenshots"),
    *,
    now: Optional[datetime] = None,
) -> Optional[Path]:
    """Save a timestamped screenshot and return its path, or ``None`` on failure."""

    timestamp = f"{now or datetime.now():%Y%m%d_%H%M%S}"
    path = Path(directory) / f"{_safe_label(label)}_{timestamp}.png"
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        session.screenshot(path)
    except Exception:
        LOGGER.exception("Failed to take screenshot %s", path)
        return None
    LOGGER.info("Screenshot saved: %s", path)
    return path


def capture_failure(
    session: BrowserSession,
    test_name: str,
    directory: Path = Path("test-output/screenshots"),
    *,
    now: Optional[datetime] = None,
) -> Optional[Path]:
    return capture(session, f"FAILED_{test_name}", directory, now=now)
