"""Exception hierarchy for the portal harness."""

from __future__ import annotations

from typing import Optional


class HarnessError(RuntimeError):
    """Base class for every error raised by the harness."""


class ConfigurationError(HarnessError):
    """Raised when a configuration value is invalid or cannot be loaded."""


class ConfigMissingError(ConfigurationError):
    """Raised when a required configuration key has no value."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Configuration key '{key}' is not set")
        self.key = key


class SessionLaunchError(HarnessError):
    """Raised when the underlying browser process fails to start."""


class InteractionError(HarnessError):
    """Raised when an action fails on an element that was already located."""


class WaitTimeoutError(HarnessError):
    """Raised when a wait condition is not satisfied in the allotted time."""

    def __init__(
        self,
        kind: str,
        target: Optional[str],
        timeout: float,
        elapsed: float,
        expected: Optional[str] = None,
    ) -> None:
        detail = f"{kind}"
        if target:
            detail += f" [{target}]"
        if expected is not None:
            detail += f" expecting {expected!r}"
        super().__init__(
            f"Timed out after {elapsed:.2f}s (limit {timeout:.2f}s) waiting for {detail}"
        )
        self.kind = kind
        self.target = target
        self.expected = expected
        self.timeout = timeout
        self.elapsed = elapsed
