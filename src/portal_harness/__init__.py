"""Browser session lifecycle and explicit waits for admin portal UI tests."""

from .browser.waits import Waiter
from .config import ConfigProvider, HarnessConfig, load_config
from .errors import (
    ConfigMissingError,
    ConfigurationError,
    HarnessError,
    InteractionError,
    SessionLaunchError,
    WaitTimeoutError,
)
from .models import BrowserKind, WaitKind, WaitSpec
from .session_manager import SessionManager

__all__ = [
    "BrowserKind",
    "ConfigMissingError",
    "ConfigProvider",
    "ConfigurationError",
    "HarnessConfig",
    "HarnessError",
    "InteractionError",
    "SessionLaunchError",
    "SessionManager",
    "WaitKind",
    "WaitSpec",
    "WaitTimeoutError",
    "Waiter",
    "load_config",
]
