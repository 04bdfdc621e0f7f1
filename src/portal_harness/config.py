"""Configuration models and provider for the portal harness."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigMissingError, ConfigurationError
from .models import BrowserKind

_MISSING: Any = object()


class BrowserConfig(BaseModel):
    """Settings for launching browser sessions."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default=BrowserKind.CHROMIUM.value)
    headless: bool = False
    viewport_width: int = 1920
    viewport_height: int = 1080
    implicit_wait: float = Field(
        default=10.0,
        ge=0,
        description="Default timeout (seconds) applied to every browser action.",
    )
    explicit_wait: float = Field(
        default=20.0,
        ge=0,
        description="Default timeout (seconds) for condition waits.",
    )
    poll_interval: float = Field(default=0.25, gt=0)


class CredentialsConfig(BaseModel):
    """Admin credentials used by login flows."""

    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    password: Optional[str] = None


class ArtifactsConfig(BaseModel):
    """Where screenshots and log files are written."""

    model_config = ConfigDict(frozen=True)

    screenshot_dir: Path = Path("test-output/screenshots")
    log_dir: Path = Path("test-output/logs")


class HarnessConfig(BaseSettings):
    """Top-level configuration for a test run."""

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_HARNESS_",
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        frozen=True,
    )

    base_url: Optional[str] = None
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    credentials: CredentialsConfig = Field(default_factory=CredentialsConfig)
    artifacts: ArtifactsConfig = Field(default_factory=ArtifactsConfig)


def load_config(
    path: Path | None = None,
    *,
    env_file: Path | None = None,
    **overrides: object,
) -> HarnessConfig:
    """Load configuration from an optional YAML file, the environment and overrides.

    Precedence, lowest first: environment and ``.env`` values, the YAML file,
    keyword overrides. Any failure is reported as :class:`ConfigurationError`.
    """

    data: dict[str, Any] = {}
    if path:
        try:
            data = yaml.safe_load(Path(path).read_text()) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"Failed to load configuration file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a mapping")
    if overrides:
        _deep_update(data, overrides)
    settings_kwargs: dict[str, object] = {}
    if env_file is not None:
        settings_kwargs["_env_file"] = env_file
    try:
        config = HarnessConfig(**data, **settings_kwargs)
        if not data:
            return config

        merged = config.model_dump(mode="python")
        _deep_update(merged, data)
        return HarnessConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


def _deep_update(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Fold ``updates`` into ``target`` so nested sections merge key by key.

    An override such as ``browser={"headless": True}`` keeps the configured
    browser name instead of replacing the whole ``browser`` section.
    """

    for key, value in updates.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            section = dict(current)
            _deep_update(section, value)
            target[key] = section
        else:
            target[key] = value


class ConfigProvider:
    """Read-only access to a loaded :class:`HarnessConfig`.

    Keys are dotted paths into the configuration, e.g. ``browser.name``.
    """

    def __init__(self, config: HarnessConfig) -> None:
        self._config = config
        self._values = config.model_dump(mode="python")

    @property
    def config(self) -> HarnessConfig:
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        value = self._lookup(key)
        if value is _MISSING or value is None:
            return default
        return value

    def require(self, key: str) -> Any:
        value = self._lookup(key)
        if value is _MISSING or value is None:
            raise ConfigMissingError(key)
        return value

    def _lookup(self, key: str) -> Any:
        node: Any = self._values
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return _MISSING
            node = node[part]
        return node

    @property
    def browser_kind(self) -> BrowserKind:
        return BrowserKind.parse(self._config.browser.name)

    @property
    def base_url(self) -> str:
        return self.require("base_url")

    @property
    def implicit_wait_seconds(self) -> float:
        return self._config.browser.implicit_wait

    @property
    def explicit_wait_seconds(self) -> float:
        return self._config.browser.explicit_wait

    @property
    def headless(self) -> bool:
        return self._config.browser.headless

    @property
    def credentials(self) -> tuple[str, str]:
        return self.require("credentials.email"), self.require("credentials.password")

    @property
    def screenshot_dir(self) -> Path:
        return self._config.artifacts.screenshot_dir

    @property
    def log_dir(self) -> Path:
        return self._config.artifacts.log_dir
