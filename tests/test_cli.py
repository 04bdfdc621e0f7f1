from __future__ import annotations

import json

from typer.testing import CliRunner

from portal_harness import cli
from portal_harness.cli import app
from portal_harness.config import HarnessConfig
from portal_harness.errors import ConfigurationError
from portal_harness.factory import build_session_manager
from stubs import StubPage, StubSession


def _config(tmp_path, **values) -> HarnessConfig:
    data = {
        "browser": {"name": "chromium", "headless": True, "explicit_wait": 0},
        "credentials": {"email": "admin@portal.test", "password": "hunter2"},
        "artifacts": {"log_dir": str(tmp_path / "logs")},
    }
    data.update(values)
    return HarnessConfig.model_validate(data)


def _install(monkeypatch, config: HarnessConfig, page: StubPage) -> dict[str, object]:
    state: dict[str, object] = {}

    def fake_load_config(path, *, env_file=None, **overrides):  # type: ignore[no-untyped-def]
        state["path"] = path
        state["env_file"] = env_file
        state["overrides"] = overrides
        return config

    def factory(plan, context_id):  # type: ignore[no-untyped-def]
        session = StubSession(context_id, page)
        state["session"] = session
        state["plan"] = plan
        return session

    monkeypatch.setattr(cli, "load_config", fake_load_config)
    monkeypatch.setattr(
        cli,
        "build_session_manager",
        lambda config, reporter: build_session_manager(config, reporter, session_factory=factory),
    )
    return state


def test_smoke_passes_when_selector_renders(monkeypatch, tmp_path):
    page = StubPage()
    page.add("#email")
    state = _install(monkeypatch, _config(tmp_path, base_url="http://portal.test"), page)

    result = CliRunner().invoke(
        app, ["smoke", "--browser", "firefox", "--headless", "--config", str(tmp_path / "c.yaml")]
    )

    assert result.exit_code == 0, result.output
    assert "Smoke check passed." in result.stdout
    assert state["overrides"] == {"browser": {"name": "firefox", "headless": True}}
    assert page.actions == [("goto", "http://portal.test")]
    assert state["session"].stop_calls == 1
    assert list((tmp_path / "logs").glob("test_execution_*.log"))


def test_smoke_fails_when_selector_never_renders(monkeypatch, tmp_path):
    page = StubPage()
    state = _install(monkeypatch, _config(tmp_path, base_url="http://portal.test"), page)

    result = CliRunner().invoke(app, ["smoke", "--selector", "#missing", "--timeout", "0"])

    assert result.exit_code == 1
    assert state["session"].stop_calls == 1


def test_smoke_requires_base_url(monkeypatch, tmp_path):
    _install(monkeypatch, _config(tmp_path), StubPage())

    result = CliRunner().invoke(app, ["smoke"])

    assert result.exit_code == 2
    assert "base_url is not configured" in result.output


def test_smoke_passes_base_url_override(monkeypatch, tmp_path):
    page = StubPage()
    page.add("#email")
    state = _install(monkeypatch, _config(tmp_path, base_url="http://override.test"), page)

    result = CliRunner().invoke(app, ["smoke", "--base-url", "http://override.test"])

    assert result.exit_code == 0, result.output
    assert state["overrides"] == {"base_url": "http://override.test"}


def test_configuration_error_exits_with_usage_code(monkeypatch):
    def broken_load_config(path, *, env_file=None, **overrides):  # type: ignore[no-untyped-def]
        raise ConfigurationError("Invalid configuration: browser.implicit_wait")

    monkeypatch.setattr(cli, "load_config", broken_load_config)

    result = CliRunner().invoke(app, ["show-config"])

    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_show_config_masks_password(monkeypatch, tmp_path):
    _install(monkeypatch, _config(tmp_path, base_url="http://portal.test"), StubPage())

    result = CliRunner().invoke(app, ["show-config"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["base_url"] == "http://portal.test"
    assert data["credentials"] == {"email": "admin@portal.test", "password": "********"}
    assert "hunter2" not in result.stdout


def test_smoke_rejects_unknown_browser_before_launch(monkeypatch, tmp_path):
    config = _config(tmp_path, base_url="http://portal.test", browser={"name": "netscape"})
    state = _install(monkeypatch, config, StubPage())

    result = CliRunner().invoke(app, ["smoke"])

    assert result.exit_code == 2
    assert "Unsupported browser" in result.output
    assert "session" not in state


def test_version_prints_installed_distribution(monkeypatch):
    seen = []

    def fake_get_version(name: str) -> str:
        seen.append(name)
        return "1.2.3"

    monkeypatch.setattr(cli, "get_version", fake_get_version)

    result = CliRunner().invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "1.2.3"
    assert seen == ["portal-harness"]
