"""Command line interface for portal-harness."""

from __future__ import annotations

import json
import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from .config import load_config
from .errors import ConfigurationError, HarnessError
from .factory import build_reporter, build_session_manager, build_waiter
from .models import StepStatus
from .pages.base import BasePage

app = typer.Typer(help="Admin portal UI test harness")


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Admin portal UI harness. ``--verbose`` switches harness logging to DEBUG."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@app.command()
def version() -> None:
    """Show the installed portal-harness version."""

    try:
        installed = get_version("portal-harness")
    except PackageNotFoundError:  # pragma: no cover
        installed = "unknown (not installed)"
    typer.echo(installed)


ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to YAML configuration."),
]
EnvFileOption = Annotated[
    Optional[Path],
    typer.Option("--env-file", help="Path to an .env file with default configuration values."),
]


def _overrides(
    base_url: Optional[str], browser: Optional[str], headless: Optional[bool]
) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if base_url:
        overrides["base_url"] = base_url
    if browser is not None or headless is not None:
        overrides.setdefault("browser", {})
        if browser is not None:
            overrides["browser"]["name"] = browser
        if headless is not None:
            overrides["browser"]["headless"] = headless
    return overrides


@app.command("show-config")
def show_config(
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
) -> None:
    """Print the resolved configuration with credentials masked."""

    try:
        config = load_config(config_path, env_file=env_file)
    except HarnessError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    data = config.model_dump(mode="json")
    if data["credentials"].get("password"):
        data["credentials"]["password"] = "********"
    typer.echo(json.dumps(data, indent=2))


@app.command()
def smoke(
    config_path: ConfigOption = None,
    env_file: EnvFileOption = None,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", help="Override the portal base URL."),
    ] = None,
    browser: Annotated[
        Optional[str],
        typer.Option("--browser", help="Browser to launch (chromium, firefox, webkit, ...)."),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
    ] = None,
    selector: Annotated[
        str,
        typer.Option("--selector", help="Element that must become visible on the start page."),
    ] = "#email",
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Seconds to wait for the selector."),
    ] = None,
) -> None:
    """Open the portal in a fresh session and wait for an element to render."""

    try:
        config = load_config(
            config_path, env_file=env_file, **_overrides(base_url, browser, headless)
        )
    except HarnessError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    if not config.base_url:
        typer.echo("Error: base_url is not configured", err=True)
        raise typer.Exit(code=2)

    reporter = build_reporter(config, console=True)
    manager = build_session_manager(config, reporter)
    waiter = build_waiter(config, reporter)
    try:
        with manager.session("smoke") as session:
            BasePage(session, waiter, config.base_url).navigate_to()
            waiter.visible(session, selector, timeout)
        reporter.record_step_outcome("smoke", StepStatus.PASS, f"{selector} visible")
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    except HarnessError as exc:
        reporter.record_step_outcome("smoke", StepStatus.FAIL, str(exc))
        raise typer.Exit(code=1) from exc
    finally:
        reporter.close()
    typer.echo("Smoke check passed.")


if __name__ == "__main__":
    app()
