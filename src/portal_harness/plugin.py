"""
pytest plugin wiring the harness into test runs.

Provides session-scoped configuration, reporting and session management,
and a function-scoped ``browser_session`` that is always released, even when
the test body fails.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any, Optional

import pytest

from .browser.base import BrowserSession
from .browser.waits import Waiter
from .config import ConfigProvider, HarnessConfig, load_config
from .errors import HarnessError
from .factory import build_reporter, build_session_manager, build_waiter
from .models import ReportLevel, StepStatus
from .pages import AttendancePage, BasePage, DashboardPage, LoginPage, ProjectsPage, WorkersPage
from .reporting import CompositeReporter, Reporter
from .screenshots import capture_failure
from .session_manager import SessionManager, current_context_id


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("portal-harness", "admin portal UI harness")
    group.addoption(
        "--harness-config",
        action="store",
        default=None,
        help="Path to the harness YAML configuration.",
    )
    group.addoption(
        "--harness-env-file",
        action="store",
        default=None,
        help="Path to an .env file with harness settings.",
    )
    group.addoption(
        "--harness-browser",
        action="store",
        default=None,
        help="Browser to launch (chromium, chrome, edge, firefox, webkit, safari).",
    )
    group.addoption(
        "--harness-headless",
        action="store_true",
        default=None,
        help="Run browsers headless regardless of configuration.",
    )


def option_overrides(browser: Optional[str], headless: Optional[bool]) -> dict[str, Any]:
    """Translate command line options into ``load_config`` overrides."""

    browser_overrides: dict[str, Any] = {}
    if browser:
        browser_overrides["name"] = browser
    if headless:
        browser_overrides["headless"] = True
    return {"browser": browser_overrides} if browser_overrides else {}


def _path_option(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


# -----------------------------------------------------------------------------
# Run-wide fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def harness_config(pytestconfig: pytest.Config) -> HarnessConfig:
    """Configuration loaded once for the whole run; a load failure aborts it."""
    overrides = option_overrides(
        pytestconfig.getoption("--harness-browser"),
        pytestconfig.getoption("--harness-headless"),
    )
    return load_config(
        _path_option(pytestconfig.getoption("--harness-config")),
        env_file=_path_option(pytestconfig.getoption("--harness-env-file")),
        **overrides,
    )


@pytest.fixture(scope="session")
def config_provider(harness_config: HarnessConfig) -> ConfigProvider:
    return ConfigProvider(harness_config)


@pytest.fixture(scope="session")
def harness_reporter(harness_config: HarnessConfig) -> Generator[CompositeReporter, None, None]:
    reporter = build_reporter(harness_config)
    yield reporter
    reporter.close()


@pytest.fixture(scope="session")
def session_manager(
    harness_config: HarnessConfig, harness_reporter: CompositeReporter
) -> Generator[SessionManager, None, None]:
    manager = build_session_manager(harness_config, harness_reporter)
    yield manager
    manager.release_all()


@pytest.fixture(scope="session")
def waiter(harness_config: HarnessConfig, harness_reporter: CompositeReporter) -> Waiter:
    return build_waiter(harness_config, harness_reporter)


# -----------------------------------------------------------------------------
# Per-test fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def browser_session(
    request: pytest.FixtureRequest,
    session_manager: SessionManager,
    waiter: Waiter,
    harness_config: HarnessConfig,
    harness_reporter: CompositeReporter,
) -> Generator[BrowserSession, None, None]:
    """A fresh browser for one test, opened on the portal base URL when configured."""
    context_id = f"{request.node.name}@{current_context_id()}"
    harness_reporter.record(
        ReportLevel.INFO, f"Starting test: {request.node.nodeid}", context_id=context_id
    )
    with session_manager.session(context_id) as session:
        if harness_config.base_url:
            try:
                BasePage(session, waiter, harness_config.base_url).navigate_to()
            except HarnessError as exc:
                # the session is released before pytest reports the setup error
                record_failure(
                    harness_reporter, harness_config, session, request.node, f"setup: {exc}"
                )
                raise
        yield session


@pytest.fixture
def login_page(browser_session: BrowserSession, waiter: Waiter, harness_config: HarnessConfig):
    return LoginPage(browser_session, waiter, harness_config.base_url)


@pytest.fixture
def dashboard_page(
    browser_session: BrowserSession, waiter: Waiter, harness_config: HarnessConfig
):
    return DashboardPage(browser_session, waiter, harness_config.base_url)


@pytest.fixture
def workers_page(browser_session: BrowserSession, waiter: Waiter, harness_config: HarnessConfig):
    return WorkersPage(browser_session, waiter, harness_config.base_url)


@pytest.fixture
def projects_page(
    browser_session: BrowserSession, waiter: Waiter, harness_config: HarnessConfig
):
    return ProjectsPage(browser_session, waiter, harness_config.base_url)


@pytest.fixture
def attendance_page(
    browser_session: BrowserSession, waiter: Waiter, harness_config: HarnessConfig
):
    return AttendancePage(browser_session, waiter, harness_config.base_url)


@pytest.fixture
def logged_in(
    login_page: LoginPage, config_provider: ConfigProvider
) -> DashboardPage:
    """Log in with the configured admin credentials and land on the dashboard."""
    email, password = config_provider.credentials
    login_page.open()
    login_page.login(email, password)
    login_page.wait_for_dashboard()
    return DashboardPage(login_page.session, login_page.waiter, login_page.base_url)


# -----------------------------------------------------------------------------
# Outcome reporting and failure screenshots
# -----------------------------------------------------------------------------

_REPORT_STATUSES = {
    "passed": StepStatus.PASS,
    "failed": StepStatus.FAIL,
    "skipped": StepStatus.SKIP,
}


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo):
    """Record the outcome of browser tests and capture a screenshot on failure."""
    outcome = yield
    report = outcome.get_result()

    funcargs = getattr(item, "funcargs", {})
    session = funcargs.get("browser_session")
    reporter = funcargs.get("harness_reporter")
    if session is None or reporter is None:
        return
    if report.when != "call":
        return

    if report.failed:
        detail = str(call.excinfo.value) if call.excinfo else report.longreprtext
        record_failure(reporter, funcargs.get("harness_config"), session, item, detail)
        return
    reporter.record_step_outcome(
        item.nodeid, _REPORT_STATUSES[report.outcome], None, context_id=session.context_id
    )


def record_failure(
    reporter: Reporter,
    config: Optional[HarnessConfig],
    session: BrowserSession,
    item: pytest.Item,
    detail: str,
) -> None:
    """Capture a ``FAILED_`` screenshot and record a FAIL outcome for ``item``."""

    directory = config.artifacts.screenshot_dir if config else Path("test-output/screenshots")
    path = capture_failure(session, item.name, directory)
    if path is not None:
        detail = f"{detail} (screenshot: {path})"
    reporter.record_step_outcome(
        item.nodeid, StepStatus.FAIL, detail, context_id=session.context_id
    )
