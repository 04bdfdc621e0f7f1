import pytest
from playwright.sync_api import Error as PlaywrightError

from portal_harness.browser.waits import Waiter
from portal_harness.errors import InteractionError, WaitTimeoutError
from portal_harness.pages import AttendancePage, DashboardPage, LoginPage, ProjectsPage, WorkersPage
from portal_harness.pages.base import xpath_literal
from stubs import FakeClock, StubElement, StubPage, StubSession

BASE_URL = "http://portal.test/"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def page() -> StubPage:
    return StubPage(url="http://portal.test/login")


@pytest.fixture
def session(page) -> StubSession:
    return StubSession("ctx", page)


@pytest.fixture
def waiter(clock) -> Waiter:
    return Waiter(timeout=2.0, poll_interval=0.5, clock=clock.monotonic, sleep=clock.sleep)


def test_open_resolves_path_against_base_url(session, waiter, page):
    LoginPage(session, waiter, BASE_URL).open()

    assert page.actions == [("goto", "http://portal.test/login")]


def test_login_fills_credentials_and_submits(session, waiter, page):
    login = LoginPage(session, waiter, BASE_URL)
    for selector in (login.EMAIL_INPUT, login.PASSWORD_INPUT, login.SIGN_IN_BUTTON):
        page.add(selector)
    page.on_click[login.SIGN_IN_BUTTON] = lambda p: setattr(p, "url", BASE_URL + "dashboard")

    login.login("admin@portal.test", "secret")

    assert page.actions == [
        ("fill", "#email", "admin@portal.test"),
        ("fill", "#password", "secret"),
        ("click", login.SIGN_IN_BUTTON),
    ]
    assert login.wait_for_dashboard() is True


def test_failed_login_shows_error_banner(session, waiter, page, clock):
    login = LoginPage(session, waiter, BASE_URL)
    clock.at(1.0, lambda: page.add(login.ERROR_MESSAGE, StubElement(text=" Invalid credentials ")))

    assert login.is_error_message_displayed() is True
    assert login.error_message() == "Invalid credentials"
    with pytest.raises(WaitTimeoutError):
        login.wait_for_dashboard(timeout=1.0)


def test_displayed_checks_turn_only_timeouts_into_false(session, waiter, page):
    login = LoginPage(session, waiter, BASE_URL)

    assert login.is_login_page_displayed(timeout=0) is False

    page.probe_errors[login.PAGE_HEADING] = PlaywrightError("Target closed")
    with pytest.raises(InteractionError):
        login.is_login_page_displayed(timeout=0)


def test_text_getters_raise_when_element_never_renders(session, waiter):
    dashboard = DashboardPage(session, waiter, BASE_URL)

    with pytest.raises(WaitTimeoutError):
        dashboard.title()


def test_click_failure_is_an_interaction_error(session, waiter, page):
    dashboard = DashboardPage(session, waiter, BASE_URL)
    page.add(dashboard.LOGOUT_BUTTON, StubElement(click_error="element is detached"))

    with pytest.raises(InteractionError, match="detached"):
        dashboard.logout()


def test_dashboard_navigation_waits_for_route(session, waiter, page):
    dashboard = DashboardPage(session, waiter, BASE_URL)
    page.add(dashboard.WORKERS_LINK)
    page.on_click[dashboard.WORKERS_LINK] = lambda p: setattr(p, "url", BASE_URL + "workers")
    page.add(dashboard.WORKERS_CARD, StubElement(text="Total Workers\n42\nactive"))

    dashboard.go_to_workers()

    assert page.url.endswith("/workers")
    assert dashboard.workers_count() == "42"


def _install_worker_modal(page: StubPage, workers: WorkersPage) -> None:
    page.add(workers.ADD_WORKER_BUTTON)
    page.add(workers.SUBMIT_BUTTON)
    for selector in (workers.EMAIL_INPUT, workers.PHONE_INPUT, workers.DEPARTMENT_INPUT):
        page.add(selector)

    def open_modal(p: StubPage) -> None:
        p.add(workers.NAME_INPUT)

    def submit(p: StubPage) -> None:
        name = p.elements[workers.NAME_INPUT][0].value
        p.remove(workers.NAME_INPUT)
        p.add(workers.worker_name(name))
        p.add(workers.WORKER_CARDS)

    page.on_click[workers.ADD_WORKER_BUTTON] = open_modal
    page.on_click[workers.SUBMIT_BUTTON] = submit


def test_add_worker_waits_for_modal_and_new_entry(session, waiter, page, clock):
    workers = WorkersPage(session, waiter, BASE_URL)
    _install_worker_modal(page, workers)

    workers.add_worker("Ada Lovelace", "ada@portal.test", "5550100", department="Survey")

    assert ("fill", workers.DEPARTMENT_INPUT, "Survey") in page.actions
    assert workers.is_worker_present("Ada Lovelace") is True
    assert workers.worker_count() == 1
    assert clock.sleeps == []


def test_add_worker_skips_empty_department(session, waiter, page):
    workers = WorkersPage(session, waiter, BASE_URL)
    _install_worker_modal(page, workers)

    workers.add_worker("Grace Hopper", "grace@portal.test", "5550101")

    assert not any(action[1] == workers.DEPARTMENT_INPUT for action in page.actions)


def test_delete_worker_waits_for_entry_to_disappear(session, waiter, page):
    workers = WorkersPage(session, waiter, BASE_URL)
    name = "O'Brien"
    page.add(workers.worker_name(name))
    page.add(workers.delete_button_for(name))
    page.add(workers.CONFIRM_DELETE_BUTTON)
    page.on_click[workers.CONFIRM_DELETE_BUTTON] = lambda p: p.remove(workers.worker_name(name))

    workers.delete_worker(name)

    assert workers.is_worker_present(name, timeout=0) is False


def test_search_pauses_for_client_side_filtering(session, waiter, page, clock):
    workers = WorkersPage(session, waiter, BASE_URL)
    page.add(workers.SEARCH_INPUT)

    workers.search("Ada")

    assert page.actions == [("fill", workers.SEARCH_INPUT, "Ada")]
    assert clock.sleeps == [workers.SEARCH_SETTLE_SECONDS]


def test_empty_list_counts_zero(session, waiter):
    assert WorkersPage(session, waiter, BASE_URL).worker_count(timeout=0) == 0


def test_add_project_fills_optional_fields(session, waiter, page):
    projects = ProjectsPage(session, waiter, BASE_URL)
    page.add(projects.NEW_PROJECT_BUTTON)
    page.add(projects.SUBMIT_BUTTON)
    for selector in (
        projects.DESCRIPTION_INPUT,
        projects.LOCATION_INPUT,
        projects.START_DATE_INPUT,
        projects.BUDGET_INPUT,
    ):
        page.add(selector)
    page.on_click[projects.NEW_PROJECT_BUTTON] = lambda p: p.add(projects.NAME_INPUT)

    def submit(p: StubPage) -> None:
        p.remove(projects.NAME_INPUT)
        p.add(projects.project_name("Bridge"))

    page.on_click[projects.SUBMIT_BUTTON] = submit

    projects.add_project("Bridge", "Steel bridge", "Riverside", start_date="2024-05-01", budget="1000")

    filled = [action[1] for action in page.actions if action[0] == "fill"]
    assert projects.START_DATE_INPUT in filled
    assert projects.BUDGET_INPUT in filled
    assert projects.END_DATE_INPUT not in filled
    assert projects.is_project_present("Bridge") is True


def test_attendance_filters_and_counts(session, waiter, page):
    attendance = AttendancePage(session, waiter, BASE_URL)
    page.add(attendance.STATUS_FILTER)
    page.add(attendance.TABLE_ROWS, StubElement(), StubElement())
    page.add(attendance.CHECKED_IN_CARD, StubElement(text="Checked In\n3"))

    attendance.filter_by_status("Checked In")

    assert ("select", attendance.STATUS_FILTER, "Checked In") in page.actions
    assert attendance.record_count() == 2
    assert "3" in attendance.checked_in_summary()


def test_manual_attendance_modal(session, waiter, page):
    attendance = AttendancePage(session, waiter, BASE_URL)
    page.add(attendance.ADD_MANUAL_BUTTON)
    page.add(attendance.WORKER_SELECT)
    page.add(attendance.SUBMIT_BUTTON)
    page.on_click[attendance.ADD_MANUAL_BUTTON] = lambda p: p.add(attendance.CHECK_IN_INPUT)
    page.on_click[attendance.SUBMIT_BUTTON] = lambda p: p.remove(attendance.CHECK_IN_INPUT)

    attendance.add_manual_attendance("Ada Lovelace", "2024-05-01T08:00")

    assert ("select", attendance.WORKER_SELECT, "Ada Lovelace") in page.actions
    assert ("fill", attendance.CHECK_IN_INPUT, "2024-05-01T08:00") in page.actions


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Ada", "'Ada'"),
        ("O'Brien", '"O\'Brien"'),
        ("say \"it's\"", "concat('say \"it', \"'\", 's\"')"),
    ],
)
def test_xpath_literal_quotes_values(value, expected):
    assert xpath_literal(value) == expected
