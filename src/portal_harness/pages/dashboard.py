"""Dashboard page object."""

from __future__ import annotations

from typing import Optional

from .base import BasePage


class DashboardPage(BasePage):
    """Landing page after login: summary cards and the sidebar."""

    URL_PATH = "/dashboard"

    TITLE = "xpath=//h1[contains(text(), 'Dashboard')]"
    WORKERS_CARD = (
        "xpath=//div[contains(text(), 'Workers')]/ancestor::div[contains(@class, 'bg-white')]"
    )
    SUPERVISORS_CARD = (
        "xpath=//div[contains(text(), 'Supervisors')]/ancestor::div[contains(@class, 'bg-white')]"
    )
    COMPLETED_PROJECTS_CARD = (
        "xpath=//div[contains(text(), 'Completed Projects')]"
        "/ancestor::div[contains(@class, 'bg-white')]"
    )
    SIDEBAR = "xpath=//nav[contains(@class, 'space-y-1')]"
    WORKERS_LINK = "xpath=//a[contains(@href, '/workers')]"
    PROJECTS_LINK = "xpath=//a[contains(@href, '/projects')]"
    ATTENDANCE_LINK = "xpath=//a[contains(@href, '/attendance')]"
    DASHBOARD_LINK = "xpath=//a[contains(@href, '/dashboard')]"
    LOGOUT_BUTTON = "xpath=//button[contains(text(), 'Sign Out')]"

    def is_dashboard_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.TITLE, timeout)

    def title(self) -> str:
        return self.text_of(self.TITLE)

    def workers_count(self) -> str:
        """Headline number shown on the workers card."""
        lines = [line for line in self.text_of(self.WORKERS_CARD).splitlines() if line.strip()]
        return next((line.strip() for line in lines if line.strip().isdigit()), "")

    def is_sidebar_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.SIDEBAR, timeout)

    def go_to_workers(self) -> None:
        self.click(self.WORKERS_LINK)
        self.waiter.url_contains(self.session, "/workers")

    def go_to_projects(self) -> None:
        self.click(self.PROJECTS_LINK)
        self.waiter.url_contains(self.session, "/projects")

    def go_to_attendance(self) -> None:
        self.click(self.ATTENDANCE_LINK)
        self.waiter.url_contains(self.session, "/attendance")

    def go_to_dashboard(self) -> None:
        self.click(self.DASHBOARD_LINK)
        self.waiter.url_contains(self.session, "/dashboard")

    def logout(self) -> None:
        self.click(self.LOGOUT_BUTTON)
        self.waiter.url_contains(self.session, "/login")
