"""Attendance page object."""

from __future__ import annotations

from typing import Optional

from .base import BasePage


class AttendancePage(BasePage):
    """Attendance records table, daily stat cards and manual entry."""

    URL_PATH = "/attendance"
    SEARCH_SETTLE_SECONDS = 0.5

    TITLE = "xpath=//h1[contains(text(), 'Attendance')]"
    ADD_MANUAL_BUTTON = "xpath=//button[contains(., 'Add Manual')]"
    SEARCH_INPUT = (
        "xpath=//input[@placeholder='Search by worker name, email, or project...']"
    )
    STATUS_FILTER = "xpath=(//select[contains(@class, 'border-gray-300')])[1]"
    PROJECT_FILTER = "xpath=(//select[contains(@class, 'border-gray-300')])[2]"
    TABLE = "xpath=//table | //div[contains(@class, 'table')]"
    TABLE_ROWS = "xpath=//tbody//tr | //div[contains(@class, 'table')]//div[contains(@class, 'row')]"

    CHECKED_IN_CARD = (
        "xpath=//div[contains(text(), 'Checked In')]/ancestor::div[contains(@class, 'bg-white')]"
    )
    CHECKED_OUT_CARD = (
        "xpath=//div[contains(text(), 'Checked Out')]/ancestor::div[contains(@class, 'bg-white')]"
    )
    TOTAL_TODAY_CARD = (
        "xpath=//div[contains(text(), 'Total Today')]/ancestor::div[contains(@class, 'bg-white')]"
    )

    WORKER_SELECT = "xpath=(//div[contains(@class, 'modal')]//select | //form//select)[1]"
    CHECK_IN_INPUT = (
        "xpath=//label[contains(text(), 'Check In Time')]"
        "/following-sibling::input[@type='datetime-local']"
    )
    CHECK_OUT_INPUT = (
        "xpath=//label[contains(text(), 'Check Out Time')]"
        "/following-sibling::input[@type='datetime-local']"
    )
    SUBMIT_BUTTON = (
        "xpath=//button[contains(text(), 'Add Attendance')] | //button[@type='submit']"
    )

    def is_attendance_page_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.TITLE, timeout)

    def is_table_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.TABLE, timeout)

    def search(self, text: str) -> None:
        self.type_into(self.SEARCH_INPUT, text)
        self.waiter.pause_for(self.SEARCH_SETTLE_SECONDS)

    def filter_by_status(self, status: str) -> None:
        self.select(self.STATUS_FILTER, status)
        self.waiter.pause_for(self.SEARCH_SETTLE_SECONDS)

    def filter_by_project(self, project: str) -> None:
        self.select(self.PROJECT_FILTER, project)
        self.waiter.pause_for(self.SEARCH_SETTLE_SECONDS)

    def record_count(self, timeout: Optional[float] = None) -> int:
        return self.visible_count(self.TABLE_ROWS, timeout)

    def checked_in_summary(self) -> str:
        return self.text_of(self.CHECKED_IN_CARD)

    def checked_out_summary(self) -> str:
        return self.text_of(self.CHECKED_OUT_CARD)

    def total_today_summary(self) -> str:
        return self.text_of(self.TOTAL_TODAY_CARD)

    def add_manual_attendance(
        self, worker_name: str, check_in: str, check_out: str = ""
    ) -> None:
        """Add a record by hand; times use the ``YYYY-MM-DDTHH:MM`` input format."""
        self.click(self.ADD_MANUAL_BUTTON)
        self.waiter.visible(self.session, self.CHECK_IN_INPUT)
        self.select(self.WORKER_SELECT, worker_name)
        self.type_into(self.CHECK_IN_INPUT, check_in)
        if check_out:
            self.type_into(self.CHECK_OUT_INPUT, check_out)
        self.click(self.SUBMIT_BUTTON)
        self.waiter.invisible(self.session, self.CHECK_IN_INPUT)
