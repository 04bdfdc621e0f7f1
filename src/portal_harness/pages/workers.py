"""Worker management page object."""

from __future__ import annotations

from typing import Optional

from .base import BasePage, xpath_literal


class WorkersPage(BasePage):
    """
    Page object for the workers list and its add/delete modals.

    Provides methods for:
    - Adding a worker through the modal form
    - Searching and counting worker cards
    - Deleting a worker and confirming the dialog
    """

    URL_PATH = "/workers"
    # Client-side search filters without any loading indicator.
    SEARCH_SETTLE_SECONDS = 0.5

    TITLE = "xpath=//h1[contains(text(), 'Workers')]"
    ADD_WORKER_BUTTON = "xpath=//button[contains(., 'Add Worker')]"
    SEARCH_INPUT = "xpath=//input[@placeholder='Search by name, email, or phone...']"
    WORKER_CARDS = "xpath=//div[contains(@class, 'grid')]//div[contains(@class, 'bg-white')]"

    NAME_INPUT = (
        "xpath=//label[contains(text(), 'Name')]/following-sibling::input"
        " | //input[@placeholder='Enter worker name']"
    )
    EMAIL_INPUT = (
        "xpath=//label[contains(text(), 'Email')]/following-sibling::input | //input[@type='email']"
    )
    PHONE_INPUT = (
        "xpath=//label[contains(text(), 'Phone')]/following-sibling::input | //input[@type='tel']"
    )
    DEPARTMENT_INPUT = "xpath=//label[contains(text(), 'Department')]/following-sibling::input"
    SUBMIT_BUTTON = "xpath=//button[contains(text(), 'Add Worker')] | //button[@type='submit']"
    CANCEL_BUTTON = "xpath=//button[contains(text(), 'Cancel')]"
    CONFIRM_DELETE_BUTTON = (
        "xpath=//button[contains(text(), 'Delete') and contains(@class, 'bg-red-600')]"
    )

    @staticmethod
    def worker_name(name: str) -> str:
        return f"xpath=//div[contains(text(), {xpath_literal(name)})]"

    @staticmethod
    def delete_button_for(name: str) -> str:
        return (
            f"xpath=//div[contains(text(), {xpath_literal(name)})]"
            "/ancestor::div[contains(@class, 'bg-white')]//button[contains(@title, 'Delete')]"
        )

    def is_workers_page_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.TITLE, timeout)

    def open_add_worker_form(self) -> None:
        self.click(self.ADD_WORKER_BUTTON)
        self.waiter.visible(self.session, self.NAME_INPUT)

    def add_worker(self, name: str, email: str, phone: str, department: str = "") -> None:
        """
        Add a worker through the modal and wait for it to show up in the list.

        Args:
            name: Worker name.
            email: Worker email.
            phone: Worker phone number.
            department: Optional department.
        """
        self.open_add_worker_form()
        self.type_into(self.NAME_INPUT, name)
        self.type_into(self.EMAIL_INPUT, email)
        self.type_into(self.PHONE_INPUT, phone)
        if department:
            self.type_into(self.DEPARTMENT_INPUT, department)
        self.click(self.SUBMIT_BUTTON)
        self.waiter.invisible(self.session, self.NAME_INPUT)
        self.waiter.visible(self.session, self.worker_name(name))

    def cancel(self) -> None:
        self.click(self.CANCEL_BUTTON)
        self.waiter.invisible(self.session, self.NAME_INPUT)

    def search(self, text: str) -> None:
        self.type_into(self.SEARCH_INPUT, text)
        self.waiter.pause_for(self.SEARCH_SETTLE_SECONDS)

    def worker_count(self, timeout: Optional[float] = None) -> int:
        return self.visible_count(self.WORKER_CARDS, timeout)

    def is_worker_present(self, name: str, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.worker_name(name), timeout)

    def delete_worker(self, name: str) -> None:
        self.click(self.delete_button_for(name))
        self.click(self.CONFIRM_DELETE_BUTTON)
        self.waiter.invisible(self.session, self.worker_name(name))
