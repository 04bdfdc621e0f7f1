"""Project management page object."""

from __future__ import annotations

from typing import Optional

from .base import BasePage, xpath_literal


class ProjectsPage(BasePage):
    """Page object for the projects list and the new project modal."""

    URL_PATH = "/projects"
    SEARCH_SETTLE_SECONDS = 0.5

    TITLE = "xpath=//h1[contains(text(), 'Projects')]"
    NEW_PROJECT_BUTTON = "xpath=//button[contains(., 'New Project')]"
    SEARCH_INPUT = (
        "xpath=//input[@placeholder='Search by name, description, or location...']"
    )
    PROJECT_CARDS = "xpath=//div[contains(@class, 'grid')]//div[contains(@class, 'bg-white')]"
    STATUS_FILTER = "xpath=(//select[contains(@class, 'border-gray-300')])[1]"

    NAME_INPUT = (
        "xpath=//label[contains(text(), 'Project Name')]/following-sibling::input"
        " | //input[@placeholder='Enter project name']"
    )
    DESCRIPTION_INPUT = (
        "xpath=//label[contains(text(), 'Description')]/following-sibling::textarea"
    )
    LOCATION_INPUT = "xpath=//label[contains(text(), 'Location')]/following-sibling::input"
    START_DATE_INPUT = (
        "xpath=//label[contains(text(), 'Start Date')]/following-sibling::input[@type='date']"
    )
    END_DATE_INPUT = (
        "xpath=//label[contains(text(), 'End Date')]/following-sibling::input[@type='date']"
    )
    BUDGET_INPUT = (
        "xpath=//label[contains(text(), 'Budget')]/following-sibling::input[@type='number']"
    )
    SUBMIT_BUTTON = "xpath=//button[contains(text(), 'Add Project')] | //button[@type='submit']"

    @staticmethod
    def project_name(name: str) -> str:
        return f"xpath=//div[contains(text(), {xpath_literal(name)})]"

    def is_projects_page_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.TITLE, timeout)

    def add_project(
        self,
        name: str,
        description: str,
        location: str,
        start_date: str = "",
        end_date: str = "",
        budget: str = "",
    ) -> None:
        """Create a project; dates use the ``YYYY-MM-DD`` input format."""
        self.click(self.NEW_PROJECT_BUTTON)
        self.waiter.visible(self.session, self.NAME_INPUT)
        self.type_into(self.NAME_INPUT, name)
        self.type_into(self.DESCRIPTION_INPUT, description)
        self.type_into(self.LOCATION_INPUT, location)
        if start_date:
            self.type_into(self.START_DATE_INPUT, start_date)
        if end_date:
            self.type_into(self.END_DATE_INPUT, end_date)
        if budget:
            self.type_into(self.BUDGET_INPUT, budget)
        self.click(self.SUBMIT_BUTTON)
        self.waiter.invisible(self.session, self.NAME_INPUT)
        self.waiter.visible(self.session, self.project_name(name))

    def search(self, text: str) -> None:
        self.type_into(self.SEARCH_INPUT, text)
        self.waiter.pause_for(self.SEARCH_SETTLE_SECONDS)

    def filter_by_status(self, status: str) -> None:
        self.select(self.STATUS_FILTER, status)
        self.waiter.pause_for(self.SEARCH_SETTLE_SECONDS)

    def project_count(self, timeout: Optional[float] = None) -> int:
        return self.visible_count(self.PROJECT_CARDS, timeout)

    def is_project_present(self, name: str, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.project_name(name), timeout)
