"""Login page object for admin authentication flows."""

from __future__ import annotations

from typing import Optional

from .base import BasePage


class LoginPage(BasePage):
    """
    Page object for the admin login form.

    Provides methods for:
    - Entering credentials
    - Submitting the form
    - Reading the error banner
    """

    URL_PATH = "/login"

    EMAIL_INPUT = "#email"
    PASSWORD_INPUT = "#password"
    SIGN_IN_BUTTON = "xpath=//button[contains(text(), 'Sign in')]"
    ERROR_MESSAGE = "xpath=//div[contains(@class, 'bg-red-50')]"
    SHOW_PASSWORD_BUTTON = "xpath=//button[contains(@class, 'text-gray-500')]"
    PAGE_HEADING = "xpath=//h2[contains(text(), 'Sign in to your account')]"

    def enter_email(self, email: str) -> "LoginPage":
        self.type_into(self.EMAIL_INPUT, email)
        return self

    def enter_password(self, password: str) -> "LoginPage":
        self.type_into(self.PASSWORD_INPUT, password)
        return self

    def click_sign_in(self) -> None:
        self.click(self.SIGN_IN_BUTTON)

    def login(self, email: str, password: str) -> None:
        """
        Fill credentials and submit the login form.

        Args:
            email: Admin email address.
            password: Admin password.
        """
        self.enter_email(email)
        self.enter_password(password)
        self.click_sign_in()

    def wait_for_dashboard(self, timeout: Optional[float] = None) -> bool:
        """Wait for the post-login redirect to the dashboard."""
        return self.waiter.url_contains(self.session, "/dashboard", timeout)

    def toggle_password_visibility(self) -> None:
        self.click(self.SHOW_PASSWORD_BUTTON)

    def error_message(self, timeout: Optional[float] = None) -> str:
        return self.text_of(self.ERROR_MESSAGE, timeout)

    def is_error_message_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.ERROR_MESSAGE, timeout)

    def is_login_page_displayed(self, timeout: Optional[float] = None) -> bool:
        return self.is_displayed(self.PAGE_HEADING, timeout)
