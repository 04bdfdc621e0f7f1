"""
Page objects for the admin portal.

Each page object wraps the locators of one portal screen and routes every
lookup through the waiter.
"""

from .attendance import AttendancePage
from .base import BasePage
from .dashboard import DashboardPage
from .login import LoginPage
from .projects import ProjectsPage
from .workers import WorkersPage

__all__ = [
    "AttendancePage",
    "BasePage",
    "DashboardPage",
    "LoginPage",
    "ProjectsPage",
    "WorkersPage",
]
