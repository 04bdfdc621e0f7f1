"""Browser sessions, launch plans and condition waits."""

from .base import BrowserSession, BrowserState
from .launch import LaunchPlan, build_launch_plan
from .waits import Waiter

__all__ = ["BrowserSession", "BrowserState", "LaunchPlan", "Waiter", "build_launch_plan"]
