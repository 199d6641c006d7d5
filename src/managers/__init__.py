# filepath: src/managers/__init__.py
"""Top-level package for manager classes."""

from .console_manager import ConsoleManager
from .display_manager import DisplayManager
from .scheduler_manager import SchedulerManager

__all__ = [
    "ConsoleManager",
    "DisplayManager",
    "SchedulerManager",
]
