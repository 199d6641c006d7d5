# tests/conftest.py
import os
import sys

import pytest

src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', 'src'))
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from utilities.logger import ModuleLogger, LogLevel  # noqa: E402


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep test output readable; individual tests can turn it back on."""
    level = ModuleLogger.LEVEL
    to_console = ModuleLogger.PRINT_TO_CONSOLE
    to_file = ModuleLogger.WRITE_TO_FILE
    path = ModuleLogger.LOG_FILE_PATH
    ModuleLogger.PRINT_TO_CONSOLE = False
    ModuleLogger.WRITE_TO_FILE = False
    ModuleLogger.LEVEL = LogLevel.DEBUG
    yield
    ModuleLogger.LEVEL = level
    ModuleLogger.PRINT_TO_CONSOLE = to_console
    ModuleLogger.WRITE_TO_FILE = to_file
    ModuleLogger.LOG_FILE_PATH = path
