"""
Logging utilities for the Two Bits module.
"""

import time


class LogLevel:
    """
    Log levels for categorizing log messages.
    """
    DEBUG = 0
    INFO = 1
    NOTE = 2
    WARNING = 3
    ERROR = 4

    NAMES = {
        "DEBUG": DEBUG,
        "INFO": INFO,
        "NOTE": NOTE,
        "WARNING": WARNING,
        "ERROR": ERROR,
    }

    @classmethod
    def from_name(cls, name, default=INFO):
        """Resolve a config string such as "debug" to a level."""
        if isinstance(name, int):
            return name
        return cls.NAMES.get(str(name).upper(), default)


class ModuleLogger:
    """Centralized logger shared by every puzzle unit in the process."""

    # Global Configuration
    LEVEL = LogLevel.INFO
    SOURCE = "BOMB"  # Default unit tag when a message isn't tied to one unit
    PRINT_TO_CONSOLE = True
    WRITE_TO_FILE = False
    LOG_FILE_PATH = "two_bits_log.txt"

    # Terminal Color Codes
    COLORS = {
        LogLevel.DEBUG: "\033[90m",    # Gray
        LogLevel.INFO: "\033[94m",     # Blue
        LogLevel.NOTE: "\033[96m",     # Cyan
        LogLevel.WARNING: "\033[93m",  # Yellow
        LogLevel.ERROR: "\033[91m",    # Red
        "RESET": "\033[0m"
    }

    LEVEL_TAGS = {
        LogLevel.DEBUG: "DBUG",
        LogLevel.INFO: "INFO",
        LogLevel.NOTE: "NOTE",
        LogLevel.WARNING: "WARN",
        LogLevel.ERROR: "!ERR"
    }

    _START = time.monotonic()

    @classmethod
    def set_level(cls, level):
        cls.LEVEL = LogLevel.from_name(level)

    @classmethod
    def enable_file_logging(cls, enable=True, path=None):
        cls.WRITE_TO_FILE = enable
        if path:
            cls.LOG_FILE_PATH = path

    @classmethod
    def _get_timestamp(cls):
        """Returns fixed-width seconds since import."""
        return f"{time.monotonic() - cls._START:>8.3f}"

    @classmethod
    def format(cls, level, module_tag, message, unit_tag=None):
        """Build a log line without emitting it."""
        if unit_tag is None:
            unit_tag = cls.SOURCE
        # Format: [   1.234][INFO][#1  ][2BIT] Starting code is 7
        return (f"[{cls._get_timestamp()}][{cls.LEVEL_TAGS[level]:<4}]"
                f"[{unit_tag:<4}][{module_tag:<4}] {message}")

    @classmethod
    def _log(cls, level, module_tag, message, unit_tag=None):
        """Core routing method."""
        if level < cls.LEVEL:
            return

        formatted_msg = cls.format(level, module_tag, message, unit_tag)

        if cls.PRINT_TO_CONSOLE:
            color = cls.COLORS[level]
            reset = cls.COLORS["RESET"]
            print(f"{color}{formatted_msg}{reset}")

        if cls.WRITE_TO_FILE:
            try:
                with open(cls.LOG_FILE_PATH, "a", encoding="utf-8") as f:
                    f.write(formatted_msg + "\n")
            except OSError as e:
                # File logging is best effort
                if cls.PRINT_TO_CONSOLE:
                    print(f"{cls.COLORS[LogLevel.ERROR]}Logger OS Error: {e}{cls.COLORS['RESET']}")

    # Convenience Wrappers
    @classmethod
    def debug(cls, tag, msg, unit=None):
        cls._log(LogLevel.DEBUG, tag, msg, unit_tag=unit)

    @classmethod
    def info(cls, tag, msg, unit=None):
        cls._log(LogLevel.INFO, tag, msg, unit_tag=unit)

    @classmethod
    def note(cls, tag, msg, unit=None):
        cls._log(LogLevel.NOTE, tag, msg, unit_tag=unit)

    @classmethod
    def warning(cls, tag, msg, unit=None):
        cls._log(LogLevel.WARNING, tag, msg, unit_tag=unit)

    @classmethod
    def error(cls, tag, msg, unit=None):
        cls._log(LogLevel.ERROR, tag, msg, unit_tag=unit)
