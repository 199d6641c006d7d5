# File: src/utilities/config.py
"""Configuration loading for the Two Bits module."""

import json
import os

from utilities.logger import ModuleLogger

DEFAULT_CONFIG = {
    "module": "TWO_BITS",  # Manifest key of the puzzle to run
    "time_working": 5.0,  # Seconds spent on "Working..." before the result
    "time_showing_result": 5.0,  # Seconds the result stays up
    "time_error": 5.0,  # Seconds per flash of ERROR / INCORRECT
    "time_flash_gap": 0.35,  # Blank gap between flashes
    "time_submitting": 5.0,  # Seconds on "SUBMITTING" before the verdict
    "iterations": 3,  # Chain length (walk runs iterations + 1 times)
    "command_delay": 0.1,  # Pause between tokens of a scripted command
    "poll_interval": 0.05,  # Scheduler polling period
    "log_level": "INFO",
    "log_to_file": False,
    "debug_mode": False,  # Log the solution on activation
    "bomb": {  # Emulated host facts for desktop runs
        "batteries": [2],
        "serial": "AB3CD4",
        "ports": [["StereoRCA"]],
    },
}

TIMING_KEYS = (
    "time_working",
    "time_showing_result",
    "time_error",
    "time_flash_gap",
    "time_submitting",
    "iterations",
    "command_delay",
)


def file_exists(filename):
    """Check if a file exists on the filesystem."""
    try:
        os.stat(filename)
        return True
    except OSError:
        return False


def load_config(path="config.json"):
    """Load configuration from a JSON file if it exists, otherwise return defaults."""
    merged_config = dict(DEFAULT_CONFIG)
    merged_config["bomb"] = dict(DEFAULT_CONFIG["bomb"])

    if not file_exists(path):
        ModuleLogger.warning("CONF", f"No {path} found. Using default configuration.")
        return merged_config

    try:
        with open(path, "r", encoding="utf-8") as f:
            config_data = json.load(f)
    except (OSError, ValueError) as e:
        ModuleLogger.error("CONF", f"Error loading {path}: {e}")
        ModuleLogger.warning("CONF", "Using default configuration.")
        return merged_config

    if not isinstance(config_data, dict):
        ModuleLogger.error("CONF", f"{path} must hold a JSON object")
        return merged_config

    ModuleLogger.info("CONF", f"Configuration loaded from {path}")
    bomb = config_data.pop("bomb", None)
    merged_config.update(config_data)
    if isinstance(bomb, dict):
        merged_config["bomb"].update(bomb)
    return merged_config


def get_timing_settings(config):
    """Keyword arguments for the puzzle module constructor."""
    return {key: config[key] for key in TIMING_KEYS if key in config}
