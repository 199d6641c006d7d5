# File: src/main.py
"""
PROJECT: Two Bits - desktop runner

Builds one puzzle unit against in-memory host collaborators described in
config.json, activates it, and drives it from the terminal.
"""

import asyncio
import sys

from utilities.logger import ModuleLogger, LogLevel

# Init logger at DEBUG until the config says otherwise
ModuleLogger.set_level(LogLevel.DEBUG)

from dummies.audio_manager import AudioManager
from dummies.bomb_info import BombInfo
from managers.console_manager import ConsoleManager
from managers.display_manager import DisplayManager
from modes.manifest import create_module
from utilities.config import get_timing_settings, load_config
from utilities.context import HostContext
from utilities.seed import SerialNumberError


class Host:
    """Counts strikes and passes reported by the unit."""

    def __init__(self):
        self.strikes = 0
        self.passes = 0

    def handle_strike(self):
        self.strikes += 1
        ModuleLogger.warning("HOST", f"STRIKE! ({self.strikes} total)")

    def handle_pass(self):
        self.passes += 1
        ModuleLogger.note("HOST", "Module disarmed")


def build_module(config, host):
    """Create the configured module wired to dummy collaborators."""
    display = DisplayManager()
    context = HostContext(
        bomb_info=BombInfo.from_config(config["bomb"]),
        display=display,
        audio=AudioManager(),
        on_strike=host.handle_strike,
        on_pass=host.handle_pass,
    )
    module = create_module(
        config["module"],
        context,
        debug_mode=config["debug_mode"],
        **get_timing_settings(config)
    )
    display.unit_tag = module.unit_tag
    return module


async def main(config_path="config.json", stream=None):
    config = load_config(config_path)
    ModuleLogger.set_level(config["log_level"])
    ModuleLogger.enable_file_logging(config["log_to_file"])

    host = Host()
    module = build_module(config, host)
    try:
        module.activate()
    except SerialNumberError:
        ModuleLogger.error("MAIN", "Bomb configuration is corrupt, cannot start")
        return 1

    console = ConsoleManager(module, stream=stream)
    timer_task = asyncio.create_task(module.run(config["poll_interval"]))
    console_task = asyncio.create_task(console.start())

    done, pending = await asyncio.wait(
        [timer_task, console_task], return_when=asyncio.FIRST_COMPLETED
    )
    for task in pending:
        task.cancel()
    for task in done:
        task.result()

    ModuleLogger.info("MAIN", f"Finished with {host.strikes} strike(s), solved={module.solved}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(*sys.argv[1:2])))
