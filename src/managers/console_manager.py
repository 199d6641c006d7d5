"""Interactive console for driving a Two Bits unit from a terminal."""

import asyncio
import sys
import threading

from utilities.labels import CommandOutcome
from utilities.logger import ModuleLogger


class ConsoleManager:
    """Reads commands from stdin and feeds them to a running module.

    Runs as a parallel async task alongside the module's own timer loop.
    ``press ...`` lines go through the module's scripted command handler;
    everything else is a console command.

    Lines are read on a daemon thread and handed to the event loop through a
    queue, so a blocked read never keeps the process alive once the console
    task is cancelled.
    """

    def __init__(self, module, input_func=None, output=print, stream=None):
        self.module = module
        self._input_func = input_func
        self._output = output
        self._stream = stream if stream is not None else sys.stdin
        self._lines = None
        self.reader = None
        self.running = False

        ModuleLogger.info("CONS", f"[INIT] ConsoleManager - unit: {module.unit_tag}")

    def _start_reader(self):
        loop = asyncio.get_running_loop()
        self._lines = asyncio.Queue()

        def read_lines():
            while True:
                line = self._stream.readline()
                try:
                    loop.call_soon_threadsafe(self._lines.put_nowait, line)
                except RuntimeError:
                    # Loop already closed
                    return
                if not line:
                    return

        self.reader = threading.Thread(target=read_lines, name="console-stdin", daemon=True)
        self.reader.start()

    async def get_input(self, prompt):
        """Non-blocking line input."""
        if self._input_func is not None:
            return (await self._input_func(prompt)).strip()
        if self._lines is None:
            self._start_reader()
        print(prompt, end="", flush=True)
        line = await self._lines.get()
        if not line:
            return "quit"
        return line.strip()

    def show_help(self):
        self._output(self.module.HELP_TEXT)
        self._output("Other commands: status, grid, help, quit")

    def show_status(self):
        for key, value in self.module.status().items():
            self._output(f"{key:>14}: {value}")

    async def handle(self, line):
        """Run one console line. Returns False when the console should stop."""
        command = line.strip().lower()
        if not command:
            return True

        if command in ("quit", "exit"):
            return False
        if command == "help":
            self.show_help()
        elif command == "status":
            self.show_status()
        elif command == "grid":
            if self.module.rules is None:
                self._output("Module is not active yet.")
            else:
                self._output(self.module.rules.grid())
        else:
            outcome = await self.module.process_command(command)
            if outcome == CommandOutcome.INVALID:
                self._output(f"Invalid command: {line.strip()}")
            else:
                self._output(f"-> {outcome}")
        return True

    async def start(self):
        """Main interactive loop."""
        self.running = True
        self._output("\n" + "=" * 30)
        self._output(f" {self.module.name.upper()} {self.module.unit_tag} ")
        self._output("=" * 30)
        self.show_help()

        while self.running and not self.module.solved:
            line = await self.get_input(">> ")
            if not await self.handle(line):
                break
        self.running = False
