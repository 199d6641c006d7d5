"""Tests for the interactive ConsoleManager."""

import asyncio
import io
import threading

import pytest

from managers.console_manager import ConsoleManager
from utilities.labels import State
from test_helpers import make_module


class _Script:
    """Feeds canned lines to the console and collects its output."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.output = []

    async def read(self, prompt):
        return self.lines.pop(0) if self.lines else "quit"

    def write(self, *args, **kwargs):
        self.output.append(" ".join(str(a) for a in args))


def _console(module, lines=()):
    script = _Script(lines)
    return ConsoleManager(module, input_func=script.read, output=script.write), script


@pytest.mark.asyncio
async def test_press_command_routed_to_module():
    module, *_ = make_module()
    module.activate()
    console, script = _console(module)

    assert await console.handle("press bk query") is True
    assert module.state == State.WORKING
    assert script.output[-1] == "-> ACCEPTED"


@pytest.mark.asyncio
async def test_invalid_command_reported():
    module, _, host, _, _ = make_module()
    module.activate()
    console, script = _console(module)

    await console.handle("press jump")
    assert script.output[-1] == "Invalid command: press jump"
    assert host.strikes == 0


@pytest.mark.asyncio
async def test_status_and_grid():
    module, *_ = make_module()
    console, script = _console(module)

    await console.handle("grid")
    assert script.output[-1] == "Module is not active yet."

    module.activate()
    await console.handle("grid")
    assert script.output[-1] == module.rules.grid()

    await console.handle("status")
    assert any("IDLE" in line for line in script.output)


@pytest.mark.asyncio
async def test_quit_stops_handling():
    module, *_ = make_module()
    console, _ = _console(module)
    assert await console.handle("quit") is False
    assert await console.handle("   ") is True


@pytest.mark.asyncio
async def test_start_runs_until_quit():
    module, *_ = make_module()
    module.activate()
    console, script = _console(module, ["help", "press bk", "quit", "press query"])

    await console.start()
    assert not console.running
    assert module.query_string == "bk"
    assert module.state == State.IDLE
    assert any("Letters:" in line for line in script.output)


@pytest.mark.asyncio
async def test_start_stops_once_solved():
    module, clock, *_ = make_module()
    module.activate()
    console, script = _console(module, [f"press {module.solution} submit", "status"])

    async def read(prompt):
        clock.advance(5.0)
        module.scheduler.update()
        return script.lines.pop(0) if script.lines else "quit"

    console._input_func = read
    await console.start()
    assert module.solved
    assert "-> SOLVE" in script.output


@pytest.mark.asyncio
async def test_stream_lines_reach_the_module():
    module, *_ = make_module()
    module.activate()
    output = []
    console = ConsoleManager(module, output=output.append, stream=io.StringIO("press bk\n"))

    # End of input stops the console like "quit"
    await asyncio.wait_for(console.start(), timeout=1.0)
    assert module.query_string == "bk"
    assert "-> ACCEPTED" in output
    assert console.reader.daemon


class _BlockingStream:
    def __init__(self):
        self.release = threading.Event()

    def readline(self):
        self.release.wait()
        return ""


@pytest.mark.asyncio
async def test_cancel_while_waiting_on_stream():
    module, *_ = make_module()
    module.activate()
    stream = _BlockingStream()
    console = ConsoleManager(module, output=lambda *a: None, stream=stream)

    task = asyncio.create_task(console.start())
    try:
        await asyncio.sleep(0.01)
        assert console.reader.is_alive()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert console.reader.daemon
    finally:
        stream.release.set()
