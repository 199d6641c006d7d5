"""Two Bits Puzzle Module.

The defuser enters two-letter queries and reads back two-digit responses.
The expert holds a printed grid (code -> query) shared by every unit; the
unit's own responses (query -> code) are different on every bomb. Walking
code -> query -> response from the starting code four times gives the two
letters that solve the module.

Any press while the unit is busy is a strike. There is no partial credit.
"""

import asyncio
from functools import partial

from modes.base import BaseModule
from utilities.labels import (
    BUTTON_INDEX,
    BUTTON_LABELS,
    QUERY_BUTTON,
    SUBMIT_BUTTON,
    UNSET,
    CommandOutcome,
    DisplayText,
    Sounds,
    State,
)
from utilities.rules import DEFAULT_ITERATIONS, RuleSet
from utilities.seed import SerialNumberError, derive_initial_code


class TwoBits(BaseModule):
    """Two Bits Puzzle Module."""

    METADATA = {
        "id": "TWO_BITS",
        "name": "Two Bits",
        "tag": "2BIT",
        "settings": [
            {"key": "time_working", "label": "WORK", "default": 5.0},
            {"key": "time_showing_result", "label": "RSLT", "default": 5.0},
            {"key": "time_error", "label": "ERR", "default": 5.0},
            {"key": "time_flash_gap", "label": "GAP", "default": 0.35},
            {"key": "time_submitting", "label": "SUBM", "default": 5.0},
            {"key": "iterations", "label": "ITER", "default": DEFAULT_ITERATIONS},
        ],
    }

    FLASH_COUNT = 3

    HELP_TEXT = (
        "Query a pair with 'press bk query'. "
        "Submit with 'press tv submit'. "
        "Letters: " + " ".join(BUTTON_LABELS)
    )

    def __init__(self, host, module_id=None, clock=None, rules_seed=None,
                 time_working=5.0, time_showing_result=5.0, time_error=5.0,
                 time_flash_gap=0.35, time_submitting=5.0,
                 iterations=DEFAULT_ITERATIONS, command_delay=0.1,
                 debug_mode=False):
        super().__init__(host, module_id=module_id, clock=clock)

        self.time_working = time_working
        self.time_showing_result = time_showing_result
        self.time_error = time_error
        self.time_flash_gap = time_flash_gap
        self.time_submitting = time_submitting
        self.iterations = iterations
        self.command_delay = command_delay
        self.debug_mode = debug_mode

        self._rules_seed = rules_seed
        self.rules = None
        self.initial_code = None
        self.solution = None

        self.state = State.INACTIVE
        self.current_query = [UNSET, UNSET]
        self.last_result = 0
        self.display_text = DisplayText.BLANK
        self._struck = False

        # Button identity -> (handler, button index)
        self._buttons = {
            QUERY_BUTTON: (self.press_query, None),
            SUBMIT_BUTTON: (self.press_submit, None),
        }
        for index, label in enumerate(BUTTON_LABELS):
            self._buttons[label] = (self._on_button_press, index)

        self._entry_actions = {
            State.INACTIVE: self._update_display,
            State.IDLE: self._enter_idle,
            State.WORKING: self._enter_working,
            State.SHOWING_RESULT: self._enter_showing_result,
            State.SHOWING_ERROR: self._enter_showing_error,
            State.SUBMITTING_RESULT: self._enter_submitting_result,
            State.INCORRECT_SUBMISSION: self._enter_incorrect_submission,
            State.COMPLETE: self._enter_complete,
        }

        self._update_display()

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self):
        """Build the rules, derive the starting code and go idle."""
        if self.rules is not None:
            raise RuntimeError(f"{self.name} {self.unit_tag} is already active")

        rules = RuleSet(seed=self._rules_seed)
        try:
            initial_code = derive_initial_code(self.host.bomb_info)
        except SerialNumberError as e:
            self.log("error", f"Cannot derive starting code: {e}")
            raise

        self.rules = rules
        self.initial_code = initial_code
        self.log("debug", f"Lookup grid:\n{self.rules.grid()}")
        self.log("info", f"Starting code is {self.initial_code:02d}")
        for i, (query, response) in enumerate(self.rules.trace(self.initial_code, self.iterations)):
            if i < self.iterations:
                self.log("debug", f"Query #{i + 1}: {query}, Response: {response:02d}")

        self.solution = self.correct_submission()
        if self.debug_mode:
            self.log("note", f"Correct submission is {self.solution}")
        else:
            self.log("debug", f"Correct submission is {self.solution}")

        self.change_state(State.IDLE)

    def correct_submission(self):
        """Walk the chain from the starting code."""
        return self.rules.evaluate(self.initial_code, self.iterations)

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    @property
    def query_string(self):
        return "".join(self.current_query)

    def press_button(self, button_id):
        """Route a physical button press through the dispatch table."""
        try:
            handler, index = self._buttons[button_id]
        except KeyError:
            raise ValueError(f"Unknown button {button_id!r}") from None
        if index is None:
            handler()
        else:
            handler(index)

    def _on_button_press(self, index):
        self.press_symbol(BUTTON_LABELS[index])

    def press_symbol(self, label):
        """Enter one letter into the next free slot."""
        if not isinstance(label, str) or len(label) != 1 or label == UNSET:
            raise ValueError(f"A symbol is a single character, got {label!r}")
        self._push()
        label = label.lower()

        if self.state == State.COMPLETE:
            return
        if self.state == State.INACTIVE:
            self._handle_error("Pressed a button while the module was sleeping")
            return
        if self.state != State.IDLE:
            # Unforgiving!
            self._handle_error("Pressed a button while the module was working")
            return

        for i, slot in enumerate(self.current_query):
            if slot == UNSET:
                self.current_query[i] = label
                self._update_display()
                return
        self._handle_error(f"Pressed {label} with {self.query_string} already entered")

    def press_query(self):
        """Look up the entered pair."""
        self._push()
        if self.state == State.COMPLETE:
            return
        if self.state == State.INACTIVE:
            self._handle_error("Pressed query while the module was sleeping")
            return
        if self.state != State.IDLE:
            self._handle_error("Pressed query while the module was working")
            return

        if all(slot in BUTTON_INDEX for slot in self.current_query):
            self.change_state(State.WORKING)
        else:
            self._handle_error(f"Queried incomplete input {self.query_string}")

    def press_submit(self):
        """Submit the entered pair as the answer."""
        self._push()
        if self.state == State.COMPLETE:
            return
        if self.state == State.INACTIVE:
            self._handle_error("Pressed submit while the module was sleeping")
            return
        if self.state != State.IDLE:
            self._handle_error("Pressed submit while the module was working")
            return

        self.change_state(State.SUBMITTING_RESULT)

    def _push(self):
        self._play(Sounds.BUTTON_PRESS)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def change_state(self, state):
        """Enter ``state``. Any pending timed transition is dropped."""
        self.scheduler.cancel()
        self.log("debug", f"{self.state} -> {state}")
        self.state = state
        self._entry_actions[state]()

    def _goto(self, state):
        return partial(self.change_state, state)

    def _enter_idle(self):
        self.current_query[0] = UNSET
        self.current_query[1] = UNSET
        self._update_display()

    def _enter_working(self):
        self._update_display()
        self.scheduler.schedule(self.time_working, self._goto(State.SHOWING_RESULT))

    def _enter_showing_result(self):
        result = self.rules.lookup(self.query_string)
        if result is not None:
            self.last_result = result
        self.log("info", f"Queried {self.query_string}, result {self.last_result:02d}")
        self._update_display()
        self.scheduler.schedule(self.time_showing_result, self._goto(State.IDLE))

    def _enter_showing_error(self):
        self._update_display()
        self._flash(DisplayText.ERROR)

    def _enter_submitting_result(self):
        self._play(Sounds.PROCESSING)
        self._update_display()

        if self.correct_submission() == self.query_string:
            self.scheduler.schedule(self.time_submitting, self._goto(State.COMPLETE))
        else:
            self.scheduler.schedule(self.time_submitting, self._goto(State.INCORRECT_SUBMISSION))

    def _enter_incorrect_submission(self):
        self._update_display()
        self._strike(f"Submitted {self.query_string}, Expected {self.correct_submission()}")
        self._flash(DisplayText.INCORRECT)

    def _enter_complete(self):
        self._update_display()
        if not self.solved:
            self.solved = True
            self.log("info", "Module solved")
            self.host.on_pass()

    def _strike(self, reason):
        self._struck = True
        self.log("warning", f"Strike: {reason}")
        self.host.on_strike()

    def _handle_error(self, reason):
        """One strike for an invalid press, then show ERROR unless asleep."""
        self._strike(reason)
        if self.state == State.INACTIVE:
            return
        self.change_state(State.SHOWING_ERROR)

    def _flash(self, message):
        """Show ``message`` FLASH_COUNT times with blank gaps, then go idle."""
        clear = partial(self._render, DisplayText.BLANK)
        show = partial(self._render, message)

        steps = []
        for _ in range(self.FLASH_COUNT - 1):
            steps.append((self.time_error, clear))
            steps.append((self.time_flash_gap, show))
        steps.append((self.time_error, self._goto(State.IDLE)))

        self._render(message)
        self.scheduler.schedule_sequence(steps)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _display_for_state(self):
        if self.state == State.IDLE:
            return f"{self.current_query[0]} {self.current_query[1]}"
        if self.state == State.WORKING:
            return DisplayText.WORKING
        if self.state == State.SHOWING_RESULT:
            return DisplayText.RESULT.format(self.last_result)
        if self.state == State.SHOWING_ERROR:
            return DisplayText.ERROR
        if self.state == State.SUBMITTING_RESULT:
            return DisplayText.SUBMITTING
        if self.state == State.INCORRECT_SUBMISSION:
            return DisplayText.INCORRECT
        if self.state == State.COMPLETE:
            return DisplayText.CORRECT
        return DisplayText.BLANK

    def _update_display(self):
        self._render(self._display_for_state())

    def _render(self, text):
        self.display_text = text
        self.host.display.render_text(text)

    def _play(self, sound):
        if self.host.audio is not None:
            self.host.audio.play(sound)

    # ------------------------------------------------------------------
    # Scripted commands
    # ------------------------------------------------------------------

    @staticmethod
    def _valid_token(token):
        if token in (QUERY_BUTTON, SUBMIT_BUTTON):
            return True
        return all(char in BUTTON_INDEX for char in token)

    async def process_command(self, command):
        """
        Apply a space separated list of presses, e.g. ``press bk query``.

        Each token is ``query``, ``submit`` or a run of letters. The whole
        command is rejected without effect if any token is anything else.
        Stops at the first strike.
        """
        tokens = command.lower().split()
        if tokens and tokens[0] == "press":
            tokens = tokens[1:]
        if not tokens or not all(self._valid_token(t) for t in tokens):
            self.log("debug", f"Rejected command {command!r}")
            return CommandOutcome.INVALID

        self._struck = False
        for token in tokens:
            if token in (QUERY_BUTTON, SUBMIT_BUTTON):
                self.press_button(token)
            else:
                for label in token:
                    self.press_button(label)
                    if self._struck:
                        return CommandOutcome.STRIKE
            if self._struck:
                return CommandOutcome.STRIKE
            await asyncio.sleep(self.command_delay)

        if self.state == State.SUBMITTING_RESULT:
            if self.query_string == self.correct_submission():
                return CommandOutcome.SOLVE
            return CommandOutcome.STRIKE
        return CommandOutcome.ACCEPTED

    def status(self):
        """Snapshot for the console."""
        return {
            "unit": self.unit_tag,
            "state": self.state,
            "query": self.query_string,
            "last_result": self.last_result,
            "display": self.display_text,
            "timer_pending": self.scheduler.pending,
        }
