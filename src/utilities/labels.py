"""
Fixed labels and display strings shared by every Two Bits unit.
"""

# The ten physical buttons, in grid order. Also the query alphabet.
BUTTON_LABELS = ("b", "c", "d", "e", "g", "k", "p", "t", "v", "z")

# Button identity -> index, built once.
BUTTON_INDEX = {label: i for i, label in enumerate(BUTTON_LABELS)}

# Serial number letters, for the first-letter modifier (A=1 .. Z=26)
SERIAL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

UNSET = "_"

QUERY_BUTTON = "query"
SUBMIT_BUTTON = "submit"


class State:
    """Puzzle states."""
    INACTIVE = "INACTIVE"
    IDLE = "IDLE"
    WORKING = "WORKING"
    SHOWING_RESULT = "SHOWING_RESULT"
    SHOWING_ERROR = "SHOWING_ERROR"
    SUBMITTING_RESULT = "SUBMITTING_RESULT"
    INCORRECT_SUBMISSION = "INCORRECT_SUBMISSION"
    COMPLETE = "COMPLETE"


class DisplayText:
    """Strings written to the unit's display."""
    WORKING = "Working..."
    RESULT = "Result: {:02d}"
    ERROR = "ERROR"
    SUBMITTING = "SUBMITTING"
    INCORRECT = "INCORRECT"
    CORRECT = "CORRECT"
    BLANK = ""


class Sounds:
    """Sound keys passed to the host audio collaborator."""
    BUTTON_PRESS = "button_press"
    PROCESSING = "processing"


class CommandOutcome:
    """Result of a scripted press command."""
    INVALID = "INVALID"    # Rejected before any press, no strike
    ACCEPTED = "ACCEPTED"  # Every press applied, nothing to report
    STRIKE = "STRIKE"
    SOLVE = "SOLVE"
