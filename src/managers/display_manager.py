"""Manages the Two Bits text display on a terminal."""

from utilities.logger import ModuleLogger


class DisplayManager:
    """Terminal stand-in for the unit's single line text display.

    Every call replaces what is shown. Repeated identical text is still
    counted as a redraw, because the error flash alternates between the same
    two strings.
    """

    FRAME_WIDTH = 12

    def __init__(self, unit_tag="", output=print):
        ModuleLogger.info("DISP", f"[INIT] DisplayManager - unit: {unit_tag}")
        self.unit_tag = unit_tag
        self.text = ""
        self.redraws = 0
        self._output = output

    def render_text(self, text):
        self.text = text
        self.redraws += 1
        self._output(self.frame(text))

    def frame(self, text):
        """Boxed one-line rendering, e.g. ``#1 [ b _        ]``."""
        return f"{self.unit_tag} [ {text:<{self.FRAME_WIDTH}} ]"
