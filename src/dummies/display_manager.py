# File: src/dummies/display_manager.py
"""Dummy DisplayManager - keeps every rendered string instead of drawing it."""


class DisplayManager:
    """Drop-in dummy for DisplayManager."""

    def __init__(self, *args, **kwargs):
        self.text = ""
        self.history = []

    def render_text(self, text):
        self.text = text
        self.history.append(text)

    def clear_history(self):
        self.history = []
