# File: src/dummies/audio_manager.py
"""Dummy AudioManager - records sounds instead of playing them."""


class AudioManager:
    """Drop-in dummy for AudioManager."""

    def __init__(self, *args, **kwargs):
        self.played = []

    def play(self, sound):
        self.played.append(sound)
