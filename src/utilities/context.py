# File: /src/utilities/context.py


def _noop():
    pass


class HostContext:
    """
    References to the host collaborators a puzzle unit talks to: the bomb's
    widget info, the unit's text display, its speaker, and the host's
    strike/pass callbacks. Any callback left out becomes a no-op.
    """
    def __init__(self, bomb_info, display, audio=None, on_strike=None, on_pass=None):
        self.bomb_info = bomb_info
        self.display = display
        self.audio = audio
        self.on_strike = on_strike or _noop
        self.on_pass = on_pass or _noop
