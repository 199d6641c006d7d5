# filepath: src/modes/__init__.py
"""Top-level package for puzzle module classes."""

from .manifest import MODE_REGISTRY, create_module, get_mode_class
from .two_bits import CommandOutcome, TwoBits

__all__ = [
    "MODE_REGISTRY",
    "CommandOutcome",
    "TwoBits",
    "create_module",
    "get_mode_class",
]
