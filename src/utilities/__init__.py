# File: src/utilities/__init__.py
"""Utility modules for Two Bits."""

from .labels import BUTTON_LABELS, BUTTON_INDEX, UNSET, DisplayText, Sounds, State
from .logger import LogLevel, ModuleLogger
from .rules import RuleSet, evaluate_chain, render_grid
from .seed import SerialNumberError, calculate_initial_code, derive_initial_code
from .config import load_config, get_timing_settings
from .context import HostContext

__all__ = [
    'BUTTON_LABELS',
    'BUTTON_INDEX',
    'UNSET',
    'DisplayText',
    'Sounds',
    'State',
    'LogLevel',
    'ModuleLogger',
    'RuleSet',
    'evaluate_chain',
    'render_grid',
    'SerialNumberError',
    'calculate_initial_code',
    'derive_initial_code',
    'load_config',
    'get_timing_settings',
    'HostContext',
    ]
