# File: src/dummies/__init__.py
"""
Drop-in host collaborators for desktop runs and tests.

These mirror the interfaces the host gives a puzzle unit (widget queries,
text display, audio) but keep everything in memory.
"""
