"""Peek: capture the active window and ask Gemini about it."""

__version__ = "0.1.0"
