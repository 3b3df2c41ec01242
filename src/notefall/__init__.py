"""Notefall: a piano rhythm game."""

__version__ = "0.1.0"
