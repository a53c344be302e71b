"""Outfit of the day picker with photo journaling."""

__version__ = "1.0.0"
