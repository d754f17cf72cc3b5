"""Combine Bead/Motor position text files found in a folder."""

__version__ = "0.1.0"
