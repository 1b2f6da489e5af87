"""Concurrent multi-strategy atom-atom mapping of chemical reactions."""

__version__ = "0.1.0"
