"""Command-line interface modules."""

from .map_reaction import main as map_reaction_main

__all__ = [
    "map_reaction_main",
]
