"""Command-line interfaces and other presentation layer components."""

from .cli.map_reaction import main as map_reaction_main

__all__ = [
    "map_reaction_main",
]
