"""Interfaces for the external chemistry toolkit."""

from .structure_matcher import StructureMatcher
from .reaction_standardizer import ReactionStandardizer

__all__ = [
    "StructureMatcher",
    "ReactionStandardizer",
]
