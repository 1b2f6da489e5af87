"""Core domain models and interfaces."""

from .models.molecular_graph import MolecularGraph
from .models.reaction import Reaction
from .interfaces.structure_matcher import StructureMatcher
from .interfaces.reaction_standardizer import ReactionStandardizer

__all__ = [
    "MolecularGraph",
    "Reaction",
    "StructureMatcher",
    "ReactionStandardizer",
]
