"""Core domain models, interfaces and services for reaction mapping."""

from .domain.models.reaction import Reaction, ReactionContainer
from .domain.models.mapping_algorithm import MappingAlgorithm
from .domain.models.strategy_result import StrategyResult
from .domain.interfaces.structure_matcher import StructureMatcher
from .domain.interfaces.reaction_standardizer import ReactionStandardizer

__all__ = [
    "Reaction",
    "ReactionContainer",
    "MappingAlgorithm",
    "StrategyResult",
    "StructureMatcher",
    "ReactionStandardizer",
]
