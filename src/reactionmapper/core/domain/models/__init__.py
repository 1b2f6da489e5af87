"""Domain model classes."""

from .atom import Atom
from .bond import Bond, BondOrder, BondStereo
from .molecular_graph import MolecularGraph
from .reaction import Reaction, ReactionContainer
from .combination import Combination, JobTable
from .mapping_algorithm import MappingAlgorithm, MatchSettings
from .mcs_solution import MCSSolution
from .strategy_result import StrategyResult
from .be_matrix import BEMatrix, MatrixSentinel
from .block import Block

__all__ = [
    "Atom",
    "Bond",
    "BondOrder",
    "BondStereo",
    "MolecularGraph",
    "Reaction",
    "ReactionContainer",
    "Combination",
    "JobTable",
    "MappingAlgorithm",
    "MatchSettings",
    "MCSSolution",
    "StrategyResult",
    "BEMatrix",
    "MatrixSentinel",
    "Block",
]
