"""Interface for common-substructure matching strategies."""

from abc import ABC, abstractmethod
from typing import Dict

from ..models.atom import Atom
from ..models.mapping_algorithm import MatchSettings
from ..models.molecular_graph import MolecularGraph


class StructureMatcher(ABC):
    """Abstract base class for (reactant, product) matching backends."""

    @abstractmethod
    def match(
        self, query: MolecularGraph, target: MolecularGraph, settings: MatchSettings
    ) -> Dict[Atom, Atom]:
        """
        Find the best common-substructure mapping between two containers.

        Args:
            query: Reactant-side container
            target: Product-side container
            settings: Feature flags selected by the strategy and ring heuristics

        Returns:
            Mapping from query atoms to target atoms (matched atoms only)
        """
        pass

    @abstractmethod
    def is_subgraph(
        self,
        educt: MolecularGraph,
        product: MolecularGraph,
        match_bonds: bool = False,
        match_rings: bool = False,
    ) -> bool:
        """Test whether the smaller of the two containers is contained in the other."""
        pass
