"""Ring perception on MolecularGraph containers using NetworkX."""

import logging
from itertools import islice
from typing import List, Set

import networkx as nx

from ..models.atom import Atom
from ..models.molecular_graph import MolecularGraph
from ....infrastructure.adapters.networkx_adapter import NetworkXAdapter

logger = logging.getLogger(__name__)


class CycleFinder:
    """Finds all elementary cycles, falling back to relevant cycles.

    Enumerating every elementary cycle explodes on fused ring systems, so
    once more than ``cycle_limit`` cycles are seen the minimum cycle basis
    is used instead.
    """

    def __init__(self, cycle_limit: int = 1000):
        self.cycle_limit = cycle_limit

    def find(self, container: MolecularGraph) -> List[List[Atom]]:
        """Return cycles as lists of atoms."""
        G = NetworkXAdapter.to_graph(container)
        if G.number_of_edges() < 3:
            return []

        cycles = list(islice(nx.simple_cycles(G), self.cycle_limit + 1))
        if len(cycles) > self.cycle_limit:
            logger.debug(
                "More than %d elementary cycles in %s, using relevant cycles",
                self.cycle_limit,
                container.mol_id,
            )
            cycles = nx.minimum_cycle_basis(G)

        return [[G.nodes[node]["atom"] for node in cycle] for cycle in cycles]

    def count(self, container: MolecularGraph) -> int:
        return len(self.find(container))

    def ring_atoms(self, container: MolecularGraph) -> Set[Atom]:
        """Atoms belonging to at least one ring."""
        G = NetworkXAdapter.to_graph(container)
        members: Set[Atom] = set()
        for cycle in nx.cycle_basis(G):
            members.update(G.nodes[node]["atom"] for node in cycle)
        return members
