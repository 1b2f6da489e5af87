"""Implementation of (reactant, product) matching with NetworkX graph isomorphism."""

import logging
from typing import Any, Dict, Optional, Set

import networkx as nx
from networkx.algorithms.isomorphism import ISMAGS

from ..interfaces.structure_matcher import StructureMatcher
from ..models.atom import Atom
from ..models.mapping_algorithm import MatchSettings
from ..models.molecular_graph import MolecularGraph
from .cycle_finder import CycleFinder
from ....infrastructure.adapters.networkx_adapter import NetworkXAdapter


class IsomorphismMatcher(StructureMatcher):
    """Matcher that uses the largest common induced subgraph found by ISMAGS.

    Pure Python, so it is only practical for small molecules; it needs no
    sanitisable structures and is used where RDKit perception would get in
    the way.
    """

    def __init__(self):
        self._cycle_finder = CycleFinder()
        self.logger = logging.getLogger(__name__)

    def _create_networkx_graph(
        self, container: MolecularGraph, ring_atoms: Optional[Set[Atom]] = None
    ) -> nx.Graph:
        G = NetworkXAdapter.to_graph(container)
        for node, data in G.nodes(data=True):
            data["in_ring"] = ring_atoms is not None and data["atom"] in ring_atoms
        return G

    @staticmethod
    def _node_match(match_rings: bool):
        def node_match(n1: Dict[str, Any], n2: Dict[str, Any]) -> bool:
            if n1["element"] != n2["element"]:
                return False
            if match_rings and n1["in_ring"] != n2["in_ring"]:
                return False
            return True

        return node_match

    @staticmethod
    def _edge_match(e1: Dict[str, Any], e2: Dict[str, Any]) -> bool:
        return e1.get("order") == e2.get("order")

    def _largest_common_mapping(
        self,
        query: MolecularGraph,
        target: MolecularGraph,
        match_bonds: bool,
        match_rings: bool,
    ) -> Dict[int, int]:
        query_rings = self._cycle_finder.ring_atoms(query) if match_rings else None
        target_rings = self._cycle_finder.ring_atoms(target) if match_rings else None
        query_graph = self._create_networkx_graph(query, query_rings)
        target_graph = self._create_networkx_graph(target, target_rings)

        matcher = ISMAGS(
            query_graph,
            target_graph,
            node_match=self._node_match(match_rings),
            edge_match=self._edge_match if match_bonds else None,
        )
        for mapping in matcher.largest_common_subgraph(symmetry=False):
            return mapping
        return {}

    def match(
        self, query: MolecularGraph, target: MolecularGraph, settings: MatchSettings
    ) -> Dict[Atom, Atom]:
        if query.atom_count == 0 or target.atom_count == 0:
            return {}

        mapping = self._largest_common_mapping(
            query, target, settings.match_bonds, settings.match_rings
        )
        self.logger.debug(
            "Isomorphism matched %d atoms between %s and %s",
            len(mapping),
            query.mol_id,
            target.mol_id,
        )
        return {query.atoms[i]: target.atoms[j] for i, j in mapping.items()}

    def is_subgraph(
        self,
        educt: MolecularGraph,
        product: MolecularGraph,
        match_bonds: bool = False,
        match_rings: bool = False,
    ) -> bool:
        if educt.atom_count <= product.atom_count:
            smaller, larger = educt, product
        else:
            smaller, larger = product, educt
        if smaller.atom_count == 0:
            return True

        mapping = self._largest_common_mapping(smaller, larger, match_bonds, match_rings)
        return len(mapping) == smaller.atom_count
