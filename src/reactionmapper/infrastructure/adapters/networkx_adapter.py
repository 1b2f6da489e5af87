"""Adapter exposing MolecularGraph containers as NetworkX graphs."""

from typing import Iterable, Optional

import networkx as nx

from ...core.domain.models.atom import Atom
from ...core.domain.models.molecular_graph import MolecularGraph


class NetworkXAdapter:
    """Converts containers to ``nx.Graph`` keyed by atom position."""

    @staticmethod
    def to_graph(
        container: MolecularGraph, atoms: Optional[Iterable[Atom]] = None
    ) -> nx.Graph:
        """Convert a container, or the subgraph induced by ``atoms``, to NetworkX.

        Nodes are atom positions in the container; each node carries its
        ``element`` and the ``atom`` object, each edge its ``order`` name.
        """
        selected = None
        if atoms is not None:
            selected = {id(atom) for atom in atoms}

        G = nx.Graph()
        positions = {}
        for i, atom in enumerate(container.atoms):
            if selected is not None and id(atom) not in selected:
                continue
            positions[id(atom)] = i
            G.add_node(
                i,
                element=atom.element.strip().upper(),
                charge=atom.formal_charge,
                atom=atom,
            )

        for bond in container.bonds:
            i = positions.get(id(bond.atom1))
            j = positions.get(id(bond.atom2))
            if i is None or j is None:
                continue
            G.add_edge(i, j, order=bond.order.name)

        return G
