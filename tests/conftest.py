"""Shared fixtures and molecule builders for the reactionmapper tests."""

import threading
from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from reactionmapper.core.domain.interfaces.structure_matcher import StructureMatcher
from reactionmapper.core.domain.models.atom import Atom
from reactionmapper.core.domain.models.bond import Bond, BondOrder
from reactionmapper.core.domain.models.mapping_algorithm import MatchSettings
from reactionmapper.core.domain.models.molecular_graph import MolecularGraph
from reactionmapper.core.domain.models.reaction import Reaction

BondSpec = Tuple[int, int, BondOrder]


def make_molecule(
    elements: Sequence[str],
    bonds: Sequence[BondSpec] = (),
    prefix: str = "M",
    coordinates: Optional[Sequence[Tuple[float, float]]] = None,
) -> MolecularGraph:
    """Build a container with atom ids ``{prefix}A{i}``."""
    atoms = [
        Atom(
            atom_id=f"{prefix}A{i}",
            element=element,
            coordinates=coordinates[i] if coordinates else None,
        )
        for i, element in enumerate(elements)
    ]
    graph_bonds = [Bond(atoms[i], atoms[j], order) for i, j, order in bonds]
    return MolecularGraph(atoms, graph_bonds, prefix)


def ethanol(prefix: str = "R0") -> MolecularGraph:
    """C-C-O without hydrogens."""
    return make_molecule(
        ["C", "C", "O"],
        [(0, 1, BondOrder.SINGLE), (1, 2, BondOrder.SINGLE)],
        prefix,
        coordinates=[(0.0, 0.0), (1.5, 0.0), (3.0, 0.0)],
    )


def acetaldehyde(prefix: str = "P0") -> MolecularGraph:
    """C-C=O without hydrogens."""
    return make_molecule(
        ["C", "C", "O"],
        [(0, 1, BondOrder.SINGLE), (1, 2, BondOrder.DOUBLE)],
        prefix,
        coordinates=[(0.0, 0.0), (1.5, 0.0), (2.5, 1.0)],
    )


def cyclohexane(prefix: str) -> MolecularGraph:
    return make_molecule(
        ["C"] * 6, [(i, (i + 1) % 6, BondOrder.SINGLE) for i in range(6)], prefix
    )


def methanol_with_hydrogens(prefix: str = "R0") -> MolecularGraph:
    """C-O with four explicit hydrogens."""
    return make_molecule(
        ["C", "O", "H", "H", "H", "H"],
        [
            (0, 1, BondOrder.SINGLE),
            (0, 2, BondOrder.SINGLE),
            (0, 3, BondOrder.SINGLE),
            (0, 4, BondOrder.SINGLE),
            (1, 5, BondOrder.SINGLE),
        ],
        prefix,
    )


class ElementMatcher(StructureMatcher):
    """Deterministic matcher pairing atoms of equal element in container order."""

    def __init__(self, fail_on: Sequence[str] = ()):
        self.fail_on = set(fail_on)
        self.calls: List[Tuple[str, str, MatchSettings]] = []
        self._lock = threading.Lock()

    def match(
        self, query: MolecularGraph, target: MolecularGraph, settings: MatchSettings
    ) -> Dict[Atom, Atom]:
        with self._lock:
            self.calls.append((query.mol_id, target.mol_id, settings))
        if query.mol_id in self.fail_on:
            raise RuntimeError(f"cannot match {query.mol_id}")

        mapping = {}
        used = set()
        for atom in query.atoms:
            for candidate in target.atoms:
                if id(candidate) in used or candidate.element != atom.element:
                    continue
                mapping[atom] = candidate
                used.add(id(candidate))
                break
        return mapping

    def is_subgraph(self, educt, product, match_bonds=False, match_rings=False):
        smaller, larger = sorted([educt, product], key=lambda g: g.atom_count)
        return len(self.match(smaller, larger, None)) == smaller.atom_count


@pytest.fixture
def element_matcher():
    return ElementMatcher()


@pytest.fixture
def simple_reaction():
    """C-C-O >> C-C=O"""
    return Reaction([ethanol()], [acetaldehyde()], "rxn-1")
