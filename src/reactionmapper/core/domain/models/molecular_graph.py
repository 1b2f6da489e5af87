#!/usr/bin/env python3
# src/reactionmapper/core/domain/models/molecular_graph.py

"""
Domain model representing a reaction participant as a graph.
"""

from typing import Dict, Iterator, List, Optional

from .atom import Atom
from .bond import Bond


class MolecularGraph:
    """Graph representation of a molecule or fragment.

    The container owns its atoms and bonds. It is not mutated while it is
    being matched; ``copy`` and ``without_hydrogens`` return new containers
    whose atoms keep the original ``atom_id`` values.
    """

    def __init__(
        self,
        atoms: List[Atom],
        bonds: List[Bond],
        mol_id: Optional[str] = None,
    ):
        """
        Initialize a MolecularGraph.

        Args:
            atoms: List of Atom objects
            bonds: List of Bond objects between those atoms
            mol_id: Optional identifier of the molecule
        """
        self.atoms = atoms
        self.bonds = bonds
        self.mol_id = mol_id

    @property
    def atom_count(self) -> int:
        return len(self.atoms)

    @property
    def bond_count(self) -> int:
        return len(self.bonds)

    def __len__(self) -> int:
        return len(self.atoms)

    def __iter__(self) -> Iterator[Atom]:
        return iter(self.atoms)

    def contains(self, atom: Atom) -> bool:
        return any(a is atom for a in self.atoms)

    def index_of(self, atom: Atom) -> int:
        """Return the position of ``atom`` in this container, or -1."""
        for i, a in enumerate(self.atoms):
            if a is atom:
                return i
        return -1

    def get_atom_by_id(self, atom_id: Optional[str]) -> Optional[Atom]:
        if atom_id is None:
            return None
        for atom in self.atoms:
            if atom.atom_id == atom_id:
                return atom
        return None

    def get_bond(self, a: Atom, b: Atom) -> Optional[Bond]:
        for bond in self.bonds:
            if bond.connects(a, b):
                return bond
        return None

    def get_connected_bonds(self, atom: Atom) -> List[Bond]:
        return [bond for bond in self.bonds if bond.contains(atom)]

    def neighbors(self, atom: Atom) -> List[Atom]:
        return [bond.other(atom) for bond in self.get_connected_bonds(atom)]

    def copy(self) -> "MolecularGraph":
        """Deep-copy the container. Atom identities are preserved, objects are not."""
        replacements: Dict[int, Atom] = {id(atom): atom.copy() for atom in self.atoms}
        bonds = [
            Bond(
                atom1=replacements[id(bond.atom1)],
                atom2=replacements[id(bond.atom2)],
                order=bond.order,
                stereo=bond.stereo,
            )
            for bond in self.bonds
        ]
        return MolecularGraph(
            [replacements[id(atom)] for atom in self.atoms], bonds, self.mol_id
        )

    def without_hydrogens(self) -> "MolecularGraph":
        """Return a copy with explicit hydrogens folded into implicit counts."""
        clone = self.copy()
        heavy = [atom for atom in clone.atoms if not atom.is_hydrogen]
        for bond in clone.bonds:
            if bond.atom1.is_hydrogen and not bond.atom2.is_hydrogen:
                bond.atom2.implicit_hydrogens += 1
            elif bond.atom2.is_hydrogen and not bond.atom1.is_hydrogen:
                bond.atom1.implicit_hydrogens += 1
        bonds = [
            bond
            for bond in clone.bonds
            if not bond.atom1.is_hydrogen and not bond.atom2.is_hydrogen
        ]
        return MolecularGraph(heavy, bonds, self.mol_id)

    def __repr__(self) -> str:
        return (
            f"MolecularGraph(mol_id={self.mol_id!r}, atoms={self.atom_count}, "
            f"bonds={self.bond_count})"
        )
