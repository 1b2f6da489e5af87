#!/usr/bin/env python3
# src/reactionmapper/core/domain/models/be_matrix.py

"""
Bond-electron matrix of a set of molecules (Dugundji-Ugi theory).
"""

from enum import IntEnum
from typing import Callable, List, Mapping, Optional, Sequence

import numpy as np

from ..exceptions import MappingError, OrderingMismatchError
from .atom import Atom
from .bond import Bond, BondOrder
from .molecular_graph import MolecularGraph


class MatrixSentinel(IntEnum):
    """Values of the trailing lone-pair row and column."""

    LONE_PAIR = 100
    CORNER = 200


BOND_ORDER_VALUES = {
    BondOrder.SINGLE: 1.0,
    BondOrder.DOUBLE: 2.0,
    BondOrder.TRIPLE: 3.0,
    BondOrder.QUADRUPLE: 4.0,
}


def convert_bond_order(bond: Bond) -> float:
    """Numeric bond order; anything that is not single to quadruple counts as 1."""
    return BOND_ORDER_VALUES.get(bond.order, 1.0)


# (container, atom, skip_hydrogen) -> free valence electrons
ValenceModel = Callable[[MolecularGraph, Atom, bool], float]


class BEMatrix:
    """Square matrix over the mapped atoms of a molecule set.

    Cell (i, i) holds the free valence electrons of atom i, cell (i, j)
    the order of the bond between atoms i and j (0 when unbonded). The
    extra last row and column hold ``MatrixSentinel.LONE_PAIR`` with
    ``MatrixSentinel.CORNER`` in the corner. The matrix is owned by one
    thread; share it with ``copy()``.
    """

    def __init__(
        self,
        skip_hydrogen: bool,
        molecules: Sequence[MolecularGraph],
        mappings: Mapping[Atom, Atom],
        valence_model: ValenceModel,
        bonds: Optional[List[Bond]] = None,
    ):
        """
        Initialize an empty BEMatrix; call ``set_matrix_atoms`` to fill it.

        Args:
            skip_hydrogen: Whether hydrogen atoms are left out
            molecules: Molecule set the matrix describes
            mappings: Atom-atom mapping selecting the participating atoms
            valence_model: Free valence electron function
            bonds: Bonds used for stereo lookups (defaults to all bonds)
        """
        self.skip_hydrogen = skip_hydrogen
        self.molecules = list(molecules)
        self.mappings = mappings
        self._valence_model = valence_model
        if bonds is None:
            bonds = [bond for mol in self.molecules for bond in mol.bonds]
        self.bonds = bonds
        self.atom_array: List[Atom] = []
        self.matrix = np.zeros((0, 0))

    def set_matrix_atoms(self) -> None:
        """Select the mapped atoms of the molecule set and fill the matrix."""
        mapped = {id(atom) for atom in self.mappings.keys()}
        mapped.update(id(atom) for atom in self.mappings.values())

        self.atom_array = []
        seen = set()
        for container in self.molecules:
            for atom in container.atoms:
                if self.skip_hydrogen and atom.is_hydrogen:
                    continue
                if id(atom) not in mapped or id(atom) in seen:
                    continue
                seen.add(id(atom))
                self.atom_array.append(atom)
        self._set_matrix()

    def _set_matrix(self) -> None:
        n = len(self.atom_array)
        self.matrix = np.zeros((n + 1, n + 1))
        for i, atom in enumerate(self.atom_array):
            self.matrix[i, i] = self._get_free_valence_electrons(atom)
        for i in range(n):
            for j in range(i + 1, n):
                order = self.get_bond_order(self.atom_array[i], self.atom_array[j])
                self.matrix[i, j] = order
                self.matrix[j, i] = order
        self.matrix[n, :n] = MatrixSentinel.LONE_PAIR
        self.matrix[:n, n] = MatrixSentinel.LONE_PAIR
        self.matrix[n, n] = MatrixSentinel.CORNER

    def _get_free_valence_electrons(self, atom: Atom) -> float:
        free = 0.0
        for mol in self.molecules:
            if mol.contains(atom):
                free = self._valence_model(mol, atom, self.skip_hydrogen)
        return free

    @property
    def size(self) -> int:
        return self.matrix.shape[0]

    def get_value(self, i: int, j: int) -> float:
        return float(self.matrix[i, j])

    def get_index_of_atom_id(self, atom_id: str) -> int:
        for i, atom in enumerate(self.atom_array):
            if atom.atom_id == atom_id:
                return i
        return -1

    def get_order(self, a1: Atom, a2: Atom) -> float:
        """Matrix value for two atoms, looked up by atom id."""
        i = self.get_index_of_atom_id(a1.atom_id)
        j = self.get_index_of_atom_id(a2.atom_id)
        if i == -1 or j == -1:
            raise MappingError(f"Atoms {a1!r}, {a2!r} are not in the matrix")
        return self.get_value(i, j)

    def get_bond_order(self, a: Atom, b: Atom) -> float:
        """Order of the bond between two atoms in any molecule, 0 if unbonded."""
        for mol in self.molecules:
            bond = mol.get_bond(a, b)
            if bond is not None:
                return convert_bond_order(bond)
        return 0.0

    def get_bond(self, a: Atom, b: Atom) -> Optional[Bond]:
        found = None
        for bond in self.bonds:
            if bond.contains(a) and bond.contains(b):
                found = bond
        return found

    def get_bond_stereo(self, a: Atom, b: Atom) -> int:
        bond = self.get_bond(a, b)
        if bond is None:
            return 0
        return int(bond.stereo)

    def pivot(self, i1: int, i2: int) -> None:
        """Swap atoms i1 and i2 together with their rows and columns."""
        self.atom_array[i1], self.atom_array[i2] = (
            self.atom_array[i2],
            self.atom_array[i1],
        )
        self.matrix[:, [i1, i2]] = self.matrix[:, [i2, i1]]
        self.matrix[[i1, i2], :] = self.matrix[[i2, i1], :]

    def order_atom_array(self, ordered_atoms: Sequence[Atom]) -> List[int]:
        """
        Reorder the matrix to follow ``ordered_atoms``.

        Args:
            ordered_atoms: The target order, one entry per matrix atom

        Returns:
            For each target position, the index the atom held before it moved

        Raises:
            OrderingMismatchError: If the sizes differ or an atom is unknown;
                the matrix is left unchanged
        """
        if len(ordered_atoms) != len(self.atom_array):
            raise OrderingMismatchError(
                f"The matrix has not been ordered: {len(self.atom_array)} != "
                f"{len(ordered_atoms)}"
            )
        for atom in ordered_atoms:
            if self.get_index_of_atom_id(atom.atom_id) == -1:
                raise OrderingMismatchError(
                    f"The matrix has not been ordered: {atom!r} is not a matrix atom"
                )

        canonical_index = []
        for i, atom in enumerate(ordered_atoms):
            di = self.get_index_of_atom_id(atom.atom_id)
            if di != i:
                self.pivot(di, i)
            canonical_index.append(di)
        return canonical_index

    def get_atoms(self) -> List[Atom]:
        return list(self.atom_array)

    def get_atom(self, pos: int) -> Atom:
        if pos >= len(self.atom_array):
            raise MappingError(f"Passed index {pos} out of range")
        return self.atom_array[pos]

    def get_atom_container(self, atom: Atom) -> Optional[MolecularGraph]:
        for mol in self.molecules:
            if mol.get_atom_by_id(atom.atom_id) is not None:
                return mol
        return None

    def copy(self) -> "BEMatrix":
        clone = BEMatrix(
            self.skip_hydrogen,
            self.molecules,
            self.mappings,
            self._valence_model,
            self.bonds,
        )
        clone.atom_array = list(self.atom_array)
        clone.matrix = self.matrix.copy()
        return clone

    def __str__(self) -> str:
        labels = [atom.atom_id for atom in self.atom_array] + ["LP"]
        rows = [" ".join(f"{label:>6}" for label in [""] + labels)]
        for label, row in zip(labels, self.matrix):
            rows.append(" ".join([f"{label:>6}"] + [f"{value:6.1f}" for value in row]))
        return "\n".join(rows)
