"""Domain model for a structurally signed fragment paired across two molecules."""

from typing import Dict, List, Optional, Tuple

import numpy as np

from .atom import Atom
from .molecular_graph import MolecularGraph


class Block:
    """A set of atoms of one container, each mapped to an atom of a partner block.

    Blocks order by their canonical signature string; two blocks with the
    same string are the same kind of fragment.
    """

    def __init__(self, container: MolecularGraph):
        self.container = container
        self.atom_map: Dict[Atom, Atom] = {}
        self.partner: Optional["Block"] = None
        self._signature = None
        self._signature_string: Optional[str] = None
        self._center_point: Optional[Tuple[float, float]] = None
        self._bounds: Optional[Tuple[float, float, float, float]] = None

    def add_mapping(self, atom: Atom, partner: Atom) -> None:
        self.atom_map[atom] = partner
        self._signature = None
        self._signature_string = None
        self._bounds = None
        self._center_point = None

    def set_partner(self, partner: "Block") -> None:
        self.partner = partner

    def get_atoms(self) -> List[Atom]:
        return list(self.atom_map.keys())

    @property
    def atom_count(self) -> int:
        return len(self.atom_map)

    def get_subgraph_signature(self):
        if self._signature is None:
            # Imported here: implementations depend on this models package.
            from ..implementations.subgraph_signature import SubgraphSignature

            self._signature = SubgraphSignature(self.container, self.get_atoms())
        return self._signature

    def get_signature_string(self) -> str:
        if self._signature_string is None:
            self._signature_string = self.get_subgraph_signature().to_canonical_string()
        return self._signature_string

    def get_labels(self) -> List[int]:
        return self.get_subgraph_signature().get_canonical_labels()

    def get_mapping_permutation(self) -> List[int]:
        """Partner positions of this block's atoms, both compacted to 0..n-1.

        Requires a partner block.
        """
        if self.partner is None:
            raise ValueError("Block has no partner")

        index_map = {}
        for atom, partner_atom in self.atom_map.items():
            index_map[self.container.index_of(atom)] = self.partner.container.index_of(
                partner_atom
            )

        compact = self._compact_map(list(index_map.keys()))
        compact_partner = self._compact_map(list(index_map.values()))
        permutation = [0] * len(index_map)
        for index, partner_index in index_map.items():
            permutation[compact[index]] = compact_partner[partner_index]
        return permutation

    @staticmethod
    def _compact_map(indices: List[int]) -> Dict[int, int]:
        return {index: i for i, index in enumerate(sorted(indices))}

    def get_bounds(self) -> Optional[Tuple[float, float, float, float]]:
        """(min_x, min_y, max_x, max_y) of the atoms with 2-D positions."""
        if self._bounds is None:
            points = [atom.coordinates for atom in self.atom_map if atom.coordinates]
            if not points:
                return None
            coords = np.array(points, dtype=float)
            low = coords.min(axis=0)
            high = coords.max(axis=0)
            self._bounds = (low[0], low[1], high[0], high[1])
        return self._bounds

    def get_center_point(self) -> Optional[Tuple[float, float]]:
        if self._center_point is None:
            bounds = self.get_bounds()
            if bounds is None:
                return None
            self._center_point = (
                (bounds[0] + bounds[2]) / 2.0,
                (bounds[1] + bounds[3]) / 2.0,
            )
        return self._center_point

    def set_center_point(self, point: Tuple[float, float]) -> None:
        self._center_point = point

    def __eq__(self, other) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return self is other

    def __hash__(self) -> int:
        return id(self)

    # Ordering compares signatures only; equality stays identity.
    def __lt__(self, other: "Block") -> bool:
        return self.get_signature_string() < other.get_signature_string()

    def __le__(self, other: "Block") -> bool:
        return self.get_signature_string() <= other.get_signature_string()

    def __gt__(self, other: "Block") -> bool:
        return self.get_signature_string() > other.get_signature_string()

    def __ge__(self, other: "Block") -> bool:
        return self.get_signature_string() >= other.get_signature_string()

    def __repr__(self) -> str:
        indices = [self.container.index_of(atom) for atom in self.get_atoms()]
        return f"{self.container.mol_id} {indices} {self.get_signature_string()}"
