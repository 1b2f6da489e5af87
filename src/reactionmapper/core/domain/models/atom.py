#!/usr/bin/env python3
# src/reactionmapper/core/domain/models/atom.py

"""
Domain model representing an atom in a reaction participant.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(eq=False)
class Atom:
    """Represents an atom in a molecular structure.

    Atoms compare and hash by identity so they can key atom-atom mappings;
    ``atom_id`` is the stable identity used to re-locate an atom in a copy.
    """

    atom_id: Optional[str]
    element: str
    coordinates: Optional[Tuple[float, float]] = None
    formal_charge: int = 0
    implicit_hydrogens: int = 0

    @property
    def is_hydrogen(self) -> bool:
        return self.element.strip().upper() == "H"

    def copy(self) -> "Atom":
        """Return a new atom object carrying the same identity and attributes."""
        return Atom(
            atom_id=self.atom_id,
            element=self.element,
            coordinates=self.coordinates,
            formal_charge=self.formal_charge,
            implicit_hydrogens=self.implicit_hydrogens,
        )

    def __repr__(self) -> str:
        return f"Atom({self.atom_id!r}, {self.element!r})"
