#!/usr/bin/env python3
# src/reactionmapper/core/domain/models/bond.py

"""
Domain model representing a chemical bond between atoms.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto

from .atom import Atom


class BondOrder(Enum):
    """Enumeration of possible bond orders."""

    SINGLE = auto()
    DOUBLE = auto()
    TRIPLE = auto()
    QUADRUPLE = auto()
    AROMATIC = auto()


class BondStereo(IntEnum):
    """Bond stereo flags, valued with their MDL molfile codes."""

    NONE = 0
    UP = 1
    E_OR_Z = 3
    UP_OR_DOWN = 4
    DOWN = 6


@dataclass(eq=False)
class Bond:
    """Represents a chemical bond between two atoms."""

    atom1: Atom
    atom2: Atom
    order: BondOrder = BondOrder.SINGLE
    stereo: BondStereo = BondStereo.NONE

    def contains(self, atom: Atom) -> bool:
        return atom is self.atom1 or atom is self.atom2

    def connects(self, a: Atom, b: Atom) -> bool:
        return (self.atom1 is a and self.atom2 is b) or (
            self.atom1 is b and self.atom2 is a
        )

    def other(self, atom: Atom) -> Atom:
        """Return the atom at the other end of the bond."""
        if atom is self.atom1:
            return self.atom2
        if atom is self.atom2:
            return self.atom1
        raise ValueError(f"{atom!r} is not part of this bond")
