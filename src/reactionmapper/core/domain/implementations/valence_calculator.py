"""Free valence electron counts from the RDKit periodic table."""

from rdkit import Chem

from ..models.atom import Atom
from ..models.bond import BondOrder
from ..models.molecular_graph import MolecularGraph

_PERIODIC_TABLE = Chem.GetPeriodicTable()

_ELECTRON_PAIRS = {
    BondOrder.SINGLE: 1.0,
    BondOrder.DOUBLE: 2.0,
    BondOrder.TRIPLE: 3.0,
    BondOrder.QUADRUPLE: 4.0,
    BondOrder.AROMATIC: 1.5,
}


def outer_electrons(element: str) -> int:
    return _PERIODIC_TABLE.GetNOuterElecs(element.strip().capitalize())


def free_valence_electrons(
    container: MolecularGraph, atom: Atom, skip_hydrogen: bool = True
) -> float:
    """
    Non-bonding valence electrons of ``atom`` within ``container``.

    Outer-shell electrons minus formal charge, minus one electron per
    bond-order unit and one per attached hydrogen. Hydrogens are counted
    whether they are explicit neighbours or implicit; with
    ``skip_hydrogen`` the explicit ones are not matrix atoms but still
    hold their share of the heavy atom's electrons.

    Args:
        container: Container the atom belongs to
        atom: Atom to evaluate
        skip_hydrogen: Whether hydrogens are left out of the matrix

    Returns:
        Free valence electron count (never negative)
    """
    used = float(atom.implicit_hydrogens)
    for bond in container.get_connected_bonds(atom):
        partner = bond.other(atom)
        if skip_hydrogen and partner.is_hydrogen:
            used += 1.0
            continue
        used += _ELECTRON_PAIRS.get(bond.order, 1.0)
    free = outer_electrons(atom.element) - atom.formal_charge - used
    return max(free, 0.0)
