"""Adapter between MolecularGraph containers and RDKit molecules."""

import logging
from typing import Dict, List, Optional, Tuple

from rdkit import Chem

from ...core.domain.models.atom import Atom
from ...core.domain.models.bond import Bond, BondOrder, BondStereo
from ...core.domain.models.molecular_graph import MolecularGraph

logger = logging.getLogger(__name__)

_TO_RDKIT = {
    BondOrder.SINGLE: Chem.BondType.SINGLE,
    BondOrder.DOUBLE: Chem.BondType.DOUBLE,
    BondOrder.TRIPLE: Chem.BondType.TRIPLE,
    BondOrder.QUADRUPLE: Chem.BondType.QUADRUPLE,
    BondOrder.AROMATIC: Chem.BondType.AROMATIC,
}

_FROM_RDKIT = {value: key for key, value in _TO_RDKIT.items()}

_STEREO_FROM_RDKIT = {
    Chem.BondDir.BEGINWEDGE: BondStereo.UP,
    Chem.BondDir.BEGINDASH: BondStereo.DOWN,
    Chem.BondDir.UNKNOWN: BondStereo.UP_OR_DOWN,
    Chem.BondDir.EITHERDOUBLE: BondStereo.E_OR_Z,
}


class RDKitAdapter:
    """Converts containers to RDKit molecules and back."""

    @staticmethod
    def to_rdkit_mol(
        graph: MolecularGraph, atom_map_numbers: Optional[Dict[Atom, int]] = None
    ) -> Tuple[Chem.Mol, List[Atom]]:
        """Convert MolecularGraph to an RDKit Mol.

        The molecule is not sanitized: bond orders and charges are taken
        as given, implicit hydrogens are fixed and ring information is
        initialised so that substructure queries work.

        Args:
            graph: Molecular graph to convert
            atom_map_numbers: Optional atom-map numbers to stamp on atoms

        Returns:
            Tuple of the RDKit Mol and the container atoms in RDKit index order

        Raises:
            ValueError: If an element symbol is unknown to RDKit
        """
        mol = Chem.RWMol()
        index: Dict[int, int] = {}
        atoms: List[Atom] = []

        for atom in graph.atoms:
            try:
                rdatom = Chem.Atom(atom.element.strip().capitalize())
            except (RuntimeError, ValueError) as e:
                raise ValueError(f"Unknown element {atom.element!r}: {e}") from e
            rdatom.SetFormalCharge(atom.formal_charge)
            rdatom.SetNoImplicit(True)
            rdatom.SetNumExplicitHs(atom.implicit_hydrogens)
            if atom_map_numbers and atom in atom_map_numbers:
                rdatom.SetAtomMapNum(atom_map_numbers[atom])
            index[id(atom)] = mol.AddAtom(rdatom)
            atoms.append(atom)

        for bond in graph.bonds:
            i = index[id(bond.atom1)]
            j = index[id(bond.atom2)]
            if mol.GetBondBetweenAtoms(i, j) is not None:
                continue
            mol.AddBond(i, j, _TO_RDKIT[bond.order])
            if bond.order is BondOrder.AROMATIC:
                rdbond = mol.GetBondBetweenAtoms(i, j)
                rdbond.SetIsAromatic(True)
                mol.GetAtomWithIdx(i).SetIsAromatic(True)
                mol.GetAtomWithIdx(j).SetIsAromatic(True)

        mol = mol.GetMol()
        mol.UpdatePropertyCache(strict=False)
        Chem.GetSymmSSSR(mol)
        return mol, atoms

    @staticmethod
    def from_rdkit_mol(mol: Chem.Mol, id_prefix: str, mol_id: Optional[str] = None) -> MolecularGraph:
        """Convert an RDKit Mol to a MolecularGraph.

        Atom ids are ``{id_prefix}A{index}``; 2-D positions are taken from
        the first conformer when one exists.
        """
        conformer = mol.GetConformer() if mol.GetNumConformers() else None
        atoms: List[Atom] = []
        for rdatom in mol.GetAtoms():
            coordinates = None
            if conformer is not None:
                position = conformer.GetAtomPosition(rdatom.GetIdx())
                coordinates = (position.x, position.y)
            atoms.append(
                Atom(
                    atom_id=f"{id_prefix}A{rdatom.GetIdx()}",
                    element=rdatom.GetSymbol(),
                    coordinates=coordinates,
                    formal_charge=rdatom.GetFormalCharge(),
                    implicit_hydrogens=rdatom.GetNumImplicitHs()
                    + rdatom.GetNumExplicitHs(),
                )
            )

        bonds: List[Bond] = []
        for rdbond in mol.GetBonds():
            order = _FROM_RDKIT.get(rdbond.GetBondType())
            if order is None:
                logger.warning(
                    "Unsupported bond type %s treated as single", rdbond.GetBondType()
                )
                order = BondOrder.SINGLE
            bonds.append(
                Bond(
                    atom1=atoms[rdbond.GetBeginAtomIdx()],
                    atom2=atoms[rdbond.GetEndAtomIdx()],
                    order=order,
                    stereo=_STEREO_FROM_RDKIT.get(rdbond.GetBondDir(), BondStereo.NONE),
                )
            )

        return MolecularGraph(atoms, bonds, mol_id or id_prefix)
