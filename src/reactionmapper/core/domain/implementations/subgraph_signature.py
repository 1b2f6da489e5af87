"""Canonical signatures for atom subsets of a container."""

from typing import List, Optional, Sequence

from rdkit import Chem

from ..models.atom import Atom
from ..models.molecular_graph import MolecularGraph
from ....infrastructure.adapters.rdkit_adapter import RDKitAdapter


class SubgraphSignature:
    """Canonical SMILES of the subgraph induced by ``atoms``.

    The string is built from elements, formal charges and bond orders only;
    hydrogen counts are ignored. Two atom subsets produce the same string
    exactly when their induced subgraphs are isomorphic, which makes the
    string usable both as an ordering key and as a "same kind of fragment"
    test.
    """

    def __init__(self, container: MolecularGraph, atoms: Optional[Sequence[Atom]] = None):
        self.container = container
        self.atoms = list(container.atoms if atoms is None else atoms)
        self._mol, rd_atoms = RDKitAdapter.to_rdkit_mol(container)
        for rdatom in self._mol.GetAtoms():
            rdatom.SetNumExplicitHs(0)
        self._mol.UpdatePropertyCache(strict=False)
        positions = {id(atom): i for i, atom in enumerate(rd_atoms)}
        self._indices = [positions[id(atom)] for atom in self.atoms]
        self._string: Optional[str] = None
        self._labels: Optional[List[int]] = None

    def to_canonical_string(self) -> str:
        if self._string is None:
            smiles = ""
            if self._indices:
                smiles = Chem.MolFragmentToSmiles(
                    self._mol,
                    atomsToUse=self._indices,
                    canonical=True,
                    isomericSmiles=False,
                )
            self._string = f"{len(self._indices)}:{smiles}"
        return self._string

    def get_canonical_labels(self) -> List[int]:
        """Canonical rank of every atom, in the order the atoms were given."""
        if self._labels is None:
            if not self._indices:
                self._labels = []
                return self._labels
            ranks = list(
                Chem.CanonicalRankAtomsInFragment(
                    self._mol, atomsToUse=self._indices, breakTies=True
                )
            )
            ranked = sorted(range(len(self._indices)), key=lambda i: ranks[self._indices[i]])
            labels = [0] * len(self._indices)
            for rank, i in enumerate(ranked):
                labels[i] = rank
            self._labels = labels
        return self._labels

    def __str__(self) -> str:
        return self.to_canonical_string()
