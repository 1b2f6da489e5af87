"""Default reaction preprocessing."""

import logging
from typing import List

from rdkit import Chem

from ..exceptions import StandardizationError
from ..interfaces.reaction_standardizer import ReactionStandardizer
from ..models.molecular_graph import MolecularGraph
from ..models.reaction import Reaction

logger = logging.getLogger(__name__)


class DefaultStandardizer(ReactionStandardizer):
    """Copies a reaction, names anonymous atoms and validates elements.

    Every call returns an independent copy, so each strategy can own its
    reaction. Atom identities are preserved across the copy.
    """

    def __init__(self, remove_hydrogens: bool = False):
        self.remove_hydrogens = remove_hydrogens
        self._periodic_table = Chem.GetPeriodicTable()

    def standardize(self, reaction: Reaction) -> Reaction:
        if reaction is None:
            raise StandardizationError("No reaction to standardize")

        cleaned = reaction.copy()
        cleaned.reactants = self._clean_side(cleaned.reactants, "R")
        cleaned.products = self._clean_side(cleaned.products, "P")
        logger.debug(
            "Standardized reaction %s: %d reactants, %d products",
            cleaned.reaction_id,
            len(cleaned.reactants),
            len(cleaned.products),
        )
        return cleaned

    def _clean_side(self, side: List[MolecularGraph], prefix: str) -> List[MolecularGraph]:
        done = {}
        cleaned = []
        for i, mol in enumerate(side):
            if mol is None:
                raise StandardizationError(f"Missing molecule at {prefix}{i}")
            if id(mol) not in done:
                for j, atom in enumerate(mol.atoms):
                    self._validate_element(atom.element, f"{prefix}{i}")
                    if atom.atom_id is None:
                        atom.atom_id = f"{prefix}{i}A{j}"
                if mol.mol_id is None:
                    mol.mol_id = f"{prefix}{i}"
                done[id(mol)] = mol.without_hydrogens() if self.remove_hydrogens else mol
            cleaned.append(done[id(mol)])
        return cleaned

    def _validate_element(self, element: str, where: str) -> None:
        symbol = (element or "").strip().capitalize()
        try:
            number = self._periodic_table.GetAtomicNumber(symbol)
        except (RuntimeError, ValueError) as e:
            raise StandardizationError(f"Unknown element {element!r} in {where}") from e
        if number <= 0 and symbol != "*":
            raise StandardizationError(f"Unknown element {element!r} in {where}")
