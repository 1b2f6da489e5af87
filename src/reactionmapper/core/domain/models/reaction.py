"""Domain models for a reaction and its per-strategy matching view."""

from dataclasses import dataclass, field
from typing import List, Optional

from .molecular_graph import MolecularGraph


@dataclass
class Reaction:
    """A reaction as ordered reactant and product containers."""

    reactants: List[MolecularGraph] = field(default_factory=list)
    products: List[MolecularGraph] = field(default_factory=list)
    reaction_id: Optional[str] = None

    def copy(self) -> "Reaction":
        """Copy every container once; repeated references stay shared in the copy."""
        copies = {}

        def _copy(mol: MolecularGraph) -> MolecularGraph:
            if id(mol) not in copies:
                copies[id(mol)] = mol.copy()
            return copies[id(mol)]

        return Reaction(
            reactants=[_copy(mol) for mol in self.reactants],
            products=[_copy(mol) for mol in self.products],
            reaction_id=self.reaction_id,
        )

    @property
    def molecules(self) -> List[MolecularGraph]:
        return list(self.reactants) + list(self.products)


class ReactionContainer:
    """Per-strategy view of a reaction used by the graph matcher.

    Holds the canonical containers (the reaction's official side lists) and
    the containers that are actually handed to the matcher, which may be
    hydrogen-stripped copies. Indices are stable for one mapping run.
    """

    def __init__(self, reaction: Reaction, remove_hydrogens: bool = True):
        self.reaction = reaction
        self.remove_hydrogens = remove_hydrogens
        self._educts = list(reaction.reactants)
        self._products = list(reaction.products)
        self._matching_educts = self._prepare(self._educts)
        self._matching_products = self._prepare(self._products)
        self._educt_modified = [True] * len(self._educts)
        self._product_modified = [True] * len(self._products)

    def _prepare(self, containers: List[MolecularGraph]) -> List[MolecularGraph]:
        if not self.remove_hydrogens:
            return list(containers)
        # Identical references must stay identical so that job deduplication
        # still sees them as the same container.
        prepared = {}
        result = []
        for mol in containers:
            if id(mol) not in prepared:
                prepared[id(mol)] = mol.without_hydrogens()
            result.append(prepared[id(mol)])
        return result

    def get_educt_count(self) -> int:
        return len(self._educts)

    def get_product_count(self) -> int:
        return len(self._products)

    def get_educt(self, index: int) -> MolecularGraph:
        return self._educts[index]

    def get_product(self, index: int) -> MolecularGraph:
        return self._products[index]

    def get_matching_educt(self, index: int) -> MolecularGraph:
        return self._matching_educts[index]

    def get_matching_product(self, index: int) -> MolecularGraph:
        return self._matching_products[index]

    def is_educt_modified(self, index: int) -> bool:
        return self._educt_modified[index]

    def is_product_modified(self, index: int) -> bool:
        return self._product_modified[index]

    def set_educt_modified(self, index: int, modified: bool) -> None:
        self._educt_modified[index] = modified

    def set_product_modified(self, index: int, modified: bool) -> None:
        self._product_modified[index] = modified
