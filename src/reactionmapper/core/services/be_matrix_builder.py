"""Builds bond-electron matrices for a mapped reaction."""

import logging
from dataclasses import dataclass
from typing import List, Mapping, Sequence

import numpy as np

from ..domain.implementations.valence_calculator import free_valence_electrons
from ..domain.models.atom import Atom
from ..domain.models.be_matrix import BEMatrix
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.strategy_result import StrategyResult

logger = logging.getLogger(__name__)


def build_be_matrix(
    molecules: Sequence[MolecularGraph],
    mapping: Mapping[Atom, Atom],
    skip_hydrogen: bool = True,
) -> BEMatrix:
    """
    Build the BE matrix over the mapped atoms of ``molecules``.

    Args:
        molecules: Molecule set (one side of a reaction)
        mapping: Atom-atom mapping; its keys and values select the atoms
        skip_hydrogen: Whether hydrogens are left out

    Returns:
        Filled BEMatrix
    """
    matrix = BEMatrix(skip_hydrogen, molecules, mapping, free_valence_electrons)
    matrix.set_matrix_atoms()
    logger.debug("Built %dx%d BE matrix", matrix.size, matrix.size)
    return matrix


@dataclass
class ReactionMatrices:
    """Reactant and product matrices in mapping order, and their difference."""

    educt: BEMatrix
    product: BEMatrix
    reaction: np.ndarray

    @property
    def changed_bonds(self) -> int:
        """Number of atom pairs whose bond order changes."""
        n = self.educt.size - 1
        delta = self.reaction[:n, :n]
        return int(np.count_nonzero(np.triu(delta, k=1)))


def build_reaction_matrices(
    result: StrategyResult, skip_hydrogen: bool = True
) -> ReactionMatrices:
    """
    Build E and P for a strategy result with P ordered to match E.

    Only mapped atoms take part, so both matrices have the same size. The
    reaction matrix is ``P - E`` without the lone-pair row and column.
    """
    mapping = dict(result.mapping)
    if skip_hydrogen:
        mapping = {
            a: b for a, b in mapping.items() if not a.is_hydrogen and not b.is_hydrogen
        }
    educt = build_be_matrix(result.reaction.reactants, mapping, skip_hydrogen)
    product = build_be_matrix(result.reaction.products, mapping, skip_hydrogen)

    ordered: List[Atom] = [mapping[atom] for atom in educt.get_atoms()]
    product.order_atom_array(ordered)

    n = educt.size - 1
    delta = np.zeros_like(educt.matrix)
    delta[:n, :n] = product.matrix[:n, :n] - educt.matrix[:n, :n]
    return ReactionMatrices(educt=educt, product=product, reaction=delta)
