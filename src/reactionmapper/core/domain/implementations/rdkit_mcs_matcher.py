"""Implementation of (reactant, product) matching using RDKit's MCS algorithm."""

import logging
from typing import Dict, List, Tuple

from rdkit import Chem
from rdkit.Chem import rdFMCS

from ..interfaces.structure_matcher import StructureMatcher
from ..models.atom import Atom
from ..models.mapping_algorithm import MatchSettings
from ..models.molecular_graph import MolecularGraph
from ....infrastructure.adapters.rdkit_adapter import RDKitAdapter


class RDKitMCSMatcher(StructureMatcher):
    """Matcher that uses RDKit's Maximum Common Substructure algorithm."""

    def __init__(self, timeout: float = 60.0, match_valences: bool = False):
        """Initialize matcher.

        Args:
            timeout: Maximum time in seconds to spend finding an exhaustive MCS
            match_valences: Whether to require matching valences in MCS
        """
        self.timeout = timeout
        self.match_valences = match_valences
        self.logger = logging.getLogger(__name__)

    def _find_mcs(
        self,
        query_mol: Chem.Mol,
        target_mol: Chem.Mol,
        match_bonds: bool,
        match_rings: bool,
        complete_rings: bool,
        exhaustive: bool,
    ) -> rdFMCS.MCSResult:
        # A non-exhaustive search gets a quarter of the budget and maximises atoms.
        timeout = self.timeout if exhaustive else max(1.0, self.timeout / 4)
        return rdFMCS.FindMCS(
            [query_mol, target_mol],
            timeout=int(timeout),
            matchValences=self.match_valences,
            ringMatchesRingOnly=match_rings,
            completeRingsOnly=complete_rings,
            maximizeBonds=exhaustive,
            atomCompare=rdFMCS.AtomCompare.CompareElements,
            bondCompare=(
                rdFMCS.BondCompare.CompareOrder
                if match_bonds
                else rdFMCS.BondCompare.CompareAny
            ),
        )

    def _convert(self, graph: MolecularGraph) -> Tuple[Chem.Mol, List[Atom]]:
        return RDKitAdapter.to_rdkit_mol(graph)

    def match(
        self, query: MolecularGraph, target: MolecularGraph, settings: MatchSettings
    ) -> Dict[Atom, Atom]:
        """Map query atoms onto target atoms through their MCS."""
        if query.atom_count == 0 or target.atom_count == 0:
            return {}

        query_mol, query_atoms = self._convert(query)
        target_mol, target_atoms = self._convert(target)

        self.logger.debug(
            "Finding MCS (%s) between %s (%d atoms) and %s (%d atoms)",
            settings.strategy.label,
            query.mol_id,
            query_mol.GetNumAtoms(),
            target.mol_id,
            target_mol.GetNumAtoms(),
        )

        mcs = self._find_mcs(
            query_mol,
            target_mol,
            match_bonds=settings.match_bonds,
            match_rings=settings.match_rings,
            complete_rings=settings.match_rings and settings.perfect_rings,
            exhaustive=settings.exhaustive,
        )

        if mcs.canceled:
            self.logger.warning(
                "MCS search between %s and %s timed out, using best partial result",
                query.mol_id,
                target.mol_id,
            )

        if mcs.numAtoms == 0:
            self.logger.info(
                "No common substructure between %s and %s", query.mol_id, target.mol_id
            )
            return {}

        pattern = Chem.MolFromSmarts(mcs.smartsString)
        query_match = query_mol.GetSubstructMatch(pattern)
        target_match = target_mol.GetSubstructMatch(pattern)

        if not query_match or not target_match:
            self.logger.warning(
                "Failed to map MCS onto molecules. Query match: %s, target match: %s",
                bool(query_match),
                bool(target_match),
            )
            return {}

        mapping = {
            query_atoms[i]: target_atoms[j] for i, j in zip(query_match, target_match)
        }
        self.logger.debug(
            "MCS %s matched %d atoms (%s)", mcs.smartsString, len(mapping), settings
        )
        return mapping

    def is_subgraph(
        self,
        educt: MolecularGraph,
        product: MolecularGraph,
        match_bonds: bool = False,
        match_rings: bool = False,
    ) -> bool:
        if educt.atom_count <= product.atom_count:
            smaller, larger = educt, product
        else:
            smaller, larger = product, educt
        if smaller.atom_count == 0:
            return True

        smaller_mol, _ = self._convert(smaller)
        larger_mol, _ = self._convert(larger)
        mcs = self._find_mcs(
            smaller_mol,
            larger_mol,
            match_bonds=match_bonds,
            match_rings=match_rings,
            complete_rings=False,
            exhaustive=True,
        )
        return (
            mcs.numAtoms == smaller_mol.GetNumAtoms()
            and mcs.numBonds == smaller_mol.GetNumBonds()
        )
