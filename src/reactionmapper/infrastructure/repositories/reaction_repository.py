# src/reactionmapper/infrastructure/repositories/reaction_repository.py
"""Repository for reading reactions and writing mapped reactions."""

import logging
import os
import time
from typing import Dict, List, Optional

from rdkit import Chem
from rdkit.Chem import AllChem, rdChemReactions

from ...core.domain.exceptions import MappingError
from ...core.domain.models.atom import Atom
from ...core.domain.models.molecular_graph import MolecularGraph
from ...core.domain.models.reaction import Reaction
from ...core.domain.models.strategy_result import StrategyResult
from ..adapters.rdkit_adapter import RDKitAdapter

logger = logging.getLogger(__name__)


class ReactionRepository:
    """Loads reactions through RDKit and stores atom-mapped reactions as MDL RXN."""

    def __init__(self, compute_coordinates: bool = True):
        """
        Initialize repository.

        Args:
            compute_coordinates: Whether to lay out 2-D coordinates for
                molecules that have none
        """
        self.compute_coordinates = compute_coordinates

    def _prepare(self, mol: Chem.Mol, id_prefix: str) -> MolecularGraph:
        mol = Chem.Mol(mol)
        for rdatom in mol.GetAtoms():
            rdatom.SetAtomMapNum(0)
        try:
            Chem.SanitizeMol(mol)
            mol = Chem.AddHs(mol, addCoords=mol.GetNumConformers() > 0)
            Chem.Kekulize(mol, clearAromaticFlags=True)
        except (ValueError, RuntimeError) as e:
            raise MappingError(
                f"Molecule {id_prefix} could not be prepared: {e}", "INVALID_REACTION"
            ) from e
        if self.compute_coordinates and mol.GetNumConformers() == 0:
            AllChem.Compute2DCoords(mol)
        return RDKitAdapter.from_rdkit_mol(mol, id_prefix)

    def _to_reaction(
        self, rxn: rdChemReactions.ChemicalReaction, reaction_id: Optional[str]
    ) -> Reaction:
        reactants = [
            self._prepare(mol, f"R{i}") for i, mol in enumerate(rxn.GetReactants())
        ]
        products = [
            self._prepare(mol, f"P{i}") for i, mol in enumerate(rxn.GetProducts())
        ]
        logger.info(
            "Loaded reaction %s: %d reactants, %d products",
            reaction_id,
            len(reactants),
            len(products),
        )
        return Reaction(reactants, products, reaction_id)

    def from_smiles(self, rxn_smiles: str, reaction_id: Optional[str] = None) -> Reaction:
        """
        Parse a reaction SMILES such as ``CCO>>CC=O``.

        Hydrogens are made explicit and aromatic bonds kekulized. Atom ids
        are ``R{i}A{j}`` for reactants and ``P{i}A{j}`` for products.

        Raises:
            MappingError: If the SMILES cannot be parsed
        """
        try:
            rxn = rdChemReactions.ReactionFromSmarts(rxn_smiles, useSmiles=True)
        except (ValueError, RuntimeError) as e:
            raise MappingError(
                f"Invalid reaction SMILES {rxn_smiles!r}: {e}", "INVALID_REACTION"
            ) from e
        if rxn is None:
            raise MappingError(f"Invalid reaction SMILES {rxn_smiles!r}", "INVALID_REACTION")
        return self._to_reaction(rxn, reaction_id)

    def read_rxn(self, path: str) -> Reaction:
        """
        Read an MDL RXN file.

        Raises:
            FileNotFoundError: If ``path`` does not exist
            MappingError: If the file cannot be parsed
        """
        if not os.path.exists(path):
            raise FileNotFoundError(f"Reaction file not found: {path}")
        try:
            rxn = rdChemReactions.ReactionFromRxnFile(path)
        except (ValueError, RuntimeError) as e:
            raise MappingError(f"Invalid RXN file {path}: {e}", "INVALID_REACTION") from e
        if rxn is None:
            raise MappingError(f"Invalid RXN file {path}", "INVALID_REACTION")
        reaction_id = os.path.splitext(os.path.basename(path))[0]
        return self._to_reaction(rxn, reaction_id)

    @staticmethod
    def atom_map_numbers(mapping: Dict[Atom, Atom]) -> Dict[Atom, int]:
        """Number mapped pairs from 1; both atoms of a pair share the number."""
        numbers: Dict[Atom, int] = {}
        for number, (educt_atom, product_atom) in enumerate(mapping.items(), start=1):
            numbers[educt_atom] = number
            numbers[product_atom] = number
        return numbers

    def to_chemical_reaction(self, result: StrategyResult) -> rdChemReactions.ChemicalReaction:
        numbers = self.atom_map_numbers(dict(result.mapping))
        rxn = rdChemReactions.ChemicalReaction()
        for mol in result.reaction.reactants:
            rxn.AddReactantTemplate(RDKitAdapter.to_rdkit_mol(mol, numbers)[0])
        for mol in result.reaction.products:
            rxn.AddProductTemplate(RDKitAdapter.to_rdkit_mol(mol, numbers)[0])
        return rxn

    def to_mapped_smiles(self, result: StrategyResult) -> str:
        return rdChemReactions.ReactionToSmiles(self.to_chemical_reaction(result))

    def write_mapping_rxn(
        self,
        result: StrategyResult,
        output_dir: str,
        file_name: Optional[str] = None,
    ) -> str:
        """
        Write a strategy result as an atom-mapped MDL RXN file.

        Args:
            result: Strategy result whose mapping is written
            output_dir: Directory for the file (created if missing)
            file_name: File name; defaults to ``{reaction id}.rxn``, where a
                missing reaction id becomes the current time in milliseconds

        Returns:
            Path of the written file
        """
        reaction_id = result.reaction.reaction_id or str(int(time.time() * 1000))
        file_name = file_name or f"{reaction_id}.rxn"
        os.makedirs(output_dir, exist_ok=True)
        path = os.path.join(output_dir, file_name)

        block = rdChemReactions.ReactionToRxnBlock(self.to_chemical_reaction(result))
        lines: List[str] = block.split("\n")
        # Line 2 of an RXN header holds the reaction name.
        if len(lines) > 1:
            lines[1] = f"{reaction_id} {result.strategy.label}"
        with open(path, "w") as f:
            f.write("\n".join(lines))

        logger.info("Wrote %s mapping of %s to %s", result.strategy.label, reaction_id, path)
        return path
