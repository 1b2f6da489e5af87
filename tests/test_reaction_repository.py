import os

import pytest

from reactionmapper.core.domain.exceptions import MappingError
from reactionmapper.core.domain.models.bond import BondOrder
from reactionmapper.core.domain.models.mapping_algorithm import MappingAlgorithm
from reactionmapper.core.domain.models.strategy_result import StrategyResult
from reactionmapper.infrastructure.repositories.reaction_repository import (
    ReactionRepository,
)


@pytest.fixture
def repository():
    return ReactionRepository()


def mapped_result(reaction):
    heavy = lambda mol: [a for a in mol.atoms if not a.is_hydrogen]
    mapping = dict(zip(heavy(reaction.reactants[0]), heavy(reaction.products[0])))
    return StrategyResult(MappingAlgorithm.EXHAUSTIVE, reaction, mapping=mapping)


def test_from_smiles_adds_hydrogens_and_ids(repository):
    reaction = repository.from_smiles("CCO>>CC=O", "rxn-7")

    assert reaction.reaction_id == "rxn-7"
    educt, product = reaction.reactants[0], reaction.products[0]
    assert educt.atom_count == 9
    assert product.atom_count == 7
    assert [a.atom_id for a in educt.atoms[:3]] == ["R0A0", "R0A1", "R0A2"]
    assert product.atoms[0].atom_id == "P0A0"
    assert all(a.coordinates is not None for a in educt.atoms)
    assert BondOrder.DOUBLE in {b.order for b in product.bonds}


def test_aromatic_rings_are_kekulized(repository):
    reaction = repository.from_smiles("c1ccccc1>>C1CCCCC1")
    orders = {b.order for b in reaction.reactants[0].bonds}
    assert BondOrder.AROMATIC not in orders
    assert BondOrder.DOUBLE in orders


def test_invalid_smiles(repository):
    with pytest.raises(MappingError):
        repository.from_smiles("not a reaction")


def test_missing_rxn_file(repository, tmp_path):
    with pytest.raises(FileNotFoundError):
        repository.read_rxn(str(tmp_path / "missing.rxn"))


def test_write_and_read_mapping_rxn(repository, tmp_path):
    reaction = repository.from_smiles("CCO>>CC=O", "ethanol_oxidation")
    result = mapped_result(reaction)

    path = repository.write_mapping_rxn(result, str(tmp_path / "out"))

    assert path == os.path.join(str(tmp_path / "out"), "ethanol_oxidation.rxn")
    with open(path) as f:
        content = f.read()
    assert content.startswith("$RXN")
    assert "ethanol_oxidation exhaustive" in content

    again = repository.read_rxn(path)
    assert again.reaction_id == "ethanol_oxidation"
    assert again.reactants[0].atom_count == 9
    assert again.products[0].atom_count == 7


def test_reaction_id_defaults_to_timestamp(repository, tmp_path):
    reaction = repository.from_smiles("CCO>>CC=O")
    path = repository.write_mapping_rxn(mapped_result(reaction), str(tmp_path))
    assert os.path.basename(path)[:-4].isdigit()


def test_atom_map_numbers_are_shared_by_pairs(repository):
    result = mapped_result(repository.from_smiles("CCO>>CC=O"))
    numbers = repository.atom_map_numbers(dict(result.mapping))
    for number, (a, b) in enumerate(result.mapping.items(), start=1):
        assert numbers[a] == numbers[b] == number

    smiles = repository.to_mapped_smiles(result)
    assert ">>" in smiles
    assert ":3]" in smiles
