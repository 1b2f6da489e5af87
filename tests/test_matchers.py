import pytest

from reactionmapper.core.domain.implementations.isomorphism_matcher import (
    IsomorphismMatcher,
)
from reactionmapper.core.domain.implementations.rdkit_mcs_matcher import RDKitMCSMatcher
from reactionmapper.core.domain.models.bond import BondOrder
from reactionmapper.core.domain.models.mapping_algorithm import (
    MappingAlgorithm,
    MatchSettings,
)
from reactionmapper.core.domain.models.molecular_graph import MolecularGraph
from reactionmapper.infrastructure.adapters.rdkit_adapter import RDKitAdapter

from conftest import acetaldehyde, cyclohexane, ethanol, make_molecule

MATCHERS = [RDKitMCSMatcher(timeout=10), IsomorphismMatcher()]


def settings(match_bonds=False, match_rings=False):
    return MatchSettings(
        MappingAlgorithm.EXHAUSTIVE, match_bonds=match_bonds, match_rings=match_rings
    )


@pytest.mark.parametrize("matcher", MATCHERS)
def test_matches_whole_molecule_ignoring_bond_order(matcher):
    query, target = ethanol(), acetaldehyde()
    mapping = matcher.match(query, target, settings())

    assert len(mapping) == 3
    assert all(query.contains(a) and target.contains(b) for a, b in mapping.items())
    assert all(a.element == b.element for a, b in mapping.items())


@pytest.mark.parametrize("matcher", MATCHERS)
def test_bond_order_restricts_match(matcher):
    mapping = matcher.match(ethanol(), acetaldehyde(), settings(match_bonds=True))
    assert len(mapping) == 2


@pytest.mark.parametrize("matcher", MATCHERS)
def test_empty_container_gives_empty_mapping(matcher):
    assert matcher.match(MolecularGraph([], []), ethanol(), settings()) == {}


@pytest.mark.parametrize("matcher", MATCHERS)
def test_is_subgraph(matcher):
    ethane = make_molecule(["C", "C"], [(0, 1, BondOrder.SINGLE)])
    assert matcher.is_subgraph(ethane, ethanol())
    assert matcher.is_subgraph(ethanol(), ethane)
    assert not matcher.is_subgraph(make_molecule(["N"]), ethanol())


@pytest.mark.parametrize("matcher", MATCHERS)
def test_ring_matching_keeps_ring_atoms_apart(matcher):
    ring = cyclohexane("R0")
    chain = make_molecule(
        ["C"] * 3, [(0, 1, BondOrder.SINGLE), (1, 2, BondOrder.SINGLE)]
    )
    assert len(matcher.match(chain, ring, settings())) == 3
    assert len(matcher.match(chain, ring, settings(match_rings=True))) <= 1


def test_rdkit_adapter_round_trip():
    mol, atoms = RDKitAdapter.to_rdkit_mol(acetaldehyde(), {})
    assert mol.GetNumAtoms() == 3
    assert [a.GetSymbol() for a in mol.GetAtoms()] == ["C", "C", "O"]

    back = RDKitAdapter.from_rdkit_mol(mol, "X0")
    assert [a.atom_id for a in back.atoms] == ["X0A0", "X0A1", "X0A2"]
    assert [b.order for b in back.bonds] == [b.order for b in acetaldehyde().bonds]
