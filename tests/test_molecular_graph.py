import pytest

from reactionmapper.core.domain.exceptions import StandardizationError
from reactionmapper.core.domain.implementations.cycle_finder import CycleFinder
from reactionmapper.core.domain.implementations.default_standardizer import (
    DefaultStandardizer,
)
from reactionmapper.core.domain.implementations.subgraph_signature import (
    SubgraphSignature,
)
from reactionmapper.core.domain.implementations.valence_calculator import (
    free_valence_electrons,
)
from reactionmapper.core.domain.models.atom import Atom
from reactionmapper.core.domain.models.bond import BondOrder
from reactionmapper.core.domain.models.molecular_graph import MolecularGraph
from reactionmapper.core.domain.models.reaction import Reaction, ReactionContainer

from conftest import (
    acetaldehyde,
    cyclohexane,
    ethanol,
    make_molecule,
    methanol_with_hydrogens,
)


def test_copy_keeps_ids_but_not_objects():
    mol = ethanol()
    clone = mol.copy()
    assert [a.atom_id for a in clone.atoms] == [a.atom_id for a in mol.atoms]
    assert all(a is not b for a, b in zip(clone.atoms, mol.atoms))
    assert clone.get_bond(clone.atoms[0], clone.atoms[1]) is not None
    assert clone.get_bond(mol.atoms[0], mol.atoms[1]) is None


def test_without_hydrogens_folds_counts():
    heavy = methanol_with_hydrogens().without_hydrogens()
    assert [a.element for a in heavy.atoms] == ["C", "O"]
    assert [a.implicit_hydrogens for a in heavy.atoms] == [3, 1]
    assert heavy.bond_count == 1


def test_container_lookups():
    mol = ethanol()
    assert mol.get_atom_by_id("R0A2") is mol.atoms[2]
    assert mol.get_atom_by_id("nope") is None
    assert mol.index_of(Atom("R0A0", "C")) == -1
    assert mol.neighbors(mol.atoms[1]) == [mol.atoms[0], mol.atoms[2]]


def test_reaction_copy_shares_repeated_references():
    shared = ethanol()
    copy = Reaction([shared, shared], [acetaldehyde()]).copy()
    assert copy.reactants[0] is copy.reactants[1]
    assert copy.reactants[0] is not shared


def test_container_keeps_shared_matching_references():
    shared = methanol_with_hydrogens()
    container = ReactionContainer(Reaction([shared, shared], [acetaldehyde()]))
    assert container.get_matching_educt(0) is container.get_matching_educt(1)
    assert container.get_matching_educt(0).atom_count == 2
    assert container.get_educt(0) is shared


def test_cycle_finder():
    finder = CycleFinder()
    ring = cyclohexane("R0")
    assert finder.count(ring) == 1
    assert finder.count(ethanol()) == 0
    assert finder.ring_atoms(ring) == set(ring.atoms)
    assert finder.ring_atoms(ethanol()) == set()


def test_cycle_finder_falls_back_to_relevant_cycles():
    # Two fused six-rings have three elementary cycles but two relevant ones.
    decalin = make_molecule(
        ["C"] * 10,
        [(i, i + 1, BondOrder.SINGLE) for i in range(5)]
        + [(5, 0, BondOrder.SINGLE), (0, 6, BondOrder.SINGLE)]
        + [(i, i + 1, BondOrder.SINGLE) for i in range(6, 9)]
        + [(9, 5, BondOrder.SINGLE)],
        "R0",
    )
    assert CycleFinder().count(decalin) == 3
    assert CycleFinder(cycle_limit=2).count(decalin) == 2


def test_signature_is_topological():
    assert (
        SubgraphSignature(ethanol("A")).to_canonical_string()
        == SubgraphSignature(ethanol("B")).to_canonical_string()
    )
    assert (
        SubgraphSignature(ethanol()).to_canonical_string()
        != SubgraphSignature(acetaldehyde()).to_canonical_string()
    )
    labels = SubgraphSignature(ethanol()).get_canonical_labels()
    assert sorted(labels) == [0, 1, 2]


def test_signature_of_atom_subset():
    mol = ethanol()
    subset = SubgraphSignature(mol, mol.atoms[:2]).to_canonical_string()
    assert subset.startswith("2:")
    ethane = make_molecule(["C", "C"], [(0, 1, BondOrder.SINGLE)])
    assert subset == SubgraphSignature(ethane).to_canonical_string()


def test_free_valence_electrons():
    mol = methanol_with_hydrogens()
    carbon, oxygen = mol.atoms[0], mol.atoms[1]
    assert free_valence_electrons(mol, carbon) == 0.0
    assert free_valence_electrons(mol, oxygen) == 4.0
    heavy = mol.without_hydrogens()
    assert free_valence_electrons(heavy, heavy.atoms[1]) == 4.0
    assert free_valence_electrons(heavy, heavy.atoms[0]) == 0.0


def test_standardizer_names_atoms_and_rejects_unknown_elements():
    anonymous = MolecularGraph([Atom(None, "C"), Atom(None, "O")], [])
    cleaned = DefaultStandardizer().standardize(Reaction([anonymous], [ethanol("P0")]))
    assert [a.atom_id for a in cleaned.reactants[0].atoms] == ["R0A0", "R0A1"]
    assert cleaned.reactants[0].mol_id == "R0"
    assert anonymous.atoms[0].atom_id is None

    with pytest.raises(StandardizationError):
        DefaultStandardizer().standardize(Reaction([make_molecule(["Qq"])], []))
