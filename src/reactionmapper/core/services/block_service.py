"""Splits a winning mapping into paired Blocks."""

from typing import Dict, List, Mapping, Tuple

from ..domain.models.atom import Atom
from ..domain.models.block import Block
from ..domain.models.molecular_graph import MolecularGraph
from ..domain.models.reaction import Reaction


def _owner(atom: Atom, containers: List[MolecularGraph]) -> MolecularGraph:
    for container in containers:
        if container.contains(atom):
            return container
    raise ValueError(f"{atom!r} belongs to no container of the reaction")


def build_blocks(
    mapping: Mapping[Atom, Atom], reaction: Reaction
) -> Tuple[List[Block], List[Block]]:
    """
    Group ``mapping`` by (reactant container, product container).

    Returns:
        (reactant blocks, product blocks); the i-th blocks are partners
    """
    groups: Dict[Tuple[int, int], Tuple[Block, Block]] = {}
    for educt_atom, product_atom in mapping.items():
        educt = _owner(educt_atom, reaction.reactants)
        product = _owner(product_atom, reaction.products)
        key = (id(educt), id(product))
        if key not in groups:
            left, right = Block(educt), Block(product)
            left.set_partner(right)
            right.set_partner(left)
            groups[key] = (left, right)
        left, right = groups[key]
        left.add_mapping(educt_atom, product_atom)
        right.add_mapping(product_atom, educt_atom)

    return (
        [left for left, _ in groups.values()],
        [right for _, right in groups.values()],
    )


def pair_blocks(left: List[Block], right: List[Block]) -> List[Tuple[Block, Block]]:
    """
    Pair blocks of two lists that carry the same signature.

    Both lists are sorted by signature and walked in step; paired blocks
    become partners, unmatched ones are left with ``partner = None``.
    """
    left_sorted = sorted(left)
    right_sorted = sorted(right)
    for block in left_sorted + right_sorted:
        block.partner = None

    pairs = []
    i = j = 0
    while i < len(left_sorted) and j < len(right_sorted):
        a, b = left_sorted[i], right_sorted[j]
        sa, sb = a.get_signature_string(), b.get_signature_string()
        if sa == sb:
            a.set_partner(b)
            b.set_partner(a)
            pairs.append((a, b))
            i += 1
            j += 1
        elif sa < sb:
            i += 1
        else:
            j += 1
    return pairs
