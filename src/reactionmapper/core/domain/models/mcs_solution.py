"""Domain model for the result of one (reactant, product) match."""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .atom import Atom
from .combination import Combination
from .molecular_graph import MolecularGraph


@dataclass
class MCSSolution:
    """Partial atom-atom mapping between a query and a target container."""

    query_position: int
    target_position: int
    query_container: MolecularGraph
    target_container: MolecularGraph
    mapping: Dict[Atom, Atom] = field(default_factory=dict)

    def __post_init__(self):
        if any(a is None or b is None for a, b in self.mapping.items()):
            raise ValueError("An atom-atom mapping must not contain None atoms")

    @property
    def combination(self) -> Combination:
        return Combination(self.query_position, self.target_position)

    @property
    def size(self) -> int:
        return len(self.mapping)

    @property
    def matched_pairs(self) -> List[Tuple[str, str]]:
        """Mapped pairs as (query atom id, target atom id)."""
        return [(a.atom_id, b.atom_id) for a, b in self.mapping.items()]

    def relocated(self, query_position: int, target_position: int) -> "MCSSolution":
        """Return the same mapping reported under other job indices."""
        return MCSSolution(
            query_position=query_position,
            target_position=target_position,
            query_container=self.query_container,
            target_container=self.target_container,
            mapping=dict(self.mapping),
        )
