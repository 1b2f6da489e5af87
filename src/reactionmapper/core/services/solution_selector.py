"""Consolidates a strategy's solution set into one atom-atom mapping."""

from typing import Callable, Dict, Optional, Sequence, Set, Tuple

from ..domain.implementations.cycle_finder import CycleFinder
from ..domain.models.atom import Atom
from ..domain.models.mapping_algorithm import MappingAlgorithm
from ..domain.models.mcs_solution import MCSSolution

SortKey = Callable[[MCSSolution], Tuple]


class SolutionSelector:
    """Greedy per-strategy choice among overlapping partial mappings.

    Solutions are visited in strategy order and accepted pair by pair;
    a pair is skipped when either of its atoms is already mapped.
    """

    def __init__(self, cycle_finder: Optional[CycleFinder] = None):
        self.cycle_finder = cycle_finder or CycleFinder()

    def _ring_atoms(self, solution: MCSSolution) -> int:
        rings = self.cycle_finder.ring_atoms(solution.query_container)
        return sum(1 for atom in solution.mapping if atom in rings)

    @staticmethod
    def _coverage(solution: MCSSolution) -> float:
        smaller = min(
            solution.query_container.atom_count, solution.target_container.atom_count
        )
        return solution.size / smaller if smaller else 0.0

    def sort_key(self, strategy: MappingAlgorithm) -> SortKey:
        if strategy is MappingAlgorithm.MINIMAL:
            primary = lambda s: (s.query_container.atom_count, -s.size)
        elif strategy is MappingAlgorithm.MIXTURE:
            primary = lambda s: (-self._coverage(s),)
        elif strategy is MappingAlgorithm.RING_BIASED:
            primary = lambda s: (-self._ring_atoms(s), -s.size)
        else:
            primary = lambda s: (-s.size,)
        return lambda s: primary(s) + (s.query_position, s.target_position)

    def select(
        self, strategy: MappingAlgorithm, solutions: Sequence[MCSSolution]
    ) -> Dict[Atom, Atom]:
        mapping: Dict[Atom, Atom] = {}
        used_products: Set[int] = set()
        for solution in sorted(solutions, key=self.sort_key(strategy)):
            for educt_atom, product_atom in solution.mapping.items():
                if educt_atom in mapping or id(product_atom) in used_products:
                    continue
                mapping[educt_atom] = product_atom
                used_products.add(id(product_atom))
        return mapping
