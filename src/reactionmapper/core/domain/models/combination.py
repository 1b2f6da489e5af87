"""Domain model for a (reactant, product) matching job."""

from dataclasses import dataclass
from typing import Dict, Set


@dataclass(frozen=True, order=True)
class Combination:
    """A single (reactant index, product index) pair requiring a match.

    Ordered lexicographically on (row_index, col_index) and hashed by value.
    """

    row_index: int
    col_index: int

    def __str__(self) -> str:
        return f"({self.row_index}, {self.col_index})"


# Representative job -> equivalent jobs solved by the representative's match.
JobTable = Dict[Combination, Set[Combination]]
