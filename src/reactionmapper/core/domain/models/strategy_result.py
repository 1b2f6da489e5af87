"""Domain model for one strategy's winning mapping."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .atom import Atom
from .mapping_algorithm import MappingAlgorithm
from .mcs_solution import MCSSolution
from .reaction import Reaction


@dataclass(frozen=True)
class StrategyResult:
    """Reconciled solutions of one strategy plus the mapping chosen from them."""

    strategy: MappingAlgorithm
    reaction: Reaction
    solutions: Tuple[MCSSolution, ...] = ()
    mapping: Mapping[Atom, Atom] = field(
        default_factory=lambda: MappingProxyType({})
    )
    elapsed: Optional[float] = None

    @property
    def mapped_atoms(self) -> int:
        return len(self.mapping)

    def __post_init__(self):
        if not isinstance(self.mapping, MappingProxyType):
            object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))
