"""Mapping strategies and the matching flags they select."""

from dataclasses import dataclass
from enum import Enum


class MappingAlgorithm(Enum):
    """Heuristic configurations producing independent candidate mappings.

    Each member carries ``(match_bonds, exhaustive)``; ring matching is
    decided per job from the cycles of the two containers.
    """

    EXHAUSTIVE = ("exhaustive", False, True)
    MINIMAL = ("minimal", False, True)
    MIXTURE = ("mixture", False, False)
    RING_BIASED = ("ring_biased", False, True)

    def __init__(self, label: str, match_bonds: bool, exhaustive: bool):
        self.label = label
        self.match_bonds = match_bonds
        self.exhaustive = exhaustive

    @classmethod
    def from_label(cls, label: str) -> "MappingAlgorithm":
        for member in cls:
            if member.label == label.lower() or member.name == label.upper():
                return member
        raise ValueError(f"Unknown mapping algorithm: {label}")


@dataclass(frozen=True)
class MatchSettings:
    """Flags handed to one external matching call."""

    strategy: MappingAlgorithm
    match_bonds: bool = False
    match_rings: bool = False
    exhaustive: bool = True
    perfect_rings: bool = False

    @classmethod
    def for_job(
        cls, strategy: MappingAlgorithm, ring: bool, ring_size_equal: bool
    ) -> "MatchSettings":
        return cls(
            strategy=strategy,
            match_bonds=strategy.match_bonds,
            match_rings=ring,
            exhaustive=strategy.exhaustive,
            perfect_rings=ring_size_equal,
        )
