"""Infrastructure implementations of core interfaces and adapters."""

from .repositories.reaction_repository import ReactionRepository
from .adapters.rdkit_adapter import RDKitAdapter
from .adapters.networkx_adapter import NetworkXAdapter

__all__ = [
    "ReactionRepository",
    "RDKitAdapter",
    "NetworkXAdapter",
]
