"""Adapters for external libraries."""

from .rdkit_adapter import RDKitAdapter
from .networkx_adapter import NetworkXAdapter

__all__ = [
    "RDKitAdapter",
    "NetworkXAdapter",
]
