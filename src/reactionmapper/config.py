"""Runtime configuration for reaction mapping."""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from .core.domain.models.mapping_algorithm import MappingAlgorithm

_TRUE = {"1", "true", "yes", "on"}


def _flag(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() in _TRUE


@dataclass
class MappingConfig:
    """Settings shared by the orchestrator, the dispatcher and the matchers."""

    remove_hydrogens: bool = True
    max_workers: Optional[int] = None
    matcher_timeout: float = 60.0
    show_progress: bool = False
    strategies: Tuple[MappingAlgorithm, ...] = field(
        default_factory=lambda: tuple(MappingAlgorithm)
    )
    cycle_limit: int = 1000
    verbose: bool = False

    def __post_init__(self):
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.matcher_timeout <= 0:
            raise ValueError("matcher_timeout must be positive")
        if not self.strategies:
            raise ValueError("At least one strategy is required")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MappingConfig":
        """Build a config from RXNMAP_* environment variables."""
        env = os.environ if environ is None else environ
        kwargs = {}
        if env.get("RXNMAP_WORKERS"):
            kwargs["max_workers"] = int(env["RXNMAP_WORKERS"])
        if env.get("RXNMAP_TIMEOUT"):
            kwargs["matcher_timeout"] = float(env["RXNMAP_TIMEOUT"])
        if "RXNMAP_KEEP_HYDROGENS" in env:
            kwargs["remove_hydrogens"] = not _flag(env["RXNMAP_KEEP_HYDROGENS"])
        if "RXNMAP_VERBOSE" in env:
            kwargs["verbose"] = _flag(env["RXNMAP_VERBOSE"])
        return cls(**kwargs)
