"""Core business logic services."""

from .graph_matching_service import GraphMatchingService
from .strategy_orchestrator import StrategyOrchestrator
from .match_dispatcher import MatchDispatcher, MatchTask
from .solution_selector import SolutionSelector

__all__ = [
    "GraphMatchingService",
    "StrategyOrchestrator",
    "MatchDispatcher",
    "MatchTask",
    "SolutionSelector",
]
