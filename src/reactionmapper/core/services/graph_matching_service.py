"""Service running one mapping strategy over a reaction."""

import logging
from typing import Optional, Sequence

from ..domain.implementations.cycle_finder import CycleFinder
from ..domain.interfaces.structure_matcher import StructureMatcher
from ..domain.models.mapping_algorithm import MappingAlgorithm
from ..domain.models.reaction import Reaction, ReactionContainer
from ..domain.models.strategy_result import StrategyResult
from ..utils.benchmarking import Timer
from .job_builder import build_jobs
from .match_dispatcher import MatchDispatcher
from .result_reconciler import reconcile
from .solution_selector import SolutionSelector


class GraphMatchingService:
    """Job building, parallel matching and reconciliation for one strategy."""

    def __init__(
        self,
        matcher: StructureMatcher,
        remove_hydrogens: bool = True,
        max_workers: Optional[int] = None,
        cycle_limit: int = 1000,
        show_progress: bool = False,
    ):
        cycle_finder = CycleFinder(cycle_limit)
        self.remove_hydrogens = remove_hydrogens
        self.dispatcher = MatchDispatcher(
            matcher,
            max_workers=max_workers,
            cycle_finder=cycle_finder,
            show_progress=show_progress,
        )
        self.selector = SolutionSelector(cycle_finder)
        self.logger = logging.getLogger(__name__)

    def map_reaction(
        self,
        strategy: MappingAlgorithm,
        reaction: Reaction,
        similarity_matrix: Optional[Sequence[Sequence[float]]] = None,
    ) -> StrategyResult:
        """
        Compute the reconciled solutions and winning mapping of ``strategy``.

        Args:
            strategy: Strategy to run
            reaction: Standardized reaction owned by this strategy
            similarity_matrix: Optional reactant x product matrix (-1 forces a pair)

        Returns:
            StrategyResult referring to ``reaction``'s containers
        """
        with Timer(f"map_reaction[{strategy.label}]") as clock:
            container = ReactionContainer(reaction, self.remove_hydrogens)
            table = build_jobs(container, similarity_matrix)
            if table:
                dispatched = self.dispatcher.dispatch(container, table, strategy)
                solutions = reconcile(dispatched.solutions, table, container)
                mapping = self.selector.select(strategy, solutions)
            else:
                self.logger.info("%s: no jobs to match", strategy.label)
                solutions, mapping = (), {}

        self.logger.info(
            "%s: %d job groups, %d solutions, %d mapped atoms",
            strategy.label,
            len(table),
            len(solutions),
            len(mapping),
        )
        return StrategyResult(
            strategy=strategy,
            reaction=reaction,
            solutions=solutions,
            mapping=mapping,
            elapsed=clock.elapsed(),
        )
