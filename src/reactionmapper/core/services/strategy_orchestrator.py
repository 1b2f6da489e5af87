"""Runs every mapping strategy concurrently over one reaction."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Sequence

from ...config import MappingConfig
from ..domain.exceptions import InterruptedWaitError, MappingError
from ..domain.interfaces.reaction_standardizer import ReactionStandardizer
from ..domain.interfaces.structure_matcher import StructureMatcher
from ..domain.models.mapping_algorithm import MappingAlgorithm
from ..domain.models.reaction import Reaction
from ..domain.models.strategy_result import StrategyResult
from ..utils.benchmarking import PerformanceStats, timer
from .graph_matching_service import GraphMatchingService


class StrategyOrchestrator:
    """
    Owns a strategy pool and the per-strategy results of the last run.

    Each strategy works on its own standardized copy of the reaction. A
    strategy that fails is logged and left out of the results; the others
    are unaffected.
    """

    def __init__(
        self,
        standardizer: ReactionStandardizer,
        matcher: StructureMatcher,
        config: Optional[MappingConfig] = None,
    ):
        self.standardizer = standardizer
        self.config = config or MappingConfig()
        self.service = GraphMatchingService(
            matcher,
            remove_hydrogens=self.config.remove_hydrogens,
            max_workers=self.config.max_workers,
            cycle_limit=self.config.cycle_limit,
            show_progress=self.config.show_progress,
        )
        self.logger = logging.getLogger(__name__)
        self._solutions: Dict[MappingAlgorithm, StrategyResult] = {}
        self._stats = PerformanceStats()

    def _run_strategy(
        self,
        strategy: MappingAlgorithm,
        reaction: Reaction,
        similarity_matrix: Optional[Sequence[Sequence[float]]],
    ) -> StrategyResult:
        with timer(strategy.label, self._stats):
            return self.service.map_reaction(strategy, reaction, similarity_matrix)

    def run(
        self,
        reaction: Reaction,
        similarity_matrix: Optional[Sequence[Sequence[float]]] = None,
    ) -> Mapping[MappingAlgorithm, StrategyResult]:
        """
        Map ``reaction`` with every configured strategy.

        Args:
            reaction: Reaction to map; it is not modified
            similarity_matrix: Optional reactant x product matrix (-1 forces a pair)

        Returns:
            Read-only strategy -> result map (also kept for ``get_solutions``)

        Raises:
            InterruptedWaitError: If the wait on the strategies is interrupted
        """
        self._solutions = {}
        self._stats = PerformanceStats()

        cleaned = {}
        for strategy in self.config.strategies:
            try:
                cleaned[strategy] = self.standardizer.standardize(reaction)
            except MappingError as e:
                self.logger.error(
                    "Standardization for %s failed: %s", strategy.label, e
                )
        if not cleaned:
            return self.get_solutions()

        with ThreadPoolExecutor(max_workers=len(cleaned)) as executor:
            futures = {
                executor.submit(
                    self._run_strategy, strategy, owned, similarity_matrix
                ): strategy
                for strategy, owned in cleaned.items()
            }
            try:
                for future in as_completed(futures):
                    try:
                        result = future.result()
                    except InterruptedWaitError:
                        raise
                    except Exception as e:
                        self.logger.error(
                            "Strategy %s failed: %s", futures[future].label, e
                        )
                        continue
                    self._solutions[result.strategy] = result
            except KeyboardInterrupt as e:
                executor.shutdown(wait=False, cancel_futures=True)
                raise InterruptedWaitError("Interrupted while waiting for strategies") from e

        self.logger.info(
            "Mapped reaction %s with %d of %d strategies",
            reaction.reaction_id,
            len(self._solutions),
            len(self.config.strategies),
        )
        self.logger.debug("Strategy timings:\n%s", self._stats.report())
        return self.get_solutions()

    def get_solutions(self) -> Mapping[MappingAlgorithm, StrategyResult]:
        return MappingProxyType(self._solutions)

    def get_timings(self) -> Dict[MappingAlgorithm, float]:
        """Wall time of every strategy that ran in the last ``run``."""
        totals = self._stats.totals()
        return {
            strategy: totals[strategy.label]
            for strategy in self.config.strategies
            if strategy.label in totals
        }
