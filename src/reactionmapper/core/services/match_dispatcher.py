"""Runs a strategy's matching jobs on a worker pool."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional

from tqdm import tqdm

from ..domain.exceptions import InterruptedWaitError, MatchTaskError
from ..domain.implementations.cycle_finder import CycleFinder
from ..domain.interfaces.structure_matcher import StructureMatcher
from ..domain.models.combination import Combination, JobTable
from ..domain.models.mapping_algorithm import MappingAlgorithm, MatchSettings
from ..domain.models.mcs_solution import MCSSolution
from ..domain.models.reaction import ReactionContainer

logger = logging.getLogger(__name__)


def available_cpus() -> int:
    """CPUs this process may run on."""
    if hasattr(os, "sched_getaffinity"):
        return len(os.sched_getaffinity(0))
    return os.cpu_count() or 1


def default_pool_size(jobs: int, max_workers: Optional[int] = None) -> int:
    """One thread per job, at most one less than the available CPUs (at least 1)."""
    if max_workers is not None:
        return max(1, min(max_workers, jobs))
    cpus = available_cpus()
    return max(1, min(cpus - 1, jobs))


class MatchTask:
    """One external matching call between a reactant and a product."""

    def __init__(
        self,
        matcher: StructureMatcher,
        container: ReactionContainer,
        job: Combination,
        settings: MatchSettings,
    ):
        self.matcher = matcher
        self.container = container
        self.job = job
        self.settings = settings

    def __call__(self) -> MCSSolution:
        query = self.container.get_matching_educt(self.job.row_index)
        target = self.container.get_matching_product(self.job.col_index)
        try:
            mapping = self.matcher.match(query, target, self.settings)
        except Exception as e:
            raise MatchTaskError(
                f"Matching job {self.job} failed: {e}",
                self.job.row_index,
                self.job.col_index,
            ) from e
        return MCSSolution(
            query_position=self.job.row_index,
            target_position=self.job.col_index,
            query_container=query,
            target_container=target,
            mapping=mapping,
        )


@dataclass
class DispatchResult:
    """Raw solutions in completion order plus task accounting."""

    solutions: List[MCSSolution] = field(default_factory=list)
    submitted: int = 0
    failed: int = 0

    @property
    def retrieved(self) -> int:
        return len(self.solutions) + self.failed


class MatchDispatcher:
    """Submits one MatchTask per representative job and collects the results."""

    def __init__(
        self,
        matcher: StructureMatcher,
        max_workers: Optional[int] = None,
        cycle_finder: Optional[CycleFinder] = None,
        show_progress: bool = False,
    ):
        self.matcher = matcher
        self.max_workers = max_workers
        self.cycle_finder = cycle_finder or CycleFinder()
        self.show_progress = show_progress

    def create_task(
        self,
        container: ReactionContainer,
        job: Combination,
        strategy: MappingAlgorithm,
    ) -> MatchTask:
        """Build the task for ``job`` with ring flags from both containers' cycles."""
        educt_cycles = self.cycle_finder.count(
            container.get_matching_educt(job.row_index)
        )
        product_cycles = self.cycle_finder.count(
            container.get_matching_product(job.col_index)
        )
        ring = educt_cycles > 0 and product_cycles > 0
        ring_size_equal = educt_cycles == product_cycles
        settings = MatchSettings.for_job(strategy, ring, ring_size_equal)
        return MatchTask(self.matcher, container, job, settings)

    def dispatch(
        self,
        container: ReactionContainer,
        table: JobTable,
        strategy: MappingAlgorithm,
    ) -> DispatchResult:
        """
        Run every representative job of ``table`` and wait for all of them.

        Args:
            container: Per-strategy view of the reaction
            table: Job groups from the job builder
            strategy: Strategy whose flags the tasks use

        Returns:
            DispatchResult; failed tasks are counted and logged, not raised

        Raises:
            InterruptedWaitError: If the wait is interrupted
        """
        result = DispatchResult()
        if not table:
            return result

        tasks = [self.create_task(container, job, strategy) for job in table]
        pool_size = default_pool_size(len(tasks), self.max_workers)
        logger.debug(
            "Dispatching %d %s jobs on %d threads", len(tasks), strategy.label, pool_size
        )

        with ThreadPoolExecutor(max_workers=pool_size) as executor:
            futures = {executor.submit(task): task for task in tasks}
            result.submitted = len(futures)
            with tqdm(
                total=len(futures),
                desc=f"Matching ({strategy.label})",
                unit="job",
                disable=not self.show_progress,
            ) as pbar:
                try:
                    for future in as_completed(futures):
                        try:
                            result.solutions.append(future.result())
                        except Exception as e:
                            result.failed += 1
                            logger.error(
                                "Job %s (%s) failed: %s",
                                futures[future].job,
                                strategy.label,
                                e,
                            )
                        pbar.update(1)
                except KeyboardInterrupt as e:
                    executor.shutdown(wait=False, cancel_futures=True)
                    raise InterruptedWaitError(
                        f"Interrupted while waiting for {strategy.label} jobs"
                    ) from e

        logger.debug(
            "%s: %d submitted, %d failed",
            strategy.label,
            result.submitted,
            result.failed,
        )
        return result
