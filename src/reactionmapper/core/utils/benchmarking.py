# src/reactionmapper/core/utils/benchmarking.py

import threading
import time
import logging
from typing import Dict, List, Optional
from contextlib import contextmanager
from dataclasses import dataclass, field
from statistics import mean, median, stdev

logger = logging.getLogger(__name__)


@dataclass
class Timer:
    """Context manager for timing code blocks."""

    name: str
    start_time: float = field(default=0.0)
    end_time: float = field(default=0.0)

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self.end_time = time.perf_counter()
        logger.debug("%s took %.3fs", self.name, self.elapsed())

    def elapsed(self) -> float:
        """Get elapsed time in seconds."""
        if self.end_time == 0.0:
            return time.perf_counter() - self.start_time
        return self.end_time - self.start_time


@dataclass
class TimingStats:
    """Statistics for a timed operation."""

    name: str
    times: List[float] = field(default_factory=list)

    def add_timing(self, elapsed: float) -> None:
        self.times.append(elapsed)

    @property
    def count(self) -> int:
        return len(self.times)

    @property
    def total_time(self) -> float:
        return sum(self.times)

    @property
    def avg_time(self) -> float:
        return mean(self.times) if self.times else 0.0

    @property
    def median_time(self) -> float:
        return median(self.times) if self.times else 0.0

    @property
    def std_dev(self) -> float:
        return stdev(self.times) if len(self.times) > 1 else 0.0

    def __str__(self) -> str:
        if not self.times:
            return f"{self.name}: No timing data"
        return (
            f"{self.name}: Total: {self.total_time:.2f}s, Count: {self.count}, "
            f"Avg: {self.avg_time:.3f}s, Median: {self.median_time:.3f}s, "
            f"StdDev: {self.std_dev:.3f}s"
        )


class PerformanceStats:
    """Collect and report timings; safe to share between worker threads."""

    def __init__(self) -> None:
        self.stats: Dict[str, TimingStats] = {}
        self._lock = threading.Lock()

    def get_stats(self, name: str) -> TimingStats:
        with self._lock:
            if name not in self.stats:
                self.stats[name] = TimingStats(name=name)
            return self.stats[name]

    def add_timing(self, name: str, elapsed: float) -> None:
        stats = self.get_stats(name)
        with self._lock:
            stats.add_timing(elapsed)

    def totals(self) -> Dict[str, float]:
        with self._lock:
            return {name: s.total_time for name, s in self.stats.items()}

    def report(self) -> str:
        """Generate a performance report."""
        if not self.stats:
            return "No performance data collected"

        lines = []
        total_time = sum(s.total_time for s in self.stats.values())
        for name in sorted(self.stats.keys()):
            stats = self.stats[name]
            pct = (stats.total_time / total_time) * 100 if total_time > 0 else 0
            lines.append(f"{stats} ({pct:.1f}%)")
        return "\n".join(lines)


@contextmanager
def timer(name: str, stats: Optional[PerformanceStats] = None):
    """Context manager for timing code blocks with optional stats collection.

    Args:
        name: Name of the operation being timed
        stats: Optional PerformanceStats object to collect metrics
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if stats is not None:
            stats.add_timing(name, elapsed)
