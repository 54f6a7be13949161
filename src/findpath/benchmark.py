"""
Benchmark harness for the upward walker.

Times common upward searches from a directory and prints a table of average
latencies. Run with ``python -m findpath.benchmark [directory]``.
"""

import sys
import time
import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .finder import find_up, find_up_async, find_up_multiple


logger = logging.getLogger(__name__)

WARMUP_ITERATIONS = 10


@dataclass
class BenchmarkResult:
    """
    Timing of one benchmarked operation.

    Attributes:
        name: Description of the operation
        iterations: Number of timed calls
        total_time: Total time in milliseconds
    """
    name: str
    iterations: int
    total_time: float

    @property
    def avg_time(self) -> float:
        """Average time per call in milliseconds."""
        if self.iterations == 0:
            return 0.0
        return self.total_time / self.iterations

    @property
    def ops_per_sec(self) -> float:
        if self.total_time == 0:
            return float('inf')
        return 1000 * self.iterations / self.total_time


def benchmark(name: str, fn: Callable[[], object], iterations: int = 1000) -> BenchmarkResult:
    """
    Time a callable after a short warm-up.

    Args:
        name: Description of the operation
        fn: Operation to time
        iterations: Number of timed calls

    Returns:
        BenchmarkResult with the total elapsed time
    """
    for _ in range(WARMUP_ITERATIONS):
        fn()

    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    elapsed = (time.perf_counter() - start) * 1000

    return BenchmarkResult(name=name, iterations=iterations, total_time=elapsed)


async def _benchmark_async(name: str, cwd: str, iterations: int) -> BenchmarkResult:
    start = time.perf_counter()
    for _ in range(iterations):
        await find_up_async('pyproject.toml', cwd=cwd)
    elapsed = (time.perf_counter() - start) * 1000
    return BenchmarkResult(name=name, iterations=iterations, total_time=elapsed)


def run_benchmarks(cwd: Optional[str] = None, iterations: int = 1000) -> List[BenchmarkResult]:
    """
    Run the standard set of upward search benchmarks.

    Args:
        cwd: Directory the searches start from (this package's directory when None)
        iterations: Number of timed calls per synchronous benchmark

    Returns:
        List of benchmark results
    """
    cwd = cwd or str(Path(__file__).resolve().parent)
    logger.info(f"Running benchmarks from {cwd}")

    results = [
        benchmark('find_up (pyproject.toml)',
                  lambda: find_up('pyproject.toml', cwd=cwd), max(1, iterations)),
        benchmark('find_up (non-existent file)',
                  lambda: find_up('this-does-not-exist.txt', cwd=cwd), max(1, iterations // 2)),
        benchmark('find_up_multiple (limit 3)',
                  lambda: find_up_multiple('pyproject.toml', cwd=cwd, limit=3), max(1, iterations)),
        benchmark('find_up (list of names)',
                  lambda: find_up(['pyproject.toml', 'README.md'], cwd=cwd), max(1, iterations)),
    ]

    results.append(asyncio.run(
        _benchmark_async('find_up_async (pyproject.toml)', cwd, max(1, iterations // 10))
    ))

    return results


def format_results(results: List[BenchmarkResult]) -> str:
    """
    Render benchmark results as a fixed-width table.

    Args:
        results: Results to render

    Returns:
        Table as a multi-line string
    """
    lines = [
        "Benchmark Results:",
        "=" * 80,
        f"{'Test Name':<45} {'Iterations':>10} {'Avg Time (ms)':>15} {'Ops/Sec':>10}",
        "-" * 80,
    ]

    for result in results:
        lines.append(
            f"{result.name:<45} {result.iterations:>10} "
            f"{result.avg_time:>15.4f} {result.ops_per_sec:>10.2f}"
        )

    lines.append("=" * 80)
    return "\n".join(lines)


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print(format_results(run_benchmarks(sys.argv[1] if len(sys.argv) > 1 else None)))
