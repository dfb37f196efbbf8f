"""
Solver Comparison Mode - Compare Longest Path Algorithms
========================================================

Runs the available longest-path solvers on the same trail map:
1. Branch & Bound - best-first with spanning forest bound (exact)
2. Exhaustive DFS - every simple path over the junction graph (exact)
3. Grid DFS       - every simple path over raw cells (exact, small maps only)

All three must agree on the length; they differ in states explored and time.
"""

import logging
import time
from dataclasses import dataclass
from typing import Dict, List, Optional

from .branch_and_bound import LongestPathSearch, SolverOptions
from .compactor import JunctionGraph
from .exhaustive import ExhaustiveDFS, longest_path_on_grid
from .trail_grid import TrailGrid

logger = logging.getLogger(__name__)

# Raw-cell DFS explodes quickly; only run it on tiny maps
DEFAULT_MAX_GRID_CELLS = 60


@dataclass
class SolverMetrics:
    """Performance metrics for a solver."""
    name: str
    success: bool
    length: Optional[int]
    states_explored: int
    time_taken: float  # seconds

    def __str__(self):
        status = "OK" if self.success else "--"
        length = self.length if self.success else "unreachable"
        return (f"[{status}] {self.name}: "
                f"Length={length}, "
                f"Explored={self.states_explored}, "
                f"Time={self.time_taken:.3f}s")


class SolverComparison:
    """Side-by-side execution of the longest path solvers on one graph."""

    def __init__(self, graph: JunctionGraph, grid: Optional[TrailGrid] = None,
                 options: Optional[SolverOptions] = None,
                 max_grid_cells: int = DEFAULT_MAX_GRID_CELLS):
        """
        Args:
            graph: Compacted graph
            grid: Source map; enables the raw-cell DFS when small enough
            options: Options for the branch-and-bound solver
            max_grid_cells: Skip the raw-cell DFS above this many open cells
        """
        self.graph = graph
        self.grid = grid
        self.options = options or SolverOptions(slippery=graph.slippery)
        self.max_grid_cells = max_grid_cells

    def compare_all(self) -> Dict[str, SolverMetrics]:
        """Run every applicable solver and collect metrics."""
        results = {}

        start = time.perf_counter()
        result = LongestPathSearch(self.graph, self.options).solve()
        results['Branch & Bound'] = SolverMetrics(
            name='Branch & Bound',
            success=result.success,
            length=result.length,
            states_explored=result.diagnostics.states_expanded,
            time_taken=time.perf_counter() - start,
        )

        start = time.perf_counter()
        success, length, states = ExhaustiveDFS(self.graph).solve()
        results['Exhaustive DFS'] = SolverMetrics(
            name='Exhaustive DFS',
            success=success,
            length=length,
            states_explored=states,
            time_taken=time.perf_counter() - start,
        )

        if self.grid is not None:
            open_cells = len(self.grid.open_cells())
            if open_cells <= self.max_grid_cells:
                start = time.perf_counter()
                length = longest_path_on_grid(self.grid, self.graph.slippery)
                results['Grid DFS'] = SolverMetrics(
                    name='Grid DFS',
                    success=length is not None,
                    length=length,
                    states_explored=open_cells,
                    time_taken=time.perf_counter() - start,
                )
            else:
                logger.debug(f"Skipping Grid DFS: {open_cells} open cells > {self.max_grid_cells}")

        for metrics in results.values():
            logger.info(str(metrics))
        return results

    @staticmethod
    def agree(results: Dict[str, SolverMetrics]) -> bool:
        """True if every solver reported the same length."""
        return len({m.length for m in results.values()}) <= 1

    @staticmethod
    def format_table(results: Dict[str, SolverMetrics]) -> str:
        lines: List[str] = [str(m) for m in results.values()]
        verdict = "agree" if SolverComparison.agree(results) else "DISAGREE"
        lines.append(f"Solvers {verdict}")
        return '\n'.join(lines)
