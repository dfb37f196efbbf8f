"""
Branch-and-Bound Longest Path Search
====================================

Exact longest simple path from start to finish over a JunctionGraph.

Search state: (tip junction, visited bit field, length so far). States live
on a max-priority work list keyed by

    priority = length + max_spanning_forest(visited - {tip})

The spanning forest bound never underestimates the remaining length
(admissible), so once the best open priority drops below the best finished
length nothing left can win and the search stops.

Complexity:
- Worst case exponential in the junction count (longest path is NP-hard)
- In practice the bound prunes most branches on trail maps

Research:
- Land, A. H. & Doig, A. G. (1960). "An Automatic Method of Solving
  Discrete Programming Problems." Econometrica 28(3), 497-520.
"""

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from longtrail.core.definitions import Coord, DEFAULT_MAX_JUNCTIONS
from longtrail.core.errors import CapacityExceededError
from longtrail.utils import graph_utils
from .compactor import GraphCompactor, JunctionGraph
from .spanning_bound import SpanningForestBound
from .trail_grid import TrailGrid
from .visited import VisitedSet

logger = logging.getLogger(__name__)


# ==========================================
# CONFIGURATION & RESULTS
# ==========================================

@dataclass
class SolverOptions:
    """Configuration options for the solver.

    slippery: slopes are one-way (part 1 rules) instead of plain path (part 2)
    max_junctions: width of the visited bit field
    memoize_bounds: cache spanning forest bounds per excluded set
    record_path: keep parent links so the best route can be reported
    """
    slippery: bool = True
    max_junctions: int = DEFAULT_MAX_JUNCTIONS
    memoize_bounds: bool = False
    record_path: bool = True

    @classmethod
    def for_mode(cls, mode: str = "slippery", **overrides) -> 'SolverOptions':
        """Factory for the two rule sets: "slippery" or "dry"."""
        if mode not in ("slippery", "dry"):
            raise ValueError(f"Unknown mode: {mode}")
        return cls(slippery=(mode == "slippery"), **overrides)

    @classmethod
    def for_part(cls, part: int, **overrides) -> 'SolverOptions':
        """Part 1 climbs no slopes, part 2 treats slopes as path."""
        if part == 1:
            return cls.for_mode("slippery", **overrides)
        elif part == 2:
            return cls.for_mode("dry", **overrides)
        raise ValueError(f"Unknown part: {part}")


@dataclass
class SearchDiagnostics:
    """Counters from a single search run."""
    states_pushed: int = 0
    states_expanded: int = 0
    states_pruned: int = 0
    finishes_reached: int = 0
    bound_evaluations: int = 0
    bound_cache_hits: int = 0
    max_queue_size: int = 0
    time_taken_ms: float = 0.0
    failure_reason: str = ""

    def summary(self) -> str:
        """Human-readable summary of search performance."""
        status = "SUCCESS" if not self.failure_reason else f"FAILED: {self.failure_reason}"
        return f"""
=== Search Diagnostics ===
Status: {status}
States Pushed: {self.states_pushed:,}
States Expanded: {self.states_expanded:,}
States Pruned: {self.states_pruned:,}
Finishes Reached: {self.finishes_reached:,}
Bound Evaluations: {self.bound_evaluations:,} (cache hits: {self.bound_cache_hits:,})
Max Queue Size: {self.max_queue_size:,}
Time Taken: {self.time_taken_ms:.1f}ms
=========================="""


@dataclass(frozen=True)
class SearchState:
    """Partial path: tip is always a member of visited."""
    tip: int
    visited: VisitedSet
    length: int
    parent: Optional['SearchState'] = field(default=None, repr=False, compare=False)

    def route(self) -> List[int]:
        """Junction ids from start to tip (needs parent links)."""
        route = []
        state: Optional[SearchState] = self
        while state is not None:
            route.append(state.tip)
            state = state.parent
        return route[::-1]


@dataclass
class SearchResult:
    """Outcome of a longest path search.

    length is None when the finish cannot be reached; it is never 0 for that.
    """
    success: bool
    length: Optional[int]
    route: List[int] = field(default_factory=list)
    waypoints: List[Coord] = field(default_factory=list)
    diagnostics: SearchDiagnostics = field(default_factory=SearchDiagnostics)

    @property
    def reachable(self) -> bool:
        return self.success

    def __str__(self) -> str:
        return str(self.length) if self.success else "unreachable"


# ==========================================
# SEARCH
# ==========================================

class LongestPathSearch:
    """
    Best-first branch-and-bound over one immutable JunctionGraph.

    Owns its work list, bound estimator and incumbent; nothing persists
    between instances.
    """

    def __init__(self, graph: JunctionGraph, options: Optional[SolverOptions] = None):
        """
        Args:
            graph: Compacted trail graph
            options: Solver configuration (mode is taken from the graph)

        Raises:
            CapacityExceededError: Graph larger than the visited bit field
        """
        self.graph = graph
        self.options = options or SolverOptions(slippery=graph.slippery)
        if graph.num_junctions > self.options.max_junctions:
            raise CapacityExceededError(graph.num_junctions, self.options.max_junctions)

        self.bound = SpanningForestBound(graph, memoize=self.options.memoize_bounds)
        self.diagnostics = SearchDiagnostics()
        self.best: Optional[int] = None
        self.best_state: Optional[SearchState] = None
        self._queue: List[Tuple[int, int, SearchState]] = []
        self._counter = itertools.count()

    def priority(self, state: SearchState) -> int:
        """Optimistic total length: so far + bound over still-usable junctions."""
        return state.length + self.bound.estimate(state.visited.discard(state.tip))

    def _push(self, state: SearchState) -> None:
        key = self.priority(state)
        # heapq is a min-heap; insertion order breaks ties deterministically
        heapq.heappush(self._queue, (-key, next(self._counter), state))
        self.diagnostics.states_pushed += 1
        self.diagnostics.max_queue_size = max(self.diagnostics.max_queue_size, len(self._queue))

    def solve(self) -> SearchResult:
        """
        Run the search to completion.

        Returns:
            SearchResult; success is False when start and finish are disconnected
        """
        start_time = time.perf_counter()
        graph = self.graph

        if not graph_utils.is_finish_reachable(graph):
            logger.info("Finish is not reachable from start")
            self.diagnostics.failure_reason = "finish unreachable from start"
            return self._result(start_time)

        initial = SearchState(
            tip=graph.start,
            visited=VisitedSet.of([graph.start], self.options.max_junctions),
            length=0,
        )
        self._push(initial)

        while self._queue:
            neg_key, _, state = heapq.heappop(self._queue)
            if self.best is not None and -neg_key < self.best:
                # Max-heap: every remaining state is bounded by this key too
                self.diagnostics.states_pruned += 1 + len(self._queue)
                logger.debug(f"Bound {-neg_key} below best {self.best}; stopping")
                self._queue.clear()
                break

            self.diagnostics.states_expanded += 1
            if state.tip == graph.finish:
                self.diagnostics.finishes_reached += 1
                if self.best is None or state.length > self.best:
                    self.best = state.length
                    self.best_state = state
                    logger.debug(f"New best length {state.length}")
                continue

            parent = state if self.options.record_path else None
            for neighbor, weight in graph.neighbors(state.tip):
                if neighbor in state.visited:
                    continue
                self._push(SearchState(
                    tip=neighbor,
                    visited=state.visited.add(neighbor),
                    length=state.length + weight,
                    parent=parent,
                ))

        if self.best is None:
            self.diagnostics.failure_reason = "no simple path reaches the finish"
        return self._result(start_time)

    def _result(self, start_time: float) -> SearchResult:
        self.diagnostics.bound_evaluations = self.bound.evaluations
        self.diagnostics.bound_cache_hits = self.bound.cache_hits
        self.diagnostics.time_taken_ms = (time.perf_counter() - start_time) * 1000.0

        if self.best is None:
            return SearchResult(success=False, length=None, diagnostics=self.diagnostics)

        route = self.best_state.route() if self.options.record_path else []
        logger.info(
            f"Longest trail: {self.best} steps through {len(route)} junctions "
            f"({self.diagnostics.states_expanded} states expanded, "
            f"{self.diagnostics.time_taken_ms:.1f}ms)"
        )
        return SearchResult(
            success=True,
            length=self.best,
            route=route,
            waypoints=[self.graph.coords[node] for node in route],
            diagnostics=self.diagnostics,
        )


# ==========================================
# CONVENIENCE
# ==========================================

def solve_trail(trail: Union[str, np.ndarray, TrailGrid],
                options: Optional[SolverOptions] = None) -> SearchResult:
    """
    Parse (if needed), compact and solve a trail map in one call.

    Args:
        trail: Map text, TileID array, or TrailGrid
        options: Solver configuration (default: slippery)

    Raises:
        MalformedGridError: Invalid map
        CapacityExceededError: Too many junctions
    """
    options = options or SolverOptions()
    if isinstance(trail, str):
        grid = TrailGrid.from_text(trail)
    elif isinstance(trail, TrailGrid):
        grid = trail
    else:
        grid = TrailGrid(trail)

    graph = GraphCompactor(grid, slippery=options.slippery,
                           max_junctions=options.max_junctions).compact()
    return LongestPathSearch(graph, options).solve()
