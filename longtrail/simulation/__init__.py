"""
LONGTRAIL Simulation Module
===========================
Grid model, graph compaction and longest path solvers.

This module contains:
- trail_grid: Read-only trail map with start/finish and movement rules
- compactor: Corridor compaction into a JunctionGraph
- visited: Fixed-width visited bit field
- spanning_bound: Maximum spanning forest upper bound
- branch_and_bound: Best-first branch-and-bound search
- exhaustive: Unpruned DFS baselines
- solver_comparison: Solver benchmarking
"""

from .trail_grid import TrailGrid
from .compactor import (
    Corridor,
    Edge,
    JunctionGraph,
    GraphCompactor,
    compact_grid,
)
from .visited import VisitedSet
from .spanning_bound import UnionFind, SpanningForestBound
from .branch_and_bound import (
    SolverOptions,
    SearchDiagnostics,
    SearchState,
    SearchResult,
    LongestPathSearch,
    solve_trail,
)
from .exhaustive import (
    ExhaustiveDFS,
    longest_completion,
    enumerate_states,
    longest_path_on_grid,
)
from .solver_comparison import SolverComparison, SolverMetrics

__all__ = [
    'TrailGrid',
    'Corridor',
    'Edge',
    'JunctionGraph',
    'GraphCompactor',
    'compact_grid',
    'VisitedSet',
    'UnionFind',
    'SpanningForestBound',
    'SolverOptions',
    'SearchDiagnostics',
    'SearchState',
    'SearchResult',
    'LongestPathSearch',
    'solve_trail',
    'ExhaustiveDFS',
    'longest_completion',
    'enumerate_states',
    'longest_path_on_grid',
    'SolverComparison',
    'SolverMetrics',
]
