"""
Exhaustive Longest Path Search
==============================

Unpruned depth-first baselines for the longest trail problem:

- ExhaustiveDFS: every simple path over the junction graph (explicit stack)
- longest_completion: best extension of an arbitrary partial state
- longest_path_on_grid: every simple path over raw grid cells; only
  feasible for small maps, used as an independent reference
- enumerate_states: every partial state reachable from the start

Performance:
- Time: O(number of simple paths), exponential in the worst case
- Space: O(depth x branching) for the explicit stack
- Best for: validating the branch-and-bound solver on small maps
"""

import logging
from typing import Iterator, List, Optional, Tuple

from longtrail.core.definitions import Coord
from .compactor import JunctionGraph
from .trail_grid import TrailGrid
from .visited import VisitedSet

logger = logging.getLogger(__name__)


class ExhaustiveDFS:
    """Plain depth-first enumeration of simple paths over a JunctionGraph."""

    def __init__(self, graph: JunctionGraph):
        self.graph = graph
        self.states_explored = 0

    def solve(self) -> Tuple[bool, Optional[int], int]:
        """
        Returns:
            success: Whether any simple path reaches the finish
            length: Longest path length (None if unreachable)
            states_explored: Number of partial states visited
        """
        graph = self.graph
        self.states_explored = 0
        length = self._completion(graph.start, VisitedSet.of([graph.start], _width(graph)))
        logger.debug(f"ExhaustiveDFS: length={length}, states={self.states_explored}")
        return length is not None, length, self.states_explored

    def _completion(self, tip: int, visited: VisitedSet) -> Optional[int]:
        graph = self.graph
        best = None
        stack = [(tip, visited, 0)]
        while stack:
            node, seen, length = stack.pop()
            self.states_explored += 1
            if node == graph.finish:
                if best is None or length > best:
                    best = length
                continue
            for neighbor, weight in graph.neighbors(node):
                if neighbor not in seen:
                    stack.append((neighbor, seen.add(neighbor), length + weight))
        return best


def _width(graph: JunctionGraph) -> int:
    return max(64, graph.num_junctions)


def longest_completion(graph: JunctionGraph, tip: int, visited: VisitedSet) -> Optional[int]:
    """
    Longest additional length from tip to the finish avoiding visited.

    Args:
        graph: Compacted graph
        tip: Current junction (a member of visited)
        visited: Junctions already on the path

    Returns:
        Extra steps of the best completion, or None if the finish is cut off
    """
    return ExhaustiveDFS(graph)._completion(tip, visited)


def enumerate_states(graph: JunctionGraph) -> Iterator[Tuple[int, VisitedSet, int]]:
    """Yield every (tip, visited, length) reachable from the start, unpruned."""
    stack = [(graph.start, VisitedSet.of([graph.start], _width(graph)), 0)]
    while stack:
        tip, visited, length = stack.pop()
        yield tip, visited, length
        if tip == graph.finish:
            continue
        for neighbor, weight in graph.neighbors(tip):
            if neighbor not in visited:
                stack.append((neighbor, visited.add(neighbor), length + weight))


def longest_path_on_grid(grid: TrailGrid, slippery: bool) -> Optional[int]:
    """
    Longest simple start -> finish path counted in single grid steps.

    Independent of the compactor: walks raw cells with the grid's own
    movement rule. Exponential; keep to small maps.

    Returns:
        Number of steps, or None if the finish cannot be reached
    """
    best: Optional[int] = None
    on_path = {grid.start}
    stack: List[Tuple[Coord, Iterator[Coord]]] = [
        (grid.start, iter(grid.moves_from(grid.start, slippery)))
    ]

    while stack:
        cell, moves = stack[-1]
        nxt = next(moves, None)
        if nxt is None:
            stack.pop()
            on_path.discard(cell)
            continue
        if nxt in on_path:
            continue
        if nxt == grid.finish:
            # Path cells are the stack plus the finish
            steps = len(stack)
            if best is None or steps > best:
                best = steps
            continue
        on_path.add(nxt)
        stack.append((nxt, iter(grid.moves_from(nxt, slippery))))

    return best
