"""
Graph Compactor
===============

Collapses a trail map into a small weighted graph between junctions.

Strategy:
1. Prune dead-end spurs (cells other than start/finish with fewer than two
   open neighbours, repeatedly) - they can never lie on a simple path
   between start and finish
2. Junctions = start, finish, and every remaining cell with more than two
   open neighbours; ids are dense: start=0, finish=1, then row-major
3. Walk every corridor leaving every junction; intermediate cells have
   exactly one forward continuation, so each walk is deterministic
4. Record one Corridor per physical corridor, with per-direction usability
   under the active mode (slippery slopes only remove directions, never
   change weights)

Junction classification uses physical neighbours in both modes, so the dry
and slippery graphs of the same map share their junction ids.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from longtrail.core.definitions import Coord, DEFAULT_MAX_JUNCTIONS
from longtrail.core.errors import CapacityExceededError, CompactionInvariantError
from .trail_grid import TrailGrid

logger = logging.getLogger(__name__)

START_ID = 0
FINISH_ID = 1


# ==========================================
# DATA STRUCTURES
# ==========================================

@dataclass(frozen=True)
class Edge:
    """Undirected weighted edge between two distinct junctions (u < v)."""
    u: int
    v: int
    weight: int

    def touches(self, node: int) -> bool:
        return node == self.u or node == self.v


@dataclass(frozen=True)
class Corridor:
    """One physical corridor between junctions u <= v.

    forward: travel u -> v is allowed under the active mode
    backward: travel v -> u is allowed under the active mode
    """
    u: int
    v: int
    weight: int
    forward: bool = True
    backward: bool = True

    @property
    def is_loop(self) -> bool:
        return self.u == self.v

    @property
    def usable(self) -> bool:
        return self.forward or self.backward

    def usable_from(self, node: int) -> bool:
        if node == self.u and self.forward:
            return True
        return node == self.v and self.backward

    @classmethod
    def walked(cls, origin: int, dest: int, weight: int, usable: bool) -> 'Corridor':
        """Corridor seen from one walk; the opposite direction is unknown yet."""
        if origin <= dest:
            return cls(origin, dest, weight, forward=usable, backward=False)
        return cls(dest, origin, weight, forward=False, backward=usable)

    def merged(self, origin: int, usable: bool) -> 'Corridor':
        """Fold in the walk of the same corridor started from ``origin``."""
        if self.is_loop:
            return Corridor(self.u, self.v, self.weight,
                            self.forward or usable, self.backward or usable)
        if origin == self.u:
            return Corridor(self.u, self.v, self.weight, self.forward or usable, self.backward)
        return Corridor(self.u, self.v, self.weight, self.forward, self.backward or usable)


@dataclass(frozen=True)
class JunctionGraph:
    """
    Compacted trail graph. Immutable and shared read-only by every search state.

    Attributes:
        coords: Grid coordinate of each junction, indexed by junction id
        adjacency: Per junction, ordered (neighbour, weight) pairs usable from it
        edges: Undirected edges sorted by weight desc, then (u, v) asc
        corridors: Every physical corridor, including loops and unusable ones
        slippery: Mode the graph was built for
    """
    coords: Tuple[Coord, ...]
    adjacency: Tuple[Tuple[Tuple[int, int], ...], ...]
    edges: Tuple[Edge, ...]
    corridors: Tuple[Corridor, ...]
    slippery: bool = False
    start: int = START_ID
    finish: int = FINISH_ID

    @classmethod
    def from_corridors(cls, coords: Sequence[Coord], corridors: Sequence[Corridor],
                       slippery: bool = False, start: int = START_ID,
                       finish: int = FINISH_ID) -> 'JunctionGraph':
        """
        Build adjacency and the sorted edge list from a raw corridor list.

        Parallel corridors are merged in the adjacency (the longest wins) but
        stay distinct in ``corridors``. Loops never appear in adjacency or
        edges. The finish gets no outgoing adjacency.
        """
        n = len(coords)
        longest: List[Dict[int, int]] = [{} for _ in range(n)]
        edge_keys: Set[Tuple[int, int, int]] = set()

        for corridor in corridors:
            if corridor.is_loop or not corridor.usable:
                continue
            edge_keys.add((corridor.u, corridor.v, corridor.weight))
            for origin, dest in ((corridor.u, corridor.v), (corridor.v, corridor.u)):
                if origin == finish or not corridor.usable_from(origin):
                    continue
                if longest[origin].get(dest, 0) < corridor.weight:
                    longest[origin][dest] = corridor.weight

        edges = tuple(
            Edge(u, v, w)
            for u, v, w in sorted(edge_keys, key=lambda e: (-e[2], e[0], e[1]))
        )
        adjacency = tuple(tuple(neighbors.items()) for neighbors in longest)
        return cls(
            coords=tuple(coords),
            adjacency=adjacency,
            edges=edges,
            corridors=tuple(corridors),
            slippery=slippery,
            start=start,
            finish=finish,
        )

    @property
    def num_junctions(self) -> int:
        return len(self.coords)

    def index(self, coord: Coord) -> Optional[int]:
        """Junction id at coord, or None if coord is not a junction."""
        try:
            return self.coords.index(coord)
        except ValueError:
            return None

    def neighbors(self, node: int) -> Tuple[Tuple[int, int], ...]:
        return self.adjacency[node]

    def total_weight(self) -> int:
        return sum(edge.weight for edge in self.edges)


# ==========================================
# COMPACTOR
# ==========================================

class GraphCompactor:
    """
    Turns a TrailGrid into a JunctionGraph for one mode.

    Example:
        >>> grid = TrailGrid.from_text(text)
        >>> graph = GraphCompactor(grid, slippery=False).compact()
        >>> graph.start, graph.finish
        (0, 1)
    """

    def __init__(self, grid: TrailGrid, slippery: bool = True,
                 max_junctions: int = DEFAULT_MAX_JUNCTIONS):
        """
        Args:
            grid: Validated trail map
            slippery: Enforce one-way slopes
            max_junctions: Width of the visited bit field
        """
        self.grid = grid
        self.slippery = slippery
        self.max_junctions = max_junctions
        self.terminals = {grid.start, grid.finish}

    def compact(self) -> JunctionGraph:
        """
        Build the junction graph.

        Raises:
            CapacityExceededError: More junctions than max_junctions
            CompactionInvariantError: A corridor walk did not end at a junction
        """
        cells = self._prune_dead_ends()
        junctions = self._find_junctions(cells)
        if len(junctions) > self.max_junctions:
            raise CapacityExceededError(len(junctions), self.max_junctions)

        index = {coord: i for i, coord in enumerate(junctions)}
        corridors: Dict[FrozenSet[Tuple[Coord, Coord]], Corridor] = {}

        for origin_id, origin in enumerate(junctions):
            for first in self._trail_neighbors(origin, cells):
                dest, steps, last, usable = self._walk(origin, first, cells, index)
                # Both walks of one corridor share their boundary steps
                key = frozenset({(origin, first), (dest, last)})
                dest_id = index[dest]
                existing = corridors.get(key)
                if existing is None:
                    corridors[key] = Corridor.walked(origin_id, dest_id, steps, usable)
                else:
                    corridors[key] = existing.merged(origin_id, usable)

        graph = JunctionGraph.from_corridors(junctions, list(corridors.values()),
                                             slippery=self.slippery)
        logger.info(
            f"Compacted {len(cells)} trail cells into {graph.num_junctions} junctions, "
            f"{len(graph.edges)} edges (slippery={self.slippery})"
        )
        return graph

    def _trail_neighbors(self, coord: Coord, cells: Set[Coord]) -> List[Coord]:
        return [n for n in self.grid.open_neighbors(coord) if n in cells]

    def _prune_dead_ends(self) -> Set[Coord]:
        """Remaining trail cells once dead-end spurs are peeled away."""
        cells = set(self.grid.open_cells())
        degree = {c: len(self._trail_neighbors(c, cells)) for c in cells}
        queue = deque(c for c in sorted(cells) if c not in self.terminals and degree[c] < 2)

        while queue:
            cell = queue.popleft()
            if cell not in cells:
                continue
            cells.remove(cell)
            for n in self._trail_neighbors(cell, cells):
                if n in self.terminals:
                    continue
                degree[n] -= 1
                if degree[n] < 2:
                    queue.append(n)

        logger.debug(f"Pruned {len(degree) - len(cells)} dead-end cells")
        return cells

    def _find_junctions(self, cells: Set[Coord]) -> List[Coord]:
        """Start, finish, then branch points in row-major order."""
        junctions = [self.grid.start, self.grid.finish]
        for cell in sorted(cells):
            if cell in self.terminals:
                continue
            if len(self._trail_neighbors(cell, cells)) > 2:
                junctions.append(cell)
        return junctions

    def _walk(self, origin: Coord, first: Coord, cells: Set[Coord],
              index: Dict[Coord, int]) -> Tuple[Coord, int, Coord, bool]:
        """
        Follow a corridor from origin through first to the next junction.

        Returns:
            (destination junction, steps, cell before destination, usable)
        """
        usable = self.grid.can_move(origin, first, self.slippery)
        prev, cur = origin, first
        steps = 1
        while cur not in index:
            forward = [n for n in self._trail_neighbors(cur, cells) if n != prev]
            if len(forward) != 1:
                raise CompactionInvariantError(
                    f"Corridor cell {cur} has {len(forward)} continuations (walk from {origin})"
                )
            nxt = forward[0]
            usable = usable and self.grid.can_move(cur, nxt, self.slippery)
            prev, cur = cur, nxt
            steps += 1
        return cur, steps, prev, usable


def compact_grid(grid: TrailGrid, slippery: bool = True,
                 max_junctions: int = DEFAULT_MAX_JUNCTIONS) -> JunctionGraph:
    """Convenience wrapper: GraphCompactor(...).compact()."""
    return GraphCompactor(grid, slippery=slippery, max_junctions=max_junctions).compact()
