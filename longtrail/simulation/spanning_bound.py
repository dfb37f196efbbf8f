"""
Maximum Spanning Forest Upper Bound
===================================

Admissible bound for branch-and-bound longest path search.

Given the junctions that are no longer available, the total weight of a
maximum-weight spanning forest over the remaining junctions bounds the
length of any simple path through them: a simple path is itself a tree,
and the maximum spanning forest outweighs every sub-forest.

Algorithm: Kruskal with union-find over edges pre-sorted once by weight
(descending, ties by ascending ids). Each call builds a fresh union-find.

Research:
- Kruskal, J. B. (1956). "On the Shortest Spanning Subtree of a Graph and
  the Traveling Salesman Problem." Proc. AMS 7(1), 48-50.
"""

import logging
from typing import Dict, List, Sequence

from .compactor import Edge, JunctionGraph
from .visited import VisitedSet

logger = logging.getLogger(__name__)


class UnionFind:
    """Disjoint sets over 0..n-1 with path compression and union by size."""

    def __init__(self, n: int):
        self.parent: List[int] = list(range(n))
        self.size: List[int] = [1] * n
        self.components = n

    def find(self, i: int) -> int:
        root = i
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[i] != root:
            self.parent[i], i = root, self.parent[i]
        return root

    def union(self, i: int, j: int) -> bool:
        """Merge the sets of i and j; False if they were already joined."""
        ri, rj = self.find(i), self.find(j)
        if ri == rj:
            return False
        if self.size[ri] < self.size[rj]:
            ri, rj = rj, ri
        self.parent[rj] = ri
        self.size[ri] += self.size[rj]
        self.components -= 1
        return True


class SpanningForestBound:
    """
    Upper-bound estimator shared by every state of one search.

    Example:
        >>> bound = SpanningForestBound(graph)
        >>> bound.estimate(VisitedSet.of([graph.start]))  # everything but start
    """

    def __init__(self, graph: JunctionGraph, memoize: bool = False):
        """
        Args:
            graph: Compacted graph; its edge list is already sorted
            memoize: Cache results per distinct excluded set
        """
        self.num_nodes = graph.num_junctions
        self.edges: Sequence[Edge] = graph.edges
        self.memoize = memoize
        self._cache: Dict[int, int] = {}

        # Statistics
        self.evaluations = 0
        self.cache_hits = 0

    def estimate(self, excluded: VisitedSet) -> int:
        """
        Weight of the maximum spanning forest avoiding every excluded junction.

        Args:
            excluded: Junctions unavailable for further use

        Returns:
            Total forest weight (0 if no edge survives)
        """
        if self.memoize:
            cached = self._cache.get(excluded.bits)
            if cached is not None:
                self.cache_hits += 1
                return cached

        self.evaluations += 1
        total = self._kruskal(excluded)

        if self.memoize:
            self._cache[excluded.bits] = total
        return total

    def _kruskal(self, excluded: VisitedSet) -> int:
        remaining = self.num_nodes - len(excluded)
        if remaining < 2:
            return 0

        uf = UnionFind(self.num_nodes)
        merges_needed = remaining - 1
        total = 0
        for edge in self.edges:
            if edge.u in excluded or edge.v in excluded:
                continue
            if uf.union(edge.u, edge.v):
                total += edge.weight
                merges_needed -= 1
                if merges_needed == 0:
                    # Every available junction is in one tree
                    break
        return total

    def clear_cache(self) -> None:
        self._cache.clear()
