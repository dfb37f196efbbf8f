"""
Tests for the union-find and the maximum spanning forest bound.

The admissibility tests compare the bound against exhaustive completions on
every reachable state of small maps.
"""

import networkx as nx
import numpy as np
import pytest

from longtrail.simulation.compactor import GraphCompactor
from longtrail.simulation.exhaustive import enumerate_states, longest_completion
from longtrail.simulation.spanning_bound import SpanningForestBound, UnionFind
from longtrail.simulation.trail_grid import TrailGrid
from longtrail.simulation.visited import VisitedSet

from trail_maps import LOOP_MAP, SAMPLE_MAP, SLOPED_LOOP_MAP, random_trail


def compact(text: str, slippery: bool = False):
    return GraphCompactor(TrailGrid.from_text(text), slippery=slippery).compact()


def max_spanning_weight(graph, excluded) -> int:
    """Reference value computed with networkx."""
    G = nx.Graph()
    G.add_nodes_from(n for n in range(graph.num_junctions) if n not in excluded)
    for edge in graph.edges:
        if edge.u in excluded or edge.v in excluded:
            continue
        if not G.has_edge(edge.u, edge.v) or G.edges[edge.u, edge.v]['weight'] < edge.weight:
            G.add_edge(edge.u, edge.v, weight=edge.weight)
    forest = nx.maximum_spanning_tree(G)
    return int(sum(w for _, _, w in forest.edges(data='weight')))


# ==========================================
# UNION-FIND
# ==========================================

def test_union_find_merges_components():
    uf = UnionFind(5)
    assert uf.components == 5
    assert uf.union(0, 1)
    assert uf.union(3, 4)
    assert not uf.union(1, 0)
    assert uf.union(1, 4)
    assert uf.find(0) == uf.find(3)
    assert uf.find(2) != uf.find(0)
    assert uf.components == 2


# ==========================================
# BOUND VALUES
# ==========================================

def test_bound_with_nothing_excluded():
    graph = compact(LOOP_MAP)
    bound = SpanningForestBound(graph)
    # A-C 5, B-D 5, B-C 3, S-A 1, D-F 1; A-B and C-D close cycles
    assert bound.estimate(VisitedSet()) == 15
    assert bound.estimate(VisitedSet()) == max_spanning_weight(graph, VisitedSet())


def test_bound_skips_excluded_junctions():
    graph = compact(LOOP_MAP)
    bound = SpanningForestBound(graph)
    # Without C (id 4): S-A 1, A-B 2, B-D 5, D-F 1
    assert bound.estimate(VisitedSet.of([4])) == 9


def test_bound_is_zero_with_single_junction_left():
    graph = compact(LOOP_MAP)
    bound = SpanningForestBound(graph)
    assert bound.estimate(VisitedSet.of([0, 2, 3, 4, 5])) == 0


@pytest.mark.parametrize("excluded", [[], [0], [0, 2], [3, 7], [0, 2, 4, 6, 8]])
def test_bound_matches_networkx_on_sample(excluded):
    graph = compact(SAMPLE_MAP)
    bound = SpanningForestBound(graph)
    visited = VisitedSet.of(excluded)
    assert bound.estimate(visited) == max_spanning_weight(graph, visited)


def test_memoized_bound_counts_hits():
    graph = compact(SAMPLE_MAP)
    bound = SpanningForestBound(graph, memoize=True)
    first = bound.estimate(VisitedSet.of([0]))
    second = bound.estimate(VisitedSet.of([0]))
    assert first == second
    assert bound.evaluations == 1
    assert bound.cache_hits == 1

    bound.clear_cache()
    bound.estimate(VisitedSet.of([0]))
    assert bound.evaluations == 2


# ==========================================
# ADMISSIBILITY
# ==========================================

def assert_admissible(graph):
    bound = SpanningForestBound(graph)
    checked = 0
    for tip, visited, length in enumerate_states(graph):
        if tip == graph.finish:
            continue
        completion = longest_completion(graph, tip, visited)
        if completion is None:
            continue
        assert bound.estimate(visited.discard(tip)) >= completion, (tip, visited, length)
        checked += 1
    return checked


@pytest.mark.parametrize("text", [LOOP_MAP, SLOPED_LOOP_MAP])
@pytest.mark.parametrize("slippery", [True, False])
def test_bound_admissible_on_fixed_maps(text, slippery):
    assert assert_admissible(compact(text, slippery)) > 0


@pytest.mark.parametrize("seed", range(10))
def test_bound_admissible_on_random_maps(seed):
    rng = np.random.default_rng(seed)
    text = random_trail(rng, height=5, width=4)
    for slippery in (True, False):
        assert_admissible(compact(text, slippery))
