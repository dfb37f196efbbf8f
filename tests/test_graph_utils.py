"""
Tests for the NetworkX helpers: export, DOT, reachability, recompaction.
"""

import networkx as nx
import pytest

from longtrail.simulation.compactor import Corridor, Edge, GraphCompactor, JunctionGraph
from longtrail.simulation.trail_grid import TrailGrid
from longtrail.utils.graph_utils import (
    graph_summary,
    is_finish_reachable,
    recompact,
    to_dot,
    to_networkx,
)

from trail_maps import DISCONNECTED_MAP, LOOP_MAP, SAMPLE_MAP, SLOPED_LOOP_MAP


def compact(text, slippery=False):
    return GraphCompactor(TrailGrid.from_text(text), slippery=slippery).compact()


# ==========================================
# EXPORT
# ==========================================

def test_dry_graph_is_undirected():
    G = to_networkx(compact(SAMPLE_MAP, slippery=False))
    assert isinstance(G, nx.Graph) and not G.is_directed()
    assert G.number_of_nodes() == 9
    assert G.number_of_edges() == 12


def test_slippery_graph_is_directed():
    G = to_networkx(compact(SAMPLE_MAP, slippery=True))
    assert G.is_directed()
    assert G.number_of_edges() == 12
    assert G.nodes[0]['is_start'] and G.nodes[1]['is_finish']
    assert G.nodes[0]['label'] == "0,1"
    assert G.edges[0, 3]['weight'] == 15


def test_loop_map_directed_edges():
    G = to_networkx(compact(LOOP_MAP, slippery=True))
    # Every corridor both ways, except out of the finish
    assert G.number_of_edges() == 13
    assert not G.has_edge(1, 5)
    assert G.has_edge(5, 1)


def test_to_dot():
    dot = to_dot(compact(SAMPLE_MAP, slippery=True))
    assert "digraph G" in dot
    assert "0,1" in dot and "5,3" in dot
    assert "15" in dot

    dry = to_dot(compact(LOOP_MAP, slippery=False))
    assert "graph G" in dry
    assert "digraph" not in dry


# ==========================================
# QUERIES
# ==========================================

def test_reachability():
    assert is_finish_reachable(compact(SAMPLE_MAP, slippery=True))
    assert not is_finish_reachable(compact(DISCONNECTED_MAP))


def test_graph_summary():
    summary = graph_summary(compact(LOOP_MAP))
    assert summary['junctions'] == 6
    assert summary['edges'] == 7
    assert summary['corridors'] == 7
    assert summary['loops'] == 0
    assert summary['total_weight'] == 19
    assert summary['max_degree'] == 3
    assert summary['degree_histogram'] == {1: 2, 3: 4}
    assert summary['slippery'] is False


# ==========================================
# RECOMPACTION
# ==========================================

@pytest.mark.parametrize("text", [LOOP_MAP, SLOPED_LOOP_MAP, SAMPLE_MAP])
@pytest.mark.parametrize("slippery", [True, False])
def test_recompact_is_idempotent(text, slippery):
    graph = compact(text, slippery)
    assert recompact(graph) == graph


def test_recompact_contracts_pass_through_junction():
    graph = JunctionGraph.from_corridors(
        coords=[(0, 0), (9, 9), (3, 3)],
        corridors=[Corridor(0, 2, 4), Corridor(1, 2, 6)],
    )
    merged = recompact(graph)
    assert merged.coords == ((0, 0), (9, 9))
    assert merged.corridors == (Corridor(0, 1, 10),)
    assert merged.edges == (Edge(0, 1, 10),)


def test_recompact_keeps_one_way_direction():
    graph = JunctionGraph.from_corridors(
        coords=[(0, 0), (9, 9), (3, 3)],
        corridors=[
            Corridor(0, 2, 4, forward=True, backward=False),
            Corridor(1, 2, 6, forward=False, backward=True),
        ],
        slippery=True,
    )
    merged = recompact(graph)
    assert merged.corridors == (Corridor(0, 1, 10, forward=True, backward=False),)
    assert merged.neighbors(0) == ((1, 10),)


def test_recompact_drops_spur_junction():
    graph = JunctionGraph.from_corridors(
        coords=[(0, 0), (9, 9), (3, 3), (5, 5)],
        corridors=[Corridor(0, 1, 7), Corridor(0, 2, 2), Corridor(2, 3, 1)],
    )
    merged = recompact(graph)
    assert merged.num_junctions == 2
    assert merged.corridors == (Corridor(0, 1, 7),)
