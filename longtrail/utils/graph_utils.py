"""
Junction Graph Utilities
========================

NetworkX-facing helpers for the compacted trail graph.

This module provides:
- Export to NetworkX (Graph for dry maps, DiGraph for slippery maps)
- DOT (Graphviz) text export through pydot
- Start -> finish reachability check
- Graph-level recompaction (contract pass-through junctions, drop spurs)
- Summary statistics

Usage:
    from longtrail.utils.graph_utils import to_dot, is_finish_reachable

    print(to_dot(graph))
    if not is_finish_reachable(graph):
        print("unreachable")
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Union

import networkx as nx

from longtrail.simulation.compactor import Corridor, JunctionGraph

logger = logging.getLogger(__name__)


# ==========================================
# EXPORT
# ==========================================

def to_networkx(graph: JunctionGraph) -> Union[nx.Graph, nx.DiGraph]:
    """
    Convert the adjacency table into a NetworkX graph.

    Slippery graphs become DiGraphs since corridors may be one-way. Node
    attributes: pos (row, col), label "row,col", is_start, is_finish.
    Edge attributes: weight, label.

    Example:
        >>> G = to_networkx(graph)
        >>> G.nodes[graph.start]['is_start']
        True
    """
    G = nx.DiGraph() if graph.slippery else nx.Graph()
    for node, (r, c) in enumerate(graph.coords):
        G.add_node(
            node,
            pos=(r, c),
            label=f"{r},{c}",
            is_start=node == graph.start,
            is_finish=node == graph.finish,
        )

    for origin, neighbors in enumerate(graph.adjacency):
        for dest, weight in neighbors:
            if G.has_edge(origin, dest) and G.edges[origin, dest]['weight'] >= weight:
                continue
            G.add_edge(origin, dest, weight=weight, label=str(weight))
    return G


def to_dot(graph: JunctionGraph) -> str:
    """
    Render the junction graph as DOT text (undirected unless slippery).

    Nodes are named by grid coordinate, edges labelled with step counts.
    """
    G = to_networkx(graph)
    # pydot stringifies every attribute; keep only the printable ones
    H = G.__class__()
    for node, data in G.nodes(data=True):
        H.add_node(f'"{data["label"]}"')
    for u, v, data in G.edges(data=True):
        H.add_edge(f'"{G.nodes[u]["label"]}"', f'"{G.nodes[v]["label"]}"',
                   label=f'"{data["weight"]}"')
    dot = nx.drawing.nx_pydot.to_pydot(H)
    dot.set_name('G')
    return dot.to_string()


# ==========================================
# QUERIES
# ==========================================

def is_finish_reachable(graph: JunctionGraph) -> bool:
    """True if some (not necessarily simple-longest) route reaches the finish."""
    return nx.has_path(to_networkx(graph), graph.start, graph.finish)


def graph_summary(graph: JunctionGraph) -> Dict[str, Any]:
    """Size and degree statistics of the compacted graph."""
    degrees = Counter()
    for corridor in graph.corridors:
        if corridor.is_loop:
            continue
        degrees[corridor.u] += 1
        degrees[corridor.v] += 1
    return {
        'junctions': graph.num_junctions,
        'edges': len(graph.edges),
        'corridors': len(graph.corridors),
        'loops': sum(1 for c in graph.corridors if c.is_loop),
        'total_weight': graph.total_weight(),
        'max_degree': max(degrees.values(), default=0),
        'degree_histogram': dict(sorted(Counter(degrees.values()).items())),
        'slippery': graph.slippery,
    }


# ==========================================
# RECOMPACTION
# ==========================================

def _passable(data: Dict[str, Any], src: int) -> bool:
    """Direction flag of a corridor edge when entered from src."""
    return data['forward'] if data['tail'] == src else data['backward']


def recompact(graph: JunctionGraph) -> JunctionGraph:
    """
    Compact a junction graph again, treating each corridor as a plain path.

    Non-terminal junctions of degree 2 are contracted into a single corridor
    (weights add up, a direction survives only if both halves allow it);
    non-terminal junctions of degree 0 or 1 are dropped. Survivors keep their
    relative id order, so recompacting an already compact graph returns an
    equal graph.
    """
    M = nx.MultiGraph()
    M.add_nodes_from(range(graph.num_junctions))
    for order, corridor in enumerate(graph.corridors):
        M.add_edge(corridor.u, corridor.v, weight=corridor.weight, tail=corridor.u,
                   forward=corridor.forward, backward=corridor.backward, order=order)

    terminals = {graph.start, graph.finish}
    changed = True
    while changed:
        changed = False
        for node in list(M.nodes):
            if node in terminals:
                continue
            degree = M.degree(node)
            if degree <= 1 or (degree == 2 and M.has_edge(node, node)):
                M.remove_node(node)
                changed = True
            elif degree == 2:
                (_, a, first), (_, b, second) = list(M.edges(node, data=True))
                M.remove_node(node)
                M.add_edge(
                    a, b,
                    weight=first['weight'] + second['weight'],
                    tail=a,
                    forward=_passable(first, a) and _passable(second, node),
                    backward=_passable(second, b) and _passable(first, node),
                    order=min(first['order'], second['order']),
                )
                changed = True

    kept = sorted(M.nodes)
    relabel = {old: new for new, old in enumerate(kept)}
    corridors: List[Corridor] = []
    for a, b, data in sorted(M.edges(data=True), key=lambda e: e[2]['order']):
        u, v = relabel[a], relabel[b]
        forward, backward = _passable(data, a), _passable(data, b)
        if a == b:
            forward = backward = data['forward'] or data['backward']
        elif u > v:
            u, v = v, u
            forward, backward = backward, forward
        corridors.append(Corridor(u, v, data['weight'], forward, backward))

    logger.debug(f"Recompacted {graph.num_junctions} -> {len(kept)} junctions")
    return JunctionGraph.from_corridors(
        [graph.coords[old] for old in kept],
        corridors,
        slippery=graph.slippery,
        start=relabel[graph.start],
        finish=relabel[graph.finish],
    )
