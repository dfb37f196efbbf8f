"""
Tests for the exhaustive baselines and the solver comparison mode.
"""

import pytest

from longtrail.simulation.compactor import GraphCompactor
from longtrail.simulation.exhaustive import (
    ExhaustiveDFS,
    enumerate_states,
    longest_completion,
    longest_path_on_grid,
)
from longtrail.simulation.solver_comparison import SolverComparison, SolverMetrics
from longtrail.simulation.trail_grid import TrailGrid
from longtrail.simulation.visited import VisitedSet

from trail_maps import CORRIDOR_MAP, DISCONNECTED_MAP, LOOP_MAP, SAMPLE_MAP, SLOPED_LOOP_MAP


def compact(text, slippery=False):
    grid = TrailGrid.from_text(text)
    return grid, GraphCompactor(grid, slippery=slippery).compact()


# ==========================================
# EXHAUSTIVE DFS
# ==========================================

@pytest.mark.parametrize("text, slippery, expected", [
    (LOOP_MAP, False, 15),
    (SLOPED_LOOP_MAP, True, 9),
    (SLOPED_LOOP_MAP, False, 15),
    (SAMPLE_MAP, True, 94),
])
def test_exhaustive_dfs_lengths(text, slippery, expected):
    _, graph = compact(text, slippery)
    success, length, explored = ExhaustiveDFS(graph).solve()
    assert success
    assert length == expected
    assert explored > 0


def test_exhaustive_dfs_unreachable():
    _, graph = compact(DISCONNECTED_MAP)
    assert ExhaustiveDFS(graph).solve() == (False, None, 1)


def test_longest_completion_from_partial_state():
    _, graph = compact(LOOP_MAP)
    # S -> A -> B walked; B -> C -> D -> F and B -> D -> F tie
    visited = VisitedSet.of([0, 2, 3])
    assert longest_completion(graph, 3, visited) == 3 + 2 + 1


def test_longest_completion_cut_off():
    _, graph = compact(LOOP_MAP)
    # D is taken, so the finish is unreachable from B
    assert longest_completion(graph, 3, VisitedSet.of([0, 2, 3, 5])) is None


def test_enumerate_states_starts_at_start():
    _, graph = compact(LOOP_MAP)
    states = list(enumerate_states(graph))
    tip, visited, length = states[0]
    assert (tip, length) == (graph.start, 0)
    assert list(visited) == [graph.start]
    finished = [length for tip, _, length in states if tip == graph.finish]
    assert max(finished) == 15
    assert all(tip in visited for tip, visited, _ in states)


@pytest.mark.parametrize("text, slippery, expected", [
    (CORRIDOR_MAP, True, 8),
    (LOOP_MAP, True, 15),
    (SLOPED_LOOP_MAP, True, 9),
    (SLOPED_LOOP_MAP, False, 15),
    (DISCONNECTED_MAP, False, None),
])
def test_grid_dfs(text, slippery, expected):
    assert longest_path_on_grid(TrailGrid.from_text(text), slippery) == expected


# ==========================================
# SOLVER COMPARISON
# ==========================================

def test_compare_all_agrees_on_small_map():
    grid, graph = compact(SLOPED_LOOP_MAP, slippery=True)
    results = SolverComparison(graph, grid=grid).compare_all()
    assert set(results) == {'Branch & Bound', 'Exhaustive DFS', 'Grid DFS'}
    assert all(m.length == 9 for m in results.values())
    assert SolverComparison.agree(results)

    table = SolverComparison.format_table(results)
    assert table.splitlines()[-1] == "Solvers agree"
    assert "[OK] Branch & Bound: Length=9" in table


def test_grid_dfs_skipped_on_large_map():
    grid, graph = compact(SAMPLE_MAP, slippery=True)
    results = SolverComparison(graph, grid=grid).compare_all()
    assert 'Grid DFS' not in results
    assert results['Branch & Bound'].length == results['Exhaustive DFS'].length == 94


def test_disagreement_is_reported():
    results = {
        'a': SolverMetrics('a', True, 10, 5, 0.0),
        'b': SolverMetrics('b', True, 12, 5, 0.0),
    }
    assert not SolverComparison.agree(results)
    assert SolverComparison.format_table(results).endswith("Solvers DISAGREE")


def test_metrics_str_unreachable():
    metrics = SolverMetrics('Exhaustive DFS', False, None, 1, 0.0)
    assert str(metrics).startswith("[--] Exhaustive DFS: Length=unreachable")
