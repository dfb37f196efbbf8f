"""Utility helpers for the junction graph."""

from .graph_utils import (
    to_networkx,
    to_dot,
    is_finish_reachable,
    recompact,
    graph_summary,
)

__all__ = [
    'to_networkx',
    'to_dot',
    'is_finish_reachable',
    'recompact',
    'graph_summary',
]
