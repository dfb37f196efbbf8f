"""
LONGTRAIL Source Package
========================

Longest scenic trail solver for hiking maps drawn as character grids.

Submodules:
- core: Tile definitions and the error taxonomy
- data: Trail map loading (text <-> numpy grid)
- simulation: Grid model, graph compaction, spanning bound, search
- utils: NetworkX / DOT helpers for the junction graph

Pipeline:
    text -> TrailGrid -> GraphCompactor -> JunctionGraph -> LongestPathSearch
"""

__version__ = "1.0.0"
__author__ = "LONGTRAIL Project"

__all__ = ['core', 'data', 'simulation', 'utils']
