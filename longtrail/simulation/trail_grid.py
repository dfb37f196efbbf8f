"""
Trail Grid Model
================

Read-only view over a trail map: cell lookup, bounds checking, the fixed
start and finish cells, and the movement rule for each mode.

Movement rules:
- dry:      any step between two open cells is allowed
- slippery: a step out of a slope cell must follow the slope's direction
"""

import logging
from typing import List, Sequence

import numpy as np

from longtrail.core.definitions import (
    TileID, Coord, DIRECTION_DELTAS, SLOPE_DIRECTIONS, OPEN_IDS,
)
from longtrail.core.errors import MalformedGridError
from longtrail.data.trail_loader import parse_trail_lines, parse_trail_text, grid_to_text

logger = logging.getLogger(__name__)


class TrailGrid:
    """
    Immutable trail map with a unique start (top row) and finish (bottom row).

    Out-of-bounds lookups return TileID.VOID rather than raising, so callers
    can probe neighbours freely.
    """

    def __init__(self, grid: np.ndarray):
        """
        Args:
            grid: 2D array of TileIDs (see longtrail.core.definitions)

        Raises:
            MalformedGridError: Too small, or start/finish not uniquely placed
        """
        grid = np.asarray(grid)
        if grid.ndim != 2:
            raise MalformedGridError(f"Trail map must be 2D, got {grid.ndim} dimensions")

        self.grid = np.array(grid, dtype=np.int64)
        self.grid.flags.writeable = False
        self.height, self.width = self.grid.shape

        if self.height < 2 or self.width < 1:
            raise MalformedGridError(
                f"Trail map must have at least 2 rows, got {self.height}x{self.width}"
            )

        self.start = self._find_endpoint(0, "start")
        self.finish = self._find_endpoint(self.height - 1, "finish")
        logger.debug(
            f"TrailGrid {self.height}x{self.width}: start={self.start}, finish={self.finish}"
        )

    @classmethod
    def from_text(cls, text: str) -> 'TrailGrid':
        return cls(parse_trail_text(text))

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> 'TrailGrid':
        return cls(parse_trail_lines(lines))

    def _find_endpoint(self, row: int, name: str) -> Coord:
        """Locate the single open cell on an edge row; it must be plain floor."""
        open_cols = [c for c in range(self.width) if int(self.grid[row, c]) in OPEN_IDS]
        if len(open_cols) != 1:
            raise MalformedGridError(
                f"Expected exactly one open {name} cell, found {len(open_cols)}", row=row
            )
        coord = (row, open_cols[0])
        if self.cell_at(coord) != TileID.FLOOR:
            raise MalformedGridError(f"The {name} cell must be floor, not a slope", row=row)
        return coord

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.height and 0 <= c < self.width

    def cell_at(self, coord: Coord) -> TileID:
        """Terrain at coord, or TileID.VOID outside the map."""
        if not self.in_bounds(coord):
            return TileID.VOID
        return TileID(int(self.grid[coord]))

    def is_open(self, coord: Coord) -> bool:
        return self.cell_at(coord) in OPEN_IDS

    def open_cells(self) -> List[Coord]:
        """All open cells in row-major order."""
        rows, cols = np.nonzero(np.isin(self.grid, list(OPEN_IDS)))
        return list(zip(rows.tolist(), cols.tolist()))

    def open_neighbors(self, coord: Coord) -> List[Coord]:
        """Open neighbours in the fixed direction order, ignoring slopes."""
        r, c = coord
        result = []
        for dr, dc in DIRECTION_DELTAS:
            nxt = (r + dr, c + dc)
            if self.is_open(nxt):
                result.append(nxt)
        return result

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------

    def can_move(self, src: Coord, dst: Coord, slippery: bool) -> bool:
        """
        Whether a single step from src to an adjacent open cell dst is legal.

        Args:
            src: Current cell
            dst: Adjacent target cell
            slippery: Enforce one-way slopes
        """
        if not self.is_open(dst):
            return False
        if not slippery:
            return True
        downhill = SLOPE_DIRECTIONS.get(self.cell_at(src))
        if downhill is None:
            return True
        return (src[0] + downhill[0], src[1] + downhill[1]) == dst

    def moves_from(self, coord: Coord, slippery: bool) -> List[Coord]:
        """Cells reachable in one legal step from coord."""
        return [n for n in self.open_neighbors(coord) if self.can_move(coord, n, slippery)]

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def to_text(self) -> str:
        return grid_to_text(self.grid)

    def __repr__(self) -> str:
        return f"TrailGrid({self.height}x{self.width}, start={self.start}, finish={self.finish})"
