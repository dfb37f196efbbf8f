"""
Trail Map Loader
================

Converts the plain-text trail map format into a numpy grid of TileIDs and back.

Format:
    One row per line, characters '#', '.', '^', 'v', '<', '>'.
    All rows have equal length. Trailing blank lines are ignored.

Usage:
    from longtrail.data.trail_loader import load_trail_file
    grid = load_trail_file("input.txt")
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

import numpy as np

from longtrail.core.definitions import CHAR_TO_TILE, TILE_TO_CHAR
from longtrail.core.errors import MalformedGridError

logger = logging.getLogger(__name__)


def parse_trail_lines(lines: Iterable[str]) -> np.ndarray:
    """
    Parse trail map rows into a 2D int array of TileIDs.

    Args:
        lines: Rows of the map, with or without line terminators

    Returns:
        Array of shape (height, width)

    Raises:
        MalformedGridError: Empty map, jagged rows or unknown characters
    """
    rows: List[str] = [line.rstrip('\r\n') for line in lines]
    # Tolerate trailing blank lines from editors / heredocs
    while rows and not rows[-1].strip():
        rows.pop()

    if not rows:
        raise MalformedGridError("Trail map is empty")

    width = len(rows[0])
    if width == 0:
        raise MalformedGridError("Trail map row is empty", row=0)

    grid = np.empty((len(rows), width), dtype=np.int64)
    for r, row in enumerate(rows):
        if len(row) != width:
            raise MalformedGridError(
                f"Jagged trail map: expected {width} columns, got {len(row)}", row=r
            )
        for c, char in enumerate(row):
            tile = CHAR_TO_TILE.get(char)
            if tile is None:
                raise MalformedGridError(f"Unknown map character {char!r} at column {c}", row=r)
            grid[r, c] = tile

    logger.debug(f"Parsed trail map {grid.shape[0]}x{grid.shape[1]}")
    return grid


def parse_trail_text(text: str) -> np.ndarray:
    """Parse a whole trail map given as a single string."""
    return parse_trail_lines(text.splitlines())


def load_trail_file(filepath: Union[str, Path]) -> np.ndarray:
    """Load a trail map from a text file."""
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Trail map not found: {filepath}")
    with open(filepath, 'r') as f:
        return parse_trail_lines(f.readlines())


def grid_to_text(grid: np.ndarray) -> str:
    """Render a TileID grid back into the text format."""
    return '\n'.join(
        ''.join(TILE_TO_CHAR[int(tile)] for tile in row) for row in grid
    )
