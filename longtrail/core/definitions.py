"""
LONGTRAIL DEFINITIONS
=====================
Central constants and type definitions for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Tile palette (terrain IDs)
- Character mappings
- Movement directions and slope directions
- Junction capacity of the visited bit field

Import from here instead of duplicating constants across modules.
"""

from typing import Dict, Set, Tuple
from enum import IntEnum

# ==========================================
# TILE PALETTE
# ==========================================
# These IDs MUST be consistent across all modules.
# The loader produces these numbers; the compactor and solvers read them.

class TileID(IntEnum):
    """Terrain IDs for the trail map grid."""
    VOID = 0            # Outside the map (out-of-bounds sentinel)
    FLOOR = 1           # Path
    WALL = 2            # Forest (impassable)

    # Steep slopes (one-way when slippery)
    SLOPE_UP = 10
    SLOPE_DOWN = 11
    SLOPE_LEFT = 12
    SLOPE_RIGHT = 13


# ==========================================
# CHARACTER MAPPINGS
# ==========================================

CHAR_TO_TILE: Dict[str, int] = {
    '.': TileID.FLOOR,
    '#': TileID.WALL,
    '^': TileID.SLOPE_UP,
    'v': TileID.SLOPE_DOWN,
    '<': TileID.SLOPE_LEFT,
    '>': TileID.SLOPE_RIGHT,
}

TILE_TO_CHAR: Dict[int, str] = {tile: char for char, tile in CHAR_TO_TILE.items()}
TILE_TO_CHAR[TileID.VOID] = ' '


# ==========================================
# DIRECTIONS
# ==========================================

Coord = Tuple[int, int]

# Fixed scan order: down, right, up, left
DIRECTION_DELTAS: Tuple[Coord, ...] = (
    (1, 0),
    (0, 1),
    (-1, 0),
    (0, -1),
)

# Downhill direction of each slope
SLOPE_DIRECTIONS: Dict[int, Coord] = {
    TileID.SLOPE_UP: (-1, 0),
    TileID.SLOPE_DOWN: (1, 0),
    TileID.SLOPE_LEFT: (0, -1),
    TileID.SLOPE_RIGHT: (0, 1),
}


# ==========================================
# TILE CATEGORIES
# ==========================================

SLOPE_IDS: Set[int] = set(SLOPE_DIRECTIONS)

OPEN_IDS: Set[int] = {TileID.FLOOR} | SLOPE_IDS


# ==========================================
# CAPACITY
# ==========================================

# One bit per junction in the visited field
DEFAULT_MAX_JUNCTIONS: int = 64


__all__ = [
    'TileID',
    'CHAR_TO_TILE',
    'TILE_TO_CHAR',
    'Coord',
    'DIRECTION_DELTAS',
    'SLOPE_DIRECTIONS',
    'SLOPE_IDS',
    'OPEN_IDS',
    'DEFAULT_MAX_JUNCTIONS',
]
