"""Core definitions: tile palette, directions and errors."""

from .definitions import (
    TileID,
    CHAR_TO_TILE,
    TILE_TO_CHAR,
    SLOPE_DIRECTIONS,
    DIRECTION_DELTAS,
    OPEN_IDS,
    SLOPE_IDS,
    DEFAULT_MAX_JUNCTIONS,
)
from .errors import (
    TrailError,
    MalformedGridError,
    CapacityExceededError,
    CompactionInvariantError,
)

__all__ = [
    'TileID',
    'CHAR_TO_TILE',
    'TILE_TO_CHAR',
    'SLOPE_DIRECTIONS',
    'DIRECTION_DELTAS',
    'OPEN_IDS',
    'SLOPE_IDS',
    'DEFAULT_MAX_JUNCTIONS',
    'TrailError',
    'MalformedGridError',
    'CapacityExceededError',
    'CompactionInvariantError',
]
