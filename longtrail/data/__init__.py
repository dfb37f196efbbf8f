"""Trail map loading utilities."""

from .trail_loader import (
    parse_trail_lines,
    parse_trail_text,
    load_trail_file,
    grid_to_text,
)

__all__ = [
    'parse_trail_lines',
    'parse_trail_text',
    'load_trail_file',
    'grid_to_text',
]
