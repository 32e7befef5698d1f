"""
Utility modules for navigation.

This module provides:
- math_utils: Vector helpers, path cost and heightmap-to-vertex conversion
- io_utils: Heightmap loading and path export
"""

from .math_utils import (
    as_position,
    euclidean_distance,
    normalize,
    path_cost,
    heightmap_to_vertices
)

from .io_utils import (
    load_heightmap,
    parse_cell,
    path_to_dataframe,
    save_path_to_csv
)

__all__ = [
    # Math utilities
    'as_position',
    'euclidean_distance',
    'normalize',
    'path_cost',
    'heightmap_to_vertices',

    # I/O utilities
    'load_heightmap',
    'parse_cell',
    'path_to_dataframe',
    'save_path_to_csv'
]
