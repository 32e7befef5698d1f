"""
Various math utilities.
"""

import numpy as np
from typing import List, Sequence


def as_position(values: Sequence[float]) -> np.ndarray:
    """Coerce a 2D or 3D coordinate into a float64 (x, y, z) vector."""
    position = np.asarray(values, dtype=float).reshape(-1)
    if position.shape[0] == 2:
        position = np.append(position, 0.0)
    if position.shape[0] != 3:
        raise ValueError(f"Expected a 2D or 3D coordinate, got {values}")
    return position


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Straight-line distance between two positions."""
    return float(np.linalg.norm(np.asarray(a, dtype=float) - np.asarray(b, dtype=float)))


def normalize(vector: np.ndarray, tolerance: float = 1e-8) -> np.ndarray:
    """
    Unit vector in the direction of `vector`.
    Vectors shorter than the tolerance are returned unchanged.
    """
    vector = np.asarray(vector, dtype=float)
    length = np.linalg.norm(vector)
    if length * length < tolerance:
        return vector
    return vector / length


def path_cost(path: List) -> float:
    """Sum of Euclidean distances between consecutive nodes of a path."""
    return sum(euclidean_distance(a.position, b.position) for a, b in zip(path, path[1:]))


def heightmap_to_vertices(heights: np.ndarray, spacing: float = 1.0) -> List[np.ndarray]:
    """
    Convert a (height x width) elevation array into row-major world vertices.

    Vertex (col, row) is placed at x = col * spacing, y = row * spacing, z = heights[row, col].
    """
    heights = np.atleast_2d(np.asarray(heights, dtype=float))
    rows, cols = heights.shape
    vertices = []
    for row in range(rows):
        for col in range(cols):
            vertices.append(np.array([col * spacing, row * spacing, heights[row, col]]))
    return vertices
