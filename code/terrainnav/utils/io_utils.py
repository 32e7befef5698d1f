"""
I/O utilities for loading heightmaps and exporting paths.
"""

import os
import logging
from typing import List, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def load_heightmap(file_path: str) -> np.ndarray:
    """Load a 2D elevation array from a .npy file or a comma/whitespace separated text file."""
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Heightmap not found: {file_path}")

    if file_path.endswith('.npy'):
        heights = np.load(file_path)
    else:
        delimiter = ',' if file_path.endswith('.csv') else None
        heights = np.loadtxt(file_path, delimiter=delimiter, ndmin=2)

    heights = np.asarray(heights, dtype=float)
    if heights.ndim != 2:
        raise ValueError(f"Heightmap must be 2D, got shape {heights.shape}")
    logger.info(f"Loaded heightmap {file_path} with shape {heights.shape}")
    return heights


def parse_cell(value: str) -> Tuple[int, int]:
    """Parse a 'col,row' string into a grid cell tuple."""
    parts = value.split(',')
    if len(parts) != 2:
        raise ValueError(f"Expected 'col,row', got '{value}'")
    return int(parts[0]), int(parts[1])


def path_to_dataframe(path: List) -> pd.DataFrame:
    """Tabulate a node path with positions, grid cells and cumulative cost."""
    records = []
    cumulative = 0.0
    previous = None
    for step, node in enumerate(path):
        if previous is not None:
            cumulative += float(np.linalg.norm(node.position - previous.position))
        col, row = node.grid_coordinate if node.grid_coordinate is not None else (None, None)
        records.append({
            'step': step,
            'name': node.name,
            'col': col,
            'row': row,
            'x': node.position[0],
            'y': node.position[1],
            'z': node.position[2],
            'cost': cumulative
        })
        previous = node
    return pd.DataFrame(records, columns=['step', 'name', 'col', 'row', 'x', 'y', 'z', 'cost'])


def save_path_to_csv(path: List, file_path: str) -> str:
    """Save a node path to CSV."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    path_to_dataframe(path).to_csv(file_path, index=False)
    logger.info(f"Saved path with {len(path)} nodes to {file_path}")
    return file_path
