"""
Plotting functionality for navigation graphs.

Provides functions for drawing the graph with an optional path overlay and
heatmaps of grid elevation.
"""

import os
import logging
from typing import List, Optional

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..core.graph import NavigationGraph
from ..core.node import NavigationNode


def _save_or_return(fig, out_file: Optional[str], logger):
    if out_file:
        directory = os.path.dirname(out_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(out_file, dpi=150, bbox_inches='tight')
        plt.close(fig)
        logger.info(f"Saved plot to {out_file}")
    return fig


def plot_navigation_graph(graph: NavigationGraph, path: Optional[List[NavigationNode]] = None,
                          out_file: Optional[str] = None, title: str = "Navigation graph"):
    """
    Draw nodes and traversable connections on the X/Y plane, with an optional path overlay.
    Non-traversable nodes are drawn as crosses.
    """
    logger = logging.getLogger(__name__)

    fig, ax = plt.subplots(figsize=(8, 8))

    for node in graph.all_nodes:
        for neighbor in node.connected:
            ax.plot([node.position[0], neighbor.position[0]],
                    [node.position[1], neighbor.position[1]],
                    color='lightgray', linewidth=0.6, zorder=1)

    if graph.all_nodes:
        positions = np.array([node.position for node in graph.all_nodes])
        traversable = np.array([node.is_traversable for node in graph.all_nodes])
        scatter = ax.scatter(positions[traversable, 0], positions[traversable, 1],
                             c=positions[traversable, 2], cmap='terrain', s=18, zorder=2)
        if (~traversable).any():
            ax.scatter(positions[~traversable, 0], positions[~traversable, 1],
                       marker='x', color='black', s=24, zorder=2)
        if traversable.any():
            fig.colorbar(scatter, ax=ax, label="Elevation (z)")

    if path:
        path_xy = np.array([node.position[:2] for node in path])
        ax.plot(path_xy[:, 0], path_xy[:, 1], color='red', linewidth=2, zorder=3)
        ax.scatter(*path_xy[0], color='green', s=60, zorder=4, label='start')
        ax.scatter(*path_xy[-1], color='blue', s=60, zorder=4, label='end')
        ax.legend(loc='upper right')

    ax.set_title(title)
    ax.set_xlabel("World X")
    ax.set_ylabel("World Y")
    ax.set_aspect('equal')

    return _save_or_return(fig, out_file, logger)


def plot_elevation_heatmap(graph: NavigationGraph, out_file: Optional[str] = None):
    """Heatmap of node elevation over a grid-generated graph."""
    logger = logging.getLogger(__name__)

    if graph.width is None or graph.height is None:
        raise ValueError("Elevation heatmap needs a grid-generated graph")

    grid = np.full((graph.height, graph.width), np.nan)
    for node in graph.all_nodes:
        col, row = node.grid_coordinate
        grid[row, col] = node.position[2]

    fig, ax = plt.subplots(figsize=(8, 6))
    sns.heatmap(grid, ax=ax, cmap='viridis', cbar=True, linewidths=0)
    ax.invert_yaxis()
    ax.set_title("Node elevation")
    ax.set_xlabel("Grid column")
    ax.set_ylabel("Grid row")

    return _save_or_return(fig, out_file, logger)
