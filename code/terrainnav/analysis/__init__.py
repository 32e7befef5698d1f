"""
Analysis and plotting for navigation graphs.
"""

from .plot import plot_navigation_graph, plot_elevation_heatmap

__all__ = [
    'plot_navigation_graph',
    'plot_elevation_heatmap'
]
