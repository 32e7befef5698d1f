"""
Grid-based navigation graph builder and shortest path solver for agents on 2.5D terrain.
"""

from .cfg import NavigationConfig
from .core import (
    NavigationNode,
    NavigationGraph,
    GraphBuilder,
    PathSolver,
    PathfindingType,
    HeuristicType,
    InMemoryWorld,
    NavigationManager
)

__version__ = '0.1.0'

__all__ = [
    'NavigationConfig',
    'NavigationNode',
    'NavigationGraph',
    'GraphBuilder',
    'PathSolver',
    'PathfindingType',
    'HeuristicType',
    'InMemoryWorld',
    'NavigationManager'
]
