"""
Core navigation module: graph representation, building and search.

This module provides:
- NavigationNode: Graph vertex with position, traversability and adjacency
- NavigationGraph: Node index with nearest/furthest queries and igraph export
- GraphBuilder: Grid generation with steepness filtering
- PathSolver: A* and jump point search over the graph
- estimate / HeuristicType: Euclidean, octile and Chebyshev estimators
- WorldProvider / InMemoryWorld: Node and agent lifecycle collaborator
- NavigationAgent / spawn_agents: Agents seeded on traversable nodes
- NavigationManager: Facade tying the components together
"""

from .node import NavigationNode
from .heuristic import HeuristicType, estimate, MAX_ESTIMATE
from .graph import NavigationGraph
from .agents import AgentTemplate, NavigationAgent, spawn_agents
from .world import WorldProvider, InMemoryWorld
from .builder import GraphBuilder, neighbor_offsets
from .search import (
    PathfindingType,
    PathSolver,
    SearchRecord,
    SearchState,
    ExpansionPolicy,
    AStarExpansion,
    JumpPointExpansion
)
from .manager import NavigationManager

__all__ = [
    'NavigationNode',
    'HeuristicType',
    'estimate',
    'MAX_ESTIMATE',
    'NavigationGraph',
    'AgentTemplate',
    'NavigationAgent',
    'spawn_agents',
    'WorldProvider',
    'InMemoryWorld',
    'GraphBuilder',
    'neighbor_offsets',
    'PathfindingType',
    'PathSolver',
    'SearchRecord',
    'SearchState',
    'ExpansionPolicy',
    'AStarExpansion',
    'JumpPointExpansion',
    'NavigationManager'
]
