import logging
from typing import List, Optional, Sequence

import numpy as np

from ..cfg import NavigationConfig
from .agents import AgentTemplate, NavigationAgent, spawn_agents
from .builder import GraphBuilder
from .graph import NavigationGraph
from .node import NavigationNode
from .search import PathSolver
from .world import InMemoryWorld, WorldProvider


class NavigationManager:
    """
    This class ties graph building, path search and agent spawning together
    for one world, with component delegation.
    """
    def __init__(self, world: WorldProvider, config: NavigationConfig,
                 template: Optional[AgentTemplate] = None):
        self.world = world
        self.config = config
        self.template = template or AgentTemplate(config.agents.template)
        self.graph = NavigationGraph()
        self.builder = GraphBuilder(world, self.graph, config.graph)
        self.solver = PathSolver(
            self.graph,
            heuristic=config.search.heuristic,
            algorithm=config.search.algorithm,
            max_iterations=config.search.max_iterations
        )
        self.rng = np.random.default_rng(config.agents.seed)
        self.all_agents: List[NavigationAgent] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_config(cls, config: Optional[NavigationConfig] = None,
                    world: Optional[WorldProvider] = None) -> 'NavigationManager':
        """Manager over an in-memory world unless a world provider is given"""
        return cls(world if world is not None else InMemoryWorld(),
                   config if config is not None else NavigationConfig.default())

    def begin_play(self) -> None:
        """Index placed nodes and spawn the configured number of agents"""
        self.populate_nodes()
        self.create_agents()

    # Graph building delegation
    def populate_nodes(self) -> None:
        self.builder.build_from_existing()

    def generate_nodes(self, vertices: Sequence[Sequence[float]], width: int, height: int,
                       traversable: Optional[Sequence[bool]] = None) -> None:
        self.builder.generate_grid(vertices, width, height, traversable)

    # Agents
    def create_agents(self, count: Optional[int] = None,
                      template: Optional[AgentTemplate] = None) -> List[NavigationAgent]:
        """Spawn agents on random traversable nodes and take ownership of them"""
        count = self.config.agents.num_agents if count is None else count
        agents = spawn_agents(self.world, self.graph, count, template or self.template, self.rng)
        for agent in agents:
            agent.manager = self
        self.all_agents.extend(agents)
        return agents

    # Search delegation
    def generate_path(self, start: NavigationNode, end: NavigationNode) -> List[NavigationNode]:
        return self.solver.find_path(start, end)

    def find_nearest_node(self, location: Sequence[float]) -> Optional[NavigationNode]:
        return self.graph.find_nearest_node(location)

    def find_furthest_node(self, location: Sequence[float]) -> Optional[NavigationNode]:
        return self.graph.find_furthest_node(location)
