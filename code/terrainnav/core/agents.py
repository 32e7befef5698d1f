"""
Navigation agents and agent spawning.

Agents only hold navigation state (current node and last requested path);
movement and animation belong to the host runtime.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .node import NavigationNode


@dataclass
class AgentTemplate:
    """Spawnable agent description passed to the world provider"""
    name: str
    speed: float = 1.0


class NavigationAgent:
    """An agent that asks its manager for paths between graph nodes"""

    def __init__(self, agent_id: str, template: AgentTemplate, position: np.ndarray):
        self.agent_id = agent_id
        self.template = template
        self.position = np.asarray(position, dtype=float)
        self.manager = None
        self.current_node: Optional[NavigationNode] = None
        self.path: List[NavigationNode] = []
        self.logger = logging.getLogger(f"{self.__class__.__name__}[{agent_id}]")

    def request_path(self, target: NavigationNode) -> List[NavigationNode]:
        """Ask the manager for a path from the current node to target and keep it."""
        if self.manager is None or self.current_node is None:
            self.logger.warning("Cannot request a path without a manager and a current node")
            self.path = []
            return self.path

        self.path = self.manager.generate_path(self.current_node, target)
        self.logger.debug(f"Received path with {len(self.path)} nodes to {target.name}")
        return self.path

    def __repr__(self):
        node_name = self.current_node.name if self.current_node is not None else None
        return f"{self.__class__.__name__}(id={self.agent_id!r}, node={node_name!r})"


def spawn_agents(world, graph, count: int, template: AgentTemplate,
                 rng: Optional[np.random.Generator] = None) -> List[NavigationAgent]:
    """
    Spawn `count` agents on random traversable nodes (uniform, with replacement).

    Each agent is created through the world provider at its node's position and
    gets that node as its current node. Managers are assigned by the caller.
    """
    logger = logging.getLogger(__name__)

    if count < 0:
        raise ValueError("count must be non-negative")
    if count == 0:
        return []
    if not graph.traversable_nodes:
        logger.warning(f"Cannot spawn {count} agents: no traversable nodes")
        return []

    rng = rng if rng is not None else np.random.default_rng()
    indices = rng.integers(0, len(graph.traversable_nodes), size=count)

    agents = []
    for index in indices:
        node = graph.traversable_nodes[int(index)]
        agent = world.create_agent(template, node.position)
        agent.current_node = node
        agents.append(agent)

    logger.info(f"Spawned {len(agents)} '{template.name}' agents")
    return agents
