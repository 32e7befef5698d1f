"""
World provider interface.

The navigation core only needs to enumerate placed nodes and to create or
destroy nodes and agents; everything else about the host world stays outside.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Sequence

from .agents import AgentTemplate, NavigationAgent
from .node import NavigationNode


class WorldProvider(ABC):
    """Collaborator that owns node and agent lifecycle"""

    @abstractmethod
    def enumerate_nodes(self) -> List[NavigationNode]:
        """All currently placed navigation nodes"""
        pass

    @abstractmethod
    def create_node(self, position: Sequence[float]) -> NavigationNode:
        pass

    @abstractmethod
    def destroy_node(self, node: NavigationNode) -> None:
        pass

    @abstractmethod
    def create_agent(self, template: AgentTemplate, position: Sequence[float]) -> NavigationAgent:
        pass


class InMemoryWorld(WorldProvider):
    """
    World provider that keeps nodes and agents in lists.
    """
    def __init__(self, nodes: Sequence[NavigationNode] = ()):
        self.nodes: List[NavigationNode] = list(nodes)
        self.agents: List[NavigationAgent] = []
        self._node_counter = len(self.nodes)
        self.logger = logging.getLogger(self.__class__.__name__)

    def enumerate_nodes(self) -> List[NavigationNode]:
        return list(self.nodes)

    def place_node(self, node: NavigationNode) -> NavigationNode:
        """Place an already constructed node, e.g. a hand-authored one"""
        self.nodes.append(node)
        return node

    def create_node(self, position: Sequence[float]) -> NavigationNode:
        node = NavigationNode(position, name=f"NavigationNode_{self._node_counter}")
        self._node_counter += 1
        self.nodes.append(node)
        return node

    def destroy_node(self, node: NavigationNode) -> None:
        try:
            self.nodes.remove(node)
        except ValueError:
            self.logger.warning(f"Tried to destroy unknown node {node.name}")
            return
        node.clear_connections()

    def create_agent(self, template: AgentTemplate, position: Sequence[float]) -> NavigationAgent:
        agent = NavigationAgent(f"{template.name}_{len(self.agents)}", template, position)
        self.agents.append(agent)
        return agent
