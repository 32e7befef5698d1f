import logging
from typing import List, Optional, Sequence

from igraph import Graph

from .node import NavigationNode
from ..utils.math_utils import as_position, euclidean_distance


class NavigationGraph:
    """
    This class holds the node set of the navigation graph and its traversable subset.
    Also handles nearest/furthest node queries used to seed agent path requests.
    """
    def __init__(self):
        self.all_nodes: List[NavigationNode] = []
        self.traversable_nodes: List[NavigationNode] = []
        self.width = None
        self.height = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def __len__(self):
        return len(self.all_nodes)

    def clear(self) -> None:
        """Forget every node. Adjacency on the dropped nodes is cleared too."""
        for node in self.all_nodes:
            node.clear_connections()
        self.all_nodes = []
        self.traversable_nodes = []
        self.width = None
        self.height = None

    def add_node(self, node: NavigationNode) -> None:
        self.all_nodes.append(node)
        if node.is_traversable:
            self.traversable_nodes.append(node)

    def node_at(self, col: int, row: int) -> NavigationNode:
        """Grid-generated node at (col, row)."""
        if self.width is None or self.height is None:
            raise IndexError("Graph was not generated from a grid")
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise IndexError(f"Cell ({col}, {row}) outside {self.width}x{self.height} grid")
        return self.all_nodes[row * self.width + col]

    def edge_count(self) -> int:
        """Number of accepted outgoing edges across all nodes."""
        return sum(len(node.connected_all) for node in self.all_nodes)

    def find_nearest_node(self, location: Sequence[float]) -> Optional[NavigationNode]:
        """Traversable node closest to location, None if there are no traversable nodes."""
        location = as_position(location)
        nearest_node = None
        nearest_distance = float('inf')
        for node in self.traversable_nodes:
            distance = euclidean_distance(location, node.position)
            if distance < nearest_distance:
                nearest_distance = distance
                nearest_node = node

        if nearest_node is None:
            self.logger.warning("No traversable nodes to search for nearest node")
        else:
            self.logger.debug(f"Nearest node to {location}: {nearest_node.name}")
        return nearest_node

    def find_furthest_node(self, location: Sequence[float]) -> Optional[NavigationNode]:
        """Traversable node furthest from location, None if there are no traversable nodes."""
        location = as_position(location)
        furthest_node = None
        furthest_distance = 0.0
        for node in self.traversable_nodes:
            distance = euclidean_distance(location, node.position)
            if distance > furthest_distance:
                furthest_distance = distance
                furthest_node = node

        if furthest_node is None:
            self.logger.warning(f"No traversable node found away from {location}")
        else:
            self.logger.debug(f"Furthest node from {location}: {furthest_node.name}")
        return furthest_node

    def to_igraph(self) -> Graph:
        """
        Create a directed igraph representation of the traversable edges.
        Vertex ids follow the order of all_nodes; edges are weighted by Euclidean length.
        """
        igraph = Graph(directed=True)
        igraph.add_vertices(len(self.all_nodes))
        vid_of = {id(node): vid for vid, node in enumerate(self.all_nodes)}

        for vid, node in enumerate(self.all_nodes):
            igraph.vs[vid]['name'] = node.name
            igraph.vs[vid]['coords'] = node.grid_coordinate
            igraph.vs[vid]['traversable'] = node.is_traversable

        edges = []
        weights = []
        for node in self.all_nodes:
            for neighbor in node.connected:
                if id(neighbor) in vid_of:
                    edges.append((vid_of[id(node)], vid_of[id(neighbor)]))
                    weights.append(euclidean_distance(node.position, neighbor.position))
        igraph.add_edges(edges)
        igraph.es['weight'] = weights
        return igraph

    def connected_components(self) -> List[List[NavigationNode]]:
        """Strongly connected components of the traversable edge set, largest first."""
        clusters = self.to_igraph().connected_components(mode='strong')
        components = [[self.all_nodes[vid] for vid in cluster] for cluster in clusters]
        components.sort(key=len, reverse=True)
        self.logger.info(f"Found {len(components)} connected components")
        return components
