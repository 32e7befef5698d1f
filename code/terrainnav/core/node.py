import logging
from typing import List, Optional, Sequence, Tuple

from ..utils.math_utils import as_position


GridCoordinate = Tuple[int, int]


class NavigationNode:
    """
    A single vertex of the navigation graph.

    Holds world position, traversability, the (col, row) cell it was generated from
    and its outgoing adjacency. Edges are stored only on the source node.

    Attributes:
        position (np.ndarray): World-space (x, y, z) position.
        grid_coordinate (tuple[int, int] | None): (col, row) in the generation grid,
            None for nodes that were not grid generated.
        is_traversable (bool): Whether agents may stand on or path through this node.
        connected (list[NavigationNode]): Traversable one-hop neighbours.
        connected_non_traversable (list[NavigationNode]): Non-traversable one-hop neighbours.
        connected_all (list[NavigationNode]): Every accepted neighbour.
        connected_directions (list[tuple[int, int]]): Grid offset for each entry of connected_all.
    """
    def __init__(self, position: Sequence[float], is_traversable: bool = True,
                 grid_coordinate: Optional[GridCoordinate] = None, name: Optional[str] = None):
        self.position = as_position(position)
        self.is_traversable = is_traversable
        self.grid_coordinate = grid_coordinate
        self.name = name or f"{self.__class__.__name__}_{id(self):x}"
        self.connected: List['NavigationNode'] = []
        self.connected_non_traversable: List['NavigationNode'] = []
        self.connected_all: List['NavigationNode'] = []
        self.connected_directions: List[GridCoordinate] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    def add_neighbor(self, node: 'NavigationNode', direction: GridCoordinate) -> bool:
        """Record an outgoing edge to `node`. Self-edges are ignored."""
        if node is self:
            self.logger.debug(f"Ignoring self connection on {self.name}")
            return False
        if node.is_traversable:
            self.connected.append(node)
        else:
            self.connected_non_traversable.append(node)
        self.connected_all.append(node)
        self.connected_directions.append(direction)
        return True

    def grid_offset_to(self, node: 'NavigationNode') -> GridCoordinate:
        """Integer (dcol, drow) from this node to `node`, (0, 0) without grid coordinates."""
        if self.grid_coordinate is None or node.grid_coordinate is None:
            return (0, 0)
        return (node.grid_coordinate[0] - self.grid_coordinate[0],
                node.grid_coordinate[1] - self.grid_coordinate[1])

    def clear_connections(self) -> None:
        self.connected.clear()
        self.connected_non_traversable.clear()
        self.connected_all.clear()
        self.connected_directions.clear()

    def __repr__(self):
        return (f"{self.__class__.__name__}(name={self.name!r}, grid={self.grid_coordinate}, "
                f"traversable={self.is_traversable})")
