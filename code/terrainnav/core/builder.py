import logging
from typing import List, Optional, Sequence, Tuple

from ..cfg import GraphConfig
from ..utils.math_utils import normalize
from .graph import NavigationGraph
from .node import NavigationNode
from .world import WorldProvider


# (dcol, drow) offsets per cell case. Row 0 is the bottom row.
INTERIOR_NEIGHBORS = [(-1, 1), (0, 1), (1, 1), (-1, 0), (1, 0), (-1, -1), (0, -1), (1, -1)]
BOTTOM_LEFT_NEIGHBORS = [(0, 1), (1, 1), (1, 0)]
BOTTOM_RIGHT_NEIGHBORS = [(0, 1), (-1, 1), (-1, 0)]
TOP_LEFT_NEIGHBORS = [(0, -1), (1, -1), (1, 0)]
TOP_RIGHT_NEIGHBORS = [(0, -1), (-1, -1), (-1, 0)]
LEFT_EDGE_NEIGHBORS = [(0, 1), (1, 1), (1, 0), (0, -1), (1, -1)]
TOP_EDGE_NEIGHBORS = [(-1, 0), (1, 0), (-1, -1), (0, -1), (1, -1)]
RIGHT_EDGE_NEIGHBORS = [(0, 1), (-1, 1), (-1, 0), (0, -1), (-1, -1)]
BOTTOM_EDGE_NEIGHBORS = [(-1, 0), (1, 0), (-1, 1), (0, 1), (1, 1)]


def neighbor_offsets(col: int, row: int, width: int, height: int) -> List[Tuple[int, int]]:
    """
    Candidate neighbour offsets for a grid cell.

    Corners get 3 candidates, other edge cells 5 and interior cells 8.
    Offsets leaving the grid are dropped, which only matters for 1-wide grids.
    """
    last_col, last_row = width - 1, height - 1

    if row == 0 and col == 0:
        offsets = BOTTOM_LEFT_NEIGHBORS
    elif row == 0 and col == last_col:
        offsets = BOTTOM_RIGHT_NEIGHBORS
    elif row == last_row and col == 0:
        offsets = TOP_LEFT_NEIGHBORS
    elif row == last_row and col == last_col:
        offsets = TOP_RIGHT_NEIGHBORS
    elif col == 0:
        offsets = LEFT_EDGE_NEIGHBORS
    elif row == last_row:
        offsets = TOP_EDGE_NEIGHBORS
    elif col == last_col:
        offsets = RIGHT_EDGE_NEIGHBORS
    elif row == 0:
        offsets = BOTTOM_EDGE_NEIGHBORS
    else:
        offsets = INTERIOR_NEIGHBORS

    return [(dc, dr) for dc, dr in offsets
            if 0 <= col + dc < width and 0 <= row + dr < height and (dc, dr) != (0, 0)]


class GraphBuilder:
    """
    This class builds the navigation graph, either from nodes already placed in the
    world or by generating a width x height grid from a vertex list.
    """
    def __init__(self, world: WorldProvider, graph: NavigationGraph, config: GraphConfig):
        self.world = world
        self.graph = graph
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    def build_from_existing(self) -> None:
        """Index every node placed in the world. Adjacency is assumed to exist already."""
        self.graph.all_nodes = []
        self.graph.traversable_nodes = []
        self.graph.width = None
        self.graph.height = None

        for node in self.world.enumerate_nodes():
            self.graph.add_node(node)

        self.logger.info(f"Populated {len(self.graph.all_nodes)} nodes "
                         f"({len(self.graph.traversable_nodes)} traversable)")

    def generate_grid(self, vertices: Sequence[Sequence[float]], width: int, height: int,
                      traversable: Optional[Sequence[bool]] = None) -> None:
        """
        Replace the graph with a width x height grid built from row-major vertices.

        Vertex `row * width + col` becomes the node at grid coordinate (col, row).
        An optional traversable mask, in the same order, marks blocked cells.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        if len(vertices) != width * height:
            raise ValueError(f"Expected {width * height} vertices for a {width}x{height} grid, "
                             f"got {len(vertices)}")
        if traversable is not None and len(traversable) != width * height:
            raise ValueError(f"Traversable mask has {len(traversable)} entries, "
                             f"expected {width * height}")

        for node in self.world.enumerate_nodes():
            self.world.destroy_node(node)
        self.graph.clear()

        for row in range(height):
            for col in range(width):
                index = row * width + col
                node = self.world.create_node(vertices[index])
                node.grid_coordinate = (col, row)
                if traversable is not None:
                    node.is_traversable = bool(traversable[index])
                self.graph.add_node(node)

        self.graph.width = width
        self.graph.height = height

        for row in range(height):
            for col in range(width):
                from_node = self.graph.all_nodes[row * width + col]
                for dc, dr in neighbor_offsets(col, row, width, height):
                    to_node = self.graph.all_nodes[(row + dr) * width + (col + dc)]
                    self.add_connection(from_node, to_node)

        self.logger.info(f"Generated {width}x{height} grid with {self.graph.edge_count()} connections")

    def add_connection(self, from_node: NavigationNode, to_node: NavigationNode) -> bool:
        """
        Record the edge from_node -> to_node unless it is too steep.

        Steepness is approximated by the vertical component of the normalized
        displacement (from - to), which must lie strictly inside
        (-allowed_angle, allowed_angle).
        """
        if self.config.steepness_prevents_connection:
            direction = normalize(from_node.position - to_node.position)
            allowed = self.config.allowed_angle
            if not (-allowed < direction[2] < allowed):
                return False

        return from_node.add_neighbor(to_node, from_node.grid_offset_to(to_node))
