"""
Informed graph search over the navigation graph.

PathSolver runs A* (or the jump point search variant) between two nodes.
Per-search scratch state (G-score, H-score, predecessor) lives in a SearchState
side table created for each search, so the graph itself is never mutated and
independent searches may run concurrently on an unchanging graph.
"""

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple, Union

from joblib import Parallel, delayed

from .graph import NavigationGraph
from .heuristic import HeuristicType, estimate
from .node import NavigationNode
from ..utils.math_utils import euclidean_distance


class PathfindingType(str, Enum):
    A_STAR = 'a_star'
    JPS = 'jps'


@dataclass
class SearchRecord:
    """Scratch values for one node during one search"""
    cost_so_far: float = float('inf')
    heuristic_estimate: float = 0.0
    predecessor: Optional[NavigationNode] = None

    @property
    def total_score(self) -> float:
        return self.cost_so_far + self.heuristic_estimate


class SearchState:
    """Side table from node identity to its SearchRecord. Unseen nodes read as cost +inf."""

    def __init__(self):
        self._records: Dict[int, SearchRecord] = {}

    def record(self, node: NavigationNode) -> SearchRecord:
        key = id(node)
        if key not in self._records:
            self._records[key] = SearchRecord()
        return self._records[key]

    def __contains__(self, node: NavigationNode) -> bool:
        return id(node) in self._records

    def __len__(self):
        return len(self._records)


class ExpansionPolicy(ABC):
    """Decides which neighbours a search expands and what each step costs"""

    def __init__(self, heuristic: HeuristicType):
        self.heuristic = heuristic

    @abstractmethod
    def successors(self, current: NavigationNode, end: NavigationNode) -> Sequence[NavigationNode]:
        pass

    @abstractmethod
    def edge_cost(self, current: NavigationNode, neighbor: NavigationNode) -> float:
        pass


class AStarExpansion(ExpansionPolicy):
    """Expands every traversable neighbour; steps cost their true Euclidean length"""

    def successors(self, current, end):
        return current.connected

    def edge_cost(self, current, neighbor):
        return euclidean_distance(current.position, neighbor.position)


class JumpPointExpansion(ExpansionPolicy):
    """
    Jump point search variant.

    Steps are costed with the selected heuristic rather than Euclidean length.
    Jump point pruning is not implemented: identify_successors is the extension
    point and currently expands every traversable neighbour, like A*.
    """

    def successors(self, current, end):
        return self.identify_successors(current, end)

    def identify_successors(self, current: NavigationNode, end: NavigationNode) -> Sequence[NavigationNode]:
        # TODO: prune using current.connected_directions and jump towards forced neighbours
        return current.connected

    def edge_cost(self, current, neighbor):
        return estimate(current.position, neighbor.position, self.heuristic)


EXPANSION_POLICIES = {
    PathfindingType.A_STAR: AStarExpansion,
    PathfindingType.JPS: JumpPointExpansion,
}


class PathSolver:
    """
    Finds lowest cost paths between nodes of a NavigationGraph.
    """
    def __init__(self, graph: NavigationGraph,
                 heuristic: Union[HeuristicType, str] = HeuristicType.EUCLIDEAN,
                 algorithm: Union[PathfindingType, str] = PathfindingType.A_STAR,
                 max_iterations: Optional[int] = None):
        self.graph = graph
        self.heuristic = heuristic
        self.algorithm = PathfindingType(algorithm)
        self.max_iterations = max_iterations
        self.logger = logging.getLogger(self.__class__.__name__)

    def make_policy(self, algorithm: Union[PathfindingType, str, None] = None) -> ExpansionPolicy:
        algorithm = PathfindingType(algorithm) if algorithm is not None else self.algorithm
        return EXPANSION_POLICIES[algorithm](self.heuristic)

    def find_path(self, start: NavigationNode, end: NavigationNode,
                  algorithm: Union[PathfindingType, str, None] = None) -> List[NavigationNode]:
        """
        Path from start to end, both inclusive, or an empty list if end is unreachable.
        """
        policy = self.make_policy(algorithm)
        state = SearchState()

        start_record = state.record(start)
        start_record.cost_so_far = 0.0
        start_record.heuristic_estimate = estimate(start.position, end.position, self.heuristic)

        # Heap entries are (total_score, insertion sequence, push count, node). The sequence is
        # fixed when a node joins the open set, so equal scores pop in insertion order.
        sequence = itertools.count()
        pushes = itertools.count()
        open_heap: List[Tuple[float, int, int, NavigationNode]] = []
        open_sequence: Dict[int, int] = {}

        def push(node, seq):
            heapq.heappush(open_heap, (state.record(node).total_score, seq, next(pushes), node))

        open_sequence[id(start)] = next(sequence)
        push(start, open_sequence[id(start)])

        iterations = 0
        while open_heap:
            score, seq, _, current = heapq.heappop(open_heap)
            if open_sequence.get(id(current)) != seq or score != state.record(current).total_score:
                continue  # stale
            del open_sequence[id(current)]

            if current is end:
                return self._reconstruct_path(state, start, end)

            iterations += 1
            if self.max_iterations is not None and iterations > self.max_iterations:
                self.logger.warning(f"Search from {start.name} to {end.name} stopped after "
                                    f"{self.max_iterations} iterations")
                return []

            current_cost = state.record(current).cost_so_far
            for neighbor in policy.successors(current, end):
                tentative = current_cost + policy.edge_cost(current, neighbor)
                record = state.record(neighbor)
                if tentative < record.cost_so_far:
                    record.predecessor = current
                    record.cost_so_far = tentative
                    record.heuristic_estimate = estimate(neighbor.position, end.position, self.heuristic)
                    if id(neighbor) not in open_sequence:
                        open_sequence[id(neighbor)] = next(sequence)
                    push(neighbor, open_sequence[id(neighbor)])

        self.logger.error(f"No path found from {start.name} to {end.name}")
        return []

    def find_paths(self, pairs: Sequence[Tuple[NavigationNode, NavigationNode]],
                   n_jobs: int = 1) -> List[List[NavigationNode]]:
        """Solve many (start, end) queries, optionally in parallel threads. Results keep input order."""
        if n_jobs == 1:
            return [self.find_path(start, end) for start, end in pairs]
        return Parallel(n_jobs=n_jobs, prefer='threads')(
            delayed(self.find_path)(start, end) for start, end in pairs
        )

    @staticmethod
    def _reconstruct_path(state: SearchState, start: NavigationNode, end: NavigationNode) -> List[NavigationNode]:
        path = [end]
        current = end
        while current is not start:
            current = state.record(current).predecessor
            path.append(current)
        path.reverse()
        return path
