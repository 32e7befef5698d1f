"""
Tests for A*, the jump point search variant and batch solving.

Optimality is checked against networkx Dijkstra, igraph weighted distances and,
on the smallest grids, exhaustive enumeration of simple paths.
"""

import logging
import math

import networkx as nx
import numpy as np
import pytest

from terrainnav.core import (
    HeuristicType,
    JumpPointExpansion,
    PathSolver,
    PathfindingType,
    SearchRecord,
    SearchState,
    estimate
)
from terrainnav.utils import euclidean_distance, path_cost


def to_networkx(graph):
    reference = nx.DiGraph()
    for node in graph.all_nodes:
        reference.add_node(id(node))
        for neighbor in node.connected:
            reference.add_edge(id(node), id(neighbor),
                               weight=euclidean_distance(node.position, neighbor.position))
    return reference


def linear_scan_astar(graph, start, end, heuristic):
    """Reference A* with an unsorted open list scanned for the first lowest F-score."""
    g_score = {id(node): math.inf for node in graph.all_nodes}
    h_score = {}
    came_from = {}
    g_score[id(start)] = 0.0
    h_score[id(start)] = estimate(start.position, end.position, heuristic)
    open_set = [start]

    while open_set:
        best = 0
        for i in range(1, len(open_set)):
            f_i = g_score[id(open_set[i])] + h_score[id(open_set[i])]
            f_best = g_score[id(open_set[best])] + h_score[id(open_set[best])]
            if f_i < f_best:
                best = i
        current = open_set.pop(best)

        if current is end:
            path = [end]
            while path[-1] is not start:
                path.append(came_from[id(path[-1])])
            return path[::-1]

        for neighbor in current.connected:
            tentative = g_score[id(current)] + euclidean_distance(current.position, neighbor.position)
            if tentative < g_score[id(neighbor)]:
                came_from[id(neighbor)] = current
                g_score[id(neighbor)] = tentative
                h_score[id(neighbor)] = estimate(neighbor.position, end.position, heuristic)
                if neighbor not in open_set:
                    open_set.append(neighbor)
    return []


def assert_valid_path(path, start, end):
    assert path[0] is start
    assert path[-1] is end
    for a, b in zip(path, path[1:]):
        assert b in a.connected


def random_terrain(make_manager, seed, size):
    rng = np.random.default_rng(seed)
    heights = rng.normal(scale=0.35, size=size)
    mask = rng.random(size) > 0.2
    return make_manager(heights, traversable=mask), rng


def test_start_equals_end_returns_single_node(flat_manager):
    node = flat_manager.graph.node_at(0, 0)
    assert flat_manager.generate_path(node, node) == [node]


def test_diagonal_on_flat_grid(make_manager):
    manager = make_manager(np.zeros((3, 3)))
    graph = manager.graph
    path = manager.generate_path(graph.node_at(0, 0), graph.node_at(2, 2))

    assert [node.grid_coordinate for node in path] == [(0, 0), (1, 1), (2, 2)]
    assert path_cost(path) == pytest.approx(2 * math.sqrt(2))


@pytest.mark.parametrize("heuristic", list(HeuristicType))
@pytest.mark.parametrize("seed", range(6))
def test_astar_matches_dijkstra(make_manager, heuristic, seed):
    size = (3 + seed % 3, 5 - seed % 3)
    manager, rng = random_terrain(make_manager, seed, size)
    graph = manager.graph
    solver = PathSolver(graph, heuristic=heuristic)
    reference = to_networkx(graph)
    nodes = graph.traversable_nodes

    for _ in range(10):
        start = nodes[int(rng.integers(len(nodes)))]
        end = nodes[int(rng.integers(len(nodes)))]
        path = solver.find_path(start, end)

        if nx.has_path(reference, id(start), id(end)):
            assert_valid_path(path, start, end)
            expected = nx.dijkstra_path_length(reference, id(start), id(end))
            assert path_cost(path) == pytest.approx(expected)
        else:
            assert path == []


def test_astar_matches_igraph_distances(make_manager):
    manager, _ = random_terrain(make_manager, 21, (5, 5))
    graph = manager.graph
    igraph = graph.to_igraph()
    distances = igraph.distances(weights='weight', mode='out')

    start = graph.traversable_nodes[0]
    start_vid = graph.all_nodes.index(start)
    for end_vid, end in enumerate(graph.all_nodes):
        if not end.is_traversable:
            continue
        path = manager.generate_path(start, end)
        if math.isinf(distances[start_vid][end_vid]):
            assert path == []
        else:
            assert path_cost(path) == pytest.approx(distances[start_vid][end_vid])


def test_astar_is_minimal_over_all_simple_paths(make_manager):
    heights = np.array([[0.0, 0.2, 0.0],
                        [0.3, 1.5, 0.1],
                        [0.0, 0.2, 0.0]])
    manager = make_manager(heights)
    graph = manager.graph
    start, end = graph.node_at(0, 0), graph.node_at(2, 2)
    reference = to_networkx(graph)
    by_id = {id(node): node for node in graph.all_nodes}

    costs = [path_cost([by_id[i] for i in simple])
             for simple in nx.all_simple_paths(reference, id(start), id(end))]
    path = manager.generate_path(start, end)

    assert_valid_path(path, start, end)
    assert path_cost(path) == pytest.approx(min(costs))


@pytest.mark.parametrize("seed", range(4))
def test_heap_open_set_matches_linear_scan(make_manager, seed):
    # flat terrain has many equal F-scores, which exercises tie-breaking
    rng = np.random.default_rng(seed)
    heights = np.zeros((5, 5)) if seed % 2 == 0 else rng.normal(scale=0.2, size=(5, 5))
    manager = make_manager(heights)
    graph = manager.graph

    for heuristic in HeuristicType:
        solver = PathSolver(graph, heuristic=heuristic)
        for _ in range(8):
            start = graph.all_nodes[int(rng.integers(25))]
            end = graph.all_nodes[int(rng.integers(25))]
            expected = linear_scan_astar(graph, start, end, heuristic)
            assert solver.find_path(start, end) == expected


def test_unreachable_target_returns_empty(make_manager, caplog):
    mask = np.ones((5, 5), dtype=bool)
    mask[:, 2] = False
    manager = make_manager(np.zeros((5, 5)), traversable=mask)
    graph = manager.graph

    with caplog.at_level(logging.ERROR):
        path = manager.generate_path(graph.node_at(0, 0), graph.node_at(4, 4))

    assert path == []
    assert "No path found" in caplog.text


def test_path_around_blocked_cells(make_manager):
    mask = np.ones((5, 5), dtype=bool)
    mask[0:4, 2] = False
    manager = make_manager(np.zeros((5, 5)), traversable=mask)
    graph = manager.graph
    start, end = graph.node_at(0, 0), graph.node_at(4, 0)

    path = manager.generate_path(start, end)

    assert_valid_path(path, start, end)
    assert all(node.is_traversable for node in path)
    assert graph.node_at(2, 4) in path


def test_max_iterations_stops_search(make_manager, caplog):
    manager = make_manager(np.zeros((5, 5)), **{'search.max_iterations': 1})
    graph = manager.graph

    with caplog.at_level(logging.WARNING):
        path = manager.generate_path(graph.node_at(0, 0), graph.node_at(4, 4))

    assert path == []
    assert "stopped after 1 iterations" in caplog.text


def test_search_does_not_touch_nodes(flat_manager):
    graph = flat_manager.graph
    flat_manager.generate_path(graph.node_at(0, 0), graph.node_at(4, 4))
    for node in graph.all_nodes:
        assert not hasattr(node, 'cost_so_far')
        assert not hasattr(node, 'predecessor')


def test_search_record_defaults():
    record = SearchRecord()
    assert math.isinf(record.cost_so_far)
    assert record.predecessor is None

    record.cost_so_far = 2.0
    record.heuristic_estimate = 1.5
    assert record.total_score == 3.5


def test_search_state_creates_records_lazily(flat_manager):
    state = SearchState()
    node = flat_manager.graph.node_at(1, 1)
    assert node not in state
    assert state.record(node) is state.record(node)
    assert node in state
    assert len(state) == 1


@pytest.mark.parametrize("heuristic", list(HeuristicType))
def test_jps_finds_valid_path(flat_manager, heuristic):
    graph = flat_manager.graph
    solver = PathSolver(graph, heuristic=heuristic, algorithm=PathfindingType.JPS)
    start, end = graph.node_at(0, 0), graph.node_at(4, 2)

    path = solver.find_path(start, end)

    assert_valid_path(path, start, end)


def test_jps_with_euclidean_matches_astar_cost(make_manager):
    manager, rng = random_terrain(make_manager, 5, (5, 5))
    graph = manager.graph
    solver = PathSolver(graph, heuristic=HeuristicType.EUCLIDEAN)
    nodes = graph.traversable_nodes

    for _ in range(10):
        start = nodes[int(rng.integers(len(nodes)))]
        end = nodes[int(rng.integers(len(nodes)))]
        astar = solver.find_path(start, end, PathfindingType.A_STAR)
        jps = solver.find_path(start, end, 'jps')
        assert path_cost(jps) == pytest.approx(path_cost(astar))


def test_jps_costs_steps_with_heuristic(make_manager):
    # Chebyshev prices diagonal steps at 1, so the JPS variant
    # treats a straight run of diagonals as cheap
    manager = make_manager(np.zeros((3, 3)))
    graph = manager.graph
    policy = JumpPointExpansion(HeuristicType.CHEBYSHEV)
    a, b = graph.node_at(0, 0), graph.node_at(1, 1)

    assert policy.edge_cost(a, b) == pytest.approx(1.0)
    assert list(policy.identify_successors(a, b)) == a.connected


def test_find_paths_parallel_matches_sequential(make_manager):
    manager, rng = random_terrain(make_manager, 8, (5, 5))
    graph = manager.graph
    nodes = graph.traversable_nodes
    pairs = [(nodes[int(rng.integers(len(nodes)))], nodes[int(rng.integers(len(nodes)))])
             for _ in range(12)]

    sequential = manager.solver.find_paths(pairs)
    parallel = manager.solver.find_paths(pairs, n_jobs=4)

    assert parallel == sequential
    assert len(parallel) == len(pairs)
