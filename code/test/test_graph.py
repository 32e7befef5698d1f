"""
Tests for the node index: nearest/furthest queries, grid lookup and igraph export.
"""

import logging

import numpy as np
import pytest

from terrainnav.core import NavigationGraph, NavigationNode


def make_graph(positions, traversable=None):
    graph = NavigationGraph()
    traversable = traversable or [True] * len(positions)
    for i, (position, flag) in enumerate(zip(positions, traversable)):
        graph.add_node(NavigationNode(position, is_traversable=flag, name=f"n{i}"))
    return graph


def test_nearest_and_furthest():
    graph = make_graph([(0, 0, 0), (5, 0, 0), (10, 0, 0), (2, 2, 0)])

    assert graph.find_nearest_node((2, 1, 0)).name == "n3"
    assert graph.find_nearest_node((9, 0)).name == "n2"
    assert graph.find_furthest_node((2, 1, 0)).name == "n2"
    assert graph.find_furthest_node((10, 0, 0)).name == "n0"


def test_queries_ignore_non_traversable_nodes():
    graph = make_graph([(0, 0, 0), (1, 0, 0), (50, 0, 0)], traversable=[True, False, False])

    assert graph.find_nearest_node((1, 0, 0)).name == "n0"
    assert graph.find_furthest_node((0, 0, 0)) is None
    assert graph.find_furthest_node((3, 0, 0)).name == "n0"


def test_nearest_uses_true_3d_distance():
    graph = make_graph([(0, 0, 10), (3, 0, 0)])
    assert graph.find_nearest_node((0, 0, 0)).name == "n1"


def test_nearest_keeps_first_of_equal_distances():
    graph = make_graph([(1, 0, 0), (-1, 0, 0)])
    assert graph.find_nearest_node((0, 0, 0)).name == "n0"
    assert graph.find_furthest_node((0, 0, 0)).name == "n0"


def test_empty_traversable_set_returns_none(caplog):
    graph = make_graph([(0, 0, 0)], traversable=[False])

    with caplog.at_level(logging.WARNING):
        assert graph.find_nearest_node((0, 0, 0)) is None
        assert graph.find_furthest_node((0, 0, 0)) is None

    assert "No traversable" in caplog.text


def test_node_at_bounds(flat_manager):
    graph = flat_manager.graph
    assert graph.node_at(4, 4).grid_coordinate == (4, 4)
    with pytest.raises(IndexError):
        graph.node_at(5, 0)
    with pytest.raises(IndexError):
        NavigationGraph().node_at(0, 0)


def test_to_igraph_exports_traversable_edges(make_manager):
    mask = np.ones((3, 3), dtype=bool)
    mask[1, 1] = False
    manager = make_manager(np.zeros((3, 3)), traversable=mask)
    graph = manager.graph

    igraph = graph.to_igraph()

    assert igraph.vcount() == 9
    assert igraph.ecount() == sum(len(node.connected) for node in graph.all_nodes)
    assert igraph.is_directed()
    assert igraph.vs[4]['traversable'] is False
    assert igraph.vs[4]['coords'] == (1, 1)
    assert min(igraph.es['weight']) == pytest.approx(1.0)
    assert max(igraph.es['weight']) == pytest.approx(np.sqrt(2))


def test_connected_components_split_by_wall(make_manager):
    mask = np.ones((5, 5), dtype=bool)
    mask[:, 2] = False
    manager = make_manager(np.zeros((5, 5)), traversable=mask)

    components = manager.graph.connected_components()

    # two halves plus each blocked cell on its own
    assert [len(c) for c in components] == [10, 10, 1, 1, 1, 1, 1]
    left = components[0] if components[0][0].grid_coordinate[0] < 2 else components[1]
    assert all(node.grid_coordinate[0] < 2 for node in left)


def test_clear_drops_nodes_and_adjacency(flat_manager):
    graph = flat_manager.graph
    nodes = list(graph.all_nodes)

    graph.clear()

    assert len(graph) == 0
    assert graph.traversable_nodes == []
    assert graph.width is None
    assert all(node.connected_all == [] for node in nodes)
