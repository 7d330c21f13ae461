import logging

import networkx as nx
import pytest
from networkx.algorithms import bipartite

from gmatch.algorithms.bipartite import (
    BipartiteMatcher,
    LabelState,
    find_augmenting_path,
    make_selector,
    maximum_cardinality_matching,
)
from gmatch.algorithms.partition import NotBipartiteError, partition
from gmatch.config import MatchingConfig
from gmatch.graph.undirected_graph import UndirectedGraph
from gmatch.matching import Matching


def _random_connected_bipartite(n_top, n_bottom, p, seed):
    """Largest component of a random bipartite graph, relabeled 0..n-1."""
    g = bipartite.random_graph(n_top, n_bottom, p, seed=seed)
    component = max(nx.connected_components(g), key=len)
    g = nx.convert_node_labels_to_integers(g.subgraph(component).copy())
    return UndirectedGraph.from_networkx(g)


def _assert_maximum(graph, m):
    u, v = partition(graph)
    m.assert_valid()
    for i, j in m.to_list():
        assert graph.has_edge(i, j)
    assert m.size <= min(len(u), len(v))
    assert find_augmenting_path(graph, u, m) is None


def test_matching_star(star_uv):
    m = maximum_cardinality_matching(star_uv)
    assert m.size == 2
    _assert_maximum(star_uv, m)


def test_matching_star_lowest_selection_edges(star_uv):
    m = maximum_cardinality_matching(star_uv)
    assert m.to_list() == [(0, 4), (1, 3)]


def test_matching_k22(k22):
    m = maximum_cardinality_matching(k22)
    assert m.size == 2
    assert m.vertexes() == {0, 1, 2, 3}
    assert m.to_list() == [(0, 2), (1, 3)]


def test_matching_single_edge(single_edge):
    m = maximum_cardinality_matching(single_edge)
    assert m.size == 1
    assert m.to_list() == [(0, 1)]


def test_matching_empty(empty_graph):
    assert partition(empty_graph) == (set(), set())
    m = maximum_cardinality_matching(empty_graph)
    assert m.size == 0
    assert m.is_empty()


def test_matching_single_vertex(single_vertex):
    m = maximum_cardinality_matching(single_vertex)
    assert m.size == 0


def test_matching_triangle(triangle):
    with pytest.raises(NotBipartiteError):
        maximum_cardinality_matching(triangle)


def test_matching_disconnected(two_components):
    with pytest.raises(NotBipartiteError):
        maximum_cardinality_matching(two_components)


def test_matching_leaf_behind_matched_vertex(leaf_behind_matched):
    m = maximum_cardinality_matching(leaf_behind_matched)
    assert m.size == 2
    assert m.to_list() == [(0, 3), (1, 2)]
    _assert_maximum(leaf_behind_matched, m)


def test_matching_path6(path6):
    m = maximum_cardinality_matching(path6)
    assert m.size == 3
    _assert_maximum(path6, m)


def test_matching_unbalanced(unbalanced):
    m = maximum_cardinality_matching(unbalanced)
    assert m.size == 2
    assert {4, 5} <= m.vertexes()
    _assert_maximum(unbalanced, m)


def test_matching_grid(grid3x3):
    m = maximum_cardinality_matching(grid3x3)
    assert m.size == 4
    _assert_maximum(grid3x3, m)


def test_matching_from_graph_method(star_uv):
    assert star_uv.maximum_cardinality_matching().size == 2
    assert star_uv.partition() == ({0, 1, 2}, {3, 4})


def test_matching_networkx_input():
    g = nx.Graph()
    g.add_edges_from([(0, 3), (0, 4), (1, 3), (2, 4)])
    m = maximum_cardinality_matching(g)
    assert m.size == 2


def test_matching_random_selection(grid3x3):
    for seed in range(5):
        config = MatchingConfig(selection="random", seed=seed)
        m = maximum_cardinality_matching(grid3x3, config=config)
        assert m.size == 4
        _assert_maximum(grid3x3, m)


def test_matching_random_selection_reproducible(grid3x3):
    config = MatchingConfig(selection="random", seed=7)
    first = maximum_cardinality_matching(grid3x3, config=config)
    second = maximum_cardinality_matching(grid3x3, config=config)
    assert first == second


@pytest.mark.parametrize("seed", range(10))
def test_matching_size_agrees_with_hopcroft_karp(seed):
    g = _random_connected_bipartite(8, 6, 0.3, seed)
    m = maximum_cardinality_matching(g)
    u, _v = partition(g)
    expected = bipartite.maximum_matching(g, top_nodes=u)
    assert m.size == len(expected) // 2
    _assert_maximum(g, m)


@pytest.mark.parametrize("seed", range(5))
def test_matching_random_selection_agrees_with_hopcroft_karp(seed):
    g = _random_connected_bipartite(10, 10, 0.2, seed)
    config = MatchingConfig(selection="random", seed=seed)
    m = maximum_cardinality_matching(g, config=config)
    u, _v = partition(g)
    assert m.size == len(bipartite.maximum_matching(g, top_nodes=u)) // 2


def test_matcher_validates_result(monkeypatch, k22):
    calls = []
    monkeypatch.setattr(Matching, "assert_valid", lambda self: calls.append(self))

    BipartiteMatcher(k22).run()
    assert len(calls) == 1

    BipartiteMatcher(k22, config=MatchingConfig(validate_result=False)).run()
    assert len(calls) == 1


def test_find_augmenting_path_empty_matching(single_edge):
    assert find_augmenting_path(single_edge, {0}, Matching()) == [1, 0]


def test_find_augmenting_path_through_matched_edge(leaf_behind_matched):
    m = Matching.from_edges((0, 2))
    path = find_augmenting_path(leaf_behind_matched, [0, 1], m)
    assert path == [3, 0, 2, 1]
    assert m.to_list() == [(0, 2)]


def test_find_augmenting_path_none_when_maximum(k22):
    m = Matching.from_edges((0, 3), (1, 2))
    assert find_augmenting_path(k22, [0, 1], m) is None


def test_find_augmenting_path_is_augmenting(grid3x3):
    u, _v = partition(grid3x3)
    m = Matching()
    while True:
        path = find_augmenting_path(grid3x3, sorted(u), m)
        if path is None:
            break
        assert m[path[0]] is None
        assert m[path[-1]] is None
        assert len(path) % 2 == 0
        size = m.size
        m.augment(path)
        assert m.size == size + 1
    assert m.size == 4


def test_label_state_backtrack():
    state = LabelState(predecessors={5: 2, 2: 4, 4: 1})
    assert state.backtrack_from(5) == [5, 2, 4, 1]
    assert state.backtrack_from(1) == [1]


def test_label_state_unmarked_r():
    state = LabelState(label_r={1, 2, 3}, mark_r={2})
    assert state.unmarked_r() == {1, 3}


def test_make_selector():
    assert make_selector(MatchingConfig())({4, 2, 9}) == 2
    pick = make_selector(MatchingConfig(selection="random", seed=1))
    assert pick({4, 2, 9}) in {4, 2, 9}


def test_matching_debug_trace(caplog, star_uv):
    caplog.set_level(logging.DEBUG, logger="gmatch")
    maximum_cardinality_matching(star_uv)
    assert "r-mark" in caplog.text
    assert "t-label" in caplog.text
    assert "augmenting path" in caplog.text
    assert "matching of size 2" in caplog.text
