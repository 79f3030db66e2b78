import pytest

from routelab.ksp import (
    Path,
    adjacency_from_links,
    all_pairs_k_shortest_paths,
    dijkstra,
    path_cost,
    yen_k_shortest_paths,
)

LINKS = [(0, 1), (1, 3), (0, 2), (2, 3), (0, 3)]
DELAYS = [1, 1, 2, 2, 5]
TOPO = [[0, 2, 4], [0, 1], [2, 3], [1, 3, 4]]


@pytest.fixture
def adjacency():
    return adjacency_from_links(TOPO, LINKS, DELAYS)


def test_adjacency_from_links(adjacency):
    assert adjacency[0] == [(1, 1), (2, 2), (3, 5)]
    assert adjacency[1] == [(0, 1), (3, 1)]
    for u, row in enumerate(adjacency):
        for v, w in row:
            assert (u, w) in adjacency[v]


def test_dijkstra_shortest(adjacency):
    path = dijkstra(adjacency, 0, 3)
    assert path.nodes == (0, 1, 3)
    assert path.cost == path_cost(adjacency, path.nodes)


def test_dijkstra_with_removed_parts(adjacency):
    path = dijkstra(adjacency, 0, 3, {0: {1}}, set())
    assert path.nodes == (0, 2, 3)
    direct = dijkstra(adjacency, 0, 3, {}, {1, 2})
    assert direct.nodes == (0, 3)


def test_dijkstra_unreachable():
    assert dijkstra([[], []], 0, 1) is None


def test_dijkstra_same_node(adjacency):
    assert dijkstra(adjacency, 2, 2) == Path((2,), 0)


def test_path_cost_matches_delays(adjacency):
    assert path_cost(adjacency, [0, 3]) == DELAYS[4]
    assert path_cost(adjacency, [0, 1, 3]) == DELAYS[0] + DELAYS[1]
    assert path_cost(adjacency, []) == 0


def test_yen_finds_all_simple_paths(adjacency):
    paths = yen_k_shortest_paths(adjacency, 0, 3, 10)
    assert {p.nodes for p in paths} == {(0, 1, 3), (0, 2, 3), (0, 3)}
    costs = [p.cost for p in paths]
    assert costs == sorted(costs)
    for p in paths:
        assert p.cost == path_cost(adjacency, p.nodes)
        assert len(set(p.nodes)) == len(p.nodes)


def test_yen_respects_k(adjacency):
    paths = yen_k_shortest_paths(adjacency, 0, 3, 2)
    assert len(paths) == 2
    assert paths[0] == dijkstra(adjacency, 0, 3)


def test_yen_unreachable_and_invalid_k():
    assert yen_k_shortest_paths([[], []], 0, 1, 3) == []
    with pytest.raises(ValueError):
        yen_k_shortest_paths([[(1, 1)], [(0, 1)]], 0, 1, 0)


def test_all_pairs_table(adjacency):
    table = all_pairs_k_shortest_paths(adjacency, 2)
    assert len(table) == len(adjacency)
    for src, row in enumerate(table):
        assert row[src] == []
        for dst, paths in enumerate(row):
            if src == dst:
                continue
            assert 1 <= len(paths) <= 2
            assert all(p.nodes[0] == src and p.nodes[-1] == dst for p in paths)