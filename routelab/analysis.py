"""Statistics on random graphs with a fixed number of link slots per node."""

from __future__ import annotations

import random
from collections import deque
from typing import Optional, Sequence

from routelab.topology import randint


def random_degree_graph(
    n: int, degree: int, rng: Optional[random.Random] = None
) -> list[set[int]]:
    """Random graph where each node spends up to ``degree`` link slots.

    Pairs are drawn from nodes with slots left until at most one such node
    remains; repeated pairs and self-pairs use up slots without adding links.
    """
    if degree < 1:
        raise ValueError("degree must be at least 1")
    rng = rng or random.Random()
    slots = [degree] * n
    adjacency: list[set[int]] = [set() for _ in range(n)]
    open_nodes = list(range(n))

    while len(open_nodes) > 1:
        size = len(open_nodes)
        i = randint(rng, 0, size - 1)
        j = randint(rng, 0, size - 1)
        if slots[open_nodes[i]] == 1:
            while j == i:
                j = randint(rng, 0, size - 1)
        u, v = open_nodes[i], open_nodes[j]
        slots[u] -= 1
        slots[v] -= 1
        if u != v:
            adjacency[u].add(v)
            adjacency[v].add(u)
        open_nodes = [node for node in open_nodes if slots[node] != 0]
    return adjacency


def all_pairs_distances(
    adjacency: Sequence[Sequence[int]] | Sequence[set[int]],
) -> list[list[Optional[int]]]:
    """Hop distances between all nodes; None where no path exists."""
    n = len(adjacency)
    table: list[list[Optional[int]]] = []
    for source in range(n):
        row: list[Optional[int]] = [None] * n
        row[source] = 0
        queue = deque([source])
        while queue:
            u = queue.popleft()
            for v in adjacency[u]:
                if row[v] is None:
                    row[v] = row[u] + 1  # type: ignore[operator]
                    queue.append(v)
        table.append(row)
    return table


def distance_fractions(
    n: int, degree: Optional[int] = None, rng: Optional[random.Random] = None
) -> tuple[float, float, float]:
    """Share of node pairs at distance one, two, and one-or-two.

    The degree defaults to a fifth of ``n``.
    """
    if n < 2:
        raise ValueError("need at least two nodes")
    if degree is None:
        degree = max(1, n // 5)
    distances = all_pairs_distances(random_degree_graph(n, degree, rng))
    pairs = n * (n - 1) / 2
    flat = [d for i, row in enumerate(distances) for d in row[i + 1 :]]
    one = flat.count(1) / pairs
    two = flat.count(2) / pairs
    return one, two, one + two


def expected_distinct_draws(n: int) -> float:
    """Expected number of distinct values in ``n`` uniform draws from ``n`` values."""
    if n < 0:
        raise ValueError("n must not be negative")
    dist = [1.0] + [0.0] * n
    for _ in range(n):
        dist = [0.0] + [
            dist[k] * k / n + dist[k - 1] * (n - k + 1) / n for k in range(1, n + 1)
        ]
    return sum(k * p for k, p in enumerate(dist))