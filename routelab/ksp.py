"""Shortest paths and Yen's k-shortest loopless paths on weighted graphs."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

Adjacency = Sequence[Sequence[tuple[int, int]]]


@dataclass(frozen=True)
class Path:
    """A route through the graph and its total weight."""

    nodes: tuple[int, ...]
    cost: int

    def __lt__(self, other: "Path") -> bool:
        return self.cost < other.cost


def adjacency_from_links(
    topo: Sequence[Sequence[int]],
    links: Sequence[tuple[int, int]],
    delays: Sequence[int],
) -> list[list[tuple[int, int]]]:
    """Turn per-node link ids into ``(neighbour, weight)`` lists."""
    adjacency: list[list[tuple[int, int]]] = []
    for u, link_ids in enumerate(topo):
        row = []
        for link_id in link_ids:
            a, b = links[link_id]
            row.append((b if a == u else a, delays[link_id]))
        adjacency.append(row)
    return adjacency


def dijkstra(
    adjacency: Adjacency,
    start: int,
    end: int,
    removed_edges: Optional[Mapping[int, set[int]]] = None,
    removed_nodes: Optional[set[int]] = None,
) -> Optional[Path]:
    """Cheapest path from ``start`` to ``end`` avoiding the removed parts.

    Returns None when ``end`` cannot be reached.
    """
    removed_edges = removed_edges or {}
    removed_nodes = removed_nodes or set()
    dist = {start: 0}
    prev: dict[int, int] = {}
    heap = [(0, start)]
    while heap:
        d, u = heapq.heappop(heap)
        if u == end:
            break
        if d > dist[u]:
            continue
        blocked = removed_edges.get(u, ())
        for v, weight in adjacency[u]:
            if v in removed_nodes or v in blocked:
                continue
            candidate = d + weight
            if candidate < dist.get(v, candidate + 1):
                dist[v] = candidate
                prev[v] = u
                heapq.heappush(heap, (candidate, v))

    if end not in dist:
        return None
    nodes = [end]
    while nodes[-1] in prev:
        nodes.append(prev[nodes[-1]])
    return Path(tuple(reversed(nodes)), dist[end])


def path_cost(adjacency: Adjacency, nodes: Sequence[int]) -> int:
    """Total weight along ``nodes``; hops without an edge add nothing."""
    total = 0
    for u, v in zip(nodes, nodes[1:]):
        total += next((w for nxt, w in adjacency[u] if nxt == v), 0)
    return total


def yen_k_shortest_paths(
    adjacency: Adjacency, source: int, target: int, k: int
) -> list[Path]:
    """Up to ``k`` loopless paths from ``source`` to ``target``, cheapest first."""
    if k < 1:
        raise ValueError("k must be positive")
    first = dijkstra(adjacency, source, target)
    if first is None or first.nodes[0] != source:
        return []

    result = [first]
    seen = {first.nodes}
    candidates: list[tuple[int, int, Path]] = []
    order = itertools.count()

    for _ in range(1, k):
        previous = result[-1].nodes
        for j, spur in enumerate(previous[:-1]):
            root = previous[: j + 1]
            blocked = {
                p.nodes[j + 1]
                for p in result
                if j < len(p.nodes) - 1 and p.nodes[: j + 1] == root
            }
            spur_path = dijkstra(adjacency, spur, target, {spur: blocked}, set(root[:-1]))
            if spur_path is None:
                continue
            nodes = root + spur_path.nodes[1:]
            if nodes in seen:
                continue
            seen.add(nodes)
            path = Path(nodes, path_cost(adjacency, nodes))
            heapq.heappush(candidates, (path.cost, next(order), path))
        if not candidates:
            break
        result.append(heapq.heappop(candidates)[2])
    return result


def all_pairs_k_shortest_paths(adjacency: Adjacency, k: int) -> list[list[list[Path]]]:
    """``table[src][dst]``: the k shortest paths, empty on the diagonal."""
    n = len(adjacency)
    return [
        [
            [] if src == dst else yen_k_shortest_paths(adjacency, src, dst, k)
            for dst in range(n)
        ]
        for src in range(n)
    ]