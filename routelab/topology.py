"""Generators for data-centre style network topologies."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class Edge:
    """Weighted half of an undirected link, seen from one endpoint."""

    to: int
    latency: int


def randint(rng: random.Random, low: int, high: int) -> int:
    """Uniform integer in the inclusive range ``[low, high]``."""
    if low > high:
        raise ValueError(f"empty range [{low}, {high}]")
    return rng.randint(low, high)


def regular_graph(
    n: int, ports: int, used_ports: int, rng: Optional[random.Random] = None
) -> list[list[int]]:
    """Random graph of ``n`` switches, each linked to at most ``used_ports`` others.

    Nodes are filled in turn; a node stops early when no free partner is left.
    """
    if ports < used_ports:
        raise ValueError("used_ports cannot exceed ports")
    rng = rng or random.Random()
    graph: list[list[int]] = [[] for _ in range(n)]
    remain = list(range(n))

    for u in range(n):
        while len(graph[u]) < used_ports:
            size = len(remain)
            if size == 0:
                break
            i = randint(rng, 0, size - 1)
            while (
                remain[i] == u
                or remain[i] in graph[u]
                or len(graph[remain[i]]) == used_ports
            ):
                remain[i], remain[size - 1] = remain[size - 1], remain[i]
                size -= 1
                if len(graph[remain[size]]) == used_ports:
                    remain[size], remain[-1] = remain[-1], remain[size]
                    remain.pop()
                if size == 0:
                    break
                i = randint(rng, 0, size - 1)
            if size == 0:
                break
            partner = remain[i]
            graph[u].append(partner)
            graph[partner].append(u)
    return graph


def jellyfish(
    n: int,
    ports: int,
    used_ports: int,
    servers: int,
    rng: Optional[random.Random] = None,
) -> list[list[int]]:
    """Jellyfish topology: a random switch graph with servers on spare ports.

    Nodes ``0..n-1`` are switches and ``n..n+servers-1`` servers, each
    server attached to one switch with a free port.
    """
    if servers > n * (ports - used_ports):
        raise ValueError("not enough free switch ports for the servers")
    rng = rng or random.Random()
    graph = regular_graph(n, ports, used_ports, rng)
    graph.extend([] for _ in range(servers))
    remain = list(range(n))

    for server in range(n, n + servers):
        if not remain:
            raise RuntimeError("ran out of switches with free ports")
        i = randint(rng, 0, len(remain) - 1)
        while len(graph[remain[i]]) == ports:
            remain[i], remain[-1] = remain[-1], remain[i]
            remain.pop()
            if not remain:
                raise RuntimeError("ran out of switches with free ports")
            i = randint(rng, 0, len(remain) - 1)
        switch = remain[i]
        graph[server].append(switch)
        graph[switch].append(server)
    return graph


def fat_tree(k: int) -> list[list[int]]:
    """k-ary fat tree: core, aggregation and edge switches, then servers.

    Returns an empty graph when ``k`` is odd.
    """
    if k % 2 != 0:
        return []
    half = k // 2
    pods = k
    core_count = half * half
    switch_count = core_count + pods * (half + half)
    graph: list[list[int]] = [[] for _ in range(switch_count + pods * half * half)]

    def link(a: int, b: int) -> None:
        graph[a].append(b)
        graph[b].append(a)

    agg_base = core_count
    edge_base = core_count + pods * half

    for core in range(core_count):
        j = core % half
        for pod in range(pods):
            link(core, agg_base + pod * half + j)

    for pod in range(pods):
        for i in range(half):
            for j in range(half):
                link(agg_base + pod * half + i, edge_base + pod * half + j)

    server = switch_count
    for pod in range(pods):
        for i in range(half):
            for _ in range(half):
                link(edge_base + pod * half + i, server)
                server += 1
    return graph


def random_graph(
    n: int,
    max_latency: int = 5,
    density: float = 0.3,
    rng: Optional[random.Random] = None,
) -> list[list[Edge]]:
    """Erdős–Rényi style graph with latencies drawn from ``1..max_latency``."""
    rng = rng or random.Random()
    graph: list[list[Edge]] = [[] for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            if rng.random() < density:
                latency = randint(rng, 1, max_latency)
                graph[i].append(Edge(j, latency))
                graph[j].append(Edge(i, latency))
    return graph


def is_connected(adjacency: Sequence[Sequence[int]]) -> bool:
    """Whether every node can be reached from node 0."""
    if not adjacency:
        return True
    seen = {0}
    queue = deque([0])
    while queue:
        u = queue.popleft()
        for v in adjacency[u]:
            if v not in seen:
                seen.add(v)
                queue.append(v)
    return len(seen) == len(adjacency)