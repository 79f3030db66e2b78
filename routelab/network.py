"""Link-level view of an undirected network: link ids, delays and routing."""

from __future__ import annotations

import random
from collections import deque
from typing import Optional, Sequence

from routelab.topology import randint


class Network:
    """Undirected network whose links are numbered in discovery order.

    Link ``i`` joins ``links[i] == (u, v)`` with ``u < v``; it is found by
    walking the nodes in order and each node's neighbours in order.
    """

    def __init__(
        self,
        adjacency: Sequence[Sequence[int]],
        delays: Optional[Sequence[int]] = None,
    ) -> None:
        links = [
            (u, v) for u, neighbours in enumerate(adjacency) for v in neighbours if v > u
        ]
        if delays is None:
            delays = [0] * len(links)
        if len(delays) != len(links):
            raise ValueError(
                f"expected {len(links)} link delays, got {len(delays)}"
            )
        self.links: tuple[tuple[int, int], ...] = tuple(links)
        self.delays: tuple[int, ...] = tuple(delays)
        topo: list[list[int]] = [[] for _ in range(len(adjacency))]
        for link_id, (u, v) in enumerate(self.links):
            topo[u].append(link_id)
            topo[v].append(link_id)
        self.topo: tuple[tuple[int, ...], ...] = tuple(tuple(ids) for ids in topo)

    @classmethod
    def from_adjacency(
        cls,
        adjacency: Sequence[Sequence[int]],
        rng: Optional[random.Random] = None,
        min_delay: int = 1,
        max_delay: int = 10,
        failure_percent: int = 0,
    ) -> "Network":
        """Build a network with random delays, dropping failed links.

        Each link survives when a draw from ``1..100`` exceeds
        ``failure_percent``; survivors get a delay from ``min_delay..max_delay``.
        """
        if not 0 <= failure_percent <= 100:
            raise ValueError("failure_percent must lie between 0 and 100")
        if min_delay > max_delay:
            raise ValueError("min_delay cannot exceed max_delay")
        rng = rng or random.Random()
        kept: list[list[int]] = [[] for _ in range(len(adjacency))]
        count = 0
        for u, neighbours in enumerate(adjacency):
            for v in neighbours:
                if v > u and randint(rng, 1, 100) > failure_percent:
                    kept[u].append(v)
                    kept[v].append(u)
                    count += 1
        delays = [randint(rng, min_delay, max_delay) for _ in range(count)]
        return cls(kept, delays)

    def __len__(self) -> int:
        return len(self.topo)

    def find_link_id(self, u: int, v: int) -> Optional[int]:
        """Id of the link joining ``u`` and ``v``, or None if there is none."""
        for link_id in self.topo[u]:
            if set(self.links[link_id]) == {u, v} or self.links[link_id] == (u, v):
                return link_id
        return None

    def _other_end(self, link_id: int, node: int) -> int:
        a, b = self.links[link_id]
        return b if a == node else a

    def neighbours(self, node: int) -> list[int]:
        """Nodes linked to ``node``, in link order."""
        return [self._other_end(link_id, node) for link_id in self.topo[node]]

    def shortest_path(self, start: int, end: int) -> list[int]:
        """Fewest-hop path from ``start`` to ``end`` found by breadth-first search.

        Returns an empty list when ``end`` is unreachable or equals ``start``.
        """
        parent: dict[int, int] = {}
        visited = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            if current == end:
                break
            for nxt in self.neighbours(current):
                if nxt not in visited:
                    visited.add(nxt)
                    parent[nxt] = current
                    queue.append(nxt)

        if end not in parent:
            return []
        path = [end]
        while path[-1] != start:
            path.append(parent[path[-1]])
        path.reverse()
        return path

    def routing_tables(self) -> list[list[list[int]]]:
        """``table[src][dst]``: every next hop lying on some shortest path."""
        n = len(self)
        table: list[list[list[int]]] = [[[] for _ in range(n)] for _ in range(n)]
        for dest in range(n):
            distance: dict[int, int] = {dest: 0}
            next_hops: list[list[int]] = [[] for _ in range(n)]
            queue = deque([dest])
            while queue:
                current = queue.popleft()
                for neighbour in self.neighbours(current):
                    if neighbour not in distance:
                        distance[neighbour] = distance[current] + 1
                        next_hops[neighbour].append(current)
                        queue.append(neighbour)
                    elif distance[neighbour] == distance[current] + 1:
                        next_hops[neighbour].append(current)
            for src in range(n):
                if src != dest:
                    table[src][dest].extend(next_hops[src])
        return table