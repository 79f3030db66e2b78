"""Next-hop selection strategies for packets crossing a network."""

from __future__ import annotations

import random
from typing import AbstractSet, Optional, Protocol

from routelab.ksp import adjacency_from_links, all_pairs_k_shortest_paths
from routelab.network import Network


class _Routable(Protocol):
    destination: int


class _Tracked(Protocol):
    destination: int
    visited: AbstractSet[int]


class ShortestPathRouting:
    """Always take the first hop of a fewest-hop path, recomputed per packet."""

    def __init__(self, network: Network) -> None:
        self.network = network

    def next_hop(self, current: int, package: _Routable) -> Optional[int]:
        """Next node towards the package's destination, or None if none."""
        path = self.network.shortest_path(current, package.destination)
        return path[1] if len(path) >= 2 else None


class RandomNextHopRouting:
    """Pick uniformly among all next hops lying on some shortest path."""

    def __init__(self, network: Network, rng: Optional[random.Random] = None) -> None:
        self.network = network
        self.rng = rng or random.Random()
        self._tables = network.routing_tables()

    def next_hop(self, current: int, package: _Routable) -> Optional[int]:
        """A random shortest-path hop, or None when the destination is unreachable."""
        choices = self._tables[current][package.destination]
        return self.rng.choice(choices) if choices else None


class KShortestRouting:
    """Follow the cheapest of k precomputed paths that avoids visited nodes.

    When every path's first hop was already visited, a random unvisited
    neighbour is taken instead.
    """

    def __init__(
        self, network: Network, k: int = 3, rng: Optional[random.Random] = None
    ) -> None:
        if k < 1:
            raise ValueError("k must be positive")
        self.network = network
        self.rng = rng or random.Random()
        adjacency = adjacency_from_links(network.topo, network.links, network.delays)
        self._paths = all_pairs_k_shortest_paths(adjacency, k)

    def next_hop(self, current: int, package: _Tracked) -> Optional[int]:
        """Next node for the package, or None when it has nowhere to go."""
        paths = self._paths[current][package.destination]
        if not paths:
            return None
        for path in paths:
            if len(path.nodes) >= 2 and path.nodes[1] not in package.visited:
                return path.nodes[1]
        fresh = [
            node
            for node in self.network.neighbours(current)
            if node not in package.visited
        ]
        return self.rng.choice(fresh) if fresh else None