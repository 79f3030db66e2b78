"""Discrete-event simulation of packages crossing a bandwidth-limited network."""

from __future__ import annotations

import argparse
import heapq
import itertools
import random
import sys
import time as _time
from dataclasses import dataclass, field, replace
from typing import Optional, Protocol, Sequence, Union

from routelab.network import Network
from routelab.routing import KShortestRouting, RandomNextHopRouting, ShortestPathRouting
from routelab.topology import fat_tree, is_connected, jellyfish, randint

LINK_BANDWIDTH = 1
PACKAGE_SIZE = 1000
DEFAULT_TTL = 20
DEFAULT_MAX_EVENTS = 100_000


class _Router(Protocol):
    def next_hop(self, current: int, package: "Package") -> Optional[int]: ...


@dataclass(frozen=True)
class Package:
    """A package in flight, with the nodes it has already passed."""

    source: int
    destination: int
    time_to_live: int
    size: int
    created_at: int
    visited: frozenset[int] = field(default_factory=frozenset)


@dataclass(frozen=True)
class SimulationStats:
    """Counters gathered by a simulation run."""

    processed: int
    max_time: int
    sent: int
    delivered: int
    dropped: int
    bits_delivered: int
    total_delivery_time: int
    links: tuple[tuple[int, int], ...]
    link_busy_till: tuple[int, ...]
    link_bits: tuple[int, ...]
    bandwidth: int = LINK_BANDWIDTH

    @property
    def delivery_rate(self) -> float:
        """Delivered packages as a percentage of those sent."""
        return self.delivered / self.sent * 100 if self.sent else 0.0

    @property
    def average_delivery_time(self) -> float:
        """Mean time from creation to delivery."""
        return self.total_delivery_time / self.delivered if self.delivered else 0.0

    @property
    def throughput(self) -> float:
        """Delivered bits per time unit."""
        return self.bits_delivered / self.max_time if self.max_time else 0.0

    @property
    def utilization(self) -> float:
        """Approximate network utilisation in percent, from link busy times."""
        capacity = len(self.links) * self.bandwidth * self.max_time
        return sum(self.link_busy_till) / capacity * 100 if capacity else 0.0

    def busiest_links(self, count: int = 5) -> list[tuple[int, tuple[int, int], int]]:
        """``(link_id, (u, v), bits)`` of the links that carried the most bits."""
        if count < 0:
            raise ValueError("count must not be negative")
        ranked = sorted(
            ((bits, link_id) for link_id, bits in enumerate(self.link_bits)),
            reverse=True,
        )
        return [
            (link_id, self.links[link_id], bits) for bits, link_id in ranked[:count]
        ]


@dataclass(frozen=True)
class _FlowStart:
    source: int
    destination: int


@dataclass(frozen=True)
class _Arrival:
    node: int
    package: Package


_Event = Union[_FlowStart, _Arrival]


class Simulator:
    """Store-and-forward simulation where each link sends one package at a time."""

    def __init__(
        self,
        network: Network,
        routing: _Router,
        package_size: int = PACKAGE_SIZE,
        bandwidth: int = LINK_BANDWIDTH,
        time_to_live: int = DEFAULT_TTL,
    ) -> None:
        if bandwidth <= 0:
            raise ValueError("bandwidth must be positive")
        if package_size < 0:
            raise ValueError("package_size must not be negative")
        self.network = network
        self.routing = routing
        self.package_size = package_size
        self.bandwidth = bandwidth
        self.time_to_live = time_to_live
        self._queue: list[tuple[int, int, _Event]] = []
        self._order = itertools.count()
        link_count = len(network.links)
        self._busy_till = [0] * link_count
        self._link_bits = [0] * link_count
        self._processed = 0
        self._max_time = 0
        self._sent = 0
        self._delivered = 0
        self._dropped = 0
        self._bits_delivered = 0
        self._delivery_time = 0

    def _push(self, time: int, event: _Event) -> None:
        heapq.heappush(self._queue, (time, next(self._order), event))

    def add_flow(self, source: int, destination: int, time: int = 0) -> None:
        """Schedule a package from ``source`` to ``destination`` at ``time``."""
        size = len(self.network)
        if not (0 <= source < size and 0 <= destination < size):
            raise ValueError(f"flow {source}->{destination} leaves the network")
        self._push(time, _FlowStart(source, destination))

    def _send(self, time: int, package: Package, current: int) -> None:
        hop = self.routing.next_hop(current, package)
        if hop is None:
            self._dropped += 1
            return
        link_id = self.network.find_link_id(current, hop)
        if link_id is None:
            raise RuntimeError(f"routing chose {current}->{hop}, which has no link")
        transmission = package.size // self.bandwidth
        send_time = max(time, self._busy_till[link_id])
        self._busy_till[link_id] = send_time + transmission
        arrival = send_time + transmission + self.network.delays[link_id]
        self._link_bits[link_id] += package.size
        moved = replace(package, visited=package.visited | {hop})
        self._push(arrival, _Arrival(hop, moved))

    def _process(self, time: int, event: _Event) -> None:
        if isinstance(event, _FlowStart):
            package = Package(
                event.source,
                event.destination,
                self.time_to_live,
                self.package_size,
                time,
                frozenset({event.source}),
            )
            self._sent += 1
            self._send(time, package, event.source)
            return
        package = replace(event.package, time_to_live=event.package.time_to_live - 1)
        if event.node == package.destination:
            self._delivered += 1
            self._bits_delivered += package.size
            self._delivery_time += time - package.created_at
        elif package.time_to_live <= 0:
            self._dropped += 1
        else:
            self._send(time, package, event.node)

    def run(self, max_events: int = DEFAULT_MAX_EVENTS) -> SimulationStats:
        """Handle events in time order until none remain or ``max_events`` is hit."""
        if max_events < 0:
            raise ValueError("max_events must not be negative")
        handled = 0
        while self._queue and handled < max_events:
            time, _, event = heapq.heappop(self._queue)
            self._max_time = max(self._max_time, time)
            self._process(time, event)
            handled += 1
            self._processed += 1
        return SimulationStats(
            processed=self._processed,
            max_time=self._max_time,
            sent=self._sent,
            delivered=self._delivered,
            dropped=self._dropped,
            bits_delivered=self._bits_delivered,
            total_delivery_time=self._delivery_time,
            links=self.network.links,
            link_busy_till=tuple(self._busy_till),
            link_bits=tuple(self._link_bits),
            bandwidth=self.bandwidth,
        )


def random_flows(
    servers: int, switches: int, rng: Optional[random.Random] = None
) -> list[tuple[int, int, int]]:
    """One ``(source, destination, 0)`` flow per server, to another random server.

    Switches occupy nodes ``0..switches-1`` and servers the nodes after them.
    """
    if servers < 2:
        raise ValueError("need at least two servers")
    rng = rng or random.Random()
    low, high = switches, switches + servers - 1
    flows = []
    for source in range(low, high + 1):
        target = randint(rng, low, high)
        while target == source:
            target = randint(rng, low, high)
        flows.append((source, target, 0))
    return flows


def _report(stats: SimulationStats, duration_ms: int) -> str:
    lines = [
        f"Simulation completed in {duration_ms} ms:",
        f"Processed {stats.processed} events",
        f"Simulation ran for {stats.max_time} time units",
        f"Packages sent: {stats.sent}",
        f"Packages delivered: {stats.delivered}",
        f"Packages dropped: {stats.dropped}",
        f"Delivery rate: {stats.delivery_rate:g}%",
        f"Average delivery time: {stats.average_delivery_time:g} time units",
        f"Total throughput: {stats.throughput:g} bits/time unit",
        f"Network utilization: {stats.utilization:g}%",
        "",
        "Top 5 busiest links:",
    ]
    for link_id, (u, v), bits in stats.busiest_links(5):
        rate = bits / stats.max_time if stats.max_time else 0.0
        lines.append(
            f"Link {link_id} ({u} - {v}): {bits} bits, "
            f"{rate:g} bits/time unit throughput"
        )
    return "\n".join(lines) + "\n"


_MODE_DEFAULTS = {
    "shortest": (200, 12, 6, 900),
    "random": (720, 26, 18, 4500),
    "ksp": (125, 10, 7, 250),
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build a topology, route random flows across it and print statistics."""
    parser = argparse.ArgumentParser(description="Simulate packages in a network.")
    parser.add_argument("--routing", choices=tuple(_MODE_DEFAULTS), default="random")
    parser.add_argument("--fattree", type=int, default=None, metavar="K")
    parser.add_argument("--switches", type=int, default=None)
    parser.add_argument("--ports", type=int, default=None)
    parser.add_argument("--used-ports", type=int, default=None)
    parser.add_argument("--servers", type=int, default=None)
    parser.add_argument("--k-paths", type=int, default=3)
    parser.add_argument("--failure-percent", type=int, default=0)
    parser.add_argument("--max-events", type=int, default=DEFAULT_MAX_EVENTS)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    print("Generating topology...")
    if args.fattree is not None:
        k = args.fattree
        graph = fat_tree(k)
        if not graph:
            parser.error("fat tree arity must be even and positive")
        switches, servers = 5 * k * k // 4, k * k * k // 4
    else:
        d_sw, d_ports, d_used, d_srv = _MODE_DEFAULTS[args.routing]
        switches = args.switches if args.switches is not None else d_sw
        ports = args.ports if args.ports is not None else d_ports
        used = args.used_ports if args.used_ports is not None else d_used
        servers = args.servers if args.servers is not None else d_srv
        try:
            graph = jellyfish(switches, ports, used, servers, rng)
        except (ValueError, RuntimeError) as exc:
            parser.error(str(exc))

    if not is_connected(graph):
        print("Generated graph is not connected", file=sys.stderr)
        return 1

    if args.routing == "shortest":
        network = Network(graph)
    else:
        try:
            network = Network.from_adjacency(
                graph, rng, failure_percent=args.failure_percent
            )
        except ValueError as exc:
            parser.error(str(exc))

    start = _time.perf_counter()
    routing: _Router
    if args.routing == "shortest":
        print("Using per-package shortest path routing...")
        routing = ShortestPathRouting(network)
    elif args.routing == "random":
        print("Computing simple routing table...")
        routing = RandomNextHopRouting(network, rng)
    else:
        print(f"Computing K={args.k_paths} shortest paths routing table...")
        routing = KShortestRouting(network, args.k_paths, rng)
    elapsed = int((_time.perf_counter() - start) * 1000)
    print(f"Preprocessing completed in {elapsed} ms")

    print("\nStart simulation...")
    simulator = Simulator(network, routing)
    for source, destination, when in random_flows(servers, switches, rng):
        simulator.add_flow(source, destination, when)
    start = _time.perf_counter()
    stats = simulator.run(args.max_events)
    elapsed = int((_time.perf_counter() - start) * 1000)
    print(_report(stats, elapsed), end="")
    print("Done", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())