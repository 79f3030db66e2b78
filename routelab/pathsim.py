"""Step-by-step movement of packets along precomputed fewest-hop paths."""

from __future__ import annotations

import argparse
import heapq
import random
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

Graph = Sequence[Sequence[int]]

DEFAULT_TOPOLOGY: tuple[tuple[int, ...], ...] = (
    (1, 2),
    (0, 3),
    (0, 3, 4),
    (1, 2, 5),
    (2, 5, 6),
    (3, 4, 7),
    (4, 7),
    (5, 6, 8, 9),
    (7,),
    (7,),
)
DEFAULT_GENERATION_TIMES = (0, 1, 2, 4, 5, 6)
DEFAULT_MAX_TIME = 30


@dataclass
class TrackedPacket:
    """A packet that moves one hop along its path per time step."""

    id: int
    source: int
    destination: int
    generated_at: int
    path: list[int] = field(default_factory=list)
    path_index: int = 0
    arrived: bool = False

    @property
    def current(self) -> int:
        """Node the packet currently sits at."""
        return self.path[self.path_index] if self.path else self.source


def shortest_hop_path(graph: Graph, source: int, destination: int) -> list[int]:
    """Fewest-hop path from ``source`` to ``destination``; empty if unreachable."""
    dist = {source: 0}
    prev: dict[int, int] = {}
    heap = [(0, source)]
    while heap:
        d, u = heapq.heappop(heap)
        if u == destination:
            break
        for v in graph[u]:
            if d + 1 < dist.get(v, d + 2):
                dist[v] = d + 1
                prev[v] = u
                heapq.heappush(heap, (d + 1, v))

    path = [destination]
    while path[-1] in prev:
        path.append(prev[path[-1]])
    path.reverse()
    return path if path[0] == source else []


def simulate_paths(
    graph: Graph,
    generation_times: Iterable[int] = DEFAULT_GENERATION_TIMES,
    max_time: int = DEFAULT_MAX_TIME,
    rng: Optional[random.Random] = None,
) -> tuple[list[TrackedPacket], list[str]]:
    """Generate packets between random routers and move them hop by hop.

    At each time listed in ``generation_times`` a packet with a random
    source and a different random destination is created; packets without a
    path are discarded but still use up an id. Returns the routed packets and
    the log lines in the order they occurred.
    """
    size = len(graph)
    if size < 2:
        raise ValueError("need at least two routers")
    rng = rng or random.Random()
    times = list(generation_times)
    packets: list[TrackedPacket] = []
    log: list[str] = []
    next_id = 0

    for time in range(max_time + 1):
        for generated in times:
            if generated != time:
                continue
            source = rng.randrange(size)
            destination = rng.randrange(size)
            while destination == source:
                destination = rng.randrange(size)
            packet = TrackedPacket(next_id, source, destination, time)
            next_id += 1
            packet.path = shortest_hop_path(graph, source, destination)
            if packet.path:
                packets.append(packet)
                log.append(f"Time {time}: [P{packet.id} generated at R{source}]")

        events: list[str] = []
        for packet in packets:
            if packet.arrived or packet.path_index + 1 >= len(packet.path):
                continue
            origin = packet.path[packet.path_index]
            target = packet.path[packet.path_index + 1]
            events.append(f"[P{packet.id} {origin}→{target} sending]")
            packet.path_index += 1
            if target == packet.destination:
                events.append(f"[P{packet.id} arrived at R{packet.destination}]")
                packet.arrived = True
        if events:
            log.append(f"Time {time}: " + " ".join(events))
    return packets, log


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the path simulation on the built-in topology and print the log."""
    parser = argparse.ArgumentParser(description="Move packets along shortest paths.")
    parser.add_argument("--max-time", type=int, default=DEFAULT_MAX_TIME)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    _, log = simulate_paths(
        DEFAULT_TOPOLOGY,
        DEFAULT_GENERATION_TIMES,
        args.max_time,
        random.Random(args.seed),
    )
    for line in log:
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())