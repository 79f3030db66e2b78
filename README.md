# routelab

A toolkit for experimenting with data-centre style networks: topology
generators (Jellyfish, fat-tree, random graphs), shortest and k-shortest path
routing, and a discrete-event simulator that pushes packages through a
bandwidth-limited network and reports delivery, latency and link utilisation.

It also bundles a collection of classic algorithm solutions (backtracking,
dynamic programming, sparse tables, histogram rectangles and more).

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Command-line tools

### `routelab-simulate`

Builds a topology, precomputes routing, starts one flow per server towards
another random server and prints delivery, throughput and utilisation
statistics together with the five busiest links.

Options:

- `--routing {shortest,random,ksp}` (default `random`): per-package
  fewest-hop routing, a random choice among equal-cost next hops, or
  k-shortest paths with loop avoidance.
- `--fattree K`: use a k-ary fat tree instead of a Jellyfish topology.
- `--switches`, `--ports`, `--used-ports`, `--servers`: Jellyfish parameters;
  the defaults depend on `--routing`.
- `--k-paths` (default 3): number of paths for `ksp` routing.
- `--failure-percent` (default 0): chance in percent that a link is dropped
  (not applied with `shortest` routing).
- `--max-events` (default 100000): stop after this many events.
- `--seed`: seed for the random generator.

### `routelab-paths`

Creates packets between random routers of a fixed ten-node topology at times
0, 1, 2, 4, 5 and 6, moves each one hop per time step along its fewest-hop
path and prints what happens at each tick. Options: `--max-time` (default 30)
and `--seed`.

## Library overview

### Topologies: `routelab.topology`

```python
import random
from routelab.topology import fat_tree, is_connected, jellyfish

rng = random.Random(1)
g = jellyfish(20, 6, 4, 30, rng)   # 20 switches, 6 ports, 4 used switch-to-switch, 30 servers
print(is_connected(g))
tree = fat_tree(4)
```

`randint`, `regular_graph`, `random_graph` and the `Edge` record are also
available.

### Paths: `routelab.ksp`

`adjacency_from_links`, `dijkstra`, `path_cost`, `yen_k_shortest_paths` and
`all_pairs_k_shortest_paths` work on weighted adjacency lists and return
`Path` objects (`nodes`, `cost`).

### Simulation: `routelab.network`, `routelab.routing`, `routelab.simulator`

```python
import random
from routelab.network import Network
from routelab.routing import RandomNextHopRouting
from routelab.simulator import Simulator, random_flows
from routelab.topology import jellyfish

rng = random.Random(7)
adjacency = jellyfish(20, 6, 4, 30, rng)
network = Network.from_adjacency(adjacency, rng, 1, 10, 0)
sim = Simulator(network, RandomNextHopRouting(network, rng), 1000, 1, 20)
for source, destination, when in random_flows(30, 20, rng):
    sim.add_flow(source, destination, when)
stats = sim.run(100_000)
print(stats.delivery_rate, stats.busiest_links(5))
```

`Network` numbers the links and offers `find_link_id`, `neighbours`,
`shortest_path` and `routing_tables`. Routing strategies are
`ShortestPathRouting`, `RandomNextHopRouting` and `KShortestRouting`.
`SimulationStats` carries the counters and the derived `delivery_rate`,
`average_delivery_time`, `throughput` and `utilization`.

### Other modules

- `routelab.pathsim`: `shortest_hop_path`, `simulate_paths` and the
  `TrackedPacket` record.
- `routelab.analysis`: `random_degree_graph`, `all_pairs_distances`,
  `distance_fractions`, `expected_distinct_draws`.

### Algorithms: `routelab.algorithms`, `routelab.backtracking`

```python
from routelab.algorithms import SparseTable, count_inversions, spiral_value

table = SparseTable([5, 2, 8, 1])
assert table.query(0, 2) == 2
assert count_inversions([3, 1, 2], 10**9 + 7) == 2
assert spiral_value(2, 3) == 8
```

Also: `max_disjoint_segments`, `gold_mining`, `largest_histogram_rectangle`,
`largest_black_subrectangle`, `maze_escape_steps`, `count_nurse_schedules`,
`warehouse_max_value`, `beautiful_permutation`, `range_minimum_sum`,
`balanced_course_load`, `bus_route_cost` and `count_positive_solutions`.

## What the package does not do

- There is no flooding simulator: packets cannot be broadcast hop by hop over
  a random router graph with a per-tick timeline of every copy sent.
- There is no block-and-bridge routing scheme on grid graphs with random
  shortcuts; routing is limited to the strategies in `routelab.routing`.