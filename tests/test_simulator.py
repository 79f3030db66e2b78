import random

import pytest

from routelab.network import Network
from routelab.routing import KShortestRouting, RandomNextHopRouting, ShortestPathRouting
from routelab.simulator import (
    DEFAULT_TTL,
    PACKAGE_SIZE,
    Package,
    SimulationStats,
    Simulator,
    main,
    random_flows,
)

LINE = [[1], [0, 2], [1]]


def line_network(delays=(2, 3)):
    return Network(LINE, list(delays))


def test_single_flow_is_delivered():
    network = line_network()
    sim = Simulator(network, ShortestPathRouting(network))
    sim.add_flow(0, 2, 0)
    stats = sim.run()
    assert stats.sent == 1
    assert stats.delivered == 1
    assert stats.dropped == 0
    assert stats.processed == 3
    assert stats.bits_delivered == PACKAGE_SIZE
    assert stats.link_bits == (PACKAGE_SIZE, PACKAGE_SIZE)
    assert stats.total_delivery_time == stats.max_time
    assert stats.delivery_rate == 100.0


def test_arrival_time_includes_transmission_and_delay():
    network = line_network((2, 3))
    sim = Simulator(network, ShortestPathRouting(network), package_size=10)
    sim.add_flow(0, 2, 0)
    stats = sim.run()
    assert stats.max_time == 10 + 2 + 10 + 3
    assert stats.link_busy_till == (10, 10 + 2 + 10)


def test_time_to_live_expires():
    network = line_network()
    sim = Simulator(network, ShortestPathRouting(network), time_to_live=1)
    sim.add_flow(0, 2, 0)
    stats = sim.run()
    assert stats.sent == 1
    assert stats.delivered == 0
    assert stats.dropped == 1


def test_unreachable_destination_is_dropped():
    network = Network([[], []])
    sim = Simulator(network, ShortestPathRouting(network))
    sim.add_flow(0, 1, 0)
    stats = sim.run()
    assert stats.dropped == 1
    assert stats.delivered == 0
    assert stats.processed == 1


def test_link_queueing_serialises_packages():
    network = Network([[1], [0]], [0])
    size = 50
    sim = Simulator(network, ShortestPathRouting(network), package_size=size)
    sim.add_flow(0, 1, 0)
    sim.add_flow(0, 1, 0)
    stats = sim.run()
    assert stats.delivered == 2
    assert stats.link_busy_till == (2 * size,)
    assert stats.max_time == 2 * size


def test_max_events_limits_processing():
    network = line_network()
    sim = Simulator(network, ShortestPathRouting(network))
    sim.add_flow(0, 2, 0)
    stats = sim.run(max_events=1)
    assert stats.processed == 1
    assert stats.delivered == 0
    later = sim.run()
    assert later.processed == 3
    assert later.delivered == 1


def test_busiest_links_orders_by_bits():
    network = line_network()
    sim = Simulator(network, ShortestPathRouting(network))
    sim.add_flow(1, 2, 0)
    sim.add_flow(1, 2, 0)
    sim.add_flow(0, 1, 0)
    stats = sim.run()
    ranked = stats.busiest_links(5)
    assert [link_id for link_id, _, _ in ranked] == [1, 0]
    assert ranked[0][1] == (1, 2)
    assert ranked[0][2] == 2 * PACKAGE_SIZE
    assert stats.busiest_links(1) == ranked[:1]


def test_busiest_links_rejects_negative_count():
    stats = SimulationStats(0, 0, 0, 0, 0, 0, 0, (), (), ())
    with pytest.raises(ValueError):
        stats.busiest_links(-1)


def test_empty_stats_rates_are_zero():
    stats = SimulationStats(0, 0, 0, 0, 0, 0, 0, (), (), ())
    assert stats.delivery_rate == 0.0
    assert stats.throughput == 0.0
    assert stats.utilization == 0.0
    assert stats.average_delivery_time == 0.0


def test_random_next_hop_routing_delivers():
    ring = [[1, 3], [0, 2], [1, 3], [2, 0]]
    network = Network(ring, [1, 1, 1, 1])
    routing = RandomNextHopRouting(network, random.Random(3))
    sim = Simulator(network, routing)
    sim.add_flow(0, 2, 0)
    sim.add_flow(1, 3, 0)
    stats = sim.run()
    assert stats.delivered == 2
    assert stats.sent == stats.delivered + stats.dropped


def test_add_flow_rejects_unknown_nodes():
    network = line_network()
    sim = Simulator(network, ShortestPathRouting(network))
    with pytest.raises(ValueError):
        sim.add_flow(0, 7, 0)


@pytest.mark.parametrize("kwargs", [{"bandwidth": 0}, {"package_size": -1}])
def test_invalid_parameters(kwargs):
    network = line_network()
    with pytest.raises(ValueError):
        Simulator(network, ShortestPathRouting(network), **kwargs)


def test_run_rejects_negative_limit():
    network = line_network()
    sim = Simulator(network, ShortestPathRouting(network))
    with pytest.raises(ValueError):
        sim.run(-1)


def test_package_defaults():
    package = Package(0, 1, DEFAULT_TTL, PACKAGE_SIZE, 0)
    assert package.visited == frozenset()
    assert package.time_to_live == 20


def test_random_flows_stay_among_servers():
    flows = random_flows(6, 4, random.Random(5))
    assert [source for source, _, _ in flows] == list(range(4, 10))
    for source, target, when in flows:
        assert 4 <= target < 10
        assert target != source
        assert when == 0


def test_random_flows_needs_two_servers():
    with pytest.raises(ValueError):
        random_flows(1, 3)


def test_main_on_fat_tree(capsys):
    assert main(["--fattree", "4", "--seed", "2"]) == 0
    out = capsys.readouterr().out
    assert "Packages sent: 16" in out
    assert "Top 5 busiest links:" in out


def test_main_rejects_odd_fat_tree():
    with pytest.raises(SystemExit):
        main(["--fattree", "3"])