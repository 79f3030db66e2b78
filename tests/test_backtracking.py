import math

import pytest

from routelab.backtracking import (
    balanced_course_load,
    bus_route_cost,
    count_positive_solutions,
)


def _cost_matrix(size):
    return [
        [0 if i == j else (i * 7 + j * 3) % 11 + 1 for j in range(size)]
        for i in range(size)
    ]


def _route_cost(cost, stops):
    tour = [0, *stops, 0]
    return sum(cost[a][b] for a, b in zip(tour, tour[1:]))


def test_single_teacher_takes_every_course():
    courses = 4
    assert balanced_course_load(1, courses, [range(1, courses + 1)], []) == courses


def test_each_teacher_owns_one_course():
    assert balanced_course_load(3, 3, [[1], [2], [3]], []) == 1


def test_interchangeable_teachers_share_evenly():
    teachers, courses = 3, 7
    prefs = [range(1, courses + 1)] * teachers
    result = balanced_course_load(teachers, courses, prefs, [])
    assert result == math.ceil(courses / teachers)


def test_conflict_makes_assignment_impossible():
    assert balanced_course_load(2, 2, [[1, 2], []], [(1, 2)]) is None


def test_without_conflict_same_teacher_takes_both():
    courses = 2
    assert balanced_course_load(2, courses, [[1, 2], []], []) == courses


def test_unwanted_course_has_no_assignment():
    assert balanced_course_load(2, 3, [[1], [2]], []) is None


def test_preference_count_must_match_teachers():
    with pytest.raises(ValueError):
        balanced_course_load(3, 2, [[1], [2]], [])


def test_single_passenger_route():
    cost = _cost_matrix(3)
    assert bus_route_cost(1, 1, cost) == _route_cost(cost, [1, 2])


def test_capacity_one_forces_immediate_drop_off():
    cost = _cost_matrix(5)
    expected = min(_route_cost(cost, [1, 3, 2, 4]), _route_cost(cost, [2, 4, 1, 3]))
    assert bus_route_cost(2, 1, cost) == expected


def test_more_capacity_never_costs_more():
    cost = _cost_matrix(7)
    tight = bus_route_cost(3, 1, cost)
    loose = bus_route_cost(3, 3, cost)
    assert loose <= tight


def test_zero_capacity_has_no_route():
    assert bus_route_cost(1, 0, _cost_matrix(3)) is None


def test_bus_rejects_wrong_matrix_size():
    with pytest.raises(ValueError):
        bus_route_cost(2, 1, _cost_matrix(3))


@pytest.mark.parametrize("total", [2, 5, 9])
def test_two_unit_coefficients(total):
    assert count_positive_solutions([1, 1], total) == total - 1


@pytest.mark.parametrize("total", [3, 6, 10])
def test_three_unit_coefficients_match_stars_and_bars(total):
    assert count_positive_solutions([1, 1, 1], total) == math.comb(total - 1, 2)


def test_single_coefficient_divisibility():
    assert count_positive_solutions([3], 12) == 1
    assert count_positive_solutions([3], 13) == 0


def test_order_of_coefficients_does_not_matter():
    assert count_positive_solutions([1, 2, 3], 20) == count_positive_solutions(
        [3, 1, 2], 20
    )


def test_total_below_minimum_sum():
    coefficients = [2, 5, 4]
    assert count_positive_solutions(coefficients, sum(coefficients) - 1) == 0


def test_nonpositive_coefficient_rejected():
    with pytest.raises(ValueError):
        count_positive_solutions([1, 0], 5)