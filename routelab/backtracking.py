"""Exhaustive searches with branch-and-bound pruning."""

from __future__ import annotations

import math
from functools import lru_cache
from itertools import accumulate
from typing import Iterable, Optional, Sequence


def balanced_course_load(
    num_teachers: int,
    num_courses: int,
    preferences: Sequence[Iterable[int]],
    conflicts: Iterable[tuple[int, int]],
) -> Optional[int]:
    """Smallest achievable maximum number of courses given to one teacher.

    Teachers and courses are numbered from 1; ``preferences[i]`` lists the
    courses teacher ``i + 1`` is willing to teach. Two conflicting courses
    may not go to the same teacher. Returns None when no assignment exists.
    """
    if num_teachers < 0 or num_courses < 0:
        raise ValueError("counts must not be negative")
    prefs = [set(p) for p in preferences]
    if len(prefs) != num_teachers:
        raise ValueError("one preference list is needed per teacher")
    if num_courses == 0:
        return 0

    clash: dict[int, set[int]] = {}
    for first, second in conflicts:
        clash.setdefault(first, set()).add(second)
        clash.setdefault(second, set()).add(first)

    assigned: dict[int, int] = {}
    load = [0] * (num_teachers + 1)
    best = math.inf

    def can_teach(teacher: int, course: int) -> bool:
        if course not in prefs[teacher - 1]:
            return False
        return all(
            assigned.get(other) != teacher
            for other in clash.get(course, ())
            if other < course
        )

    def search(course: int) -> None:
        nonlocal best
        for teacher in range(1, num_teachers + 1):
            if not can_teach(teacher, course):
                continue
            assigned[course] = teacher
            load[teacher] += 1
            if course == num_courses:
                best = min(best, max(load))
            elif load[teacher] < best:
                search(course + 1)
            load[teacher] -= 1

    search(1)
    return None if best == math.inf else int(best)


def bus_route_cost(
    num_passengers: int, capacity: int, cost: Sequence[Sequence[int]]
) -> Optional[int]:
    """Cheapest closed bus tour picking up and dropping off every passenger.

    Point 0 is the depot, points ``1..n`` are pick-ups and ``n+1..2n`` the
    matching drop-offs. At most ``capacity`` passengers ride at once.
    Returns None when no tour is possible.
    """
    n = num_passengers
    size = 2 * n + 1
    matrix = [list(row) for row in cost]
    if len(matrix) != size or any(len(row) != size for row in matrix):
        raise ValueError(f"cost must be a {size}x{size} matrix")

    cheapest = min(
        (matrix[i][j] for i in range(size) for j in range(size) if i != j),
        default=0,
    )
    visited = [False] * size
    best = math.inf

    def search(step: int, previous: int, dist: int, load: int) -> None:
        nonlocal best
        for stop in range(1, size):
            if visited[stop]:
                continue
            if stop > n:
                if not visited[stop - n]:
                    continue
            elif load >= capacity:
                continue
            visited[stop] = True
            travelled = dist + matrix[previous][stop]
            new_load = load + 1 if stop <= n else load - 1
            if step == 2 * n:
                best = min(best, travelled + matrix[stop][0])
            elif travelled + cheapest * (2 * n - step) < best:
                search(step + 1, stop, travelled, new_load)
            visited[stop] = False

    search(1, 0, 0, 0)
    return None if best == math.inf else int(best)


def count_positive_solutions(coefficients: Iterable[int], total: int) -> int:
    """Number of positive integer solutions of ``sum(a_i * x_i) == total``."""
    coeffs = tuple(coefficients)
    if any(c <= 0 for c in coeffs):
        raise ValueError("coefficients must be positive")
    if not coeffs:
        return 1 if total == 0 else 0

    # tails[k]: least amount the variables after k can still take.
    tails = list(accumulate(reversed(coeffs[1:])))[::-1] + [0]
    last = len(coeffs) - 1

    @lru_cache(maxsize=None)
    def count(k: int, remaining: int) -> int:
        coefficient = coeffs[k]
        if k == last:
            return int(remaining >= coefficient and remaining % coefficient == 0)
        upper = (remaining - tails[k]) // coefficient
        return sum(
            count(k + 1, remaining - coefficient * x) for x in range(1, upper + 1)
        )

    return count(0, total)