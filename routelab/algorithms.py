"""Classic greedy, dynamic-programming and search algorithms."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Optional, Sequence

DEFAULT_MODULUS = 10**9 + 7


class SparseTable:
    """Range-minimum queries in constant time after O(n log n) preparation."""

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        size = len(self._values)
        vals = self._values
        self._levels: list[list[int]] = [list(range(size))]
        width = 1
        while 2 * width <= size:
            prev = self._levels[-1]
            self._levels.append(
                [
                    prev[i] if vals[prev[i]] < vals[prev[i + width]] else prev[i + width]
                    for i in range(size - 2 * width + 1)
                ]
            )
            width *= 2

    def __len__(self) -> int:
        return len(self._values)

    def query(self, left: int, right: int) -> int:
        """Minimum of the values from ``left`` to ``right`` inclusive."""
        if not 0 <= left <= right < len(self._values):
            raise IndexError(f"invalid range [{left}, {right}]")
        k = (right - left + 1).bit_length() - 1
        level = self._levels[k]
        first = self._values[level[left]]
        second = self._values[level[right - (1 << k) + 1]]
        return min(first, second)


def range_minimum_sum(
    values: Iterable[int], queries: Iterable[tuple[int, int]]
) -> int:
    """Sum of the range minima for every inclusive ``(left, right)`` query."""
    table = SparseTable(values)
    return sum(table.query(left, right) for left, right in queries)


def max_disjoint_segments(segments: Iterable[tuple[int, int]]) -> int:
    """Largest number of segments with no shared points (greedy by end)."""
    count = 0
    last: Optional[int] = None
    for start, end in sorted(segments, key=lambda seg: seg[1]):
        if last is None or start > last:
            last = end
            count += 1
    return count


def gold_mining(values: Sequence[int], min_gap: int, max_gap: int) -> int:
    """Best total from picking warehouses whose gaps lie in [min_gap, max_gap]."""
    best_ending = [0] * (len(values) + 1)
    window: deque[int] = deque()
    answer = 0
    for i, value in enumerate(values, start=1):
        while window and window[0] < i - max_gap:
            window.popleft()
        j = i - min_gap
        if j >= 1:
            while window and best_ending[window[-1]] < best_ending[j]:
                window.pop()
            window.append(j)
        best_ending[i] = value + (best_ending[window[0]] if window else 0)
        answer = max(answer, best_ending[i])
    return answer


def count_inversions(values: Iterable[int], modulus: int = DEFAULT_MODULUS) -> int:
    """Number of pairs ``i < j`` with ``values[i] > values[j]``, modulo ``modulus``."""
    if modulus <= 0:
        raise ValueError("modulus must be positive")

    def sort(seq: list[int]) -> tuple[list[int], int]:
        if len(seq) <= 1:
            return seq, 0
        mid = (len(seq) + 1) // 2
        left, left_count = sort(seq[:mid])
        right, right_count = sort(seq[mid:])
        merged: list[int] = []
        count = left_count + right_count
        i = j = 0
        while i < len(left) and j < len(right):
            if left[i] <= right[j]:
                merged.append(left[i])
                i += 1
            else:
                merged.append(right[j])
                j += 1
                count += len(left) - i
        merged.extend(left[i:])
        merged.extend(right[j:])
        return merged, count

    return sort(list(values))[1] % modulus


def largest_histogram_rectangle(heights: Iterable[int]) -> int:
    """Area of the largest rectangle under a histogram."""
    bars = [*heights, 0]
    stack: list[int] = []
    best = 0
    for i, height in enumerate(bars):
        while stack and bars[stack[-1]] > height:
            top = bars[stack.pop()]
            width = i - stack[-1] - 1 if stack else i
            best = max(best, top * width)
        stack.append(i)
    return best


def largest_black_subrectangle(grid: Iterable[Sequence[int]]) -> int:
    """Area of the largest all-nonzero rectangle in a 0/1 grid."""
    heights: Optional[list[int]] = None
    best = 0
    for row in grid:
        if heights is None:
            heights = [0] * len(row)
        elif len(row) != len(heights):
            raise ValueError("grid rows must have equal length")
        heights = [h + 1 if cell else 0 for h, cell in zip(heights, row)]
        best = max(best, largest_histogram_rectangle(heights))
    return best


def maze_escape_steps(
    grid: Sequence[Sequence[int]], start: tuple[int, int]
) -> Optional[int]:
    """Cells visited on the shortest walk from ``start`` to the maze border.

    Cells holding 0 are open, anything else is a wall. The start cell counts
    as the first step. Returns None when the border cannot be reached.
    """
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    row, col = start
    if not (0 <= row < rows and 0 <= col < cols):
        raise IndexError(f"start {start} lies outside the maze")

    dist = {start: 1}
    queue = deque([start])
    while queue:
        row, col = queue.popleft()
        if row in (0, rows - 1) or col in (0, cols - 1):
            return dist[(row, col)]
        for dr, dc in ((1, 0), (0, 1), (-1, 0), (0, -1)):
            nxt = (row + dr, col + dc)
            if grid[nxt[0]][nxt[1]] == 0 and nxt not in dist:
                dist[nxt] = dist[(row, col)] + 1
                queue.append(nxt)
    return None


def spiral_value(row: int, col: int) -> int:
    """Number at 1-based ``(row, col)`` of the infinite number spiral."""
    if row < 1 or col < 1:
        raise ValueError("row and column are numbered from 1")
    y, x = row - 1, col - 1
    if y >= x:
        return y * y + x + 1 if y % 2 == 0 else (y + 1) * (y + 1) - x
    return (x + 1) * (x + 1) - y if x % 2 == 0 else x * x + y + 1


def count_nurse_schedules(days: int, min_run: int, max_run: int) -> int:
    """Work/rest schedules whose working runs last min_run..max_run days."""
    if days < 0:
        raise ValueError("days must not be negative")
    if min_run < 1 or max_run < min_run:
        raise ValueError("need 1 <= min_run <= max_run")
    size = max(days, min_run) + 1
    rest = [0] * size
    work = [0] * size
    rest[0] = rest[1] = 1
    work[min_run] = 1
    for i in range(min_run + 1, days + 1):
        rest[i] = work[i - 1]
        work[i] += sum(rest[i - j] for j in range(min_run, min(max_run, i) + 1))
    return rest[days] + work[days]


def warehouse_max_value(
    amounts: Sequence[int], times: Sequence[int], max_time: int, max_gap: int
) -> int:
    """Best total amount collected within ``max_time`` with gaps up to ``max_gap``."""
    if len(amounts) != len(times):
        raise ValueError("amounts and times must have the same length")
    if any(t < 0 for t in times):
        raise ValueError("times must not be negative")
    n = len(amounts)
    if n == 0:
        return 0

    table = [[0] * (max_time + 1) for _ in range(n + 1)]
    best = amounts[0]
    if times[0] <= max_time:
        table[1][times[0]] = amounts[0]

    for i, (amount, needed) in enumerate(zip(amounts, times), start=1):
        current = table[i]
        for k in range(1, max_time + 1):
            if k < needed:
                current[k] = 0
                continue
            prev = k - needed
            current[k] = max(
                current[k],
                *(table[i - j][prev] + amount for j in range(1, min(max_gap, i) + 1)),
            )
            best = max(best, current[k])
    return best


def beautiful_permutation(n: int) -> list[int]:
    """Permutation of 1..n with no two neighbours differing by one."""
    if n == 1:
        return [1]
    if n in (2, 3):
        raise ValueError("NO SOLUTION")
    return [*range(2, n + 1, 2), *range(1, n + 1, 2)]