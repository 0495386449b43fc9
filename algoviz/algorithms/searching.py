"""
searching.py — Array Searches
==============================
Generator-based linear, binary, jump, exponential, interpolation and
fibonacci search.

Every generator yields one Step per probed index and finishes with exactly
one terminal step:

    probe(i, low, high)   – value at i is compared with the target
    jump(i, low, high)    – block / exponent boundary probe
    found(i)              – values[i] == target
    not-found             – target absent

All but linear search expect `values` sorted ascending; sorting is the
caller's job.  None of them ever indexes outside the array, and an empty
array ends straight away with not-found.
"""

import math
from typing import Generator, Sequence

from algoviz.algorithms.step import Step, StepBuilder


def linear_search(values: Sequence[int], target: int) -> Generator[Step, None, None]:
    sb = StepBuilder()
    for i, value in enumerate(values):
        yield sb.probe(i, explanation=f"Checking index {i}, value: {value}")
        if value == target:
            yield sb.found(i)
            return
    yield sb.not_found()


def binary_search(values: Sequence[int], target: int) -> Generator[Step, None, None]:
    sb = StepBuilder()
    index = yield from _binary_search_range(values, target, 0, len(values) - 1, sb)
    if index is None:
        yield sb.not_found()
    else:
        yield sb.found(index)


def _binary_search_range(values, target, low, high, sb: StepBuilder):
    """Shared by binary and exponential search.  Returns the found index or None."""
    while low <= high:
        mid = (low + high) // 2
        yield sb.probe(mid, low, high, f"Checking index {mid} (low = {low}, high = {high}), value: {values[mid]}")
        if values[mid] == target:
            return mid
        if values[mid] < target:
            low = mid + 1
        else:
            high = mid - 1
    return None


def jump_search(values: Sequence[int], target: int) -> Generator[Step, None, None]:
    """
    Jump ahead √n at a time until a block's last element reaches the
    target, then scan that block linearly.  Jumps are clamped to the last
    index, and running off the end means not-found.
    """
    sb = StepBuilder()
    n  = len(values)
    if n == 0:
        yield sb.not_found()
        return

    step = max(1, math.isqrt(n))
    low  = 0
    high = min(step, n) - 1
    yield sb.jump(high, low, high, f"Jumped to index {high}, value: {values[high]}")

    while values[high] < target:
        low = high + 1
        if low >= n:
            yield sb.not_found(f"Reached the end of the array; every value is below {target}.")
            return
        high = min(high + step, n - 1)
        yield sb.jump(high, low, high, f"Jumped to index {high}, value: {values[high]}")

    for i in range(low, high + 1):
        yield sb.probe(i, low, high, f"Scanning block [{low}..{high}]: index {i}, value: {values[i]}")
        if values[i] == target:
            yield sb.found(i)
            return
        if values[i] > target:
            break
    yield sb.not_found()


def exponential_search(values: Sequence[int], target: int) -> Generator[Step, None, None]:
    """Double the bound until it passes the target, then binary-search [bound/2, bound]."""
    sb = StepBuilder()
    n  = len(values)
    if n == 0:
        yield sb.not_found()
        return

    yield sb.probe(0, 0, n - 1, f"Checking index 0, value: {values[0]}")
    if values[0] == target:
        yield sb.found(0)
        return

    bound = 1
    while bound < n and values[bound] <= target:
        yield sb.jump(bound, bound // 2, bound, f"Jumping to index {bound}, value: {values[bound]}")
        bound *= 2

    low, high = bound // 2, min(bound, n - 1)
    index = yield from _binary_search_range(values, target, low, high, sb)
    if index is None:
        yield sb.not_found()
    else:
        yield sb.found(index)


def interpolation_search(values: Sequence[int], target: int) -> Generator[Step, None, None]:
    """
    Estimate the position from the target's place in the value range.

    When values[low] == values[high] the range has zero width and the
    estimate would divide by zero.  Inside the loop that can only happen
    when every value in [low, high] equals the target, so it is reported
    as found at `low`.
    """
    sb   = StepBuilder()
    low  = 0
    high = len(values) - 1

    while low <= high and values[low] <= target <= values[high]:
        if values[high] == values[low]:
            yield sb.probe(low, low, high, f"Values in [{low}..{high}] are all {values[low]}; checking index {low}")
            yield sb.found(low)
            return

        pos = low + (target - values[low]) * (high - low) // (values[high] - values[low])
        pos = int(pos)
        yield sb.probe(pos, low, high, f"Checking index {pos} (low = {low}, high = {high}), value: {values[pos]}")

        if values[pos] == target:
            yield sb.found(pos)
            return
        if values[pos] < target:
            low = pos + 1
        else:
            high = pos - 1

    yield sb.not_found()


def fibonacci_search(values: Sequence[int], target: int) -> Generator[Step, None, None]:
    """
    Split the array at Fibonacci offsets.

    fib_m is the smallest Fibonacci number >= n; fib_m1 and fib_m2 are its
    two predecessors.  Each probe discards the part that cannot hold the
    target and steps the triple down one or two places.
    """
    sb = StepBuilder()
    n  = len(values)
    if n == 0:
        yield sb.not_found()
        return

    fib_m2, fib_m1 = 0, 1
    fib_m = fib_m2 + fib_m1
    while fib_m < n:
        fib_m2, fib_m1 = fib_m1, fib_m
        fib_m = fib_m2 + fib_m1

    offset = -1
    while fib_m > 1:
        i = min(offset + fib_m2, n - 1)
        yield sb.probe(
            i, offset + 1, n - 1,
            f"Checking index {i} (offset = {offset}, fibMMm2 = {fib_m2}), value: {values[i]}",
        )
        if values[i] < target:
            fib_m  = fib_m1
            fib_m1 = fib_m2
            fib_m2 = fib_m - fib_m1
            offset = i
        elif values[i] > target:
            fib_m  = fib_m2
            fib_m1 = fib_m1 - fib_m2
            fib_m2 = fib_m - fib_m1
        else:
            yield sb.found(i)
            return

    last = offset + 1
    if fib_m1 and last < n:
        yield sb.probe(last, last, last, f"Checking last candidate index {last}, value: {values[last]}")
        if values[last] == target:
            yield sb.found(last)
            return
    yield sb.not_found()
