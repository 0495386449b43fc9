"""
sorting.py — Comparison Sorts
==============================
Generator-based bubble, selection, insertion and merge sort.

Each generator works on its OWN copy of the input and yields a Step for
every comparison and every write, in the exact order the textbook
algorithm performs them:

    compare(i, j)     – two positions are being compared
    swap(i, j)        – the two positions exchange values
    overwrite(i, v)   – position i now holds v (insertion shift, merge write)
    mark-sorted(i)    – position i holds its final value
    done              – array fully sorted

Replaying the swap / overwrite steps over the original input therefore
reproduces the sorted array, and counting compare steps gives the
algorithm's true comparison count.
"""

from typing import Generator, List, Sequence

from algoviz.algorithms.step import Step, StepBuilder


def bubble_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """Adjacent compare-and-swap passes; each pass bubbles the largest remaining value to the end."""
    arr = list(values)
    n   = len(arr)
    sb  = StepBuilder()

    for i in range(n):
        for j in range(n - i - 1):
            yield sb.compare(j, j + 1, f"Comparing index {j} ({arr[j]}) with index {j + 1} ({arr[j + 1]})")
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                yield sb.swap(j, j + 1, f"{arr[j + 1]} > {arr[j]}: swap indices {j} and {j + 1}")
        yield sb.mark_sorted(n - i - 1, explanation=f"Index {n - i - 1} now holds its final value {arr[n - i - 1]}")

    yield sb.done("Bubble Sort complete.")


def selection_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """Find the minimum of the unsorted suffix, then swap it into place."""
    arr = list(values)
    n   = len(arr)
    sb  = StepBuilder()

    for i in range(n):
        min_idx = i
        for j in range(i + 1, n):
            yield sb.compare(min_idx, j, f"Current minimum {arr[min_idx]} (index {min_idx}) vs {arr[j]} (index {j})")
            if arr[j] < arr[min_idx]:
                min_idx = j
        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            yield sb.swap(i, min_idx, f"Move minimum {arr[i]} from index {min_idx} to index {i}")
        yield sb.mark_sorted(i, explanation=f"Index {i} now holds its final value {arr[i]}")

    yield sb.done("Selection Sort complete.")


def insertion_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """
    Take each element as the key, shift larger elements of the sorted
    prefix one place right, then drop the key into the gap.

    A compare step is emitted for every evaluation of `a[j] > key`,
    including the one that ends the shifting.
    """
    arr = list(values)
    n   = len(arr)
    sb  = StepBuilder()

    for i in range(1, n):
        key = arr[i]
        j   = i - 1
        while j >= 0:
            yield sb.compare(j, j + 1, f"Is {arr[j]} (index {j}) greater than key {key}?")
            if arr[j] <= key:
                break
            arr[j + 1] = arr[j]
            yield sb.overwrite(j + 1, arr[j], f"Shift {arr[j]} from index {j} to index {j + 1}")
            j -= 1
        arr[j + 1] = key
        yield sb.overwrite(j + 1, key, f"Insert key {key} at index {j + 1}")

    yield sb.done("Insertion Sort complete.")


def merge_sort(values: Sequence[int]) -> Generator[Step, None, None]:
    """Top-down merge sort over index ranges; ties take the left element so the sort is stable."""
    arr = list(values)
    sb  = StepBuilder()
    yield from _merge_sort(arr, 0, len(arr), sb)
    yield sb.done("Merge Sort complete.")


def _merge_sort(arr: List[int], lo: int, hi: int, sb: StepBuilder) -> Generator[Step, None, None]:
    if hi - lo <= 1:
        return
    mid = (lo + hi) // 2
    yield from _merge_sort(arr, lo, mid, sb)
    yield from _merge_sort(arr, mid, hi, sb)

    left, right = arr[lo:mid], arr[mid:hi]
    merged: List[int] = []
    i = j = 0
    # both runs stay in place while they are compared
    while i < len(left) and j < len(right):
        yield sb.compare(lo + i, mid + j, f"Merging [{lo}..{hi - 1}]: compare {left[i]} with {right[j]}")
        if left[i] <= right[j]:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])

    for k, value in enumerate(merged, lo):
        arr[k] = value
        yield sb.overwrite(k, value, f"Write {value} to index {k}")
