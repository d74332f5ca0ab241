# src/algorithms/search_algorithms.py
from typing import Sequence, Tuple


def binary_search(sequence: Sequence[str], item: str) -> Tuple[int, int]:
    """
    Binary search over a sorted sequence.

    Returns:
        found_index (or -1 if not found),
        insertion_index (position where the item should go)
    """
    start_index = 0
    end_index = len(sequence) - 1

    while start_index <= end_index:
        mid = (start_index + end_index) // 2
        value = sequence[mid]

        if value == item:
            # if found, insertion index is same as mid
            return mid, mid
        elif value < item:
            start_index = mid + 1  # search right half
        else:
            end_index = mid - 1    # search left half

    # not found: insertion point is start_index
    return -1, start_index
