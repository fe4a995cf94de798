from __future__ import annotations

from typing import Callable


def next_turn_index(current: int, count: int, is_out: Callable[[int], bool]) -> int:
    """Next seat after ``current`` that is still in the rotation.

    Walks the table once; if nobody else is left the pointer stays put.
    """
    if count <= 0:
        return current
    idx = current
    for _ in range(count):
        idx = (idx + 1) % count
        if idx == current:
            break
        if not is_out(idx):
            return idx
    return current
