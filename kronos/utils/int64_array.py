from __future__ import annotations

from typing import Iterable, Protocol

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Sortable(Protocol):
    def __len__(self) -> int: ...

    def swap(self, i: int, j: int) -> None: ...

    def less(self, i: int, j: int) -> bool: ...


def _check_int64(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Int64Array values must be int, got {type(value).__name__}")

    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"{value} is outside the signed 64-bit integer range")

    return value


class Int64Array(list):
    """
    A list of signed 64-bit integers that satisfies the Sortable protocol.
    """

    def __init__(self, values: Iterable[int] = ()):
        super().__init__(_check_int64(value) for value in values)

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            value = [_check_int64(item) for item in value]

        else:
            value = _check_int64(value)

        super().__setitem__(index, value)

    def append(self, value: int) -> None:
        super().append(_check_int64(value))

    def insert(self, index: int, value: int) -> None:
        super().insert(index, _check_int64(value))

    def extend(self, values: Iterable[int]) -> None:
        super().extend(_check_int64(value) for value in values)

    def swap(self, i: int, j: int) -> None:
        self[i], self[j] = self[j], self[i]

    def less(self, i: int, j: int) -> bool:
        return self[i] < self[j]

    def __iadd__(self, values: Iterable[int]):
        self.extend(values)
        return self


def _sift_down(data: Sortable, root: int, end: int) -> None:
    while True:
        child = 2 * root + 1
        if child >= end:
            return

        if child + 1 < end and data.less(child, child + 1):
            child += 1

        if not data.less(root, child):
            return

        data.swap(root, child)
        root = child


def sort_in_place(data: Sortable) -> None:
    """
    Heap sort driven only by len(), swap() and less(). Not stable.
    """
    size = len(data)

    for root in range(size // 2 - 1, -1, -1):
        _sift_down(data, root, size)

    for end in range(size - 1, 0, -1):
        data.swap(0, end)
        _sift_down(data, 0, end)
