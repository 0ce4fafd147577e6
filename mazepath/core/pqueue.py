# mazepath/core/pqueue.py
#!/usr/bin/env python3
"""
Binary min-heap ordered by a live comparator.

heapq orders by the stored tuple, so a key computed at push time is frozen
into the entry. Here nothing is stored but the item: ``less(a, b)`` is called
on every comparison and may read state that changes while the item sits in
the queue (the search reads its distance map). Duplicates are allowed; the
caller skips stale ones at pop time.

If live keys of queued items drop, call ``reheapify()`` before the next pop.
"""

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")


class Empty(Exception):
    """Raised by pop() on an empty queue."""


class PriorityQueue(Generic[T]):
    def __init__(self, less: Callable[[T, T], bool]):
        self._less = less
        self._items: List[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def push(self, item: T) -> None:
        self._items.append(item)
        self._sift_up(len(self._items) - 1)

    def pop(self) -> T:
        items = self._items
        if not items:
            raise Empty()
        last = items.pop()
        if not items:
            return last
        top = items[0]
        items[0] = last
        self._sift_down(0)
        return top

    def reheapify(self) -> None:
        for i in reversed(range(len(self._items) // 2)):
            self._sift_down(i)

    # -------------------- heap internals --------------------

    def _sift_up(self, i: int) -> None:
        items, less = self._items, self._less
        while i > 0:
            parent = (i - 1) // 2
            if not less(items[i], items[parent]):
                break
            items[i], items[parent] = items[parent], items[i]
            i = parent

    def _sift_down(self, i: int) -> None:
        items, less = self._items, self._less
        n = len(items)
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            child = left
            right = left + 1
            if right < n and less(items[right], items[left]):
                child = right
            if not less(items[child], items[i]):
                break
            items[i], items[child] = items[child], items[i]
            i = child

    def __repr__(self) -> str:
        return f"PriorityQueue({self._items!r})"
