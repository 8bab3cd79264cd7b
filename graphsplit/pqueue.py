"""An addressable max-priority queue keyed by node id."""

from __future__ import annotations

from collections.abc import Hashable


class MaxPriorityQueue:
    """A binary max-heap whose entries can be found, re-keyed and removed by node.

    Equal keys keep the order in which the heap operations leave them; no
    entry moves past another with the same key.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, Hashable]] = []
        self._loc: dict[Hashable, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def __contains__(self, node: object) -> bool:
        return node in self._loc

    def _place(self, i: int, key: float, node: Hashable) -> None:
        self._heap[i] = (key, node)
        self._loc[node] = i

    def _sift_up(self, i: int, key: float, node: Hashable) -> None:
        heap = self._heap
        while i > 0:
            j = (i - 1) >> 1
            if heap[j][0] < key:
                self._place(i, *heap[j])
                i = j
            else:
                break
        self._place(i, key, node)

    def _sift_down(self, i: int, key: float, node: Hashable) -> None:
        heap = self._heap
        n = len(heap)
        while (j := 2 * i + 1) < n:
            if key < heap[j][0]:
                if j + 1 < n and heap[j][0] < heap[j + 1][0]:
                    j += 1
            elif j + 1 < n and key < heap[j + 1][0]:
                j += 1
            else:
                break
            self._place(i, *heap[j])
            i = j
        self._place(i, key, node)

    def insert(self, node: Hashable, key: float) -> None:
        """Add ``node`` with priority ``key``."""
        if node in self._loc:
            raise ValueError(f"node {node!r} is already in the queue")
        self._heap.append((key, node))
        self._sift_up(len(self._heap) - 1, key, node)

    def delete(self, node: Hashable) -> None:
        """Remove ``node`` from the queue."""
        try:
            i = self._loc.pop(node)
        except KeyError:
            raise KeyError(node) from None
        last_key, last_node = self._heap.pop()
        if i < len(self._heap):
            if self._heap[i][0] < last_key:
                self._sift_up(i, last_key, last_node)
            else:
                self._sift_down(i, last_key, last_node)

    def update(self, node: Hashable, key: float) -> None:
        """Change the priority of ``node`` to ``key``."""
        try:
            i = self._loc[node]
        except KeyError:
            raise KeyError(node) from None
        if self._heap[i][0] < key:
            self._sift_up(i, key, node)
        else:
            self._sift_down(i, key, node)

    def get_top(self) -> Hashable | None:
        """Remove and return the node with the largest key, or None if empty."""
        if not self._heap:
            return None
        top = self._heap[0][1]
        del self._loc[top]
        last = self._heap.pop()
        if self._heap:
            self._sift_down(0, *last)
        return top

    def see_top_val(self) -> Hashable | None:
        """The node with the largest key, or None if empty."""
        return self._heap[0][1] if self._heap else None

    def see_top_key(self) -> float | None:
        """The largest key, or None if empty."""
        return self._heap[0][0] if self._heap else None

    def reset(self) -> None:
        """Remove every entry."""
        self._heap.clear()
        self._loc.clear()