"""Index helpers, random permutations and balance statistics."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Hashable, Iterable, Iterator, Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from graphsplit.graph import Graph

_rng = random.Random(4321)


class IndexedList:
    """A set of items with O(1) insert, delete and positional access.

    Deleting an item moves the last item into its slot, so positions are
    stable only until the next deletion.
    """

    def __init__(self, items: Iterable[Hashable] = ()) -> None:
        self._items: list[Hashable] = []
        self._pos: dict[Hashable, int] = {}
        for item in items:
            self.insert(item)

    def insert(self, item: Hashable) -> None:
        if item in self._pos:
            raise ValueError(f"{item!r} is already in the list")
        self._pos[item] = len(self._items)
        self._items.append(item)

    def delete(self, item: Hashable) -> None:
        try:
            pos = self._pos.pop(item)
        except KeyError:
            raise ValueError(f"{item!r} is not in the list") from None
        last = self._items.pop()
        if pos < len(self._items):
            self._items[pos] = last
            self._pos[last] = pos

    def clear(self) -> None:
        self._items.clear()
        self._pos.clear()

    def __contains__(self, item: object) -> bool:
        return item in self._pos

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._items))

    def __getitem__(self, pos: int) -> Hashable:
        return self._items[pos]


def init_random(seed: int) -> None:
    """Seed the package's random generator; -1 selects the default seed."""
    _rng.seed(4321 if seed == -1 else seed)


def random_permutation(n: int) -> list[int]:
    """Return a random permutation of ``range(n)``."""
    perm = list(range(n))
    _rng.shuffle(perm)
    return perm


def _first_max(values: Sequence[float]) -> int:
    if not values:
        raise ValueError("argmax of an empty sequence")
    best = 0
    for i, value in enumerate(values):
        if value > values[best]:
            best = i
    return best


def _second_max(values: Sequence[float]) -> int:
    if len(values) < 2:
        raise ValueError("need at least two values")
    max1, max2 = (0, 1) if values[0] > values[1] else (1, 0)
    for i in range(2, len(values)):
        if values[i] > values[max1]:
            max1, max2 = i, max1
        elif values[i] > values[max2]:
            max2 = i
    return max2


def argmax_nrm(x: Sequence[float], y: Sequence[float]) -> int:
    """Index of the largest ``x[i]*y[i]``; the first one on ties."""
    return _first_max([a * b for a, b in zip(x, y)])


def argmax_strided(x: Sequence[float], incx: int) -> int:
    """Index, in units of ``incx``, of the largest of ``x[0], x[incx], ...``."""
    if incx < 1:
        raise ValueError("stride must be positive")
    return _first_max(x[::incx])


def argmax2(x: Sequence[float]) -> int:
    """Index of the second largest element."""
    return _second_max(x)


def argmax2_nrm(x: Sequence[float], y: Sequence[float]) -> int:
    """Index of the second largest ``x[i]*y[i]``."""
    return _second_max([a * b for a, b in zip(x, y)])


def partition_balance(graph: Graph, nparts: int, where: Sequence[int]) -> list[float]:
    """Load imbalance of a partitioning, one value per constraint."""
    parts = where[: graph.nvtxs]
    if graph.vwgt is None:
        counts = [0] * nparts
        for p in parts:
            counts[p] += 1
        return [nparts * max(counts) / graph.nvtxs]

    ncon = graph.ncon
    balance = []
    for j in range(ncon):
        kpwgts = [0] * nparts
        for v, p in enumerate(parts):
            kpwgts[p] += graph.vwgt[v * ncon + j]
        balance.append(nparts * max(kpwgts) / sum(kpwgts))
    return balance


def element_balance(nparts: int, where: Sequence[int]) -> float:
    """Load imbalance of an element partitioning with unit weights."""
    counts = Counter(where)
    for p in counts:
        if not 0 <= p < nparts:
            raise ValueError(f"partition {p} is out of range [0, {nparts})")
    return nparts * max(counts.values()) / len(where)