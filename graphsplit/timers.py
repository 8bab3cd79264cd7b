"""Accumulating CPU timers for the phases of a multilevel run."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

TIMER_NAMES = (
    "total",
    "initpart",
    "match",
    "contract",
    "coarsen",
    "uncoarsen",
    "ref",
    "project",
    "split",
    "aux1",
    "aux2",
    "aux3",
)

_REPORT_LINES = (
    ("Multilevel: \t\t", "total"),
    ("    Coarsening: \t\t", "coarsen"),
    ("           Matching: \t\t\t", "match"),
    ("           Contract: \t\t\t", "contract"),
    ("    Initial Partition: \t", "initpart"),
    ("    Uncoarsening: \t\t", "uncoarsen"),
    ("         Refinement: \t\t\t", "ref"),
    ("         Projection: \t\t\t", "project"),
    ("    Splitting: \t\t", "split"),
)


class Timers:
    """A named set of timers; each one adds up the time spent in its phase."""

    def __init__(self, clock: Callable[[], float] = time.process_time) -> None:
        self._clock = clock
        self._elapsed: dict[str, float] = dict.fromkeys(TIMER_NAMES, 0.0)

    def clear(self) -> None:
        """Set every timer back to zero."""
        for name in self._elapsed:
            self._elapsed[name] = 0.0

    def _check(self, name: str) -> None:
        if name not in self._elapsed:
            raise KeyError(f"unknown timer {name!r}")

    @contextmanager
    def timing(self, name: str) -> Iterator[None]:
        """Add the time spent inside the ``with`` block to timer ``name``."""
        self._check(name)
        start = self._clock()
        try:
            yield
        finally:
            self._elapsed[name] += self._clock() - start

    def elapsed(self, name: str) -> float:
        """Seconds accumulated by timer ``name``."""
        self._check(name)
        return self._elapsed[name]

    def report(self) -> str:
        """The timing summary as printed after a run."""
        parts = [
            "\nTiming Information -------------------------------------------------"
        ]
        for label, name in _REPORT_LINES:
            parts.append(f"\n {label} {self._elapsed[name]:7.3f}")
        parts.append(
            "\n********************************************************************\n"
        )
        return "".join(parts)