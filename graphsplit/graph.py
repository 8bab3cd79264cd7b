"""Graph and mesh containers in compressed sparse row form."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Graph:
    """An undirected graph stored as CSR adjacency lists.

    ``nedges`` counts adjacency entries, so every undirected edge is
    counted twice. ``vwgt`` holds ``ncon`` weights per vertex, row-major.
    The trailing fields carry the state of a node-based bisection and the
    links between levels of a coarsening hierarchy.
    """

    nvtxs: int = 0
    nedges: int = 0
    ncon: int = 1
    xadj: list[int] = field(default_factory=lambda: [0])
    adjncy: list[int] = field(default_factory=list)
    vwgt: list[int] | None = None
    vsize: list[int] | None = None
    adjwgt: list[int] | None = None
    tvwgt: list[int] = field(default_factory=list)

    where: list[int] | None = None
    pwgts: list[int] | None = None
    bndptr: list[int] | None = None
    bndind: list[int] | None = None
    nrinfo: list[list[int]] | None = None
    mincut: int = 0
    nbnd: int = 0

    cmap: list[int] | None = None
    coarser: Graph | None = field(default=None, repr=False)
    finer: Graph | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.tvwgt:
            if self.vwgt is None:
                self.tvwgt = [self.nvtxs] * self.ncon
            else:
                self.tvwgt = [
                    sum(self.vwgt[j :: self.ncon]) for j in range(self.ncon)
                ]

    def _check(self, v: int) -> None:
        if not 0 <= v < self.nvtxs:
            raise IndexError(f"vertex {v} is out of range [0, {self.nvtxs})")

    def degree(self, v: int) -> int:
        """Number of adjacency entries of vertex ``v``."""
        self._check(v)
        return self.xadj[v + 1] - self.xadj[v]

    def neighbors(self, v: int) -> list[int]:
        """The vertices adjacent to ``v``, in storage order."""
        self._check(v)
        return self.adjncy[self.xadj[v] : self.xadj[v + 1]]


@dataclass
class Mesh:
    """A finite-element mesh: element ``e`` holds nodes ``eind[eptr[e]:eptr[e+1]]``."""

    ne: int = 0
    nn: int = 0
    ncon: int = 1
    eptr: list[int] = field(default_factory=lambda: [0])
    eind: list[int] = field(default_factory=list)
    ewgt: list[int] | None = None