"""Run control state and the neighbour-pool workspace used by refinement."""

from __future__ import annotations

from dataclasses import dataclass, field

from graphsplit.params import ObjType, RType


@dataclass
class _CutNeighbor:
    pid: int = -1
    ed: int = 0


@dataclass
class _VolNeighbor:
    pid: int = -1
    ned: int = 0
    gv: int = 0


@dataclass
class Control:
    """Settings of a partitioning run and its refinement workspace."""

    nparts: int = 2
    objtype: ObjType = ObjType.CUT
    rtype: RType | None = None
    minconn: bool = False
    compress: bool = False
    niter: int = 10
    dbglvl: int = 0
    ubfactors: list[float] = field(default_factory=lambda: [1.0])

    nbrpoolsize_max: int = 0
    nbrpoolsize: int = 0
    nbrpoolcpos: int = 0
    nbrpoolreallocs: int = 0
    cnbrpool: list[_CutNeighbor] | None = None
    vnbrpool: list[_VolNeighbor] | None = None

    pvec1: list[int] | None = None
    pvec2: list[int] | None = None
    nads: list[int] | None = None
    adids: list[list[int]] | None = None
    adwgts: list[list[int]] | None = None

    def allocate_refinement_workspace(self, nbrpoolsize_max: int, nbrpoolsize: int) -> None:
        """Set up the neighbour pool and, for minconn, the subdomain graph."""
        self.nbrpoolsize_max = nbrpoolsize_max
        self.nbrpoolsize = nbrpoolsize
        self.nbrpoolcpos = 0
        self.nbrpoolreallocs = 0

        if self.objtype == ObjType.CUT:
            self.cnbrpool = [_CutNeighbor() for _ in range(nbrpoolsize)]
        elif self.objtype == ObjType.VOL:
            self.vnbrpool = [_VolNeighbor() for _ in range(nbrpoolsize)]
        else:
            raise ValueError(f"unknown objtype {self.objtype!r}")

        if self.minconn:
            self.pvec1 = [0] * (self.nparts + 1)
            self.pvec2 = [0] * (self.nparts + 1)
            self.nads = [0] * self.nparts
            self.adids = [[] for _ in range(self.nparts)]
            self.adwgts = [[] for _ in range(self.nparts)]

    def free_workspace(self) -> None:
        """Release the neighbour pools and subdomain-graph arrays."""
        self.cnbrpool = None
        self.vnbrpool = None
        self.nbrpoolsize_max = 0
        self.nbrpoolsize = 0
        self.nbrpoolcpos = 0
        if self.minconn:
            self.pvec1 = self.pvec2 = self.nads = None
            self.adids = self.adwgts = None

    def nbrpool_reset(self) -> None:
        """Start handing out pool slots from the beginning again."""
        self.nbrpoolcpos = 0

    def nbrpool_get_next(self, nnbrs: int) -> int:
        """Reserve room for ``nnbrs`` neighbours and return its start offset."""
        if self.cnbrpool is not None:
            pool, make = self.cnbrpool, _CutNeighbor
        elif self.vnbrpool is not None:
            pool, make = self.vnbrpool, _VolNeighbor
        else:
            raise RuntimeError("refinement workspace is not allocated")

        nnbrs = min(self.nparts, nnbrs)
        self.nbrpoolcpos += nnbrs

        if self.nbrpoolcpos > self.nbrpoolsize:
            self.nbrpoolsize += max(10 * nnbrs, self.nbrpoolsize // 2)
            self.nbrpoolsize = min(self.nbrpoolsize, self.nbrpoolsize_max)
            if self.nbrpoolsize > len(pool):
                pool.extend(make() for _ in range(self.nbrpoolsize - len(pool)))
            else:
                del pool[self.nbrpoolsize :]
            self.nbrpoolreallocs += 1

        return self.nbrpoolcpos - nnbrs