"""Run parameters shared by the command-line programs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PType(str, Enum):
    """Partitioning scheme."""

    RB = "rb"
    KWAY = "kway"


class ObjType(str, Enum):
    """Partitioning objective."""

    CUT = "cut"
    VOL = "vol"
    NODE = "node"


class CType(str, Enum):
    """Matching scheme used during coarsening."""

    RM = "rm"
    SHEM = "shem"


class IPType(str, Enum):
    """Initial partitioning scheme."""

    GROW = "grow"
    RANDOM = "random"
    EDGE = "edge"
    NODE = "node"
    METISRB = "metisrb"


class RType(str, Enum):
    """Refinement scheme."""

    FM = "fm"
    GREEDY = "greedy"
    SEP2SIDED = "2sided"
    SEP1SIDED = "1sided"


class GType(str, Enum):
    """Kind of graph derived from a mesh."""

    DUAL = "dual"
    NODAL = "nodal"


KWAY_DEFAULT_UFACTOR = 30
RB_DEFAULT_UFACTOR = 1
ND_DEFAULT_UFACTOR = 200


class UsageError(Exception):
    """Raised when command-line arguments are invalid."""


def i2rubfactor(ufactor: int) -> float:
    """Convert an integer imbalance tolerance into a load-imbalance ratio."""
    return 1.0 + 0.001 * ufactor


@dataclass
class Params:
    """Options collected from the command line of one of the programs."""

    ptype: PType | None = None
    objtype: ObjType | None = None
    ctype: CType | None = None
    iptype: IPType | None = None
    rtype: RType | None = None

    no2hop: bool = False
    minconn: bool = False
    contig: bool = False
    ondisk: bool = False
    dropedges: bool = False
    nooutput: bool = False
    balance: bool = False

    ncuts: int = 1
    niter: int = 10
    niparts: int = -1

    gtype: GType | None = None
    ncommon: int = 1

    seed: int = -1
    dbglvl: int = 0

    nparts: int = 1

    nseps: int = 1
    ufactor: int = -1
    pfactor: int = 0
    compress: bool = True
    ccorder: bool = False

    filename: str | None = None
    outfile: str | None = None
    xyzfile: str | None = None
    tpwgtsfile: str | None = None
    ubvecstr: str | None = None

    wgtflag: int = 0
    numflag: int = 0
    tpwgts: list[float] | None = None
    ubvec: list[float] | None = None

    iotimer: float = 0.0
    parttimer: float = 0.0
    reporttimer: float = 0.0

    maxmemory: int = 0