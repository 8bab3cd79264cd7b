"""Setting up and projecting node-based bisections (vertex separators).

A node bisection assigns every vertex to side 0, side 1 or the separator
(side 2). For each separator vertex ``nrinfo[v]`` holds the total weight of
its neighbours on side 0 and on side 1.
"""

from __future__ import annotations

from graphsplit.graph import Graph

SEPARATOR = 2


def _vertex_weights(graph: Graph) -> list[int]:
    return graph.vwgt if graph.vwgt is not None else [1] * graph.nvtxs


def _bnd_insert(graph: Graph, v: int) -> None:
    """Add ``v`` to the boundary (separator) list of ``graph``."""
    if graph.bndptr[v] != -1:
        raise ValueError(f"vertex {v} is already on the boundary")
    graph.bndind[graph.nbnd] = v
    graph.bndptr[v] = graph.nbnd
    graph.nbnd += 1


def _bnd_delete(graph: Graph, v: int) -> None:
    """Remove ``v`` from the boundary list, filling its slot with the last entry."""
    pos = graph.bndptr[v]
    if pos == -1:
        raise ValueError(f"vertex {v} is not on the boundary")
    graph.nbnd -= 1
    last = graph.bndind[graph.nbnd]
    graph.bndind[pos] = last
    graph.bndptr[last] = pos
    graph.bndptr[v] = -1


def allocate_node_partition(graph: Graph) -> None:
    """Give ``graph`` fresh arrays for holding a node bisection."""
    nvtxs = graph.nvtxs
    graph.pwgts = [0, 0, 0]
    graph.where = [0] * nvtxs
    graph.bndptr = [-1] * nvtxs
    graph.bndind = [0] * nvtxs
    graph.nrinfo = [[0, 0] for _ in range(nvtxs)]


def compute_node_partition_params(graph: Graph) -> None:
    """Compute side weights, the separator list and separator edegrees."""
    if graph.where is None:
        raise ValueError("graph has no partition to analyse")
    nvtxs = graph.nvtxs
    if graph.pwgts is None:
        graph.pwgts = [0, 0, 0]
    if graph.bndptr is None:
        graph.bndptr = [-1] * nvtxs
    if graph.bndind is None:
        graph.bndind = [0] * nvtxs
    if graph.nrinfo is None:
        graph.nrinfo = [[0, 0] for _ in range(nvtxs)]

    xadj, adjncy = graph.xadj, graph.adjncy
    vwgt = _vertex_weights(graph)
    where = graph.where
    pwgts = graph.pwgts
    pwgts[:] = [0, 0, 0]
    graph.bndptr[:] = [-1] * nvtxs
    graph.nbnd = 0

    for i in range(nvtxs):
        me = where[i]
        if not 0 <= me <= SEPARATOR:
            raise ValueError(f"vertex {i} has invalid side {me}")
        pwgts[me] += vwgt[i]

        if me == SEPARATOR:
            _bnd_insert(graph, i)
            edegrees = graph.nrinfo[i]
            edegrees[0] = edegrees[1] = 0
            for j in range(xadj[i], xadj[i + 1]):
                nbr = adjncy[j]
                other = where[nbr]
                if other != SEPARATOR:
                    edegrees[other] += vwgt[nbr]

    graph.mincut = pwgts[SEPARATOR]


def project_node_partition(graph: Graph) -> None:
    """Carry the bisection of ``graph.coarser`` down to ``graph`` through ``cmap``."""
    cgraph = graph.coarser
    if cgraph is None or cgraph.where is None:
        raise ValueError("graph has no partitioned coarser graph")
    if graph.cmap is None:
        raise ValueError("graph has no coarse-vertex map")

    cwhere = cgraph.where
    allocate_node_partition(graph)
    where = graph.where
    for i, c in enumerate(graph.cmap[: graph.nvtxs]):
        side = cwhere[c]
        if not 0 <= side <= SEPARATOR:
            raise ValueError(f"coarse vertex {c} has invalid side {side}")
        where[i] = side

    graph.coarser = None
    compute_node_partition_params(graph)