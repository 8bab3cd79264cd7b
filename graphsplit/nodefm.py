"""FM refinement of vertex-separator bisections and the uncoarsening driver."""

from __future__ import annotations

from graphsplit.control import Control
from graphsplit.graph import Graph
from graphsplit.nodebalance import node_balance
from graphsplit.nodepart import (
    SEPARATOR,
    _bnd_delete,
    _bnd_insert,
    _vertex_weights,
    compute_node_partition_params,
    project_node_partition,
)
from graphsplit.params import RType
from graphsplit.pqueue import MaxPriorityQueue
from graphsplit.util import random_permutation


def _adjacent(graph: Graph, v: int) -> list[int]:
    return graph.adjncy[graph.xadj[v] : graph.xadj[v + 1]]


def _roll_back(
    graph: Graph,
    vwgt: list[int],
    swaps: list[int],
    pulled: list[list[int]],
    mincutorder: int,
) -> None:
    """Undo every move made after position ``mincutorder``, newest first."""
    where, pwgts, rinfo = graph.where, graph.pwgts, graph.nrinfo
    for step in range(len(swaps) - 1, mincutorder, -1):
        higain = swaps[step]
        to = where[higain]
        other = 1 - to

        pwgts[SEPARATOR] += vwgt[higain]
        pwgts[to] -= vwgt[higain]
        where[higain] = SEPARATOR
        _bnd_insert(graph, higain)

        edegrees = rinfo[higain]
        edegrees[0] = edegrees[1] = 0
        for k in _adjacent(graph, higain):
            if where[k] == SEPARATOR:
                rinfo[k][to] -= vwgt[higain]
            else:
                edegrees[where[k]] += vwgt[k]

        # Push the vertices this move pulled in back out of the separator.
        for k in pulled[step]:
            where[k] = other
            pwgts[other] += vwgt[k]
            pwgts[SEPARATOR] -= vwgt[k]
            _bnd_delete(graph, k)
            for kk in _adjacent(graph, k):
                if where[kk] == SEPARATOR:
                    rinfo[kk][other] += vwgt[k]


def node_refine_2sided(ctrl: Control, graph: Graph, niter: int) -> None:
    """Node-based FM refinement that may move separator vertices to either side."""
    nvtxs = graph.nvtxs
    xadj = graph.xadj
    vwgt = _vertex_weights(graph)
    where, pwgts, rinfo = graph.where, graph.pwgts, graph.nrinfo

    queues = (MaxPriorityQueue(), MaxPriorityQueue())
    mult = 0.5 * ctrl.ubfactors[0]
    badmaxpwgt = int(mult * (pwgts[0] + pwgts[1] + pwgts[2]))

    for npass in range(niter):
        moved = [-1] * nvtxs
        for queue in queues:
            queue.reset()

        mincutorder = -1
        initcut = mincut = graph.mincut
        nbnd = graph.nbnd

        for pos in random_permutation(nbnd):
            i = graph.bndind[pos]
            queues[0].insert(i, vwgt[i] - rinfo[i][1])
            queues[1].insert(i, vwgt[i] - rinfo[i][0])

        limit = min(5 * nbnd, 400) if ctrl.compress else min(2 * nbnd, 300)

        swaps: list[int] = []
        pulled: list[list[int]] = []
        nmind = 0
        mindiff = abs(pwgts[0] - pwgts[1])
        to = 0 if pwgts[0] < pwgts[1] else 1

        while len(swaps) < nvtxs:
            nswaps = len(swaps)
            u0 = queues[0].see_top_val()
            u1 = queues[1].see_top_val()
            if u0 is not None and u1 is not None:
                g0 = vwgt[u0] - rinfo[u0][1]
                g1 = vwgt[u1] - rinfo[u1][0]
                to = 0 if g0 > g1 else (1 if g0 < g1 else npass % 2)
                top = u0 if to == 0 else u1
                if pwgts[to] + vwgt[top] > badmaxpwgt:
                    to = 1 - to
            elif u0 is None and u1 is None:
                break
            elif u0 is not None and pwgts[0] + vwgt[u0] <= badmaxpwgt:
                to = 0
            elif u1 is not None and pwgts[1] + vwgt[u1] <= badmaxpwgt:
                to = 1
            else:
                break

            other = 1 - to
            higain = queues[to].get_top()
            if moved[higain] == -1:
                queues[other].delete(higain)

            if nmind + xadj[higain + 1] - xadj[higain] >= 2 * nvtxs - 1:
                break

            gain = vwgt[higain] - rinfo[higain][other]
            pwgts[SEPARATOR] -= gain

            newdiff = abs(
                pwgts[to] + vwgt[higain] - (pwgts[other] - rinfo[higain][other])
            )
            if pwgts[SEPARATOR] < mincut or (
                pwgts[SEPARATOR] == mincut and newdiff < mindiff
            ):
                mincut = pwgts[SEPARATOR]
                mincutorder = nswaps
                mindiff = newdiff
            elif nswaps - mincutorder > 2 * limit or (
                nswaps - mincutorder > limit and pwgts[SEPARATOR] > 1.10 * mincut
            ):
                pwgts[SEPARATOR] += gain
                break

            _bnd_delete(graph, higain)
            pwgts[to] += vwgt[higain]
            where[higain] = to
            moved[higain] = nswaps
            swaps.append(higain)

            step: list[int] = []
            for k in _adjacent(graph, higain):
                if where[k] == SEPARATOR:
                    oldgain = vwgt[k] - rinfo[k][to]
                    rinfo[k][to] += vwgt[higain]
                    if moved[k] == -1 or moved[k] == -(2 + other):
                        queues[other].update(k, oldgain - vwgt[higain])
                elif where[k] == other:
                    _bnd_insert(graph, k)
                    step.append(k)
                    nmind += 1
                    where[k] = SEPARATOR
                    pwgts[other] -= vwgt[k]

                    edegrees = rinfo[k]
                    edegrees[0] = edegrees[1] = 0
                    for kk in _adjacent(graph, k):
                        if where[kk] != SEPARATOR:
                            edegrees[where[kk]] += vwgt[kk]
                        else:
                            oldgain = vwgt[kk] - rinfo[kk][other]
                            rinfo[kk][other] -= vwgt[k]
                            if moved[kk] == -1 or moved[kk] == -(2 + to):
                                queues[to].update(kk, oldgain + vwgt[k])

                    # A newly pulled-in vertex may only move back toward 'to'.
                    if moved[k] == -1:
                        queues[to].insert(k, vwgt[k] - edegrees[other])
                        moved[k] = -(2 + to)
            pulled.append(step)

        _roll_back(graph, vwgt, swaps, pulled, mincutorder)
        graph.mincut = mincut

        if mincutorder == -1 or mincut >= initcut:
            break


def node_refine_1sided(ctrl: Control, graph: Graph, niter: int) -> None:
    """Node-based FM refinement alternating passes that move toward one side only."""
    nvtxs = graph.nvtxs
    xadj = graph.xadj
    vwgt = _vertex_weights(graph)
    where, pwgts, rinfo = graph.where, graph.pwgts, graph.nrinfo

    queue = MaxPriorityQueue()
    mult = 0.5 * ctrl.ubfactors[0]
    badmaxpwgt = int(mult * (pwgts[0] + pwgts[1] + pwgts[2]))

    to = 1 if pwgts[0] < pwgts[1] else 0
    for npass in range(2 * niter):
        other = to
        to = 1 - to

        queue.reset()
        mincutorder = -1
        initcut = mincut = graph.mincut
        nbnd = graph.nbnd

        for pos in random_permutation(nbnd):
            i = graph.bndind[pos]
            queue.insert(i, vwgt[i] - rinfo[i][other])

        limit = min(5 * nbnd, 500) if ctrl.compress else min(3 * nbnd, 300)

        swaps: list[int] = []
        pulled: list[list[int]] = []
        nmind = 0
        mindiff = abs(pwgts[0] - pwgts[1])

        while len(swaps) < nvtxs:
            nswaps = len(swaps)
            higain = queue.get_top()
            if higain is None:
                break

            if nmind + xadj[higain + 1] - xadj[higain] >= 2 * nvtxs - 1:
                break
            if pwgts[to] + vwgt[higain] > badmaxpwgt:
                break

            gain = vwgt[higain] - rinfo[higain][other]
            pwgts[SEPARATOR] -= gain

            newdiff = abs(
                pwgts[to] + vwgt[higain] - (pwgts[other] - rinfo[higain][other])
            )
            if pwgts[SEPARATOR] < mincut or (
                pwgts[SEPARATOR] == mincut and newdiff < mindiff
            ):
                mincut = pwgts[SEPARATOR]
                mincutorder = nswaps
                mindiff = newdiff
            elif nswaps - mincutorder > 3 * limit or (
                nswaps - mincutorder > limit and pwgts[SEPARATOR] > 1.10 * mincut
            ):
                pwgts[SEPARATOR] += gain
                break

            _bnd_delete(graph, higain)
            pwgts[to] += vwgt[higain]
            where[higain] = to
            swaps.append(higain)

            step: list[int] = []
            for k in _adjacent(graph, higain):
                if where[k] == SEPARATOR:
                    rinfo[k][to] += vwgt[higain]
                elif where[k] == other:
                    _bnd_insert(graph, k)
                    step.append(k)
                    nmind += 1
                    where[k] = SEPARATOR
                    pwgts[other] -= vwgt[k]

                    edegrees = rinfo[k]
                    edegrees[0] = edegrees[1] = 0
                    for kk in _adjacent(graph, k):
                        if where[kk] != SEPARATOR:
                            edegrees[where[kk]] += vwgt[kk]
                        else:
                            rinfo[kk][other] -= vwgt[k]
                            queue.update(kk, vwgt[kk] - rinfo[kk][other])

                    queue.insert(k, vwgt[k] - edegrees[other])
            pulled.append(step)

        _roll_back(graph, vwgt, swaps, pulled, mincutorder)
        graph.mincut = mincut

        if npass % 2 == 1 and (mincutorder == -1 or mincut >= initcut):
            break


_REFINERS = {
    RType.SEP2SIDED: node_refine_2sided,
    RType.SEP1SIDED: node_refine_1sided,
}


def refine_2way_node(ctrl: Control, orggraph: Graph, graph: Graph) -> None:
    """Project a separator from ``graph`` up to ``orggraph``, refining at each level.

    ``graph`` is a coarse level reachable from ``orggraph`` through the
    ``coarser`` links; each finer level is found through ``finer``.
    """
    if graph is orggraph:
        compute_node_partition_params(graph)
        return

    while graph is not orggraph:
        finer = graph.finer
        if finer is None:
            raise ValueError("the coarsening hierarchy does not reach the original graph")
        graph = finer

        project_node_partition(graph)
        node_balance(ctrl, graph)

        refine = _REFINERS.get(ctrl.rtype)
        if refine is None:
            raise ValueError(f"Unknown rtype of {ctrl.rtype}")
        refine(ctrl, graph, ctrl.niter)