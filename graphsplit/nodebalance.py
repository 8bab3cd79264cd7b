"""Rebalancing the two sides of a vertex-separator bisection."""

from __future__ import annotations

from graphsplit.control import Control
from graphsplit.graph import Graph
from graphsplit.nodepart import (
    SEPARATOR,
    _bnd_delete,
    _bnd_insert,
    _vertex_weights,
)
from graphsplit.pqueue import MaxPriorityQueue
from graphsplit.util import random_permutation


def node_balance(ctrl: Control, graph: Graph) -> None:
    """Move separator vertices toward the lighter side until it is balanced.

    The graph must carry up-to-date node-partition parameters; they are kept
    current as vertices move.
    """
    nvtxs = graph.nvtxs
    xadj, adjncy = graph.xadj, graph.adjncy
    vwgt = _vertex_weights(graph)
    where = graph.where
    pwgts = graph.pwgts
    rinfo = graph.nrinfo
    bndind = graph.bndind

    mult = 0.5 * ctrl.ubfactors[0]

    badmaxpwgt = int(mult * (pwgts[0] + pwgts[1]))
    if max(pwgts[0], pwgts[1]) < badmaxpwgt:
        return
    if abs(pwgts[0] - pwgts[1]) < 3 * graph.tvwgt[0] // nvtxs:
        return

    to = 0 if pwgts[0] < pwgts[1] else 1
    other = 1 - to

    queue = MaxPriorityQueue()
    moved = [False] * nvtxs

    for pos in random_permutation(graph.nbnd):
        i = bndind[pos]
        queue.insert(i, vwgt[i] - rinfo[i][other])

    for _ in range(nvtxs):
        higain = queue.get_top()
        if higain is None:
            break

        moved[higain] = True

        gain = vwgt[higain] - rinfo[higain][other]
        badmaxpwgt = int(mult * (pwgts[0] + pwgts[1]))

        if pwgts[to] > pwgts[other]:
            break
        if gain < 0 and pwgts[other] < badmaxpwgt:
            break
        if pwgts[to] + vwgt[higain] > badmaxpwgt:
            continue

        pwgts[SEPARATOR] -= gain
        _bnd_delete(graph, higain)
        pwgts[to] += vwgt[higain]
        where[higain] = to

        for j in range(xadj[higain], xadj[higain + 1]):
            k = adjncy[j]
            if where[k] == SEPARATOR:
                rinfo[k][to] += vwgt[higain]
            elif where[k] == other:
                _bnd_insert(graph, k)
                where[k] = SEPARATOR
                pwgts[other] -= vwgt[k]

                edegrees = rinfo[k]
                edegrees[0] = edegrees[1] = 0
                for jj in range(xadj[k], xadj[k + 1]):
                    kk = adjncy[jj]
                    if where[kk] != SEPARATOR:
                        edegrees[where[kk]] += vwgt[kk]
                    else:
                        oldgain = vwgt[kk] - rinfo[kk][other]
                        rinfo[kk][other] -= vwgt[k]
                        if not moved[kk]:
                            queue.update(kk, oldgain + vwgt[k])

                queue.insert(k, vwgt[k] - edegrees[other])

    graph.mincut = pwgts[SEPARATOR]