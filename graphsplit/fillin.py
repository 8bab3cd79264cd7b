"""Symbolic Cholesky factorization for measuring the fill of an ordering."""

from __future__ import annotations

from collections.abc import Sequence

from graphsplit.graph import Graph


class SubscriptOverflow(RuntimeError):
    """Raised when the compressed subscript array is too small."""


def symbolic_factorization(
    neqns: int,
    xadj: Sequence[int],
    adjncy: Sequence[int],
    perm: Sequence[int],
    invp: Sequence[int],
    maxsub: int,
) -> tuple[list[int], int, list[int], list[int]]:
    """Compute the structure of the Cholesky factor of a permuted matrix.

    ``perm[k]`` is the original vertex placed at position ``k`` and ``invp``
    is its inverse; all indices are 0-based. Returns
    ``(xlnz, maxlnz, xnzsub, nzsub)``: column pointers into the off-diagonal
    nonzeros of L, their number, and the compressed subscript structure.
    Raises :class:`SubscriptOverflow` if more than ``maxsub`` subscripts are
    needed.
    """
    if neqns < 1:
        raise ValueError("the system must have at least one equation")
    if len(xadj) < neqns + 1 or len(perm) < neqns or len(invp) < neqns:
        raise ValueError("input arrays are shorter than the number of equations")

    n = neqns
    xadj1 = [0] + [x + 1 for x in xadj[: n + 1]]
    adjncy1 = [0] + [a + 1 for a in adjncy]
    perm1 = [0] + [p + 1 for p in perm[:n]]
    invp1 = [0] + [p + 1 for p in invp[:n]]

    xlnz = [0] * (n + 2)
    xnzsub = [0] * (n + 2)
    nzsub = [0] * (maxsub + 2)
    rchlnk = [0] * (n + 2)
    marker = [0] * (n + 2)
    mrglnk = [0] * (n + 2)

    nzbeg = 1
    nzend = 0
    xlnz[1] = 1

    for k in range(1, n + 1):
        xnzsub[k] = nzend
        node = perm1[k]
        knz = 0
        mrgk = mrglnk[k]
        mrkflg = False
        marker[k] = k
        if mrgk != 0:
            marker[k] = marker[mrgk]

        if xadj1[node] >= xadj1[node + 1]:
            xlnz[k + 1] = xlnz[k]
            continue

        # Link the structure of column k below the diagonal through rchlnk.
        rchlnk[k] = n + 1
        for j in range(xadj1[node], xadj1[node + 1]):
            nabor = invp1[adjncy1[j]]
            if nabor <= k:
                continue
            rchm = k
            while True:
                m = rchm
                rchm = rchlnk[m]
                if rchm > nabor:
                    break
            knz += 1
            rchlnk[m] = nabor
            rchlnk[nabor] = rchm
            if marker[nabor] != marker[k]:
                mrkflg = True

        lmax = 0
        copy = False
        if not mrkflg and mrgk != 0 and mrglnk[mrgk] == 0:
            # Mass symbolic elimination: column k repeats column mrgk's tail.
            xnzsub[k] = xnzsub[mrgk] + 1
            knz = xlnz[mrgk + 1] - (xlnz[mrgk] + 1)
        else:
            i = k
            while (i := mrglnk[i]) != 0:
                inz = xlnz[i + 1] - (xlnz[i] + 1)
                jstrt = xnzsub[i] + 1
                jstop = xnzsub[i] + inz

                if inz > lmax:
                    lmax = inz
                    xnzsub[k] = jstrt

                rchm = k
                for j in range(jstrt, jstop + 1):
                    nabor = nzsub[j]
                    while True:
                        m = rchm
                        rchm = rchlnk[m]
                        if rchm >= nabor:
                            break
                    if rchm != nabor:
                        knz += 1
                        rchlnk[m] = nabor
                        rchlnk[nabor] = rchm
                        rchm = nabor

            if knz != lmax:
                copy = True
                if nzbeg <= nzend:
                    # See whether the tail of the previous column holds column k.
                    i = rchlnk[k]
                    for jstrt in range(nzbeg, nzend + 1):
                        if nzsub[jstrt] < i:
                            continue
                        if nzsub[jstrt] == i:
                            xnzsub[k] = jstrt
                            for j in range(jstrt, nzend + 1):
                                if nzsub[j] != i:
                                    break
                                i = rchlnk[i]
                                if i > n:
                                    copy = False
                                    break
                            else:
                                nzend = jstrt - 1
                        break

        if copy:
            nzbeg = nzend + 1
            nzend += knz
            if nzend >= maxsub:
                raise SubscriptOverflow(
                    f"subscript storage of {maxsub} entries is too small"
                )
            i = k
            for j in range(nzbeg, nzend + 1):
                i = rchlnk[i]
                nzsub[j] = i
                marker[i] = k
            xnzsub[k] = nzbeg
            marker[k] = k

        if knz > 1:
            i = nzsub[xnzsub[k]]
            mrglnk[k] = mrglnk[i]
            mrglnk[i] = k

        xlnz[k + 1] = xlnz[k] + knz

    maxlnz = xlnz[n] - 1
    xnzsub[n + 1] = xnzsub[n]

    return (
        [x - 1 for x in xlnz[1:]],
        maxlnz,
        [x - 1 for x in xnzsub[1:]],
        [s - 1 for s in nzsub[1 : nzend + 1]],
    )


def compute_fill_in(
    graph: Graph, perm: Sequence[int], iperm: Sequence[int]
) -> tuple[int, int]:
    """Nonzeros of L and the operation count for factoring with this ordering.

    Returns ``(maxlnz, opc)``. The graph and vectors are left unchanged.
    """
    nvtxs = graph.nvtxs
    if len(perm) != nvtxs or len(iperm) != nvtxs:
        raise ValueError("permutation vectors must have one entry per vertex")
    if sorted(perm) != list(range(nvtxs)) or any(
        perm[iperm[i]] != i for i in range(nvtxs)
    ):
        raise ValueError("perm and iperm are not inverse permutations")

    maxsub = 8 * (nvtxs + graph.xadj[nvtxs])
    try:
        xlnz, maxlnz, _, _ = symbolic_factorization(
            nvtxs, graph.xadj, graph.adjncy, perm, iperm, maxsub
        )
    except SubscriptOverflow:
        try:
            xlnz, maxlnz, _, _ = symbolic_factorization(
                nvtxs, graph.xadj, graph.adjncy, perm, iperm, 2 * maxsub
            )
        except SubscriptOverflow:
            raise SubscriptOverflow("MAXSUB is too small!") from None

    opc = 0
    for start, end in zip(xlnz, xlnz[1:]):
        count = end - start
        opc += count * count - count
    return maxlnz, opc