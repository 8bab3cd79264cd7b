"""Report the fill produced by a given fill-reducing ordering of a graph."""

from __future__ import annotations

import sys

from graphsplit.fillin import SubscriptOverflow, compute_fill_in
from graphsplit.io import InputError, read_graph, read_po_vector

_STARS = "*" * 70


def main(argv: list[str] | None = None) -> int:
    """Read a graph and an inverse permutation file and print the fill."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 2:
        print("Usage: cmpfillin <GraphFile> <PermFile>")
        return 0

    graph_file, perm_file = argv
    try:
        graph = read_graph(graph_file)
        if graph.nvtxs <= 0:
            print("Empty graph. Nothing to do.")
            return 0
        if graph.ncon != 1:
            print("Ordering can only be applied to graphs with one constraint.")
            return 0

        iperm = read_po_vector(perm_file, graph.nvtxs)
        if sorted(iperm) != list(range(graph.nvtxs)):
            raise InputError(f"{perm_file} does not hold a permutation")
        perm = [0] * graph.nvtxs
        for i, pos in enumerate(iperm):
            perm[pos] = i

        print(_STARS)
        print("Graph Information ---------------------------------------------------")
        print(
            f"  Name: {graph_file}, #Vertices: {graph.nvtxs}, "
            f"#Edges: {graph.nedges // 2}\n"
        )
        print("Fillin... -----------------------------------------------------------")
        maxlnz, opc = compute_fill_in(graph, perm, iperm)
    except (InputError, SubscriptOverflow) as exc:
        print(f"cmpfillin: {exc}", file=sys.stderr)
        return 1

    print(f"  Nonzeros: {float(maxlnz):6.3e} \tOperation Count: {float(opc):6.3e}")
    print(_STARS)
    return 0