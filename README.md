# graphsplit

Building blocks for working with sparse graphs and finite-element meshes
stored in the plain-text format used by common graph partitioners. It
needs no third-party libraries and runs on Python 3.10 or later.

```
pip install .
```

## Measuring the fill-in of an ordering

Given a graph file and a file with one entry per line giving the position
of each vertex in the ordering (an inverse permutation, as found in a
`.iperm` file), run:

```
graphsplit-cmpfillin GRAPHFILE PERMFILE
```

It prints the graph's name, vertex and edge counts, then the number of
nonzeros in the Cholesky factor and the operation count of the
factorization. A malformed graph or permutation file is reported on
standard error with exit status 1.

## Graph file format

The first non-comment line holds the number of vertices, the number of
edges, and optionally a format code and the number of vertex-weight
constraints. Lines starting with `%` are comments. Each following line
describes one vertex: its size (if the format's first digit is 1), its
weights (if the second digit is 1), then its neighbours numbered from 1,
each followed by an edge weight if the third digit is 1.

```
% a path of three vertices
3 2
2
1 3
2
```

## What is in the package

- `graphsplit.graph` – the `Graph` (CSR adjacency, with `degree` and
  `neighbors`) and `Mesh` containers.
- `graphsplit.io` – `read_graph`, `write_graph`, `read_mesh`,
  `read_tpwgts` (target partition weights), `read_po_vector`,
  `write_partition`, `write_mesh_partition` and `write_permutation`.
  Bad or missing input raises `InputError`.
- `graphsplit.fillin` – `symbolic_factorization` and `compute_fill_in`,
  which returns `(nonzeros, operation_count)` for an ordering.
- `graphsplit.nodepart`, `graphsplit.nodebalance`, `graphsplit.nodefm` –
  bookkeeping for a vertex-separator bisection (sides 0 and 1, separator
  2), `node_balance`, the FM refiners `node_refine_2sided` and
  `node_refine_1sided`, and `refine_2way_node`, which carries a separator
  from a coarse graph up through its `finer` links, balancing and refining
  at each level.
- `graphsplit.control` – `Control`, the settings of a refinement run and
  its neighbour-pool workspace.
- `graphsplit.pqueue` – `MaxPriorityQueue`, an addressable max-heap.
- `graphsplit.util` – `IndexedList`, seeded random permutations, argmax
  helpers and the balance measures `partition_balance` and
  `element_balance`.
- `graphsplit.params` – `Params`, the option enums (`PType`, `CType`,
  `RType`, `GType`, ...), `i2rubfactor` and `UsageError`.
- `graphsplit.m2gcmdline` – `parse_cmdline` for the options of a
  mesh-to-graph converter (`-gtype`, `-ncommon`, `-dbglvl`, `-help`).
- `graphsplit.timers` – `Timers`, named accumulating CPU timers with a
  `timing` context manager and a text `report`.

## Using the library

```python
from graphsplit.io import read_graph, read_po_vector
from graphsplit.fillin import compute_fill_in

graph = read_graph("mesh.graph")
iperm = read_po_vector("mesh.graph.iperm", graph.nvtxs)
perm = [0] * len(iperm)
for vertex, position in enumerate(iperm):
    perm[position] = vertex

nonzeros, opcount = compute_fill_in(graph, perm, iperm)
```

## What the package does not do

- It does not partition graphs or meshes and does not compute orderings:
  there is no coarsening, no initial partitioning and no k-way or
  recursive partitioner. The separator tools refine a bisection and a
  coarsening hierarchy that the caller supplies.
- It does not convert meshes into dual or nodal graphs; the mesh-to-graph
  option parser only collects the settings.
- The only command it installs is `graphsplit-cmpfillin`.