import pytest

from graphsplit.control import Control
from graphsplit.graph import Graph
from graphsplit.nodefm import node_refine_1sided, node_refine_2sided, refine_2way_node
from graphsplit.nodepart import allocate_node_partition, compute_node_partition_params
from graphsplit.params import RType
from graphsplit.util import init_random


def make_grid(rows, cols):
    adjncy = []
    xadj = [0]
    for r in range(rows):
        for c in range(cols):
            for dr, dc in ((-1, 0), (0, -1), (0, 1), (1, 0)):
                rr, cc = r + dr, c + dc
                if 0 <= rr < rows and 0 <= cc < cols:
                    adjncy.append(rr * cols + cc)
            xadj.append(len(adjncy))
    return Graph(nvtxs=rows * cols, nedges=len(adjncy), xadj=xadj, adjncy=adjncy)


def side_of_column(c):
    return 0 if c == 0 else (1 if c == 3 else 2)


def fat_separator_grid():
    g = make_grid(4, 4)
    allocate_node_partition(g)
    g.where[:] = [side_of_column(v % 4) for v in range(16)]
    compute_node_partition_params(g)
    return g


def assert_consistent(g):
    where = g.where
    for v in range(g.nvtxs):
        for u in g.neighbors(v):
            assert {where[v], where[u]} != {0, 1}
    expected = [0, 0, 0]
    for v in range(g.nvtxs):
        expected[where[v]] += 1
    assert g.pwgts == expected
    assert g.mincut == g.pwgts[2]
    sep = sorted(v for v in range(g.nvtxs) if where[v] == 2)
    assert sorted(g.bndind[: g.nbnd]) == sep
    for v in sep:
        degs = [0, 0]
        for u in g.neighbors(v):
            if where[u] != 2:
                degs[where[u]] += 1
        assert g.nrinfo[v] == degs


def make_ctrl(rtype=RType.SEP2SIDED):
    return Control(ubfactors=[1.5], rtype=rtype, niter=10)


def test_two_sided_shrinks_fat_separator():
    init_random(-1)
    g = fat_separator_grid()
    assert g.mincut == 8
    node_refine_2sided(make_ctrl(), g, 10)
    assert g.mincut < 8
    assert_consistent(g)


def test_one_sided_shrinks_fat_separator():
    init_random(-1)
    g = fat_separator_grid()
    node_refine_1sided(make_ctrl(RType.SEP1SIDED), g, 10)
    assert g.mincut < 8
    assert_consistent(g)


@pytest.mark.parametrize("refine", [node_refine_2sided, node_refine_1sided])
def test_minimal_separator_is_kept(refine):
    g = Graph(nvtxs=3, nedges=4, xadj=[0, 1, 3, 4], adjncy=[1, 0, 2, 1])
    allocate_node_partition(g)
    g.where[:] = [0, 2, 1]
    compute_node_partition_params(g)
    refine(make_ctrl(), g, 5)
    assert g.where == [0, 2, 1]
    assert g.mincut == 1
    assert_consistent(g)


@pytest.mark.parametrize("refine", [node_refine_2sided, node_refine_1sided])
def test_zero_iterations_change_nothing(refine):
    g = fat_separator_grid()
    before = list(g.where)
    refine(make_ctrl(), g, 0)
    assert g.where == before
    assert g.mincut == 8


def test_refinement_is_deterministic_for_a_seed():
    results = []
    for _ in range(2):
        init_random(7)
        g = fat_separator_grid()
        node_refine_2sided(make_ctrl(), g, 10)
        results.append((list(g.where), g.mincut))
    assert results[0] == results[1]


def test_refine_on_original_graph_only_computes_params():
    g = make_grid(4, 4)
    g.where = [side_of_column(v % 4) for v in range(16)]
    refine_2way_node(make_ctrl(), g, g)
    assert g.mincut == 8
    assert_consistent(g)


def build_hierarchy():
    fine = make_grid(4, 4)
    coarse = make_grid(4, 4)
    allocate_node_partition(coarse)
    coarse.where[:] = [side_of_column(v % 4) for v in range(16)]
    fine.cmap = list(range(16))
    fine.coarser = coarse
    coarse.finer = fine
    return fine, coarse


@pytest.mark.parametrize("rtype", [RType.SEP2SIDED, RType.SEP1SIDED])
def test_refine_projects_and_improves(rtype):
    init_random(-1)
    fine, coarse = build_hierarchy()
    refine_2way_node(make_ctrl(rtype), fine, coarse)
    assert fine.coarser is None
    assert fine.mincut < 8
    assert_consistent(fine)


def test_unknown_rtype_raises():
    fine, coarse = build_hierarchy()
    with pytest.raises(ValueError):
        refine_2way_node(make_ctrl(RType.FM), fine, coarse)


def test_broken_hierarchy_raises():
    fine = make_grid(2, 2)
    other = make_grid(2, 2)
    other.where = [0, 2, 2, 1]
    with pytest.raises(ValueError):
        refine_2way_node(make_ctrl(), fine, other)