import pytest

from graphsplit.graph import Graph
from graphsplit.util import (
    IndexedList,
    argmax2,
    argmax2_nrm,
    argmax_nrm,
    argmax_strided,
    element_balance,
    init_random,
    partition_balance,
    random_permutation,
)


def test_indexed_list_delete_moves_last_into_slot():
    lst = IndexedList([5, 7, 9])
    lst.delete(5)
    assert list(lst) == [9, 7]
    assert lst[0] == 9


def test_indexed_list_delete_last_item():
    lst = IndexedList([1, 2, 3])
    lst.delete(3)
    assert list(lst) == [1, 2]
    assert 3 not in lst


def test_indexed_list_membership_and_length():
    lst = IndexedList()
    for item in (4, 8, 15):
        lst.insert(item)
    assert len(lst) == 3
    assert 8 in lst
    lst.clear()
    assert len(lst) == 0
    assert 8 not in lst


def test_indexed_list_duplicate_insert_raises():
    lst = IndexedList([1])
    with pytest.raises(ValueError):
        lst.insert(1)


def test_indexed_list_delete_missing_raises():
    lst = IndexedList([1])
    with pytest.raises(ValueError):
        lst.delete(2)


def test_indexed_list_positions_consistent_after_many_deletes():
    lst = IndexedList(range(10))
    for item in (3, 0, 9, 5):
        lst.delete(item)
    assert sorted(lst) == [1, 2, 4, 6, 7, 8]
    for pos in range(len(lst)):
        assert lst[pos] in lst


def test_random_permutation_is_permutation():
    init_random(7)
    perm = random_permutation(20)
    assert sorted(perm) == list(range(20))


def test_random_permutation_is_reproducible():
    init_random(11)
    first = random_permutation(30)
    init_random(11)
    assert random_permutation(30) == first


def test_default_seed_matches_minus_one():
    init_random(-1)
    first = random_permutation(25)
    init_random(4321)
    assert random_permutation(25) == first


def test_argmax_nrm_finds_maximum_product():
    x = [1, 4, 2, 3]
    y = [2.0, 0.5, 1.5, 1.0]
    r = argmax_nrm(x, y)
    assert x[r] * y[r] == max(a * b for a, b in zip(x, y))


def test_argmax_nrm_prefers_first_on_ties():
    assert argmax_nrm([2, 2, 2], [1.0, 1.0, 1.0]) == 0


def test_argmax_strided_respects_stride():
    x = [1, 100, 5, 200, 3, 300]
    r = argmax_strided(x, 2)
    assert x[2 * r] == max(x[::2])
    assert argmax_strided(x[1:], 2) == len(x[1::2]) - 1


def test_argmax_strided_rejects_zero_stride():
    with pytest.raises(ValueError):
        argmax_strided([1, 2], 0)


def test_argmax2_returns_second_largest():
    x = [3.0, 9.0, 1.0, 7.0, 2.0]
    assert x[argmax2(x)] == sorted(x)[-2]


def test_argmax2_needs_two_values():
    with pytest.raises(ValueError):
        argmax2([1.0])


def test_argmax2_nrm_returns_second_largest_product():
    x = [1, 2, 3, 4]
    y = [4.0, 1.0, 2.0, 0.5]
    products = [a * b for a, b in zip(x, y)]
    r = argmax2_nrm(x, y)
    assert products[r] == sorted(products)[-2]


def _edgeless(n, vwgt=None, ncon=1):
    return Graph(nvtxs=n, ncon=ncon, xadj=[0] * (n + 1), vwgt=vwgt)


def test_partition_balance_perfect_split():
    g = _edgeless(4)
    assert partition_balance(g, 2, [0, 1, 0, 1]) == [1.0]


def test_partition_balance_everything_in_one_part_equals_nparts():
    g = _edgeless(6)
    assert partition_balance(g, 3, [0] * 6) == [pytest.approx(3.0)]


def test_partition_balance_per_constraint():
    g = _edgeless(2, vwgt=[1, 5, 1, 1], ncon=2)
    balance = partition_balance(g, 2, [0, 1])
    assert len(balance) == 2
    assert balance[0] == 1.0
    assert balance[1] > balance[0]


def test_element_balance_bounds():
    assert element_balance(2, [0, 1, 1, 0]) == 1.0
    assert element_balance(4, [2] * 5) == pytest.approx(4.0)


def test_element_balance_rejects_bad_part():
    with pytest.raises(ValueError):
        element_balance(2, [0, 2])