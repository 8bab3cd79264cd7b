import random

import pytest

from graphsplit.pqueue import MaxPriorityQueue


def _drain(queue):
    out = []
    while (node := queue.get_top()) is not None:
        out.append(node)
    return out


def test_empty_queue():
    queue = MaxPriorityQueue()
    assert len(queue) == 0
    assert queue.get_top() is None
    assert queue.see_top_val() is None
    assert queue.see_top_key() is None


def test_pops_in_descending_key_order():
    rng = random.Random(7)
    keys = {node: rng.uniform(-10, 10) for node in range(50)}
    queue = MaxPriorityQueue()
    for node, key in keys.items():
        queue.insert(node, key)
    assert len(queue) == 50
    order = _drain(queue)
    assert sorted(order) == list(range(50))
    popped = [keys[n] for n in order]
    assert popped == sorted(popped, reverse=True)


def test_see_top_does_not_remove():
    queue = MaxPriorityQueue()
    queue.insert(3, 1.0)
    queue.insert(4, 5.0)
    assert queue.see_top_val() == 4
    assert queue.see_top_key() == 5.0
    assert len(queue) == 2


def test_equal_keys_keep_first_on_top():
    queue = MaxPriorityQueue()
    queue.insert(1, 5)
    queue.insert(2, 5)
    assert queue.get_top() == 1


def test_delete_removes_node():
    queue = MaxPriorityQueue()
    for node, key in enumerate([4, 9, 1, 7, 3]):
        queue.insert(node, key)
    queue.delete(3)
    assert 3 not in queue
    assert 1 in queue
    assert _drain(queue) == [1, 0, 4, 2]


def test_update_moves_node_both_ways():
    queue = MaxPriorityQueue()
    for node, key in enumerate([4, 9, 1, 7, 3]):
        queue.insert(node, key)
    queue.update(2, 20)
    assert queue.see_top_val() == 2
    queue.update(2, -1)
    assert _drain(queue) == [1, 3, 0, 4, 2]


def test_random_operations_keep_heap_order():
    rng = random.Random(11)
    queue = MaxPriorityQueue()
    keys = {}
    for step in range(400):
        op = rng.random()
        if op < 0.5 or not keys:
            node = step
            keys[node] = rng.randint(-20, 20)
            queue.insert(node, keys[node])
        elif op < 0.75:
            node = rng.choice(list(keys))
            keys[node] = rng.randint(-20, 20)
            queue.update(node, keys[node])
        else:
            node = rng.choice(list(keys))
            del keys[node]
            queue.delete(node)
        assert len(queue) == len(keys)
        assert queue.see_top_key() == max(keys.values(), default=None)
    order = _drain(queue)
    popped = [keys[n] for n in order]
    assert popped == sorted(popped, reverse=True)
    assert set(order) == set(keys)


def test_duplicate_insert_raises():
    queue = MaxPriorityQueue()
    queue.insert(1, 1.0)
    with pytest.raises(ValueError):
        queue.insert(1, 2.0)


def test_missing_node_raises():
    queue = MaxPriorityQueue()
    with pytest.raises(KeyError):
        queue.delete(5)
    with pytest.raises(KeyError):
        queue.update(5, 1.0)


def test_reset_empties_queue():
    queue = MaxPriorityQueue()
    queue.insert(1, 1.0)
    queue.insert(2, 2.0)
    queue.reset()
    assert len(queue) == 0
    assert 1 not in queue
    queue.insert(1, 3.0)
    assert queue.get_top() == 1