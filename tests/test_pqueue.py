import pytest

from mazepath.core.pqueue import Empty, PriorityQueue


def test_pops_in_ascending_order():
    pq = PriorityQueue(lambda a, b: a < b)
    for v in [5, 3, 9, 1, 7, 3, 0]:
        pq.push(v)
    out = []
    while not pq.is_empty():
        out.append(pq.pop())
    assert out == [0, 1, 3, 3, 5, 7, 9]


def test_pop_on_empty_raises_empty():
    pq = PriorityQueue(lambda a, b: a < b)
    assert pq.is_empty()
    with pytest.raises(Empty):
        pq.pop()


def test_duplicates_are_kept():
    pq = PriorityQueue(lambda a, b: a < b)
    pq.push("x")
    pq.push("x")
    assert len(pq) == 2
    assert pq.pop() == "x"
    assert pq.pop() == "x"
    assert len(pq) == 0


def test_keys_are_read_live_not_cached():
    keys = {"a": 1, "b": 2, "c": 3}
    pq = PriorityQueue(lambda x, y: keys[x] < keys[y])
    for item in "abc":
        pq.push(item)
    keys["c"] = 0
    pq.reheapify()
    assert pq.pop() == "c"
    keys["a"] = 10
    pq.reheapify()
    assert pq.pop() == "b"
    assert pq.pop() == "a"


def test_comparator_called_on_every_operation():
    calls = []

    def less(a, b):
        calls.append((a, b))
        return a < b

    pq = PriorityQueue(less)
    pq.push(2)
    pq.push(1)
    before = len(calls)
    pq.push(0)
    assert len(calls) > before
