import random

import pytest

from fastqueue.indexed_heap import IndexedHeap


def make_min_heap():
    return IndexedHeap(lambda a, b: a < b, -1, -1)


def make_max_heap():
    return IndexedHeap(lambda a, b: a > b, -1, -1)


def test_extract_all_gives_sorted_values_min_heap():
    heap = make_min_heap()
    rng = random.Random(7)
    values = [rng.randint(0, 1000) for _ in range(50)]
    for index, value in enumerate(values):
        heap.insert(index, value)
    extracted = heap.extract_top_k_values(len(values))
    assert [value for value, _ in extracted] == sorted(values)
    assert len(heap) == 0


def test_extract_all_gives_sorted_values_max_heap():
    heap = make_max_heap()
    rng = random.Random(11)
    values = [rng.randint(0, 1000) for _ in range(40)]
    for index, value in enumerate(values):
        heap.insert(index, value)
    extracted = heap.extract_top_k_values(len(values))
    assert [value for value, _ in extracted] == sorted(values, reverse=True)


def test_extracted_indexes_match_inserted_values():
    heap = make_min_heap()
    pairs = {10: 5, 20: 3, 30: 9, 40: 1}
    for index, value in pairs.items():
        heap.insert(index, value)
    for value, index in heap.extract_top_k_values(10):
        assert pairs[index] == value


def test_extract_top_element_on_empty_heap_returns_nulls():
    heap = make_min_heap()
    assert heap.extract_top_element() == (-1, -1)


def test_extract_top_k_zero_returns_nothing():
    heap = make_min_heap()
    heap.insert(1, 4)
    assert heap.extract_top_k_values(0) == []
    assert heap.get(1) == 4


def test_insert_existing_index_updates_value():
    heap = make_min_heap()
    heap.insert(1, 10)
    heap.insert(2, 20)
    heap.insert(2, 5)
    assert len(heap) == 2
    assert heap.extract_top_element() == (5, 2)


def test_update_moves_entry_up_and_down():
    heap = make_min_heap()
    for index, value in enumerate([5, 6, 7, 8]):
        heap.insert(index, value)
    heap.update(3, 1)
    heap.update(0, 100)
    extracted = heap.extract_top_k_values(4)
    assert [index for _, index in extracted] == [3, 1, 2, 0]


def test_update_unknown_index_is_ignored():
    heap = make_min_heap()
    heap.insert(1, 3)
    heap.update(99, 0)
    assert 99 not in heap
    assert heap.extract_top_element() == (3, 1)


def test_remove_returns_value_and_keeps_order():
    heap = make_min_heap()
    rng = random.Random(3)
    values = {index: rng.randint(0, 500) for index in range(30)}
    for index, value in values.items():
        heap.insert(index, value)
    for index in (4, 17, 0, 29):
        assert heap.remove(index) == values.pop(index)
    extracted = heap.extract_top_k_values(100)
    assert [value for value, _ in extracted] == sorted(values.values())


def test_remove_missing_or_empty_returns_null_value():
    heap = make_min_heap()
    assert heap.remove(1) == -1
    heap.insert(1, 8)
    assert heap.remove(2) == -1
    assert heap.get(1) == 8


def test_get_returns_value_or_null():
    heap = make_min_heap()
    heap.insert("a", 2)
    assert heap.get("a") == 2
    assert heap.get("b") == -1


@pytest.mark.parametrize("value,expected", [(-1, True), (0, False)])
def test_is_null_value(value, expected):
    assert make_min_heap().is_null_value(value) is expected


@pytest.mark.parametrize("index,expected", [(-1, True), (3, False)])
def test_is_null_index(index, expected):
    assert make_min_heap().is_null_index(index) is expected