from dataclasses import dataclass
from datetime import datetime

import pytest

from zservices.task_heap import TaskHeap


@dataclass(eq=False)
class FakeTask:
    name: str
    trigger_time: datetime
    heap_index: int = 0


def make_tasks():
    return [
        FakeTask("4", datetime(2020, 1, 1, 0, 4, 0)),
        FakeTask("9", datetime(2020, 1, 1, 0, 9, 0)),
        FakeTask("7", datetime(2020, 1, 1, 0, 7, 0)),
        FakeTask("2", datetime(2020, 1, 1, 0, 2, 0)),
        FakeTask("6", datetime(2020, 1, 1, 0, 6, 0)),
        FakeTask("6", datetime(2020, 1, 1, 0, 6, 0)),
        FakeTask("5", datetime(2020, 1, 1, 0, 5, 0)),
        FakeTask("3", datetime(2020, 1, 1, 0, 3, 0)),
    ]


def drain(heap):
    return [heap.pop().name for _ in range(len(heap))]


def test_pop_after_push():
    heap = TaskHeap()
    for task in make_tasks():
        heap.push(task)
    assert drain(heap) == ["2", "3", "4", "5", "6", "6", "7", "9"]


def test_sort():
    heap = TaskHeap(*make_tasks())
    heap.sort()
    assert drain(heap) == ["2", "3", "4", "5", "6", "6", "7", "9"]


def test_push_after_sort():
    heap = TaskHeap(*make_tasks())
    heap.sort()
    heap.push(FakeTask("8", datetime(2020, 1, 1, 0, 8, 0)))
    assert drain(heap) == ["2", "3", "4", "5", "6", "6", "7", "8", "9"]


def test_remove():
    tasks = make_tasks()
    heap = TaskHeap(*tasks)
    heap.sort()
    heap.remove(tasks[4])
    assert drain(heap) == ["2", "3", "4", "5", "6", "7", "9"]


def test_remove_task_not_in_heap_is_ignored():
    heap = TaskHeap(*make_tasks())
    heap.sort()
    heap.remove(FakeTask("x", datetime(2020, 1, 1), heap_index=0))
    assert len(heap) == 8
    assert heap.tasks()[0].name == "2"


def test_heap_indexes_match_positions():
    heap = TaskHeap()
    for task in make_tasks():
        heap.push(task)
    heap.pop()
    for index, task in enumerate(heap.tasks()):
        assert task.heap_index == index


def test_pop_empty_raises():
    with pytest.raises(IndexError):
        TaskHeap().pop()