"""A binary min-heap of tasks ordered by their next trigger time."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol


class HeapTask(Protocol):
    """What the heap needs from a task: its trigger time and a slot for its index."""

    heap_index: int

    @property
    def trigger_time(self) -> datetime: ...


class TaskHeap:
    """Min-heap keyed on ``trigger_time`` that tracks each task's position."""

    def __init__(self, *tasks: HeapTask) -> None:
        self._tasks: list[HeapTask] = list(tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def sort(self) -> None:
        """Restore heap order over the tasks given at construction."""
        for index, task in enumerate(self._tasks):
            task.heap_index = index
        n = len(self._tasks)
        for i in reversed(range(n // 2)):
            self._down(i, n)

    def pop(self) -> HeapTask:
        """Remove and return the task with the earliest trigger time."""
        if not self._tasks:
            raise IndexError("pop from empty task heap")
        n = len(self._tasks) - 1
        self._swap(0, n)
        self._down(0, n)
        return self._tasks.pop()

    def push(self, task: HeapTask) -> None:
        """Add a task to the heap."""
        task.heap_index = len(self._tasks)
        self._tasks.append(task)
        self._up(len(self._tasks) - 1)

    def remove(self, task: HeapTask) -> None:
        """Remove ``task`` if it is in the heap; otherwise do nothing."""
        index = task.heap_index
        if not 0 <= index < len(self._tasks) or self._tasks[index] is not task:
            return
        n = len(self._tasks) - 1
        if n != index:
            self._swap(index, n)
            if not self._down(index, n):
                self._up(index)
        self._tasks.pop()

    def tasks(self) -> list[HeapTask]:
        """The tasks in heap order; the first one triggers earliest."""
        return list(self._tasks)

    def _less(self, i: int, j: int) -> bool:
        return self._tasks[i].trigger_time < self._tasks[j].trigger_time

    def _swap(self, i: int, j: int) -> None:
        tasks = self._tasks
        tasks[i], tasks[j] = tasks[j], tasks[i]
        tasks[i].heap_index = i
        tasks[j].heap_index = j

    def _up(self, j: int) -> None:
        while j > 0:
            parent = (j - 1) // 2
            if not self._less(j, parent):
                break
            self._swap(parent, j)
            j = parent

    def _down(self, start: int, n: int) -> bool:
        i = start
        while True:
            left = 2 * i + 1
            if left >= n:
                break
            child = left
            right = left + 1
            if right < n and self._less(right, left):
                child = right
            if not self._less(child, i):
                break
            self._swap(i, child)
            i = child
        return i > start