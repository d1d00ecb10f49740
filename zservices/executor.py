"""Runs a task's work with retries and a limit on concurrent runs."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T")

ErrCallback = Callable[[Exception], None]


class OutOfMaxConcurrentExecuteCount(RuntimeError):
    """Raised when a run would exceed the executor's concurrency limit."""

    def __init__(self) -> None:
        super().__init__("exceeded maximum concurrent execution count")


class Executor:
    """Retrying executor; ``retry_interval`` is in seconds, -1 concurrency means no limit."""

    def __init__(
        self,
        retry_count: int,
        retry_interval: float,
        max_concurrent_execute_count: int,
    ) -> None:
        if max_concurrent_execute_count == 0:
            max_concurrent_execute_count = 1
        self._max_concurrent = max_concurrent_execute_count
        self._max_retry = retry_count
        self._retry_interval = retry_interval
        self._concurrent = 0
        self._lock = threading.Lock()
        self._pending = 0
        self._idle = threading.Condition()

    @property
    def max_concurrent_execute_count(self) -> int:
        return self._max_concurrent

    @property
    def retry_count(self) -> int:
        return self._max_retry

    @property
    def retry_interval(self) -> float:
        return self._retry_interval

    def do(self, on_do: Callable[[int], T], err_callback: ErrCallback | None = None) -> T:
        """Run ``on_do(remaining_retries)``, retrying on failure.

        ``err_callback`` is called with the error before each retry. The last
        error is raised once retries run out.
        """
        limited = self._max_concurrent > 0
        if limited:
            with self._lock:
                if self._concurrent >= self._max_concurrent:
                    raise OutOfMaxConcurrentExecuteCount()
                self._concurrent += 1
        with self._idle:
            self._pending += 1
        try:
            return self._do_retry(on_do, err_callback)
        finally:
            if limited:
                with self._lock:
                    self._concurrent -= 1
            with self._idle:
                self._pending -= 1
                if self._pending == 0:
                    self._idle.notify_all()

    def wait(self) -> None:
        """Block until every run in progress has finished."""
        with self._idle:
            self._idle.wait_for(lambda: self._pending == 0)

    def is_running(self) -> bool:
        """Whether a limited run is in progress."""
        with self._lock:
            return self._concurrent > 0

    def _do_retry(self, on_do: Callable[[int], T], err_callback: ErrCallback | None) -> T:
        retry_count = self._max_retry
        while True:
            try:
                return on_do(retry_count)
            except Exception as exc:
                if retry_count == 0:
                    raise
                retry_count -= 1
                if err_callback is not None:
                    err_callback(exc)
                if self._retry_interval > 0:
                    time.sleep(self._retry_interval)