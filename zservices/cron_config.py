"""Configuration of the cron service and of tasks defined in configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_THREAD_COUNT = -1
DEFAULT_MAX_TASK_QUEUE_SIZE = 10000


@dataclass
class TaskFileConfig:
    """A task override read from configuration; times are in seconds."""

    name: str = ""
    expression: str = ""
    is_once_trigger: bool = False
    disable: bool = False
    retry_count: int = 0
    retry_sleep_ms: int = 0
    max_concurrent_execute_count: int = 0
    timeout_ms: int = 0


@dataclass
class CronConfig:
    """Cron service settings."""

    thread_count: int = DEFAULT_THREAD_COUNT
    max_task_queue_size: int = DEFAULT_MAX_TASK_QUEUE_SIZE
    tasks: list[TaskFileConfig] = field(default_factory=list)

    def check(self) -> None:
        """Resolve -1 threads to 4x CPUs and fix an invalid queue size."""
        if self.thread_count == -1:
            self.thread_count = (os.cpu_count() or 1) * 4
        if self.max_task_queue_size <= 0:
            self.max_task_queue_size = DEFAULT_MAX_TASK_QUEUE_SIZE