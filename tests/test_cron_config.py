import os

from zservices.cron_config import CronConfig, TaskFileConfig


def test_default_thread_count():
    conf = CronConfig()
    conf.check()
    assert conf.thread_count == (os.cpu_count() or 1) * 4
    assert conf.max_task_queue_size == 10000


def test_zero_threads_kept_and_queue_fixed():
    conf = CronConfig(thread_count=0, max_task_queue_size=-1)
    conf.check()
    assert conf.thread_count == 0
    assert conf.max_task_queue_size == 10000


def test_tasks_kept():
    task = TaskFileConfig(name="t", expression="@every 1s")
    conf = CronConfig(tasks=[task])
    conf.check()
    assert conf.tasks[0].name == "t"
    assert conf.tasks[0].disable is False