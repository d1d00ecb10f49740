# zservices

Building blocks for long-running services:

- configuration objects with defaults for message consumers and an HTTP API
  service;
- a min-heap of tasks ordered by trigger time;
- a retrying executor with a concurrency limit;
- client IP resolution from forwarding headers;
- helpers for MySQL binlog handling: a configuration object, a base event
  handler, and a handler that stores binlog positions in a file.

The package has no dependencies outside the standard library.

## Installation

```
pip install zservices
```

To run the tests:

```
pip install "zservices[test]"
pytest
```

## Consumer configuration

Four dataclasses hold connection and consumption settings. Times are in
milliseconds:

- `zservices.kafka_config.KafkaConsumeConfig`
- `zservices.nsq_config.NsqConsumeConfig`
- `zservices.pulsar_config.PulsarConsumeConfig`
- `zservices.mqtt_config.MqttConsumeConfig`

Call `check()` to fill unset values with defaults. It raises `ValueError`
when a required setting is missing or invalid:

- Kafka needs an `address`.
- NSQ needs an `nsqd_address` or an `nsq_lookupd_address`.
- Pulsar rejects unknown subscription types or initial positions. It also
  rejects `enable_retry_topic` when `dlq_max_deliveries` is not set.

`MqttConsumeConfig.check(instance_id)` uses `instance_id` as the client id
when none is set.

```python
from zservices.kafka_config import (
    KafkaConsumeConfig, make_consumer_options, with_consumer_count,
)

conf = KafkaConsumeConfig(address="localhost:9092")
conf.check()
opts = make_consumer_options([with_consumer_count(3)])
```

### Per-consumer options

Kafka and NSQ options are built from option functions applied in order by
`make_consumer_options`:

- Kafka: `with_consumer_disable`, `with_consumer_count`,
  `with_errors_channel_callback`.
- NSQ: `with_consumer_disable`, `with_consumer_thread_count`,
  `with_consumer_attempts`. Attempts must lie in 0–65535.

## API service settings

`zservices.api_config.ApiConfig` holds the HTTP service settings.
`check()` applies these defaults:

- bind address `:8080`;
- 128 MiB post limit;
- twice the CPU count for threads when `thread_count` is 0, and -1 for any
  negative value;
- 256 KiB log size limits.

`zservices.remote_ip`:

- `remote_addr_headers(conf)` lists the forwarding headers enabled in an
  `ApiConfig`, in priority order: `X-Original-Forwarded-For`,
  `X-Forwarded-For`, `X-Real-IP`.
- `get_remote_ip(headers, remote_addr, remote_headers)` returns the first
  valid IP found in those headers. Header lookup is case-insensitive.
  Otherwise it returns the host part of the socket address.

```python
from zservices.api_config import ApiConfig
from zservices.remote_ip import get_remote_ip, remote_addr_headers

ip = get_remote_ip(
    {"X-Real-IP": "10.0.0.7"}, "127.0.0.1:5000", remote_addr_headers(ApiConfig())
)
```

## Cron building blocks

`zservices.cron_config`:

- `CronConfig` holds the thread count, the task queue size and a list of
  `TaskFileConfig` overrides.
- `check()` turns a thread count of -1 into four times the CPU count.

`zservices.task_heap.TaskHeap` is a binary min-heap of tasks.

- Any object with a `trigger_time` and a writable `heap_index` can be stored.
- It supports `push`, `pop`, `remove`, `sort` (for tasks given at
  construction) and `tasks()`.

`zservices.executor.Executor(retry_count, retry_interval, max_concurrent_execute_count)`:

- `do(on_do, err_callback)` calls `on_do(remaining_retries)` and retries on
  exceptions, sleeping `retry_interval` seconds between tries.
- `err_callback` is called before each retry.
- Once retries run out, the last error is raised.
- A concurrency count of 0 means 1, and -1 means no limit.
- Going past the limit raises `OutOfMaxConcurrentExecuteCount`.
- `wait()` blocks until running calls finish. `is_running()` reports
  limited runs in progress.

## MySQL binlog helpers

`zservices.binlog_config.BinlogConfig` holds the connection settings and
table filters. `check()` requires a host and defaults the charset to
`utf8mb4`.

`zservices.binlog_events.BaseEventHandler` starts at `LATEST_POS` and logs
every event through the `zservices.binlog` logger. On a parse error it skips
the event.

`zservices.pos_file.PosFileHandler(filename, max_size, binlog_name, pos)`
extends it:

- It appends `name,pos` lines to a file. With `force`, the write is synced
  to disk.
- When the file would exceed `max_size` bytes, the handler writes the latest
  line to `<filename>.new` and replaces the file with it.
- `get_start_pos()` returns the last stored position, or the given defaults
  when the file does not exist.
- It raises `PosFileError` if the file is empty or malformed, or if a
  leftover `.new` file exists.
- It can be used as a context manager.

```python
from zservices.pos_file import PosFileHandler

with PosFileHandler("binlog.pos") as handler:
    name, pos = handler.get_start_pos()
    handler.on_pos_synced("mysql-bin.000001", 4, force=True)
```

## What this package does not do

The package holds configuration, data structures and helpers only:

- It does not connect to Kafka, NSQ, Pulsar, MQTT or MySQL.
- It runs no HTTP server and no cron scheduler.
- It does not parse cron expressions.
- It has no worker pool.
- It does not turn binlog row events into records.

Those parts must come from the application that uses these building blocks.