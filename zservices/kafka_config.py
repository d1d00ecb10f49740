"""Configuration and per-consumer options of the Kafka consume service."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

DEFAULT_KAFKA_VERSION = "2.0.0"
DEFAULT_READ_TIMEOUT = 10000
DEFAULT_WRITE_TIMEOUT = 10000
DEFAULT_DIAL_TIMEOUT = 2000
DEFAULT_PARTITION_BALANCE_STRATEGY = "range"
DEFAULT_PARTITION_RETRY_INTERVAL = 2000
DEFAULT_MAX_MESSAGE_BYTES = 1048576
DEFAULT_MAX_PROCESSING_TIME = 100
DEFAULT_OFFSET_INITIAL = "oldest"
DEFAULT_ISOLATION_LEVEL = "ReadUncommitted"
DEFAULT_CONSUME_COUNT = 1
DEFAULT_CHANNEL_BUFFER_SIZE = 256
DEFAULT_RE_CONSUME_WAIT_TIME = 1000


@dataclass
class KafkaConsumeConfig:
    """Service-wide Kafka consumer settings; times are in milliseconds."""

    address: str = ""
    kafka_version: str = DEFAULT_KAFKA_VERSION
    read_timeout: int = 0
    write_timeout: int = 0
    dial_timeout: int = 0
    partition_balance_strategy: str = ""
    partition_retry_interval: int = 0
    max_message_bytes: int = 0
    max_processing_time: int = 0
    offset_initial: str = DEFAULT_OFFSET_INITIAL
    isolation_level: str = DEFAULT_ISOLATION_LEVEL
    consume_count: int = 0
    channel_buffer_size: int = 0
    re_consume_wait_time: int = 0
    proxy_address: str = ""
    proxy_user: str = ""
    proxy_password: str = ""

    def check(self) -> None:
        """Fill unset values with defaults; raise ValueError if no address."""
        if not self.address:
            raise ValueError("address is empty")
        if self.read_timeout <= 0:
            self.read_timeout = DEFAULT_READ_TIMEOUT
        if self.write_timeout <= 0:
            self.write_timeout = DEFAULT_WRITE_TIMEOUT
        if self.dial_timeout <= 0:
            self.dial_timeout = DEFAULT_DIAL_TIMEOUT
        if not self.partition_balance_strategy:
            self.partition_balance_strategy = DEFAULT_PARTITION_BALANCE_STRATEGY
        if self.partition_retry_interval <= 0:
            self.partition_retry_interval = DEFAULT_PARTITION_RETRY_INTERVAL
        if self.max_message_bytes <= 0:
            self.max_message_bytes = DEFAULT_MAX_MESSAGE_BYTES
        if self.max_processing_time <= 0:
            self.max_processing_time = DEFAULT_MAX_PROCESSING_TIME
        if not self.offset_initial:
            self.offset_initial = DEFAULT_OFFSET_INITIAL
        if not self.isolation_level:
            self.isolation_level = DEFAULT_ISOLATION_LEVEL
        if self.consume_count <= 0:
            self.consume_count = DEFAULT_CONSUME_COUNT
        if self.channel_buffer_size <= 0:
            self.channel_buffer_size = DEFAULT_CHANNEL_BUFFER_SIZE
        if self.re_consume_wait_time < 1:
            self.re_consume_wait_time = DEFAULT_RE_CONSUME_WAIT_TIME


@dataclass
class KafkaConsumerOptions:
    """Options of a single registered consumer."""

    disable: bool = False
    consume_count: int = 0
    errors_channel_callback: Callable[[Exception], None] | None = None


ConsumerOption = Callable[[KafkaConsumerOptions], None]


def with_consumer_disable(*args: bool) -> ConsumerOption:
    """Disable the consumer; with an argument, disable only if it is true."""

    def apply(opts: KafkaConsumerOptions) -> None:
        opts.disable = len(args) == 0 or bool(args[0])

    return apply


def with_consumer_count(consume_count: int) -> ConsumerOption:
    """Number of consumers; 0 (or negative) means the service default."""

    def apply(opts: KafkaConsumerOptions) -> None:
        opts.consume_count = max(consume_count, 0)

    return apply


def with_errors_channel_callback(fn: Callable[[Exception], None]) -> ConsumerOption:
    """Callback invoked for errors reported by the consumer group."""

    def apply(opts: KafkaConsumerOptions) -> None:
        opts.errors_channel_callback = fn

    return apply


def make_consumer_options(opts: Iterable[ConsumerOption]) -> KafkaConsumerOptions:
    """Build consumer options by applying each option in order."""
    options = KafkaConsumerOptions()
    for opt in opts:
        opt(options)
    return options