"""Configuration and per-consumer options of the NSQ consume service."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass

DEFAULT_HEARTBEAT_INTERVAL = 30000
DEFAULT_READ_TIMEOUT = 30000
DEFAULT_WRITE_TIMEOUT = 5000
DEFAULT_DIAL_TIMEOUT = 2000
DEFAULT_MAX_IN_FLIGHT = 1024
DEFAULT_REQUEUE_DELAY = 60000
DEFAULT_MAX_REQUEUE_DELAY = 600000
DEFAULT_CONSUME_ATTEMPTS = 3

MAX_CONSUME_ATTEMPTS = 65535


@dataclass
class NsqConsumeConfig:
    """Service-wide NSQ consumer settings; times are in milliseconds."""

    nsqd_address: str = ""
    nsq_lookupd_address: str = ""
    auth_secret: str = ""
    heartbeat_interval: int = 0
    read_timeout: int = 0
    write_timeout: int = 0
    dial_timeout: int = 0
    max_in_flight: int = 0
    thread_count: int = 0
    requeue_delay: int = 0
    max_requeue_delay: int = 0
    consume_attempts: int = 0

    def check(self) -> None:
        """Fill unset values with defaults; raise ValueError if no address."""
        if self.read_timeout <= 0:
            self.read_timeout = DEFAULT_READ_TIMEOUT
        if self.write_timeout <= 0:
            self.write_timeout = DEFAULT_WRITE_TIMEOUT
        if self.dial_timeout <= 0:
            self.dial_timeout = DEFAULT_DIAL_TIMEOUT
        if self.heartbeat_interval <= 0:
            self.heartbeat_interval = DEFAULT_HEARTBEAT_INTERVAL
        if self.heartbeat_interval > self.read_timeout:
            self.heartbeat_interval = self.read_timeout
        if self.max_in_flight <= 0:
            self.max_in_flight = DEFAULT_MAX_IN_FLIGHT
        if self.thread_count <= 0:
            self.thread_count = os.cpu_count() or 1
        if self.requeue_delay <= 0:
            self.requeue_delay = DEFAULT_REQUEUE_DELAY
        if self.max_requeue_delay <= 0:
            self.max_requeue_delay = DEFAULT_MAX_REQUEUE_DELAY
        if not 0 <= self.consume_attempts <= MAX_CONSUME_ATTEMPTS:
            raise ValueError(f"consume_attempts out of range: {self.consume_attempts}")
        if self.consume_attempts == 0:
            self.consume_attempts = DEFAULT_CONSUME_ATTEMPTS
        if not self.nsqd_address and not self.nsq_lookupd_address:
            raise ValueError("address is empty")


@dataclass
class NsqConsumerOptions:
    """Options of a single registered consumer."""

    disable: bool = False
    thread_count: int = 0
    consume_attempts: int = 0


ConsumerOption = Callable[[NsqConsumerOptions], None]


def with_consumer_disable(*args: bool) -> ConsumerOption:
    """Disable the consumer; with an argument, disable only if it is true."""

    def apply(opts: NsqConsumerOptions) -> None:
        opts.disable = len(args) == 0 or bool(args[0])

    return apply


def with_consumer_thread_count(thread_count: int) -> ConsumerOption:
    """Threads handling messages; 0 (or negative) means the service default."""

    def apply(opts: NsqConsumerOptions) -> None:
        opts.thread_count = max(thread_count, 0)

    return apply


def with_consumer_attempts(attempts: int) -> ConsumerOption:
    """Consume attempts; 0 means the service default."""
    if not 0 <= attempts <= MAX_CONSUME_ATTEMPTS:
        raise ValueError(f"attempts out of range: {attempts}")

    def apply(opts: NsqConsumerOptions) -> None:
        opts.consume_attempts = attempts

    return apply


def make_consumer_options(opts: Iterable[ConsumerOption]) -> NsqConsumerOptions:
    """Build consumer options by applying each option in order."""
    options = NsqConsumerOptions()
    for opt in opts:
        opt(options)
    return options