import pytest

from zservices import kafka_config as kc
from zservices.kafka_config import (
    KafkaConsumeConfig,
    make_consumer_options,
    with_consumer_count,
    with_consumer_disable,
    with_errors_channel_callback,
)


def test_empty_address_is_rejected():
    with pytest.raises(ValueError):
        KafkaConsumeConfig().check()


def test_defaults_are_filled():
    conf = KafkaConsumeConfig(address="localhost:9092")
    conf.check()
    assert conf.read_timeout == 10000
    assert conf.write_timeout == kc.DEFAULT_WRITE_TIMEOUT
    assert conf.dial_timeout == 2000
    assert conf.partition_balance_strategy == "range"
    assert conf.partition_retry_interval == kc.DEFAULT_PARTITION_RETRY_INTERVAL
    assert conf.max_message_bytes == 1048576
    assert conf.max_processing_time == kc.DEFAULT_MAX_PROCESSING_TIME
    assert conf.offset_initial == "oldest"
    assert conf.isolation_level == "ReadUncommitted"
    assert conf.consume_count == kc.DEFAULT_CONSUME_COUNT
    assert conf.channel_buffer_size == kc.DEFAULT_CHANNEL_BUFFER_SIZE
    assert conf.re_consume_wait_time == kc.DEFAULT_RE_CONSUME_WAIT_TIME
    assert conf.kafka_version == "2.0.0"


def test_explicit_values_are_kept():
    conf = KafkaConsumeConfig(
        address="a:1,b:2",
        read_timeout=5,
        partition_balance_strategy="sticky",
        offset_initial="newest",
        isolation_level="ReadCommitted",
        consume_count=4,
    )
    conf.check()
    assert conf.read_timeout == 5
    assert conf.partition_balance_strategy == "sticky"
    assert conf.offset_initial == "newest"
    assert conf.isolation_level == "ReadCommitted"
    assert conf.consume_count == 4


def test_empty_strings_restored_to_defaults():
    conf = KafkaConsumeConfig(address="x", offset_initial="", isolation_level="", re_consume_wait_time=-1)
    conf.check()
    assert conf.offset_initial == kc.DEFAULT_OFFSET_INITIAL
    assert conf.isolation_level == kc.DEFAULT_ISOLATION_LEVEL
    assert conf.re_consume_wait_time == kc.DEFAULT_RE_CONSUME_WAIT_TIME


def test_default_options():
    opts = make_consumer_options([])
    assert opts.disable is False
    assert opts.consume_count == 0
    assert opts.errors_channel_callback is None


@pytest.mark.parametrize("args, expected", [((), True), ((True,), True), ((False,), False)])
def test_disable_option(args, expected):
    assert make_consumer_options([with_consumer_disable(*args)]).disable is expected


def test_count_option_clamps_negative():
    assert make_consumer_options([with_consumer_count(-3)]).consume_count == 0
    assert make_consumer_options([with_consumer_count(4)]).consume_count == 4


def test_later_option_wins_and_callback_is_stored():
    def callback(err):
        return None

    opts = make_consumer_options(
        [with_consumer_count(2), with_consumer_count(5), with_errors_channel_callback(callback)]
    )
    assert opts.consume_count == 5
    assert opts.errors_channel_callback is callback