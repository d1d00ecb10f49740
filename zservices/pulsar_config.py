"""Configuration of one Pulsar consumer group."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_URL = "pulsar://localhost:6650"
DEFAULT_LISTENER_NAME = "external"
DEFAULT_CONNECTION_TIMEOUT = 5000
DEFAULT_OPERATION_TIMEOUT = 30000
DEFAULT_TOPICS = "persistent://public/default/test"
DEFAULT_AUTO_DISCOVERY_PERIOD = 60000
DEFAULT_SUBSCRIPTION_NAME = "test"
DEFAULT_SUBSCRIPTION_TYPE = "shared"
DEFAULT_SUBSCRIPTION_INITIAL_POSITION = "latest"
DEFAULT_DLQ_MAX_DELIVERIES = 0
DLQ_DEAD_LETTER_TOPIC_SUFFIX = "-DEAD"
DLQ_RETRY_LETTER_TOPIC_SUFFIX = "-RETRY"
DEFAULT_RECONSUME_TIME = 5000
DEFAULT_RECEIVER_QUEUE_SIZE = 1000
DEFAULT_MAX_RECONNECT_TO_BROKER = -1
DEFAULT_CONSUME_COUNT = 1
DEFAULT_CONSUME_THREAD_COUNT = 1
DEFAULT_RECEIVE_MSG_RETRY_TIME = 5000

SUBSCRIPTION_TYPES = frozenset({"exclusive", "failover", "shared", "keyshared"})
SUBSCRIPTION_POSITIONS = frozenset({"latest", "earliest"})


@dataclass
class PulsarConsumeConfig:
    """Pulsar consumer settings; times are in milliseconds."""

    url: str = ""
    listener_name: str = DEFAULT_LISTENER_NAME
    connection_timeout: int = 0
    operation_timeout: int = 0

    auth_basic_user: str = ""
    auth_basic_password: str = ""

    topics: str = ""
    topics_pattern: str = ""
    auto_discovery_period: int = 0
    subscription_name: str = ""
    subscription_type: str = ""
    subscription_initial_position: str = ""
    dlq_max_deliveries: int = 0
    dlq_dead_letter_topic: str = ""
    dlq_retry_letter_topic: str = ""
    enable_retry_topic: bool = False
    reconsume_time: int = 0
    receiver_queue_size: int = 0
    read_compacted: bool = False
    max_reconnect_to_broker: int = DEFAULT_MAX_RECONNECT_TO_BROKER
    enable_default_nack_backoff_policy: bool = False

    consume_count: int = 0
    consume_thread_count: int = 0
    receive_msg_retry_time: int = 0

    def check(self) -> None:
        """Fill unset values with defaults; raise ValueError on invalid settings."""
        if not self.url:
            self.url = DEFAULT_URL
        if self.connection_timeout < 1:
            self.connection_timeout = DEFAULT_CONNECTION_TIMEOUT
        if self.operation_timeout < 1:
            self.operation_timeout = DEFAULT_OPERATION_TIMEOUT

        if not self.topics and not self.topics_pattern:
            self.topics = DEFAULT_TOPICS
        if self.auto_discovery_period < 1:
            self.auto_discovery_period = DEFAULT_AUTO_DISCOVERY_PERIOD
        if not self.subscription_name:
            self.subscription_name = DEFAULT_SUBSCRIPTION_NAME

        sub_type = self.subscription_type.lower()
        if not sub_type:
            self.subscription_type = DEFAULT_SUBSCRIPTION_TYPE
        elif sub_type not in SUBSCRIPTION_TYPES:
            raise ValueError(f"unsupported subscription type: {self.subscription_type}")

        position = self.subscription_initial_position.lower()
        if not position:
            self.subscription_initial_position = DEFAULT_SUBSCRIPTION_INITIAL_POSITION
        elif position not in SUBSCRIPTION_POSITIONS:
            raise ValueError(
                f"unsupported subscription initial position: {self.subscription_initial_position}"
            )

        if self.dlq_max_deliveries < 1:
            self.dlq_max_deliveries = DEFAULT_DLQ_MAX_DELIVERIES
        if self.dlq_max_deliveries > 0 and not self.dlq_dead_letter_topic:
            self.dlq_dead_letter_topic = self.subscription_name + DLQ_DEAD_LETTER_TOPIC_SUFFIX
        if self.dlq_max_deliveries > 0 and not self.dlq_retry_letter_topic:
            self.dlq_retry_letter_topic = self.subscription_name + DLQ_RETRY_LETTER_TOPIC_SUFFIX
        if self.enable_retry_topic and self.dlq_max_deliveries < 1:
            raise ValueError("enable_retry_topic requires dlq_max_deliveries")
        if self.reconsume_time < 1:
            self.reconsume_time = DEFAULT_RECONSUME_TIME
        if self.receiver_queue_size < 1:
            self.receiver_queue_size = DEFAULT_RECEIVER_QUEUE_SIZE
        if self.max_reconnect_to_broker < 0:
            self.max_reconnect_to_broker = DEFAULT_MAX_RECONNECT_TO_BROKER

        if self.consume_count < 1:
            self.consume_count = DEFAULT_CONSUME_COUNT
        if self.consume_thread_count < 1:
            self.consume_thread_count = DEFAULT_CONSUME_THREAD_COUNT
        if self.receive_msg_retry_time < 1:
            self.receive_msg_retry_time = DEFAULT_RECEIVE_MSG_RETRY_TIME