"""Configuration of one MQTT consumer."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SERVER = "localhost:1883"
DEFAULT_WAIT_CONNECTED_TIME_MS = 5000
DEFAULT_TOPICS = "test"
DEFAULT_QOS = 1
DEFAULT_CLEAN_SESSION = True
DEFAULT_CONSUME_THREAD_COUNT = 0


@dataclass
class MqttConsumeConfig:
    """MQTT consumer settings; times are in milliseconds."""

    server: str = ""
    wait_connected_time_ms: int = 0
    user: str = ""
    password: str = ""
    topics: str = ""
    qos: int = DEFAULT_QOS
    client_id: str = ""
    clean_session: bool = DEFAULT_CLEAN_SESSION
    consume_thread_count: int = DEFAULT_CONSUME_THREAD_COUNT

    def check(self, instance_id: str) -> None:
        """Fill unset values with defaults; the client id defaults to ``instance_id``."""
        if not self.server:
            self.server = DEFAULT_SERVER
        if self.wait_connected_time_ms < 1:
            self.wait_connected_time_ms = DEFAULT_WAIT_CONNECTED_TIME_MS
        if not self.topics:
            self.topics = DEFAULT_TOPICS
        if not self.client_id:
            self.client_id = instance_id
        if self.consume_thread_count < 0:
            self.consume_thread_count = DEFAULT_CONSUME_THREAD_COUNT