"""Configuration of the HTTP API service."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BIND = ":8080"
DEFAULT_POST_MAX_MEMORY = 128 << 20
DEFAULT_THREAD_COUNT = 0
DEFAULT_MAX_REQ_WAIT_QUEUE_SIZE = 10000
DEFAULT_LOG_API_RESULT_MAX_SIZE = 256 << 10
DEFAULT_LOG_BODY_MAX_SIZE = 256 << 10


@dataclass
class ApiConfig:
    """HTTP API service settings."""

    bind: str = DEFAULT_BIND
    ip_with_ingress_forwarded: bool = True
    ip_with_proxy_forwarded: bool = True
    ip_with_proxy_real: bool = True
    post_max_memory: int = 0
    thread_count: int = DEFAULT_THREAD_COUNT
    max_req_wait_queue_size: int = 0
    req_log_level_is_info: bool = True
    rsp_log_level_is_info: bool = True
    bind_log_level_is_info: bool = True
    log_api_result_in_develop: bool = True
    log_api_result_in_prod: bool = True
    send_detailed_error_in_production: bool = False
    always_log_headers: bool = True
    always_log_body: bool = True
    log_api_result_max_size: int = 0
    log_body_max_size: int = 0

    def check(self) -> None:
        """Fill unset values with defaults."""
        if not self.bind:
            self.bind = DEFAULT_BIND
        if self.post_max_memory < 1:
            self.post_max_memory = DEFAULT_POST_MAX_MEMORY
        if self.thread_count == 0:
            self.thread_count = (os.cpu_count() or 1) * 2
        if self.thread_count < 0:
            self.thread_count = -1
        if self.max_req_wait_queue_size < 1:
            self.max_req_wait_queue_size = DEFAULT_MAX_REQ_WAIT_QUEUE_SIZE
        if self.log_api_result_max_size < 1:
            self.log_api_result_max_size = DEFAULT_LOG_API_RESULT_MAX_SIZE
        if self.log_body_max_size < 1:
            self.log_body_max_size = DEFAULT_LOG_BODY_MAX_SIZE