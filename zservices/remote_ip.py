"""Resolution of the real client IP from proxy headers and the socket address."""

from __future__ import annotations

import ipaddress
from collections.abc import Mapping, Sequence

from zservices.api_config import ApiConfig

INGRESS_FORWARDED_HEADER = "X-Original-Forwarded-For"
PROXY_FORWARDED_HEADER = "X-Forwarded-For"
PROXY_REAL_HEADER = "X-Real-IP"


def remote_addr_headers(conf: ApiConfig) -> list[str]:
    """Headers consulted for the client IP, in priority order."""
    headers = []
    if conf.ip_with_ingress_forwarded:
        headers.append(INGRESS_FORWARDED_HEADER)
    if conf.ip_with_proxy_forwarded:
        headers.append(PROXY_FORWARDED_HEADER)
    if conf.ip_with_proxy_real:
        headers.append(PROXY_REAL_HEADER)
    return headers


def _is_ip(text: str) -> bool:
    if "%" in text:
        return False
    try:
        ipaddress.ip_address(text)
    except ValueError:
        return False
    return True


def _header(headers: Mapping[str, str], name: str) -> str:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return ""


def _split_host(addr: str) -> str | None:
    if addr.startswith("["):
        end = addr.find("]")
        if end < 0 or addr[end + 1 : end + 2] != ":":
            return None
        return addr[1:end]
    if addr.count(":") != 1:
        return None
    return addr.partition(":")[0]


def get_remote_ip(
    headers: Mapping[str, str], remote_addr: str, remote_headers: Sequence[str]
) -> str:
    """Return the first valid IP from ``remote_headers``, else the socket host."""
    for name in remote_headers:
        for candidate in _header(headers, name).split(","):
            if _is_ip(candidate):
                return candidate
    addr = remote_addr.strip()
    if addr:
        host = _split_host(addr)
        if host is not None:
            return host
    return addr