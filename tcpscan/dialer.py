from __future__ import annotations

import ipaddress
import logging
import socket

log = logging.getLogger(__name__)


def is_ipv6_literal(host: str) -> bool:
    """
    True only for strings that parse as an IP address but not as IPv4.
    Hostnames never parse, so they are treated like IPv4 (unbracketed).
    """
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False
    return ip.version != 4


def format_address(host: str, port: int) -> str:
    if is_ipv6_literal(host):
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def probe(host: str, port: int, timeout: float) -> bool:
    """
    Single TCP connect attempt.  The socket is closed straight away, nothing
    is sent or read.  Refused, filtered, unreachable and timed-out ports all
    come back as False.
    """
    address = format_address(host, port)
    try:
        with socket.create_connection((host, port), timeout=timeout):
            pass
    except (OSError, OverflowError, ValueError) as e:
        log.debug("%s closed: %s", address, e)
        return False
    log.debug("%s open", address)
    return True
