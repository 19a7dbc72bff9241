"""
ICMP echo pre-flight check.

A host that drops ICMP but answers TCP shows up as down here; that miss is
accepted so a full sweep is never run against a host that is really gone.
Sending raw ICMP needs root (or CAP_NET_RAW).
"""

from __future__ import annotations

import logging
from typing import List

from scapy.all import ICMP, IP, sr
from scapy.layers.inet6 import ICMPv6EchoRequest, IPv6

from .models import Target

logger = logging.getLogger(__name__)

DEFAULT_PING_COUNT = 4
DEFAULT_PING_TIMEOUT = 4.0


def build_echo_requests(target: Target, count: int) -> List:
    if target.version == 6:
        return [IPv6(dst=target.address) / ICMPv6EchoRequest(seq=i) for i in range(count)]
    return [IP(dst=target.address) / ICMP(seq=i) for i in range(count)]


def is_up(
    target: Target,
    count: int = DEFAULT_PING_COUNT,
    timeout: float = DEFAULT_PING_TIMEOUT,
) -> bool:
    """Up if at least one echo reply comes back; any prober error counts as down."""
    try:
        packets = build_echo_requests(target, count)
        answered, _unanswered = sr(packets, timeout=timeout, verbose=0)
    except Exception as e:
        logger.warning("ICMP liveness check against %s failed: %s", target.address, e)
        return False

    received = len(answered)
    logger.debug("ICMP: %d/%d replies from %s", received, count, target.address)
    return received > 0
