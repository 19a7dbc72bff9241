from __future__ import annotations

import errno
import logging
import socket
import time
from dataclasses import dataclass
from typing import Optional

from .models import PortStatus, Target

logger = logging.getLogger(__name__)

# Local descriptor exhaustion ("too many open files"), per-process and system-wide
EXHAUSTION_ERRNOS = frozenset({errno.EMFILE, errno.ENFILE})


@dataclass(frozen=True)
class RetryPolicy:
    """
    Backoff for connect attempts that fail on local descriptor exhaustion.

    The first wait is one connect timeout, each later wait is multiplied by
    ``backoff`` and capped at ``max_delay``. ``max_retries=None`` retries
    forever.
    """

    max_retries: Optional[int] = 8
    backoff: float = 2.0
    max_delay: float = 5.0

    def delay(self, attempt: int, base: float) -> float:
        return min(base * (self.backoff ** attempt), self.max_delay)

    def exhausted(self, attempt: int) -> bool:
        return self.max_retries is not None and attempt >= self.max_retries


DEFAULT_RETRY_POLICY = RetryPolicy()
UNBOUNDED_RETRY_POLICY = RetryPolicy(max_retries=None)


def is_exhaustion(err: OSError) -> bool:
    return err.errno in EXHAUSTION_ERRNOS


def probe_port(
    target: Target,
    port: int,
    timeout: float,
    policy: RetryPolicy = DEFAULT_RETRY_POLICY,
) -> PortStatus:
    """
    TCP connect probe. Open if the handshake completes (the socket is closed
    straight away, nothing is sent), closed on any other failure.
    """
    attempt = 0
    while True:
        try:
            sock = socket.create_connection((target.address, port), timeout=timeout)
        except OSError as e:
            if not is_exhaustion(e):
                return PortStatus.CLOSED
            if policy.exhausted(attempt):
                logger.warning(
                    "Port %d: still out of file descriptors after %d retries, reporting closed",
                    port,
                    attempt,
                )
                return PortStatus.CLOSED
            wait = policy.delay(attempt, timeout)
            logger.debug("Port %d: %s, retrying in %.2fs", port, e.strerror or e, wait)
            time.sleep(wait)
            attempt += 1
            continue

        try:
            sock.close()
        except OSError:
            pass
        return PortStatus.OPEN
