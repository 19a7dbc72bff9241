from __future__ import annotations

import ipaddress
import logging
import socket

from .models import Target

logger = logging.getLogger(__name__)

DEFAULT_IP = "8.8.8.8"
DEFAULT_HOST = "www.owasp.org"


def lookup_host(hostname: str) -> str:
    """First address getaddrinfo returns for a hostname."""
    infos = socket.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)
    if not infos:
        raise socket.gaierror(f"no addresses for {hostname}")
    return infos[0][4][0]


def resolve_target(ip: str = DEFAULT_IP, host: str = DEFAULT_HOST) -> Target:
    """
    Picks the scan target:
      - host differs from the default: resolve it (falls back to `ip` if that fails)
      - otherwise: the IP literal
    """
    ip = ip.strip()
    host = host.strip()

    if host and host != DEFAULT_HOST:
        try:
            return Target(address=lookup_host(host))
        except OSError as e:
            logger.warning("Could not resolve %s: %s; falling back to %s", host, e, ip)

    try:
        ipaddress.ip_address(ip)
    except ValueError as e:
        raise ValueError(f"Invalid IP address '{ip}'") from e
    return Target(address=ip)


def display_name(target: Target) -> str:
    # Loopback prints as "localhost"; anything else via PTR, else the literal address
    if target.is_loopback:
        return "localhost"
    try:
        name, _aliases, _addrs = socket.gethostbyaddr(target.address)
    except OSError as e:
        logger.warning("Reverse lookup for %s failed: %s", target.address, e)
        return target.address
    return name or target.address
